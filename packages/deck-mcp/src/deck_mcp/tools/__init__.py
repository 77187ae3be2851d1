"""Dispatch layer behind the five Deck MCP tools."""

from deck_mcp.tools.actions import perform_action
from deck_mcp.tools.create import create_entity
from deck_mcp.tools.delete import delete_entity
from deck_mcp.tools.read import read_entity
from deck_mcp.tools.update import update_entity

__all__ = [
    "create_entity",
    "delete_entity",
    "perform_action",
    "read_entity",
    "update_entity",
]
