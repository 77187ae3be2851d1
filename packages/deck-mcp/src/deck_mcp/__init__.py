"""MCP server exposing Nextcloud Deck boards, stacks and cards as generic CRUD tools."""

__version__ = "1.0.0"
