"""Shared test fixtures for the Deck MCP test suite."""

from __future__ import annotations

import copy
from typing import Any
from unittest.mock import AsyncMock

import pytest

from deck_mcp.client import DeckClient

NEXTCLOUD_URL = "https://cloud.example.com"
DECK_API = f"{NEXTCLOUD_URL}/index.php/apps/deck/api/v1.0"
DECK_COMMENTS = f"{NEXTCLOUD_URL}/index.php/apps/deck/cards"


# ---------------------------------------------------------------------------
# Environment setup: no real credentials or endpoints
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _mock_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set safe default environment variables for all tests."""
    monkeypatch.setenv("NEXTCLOUD_URL", NEXTCLOUD_URL)
    monkeypatch.setenv("NEXTCLOUD_USERNAME", "alice")
    monkeypatch.setenv("NEXTCLOUD_PASSWORD", "test-password-do-not-use")
    monkeypatch.delenv("DECK_HTTP_TIMEOUT", raising=False)
    monkeypatch.delenv("PORT", raising=False)


# ---------------------------------------------------------------------------
# Deck API response factories
# ---------------------------------------------------------------------------

_CARDS: dict[int, dict[str, Any]] = {
    100: {
        "id": 100,
        "title": "Fix login bug",
        "description": "Users cannot log in with SSO",
        "stackId": 10,
        "type": "plain",
        "order": 0,
        "archived": False,
        "done": False,
        "labels": [],
        "assignedUsers": [],
    },
    101: {
        "id": 101,
        "title": "Write API docs",
        "description": "Reference for the v2 endpoints",
        "stackId": 10,
        "type": "plain",
        "order": 1,
        "archived": True,
        "done": False,
        "labels": [],
        "assignedUsers": [],
    },
    200: {
        "id": 200,
        "title": "Rotate certificates",
        "description": "TLS certs expire in May",
        "stackId": 20,
        "type": "plain",
        "order": 0,
        "archived": False,
        "done": True,
        "labels": [],
        "assignedUsers": [],
    },
    300: {
        "id": 300,
        "title": "Upgrade database",
        "description": "Postgres 16 fixes a replication BUG",
        "stackId": 30,
        "type": "plain",
        "order": 0,
        "archived": False,
        "done": False,
        "labels": [],
        "assignedUsers": [],
    },
    301: {
        "id": 301,
        "title": "Plan sprint",
        "description": None,
        "stackId": 30,
        "type": "plain",
        "order": 1,
        "archived": False,
        "done": False,
        "labels": [],
        "assignedUsers": [],
    },
}


@pytest.fixture()
def deck_boards() -> list[dict[str, Any]]:
    """Two boards as returned by ``GET /boards``."""
    return [
        {
            "id": 1,
            "title": "Product",
            "color": "0087C5",
            "archived": False,
            "labels": [
                {"id": 5, "title": "Bug", "color": "ff0000", "boardId": 1},
                {"id": 6, "title": "Feature", "color": "00ff00", "boardId": 1},
            ],
        },
        {
            "id": 2,
            "title": "Operations",
            "color": "317CCC",
            "archived": True,
            "labels": [],
        },
    ]


@pytest.fixture()
def deck_stacks() -> dict[int, list[dict[str, Any]]]:
    """Stacks per board, each embedding its cards like ``GET /boards/{id}/stacks``."""
    return {
        1: [
            {
                "id": 10,
                "title": "To do",
                "boardId": 1,
                "order": 0,
                "cards": [copy.deepcopy(_CARDS[100]), copy.deepcopy(_CARDS[101])],
            },
        ],
        2: [
            {
                "id": 20,
                "title": "Backlog",
                "boardId": 2,
                "order": 0,
                "cards": [copy.deepcopy(_CARDS[200])],
            },
            {
                "id": 30,
                "title": "Doing",
                "boardId": 2,
                "order": 1,
                "cards": [copy.deepcopy(_CARDS[300]), copy.deepcopy(_CARDS[301])],
            },
        ],
    }


@pytest.fixture()
def deck_card() -> dict[str, Any]:
    """A single card as returned by ``GET /cards/{id}``."""
    return copy.deepcopy(_CARDS[300])


@pytest.fixture()
def deck_comments_response() -> dict[str, Any]:
    """OCS envelope returned by the comments endpoint."""
    return {
        "ocs": {
            "meta": {"status": "ok", "statuscode": 200, "message": "OK"},
            "data": [
                {
                    "id": 7,
                    "objectId": 300,
                    "message": "Started on staging",
                    "actorId": "alice",
                    "actorType": "users",
                    "actorDisplayName": "Alice",
                    "creationDateTime": "2025-06-01T10:00:00+00:00",
                    "mentions": [],
                },
            ],
        }
    }


# ---------------------------------------------------------------------------
# Client doubles
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_client(
    deck_boards: list[dict[str, Any]],
    deck_stacks: dict[int, list[dict[str, Any]]],
) -> AsyncMock:
    """An AsyncMock DeckClient whose listings serve the fixture hierarchy.

    It works as its own async context manager, like the real client.
    """
    client = AsyncMock(spec=DeckClient)
    client.__aenter__.return_value = client
    client.__aexit__.return_value = False

    cards_by_stack = {
        stack["id"]: stack["cards"] for stacks in deck_stacks.values() for stack in stacks
    }
    client.get_boards.return_value = deck_boards
    client.get_stacks.side_effect = lambda board_id: deck_stacks[board_id]
    client.get_cards.side_effect = lambda stack_id: cards_by_stack[stack_id]
    return client
