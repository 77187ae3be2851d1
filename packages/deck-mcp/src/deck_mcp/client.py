"""Async REST client for the Nextcloud Deck API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from deck_mcp.config import DeckSettings
from deck_mcp.errors import NotFound, RemoteError

logger = logging.getLogger(__name__)

DECK_APP_PATH = "/index.php/apps/deck"
API_PREFIX = "/api/v1.0"

# Deck places items with this order value at the end of their stack/board.
DEFAULT_ORDER = 999
DEFAULT_CARD_TYPE = "plain"


class DeckClient:
    """Async wrapper around the Nextcloud Deck REST API.

    Every request carries the same HTTP Basic credential built from the
    configured username and password.  Instances hold an
    :class:`httpx.AsyncClient` and are meant to live for a single tool
    call; use them as an async context manager so the connection pool is
    closed when the call completes.
    """

    def __init__(self, settings: DeckSettings) -> None:
        self._settings = settings
        self._client = httpx.AsyncClient(
            base_url=f"{settings.base_url}{DECK_APP_PATH}",
            auth=httpx.BasicAuth(settings.username, settings.password),
            headers={
                "OCS-APIRequest": "true",
                "Accept": "application/json",
            },
            timeout=settings.timeout,
        )

    async def __aenter__(self) -> DeckClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Core execution
    # ------------------------------------------------------------------

    async def request(
        self,
        method: str,
        path: str,
        body: dict[str, Any] | None = None,
        *,
        api: bool = True,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        *path* is relative to the Deck REST API root unless *api* is
        false, in which case it is relative to the Deck app itself (used
        by the comments endpoints).  Returns ``None`` for empty bodies.

        Raises :class:`RemoteError` on any non-2xx status.
        """
        url = f"{API_PREFIX}{path}" if api else path
        response = await self._client.request(method, url, json=body)
        logger.debug("%s %s -> %d", method, url, response.status_code)

        if response.is_error:
            raise RemoteError(response.status_code, response.text)

        if not response.content:
            return None
        return response.json()

    async def _ocs_request(
        self,
        method: str,
        path: str,
        body: dict[str, Any] | None = None,
    ) -> Any:
        """Call the comments sub-API and unwrap its OCS envelope."""
        payload = await self.request(method, path, body, api=False)
        if not isinstance(payload, dict):
            return payload
        return payload.get("ocs", {}).get("data")

    # ------------------------------------------------------------------
    # Boards
    # ------------------------------------------------------------------

    async def get_boards(self) -> list[dict[str, Any]]:
        return await self.request("GET", "/boards") or []

    async def get_board(self, board_id: int) -> dict[str, Any]:
        return await self.request("GET", f"/boards/{board_id}")

    async def create_board(self, title: str, color: str | None = None) -> dict[str, Any]:
        body: dict[str, Any] = {"title": title}
        if color is not None:
            body["color"] = color
        return await self.request("POST", "/boards", body)

    async def update_board(self, board_id: int, data: dict[str, Any]) -> dict[str, Any]:
        return await self.request("PUT", f"/boards/{board_id}", data)

    async def delete_board(self, board_id: int) -> None:
        await self.request("DELETE", f"/boards/{board_id}")

    # ------------------------------------------------------------------
    # Stacks
    # ------------------------------------------------------------------

    async def get_stacks(self, board_id: int) -> list[dict[str, Any]]:
        """List a board's stacks; each stack embeds its ``cards``."""
        return await self.request("GET", f"/boards/{board_id}/stacks") or []

    async def get_stack(self, board_id: int, stack_id: int) -> dict[str, Any]:
        for stack in await self.get_stacks(board_id):
            if stack.get("id") == stack_id:
                return stack
        raise NotFound(f"Stack {stack_id} not found in board {board_id}")

    async def create_stack(
        self,
        board_id: int,
        title: str,
        order: int | None = None,
    ) -> dict[str, Any]:
        return await self.request(
            "POST",
            f"/boards/{board_id}/stacks",
            {"title": title, "order": DEFAULT_ORDER if order is None else order},
        )

    async def update_stack(
        self,
        board_id: int,
        stack_id: int,
        data: dict[str, Any],
    ) -> dict[str, Any]:
        return await self.request("PUT", f"/boards/{board_id}/stacks/{stack_id}", data)

    async def delete_stack(self, board_id: int, stack_id: int) -> None:
        await self.request("DELETE", f"/boards/{board_id}/stacks/{stack_id}")

    # ------------------------------------------------------------------
    # Cards
    # ------------------------------------------------------------------

    async def get_cards(self, stack_id: int) -> list[dict[str, Any]]:
        stack = await self.request("GET", f"/stacks/{stack_id}")
        return (stack or {}).get("cards") or []

    async def get_card(self, card_id: int) -> dict[str, Any]:
        return await self.request("GET", f"/cards/{card_id}")

    async def create_card(
        self,
        board_id: int,
        stack_id: int,
        title: str,
        card_type: str | None = None,
        order: int | None = None,
        description: str | None = None,
        duedate: str | None = None,
    ) -> dict[str, Any]:
        """Create a card, filling unset optional fields with Deck's defaults."""
        body = {
            "title": title,
            "type": card_type or DEFAULT_CARD_TYPE,
            "order": DEFAULT_ORDER if order is None else order,
            "description": description or "",
            "duedate": duedate,
        }
        return await self.request(
            "POST", f"/boards/{board_id}/stacks/{stack_id}/cards", body
        )

    async def update_card(
        self,
        board_id: int,
        stack_id: int,
        card_id: int,
        data: dict[str, Any],
    ) -> dict[str, Any]:
        return await self.request(
            "PUT", f"/boards/{board_id}/stacks/{stack_id}/cards/{card_id}", data
        )

    async def delete_card(self, board_id: int, stack_id: int, card_id: int) -> None:
        await self.request(
            "DELETE", f"/boards/{board_id}/stacks/{stack_id}/cards/{card_id}"
        )

    # ------------------------------------------------------------------
    # Card actions
    # ------------------------------------------------------------------

    async def reorder_card(
        self,
        card_id: int,
        stack_id: int,
        order: int | None = None,
    ) -> Any:
        """Move a card to *stack_id* at position *order* (last by default)."""
        return await self.request(
            "PUT",
            f"/cards/{card_id}/reorder",
            {"stackId": stack_id, "order": DEFAULT_ORDER if order is None else order},
        )

    async def assign_user(self, card_id: int, user_id: str) -> Any:
        return await self.request("PUT", f"/cards/{card_id}/assignUser", {"userId": user_id})

    async def unassign_user(self, card_id: int, user_id: str) -> Any:
        return await self.request("PUT", f"/cards/{card_id}/unassignUser", {"userId": user_id})

    async def assign_label(self, card_id: int, label_id: int) -> Any:
        return await self.request("PUT", f"/cards/{card_id}/labels/{label_id}")

    async def remove_label(self, card_id: int, label_id: int) -> Any:
        return await self.request("DELETE", f"/cards/{card_id}/labels/{label_id}")

    # ------------------------------------------------------------------
    # Labels
    # ------------------------------------------------------------------

    async def get_labels(self, board_id: int) -> list[dict[str, Any]]:
        board = await self.get_board(board_id)
        return (board or {}).get("labels") or []

    async def get_label(self, board_id: int, label_id: int) -> dict[str, Any]:
        for label in await self.get_labels(board_id):
            if label.get("id") == label_id:
                return label
        raise NotFound(f"Label {label_id} not found")

    async def create_label(self, board_id: int, title: str, color: str) -> dict[str, Any]:
        return await self.request(
            "POST", f"/boards/{board_id}/labels", {"title": title, "color": color}
        )

    async def update_label(
        self,
        board_id: int,
        label_id: int,
        data: dict[str, Any],
    ) -> dict[str, Any]:
        return await self.request("PUT", f"/boards/{board_id}/labels/{label_id}", data)

    async def delete_label(self, board_id: int, label_id: int) -> None:
        await self.request("DELETE", f"/boards/{board_id}/labels/{label_id}")

    # ------------------------------------------------------------------
    # Comments (OCS sub-API)
    # ------------------------------------------------------------------

    async def get_comments(self, card_id: int) -> list[dict[str, Any]]:
        return await self._ocs_request("GET", f"/cards/{card_id}/comments") or []

    async def create_comment(self, card_id: int, message: str) -> dict[str, Any]:
        return await self._ocs_request(
            "POST", f"/cards/{card_id}/comments", {"message": message}
        )

    async def delete_comment(self, card_id: int, comment_id: int) -> None:
        await self._ocs_request("DELETE", f"/cards/{card_id}/comments/{comment_id}")

    # ------------------------------------------------------------------
    # Attachments
    # ------------------------------------------------------------------

    async def get_attachments(self, card_id: int) -> list[dict[str, Any]]:
        return await self.request("GET", f"/cards/{card_id}/attachments") or []

    async def create_attachment(
        self,
        card_id: int,
        attachment_type: str,
        data: str,
    ) -> dict[str, Any]:
        return await self.request(
            "POST",
            f"/cards/{card_id}/attachments",
            {"type": attachment_type, "data": data},
        )

    async def delete_attachment(self, card_id: int, attachment_id: int) -> None:
        await self.request("DELETE", f"/cards/{card_id}/attachments/{attachment_id}")

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()


def create_client(settings: DeckSettings | None = None) -> DeckClient:
    """Return a new :class:`DeckClient`, reading settings from the environment.

    A fresh client is built for every tool call; nothing is shared between
    requests.
    """
    return DeckClient(settings or DeckSettings.from_env())
