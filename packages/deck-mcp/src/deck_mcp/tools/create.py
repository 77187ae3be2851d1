"""Create operations for every Deck entity type."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

from deck_mcp.client import DeckClient, create_client
from deck_mcp.models import (
    CreateAttachmentData,
    CreateBoardData,
    CreateCardData,
    CreateCommentData,
    CreateLabelData,
    CreateStackData,
)
from deck_mcp.resolver import resolve_stack_ancestry
from deck_mcp.validation import validate

logger = logging.getLogger(__name__)


async def _create_board(client: DeckClient, payload: CreateBoardData) -> dict[str, Any]:
    return await client.create_board(title=payload.title, color=payload.color)


async def _create_stack(client: DeckClient, payload: CreateStackData) -> dict[str, Any]:
    return await client.create_stack(
        board_id=payload.board_id,
        title=payload.title,
        order=payload.order,
    )


async def _create_card(client: DeckClient, payload: CreateCardData) -> dict[str, Any]:
    """Create a card, locating the stack's board first when it was not given."""
    board_id = payload.board_id
    if board_id is None:
        board_id = await resolve_stack_ancestry(client, payload.stack_id)
        logger.info("Resolved stack %s to board %s", payload.stack_id, board_id)

    return await client.create_card(
        board_id=board_id,
        stack_id=payload.stack_id,
        title=payload.title,
        card_type=payload.type,
        order=payload.order,
        description=payload.description,
        duedate=payload.duedate,
    )


async def _create_label(client: DeckClient, payload: CreateLabelData) -> dict[str, Any]:
    return await client.create_label(
        board_id=payload.board_id,
        title=payload.title,
        color=payload.color,
    )


async def _create_comment(client: DeckClient, payload: CreateCommentData) -> dict[str, Any]:
    return await client.create_comment(card_id=payload.card_id, message=payload.message)


async def _create_attachment(
    client: DeckClient,
    payload: CreateAttachmentData,
) -> dict[str, Any]:
    return await client.create_attachment(
        card_id=payload.card_id,
        attachment_type=payload.type,
        data=payload.data,
    )


_CREATORS: dict[str, Callable[[DeckClient, Any], Awaitable[dict[str, Any]]]] = {
    "board": _create_board,
    "stack": _create_stack,
    "card": _create_card,
    "label": _create_label,
    "comment": _create_comment,
    "attachment": _create_attachment,
}


async def create_entity(entity: str, data: dict[str, Any] | None) -> dict[str, Any]:
    """Create a board, stack, card, label, comment or attachment.

    Args:
        entity: The entity type to create.
        data: Entity fields.  Cards need ``title`` and ``stackId``; when
            ``boardId`` is omitted the owning board is looked up first.

    Returns:
        The created entity as returned by Deck.
    """
    payload = validate("create", entity, data)

    async with create_client() as client:
        result = await _CREATORS[entity](client, payload)

    logger.info("Created %s (id=%s)", entity, (result or {}).get("id"))
    return result
