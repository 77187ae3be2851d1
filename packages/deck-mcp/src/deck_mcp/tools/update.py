"""Update operations for boards, stacks, cards and labels."""

from __future__ import annotations

import logging
from typing import Any, cast

from deck_mcp.client import DeckClient, create_client
from deck_mcp.models import UpdateCardData
from deck_mcp.resolver import resolve_card_ancestry
from deck_mcp.validation import require, validate

logger = logging.getLogger(__name__)


async def apply_card_update(
    client: DeckClient,
    card_id: int,
    body: dict[str, Any],
    board_id: int | None = None,
    stack_id: int | None = None,
) -> dict[str, Any]:
    """PUT *body* to a card, resolving its board and stack when either is unknown.

    Resolution always completes before the write is sent, so a card that
    cannot be located leaves the remote state untouched.
    """
    if board_id is None or stack_id is None:
        board_id, stack_id = await resolve_card_ancestry(client, card_id)
        logger.info(
            "Resolved card %s to board %s / stack %s", card_id, board_id, stack_id
        )
    return await client.update_card(board_id, stack_id, card_id, body)


async def update_entity(
    entity: str,
    entity_id: int,
    data: dict[str, Any] | None,
    board_id: int | None = None,
) -> dict[str, Any]:
    """Update a board, stack, card or label.

    Stacks and labels need the caller's ``board_id``; they are never
    looked up.  Cards take ``boardId``/``stackId`` from *data* (or
    *board_id*) and are located automatically when either is missing.
    Path identifiers are never forwarded in the request body.

    Returns:
        The updated entity as returned by Deck.
    """
    payload = validate("update", entity, data)
    if entity in ("stack", "label"):
        require(board_id, f"Board ID is required to update {entity}")

    async with create_client() as client:
        if entity == "board":
            result = await client.update_board(entity_id, payload.body())
        elif entity == "stack":
            result = await client.update_stack(board_id, entity_id, payload.body())  # type: ignore[arg-type]
        elif entity == "label":
            result = await client.update_label(board_id, entity_id, payload.body())  # type: ignore[arg-type]
        else:
            card = cast(UpdateCardData, payload)
            result = await apply_card_update(
                client,
                entity_id,
                card.body(),
                board_id=card.board_id if card.board_id is not None else board_id,
                stack_id=card.stack_id,
            )

    logger.info("Updated %s %s", entity, entity_id)
    return result
