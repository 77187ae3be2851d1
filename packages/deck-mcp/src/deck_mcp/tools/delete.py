"""Delete operations for every Deck entity type."""

from __future__ import annotations

import logging
from typing import Any

from deck_mcp.client import create_client
from deck_mcp.errors import UnsupportedAction
from deck_mcp.resolver import resolve_card_ancestry
from deck_mcp.validation import require

logger = logging.getLogger(__name__)

_DELETABLE = frozenset({"board", "stack", "card", "label", "comment", "attachment"})


async def delete_entity(
    entity: str,
    entity_id: int,
    board_id: int | None = None,
    card_id: int | None = None,
    stack_id: int | None = None,
) -> dict[str, Any]:
    """Delete an entity and return a ``{success, message}`` acknowledgment.

    Args:
        entity: The entity type to delete.
        entity_id: ID of the entity itself.
        board_id: Owning board; required for stacks and labels.
        card_id: Owning card; required for comments and attachments.
        stack_id: Owning stack of a card.  A card is located automatically
            unless both *board_id* and *stack_id* are given.
    """
    if entity not in _DELETABLE:
        raise UnsupportedAction(f"Cannot delete entity type: {entity}")
    if entity in ("stack", "label"):
        require(board_id, f"Board ID is required to delete {entity}")
    if entity in ("comment", "attachment"):
        require(card_id, f"Card ID is required to delete {entity}")

    async with create_client() as client:
        if entity == "board":
            await client.delete_board(entity_id)
        elif entity == "stack":
            await client.delete_stack(board_id, entity_id)  # type: ignore[arg-type]
        elif entity == "label":
            await client.delete_label(board_id, entity_id)  # type: ignore[arg-type]
        elif entity == "comment":
            await client.delete_comment(card_id, entity_id)  # type: ignore[arg-type]
        elif entity == "attachment":
            await client.delete_attachment(card_id, entity_id)  # type: ignore[arg-type]
        else:
            if board_id is None or stack_id is None:
                board_id, stack_id = await resolve_card_ancestry(client, entity_id)
            await client.delete_card(board_id, stack_id, entity_id)

    logger.info("Deleted %s %s", entity, entity_id)
    return {"success": True, "message": f"{entity.capitalize()} {entity_id} deleted"}
