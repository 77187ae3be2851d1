"""Card actions: moving, assignment, labels and status toggles."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

from deck_mcp.client import DeckClient, create_client
from deck_mcp.models import AssignUserParams, LabelActionParams, MoveCardParams, NoParams
from deck_mcp.tools.update import apply_card_update
from deck_mcp.validation import validate_action

logger = logging.getLogger(__name__)


def _ack(result: Any, message: str) -> Any:
    """Return the remote body, or an acknowledgment when Deck sent none."""
    if result is None:
        return {"success": True, "message": message}
    return result


async def _move(client: DeckClient, card_id: int, params: MoveCardParams) -> Any:
    return await client.reorder_card(card_id, params.stack_id, params.order)


async def _assign(client: DeckClient, card_id: int, params: AssignUserParams) -> Any:
    result = await client.assign_user(card_id, params.user_id)
    return _ack(result, f"Assigned {params.user_id} to card {card_id}")


async def _unassign(client: DeckClient, card_id: int, params: AssignUserParams) -> Any:
    result = await client.unassign_user(card_id, params.user_id)
    return _ack(result, f"Unassigned {params.user_id} from card {card_id}")


async def _add_label(client: DeckClient, card_id: int, params: LabelActionParams) -> Any:
    result = await client.assign_label(card_id, params.label_id)
    return _ack(result, f"Added label {params.label_id} to card {card_id}")


async def _remove_label(client: DeckClient, card_id: int, params: LabelActionParams) -> Any:
    result = await client.remove_label(card_id, params.label_id)
    return _ack(result, f"Removed label {params.label_id} from card {card_id}")


def _toggle(field: str, value: bool) -> Callable[[DeckClient, int, NoParams], Awaitable[Any]]:
    """Build a handler that sets one boolean card field."""

    async def handler(client: DeckClient, card_id: int, params: NoParams) -> Any:
        return await apply_card_update(client, card_id, {field: value})

    return handler


_HANDLERS: dict[str, Callable[[DeckClient, int, Any], Awaitable[Any]]] = {
    "move": _move,
    "reorder": _move,
    "assign": _assign,
    "unassign": _unassign,
    "add_label": _add_label,
    "remove_label": _remove_label,
    "archive": _toggle("archived", True),
    "unarchive": _toggle("archived", False),
    "mark_done": _toggle("done", True),
    "mark_undone": _toggle("done", False),
}


async def perform_action(
    entity: str,
    entity_id: int,
    action: str,
    params: dict[str, Any] | None = None,
) -> Any:
    """Apply *action* to a card.

    ``move`` and ``reorder`` both send the card to ``stackId`` at
    ``order`` (last when omitted).  ``assign``/``unassign`` need
    ``userId``; ``add_label``/``remove_label`` need ``labelId``.
    ``archive``, ``unarchive``, ``mark_done`` and ``mark_undone`` update
    the card, locating its board and stack first.

    Raises:
        UnsupportedAction: The entity is not ``card`` or the action is unknown.
    """
    parsed = validate_action(entity, action, params)

    async with create_client() as client:
        result = await _HANDLERS[action](client, entity_id, parsed)

    logger.info("Performed %s on %s %s", action, entity, entity_id)
    return result
