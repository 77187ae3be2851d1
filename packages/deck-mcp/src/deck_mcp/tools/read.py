"""Read operations: single entities and filtered listings."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

from deck_mcp.client import DeckClient, create_client
from deck_mcp.models import (
    ReadBoardParams,
    ReadBoardsParams,
    ReadCardChildrenParams,
    ReadCardParams,
    ReadCardsParams,
    ReadLabelParams,
    ReadLabelsParams,
    ReadStackParams,
    ReadStacksParams,
)
from deck_mcp.validation import validate

logger = logging.getLogger(__name__)


def filter_cards(
    cards: list[dict[str, Any]],
    search: str | None = None,
    archived: bool | None = None,
    done: bool | None = None,
) -> list[dict[str, Any]]:
    """Filter an already-assembled card list.

    ``search`` is a case-insensitive substring match on title or
    description.  ``archived`` and ``done`` are exact matches.  A filter
    left as ``None`` (or an empty search string) is not applied.
    """
    filtered = cards
    if search:
        needle = search.lower()
        filtered = [
            card
            for card in filtered
            if needle in (card.get("title") or "").lower()
            or needle in (card.get("description") or "").lower()
        ]
    if archived is not None:
        filtered = [card for card in filtered if card.get("archived") == archived]
    if done is not None:
        filtered = [card for card in filtered if card.get("done") == done]
    return filtered


async def _read_boards(client: DeckClient, params: ReadBoardsParams) -> list[dict[str, Any]]:
    boards = await client.get_boards()
    if params.archived is not None:
        boards = [b for b in boards if b.get("archived") == params.archived]
    return boards


async def _read_board(client: DeckClient, params: ReadBoardParams) -> dict[str, Any]:
    return await client.get_board(params.id)


async def _read_stacks(client: DeckClient, params: ReadStacksParams) -> list[dict[str, Any]]:
    return await client.get_stacks(params.board_id)


async def _read_stack(client: DeckClient, params: ReadStackParams) -> dict[str, Any]:
    return await client.get_stack(params.board_id, params.id)


async def _read_cards(client: DeckClient, params: ReadCardsParams) -> list[dict[str, Any]]:
    """Return the cards of one stack, or every card on a board, filtered.

    With ``stackId`` the stack's cards are returned as-is.  Otherwise every
    stack of ``boardId`` is fetched in order and the combined list is
    filtered once it is complete.
    """
    if params.stack_id is not None:
        return await client.get_cards(params.stack_id)

    all_cards: list[dict[str, Any]] = []
    for stack in await client.get_stacks(params.board_id):  # type: ignore[arg-type]
        all_cards.extend(await client.get_cards(stack["id"]))

    filtered = filter_cards(
        all_cards,
        search=params.search,
        archived=params.archived,
        done=params.done,
    )
    logger.info(
        "Board %s: %d of %d cards match filters",
        params.board_id,
        len(filtered),
        len(all_cards),
    )
    return filtered


async def _read_card(client: DeckClient, params: ReadCardParams) -> dict[str, Any]:
    return await client.get_card(params.id)


async def _read_labels(client: DeckClient, params: ReadLabelsParams) -> list[dict[str, Any]]:
    return await client.get_labels(params.board_id)


async def _read_label(client: DeckClient, params: ReadLabelParams) -> dict[str, Any]:
    return await client.get_label(params.board_id, params.id)


async def _read_comments(
    client: DeckClient,
    params: ReadCardChildrenParams,
) -> list[dict[str, Any]]:
    return await client.get_comments(params.card_id)


async def _read_attachments(
    client: DeckClient,
    params: ReadCardChildrenParams,
) -> list[dict[str, Any]]:
    return await client.get_attachments(params.card_id)


_READERS: dict[str, Callable[[DeckClient, Any], Awaitable[Any]]] = {
    "boards": _read_boards,
    "board": _read_board,
    "stacks": _read_stacks,
    "stack": _read_stack,
    "cards": _read_cards,
    "card": _read_card,
    "labels": _read_labels,
    "label": _read_label,
    "comments": _read_comments,
    "attachments": _read_attachments,
}


async def read_entity(
    entity: str,
    params: dict[str, Any] | None = None,
) -> dict[str, Any] | list[dict[str, Any]]:
    """Read one entity (singular tag) or a listing (plural tag).

    Args:
        entity: ``boards``, ``board``, ``stacks``, ``stack``, ``cards``,
            ``card``, ``labels``, ``label``, ``comments`` or ``attachments``.
        params: Identifiers and filters, e.g. ``{"boardId": 1, "search": "bug"}``.

    Returns:
        The entity dict, or a list of entity dicts for plural tags.
    """
    parsed = validate("read", entity, params)

    async with create_client() as client:
        result = await _READERS[entity](client, parsed)

    count = len(result) if isinstance(result, list) else 1
    logger.info("Read %d %s", count, entity)
    return result
