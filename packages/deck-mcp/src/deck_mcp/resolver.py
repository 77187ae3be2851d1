"""Ancestry resolution for stacks and cards.

The Deck API has no reverse lookup from a stack or card to its parents,
so both resolvers walk the hierarchy in listing order: every board, then
that board's stacks (which embed their cards).  The first match wins and
the walk stops there.  Nothing is cached; each call reflects the remote
state at the time it runs.
"""

from __future__ import annotations

import logging

from deck_mcp.client import DeckClient
from deck_mcp.errors import NotFound

logger = logging.getLogger(__name__)


async def resolve_stack_ancestry(client: DeckClient, stack_id: int) -> int:
    """Return the id of the board that owns *stack_id*.

    Raises:
        NotFound: No board lists the stack.
    """
    boards = await client.get_boards()
    for scanned, board in enumerate(boards, start=1):
        stacks = await client.get_stacks(board["id"])
        if any(stack.get("id") == stack_id for stack in stacks):
            logger.debug(
                "Resolved stack %s to board %s after scanning %d board(s)",
                stack_id,
                board["id"],
                scanned,
            )
            return board["id"]

    raise NotFound(f"Stack {stack_id} not found in any board")


async def resolve_card_ancestry(client: DeckClient, card_id: int) -> tuple[int, int]:
    """Return ``(board_id, stack_id)`` for *card_id*.

    Raises:
        NotFound: No stack on any board embeds the card.
    """
    boards = await client.get_boards()
    stacks_scanned = 0
    for board in boards:
        for stack in await client.get_stacks(board["id"]):
            stacks_scanned += 1
            cards = stack.get("cards") or []
            if any(card.get("id") == card_id for card in cards):
                logger.debug(
                    "Resolved card %s to board %s / stack %s after scanning %d stack(s)",
                    card_id,
                    board["id"],
                    stack["id"],
                    stacks_scanned,
                )
                return board["id"], stack["id"]

    raise NotFound(f"Card {card_id} not found in any board")
