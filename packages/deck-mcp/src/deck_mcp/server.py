"""FastMCP server exposing Nextcloud Deck operations as five generic MCP tools."""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Awaitable, TypeVar

from mcp.server.fastmcp import FastMCP
from starlette.applications import Starlette

from deck_mcp.health import health_routes
from deck_mcp.logging_config import configure_logging
from deck_mcp.models import (
    ActionEntity,
    CardAction,
    CreateEntity,
    DeleteEntity,
    ReadEntity,
    UpdateEntity,
)
from deck_mcp.tools.actions import perform_action as _perform_action
from deck_mcp.tools.create import create_entity as _create_entity
from deck_mcp.tools.delete import delete_entity as _delete_entity
from deck_mcp.tools.read import read_entity as _read_entity
from deck_mcp.tools.update import update_entity as _update_entity
from deck_mcp.tracing import CorrelationMiddleware

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_HOST = "0.0.0.0"


async def _timed(tool: str, target: str, call: Awaitable[T]) -> T:
    """Await *call*, logging its duration, or the failure and re-raising."""
    start = time.perf_counter()
    try:
        result = await call
    except Exception as exc:
        logger.error(
            "%s failed for %s after %.0fms: %s",
            tool,
            target,
            (time.perf_counter() - start) * 1000,
            exc,
        )
        raise
    logger.info("%s completed in %.0fms", tool, (time.perf_counter() - start) * 1000)
    return result


def _to_text(result: Any) -> str:
    return json.dumps(result, indent=2)


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


async def deck_create(entity: CreateEntity, data: dict[str, Any]) -> str:
    """Create an entity in Nextcloud Deck (board, stack, card, label, comment, attachment).

    Args:
        entity: Type of entity to create.
        data: Entity fields. board: title, color?. stack: title, boardId,
            order?. card: title, stackId, boardId?, type?, order?,
            description?, duedate?. label: title, color, boardId.
            comment: cardId, message. attachment: cardId, type
            ("deck_file" or "file"), data.
    """
    logger.info("Creating %s", entity)
    result = await _timed("deck_create", entity, _create_entity(entity=entity, data=data))
    return _to_text(result)


async def deck_read(entity: ReadEntity, params: dict[str, Any] | None = None) -> str:
    """Read entities from Nextcloud Deck with optional filters.

    Use a plural entity for a listing and a singular one for a specific item.

    Args:
        entity: boards, board, stacks, stack, cards, card, labels, label,
            comments or attachments.
        params: Identifiers and filters. board/card: id. stacks/labels:
            boardId. stack/label: boardId, id. cards: stackId, or boardId
            with optional search, archived, done. comments/attachments:
            cardId. boards: optional archived.
    """
    result = await _timed("deck_read", entity, _read_entity(entity=entity, params=params))
    return _to_text(result)


async def deck_update(
    entity: UpdateEntity,
    entity_id: int,
    data: dict[str, Any],
    board_id: int | None = None,
) -> str:
    """Update an entity in Nextcloud Deck (board, stack, card, label).

    Args:
        entity: Entity type to update.
        entity_id: ID of the entity.
        data: Fields to change. Cards may include boardId and stackId;
            when either is missing the card is located automatically.
        board_id: Board ID, required for stack and label updates.
    """
    target = f"{entity}:{entity_id}"
    logger.info("Updating %s", target)
    result = await _timed(
        "deck_update",
        target,
        _update_entity(entity=entity, entity_id=entity_id, data=data, board_id=board_id),
    )
    return _to_text(result)


async def deck_delete(
    entity: DeleteEntity,
    entity_id: int,
    board_id: int | None = None,
    card_id: int | None = None,
    stack_id: int | None = None,
) -> str:
    """Delete an entity from Nextcloud Deck (board, stack, card, label, comment, attachment).

    Args:
        entity: Entity type to delete.
        entity_id: ID of the entity.
        board_id: Board ID, required for stack and label deletion.
        card_id: Card ID, required for comment and attachment deletion.
        stack_id: Stack ID of a card. Cards are located automatically
            unless both board_id and stack_id are given.
    """
    target = f"{entity}:{entity_id}"
    logger.info("Deleting %s", target)
    result = await _timed(
        "deck_delete",
        target,
        _delete_entity(
            entity=entity,
            entity_id=entity_id,
            board_id=board_id,
            card_id=card_id,
            stack_id=stack_id,
        ),
    )
    return _to_text(result)


async def deck_action(
    entity: ActionEntity,
    entity_id: int,
    action: CardAction,
    params: dict[str, Any] | None = None,
) -> str:
    """Perform a special action on a Deck card (move, assign, archive, ...).

    Args:
        entity: Entity type. Only card actions are implemented.
        entity_id: ID of the card.
        action: move or reorder (params: stackId, order?), assign or
            unassign (userId), add_label or remove_label (labelId),
            archive, unarchive, mark_done, mark_undone (no params).
        params: Action parameters.
    """
    target = f"{entity}:{entity_id}"
    logger.info("Performing %s on %s", action, target)
    result = await _timed(
        "deck_action",
        target,
        _perform_action(entity=entity, entity_id=entity_id, action=action, params=params),
    )
    return _to_text(result)


# ---------------------------------------------------------------------------
# Server factory and transports
# ---------------------------------------------------------------------------

_TOOLS = (deck_create, deck_read, deck_update, deck_delete, deck_action)


def create_server(host: str = DEFAULT_HOST) -> FastMCP:
    """Build a stateless FastMCP server with the five tools and health routes.

    FastMCP only accepts localhost ``Host`` headers when *host* is a
    loopback address; any other bind address serves every host name.
    Every HTTP app needs its own server, since the streamable HTTP
    session manager can be started only once per instance.
    """
    server = FastMCP("deck", host=host, stateless_http=True)
    for tool in _TOOLS:
        server.tool()(tool)
    for route in health_routes:
        server.custom_route(route.path, methods=["GET"])(route.endpoint)
    return server


mcp = create_server()


def build_http_app(host: str = DEFAULT_HOST) -> Starlette:
    """Return a fresh streamable HTTP app (``/mcp``, ``/health``, ``/ready``)."""
    app = create_server(host).streamable_http_app()
    app.add_middleware(CorrelationMiddleware)
    return app


def main() -> None:
    """Run the Deck MCP server over stdio."""
    configure_logging()
    mcp.run()


if __name__ == "__main__":
    main()
