"""Tests for the create dispatcher."""

from __future__ import annotations

from collections.abc import Iterator
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from deck_mcp.errors import MissingParameter, NotFound
from deck_mcp.tools.create import create_entity


@pytest.fixture(autouse=True)
def client_factory(mock_client: AsyncMock) -> Iterator[MagicMock]:
    with patch("deck_mcp.tools.create.create_client", return_value=mock_client) as factory:
        yield factory


@pytest.mark.unit
@pytest.mark.asyncio
async def test_create_board(mock_client: AsyncMock) -> None:
    mock_client.create_board.return_value = {"id": 3, "title": "Roadmap"}

    result = await create_entity("board", {"title": "Roadmap", "color": "ff0000"})

    assert result == {"id": 3, "title": "Roadmap"}
    mock_client.create_board.assert_awaited_once_with(title="Roadmap", color="ff0000")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_create_card_with_board_skips_resolution(mock_client: AsyncMock) -> None:
    mock_client.create_card.return_value = {"id": 302}

    await create_entity("card", {"title": "Ship", "stackId": 30, "boardId": 2, "order": 0})

    mock_client.get_boards.assert_not_awaited()
    mock_client.create_card.assert_awaited_once_with(
        board_id=2,
        stack_id=30,
        title="Ship",
        card_type=None,
        order=0,
        description=None,
        duedate=None,
    )


@pytest.mark.unit
@pytest.mark.asyncio
async def test_create_card_resolves_board_from_stack(mock_client: AsyncMock) -> None:
    """Without boardId the owning board of the stack is looked up first."""
    mock_client.create_card.return_value = {"id": 302}

    await create_entity("card", {"title": "Ship", "stackId": 30})

    mock_client.get_boards.assert_awaited_once()
    assert mock_client.create_card.await_args.kwargs["board_id"] == 2


@pytest.mark.unit
@pytest.mark.asyncio
async def test_create_card_in_unknown_stack_writes_nothing(mock_client: AsyncMock) -> None:
    with pytest.raises(NotFound, match="Stack 77 not found in any board"):
        await create_entity("card", {"title": "Ship", "stackId": 77})
    mock_client.create_card.assert_not_awaited()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_create_stack_without_board_makes_no_calls(client_factory: MagicMock) -> None:
    with pytest.raises(MissingParameter, match="Board ID is required"):
        await create_entity("stack", {"title": "Review"})
    client_factory.assert_not_called()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_create_label(mock_client: AsyncMock) -> None:
    mock_client.create_label.return_value = {"id": 7}

    await create_entity("label", {"title": "Urgent", "color": "ff0000", "boardId": 1})

    mock_client.create_label.assert_awaited_once_with(board_id=1, title="Urgent", color="ff0000")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_create_comment(mock_client: AsyncMock) -> None:
    mock_client.create_comment.return_value = {"id": 8, "message": "Deployed"}

    result = await create_entity("comment", {"cardId": 300, "message": "Deployed"})

    assert result["id"] == 8
    mock_client.create_comment.assert_awaited_once_with(card_id=300, message="Deployed")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_create_attachment(mock_client: AsyncMock) -> None:
    mock_client.create_attachment.return_value = {"id": 4}

    await create_entity("attachment", {"cardId": 300, "type": "deck_file", "data": "design.pdf"})

    mock_client.create_attachment.assert_awaited_once_with(
        card_id=300, attachment_type="deck_file", data="design.pdf"
    )


@pytest.mark.unit
@pytest.mark.asyncio
async def test_client_is_closed_after_call(mock_client: AsyncMock) -> None:
    mock_client.create_board.return_value = {"id": 3}
    await create_entity("board", {"title": "Roadmap"})
    mock_client.__aexit__.assert_awaited_once()
