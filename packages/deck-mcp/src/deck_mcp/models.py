"""Pydantic models for the per-entity and per-action tool payloads.

The MCP tools accept a free-form ``data`` / ``params`` mapping.  Each
``(operation, entity)`` pair, and each card action, has its own model
listing the fields the downstream Deck call needs, so the mapping is
checked before any request is sent.  Field aliases follow the Deck wire
names (``boardId``, ``stackId``, ...); field titles are used in error
messages.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic_core import PydanticCustomError

CreateEntity = Literal["board", "stack", "card", "label", "comment", "attachment"]
ReadEntity = Literal[
    "boards",
    "board",
    "stacks",
    "stack",
    "cards",
    "card",
    "labels",
    "label",
    "comments",
    "attachments",
]
UpdateEntity = Literal["board", "stack", "card", "label"]
DeleteEntity = Literal["board", "stack", "card", "label", "comment", "attachment"]
ActionEntity = Literal["card", "stack"]
CardAction = Literal[
    "move",
    "assign",
    "unassign",
    "add_label",
    "remove_label",
    "archive",
    "unarchive",
    "reorder",
    "mark_done",
    "mark_undone",
]


# Identifiers that belong in the request path, never in an update body.
_PATH_IDS = frozenset({"id", "cardId", "boardId", "stackId"})


class Payload(BaseModel):
    """Base for all tool payloads: wire aliases, unknown keys ignored."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class UpdatePayload(Payload):
    """Base for update bodies: unknown keys are kept and forwarded."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    def body(self) -> dict[str, Any]:
        """Return the fields the caller set, keyed by their wire names."""
        data = {
            **self.model_dump(by_alias=True, exclude_unset=True),
            **(self.model_extra or {}),
        }
        return {key: value for key, value in data.items() if key not in _PATH_IDS}


# ---------------------------------------------------------------------------
# create
# ---------------------------------------------------------------------------


class CreateBoardData(Payload):
    title: str = Field(..., title="Title")
    color: str | None = Field(None, title="Color", description="Hex color without '#'")


class CreateStackData(Payload):
    title: str = Field(..., title="Title")
    board_id: int = Field(..., alias="boardId", title="Board ID")
    order: int | None = Field(None, title="Order")


class CreateCardData(Payload):
    title: str = Field(..., title="Title")
    stack_id: int = Field(..., alias="stackId", title="Stack ID")
    board_id: int | None = Field(
        None,
        alias="boardId",
        title="Board ID",
        description="Resolved from the stack when omitted",
    )
    type: str | None = Field(None, title="Type")
    order: int | None = Field(None, title="Order")
    description: str | None = Field(None, title="Description")
    duedate: str | None = Field(None, title="Due date")


class CreateLabelData(Payload):
    title: str = Field(..., title="Title")
    color: str = Field(..., title="Color")
    board_id: int = Field(..., alias="boardId", title="Board ID")


class CreateCommentData(Payload):
    card_id: int = Field(..., alias="cardId", title="Card ID")
    message: str = Field(..., title="Message")


class CreateAttachmentData(Payload):
    card_id: int = Field(..., alias="cardId", title="Card ID")
    type: Literal["deck_file", "file"] = Field(..., title="Attachment type")
    data: str = Field(..., title="Attachment data")


CREATE_PAYLOADS: dict[str, type[Payload]] = {
    "board": CreateBoardData,
    "stack": CreateStackData,
    "card": CreateCardData,
    "label": CreateLabelData,
    "comment": CreateCommentData,
    "attachment": CreateAttachmentData,
}


# ---------------------------------------------------------------------------
# read
# ---------------------------------------------------------------------------


class ReadBoardsParams(Payload):
    archived: bool | None = Field(None, title="Archived")


class ReadBoardParams(Payload):
    id: int = Field(..., title="Board ID")


class ReadStacksParams(Payload):
    board_id: int = Field(..., alias="boardId", title="Board ID")


class ReadStackParams(Payload):
    board_id: int = Field(..., alias="boardId", title="Board ID")
    id: int = Field(..., title="Stack ID")


class ReadCardsParams(Payload):
    stack_id: int | None = Field(None, alias="stackId", title="Stack ID")
    board_id: int | None = Field(None, alias="boardId", title="Board ID")
    search: str | None = Field(None, title="Search")
    archived: bool | None = Field(None, title="Archived")
    done: bool | None = Field(None, title="Done")

    @model_validator(mode="after")
    def _require_stack_or_board(self) -> ReadCardsParams:
        if self.stack_id is None and self.board_id is None:
            raise PydanticCustomError(
                "missing_ancestor",
                "Either Stack ID or Board ID is required to get cards",
            )
        return self


class ReadCardParams(Payload):
    id: int = Field(..., title="Card ID")


class ReadLabelsParams(Payload):
    board_id: int = Field(..., alias="boardId", title="Board ID")


class ReadLabelParams(Payload):
    board_id: int = Field(..., alias="boardId", title="Board ID")
    id: int = Field(..., title="Label ID")


class ReadCardChildrenParams(Payload):
    card_id: int = Field(..., alias="cardId", title="Card ID")


READ_PARAMS: dict[str, type[Payload]] = {
    "boards": ReadBoardsParams,
    "board": ReadBoardParams,
    "stacks": ReadStacksParams,
    "stack": ReadStackParams,
    "cards": ReadCardsParams,
    "card": ReadCardParams,
    "labels": ReadLabelsParams,
    "label": ReadLabelParams,
    "comments": ReadCardChildrenParams,
    "attachments": ReadCardChildrenParams,
}


# ---------------------------------------------------------------------------
# update
# ---------------------------------------------------------------------------


class UpdateBoardData(UpdatePayload):
    title: str | None = Field(None, title="Title")
    color: str | None = Field(None, title="Color")
    archived: bool | None = Field(None, title="Archived")


class UpdateStackData(UpdatePayload):
    title: str | None = Field(None, title="Title")
    order: int | None = Field(None, title="Order")


class UpdateCardData(UpdatePayload):
    board_id: int | None = Field(None, alias="boardId", title="Board ID")
    stack_id: int | None = Field(None, alias="stackId", title="Stack ID")
    title: str | None = Field(None, title="Title")
    type: str | None = Field(None, title="Type")
    owner: str | None = Field(None, title="Owner")
    description: str | None = Field(None, title="Description")
    order: int | None = Field(None, title="Order")
    duedate: str | None = Field(None, title="Due date")
    done: bool | None = Field(None, title="Done")
    archived: bool | None = Field(None, title="Archived")


class UpdateLabelData(UpdatePayload):
    title: str | None = Field(None, title="Title")
    color: str | None = Field(None, title="Color")


UPDATE_PAYLOADS: dict[str, type[UpdatePayload]] = {
    "board": UpdateBoardData,
    "stack": UpdateStackData,
    "card": UpdateCardData,
    "label": UpdateLabelData,
}


# ---------------------------------------------------------------------------
# card actions
# ---------------------------------------------------------------------------


class MoveCardParams(Payload):
    stack_id: int = Field(..., alias="stackId", title="Stack ID")
    order: int | None = Field(None, title="Order")


class AssignUserParams(Payload):
    user_id: str = Field(..., alias="userId", title="User ID")


class LabelActionParams(Payload):
    label_id: int = Field(..., alias="labelId", title="Label ID")


class NoParams(Payload):
    pass


ACTION_PARAMS: dict[str, type[Payload]] = {
    "move": MoveCardParams,
    "reorder": MoveCardParams,
    "assign": AssignUserParams,
    "unassign": AssignUserParams,
    "add_label": LabelActionParams,
    "remove_label": LabelActionParams,
    "archive": NoParams,
    "unarchive": NoParams,
    "mark_done": NoParams,
    "mark_undone": NoParams,
}
