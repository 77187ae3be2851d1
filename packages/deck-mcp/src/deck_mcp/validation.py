"""Parameter validation for the Deck tools.

Turns the caller's free-form mapping into the payload model registered for
an ``(operation, entity)`` pair or a card action.  Runs before any network
call and never fills in defaults for identifiers.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import ValidationError

from deck_mcp.errors import InvalidParameter, MissingParameter, UnsupportedAction
from deck_mcp.models import (
    ACTION_PARAMS,
    CREATE_PAYLOADS,
    READ_PARAMS,
    UPDATE_PAYLOADS,
    Payload,
)

P = TypeVar("P", bound=Payload)

_REGISTRIES: dict[str, dict[str, type[Payload]]] = {
    "create": CREATE_PAYLOADS,
    "read": READ_PARAMS,
    "update": UPDATE_PAYLOADS,  # type: ignore[dict-item]
}


def parse_payload(model: type[P], data: dict[str, Any] | None) -> P:
    """Validate *data* against *model*.

    Raises:
        MissingParameter: A required field is absent or null.
        InvalidParameter: A field is present but has the wrong type.
    """
    try:
        return model.model_validate(data or {})
    except ValidationError as exc:
        raise _translate(model, exc) from None


def validate(operation: str, entity: str, data: dict[str, Any] | None) -> Payload:
    """Validate the payload of a create/read/update call for *entity*."""
    registry = _REGISTRIES.get(operation, {})
    model = registry.get(entity)
    if model is None:
        raise UnsupportedAction(f"Cannot {operation} entity type: {entity}")
    return parse_payload(model, data)


def validate_action(entity: str, action: str, params: dict[str, Any] | None) -> Payload:
    """Validate a card action's parameters.

    Only ``card`` supports actions; ``stack`` is a recognised entity tag
    without any implemented action.
    """
    if entity != "card":
        raise UnsupportedAction(f'Actions for entity "{entity}" are not implemented')
    model = ACTION_PARAMS.get(action)
    if model is None:
        raise UnsupportedAction(f"Unknown action: {action}")
    return parse_payload(model, params)


def require(value: Any, message: str) -> Any:
    """Return *value*, or raise :class:`MissingParameter` if it is ``None``."""
    if value is None:
        raise MissingParameter(message)
    return value


def _translate(model: type[Payload], exc: ValidationError) -> Exception:
    """Map the first pydantic error onto the Deck error taxonomy."""
    error = exc.errors()[0]
    loc = error.get("loc") or ()
    title = _field_title(model, str(loc[0])) if loc else None

    if error["type"] == "missing_ancestor":
        return MissingParameter(error["msg"])
    if error["type"] == "missing" or ("input" in error and error["input"] is None):
        return MissingParameter(f"{title or 'Parameter'} is required")
    return InvalidParameter(f"Invalid {title or 'parameter'}: {error['msg']}")


def _field_title(model: type[Payload], key: str) -> str:
    for name, field in model.model_fields.items():
        if key in (name, field.alias):
            return field.title or name
    return key

