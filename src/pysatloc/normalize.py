"""Normalization helpers.

Centralizes defensive parsing and the conversion of every failure shape
(remote error payloads, transport exceptions) into :class:`ErrorRecord`.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from pysatloc.models.error import ErrorRecord

GENERIC_ERROR = "error"
NO_MESSAGE = "no message provided"
REMOTE_ERROR_DETAIL = "The position service reported an error."
CONNECTION_ERROR_DETAIL = "Could not establish a connection to the position service."

# Fields that mark a payload (or exception) as a failure.
_CODE_FIELDS: tuple[str, ...] = ("errno",)
_STATUS_FIELDS: tuple[str, ...] = ("status", "status_code")
# Human-readable fields, in order of preference.
_MESSAGE_FIELDS: tuple[str, ...] = ("code", "description", "message", "error")


def safe_float(value: Any) -> float | None:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result):
        return None
    return result


def _lookup(obj: Any, name: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def _first_present(obj: Any, names: tuple[str, ...]) -> Any:
    for name in names:
        value = _lookup(obj, name)
        if value is not None and value != "":
            return value
    return None


def has_error_indicators(obj: Any) -> bool:
    """Return ``True`` when *obj* exposes an errno-style or status-style field.

    Any present, non-empty value counts, including ``0``.
    """
    return _first_present(obj, _CODE_FIELDS + _STATUS_FIELDS) is not None


def _error_code(obj: Any) -> int | str:
    """Pick the record's error code: errno first, then status, then the generic tag.

    ``int`` and ``str`` codes are kept as-is; structured or fractional values
    are stringified.
    """
    code = _first_present(obj, _CODE_FIELDS)
    if code is None:
        code = _first_present(obj, _STATUS_FIELDS)
    if code is None:
        return GENERIC_ERROR
    if isinstance(code, str) or (isinstance(code, int) and not isinstance(code, bool)):
        return code
    return str(code) or GENERIC_ERROR


def _message_for(obj: Any) -> str:
    for name in _MESSAGE_FIELDS:
        value = _lookup(obj, name)
        if isinstance(value, str) and value:
            return value
    if isinstance(obj, BaseException) and str(obj):
        return str(obj)
    return NO_MESSAGE


def normalize_error(obj: Any) -> Any:
    """Convert a failure into an :class:`ErrorRecord`.

    Mappings (decoded remote payloads) are converted only when they carry
    an ``errno`` or ``status`` field; anything else is returned unchanged.
    Exceptions always describe a failure and are always converted.
    """
    is_exception = isinstance(obj, BaseException)
    if not is_exception and not has_error_indicators(obj):
        return obj

    return ErrorRecord(
        error=_error_code(obj),
        message=_message_for(obj),
        detail=CONNECTION_ERROR_DETAIL if is_exception else REMOTE_ERROR_DETAIL,
    )


def parse_error(exc: Exception) -> ErrorRecord:
    """Build the record emitted when a response body cannot be decoded."""
    return ErrorRecord(
        error="parse_error",
        message=str(exc) or NO_MESSAGE,
        detail="The position service returned a body that could not be parsed.",
    )
