"""
Field guards for search index documents.

Azure AI Search rejects searchable strings longer than 32,766 characters and
fails a whole upload batch on a type mismatch, so every document passes
through these helpers before it leaves the builder.
"""

from typing import Any

import structlog

logger = structlog.get_logger(__name__)

MAX_FIELD_LENGTH = 32766
TRUNCATED_FIELD_LENGTH = 32760
TRUNCATION_SUFFIX = "..."
TRUNCATED_FLAG_SUFFIX = "_Truncated"

_TRUE_STRINGS = {"true", "1", "yes", "y", "on"}
_FALSE_STRINGS = {"false", "0", "no", "n", "off", ""}


def truncate_field(
    value: str,
    max_length: int = MAX_FIELD_LENGTH,
    truncated_length: int = TRUNCATED_FIELD_LENGTH,
) -> tuple[str, bool]:
    """
    Truncate a string that exceeds the index limit.
    
    Args:
        value: Field value
        max_length: Longest value accepted unchanged
        truncated_length: Characters kept before the "..." suffix
        
    Returns:
        Tuple of (possibly truncated value, whether it was truncated)
    """
    if len(value) <= max_length:
        return value, False
    return value[:truncated_length] + TRUNCATION_SUFFIX, True


def coerce_int(value: Any) -> int:
    """Coerce to int; anything unparseable becomes 0."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    try:
        return int(float(str(value).strip()))
    except (TypeError, ValueError, OverflowError):
        return 0


def coerce_float(value: Any) -> float:
    """Coerce to float; anything unparseable becomes 0.0."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    if isinstance(value, bool):
        return float(value)
    try:
        result = float(str(value).strip())
    except (TypeError, ValueError):
        return 0.0
    # NaN and infinities are not valid Edm.Double values
    if result != result or result in (float("inf"), float("-inf")):
        return 0.0
    return result


def coerce_bool(value: Any) -> bool:
    """Coerce to bool; anything unrecognized becomes False."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    return False


def _truncate_items(values: list[Any], max_length: int, truncated_length: int) -> tuple[list[Any], bool]:
    items: list[Any] = []
    any_truncated = False
    for item in values:
        if isinstance(item, str):
            item, was_truncated = truncate_field(item, max_length, truncated_length)
            any_truncated = any_truncated or was_truncated
        items.append(item)
    return items, any_truncated


_COERCERS = {
    int: coerce_int,
    float: coerce_float,
    bool: coerce_bool,
}


def guard_fields(
    data: dict[str, Any],
    declared_types: dict[str, type],
    max_length: int = MAX_FIELD_LENGTH,
    truncated_length: int = TRUNCATED_FIELD_LENGTH,
) -> dict[str, Any]:
    """
    Apply type coercion and length truncation to a flat document.
    
    Args:
        data: Flat field map (not modified)
        declared_types: Field name -> int/float/bool for scalar fields
        max_length: Longest string accepted unchanged
        truncated_length: Characters kept when truncating
        
    Returns:
        New field map; each truncated field gets a `<field>_Truncated=True`
        companion. String items of collection fields are guarded one by one
        and flag their field.
    """
    guarded: dict[str, Any] = {}
    truncated_fields: list[str] = []
    
    for key, value in data.items():
        coercer = _COERCERS.get(declared_types.get(key))  # type: ignore[arg-type]
        if coercer is not None:
            value = coercer(value)
        elif isinstance(value, str):
            value, was_truncated = truncate_field(value, max_length, truncated_length)
            if was_truncated:
                truncated_fields.append(key)
        elif isinstance(value, list):
            value, was_truncated = _truncate_items(value, max_length, truncated_length)
            if was_truncated:
                truncated_fields.append(key)
        guarded[key] = value

    for key in truncated_fields:
        guarded[f"{key}{TRUNCATED_FLAG_SUFFIX}"] = True

    if truncated_fields:
        logger.warning(
            "Truncated oversized document fields",
            fields=truncated_fields,
            max_length=max_length,
            document_id=data.get("id"),
        )
    
    return guarded
