"""
Identifier matching.

Finds the field value(s) an integration needs to look a lead up in the
remote service. Field names are matched by case-sensitive substring
containment, first match wins.
"""
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union

from .base import IdentifierSpec

CORE_GROUP = 'core'

IdentifierValue = Union[Any, Dict[str, Any]]


def field_value(value: Any) -> Any:
    """Unwrap the ``{'value': ...}`` shape lead fields may come in."""
    if isinstance(value, Mapping) and 'value' in value:
        return value['value']
    return value


def is_grouped(fields: Mapping[str, Any]) -> bool:
    """Fields grouped as ``{'core': {...}, 'social': {...}}``."""
    return CORE_GROUP in fields and isinstance(fields[CORE_GROUP], Mapping)


def match_single(spec: str, fields: Mapping[str, Any]) -> Tuple[bool, Any]:
    """
    Match one identifier field.

    Returns:
        ``(matched, value)``
    """
    for name, value in fields.items():
        if name == spec or spec in name:
            return True, field_value(value)
    return False, None


def match_multiple(
    hints: Sequence[str],
    fields: Mapping[str, Any],
    collected: Dict[str, Any]
) -> Tuple[bool, Dict[str, Any]]:
    """
    Collect one field per hint.

    Args:
        hints: Partial field names, in order
        fields: Field name to value mapping to scan
        collected: Values already collected (from earlier groups)

    Returns:
        ``(complete, collected)`` where ``collected`` is a new dict
    """
    collected = dict(collected)
    if len(collected) >= len(hints):
        return True, collected

    for name, raw_value in fields.items():
        value = field_value(raw_value)
        for hint in hints:
            if hint in name and value not in collected.values():
                collected[name] = value
                if len(collected) == len(hints):
                    return True, collected
    return False, collected


def resolve_identifier(
    identifier_spec: IdentifierSpec,
    fields: Mapping[str, Any]
) -> Optional[IdentifierValue]:
    """
    Resolve the identifying value(s) for an integration.

    Args:
        identifier_spec: A field name, or a sequence of partial field names
        fields: Lead field values, flat or grouped by field group

    Returns:
        The identifier value for a single spec, a mapping of field name to
        value for a multi spec, or None when nothing matches
    """
    if not identifier_spec or not fields:
        return None

    groups = list(fields.values()) if is_grouped(fields) else [fields]
    groups = [group for group in groups if isinstance(group, Mapping)]

    if isinstance(identifier_spec, str):
        for group in groups:
            matched, value = match_single(identifier_spec, group)
            if matched:
                return value
        return None

    hints = list(identifier_spec)
    collected: Dict[str, Any] = {}
    for group in groups:
        complete, collected = match_multiple(hints, group, collected)
        if complete:
            break

    return collected or None
