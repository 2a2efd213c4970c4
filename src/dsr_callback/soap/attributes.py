"""Attribute normalization for access-point notifications.

Controllers send ``accessPointAttributes/attributes`` either as one entry or
as a sequence, and the entry keys appear as ``name``/``Name``/``NAME`` (and
likewise for value).
"""

from typing import Any, Iterable, Mapping, Optional

from .envelope import TEXT_KEY

NAME_KEYS = ("name", "Name", "NAME")
VALUE_KEYS = ("value", "Value", "VALUE")


def as_list(value: Any) -> list[Any]:
    """Coerce a repeatable element into a list.

    Args:
        value: Parsed element value (None, a single entry, or a list)

    Returns:
        [] for None, the list itself, or a one-element list
    """
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def text_of(value: Any) -> Optional[str]:
    """Return the text carried by a parsed element value.

    Elements that carry XML attributes are parsed as dicts with their text
    under ``"_"``; repeated elements use the first occurrence.
    """
    if isinstance(value, list):
        value = value[0] if value else None
    if isinstance(value, dict):
        value = value.get(TEXT_KEY)
    if value is None:
        return None
    return str(value)


def first_present(entry: Mapping[str, Any], keys: Iterable[str]) -> Optional[str]:
    """Return the first non-empty value among candidate keys, in order.

    Example:
        >>> first_present({"Name": "A", "NAME": "B"}, NAME_KEYS)
        'A'
    """
    for key in keys:
        value = text_of(entry.get(key))
        if value:
            return value
    return None


def normalize_attributes(raw: Any) -> dict[str, str]:
    """Build an attribute map from one entry or a sequence of entries.

    Entries without a resolvable name are skipped. A later entry with an
    already seen name overwrites the earlier one. A missing value becomes
    an empty string.

    Args:
        raw: Parsed ``attributes`` element value

    Returns:
        Mapping of attribute name to value
    """
    attributes: dict[str, str] = {}
    for entry in as_list(raw):
        if not isinstance(entry, dict):
            continue
        name = first_present(entry, NAME_KEYS)
        if not name:
            continue
        attributes[name] = first_present(entry, VALUE_KEYS) or ""
    return attributes
