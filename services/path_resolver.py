"""
Dotted-path access into transaction documents.

Transaction JSON has no fixed schema, so lookups never raise: a path
that leaves the nested objects resolves to MISSING.
"""

from typing import Any, Optional

import structlog

logger = structlog.get_logger(__name__)


class _Missing:
    """Sentinel for a path that addresses nothing."""

    _instance: Optional["_Missing"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


def resolve(document: Any, path: str) -> Any:
    """
    Resolve a dot-separated path against a nested document.

    Walks key by key. Stops with MISSING as soon as an intermediate
    value is not a dict (None, list, scalar) or a key is absent.
    A key present with a null value resolves to None.

    Args:
        document: Transaction record
        path: e.g. "shippingAddress.city"

    Returns:
        The addressed value, or MISSING
    """
    current = document
    for key in path.split("."):
        if not isinstance(current, dict) or key not in current:
            return MISSING
        current = current[key]
    return current


def lookup(record: Any, key: str) -> Any:
    """Flat single-key lookup; dots are part of the key."""
    if not isinstance(record, dict) or key not in record:
        return MISSING
    return record[key]


def enumerate_paths(document: Any, array_field: str = "orderLines") -> list[str]:
    """
    List the addressable leaf paths of a document.

    Nested dicts are descended into; lists are leaves. The one
    exception is array_field, whose FIRST element's keys are emitted
    as "<array_field>.<key>" at the position of array_field. Later
    elements are never inspected.

    Order follows key insertion order at every level.

    Args:
        document: Transaction record
        array_field: Key of the line-items array

    Returns:
        Ordered list of path strings
    """
    paths: list[str] = []
    if isinstance(document, dict):
        _walk(document, "", array_field, paths)
    logger.debug("paths_enumerated", path_count=len(paths))
    return paths


def _walk(node: dict, prefix: str, array_field: str, paths: list[str]) -> None:
    for key, value in node.items():
        path = f"{prefix}{key}"
        if not prefix and key == array_field and isinstance(value, list):
            if value and isinstance(value[0], dict):
                paths.extend(f"{path}.{item_key}" for item_key in value[0])
            continue
        if isinstance(value, dict):
            _walk(value, f"{path}.", array_field, paths)
        else:
            paths.append(path)
