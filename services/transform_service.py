"""
Transform engine: transaction document → ERP document.

Walks every mapping entry in declaration order and writes the mapped
value under the entry's target field. Line items are mapped one record
per element of the transaction's line-items array.

The input document is never modified; resolved containers are copied.
"""

import copy
from typing import Any, Iterable, Optional

import structlog

from config import settings
from models.mapping import LineItemMappingEntry, MappingEntry, MappingGroup
from services.mapping_validator import resolve_source
from services.path_resolver import MISSING, lookup
from services.sanitize_service import sanitize

logger = structlog.get_logger(__name__)


def _finalize(entry: Any, value: Any) -> Any:
    """Turn a resolved value into the output value for one entry."""
    if value is MISSING:
        value = None
    elif isinstance(value, (dict, list)):
        value = copy.deepcopy(value)
    if entry.sanitize:
        value = sanitize(value, entry.sanitize_operations)
    return value


def map_entry(entry: MappingEntry, document: Any) -> tuple[bool, Any]:
    """
    Compute the output value of one order-level entry.

    Returns:
        (emitted, value). emitted is False when the entry has neither
        a source nor a literal override.
    """
    if entry.has_override:
        return True, entry.literal_override
    if entry.is_unset:
        return False, None
    return True, _finalize(entry, resolve_source(entry, document))


def map_line_item(item: Any, entries: Iterable[LineItemMappingEntry]) -> dict[str, Any]:
    """
    Map one line item with flat key lookups only.

    Nested paths and virtual address tokens are not resolved here: a
    source of "a.b" looks up the literal key "a.b".
    """
    record: dict[str, Any] = {}
    for entry in entries:
        if entry.has_override:
            record[entry.target_field] = entry.literal_override
            continue
        if entry.is_unset:
            continue
        record[entry.target_field] = _finalize(entry, lookup(item, entry.source_field))
    return record


def transform(
    document: Any,
    mapping_groups: Iterable[MappingGroup],
    line_item_mapping: Iterable[LineItemMappingEntry] = (),
    line_items_field: Optional[str] = None,
    output_key: Optional[str] = None,
) -> dict[str, Any]:
    """
    Build the ERP output document.

    Later entries with the same target field overwrite earlier ones.
    The line-items key is omitted when the source array is empty or
    absent.

    Args:
        document: Transaction record
        mapping_groups: Ordered groups (account, order, ...)
        line_item_mapping: Line-item entries
        line_items_field: Source array key (default from settings)
        output_key: Output key for mapped line items (default from settings)

    Returns:
        Output document keyed by target field names
    """
    line_items_field = line_items_field or settings.line_items_field
    output_key = output_key or settings.line_items_output_key
    line_item_mapping = list(line_item_mapping)

    output: dict[str, Any] = {}
    skipped = 0

    for group in mapping_groups:
        for entry in group.entries:
            emitted, value = map_entry(entry, document)
            if not emitted:
                skipped += 1
                continue
            output[entry.target_field] = value

    items = document.get(line_items_field) if isinstance(document, dict) else None
    if isinstance(items, list) and items:
        output[output_key] = [map_line_item(item, line_item_mapping) for item in items]

    logger.debug(
        "transaction_transformed",
        field_count=len(output),
        skipped=skipped,
        line_items=len(output.get(output_key, [])),
    )
    return output
