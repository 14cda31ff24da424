"""
Mapping validation against a concrete transaction.

Findings are reported as display strings, never raised. Each message
starts with the entry's target field followed by ": ".

Only email-validated entries are checked by default. Plain required
entries surface through mapping_progress() ("N/M mapped"); pass
enforce_required=True to report them as errors as well.
"""

import re
from typing import Any, Iterable

import structlog

from models.mapping import MappingEntry, MappingProgress
from services.address_service import resolve_virtual
from services.path_resolver import MISSING, resolve
from services.sanitize_service import sanitize
from utils.text_utils import is_blank, to_text

logger = structlog.get_logger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(value: Any) -> bool:
    """
    Simplified RFC check: local@domain.tld with no whitespace.

    Surrounding whitespace fails the check.
    """
    if not isinstance(value, str):
        return False
    return EMAIL_PATTERN.match(value) is not None


def resolve_source(entry: MappingEntry, document: Any) -> Any:
    """Resolve an entry's source, concatenating virtual addresses."""
    virtual = resolve_virtual(entry.source_field, document)
    if virtual is not None:
        return virtual
    return resolve(document, entry.source_field)


def _check_email_entry(entry: MappingEntry, document: Any) -> list[str]:
    field = entry.target_field

    if entry.has_override:
        if not is_valid_email(entry.literal_override):
            return [f"{field}: Invalid email format in user defined value"]
        return []

    if entry.is_unset:
        return [f"{field}: No source field selected"]

    source = entry.source_field
    value = resolve_source(entry, document)

    if value is MISSING or value is None:
        return [f'{field}: Source field "{source}" has no value']

    text = to_text(value) if not isinstance(value, (dict, list)) else None
    if text is not None and is_blank(text):
        return [f'{field}: Source field "{source}" is empty']

    # Format is checked on the value the transform emits
    if entry.sanitize:
        value = sanitize(value, entry.sanitize_operations)
    emitted = to_text(value) if not isinstance(value, (dict, list)) else None
    if not is_valid_email(emitted):
        return [f'{field}: Source field "{source}" does not contain a valid email']

    return []


def _check_required_entry(entry: MappingEntry) -> list[str]:
    if entry.required and entry.is_unset and not entry.has_override:
        return [f"{entry.target_field}: No source field selected"]
    return []


def validate(
    entries: Iterable[MappingEntry],
    document: Any,
    enforce_required: bool = False,
) -> list[str]:
    """
    Validate mapping entries against a transaction.

    Args:
        entries: Entries of all groups, in declaration order
        document: Transaction record
        enforce_required: Also report required entries without a source

    Returns:
        Ordered error messages; empty when the mapping is valid
    """
    errors: list[str] = []
    checked = 0

    for entry in entries:
        if entry.email_validation:
            checked += 1
            errors.extend(_check_email_entry(entry, document))
        elif enforce_required:
            checked += 1
            errors.extend(_check_required_entry(entry))

    logger.debug(
        "mapping_validated",
        checked=checked,
        error_count=len(errors),
        enforce_required=enforce_required,
    )
    return errors


def mapping_progress(entries: Iterable[Any]) -> MappingProgress:
    """
    Count required entries that have a source or a literal override.

    Returns:
        MappingProgress(mapped=N, total=M) for the "N/M mapped" counter
    """
    required = [entry for entry in entries if entry.required]
    mapped = sum(1 for entry in required if entry.is_mapped)
    return MappingProgress(mapped=mapped, total=len(required))
