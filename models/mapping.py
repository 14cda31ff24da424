"""
Mapping schemas for the ERP field-mapping wizard.

A mapping entry binds one ERP target field to a source field of a
transaction document, with optional sanitization, a literal override,
and validation flags.

Entries are immutable. Every edit goes through a copy-on-write builder
so the invariants below hold for every instance:
    - sanitize operations are deduplicated
    - stringToNumber and numberToString are never both active
    - a non-blank literal override leaves no sanitize operations
"""

from enum import Enum
from typing import Any, Iterable, Optional

from pydantic import ConfigDict, Field, field_validator, model_validator

from exceptions import MappingEntryNotFoundError
from models.base import CamelSchema


# Source token meaning "no source selected"
EMPTY_SOURCE = "__empty__"


class SanitizeOperation(str, Enum):
    """Named value transformations, applied in the order listed on an entry."""
    TRIM = "trim"
    TO_UPPER_CASE = "toUpperCase"
    TO_LOWER_CASE = "toLowerCase"
    STRING_TO_NUMBER = "stringToNumber"
    NUMBER_TO_STRING = "numberToString"


# Operation -> the operation it cancels
EXCLUSIVE_OPERATIONS = {
    SanitizeOperation.STRING_TO_NUMBER: SanitizeOperation.NUMBER_TO_STRING,
    SanitizeOperation.NUMBER_TO_STRING: SanitizeOperation.STRING_TO_NUMBER,
}


class DeclaredType(str, Enum):
    """Value type the ERP expects for a target field."""
    STRING = "string"
    NUMBER = "number"
    DATE = "date"
    ARRAY = "array"


class VirtualAddress(str, Enum):
    """Synthetic source fields resolved by address concatenation."""
    GENERIC = "__address__"
    PICKUP = "__pickup_address__"
    SHIPPING = "__shipping_address__"
    INVOICE = "__invoice_address__"


def add_operation(
    operations: Iterable[SanitizeOperation],
    operation: SanitizeOperation,
) -> tuple[SanitizeOperation, ...]:
    """
    Append an operation, dropping duplicates and its exclusive counterpart.

    Args:
        operations: Current ordered operations
        operation: Operation to activate

    Returns:
        New ordered tuple of operations
    """
    operation = SanitizeOperation(operation)
    cancelled = EXCLUSIVE_OPERATIONS.get(operation)
    kept = [op for op in operations if op != operation and op != cancelled]
    kept.append(operation)
    return tuple(kept)


def remove_operation(
    operations: Iterable[SanitizeOperation],
    operation: SanitizeOperation,
) -> tuple[SanitizeOperation, ...]:
    """Drop an operation if present."""
    operation = SanitizeOperation(operation)
    return tuple(op for op in operations if op != operation)


def normalize_operations(
    operations: Iterable[Any],
) -> tuple[SanitizeOperation, ...]:
    """
    Build a valid operation sequence from raw input.

    Operations are added one by one, so a later exclusive operation
    replaces an earlier one and repeats keep their first position.
    """
    result: tuple[SanitizeOperation, ...] = ()
    for op in operations:
        op = SanitizeOperation(op)
        if op in result:
            continue
        result = add_operation(result, op)
    return result


def override_active(literal_override: Optional[str]) -> bool:
    """True when a literal override is non-blank."""
    return bool(literal_override and literal_override.strip())


class _MappingEntryBase(CamelSchema):
    """Fields and builders shared by order-level and line-item entries."""

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=False,
    )

    target_field: str = Field(..., min_length=1, description="ERP target field name")
    source_field: str = Field(EMPTY_SOURCE, description="Source path, virtual token, or __empty__")
    sanitize: bool = Field(False, description="Apply sanitize operations")
    sanitize_operations: tuple[SanitizeOperation, ...] = Field(
        default=(),
        description="Ordered sanitize operations"
    )
    literal_override: str = Field("", description="User defined value; wins when non-blank")
    required: bool = Field(False, description="ERP requires this field")
    declared_type: DeclaredType = Field(DeclaredType.STRING, description="Expected value type")

    @model_validator(mode="before")
    @classmethod
    def _override_clears_operations(cls, data: Any) -> Any:
        if isinstance(data, dict):
            # pydantic reads the alias before the field name
            override = data.get("literalOverride", data.get("literal_override"))
            if isinstance(override, str) and override_active(override):
                data = {
                    key: value for key, value in data.items()
                    if key not in ("sanitize_operations", "sanitizeOperations")
                }
        return data

    @field_validator("sanitize_operations", mode="before")
    @classmethod
    def _normalize_operations(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, (list, tuple)):
            return normalize_operations(value)
        return value

    # ===================
    # STATE
    # ===================

    @property
    def is_unset(self) -> bool:
        """No source selected."""
        return self.source_field == EMPTY_SOURCE

    @property
    def has_override(self) -> bool:
        return override_active(self.literal_override)

    @property
    def is_mapped(self) -> bool:
        """Counts toward the "N/M mapped" progress."""
        return self.has_override or not self.is_unset

    # ===================
    # BUILDERS
    # ===================

    def with_source(self, source_field: str):
        """Select a source field (or EMPTY_SOURCE to clear)."""
        return self.model_copy(update={"source_field": source_field})

    def with_sanitize(self, enabled: bool):
        return self.model_copy(update={"sanitize": enabled})

    def with_required(self, required: bool):
        return self.model_copy(update={"required": required})

    def with_operations(self, operations: Iterable[Any]):
        """
        Replace the operation list.

        Ignored while a literal override is active.
        """
        if self.has_override:
            return self
        return self.model_copy(update={"sanitize_operations": normalize_operations(operations)})

    def with_operation_toggled(self, operation: SanitizeOperation):
        """
        Switch one operation on or off.

        Turning on stringToNumber removes numberToString and vice versa.
        """
        if self.has_override:
            return self
        operation = SanitizeOperation(operation)
        if operation in self.sanitize_operations:
            operations = remove_operation(self.sanitize_operations, operation)
        else:
            operations = add_operation(self.sanitize_operations, operation)
        return self.model_copy(update={"sanitize_operations": operations})

    def with_literal_override(self, literal_override: str):
        """Set the user defined value; a non-blank value clears operations."""
        update: dict[str, Any] = {"literal_override": literal_override or ""}
        if override_active(literal_override):
            update["sanitize_operations"] = ()
        return self.model_copy(update=update)

    def with_changes(self, **changes: Any):
        """
        Apply arbitrary field changes with full re-validation.

        Changes may use field names or their camelCase aliases.
        """
        fields = type(self).model_fields
        names = {field.alias: name for name, field in fields.items() if field.alias}
        data = self.model_dump()
        for key, value in changes.items():
            data[names.get(key, key)] = value
        return type(self).model_validate(data)


class MappingEntry(_MappingEntryBase):
    """Order/account-level mapping entry; sources may be nested paths."""

    email_validation: bool = Field(False, description="Resolved value must be an email")


class LineItemMappingEntry(_MappingEntryBase):
    """Line-item mapping entry; sources are flat keys of one line item."""


class MappingGroup(CamelSchema):
    """Named, ordered group of mapping entries (e.g., account, order)."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    entries: tuple[MappingEntry, ...] = ()

    @field_validator("entries")
    @classmethod
    def _unique_targets(cls, entries: tuple[MappingEntry, ...]) -> tuple[MappingEntry, ...]:
        seen = set()
        for entry in entries:
            if entry.target_field in seen:
                raise ValueError(f"Duplicate target field: {entry.target_field}")
            seen.add(entry.target_field)
        return entries

    def replace_entry(self, index: int, entry: MappingEntry) -> "MappingGroup":
        if index < 0 or index >= len(self.entries):
            raise MappingEntryNotFoundError(self.name, index)
        entries = list(self.entries)
        entries[index] = entry
        return MappingGroup(name=self.name, entries=tuple(entries))


class MappingConfiguration(CamelSchema):
    """
    Complete mapping for one transaction editing session.

    Updates are index-addressed and return a new configuration.
    """

    model_config = ConfigDict(frozen=True)

    groups: tuple[MappingGroup, ...] = ()
    line_items: tuple[LineItemMappingEntry, ...] = ()

    def group(self, name: str) -> MappingGroup:
        for group in self.groups:
            if group.name == name:
                return group
        raise MappingEntryNotFoundError(name)

    def all_entries(self) -> list[MappingEntry]:
        """Entries of every group, in declaration order."""
        return [entry for group in self.groups for entry in group.entries]

    def update_entry(self, group_name: str, index: int, **changes: Any) -> "MappingConfiguration":
        """
        Return a configuration with one entry changed.

        Raises:
            MappingEntryNotFoundError: Unknown group or index out of range
        """
        target = self.group(group_name)
        if index < 0 or index >= len(target.entries):
            raise MappingEntryNotFoundError(group_name, index)
        updated = target.replace_entry(index, target.entries[index].with_changes(**changes))
        groups = tuple(updated if g.name == group_name else g for g in self.groups)
        return self.model_copy(update={"groups": groups})

    def update_line_item(self, index: int, **changes: Any) -> "MappingConfiguration":
        """Return a configuration with one line-item entry changed."""
        if index < 0 or index >= len(self.line_items):
            raise MappingEntryNotFoundError("line_items", index)
        line_items = list(self.line_items)
        line_items[index] = line_items[index].with_changes(**changes)
        return self.model_copy(update={"line_items": tuple(line_items)})


# ===================
# API SCHEMAS
# ===================

class MappingProgress(CamelSchema):
    """The "N/M mapped" counter over required entries."""

    mapped: int = Field(..., ge=0)
    total: int = Field(..., ge=0)

    @property
    def complete(self) -> bool:
        return self.mapped == self.total


class MappingRequest(CamelSchema):
    """A transaction document plus the session's mapping configuration."""

    model_config = ConfigDict(str_strip_whitespace=False)

    document: dict[str, Any] = Field(default_factory=dict, description="Transaction record")
    configuration: MappingConfiguration = Field(default_factory=MappingConfiguration)


class ValidationResponse(CamelSchema):
    errors: list[str]
    progress: MappingProgress


class SourceOptions(CamelSchema):
    """Selector options shown for a transaction."""

    sources: list[str]
    line_item_sources: list[str]
