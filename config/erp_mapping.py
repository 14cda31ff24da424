"""
Default ERP mapping configuration.

Every call builds fresh entries, so each editing session starts from
the defaults and nothing is shared between sessions.
"""

from models.mapping import (
    EMPTY_SOURCE,
    DeclaredType,
    LineItemMappingEntry,
    MappingConfiguration,
    MappingEntry,
    MappingGroup,
    SanitizeOperation,
    VirtualAddress,
)

ACCOUNT_GROUP = "account"
ORDER_GROUP = "order"


def default_account_entries() -> list[MappingEntry]:
    """Customer account fields."""
    return [
        MappingEntry(
            target_field="Account Number",
            source_field="accountNumber",
            sanitize=True,
            sanitize_operations=[SanitizeOperation.TRIM, SanitizeOperation.TO_UPPER_CASE],
            required=True,
        ),
        MappingEntry(target_field="Customer ID", source_field="customerId"),
        MappingEntry(target_field="First Name", source_field="shippingAddress.firstName"),
        MappingEntry(target_field="Last Name", source_field="shippingAddress.lastName"),
        MappingEntry(target_field="Business Name", source_field="shippingAddress.businessName"),
        MappingEntry(
            target_field="Email",
            source_field="emailAddress",
            sanitize=True,
            sanitize_operations=[SanitizeOperation.TRIM, SanitizeOperation.TO_LOWER_CASE],
            required=True,
            email_validation=True,
        ),
        MappingEntry(target_field="Contact Number", source_field="shippingAddress.contactNumber"),
    ]


def default_order_entries() -> list[MappingEntry]:
    """Order header fields."""
    return [
        MappingEntry(target_field="Reference ID", source_field="id", required=True),
        MappingEntry(
            target_field="Purchase Order",
            source_field="purchaseOrderReference",
            sanitize=True,
            sanitize_operations=[SanitizeOperation.TRIM],
            required=True,
        ),
        MappingEntry(target_field="Order Date", source_field="date", declared_type=DeclaredType.DATE),
        MappingEntry(target_field="Payment Type", source_field="paymentType"),
        MappingEntry(
            target_field="Delivery Address",
            source_field=VirtualAddress.SHIPPING.value,
            required=True,
        ),
        MappingEntry(target_field="Invoice Address", source_field=VirtualAddress.INVOICE.value),
        MappingEntry(target_field="Pickup Address", source_field=EMPTY_SOURCE),
        MappingEntry(target_field="Delivery Instructions", source_field="deliveryInstructions"),
        MappingEntry(target_field="Order Note", source_field="orderNote"),
        MappingEntry(
            target_field="Freight",
            source_field="freightCharge",
            declared_type=DeclaredType.NUMBER,
        ),
        MappingEntry(target_field="GST", source_field="gst", declared_type=DeclaredType.NUMBER),
        MappingEntry(
            target_field="Order Total",
            source_field="totalPriceWithGst",
            sanitize=True,
            sanitize_operations=[SanitizeOperation.STRING_TO_NUMBER],
            required=True,
            declared_type=DeclaredType.NUMBER,
        ),
    ]


def default_line_item_entries() -> list[LineItemMappingEntry]:
    """Fields of one order line."""
    return [
        LineItemMappingEntry(
            target_field="ItemCode",
            source_field="sku",
            sanitize=True,
            sanitize_operations=[SanitizeOperation.TRIM, SanitizeOperation.TO_UPPER_CASE],
            required=True,
        ),
        LineItemMappingEntry(target_field="Style", source_field="style"),
        LineItemMappingEntry(
            target_field="Quantity",
            source_field="quantity",
            sanitize=True,
            sanitize_operations=[SanitizeOperation.STRING_TO_NUMBER],
            required=True,
            declared_type=DeclaredType.NUMBER,
        ),
        LineItemMappingEntry(
            target_field="UnitPrice",
            source_field="unitPrice",
            declared_type=DeclaredType.NUMBER,
        ),
        LineItemMappingEntry(target_field="Variant", source_field="variant"),
        LineItemMappingEntry(target_field="Size", source_field="size"),
    ]


def default_mapping_configuration() -> MappingConfiguration:
    """Fresh configuration with the account, order and line-item defaults."""
    return MappingConfiguration(
        groups=(
            MappingGroup(name=ACCOUNT_GROUP, entries=tuple(default_account_entries())),
            MappingGroup(name=ORDER_GROUP, entries=tuple(default_order_entries())),
        ),
        line_items=tuple(default_line_item_entries()),
    )
