"""
Address concatenation for virtual address sources.

The ERP takes single-line addresses while transactions carry them as
nested objects. A virtual address token selects which object to read
and which parts to join.
"""

from typing import Any, Optional

from models.mapping import VirtualAddress
from utils.text_utils import join_non_blank

ADDRESS_PARTS = ["streetAddress", "city", "suburb", "postCode", "country"]
PICKUP_PARTS = ["pickupAddress", "pickupCity", "pickupSuburb", "pickupPostCode"]

# kind -> (backing object key, ordered parts)
ADDRESS_SOURCES: dict[VirtualAddress, tuple[str, list[str]]] = {
    VirtualAddress.GENERIC: ("shippingAddress", ADDRESS_PARTS),
    VirtualAddress.PICKUP: ("orderPickupDetails", PICKUP_PARTS),
    VirtualAddress.SHIPPING: ("shippingAddress", ADDRESS_PARTS),
    VirtualAddress.INVOICE: ("invoiceAddress", ADDRESS_PARTS),
}


def as_virtual_address(token: Any) -> Optional[VirtualAddress]:
    """Return the VirtualAddress for a source token, or None."""
    if isinstance(token, VirtualAddress):
        return token
    try:
        return VirtualAddress(token)
    except ValueError:
        return None


def is_virtual_address(token: Any) -> bool:
    return as_virtual_address(token) is not None


def concatenate(kind: VirtualAddress, document: Any) -> str:
    """
    Join the non-empty parts of one address object.

    Args:
        kind: Which address to build
        document: Transaction record

    Returns:
        e.g. "1 Main St, Springfield, 3000, Australia", or "" when the
        backing object is absent
    """
    kind = VirtualAddress(kind)
    object_key, parts = ADDRESS_SOURCES[kind]

    source = document.get(object_key) if isinstance(document, dict) else None
    if not isinstance(source, dict):
        return ""

    return join_non_blank([source.get(part) for part in parts])


def resolve_virtual(token: Any, document: Any) -> Optional[str]:
    """Concatenate for a virtual token; None when the token is not virtual."""
    kind = as_virtual_address(token)
    if kind is None:
        return None
    return concatenate(kind, document)
