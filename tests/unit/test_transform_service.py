"""
Unit tests for the transform engine.

Run: pytest tests/unit/test_transform_service.py -v
"""

import copy

import pytest

from config import default_mapping_configuration
from models.mapping import EMPTY_SOURCE, MappingGroup
from services.transform_service import map_entry, map_line_item, transform
from tests.factories import MappingEntryFactory, TransactionFactory


def _group(*entries, name="order"):
    return MappingGroup(name=name, entries=tuple(entries))


@pytest.fixture
def order_document() -> dict:
    """Full transaction without line items, so only order-level keys are emitted."""
    return TransactionFactory.create(orderLines=[])


class TestTransformScenario:
    """The reference order with a two-field mapping."""

    def test_output(self, scenario_document, scenario_configuration):
        output = transform(
            scenario_document,
            scenario_configuration.groups,
            scenario_configuration.line_items,
        )

        assert output == {
            "Reference ID": "42",
            "Email": "a@b.com",
            "LineItems": [{"sku": "K1"}],
        }

    def test_key_order_follows_entries(self, scenario_document, scenario_configuration):
        output = transform(
            scenario_document,
            scenario_configuration.groups,
            scenario_configuration.line_items,
        )

        assert list(output) == ["Reference ID", "Email", "LineItems"]


class TestOrderLevelEntries:
    """Tests for order-level entry mapping."""

    def test_unset_entry_is_omitted(self):
        output = transform({"id": "1"}, [_group(MappingEntryFactory.create("Order Note", EMPTY_SOURCE))])

        assert output == {}

    def test_missing_path_emits_none(self):
        output = transform({"id": "1"}, [_group(MappingEntryFactory.create("Order Note", "orderNote"))])

        assert output == {"Order Note": None}

    def test_nested_path(self, order_document):
        entry = MappingEntryFactory.create("City", "shippingAddress.city")

        assert transform(order_document, [_group(entry)]) == {"City": "Springfield"}

    def test_virtual_address(self, order_document):
        entry = MappingEntryFactory.create("Delivery Address", "__shipping_address__")

        output = transform(order_document, [_group(entry)])

        assert output["Delivery Address"] == "1 Main St, Springfield, Riverside, 3000, Australia"

    def test_sanitize_applied_when_enabled(self, order_document):
        entry = MappingEntryFactory.create(
            "Account Number", "accountNumber", sanitize=True, sanitize_operations=["trim", "toUpperCase"]
        )

        assert transform(order_document, [_group(entry)]) == {"Account Number": "ACC-100"}

    def test_operations_ignored_when_sanitize_off(self, order_document):
        entry = MappingEntryFactory.create(
            "Account Number", "accountNumber", sanitize=False, sanitize_operations=["trim"]
        )

        assert transform(order_document, [_group(entry)]) == {"Account Number": " acc-100 "}

    def test_zero_total_is_not_converted(self):
        entry = MappingEntryFactory.create(
            "Order Total", "totalPriceWithGst", sanitize=True, sanitize_operations=["stringToNumber"]
        )

        output = transform({"totalPriceWithGst": 0}, [_group(entry)])

        assert output == {"Order Total": 0}

    def test_string_total_converted(self):
        entry = MappingEntryFactory.create(
            "Order Total", "totalPriceWithGst", sanitize=True, sanitize_operations=["stringToNumber"]
        )

        output = transform({"totalPriceWithGst": "19.50"}, [_group(entry)])

        assert output == {"Order Total": 19.5}

    def test_override_wins_over_source(self, order_document):
        entry = MappingEntryFactory.create("Payment Type", "paymentType", literal_override="ACCOUNT")

        assert transform(order_document, [_group(entry)]) == {"Payment Type": "ACCOUNT"}

    def test_override_emitted_without_source(self):
        entry = MappingEntryFactory.create("Warehouse", EMPTY_SOURCE, literal_override="MEL")

        assert transform({}, [_group(entry)]) == {"Warehouse": "MEL"}

    def test_override_emitted_verbatim_with_sanitize(self):
        entry = MappingEntryFactory.create("Warehouse", EMPTY_SOURCE, sanitize=True, literal_override=" mel ")

        assert transform({}, [_group(entry)]) == {"Warehouse": " mel "}

    def test_override_on_every_entry(self, sample_transaction):
        groups = [
            _group(
                MappingEntryFactory.create("A", "id", literal_override="1"),
                MappingEntryFactory.create("B", "emailAddress", literal_override="2"),
                name="account",
            ),
            _group(MappingEntryFactory.create("C", EMPTY_SOURCE, literal_override="3")),
        ]

        output = transform(sample_transaction, groups, line_items_field="none")

        assert output == {"A": "1", "B": "2", "C": "3"}

    def test_later_group_overwrites_same_target(self):
        groups = [
            _group(MappingEntryFactory.create("Email", "emailAddress"), name="account"),
            _group(MappingEntryFactory.create("Email", "billingEmail")),
        ]

        output = transform({"emailAddress": "a@b.com", "billingEmail": "c@d.com"}, groups)

        assert output == {"Email": "c@d.com"}

    def test_object_value_is_copied(self, sample_transaction):
        entry = MappingEntryFactory.create("Card", "cardDetails")

        output = transform(sample_transaction, [_group(entry)])
        output["Card"]["amount"] = 0

        assert sample_transaction["cardDetails"]["amount"] == 19.5

    def test_non_dict_document(self):
        entry = MappingEntryFactory.create("Reference ID", "id")

        assert transform(None, [_group(entry)]) == {"Reference ID": None}


class TestLineItems:
    """Tests for line-item mapping."""

    def test_one_record_per_line(self):
        document = TransactionFactory.create(
            orderLines=[TransactionFactory.line(sku="K1"), TransactionFactory.line(sku="K2")]
        )
        entries = [MappingEntryFactory.line_item("ItemCode", "sku")]

        output = transform(document, [], entries)

        assert output == {"LineItems": [{"ItemCode": "K1"}, {"ItemCode": "K2"}]}

    def test_empty_array_omits_key(self):
        output = transform({"orderLines": []}, [], [MappingEntryFactory.line_item()])

        assert "LineItems" not in output

    def test_absent_array_omits_key(self):
        output = transform({"id": "1"}, [], [MappingEntryFactory.line_item()])

        assert output == {}

    def test_non_list_array_omits_key(self):
        output = transform({"orderLines": "K1"}, [], [MappingEntryFactory.line_item()])

        assert output == {}

    def test_no_line_item_entries_gives_empty_records(self, scenario_document):
        output = transform(scenario_document, [])

        assert output == {"LineItems": [{}]}

    def test_custom_field_and_output_key(self):
        document = {"items": [{"code": "C1"}]}
        entries = [MappingEntryFactory.line_item("Code", "code")]

        output = transform(document, [], entries, line_items_field="items", output_key="Lines")

        assert output == {"Lines": [{"Code": "C1"}]}

    def test_map_line_item_flat_lookup(self):
        item = {"a.b": "flat", "a": {"b": "nested"}}

        record = map_line_item(item, [MappingEntryFactory.line_item("X", "a.b")])

        assert record == {"X": "flat"}

    def test_map_line_item_missing_key(self):
        record = map_line_item({"sku": "K1"}, [MappingEntryFactory.line_item("Size", "size")])

        assert record == {"Size": None}

    def test_map_line_item_unset_and_override(self):
        entries = [
            MappingEntryFactory.line_item("Size", EMPTY_SOURCE),
            MappingEntryFactory.line_item("Warehouse", EMPTY_SOURCE, literal_override="MEL"),
        ]

        assert map_line_item({"sku": "K1"}, entries) == {"Warehouse": "MEL"}

    def test_map_line_item_sanitize(self):
        entry = MappingEntryFactory.line_item(
            "Quantity", "quantity", sanitize=True, sanitize_operations=["stringToNumber"]
        )

        assert map_line_item({"quantity": "3"}, [entry]) == {"Quantity": 3}


class TestMapEntry:
    """Tests for map_entry()"""

    def test_unset(self):
        assert map_entry(MappingEntryFactory.create("X", EMPTY_SOURCE), {}) == (False, None)

    def test_source(self):
        assert map_entry(MappingEntryFactory.create("X", "id"), {"id": 7}) == (True, 7)


class TestTransformDefaults:
    """Full default configuration over a realistic transaction."""

    def test_default_mapping(self, sample_transaction):
        configuration = default_mapping_configuration()

        output = transform(sample_transaction, configuration.groups, configuration.line_items)

        assert output["Account Number"] == "ACC-100"
        assert output["Email"] == "jane@example.com"
        assert output["Delivery Address"] == "1 Main St, Springfield, Riverside, 3000, Australia"
        assert output["Order Total"] == 19.5
        assert "Pickup Address" not in output
        assert output["LineItems"] == [{
            "ItemCode": "K1",
            "Style": "S1",
            "Quantity": 2,
            "UnitPrice": 5,
            "Variant": "Matt",
            "Size": "60x60",
        }]

    def test_input_not_mutated(self, sample_transaction):
        snapshot = copy.deepcopy(sample_transaction)
        configuration = default_mapping_configuration()

        transform(sample_transaction, configuration.groups, configuration.line_items)

        assert sample_transaction == snapshot

    def test_deterministic(self, sample_transaction):
        configuration = default_mapping_configuration()

        first = transform(sample_transaction, configuration.groups, configuration.line_items)
        second = transform(sample_transaction, configuration.groups, configuration.line_items)

        assert first == second
