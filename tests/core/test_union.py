"""Tests for oneOf flattening and common field extraction."""

import pytest

from builders import DECIMAL, MONEY, component, field, tag, union
from model_generator.core.errors import IllegalOperationError, SchemaValidationError
from model_generator.core.resolver import FieldResolver, TypeResolver
from model_generator.core.union import (
    all_leaf_variants,
    extract_common_fields,
    immediate_variants,
    require_discriminator,
    variant_tag,
)


@pytest.fixture
def field_resolver():
    return FieldResolver(TypeResolver())


class TestVariants:
    def test_require_discriminator_on_plain_component(self, card_payment) -> None:
        with pytest.raises(IllegalOperationError) as error:
            require_discriminator(card_payment, "leaf flattening")

        assert error.value.component_name == "CardPayment"
        assert "leaf flattening requires a discriminator" in str(error.value)

    def test_immediate_variants_keep_mapping_order(self, nested_payment) -> None:
        assert [v.name for v in immediate_variants(nested_payment)] == [
            "CardPayment",
            "Transfer",
        ]

    def test_all_leaf_variants_flattens_nested_unions(self, nested_payment) -> None:
        assert [v.name for v in all_leaf_variants(nested_payment)] == [
            "CardPayment",
            "BankPayment",
            "SwiftPayment",
        ]

    def test_all_leaf_variants_of_plain_component_is_illegal(self, card_payment) -> None:
        with pytest.raises(IllegalOperationError):
            all_leaf_variants(card_payment)

    def test_cycle_through_two_unions(self, card_payment) -> None:
        inner_mapping = {"CARD": card_payment}
        inner = union("Inner", "type", inner_mapping)
        outer = union("Outer", "type", {"INNER": inner})
        inner_mapping["OUTER"] = outer

        with pytest.raises(SchemaValidationError, match="Outer -> Inner -> Outer"):
            all_leaf_variants(outer)

    def test_variant_tag(self, card_payment) -> None:
        assert variant_tag(card_payment, "type") == "CARD"

    def test_variant_tag_without_literals(self) -> None:
        plain = component("Plain", field("type"))
        with pytest.raises(SchemaValidationError) as error:
            variant_tag(plain, "type")
        assert error.value.field_name == "type"


class TestCommonFields:
    def test_intersection_of_all_leaves(self, payment, field_resolver) -> None:
        common = extract_common_fields(all_leaf_variants(payment), "type", field_resolver)

        assert list(common) == ["amount"]
        assert common["amount"].abstract
        assert common["amount"].resolved_type == "Money"

    def test_discriminator_field_is_not_common(self, payment, field_resolver) -> None:
        common = extract_common_fields(all_leaf_variants(payment), "type", field_resolver)
        assert "type" not in common

    def test_common_fields_follow_first_seen_order(self, field_resolver) -> None:
        first = component("First", tag("A"), field("b"), field("a"), field("x"))
        second = component("Second", tag("B"), field("a"), field("b"))

        common = extract_common_fields([first, second], "type", field_resolver)
        assert list(common) == ["b", "a"]

    def test_no_leaves_means_no_common_fields(self, field_resolver) -> None:
        assert extract_common_fields([], "type", field_resolver) == {}

    def test_shape_mismatch_reports_both_sides(self, field_resolver) -> None:
        first = component("First", tag("A"), field("amount", MONEY))
        second = component("Second", tag("B"), field("amount", DECIMAL))

        with pytest.raises(SchemaValidationError) as error:
            extract_common_fields([first, second], "type", field_resolver)

        assert str(error.value) == (
            "Common field 'amount' type defined differently in oneOf DTOs: "
            "amount: Money required != amount: BigDecimal required"
        )
        assert error.value.first.resolved_type == "Money"
        assert error.value.second.resolved_type == "BigDecimal"
