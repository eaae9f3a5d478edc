"""Unit tests for the component compiler."""

import pytest

from builders import DECIMAL, LIST, MONEY, STRING, component, field, tag, union
from model_generator.core.compiler import ComponentCompiler, compile_component
from model_generator.core.definition import TypeDescriptor
from model_generator.core.descriptors import (
    EnumDescriptor,
    ResolvedField,
    SingleClassDescriptor,
    UnionClassDescriptor,
)
from model_generator.core.errors import IllegalOperationError, SchemaValidationError

# ###############
# Test Helpers
# ###############


def _names(fields):
    return [f.name for f in fields]


def _leaf(descriptor, name):
    return next(leaf for leaf in descriptor.iter_leaves() if leaf.name == name)


# ###############
# Single Classes
# ###############


class TestSingleClass:
    def test_plain_component_compiles_to_single_class(self) -> None:
        address = component("Address", field("street"), field("zip", required=False))
        descriptor = ComponentCompiler().compile(address)

        assert isinstance(descriptor, SingleClassDescriptor)
        assert descriptor.name == "Address"
        assert descriptor.qualifier == "com.acme"
        assert descriptor.fields == (
            ResolvedField("street", "String", None, True),
            ResolvedField("zip", "String", None, False),
        )

    def test_imports_are_sorted_and_include_generics(self) -> None:
        order = component(
            "Order",
            field("total", MONEY),
            field("lines", LIST, generics=[TypeDescriptor("com.acme.Line")]),
            field("note"),
        )
        descriptor = ComponentCompiler().compile(order)

        assert descriptor.imports == (
            "com.acme.Line",
            "com.acme.Money",
            "kotlin.String",
            "kotlin.collections.List",
        )
        assert descriptor.fields[1].resolved_type == "List<Line>"

    def test_enum_fields_of_plain_component_are_synthesized(self) -> None:
        order = component("Order", field("status", enum=["NEW", "PAID"]))
        descriptor = ComponentCompiler().compile(order)

        assert descriptor.fields[0].enum == EnumDescriptor("Status", ("NEW", "PAID"))
        assert descriptor.fields[0].resolved_type == "Status"
        assert descriptor.enums == (EnumDescriptor("Status", ("NEW", "PAID")),)

    def test_meta_fields_are_skipped_but_imported(self) -> None:
        order = component(
            "Order", field("@meta", TypeDescriptor("com.acme.Meta")), field("id")
        )
        descriptor = ComponentCompiler().compile(order)

        assert _names(descriptor.fields) == ["id"]
        assert "com.acme.Meta" in descriptor.imports

    def test_compile_union_on_plain_component_is_illegal(self) -> None:
        address = component("Address", field("street"))
        with pytest.raises(IllegalOperationError, match="Address"):
            ComponentCompiler().compile_union(address, with_inheritance=True)


# ###############
# Unions
# ###############


class TestPaymentUnion:
    def test_inheritance_lifts_common_fields(self, payment) -> None:
        descriptor = ComponentCompiler().compile(payment, with_inheritance=True)

        assert isinstance(descriptor, UnionClassDescriptor)
        assert descriptor.discriminator_field_name == "type"
        assert descriptor.common_fields == (
            ResolvedField("amount", "Money", None, True, abstract=True),
        )

    def test_leaf_fields_are_overridden_first(self, payment) -> None:
        descriptor = ComponentCompiler().compile(payment, with_inheritance=True)
        card, bank = descriptor.subclasses

        assert _names(card.fields) == ["amount", "cardId"]
        assert [f.overridden for f in card.fields] == [True, False]
        assert _names(bank.fields) == ["amount", "iban"]
        assert [f.overridden for f in bank.fields] == [True, False]

    def test_override_partition_keeps_declaration_order(self) -> None:
        first = component(
            "First", tag("A"), field("x"), field("amount", MONEY), field("y"), field("z")
        )
        second = component("Second", tag("B"), field("z"), field("amount", MONEY))
        descriptor = ComponentCompiler().compile(
            union("U", "type", {"A": first, "B": second}), with_inheritance=True
        )

        assert _names(descriptor.common_fields) == ["amount", "z"]
        leaf = _leaf(descriptor, "First")
        assert [(f.name, f.overridden) for f in leaf.fields] == [
            ("amount", True),
            ("z", True),
            ("x", False),
            ("y", False),
        ]
        leaf = _leaf(descriptor, "Second")
        assert [(f.name, f.overridden) for f in leaf.fields] == [
            ("z", True),
            ("amount", True),
        ]

    def test_variant_mapping(self, payment) -> None:
        descriptor = ComponentCompiler().compile(payment, with_inheritance=True)
        assert list(descriptor.variant_mapping.items()) == [
            ("CardPayment", "CARD"),
            ("BankPayment", "BANK"),
        ]

    def test_without_inheritance_fields_stay_on_variants(self, payment) -> None:
        descriptor = ComponentCompiler().compile(payment, with_inheritance=False)

        assert descriptor.common_fields == ()
        card, bank = descriptor.subclasses
        assert card.fields == (
            ResolvedField("amount", "Money", None, True),
            ResolvedField("cardId", "String", None, True),
        )
        assert not any(f.overridden for f in bank.fields)

    def test_conflicting_common_field_fails(self, bank_payment) -> None:
        card = component(
            "CardPayment", tag("CARD"), field("amount", DECIMAL), field("cardId")
        )
        payment = union("Payment", "type", {"CARD": card, "BANK": bank_payment})

        with pytest.raises(SchemaValidationError) as error:
            ComponentCompiler().compile(payment, with_inheritance=True)

        assert error.value.field_name == "amount"
        assert "BigDecimal" in str(error.value)
        assert "Money" in str(error.value)

    def test_conflicting_field_is_fine_without_inheritance(self, bank_payment) -> None:
        card = component(
            "CardPayment", tag("CARD"), field("amount", DECIMAL), field("cardId")
        )
        payment = union("Payment", "type", {"CARD": card, "BANK": bank_payment})

        descriptor = ComponentCompiler().compile(payment, with_inheritance=False)
        assert descriptor.subclasses[0].fields[0].resolved_type == "BigDecimal"

    def test_required_flag_mismatch_is_a_conflict(self, card_payment) -> None:
        bank = component(
            "BankPayment", tag("BANK"), field("amount", MONEY, required=False), field("iban")
        )
        payment = union("Payment", "type", {"CARD": card_payment, "BANK": bank})

        with pytest.raises(SchemaValidationError, match="amount"):
            ComponentCompiler().compile(payment, with_inheritance=True)

    def test_union_imports_cover_variants(self, payment) -> None:
        descriptor = ComponentCompiler().compile(payment, with_inheritance=True)
        assert descriptor.imports == ("com.acme.Money", "kotlin.String")

    def test_discriminator_never_emitted(self, payment) -> None:
        descriptor = ComponentCompiler().compile(payment, with_inheritance=True)

        assert "type" not in _names(descriptor.common_fields)
        for leaf in descriptor.iter_leaves():
            assert "type" not in _names(leaf.fields)

    def test_common_enum_field_is_shared(self) -> None:
        first = component("First", tag("A"), field("status", enum=["ON", "OFF"]))
        second = component("Second", tag("B"), field("status", enum=["ON", "OFF"]))
        descriptor = ComponentCompiler().compile(
            union("Switch", "type", {"A": first, "B": second}), with_inheritance=True
        )

        (status,) = descriptor.common_fields
        assert status.enum == EnumDescriptor("Status", ("ON", "OFF"))
        assert status.abstract

    def test_different_enum_literals_conflict(self) -> None:
        first = component("First", tag("A"), field("status", enum=["ON", "OFF"]))
        second = component("Second", tag("B"), field("status", enum=["ON"]))

        with pytest.raises(SchemaValidationError, match="status"):
            ComponentCompiler().compile(
                union("Switch", "type", {"A": first, "B": second}), with_inheritance=True
            )


class TestNestedUnion:
    def test_nested_union_is_compiled_recursively(self, nested_payment) -> None:
        descriptor = ComponentCompiler().compile(nested_payment, with_inheritance=True)

        card, transfer = descriptor.subclasses
        assert card.name == "CardPayment"
        assert isinstance(transfer, UnionClassDescriptor)
        assert transfer.discriminator_field_name == "kind"
        assert [s.name for s in transfer.subclasses] == ["BankPayment", "SwiftPayment"]

    def test_mapping_is_flattened_across_nested_unions(self, nested_payment) -> None:
        descriptor = ComponentCompiler().compile(nested_payment, with_inheritance=True)

        assert dict(descriptor.variant_mapping) == {
            "CardPayment": "CARD",
            "BankPayment": "BANK",
            "SwiftPayment": "SWIFT",
        }
        assert set(descriptor.variant_mapping) == {
            leaf.name for leaf in descriptor.iter_leaves()
        }
        transfer = descriptor.subclasses[1]
        assert dict(transfer.variant_mapping) == {"BankPayment": "BANK", "SwiftPayment": "SWIFT"}

    def test_parent_common_fields_are_not_redeclared(self, nested_payment) -> None:
        descriptor = ComponentCompiler().compile(nested_payment, with_inheritance=True)
        transfer = descriptor.subclasses[1]

        assert _names(descriptor.common_fields) == ["amount"]
        assert _names(transfer.common_fields) == ["iban"]
        assert not set(_names(transfer.common_fields)) & set(_names(descriptor.common_fields))

    def test_nested_leaves_override_fields_of_nearest_union(self, nested_payment) -> None:
        descriptor = ComponentCompiler().compile(nested_payment, with_inheritance=True)
        swift = _leaf(descriptor, "SwiftPayment")

        assert _names(swift.fields) == ["amount", "iban", "bic"]
        assert [f.overridden for f in swift.fields] == [True, True, False]

    def test_nested_discriminator_is_not_emitted(self, nested_payment) -> None:
        descriptor = ComponentCompiler().compile(nested_payment, with_inheritance=True)
        transfer = descriptor.subclasses[1]

        assert "kind" not in _names(transfer.common_fields)
        assert "kind" not in _names(_leaf(descriptor, "BankPayment").fields)

    def test_import_completeness(self, nested_payment) -> None:
        descriptor = ComponentCompiler().compile(nested_payment, with_inheritance=True)
        for leaf in ("CardPayment", "BankPayment", "SwiftPayment"):
            for f in _leaf(descriptor, leaf).fields:
                assert any(q.endswith(f.resolved_type) for q in descriptor.imports)

    def test_generic_parameters_are_imported_by_every_enclosing_union(self, card_payment) -> None:
        lines = field("lines", LIST, generics=[TypeDescriptor("com.acme.Line")])
        bank = component("BankPayment", tag("BANK", "kind"), field("amount", MONEY), lines)
        swift = component("SwiftPayment", tag("SWIFT", "kind"), field("amount", MONEY))
        transfer = union("Transfer", "kind", {"BANK": bank, "SWIFT": swift})
        payment = union("Payment", "type", {"CARD": card_payment, "TRANSFER": transfer})

        descriptor = ComponentCompiler().compile(payment, with_inheritance=True)
        nested = descriptor.subclasses[1]

        assert "com.acme.Line" in descriptor.imports
        assert "kotlin.collections.List" in descriptor.imports
        assert "com.acme.Line" in nested.imports
        assert "com.acme.Line" in _leaf(descriptor, "BankPayment").imports
        assert "com.acme.Line" not in _leaf(descriptor, "SwiftPayment").imports

    def test_shared_leaf_is_counted_once(self, card_payment, bank_payment) -> None:
        inner = union("Inner", "type", {"CARD": card_payment, "BANK": bank_payment})
        outer = union("Outer", "type", {"INNER": inner, "CARD": card_payment})

        descriptor = ComponentCompiler().compile(outer, with_inheritance=True)
        assert dict(descriptor.variant_mapping) == {"CardPayment": "CARD", "BankPayment": "BANK"}
        assert _names(descriptor.common_fields) == ["amount"]


# ###############
# Fail-fast Input Checks
# ###############


class TestMalformedUnions:
    def test_empty_mapping_fails(self) -> None:
        with pytest.raises(SchemaValidationError, match="empty discriminator mapping"):
            ComponentCompiler().compile(union("Empty", "type", {}))

    def test_variant_without_discriminator_field_fails(self, card_payment) -> None:
        untagged = component("Untagged", field("amount", MONEY))
        payment = union("Payment", "type", {"CARD": card_payment, "X": untagged})

        with pytest.raises(SchemaValidationError, match="Untagged"):
            ComponentCompiler().compile(payment)

    def test_variant_with_several_literals_fails(self) -> None:
        ambiguous = component("Ambiguous", field("type", enum=["A", "B"]))
        with pytest.raises(SchemaValidationError, match="exactly one enum value"):
            ComponentCompiler().compile(union("U", "type", {"A": ambiguous}))

    def test_cyclic_mapping_fails(self, card_payment) -> None:
        mapping = {"CARD": card_payment}
        loop = union("Loop", "type", mapping)
        mapping["LOOP"] = loop

        with pytest.raises(SchemaValidationError, match="Cyclic discriminator mapping: Loop -> Loop"):
            ComponentCompiler().compile(loop, with_inheritance=True)


# ###############
# Determinism and Results
# ###############


class TestCompilationProperties:
    def test_compiling_twice_gives_identical_trees(self, nested_payment) -> None:
        compiler = ComponentCompiler()
        first = compiler.compile(nested_payment, with_inheritance=True)
        second = compiler.compile(nested_payment, with_inheritance=True)

        assert first == second
        assert list(first.variant_mapping) == list(second.variant_mapping)

    def test_descriptors_are_immutable(self, payment) -> None:
        descriptor = ComponentCompiler().compile(payment, with_inheritance=True)
        with pytest.raises(AttributeError):
            descriptor.name = "Other"
        with pytest.raises(TypeError):
            descriptor.variant_mapping["X"] = "Y"

    def test_common_field_soundness(self, nested_payment) -> None:
        compiler = ComponentCompiler()
        descriptor = compiler.compile(nested_payment, with_inheritance=True)

        for leaf in descriptor.iter_leaves():
            shapes = {f.name: f.shape for f in leaf.fields}
            for common in descriptor.common_fields:
                assert shapes[common.name] == common.shape

    def test_compile_component_wraps_errors(self, bank_payment) -> None:
        card = component(
            "CardPayment", tag("CARD"), field("amount", DECIMAL), field("cardId")
        )
        payment = union("Payment", "type", {"CARD": card, "BANK": bank_payment})

        result = compile_component(payment, with_inheritance=True)
        assert not result.success
        assert isinstance(result.error, SchemaValidationError)
        assert result.descriptor is None

    def test_compile_component_success(self, payment) -> None:
        result = compile_component(payment, with_inheritance=True)
        assert result.success
        assert result.descriptor.name == "Payment"

    def test_provided_types_rewrite_names_and_imports(self, payment) -> None:
        compiler = ComponentCompiler(provided_types={"com.acme.Money": "org.money.Amount"})
        descriptor = compiler.compile(payment, with_inheritance=True)

        assert descriptor.common_fields[0].resolved_type == "Amount"
        assert "org.money.Amount" in descriptor.imports
        assert "com.acme.Money" not in descriptor.imports

    def test_string_type_is_untouched_by_default(self) -> None:
        descriptor = ComponentCompiler().compile(component("A", field("name", STRING)))
        assert descriptor.fields[0].resolved_type == "String"
