"""Shared fixtures for the test suite."""

import pytest

from builders import MONEY, component, field, tag, union

PAYMENT_DOCUMENT = {
    "components": {
        "Payment": {
            "qualifier": "com.acme",
            "discriminator": {
                "field": "type",
                "mapping": {"CARD": "CardPayment", "BANK": "BankPayment"},
            },
        },
        "CardPayment": {
            "qualifier": "com.acme",
            "fields": {
                "type": {"qualifier": "kotlin.String", "enum": ["CARD"], "required": True},
                "amount": {"qualifier": "com.acme.Money", "required": True},
                "cardId": {"qualifier": "kotlin.String", "required": True},
            },
        },
        "BankPayment": {
            "qualifier": "com.acme",
            "fields": {
                "type": {"qualifier": "kotlin.String", "enum": ["BANK"], "required": True},
                "amount": {"qualifier": "com.acme.Money", "required": True},
                "iban": {"qualifier": "kotlin.String", "required": True},
            },
        },
    }
}


@pytest.fixture
def payment_document():
    return PAYMENT_DOCUMENT


@pytest.fixture
def card_payment():
    return component(
        "CardPayment", tag("CARD"), field("amount", MONEY), field("cardId")
    )


@pytest.fixture
def bank_payment():
    return component(
        "BankPayment", tag("BANK"), field("amount", MONEY), field("iban")
    )


@pytest.fixture
def payment(card_payment, bank_payment):
    return union("Payment", "type", {"CARD": card_payment, "BANK": bank_payment})


@pytest.fixture
def nested_payment(card_payment):
    """Payment -> {CardPayment, Transfer -> {BankPayment, SwiftPayment}}."""
    swift = component(
        "SwiftPayment",
        tag("SWIFT", "kind"),
        field("amount", MONEY),
        field("iban"),
        field("bic"),
    )
    bank = component(
        "BankPayment", tag("BANK", "kind"), field("amount", MONEY), field("iban")
    )
    transfer = union("Transfer", "kind", {"BANK": bank, "SWIFT": swift})
    return union("Payment", "type", {"CARD": card_payment, "TRANSFER": transfer})
