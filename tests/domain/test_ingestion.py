"""Tests for mapping raw ledger input into domain models."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.domain.exceptions import LedgerInputError, MalformedFormulaError
from src.domain.models.ledger import (
    IndirectAmount,
    LiteralAmount,
    Operation,
    OperationNode,
)
from src.domain.services.ingestion import (
    parse_account,
    parse_date,
    parse_many,
    parse_operation_node,
    parse_transaction,
)
from src.domain.services.transactions import coerce_paybacks


def test_parse_static_transaction_coerces_decimals() -> None:
    """Plain numbers become exact decimals at ingestion."""
    transaction = parse_transaction(
        {
            "id": "groceries",
            "type": "expense",
            "category": "food",
            "description": "weekly shop",
            "rtype": "day of week",
            "start": "2024-01-01",
            "cycle": 6,
            "occurrences": 10,
            "value": 0.1,
            "raccount": "checking",
        }
    )

    assert transaction.value == Decimal("0.1")
    assert transaction.value_type == "static"
    assert transaction.recurrence.rtype == "day of week"
    assert transaction.recurrence.start == date(2024, 1, 1)
    assert transaction.recurrence.cycle == 6
    assert transaction.recurrence.occurrences == 10
    assert transaction.recurrence.end is None
    assert transaction.raccount == "checking"
    assert transaction.from_account is False


def test_parse_dynamic_transaction_builds_formula_tree() -> None:
    """Nested computedAmount maps become an OperationNode chain."""
    transaction = parse_transaction(
        {
            "id": "net",
            "type": "income",
            "start": "2024-01-01T00:00:00",
            "valueType": "dynamic",
            "value": 0,
            "computedAmount": {
                "reference": "gross",
                "operation": "minus",
                "on": {
                    "reference": "tax",
                    "operation": "none",
                    "on": {"reference": "stale", "operation": "plus"},
                },
            },
            "referencesArray": [
                {"name": "gross", "value": 1000, "whereFrom": "transaction"},
                {"name": "tax", "value": "250.75"},
            ],
        }
    )

    assert transaction.computed_amount == OperationNode(
        reference="gross",
        operation=Operation.MINUS,
        on=OperationNode(reference="tax", operation=Operation.NONE),
    )
    assert [entry.value for entry in transaction.references] == [
        Decimal("1000"),
        Decimal("250.75"),
    ]
    assert transaction.references[1].where_from == "transaction"


def test_parse_operation_node_unset_reference_and_malformed_tree() -> None:
    """'select' means unset; a combining node must have a child."""
    assert parse_operation_node({"reference": "select"}) == OperationNode()
    with pytest.raises(MalformedFormulaError):
        parse_operation_node({"reference": "a", "operation": "plus"})
    with pytest.raises(MalformedFormulaError):
        parse_operation_node({"reference": "a", "operation": "times", "on": {}})


def test_parse_transaction_rejects_missing_fields() -> None:
    """Id, type and a start date are required."""
    with pytest.raises(LedgerInputError):
        parse_transaction({"type": "income", "start": "2024-01-01"})
    with pytest.raises(LedgerInputError):
        parse_transaction({"id": "a", "start": "2024-01-01"})
    with pytest.raises(LedgerInputError):
        parse_transaction({"id": "a", "type": "income"})
    with pytest.raises(LedgerInputError):
        parse_transaction(
            {"id": "a", "type": "income", "start": "2024-01-01", "value": "ten"}
        )


def test_parse_date_accepts_dates_and_iso_strings() -> None:
    """Dates pass through and ISO strings are parsed."""
    assert parse_date(date(2024, 5, 1)) == date(2024, 5, 1)
    assert parse_date("2024-05-01") == date(2024, 5, 1)
    with pytest.raises(LedgerInputError):
        parse_date("05/01/2024")


def test_parse_date_accepts_utc_timestamps() -> None:
    """Editor timestamps with milliseconds and a Z suffix keep their day."""
    assert parse_date("2024-05-01T00:00:00.000Z") == date(2024, 5, 1)
    assert parse_date("2024-05-01T18:30:00+02:00") == date(2024, 5, 1)

    transaction = parse_transaction(
        {"id": "rent", "type": "expense", "start": "2024-06-01T00:00:00.000Z"}
    )

    assert transaction.recurrence.start == date(2024, 6, 1)


def test_parse_payback_coerces_numeric_string_fields() -> None:
    """Form-supplied numeric strings become fields; other text is ignored."""
    account = parse_account(
        {
            "name": "loan",
            "vehicle": "debt",
            "payback": {
                "description": "loan",
                "category": "debt",
                "minimum": "150",
                "extra": " 12.50 ",
                "note": "pay early",
                "autopay": True,
                "transactions": [
                    {"id": "p", "value": "minimum", "start": "2024-01-01"},
                ],
            },
        }
    )

    assert account.payback.fields == {
        "minimum": Decimal("150"),
        "extra": Decimal("12.50"),
    }
    expense, transfer = coerce_paybacks([account])
    assert expense.value == Decimal("150")
    assert transfer.value == Decimal("-150")


def test_parse_account_with_payback_block() -> None:
    """String payback values become indirect amounts; numbers literals."""
    account = parse_account(
        {
            "name": "card",
            "vehicle": "debt",
            "starting": 1200,
            "interest": 0.199,
            "payback": {
                "description": "card payment",
                "category": "debt",
                "minimum": 35,
                "transactions": [
                    {
                        "id": "pay",
                        "value": "minimum",
                        "raccount": "checking",
                        "rtype": "day of month",
                        "cycle": 15,
                        "start": "2024-01-01",
                    },
                    {"id": "extra", "value": 100, "start": "2024-03-01"},
                ],
            },
        }
    )

    assert account.starting == Decimal("1200")
    assert account.interest == Decimal("0.199")
    assert account.is_debt is True
    payback = account.payback
    assert payback.fields == {"minimum": Decimal("35")}
    assert payback.transactions[0].value == IndirectAmount("minimum")
    assert payback.transactions[0].raccount == "checking"
    assert payback.transactions[1].value == LiteralAmount(Decimal("100"))


def test_parse_account_defaults() -> None:
    """Missing starting balance is zero and interest stays unset."""
    account = parse_account({"name": "cash"})

    assert account.starting == Decimal("0")
    assert account.interest is None
    assert account.payback is None
    assert account.vehicle == "other"


def test_parse_many_excludes_and_reports_invalid_items() -> None:
    """Invalid items are logged and reported, valid ones kept."""
    logger = MagicMock()

    accounts, issues = parse_many(
        [{"name": "cash"}, {"vehicle": "debt"}],
        parse_account,
        logger,
    )

    assert [account.name for account in accounts] == ["cash"]
    assert len(issues) == 1
    logger.error.assert_called_once()
    assert parse_many(None, parse_account, logger) == ([], [])
