"""Mapping of raw ledger mappings into domain models.

Raw input follows the shapes produced by the ledger editor: camelCase keys
(``valueType``, ``computedAmount``, ``referencesArray``, ``fromAccount``)
and plain numbers. Monetary values become ``Decimal`` here and nowhere
else.
"""

from collections.abc import Callable, Iterable, Mapping
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from logging import Logger
from typing import Any, TypeVar

from dateutil.parser import isoparse

from src.domain.constants import (
    DYNAMIC,
    REFERENCE_FROM_TRANSACTION,
    RTYPE_NONE,
    STATIC,
    UNSET_REFERENCE,
)
from src.domain.exceptions import LedgerInputError, MalformedFormulaError
from src.domain.models.ledger import (
    Account,
    IndirectAmount,
    LiteralAmount,
    Operation,
    OperationNode,
    Payback,
    PaybackEntry,
    Recurrence,
    ReferenceEntry,
    Transaction,
)
from src.utils.decimal_utils import coerce_decimal, coerce_optional_decimal

_PAYBACK_KEYS = {"description", "category", "transactions"}

T = TypeVar("T")


def parse_date(value: Any, field_name: str = "date") -> date:
    """Parse an ISO date, datetime string or date object into a date.

    Timestamps such as ``2024-05-01T00:00:00.000Z`` keep their calendar day.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value:
        try:
            return isoparse(value).date()
        except (OverflowError, ValueError):
            pass
    raise LedgerInputError(f"Invalid {field_name} value: {value!r}")


def _optional_date(value: Any, field_name: str) -> date | None:
    if value in (None, ""):
        return None
    return parse_date(value, field_name)


def _optional_int(value: Any, field_name: str) -> int | None:
    if value in (None, ""):
        return None
    try:
        return int(coerce_decimal(value))
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise LedgerInputError(f"Invalid {field_name} value: {value!r}") from exc


def _decimal(value: Any, field_name: str) -> Decimal:
    try:
        return coerce_decimal(value)
    except (InvalidOperation, TypeError) as exc:
        raise LedgerInputError(f"Invalid {field_name} value: {value!r}") from exc


def parse_recurrence(raw: Mapping[str, Any]) -> Recurrence:
    """Build the recurrence rule from a raw transaction mapping."""
    start = raw.get("start", raw.get("date"))
    return Recurrence(
        start=parse_date(start, "start"),
        rtype=raw.get("rtype") or RTYPE_NONE,
        end=_optional_date(raw.get("end"), "end"),
        cycle=_optional_int(raw.get("cycle"), "cycle"),
        occurrences=_optional_int(raw.get("occurrences"), "occurrences"),
    )


def parse_operation_node(raw: Mapping[str, Any]) -> OperationNode:
    """Build a formula tree from nested ``{reference, operation, on}`` maps.

    A leftover ``on`` under a node whose operation is ``none`` is dropped.

    Raises:
        MalformedFormulaError: If the operation is unknown or a combining
            node has no child.
    """
    reference = raw.get("reference")
    if reference in (None, "", UNSET_REFERENCE):
        reference = None
    try:
        operation = Operation(raw.get("operation") or Operation.NONE.value)
    except ValueError as exc:
        raise MalformedFormulaError(
            f"Unknown operation {raw.get('operation')!r}"
        ) from exc
    if operation is Operation.NONE:
        return OperationNode(reference=reference, operation=operation)
    child = raw.get("on")
    if not isinstance(child, Mapping):
        raise MalformedFormulaError(
            f"Operation '{operation.value}' on reference '{reference}' "
            "has no child node"
        )
    return OperationNode(
        reference=reference,
        operation=operation,
        on=parse_operation_node(child),
    )


def parse_reference(raw: Mapping[str, Any]) -> ReferenceEntry:
    return ReferenceEntry(
        name=str(raw.get("name", "")),
        value=_decimal(raw.get("value"), "reference value"),
        where_from=raw.get("whereFrom") or REFERENCE_FROM_TRANSACTION,
    )


def parse_transaction(raw: Mapping[str, Any]) -> Transaction:
    """Build a transaction from its raw mapping.

    Args:
        raw: Mapping with at least ``id``, ``type`` and a start date.

    Returns:
        Transaction: Parsed transaction; dynamic values stay unresolved.

    Raises:
        LedgerInputError: If required fields are missing or malformed.
    """
    if not raw.get("id"):
        raise LedgerInputError(f"Transaction without id: {dict(raw)!r}")
    if not raw.get("type"):
        raise LedgerInputError(f"Transaction '{raw['id']}' has no type")
    value_type = raw.get("valueType") or STATIC
    computed = None
    if value_type == DYNAMIC and raw.get("computedAmount") is not None:
        computed = parse_operation_node(raw["computedAmount"])
    return Transaction(
        id=str(raw["id"]),
        type=str(raw["type"]),
        recurrence=parse_recurrence(raw),
        category=raw.get("category") or "",
        description=raw.get("description") or "",
        value_type=value_type,
        value=_decimal(raw.get("value"), "value"),
        computed_amount=computed,
        references=tuple(
            parse_reference(item) for item in raw.get("referencesArray") or ()
        ),
        raccount=raw.get("raccount") or None,
        from_account=bool(raw.get("fromAccount", False)),
    )


def parse_payback_entry(raw: Mapping[str, Any]) -> PaybackEntry:
    value = raw.get("value")
    if isinstance(value, str):
        amount = IndirectAmount(field=value)
    else:
        amount = LiteralAmount(amount=_decimal(value, "payback value"))
    return PaybackEntry(
        id=str(raw.get("id", "")),
        value=amount,
        recurrence=parse_recurrence(raw),
        raccount=raw.get("raccount") or None,
    )


def _payback_field(value: Any) -> Decimal | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        return coerce_decimal(value)
    if isinstance(value, str) and value.strip():
        try:
            amount = Decimal(value.strip())
        except InvalidOperation:
            return None
        return amount if amount.is_finite() else None
    return None


def parse_payback(raw: Mapping[str, Any]) -> Payback:
    """Build a payback block; numeric sibling keys become named fields."""
    fields = {}
    for key, value in raw.items():
        if key in _PAYBACK_KEYS:
            continue
        amount = _payback_field(value)
        if amount is not None:
            fields[key] = amount
    return Payback(
        description=raw.get("description") or "",
        category=raw.get("category") or "",
        transactions=tuple(
            parse_payback_entry(item) for item in raw.get("transactions") or ()
        ),
        fields=fields,
    )


def parse_account(raw: Mapping[str, Any]) -> Account:
    """Build an account from its raw mapping."""
    if not raw.get("name"):
        raise LedgerInputError(f"Account without name: {dict(raw)!r}")
    payback = raw.get("payback")
    return Account(
        name=str(raw["name"]),
        vehicle=raw.get("vehicle") or "other",
        starting=_decimal(raw.get("starting"), "starting"),
        interest=coerce_optional_decimal(raw.get("interest")),
        payback=parse_payback(payback) if payback else None,
    )


def parse_many(
    raws: Iterable[Mapping[str, Any]] | None,
    parser: Callable[[Mapping[str, Any]], T],
    logger: Logger,
) -> tuple[list[T], list[str]]:
    """Parse raw items, excluding and reporting the malformed ones.

    Args:
        raws: Raw mappings; None is treated as empty.
        parser: Parser applied to each mapping.
        logger: Logger used for rejected items.

    Returns:
        tuple[list[T], list[str]]: Parsed items and rejection messages.
    """
    items: list[T] = []
    issues: list[str] = []
    for raw in raws or ():
        try:
            items.append(parser(raw))
        except LedgerInputError as exc:
            logger.error(f"Skipping ledger item: {exc}")
            issues.append(str(exc))
    return items, issues


__all__ = [
    "parse_date",
    "parse_recurrence",
    "parse_operation_node",
    "parse_reference",
    "parse_transaction",
    "parse_payback_entry",
    "parse_payback",
    "parse_account",
    "parse_many",
]
