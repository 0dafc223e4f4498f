"""Transaction bucketing, ordering and payback synthesis."""

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal

from src.domain.constants import (
    EXPENSE,
    INCOME,
    PAYBACK_EXPENSE_SUFFIX,
    PAYBACK_TRANSFER_SUFFIX,
    STATIC,
    TRANSFER,
)
from src.domain.exceptions import PaybackIndirectionError
from src.domain.models.ledger import (
    Account,
    IndirectAmount,
    Payback,
    PaybackEntry,
    Transaction,
)


@dataclass(frozen=True)
class SplitTransactions:
    """Transactions bucketed by their effect on balances."""

    income: list[Transaction] = field(default_factory=list)
    expense: list[Transaction] = field(default_factory=list)


def transaction_splitter(
    transactions: Iterable[Transaction] | None,
) -> SplitTransactions:
    """Bucket transactions into income and expense.

    Transfers are routed by sign: non-positive values are expenses,
    positive values are income. Unknown types are left out.

    Args:
        transactions: Transactions with concrete values.

    Returns:
        SplitTransactions: Income and expense buckets in input order.
    """
    split = SplitTransactions()
    for transaction in transactions or ():
        if transaction.type == INCOME:
            split.income.append(transaction)
        elif transaction.type == EXPENSE:
            split.expense.append(transaction)
        elif transaction.type == TRANSFER:
            if transaction.value <= 0:
                split.expense.append(transaction)
            else:
                split.income.append(transaction)
    return split


def transaction_sort_key(transaction: Transaction) -> tuple[str, Decimal]:
    """Return the draw-order key: type, then absolute value."""
    return (transaction.type.upper(), abs(transaction.value))


def sort_transaction_order(
    transactions: Iterable[Transaction],
) -> list[Transaction]:
    """Return transactions in stable draw order."""
    return sorted(transactions, key=transaction_sort_key)


def resolve_payback_amount(payback: Payback, entry: PaybackEntry) -> Decimal:
    """Return the concrete amount of a payback entry.

    Raises:
        PaybackIndirectionError: If the entry names a missing payback field.
    """
    if isinstance(entry.value, IndirectAmount):
        if entry.value.field not in payback.fields:
            raise PaybackIndirectionError(
                f"Payback entry '{entry.id}' refers to missing field "
                f"'{entry.value.field}'"
            )
        return payback.fields[entry.value.field]
    return entry.value.amount


def coerce_account_payback(account: Account) -> list[Transaction]:
    """Synthesize the paired transactions of one debt account.

    Each payback entry yields an expense on the debt account and a
    negative transfer on the paying account. The negative transfer stays
    off the bar chart's income side but still lowers the payer's balance.
    Ids are prefixed with the account name so entries of different
    accounts never share a stack column.

    Args:
        account: Account to expand; non-debt accounts yield nothing.

    Returns:
        list[Transaction]: Two transactions per payback entry.

    Raises:
        PaybackIndirectionError: If an entry amount cannot be resolved.
    """
    if not account.is_debt or account.payback is None:
        return []
    payback = account.payback
    transactions = []
    for index, entry in enumerate(payback.transactions):
        amount = resolve_payback_amount(payback, entry)
        prefix = f"{account.name}-{entry.id}"
        transactions.append(
            Transaction(
                id=f"{prefix}-{index}{PAYBACK_EXPENSE_SUFFIX}",
                type=EXPENSE,
                recurrence=entry.recurrence,
                category=payback.category,
                description=payback.description,
                value_type=STATIC,
                value=amount,
                raccount=account.name,
                from_account=True,
            )
        )
        transactions.append(
            Transaction(
                id=f"{prefix}-{index}{PAYBACK_TRANSFER_SUFFIX}",
                type=TRANSFER,
                recurrence=entry.recurrence,
                category=payback.category,
                description=payback.description,
                value_type=STATIC,
                value=-amount,
                raccount=entry.raccount,
                from_account=True,
            )
        )
    return transactions


def coerce_paybacks(accounts: Iterable[Account] | None) -> list[Transaction]:
    """Synthesize payback transactions for every debt account."""
    transactions: list[Transaction] = []
    for account in accounts or ():
        transactions.extend(coerce_account_payback(account))
    return transactions


def duplicate_transaction_ids(transactions: Iterable[Transaction]) -> set[str]:
    """Return the ids carried by more than one transaction."""
    counts = Counter(transaction.id for transaction in transactions)
    return {
        transaction_id
        for transaction_id, count in counts.items()
        if count > 1
    }


__all__ = [
    "SplitTransactions",
    "transaction_splitter",
    "transaction_sort_key",
    "sort_transaction_order",
    "resolve_payback_amount",
    "coerce_account_payback",
    "coerce_paybacks",
    "duplicate_transaction_ids",
]
