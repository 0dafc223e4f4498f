"""Use case projecting a ledger into bar-chart and balance series."""

from dataclasses import replace

from src.application.ports.ledger_source import LedgerSourcePort
from src.domain.exceptions import LedgerInputError
from src.domain.models.ledger import Account, Transaction
from src.domain.models.projection import GraphRange, LedgerProjection
from src.domain.services.balances import resolve_account_chart
from src.domain.services.calendar import build_calendar
from src.domain.services.formula import resolve_transaction_value
from src.domain.services.recurrence import validate_recurrence
from src.domain.services.stacking import resolve_bar_chart
from src.domain.services.transactions import (
    coerce_account_payback,
    duplicate_transaction_ids,
    sort_transaction_order,
    transaction_splitter,
)
from src.infrastructure.logging.logger import get_app_logger


class ProjectLedgerUseCase:
    """Turn transactions and accounts into chart-ready series."""

    def __init__(self, logger=None) -> None:
        """Initialize the use case.

        Args:
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._logger = logger or get_app_logger()

    def execute(
        self,
        transactions: list[Transaction] | None,
        accounts: list[Account] | None,
        graph_range: GraphRange,
    ) -> LedgerProjection:
        """Project the ledger over the range.

        Structurally invalid transactions and accounts are left out of every
        series and reported in ``LedgerProjection.issues``. Transactions
        sharing an id are excluded together.

        Args:
            transactions: Declared transactions.
            accounts: Tracked accounts.
            graph_range: Inclusive projection range.

        Returns:
            LedgerProjection: Income and expense bands plus account balances.
        """
        issues: list[str] = []
        resolved = self._resolve_transactions(transactions or [], issues)
        valid_accounts, paybacks = self._coerce_paybacks(accounts or [], issues)

        unique = self._reject_duplicate_ids(resolved + paybacks, issues)
        split = transaction_splitter(unique)
        calendar = build_calendar(graph_range)
        income = resolve_bar_chart(
            sort_transaction_order(split.income),
            graph_range,
            calendar,
        )
        expense = resolve_bar_chart(
            sort_transaction_order(split.expense),
            graph_range,
            calendar,
        )
        account_series = resolve_account_chart(valid_accounts, income, expense)

        self._logger.info(
            f"Projected {len(income)} income and {len(expense)} expense series "
            f"over {len(calendar)} days ({graph_range.start} to "
            f"{graph_range.end}); {len(account_series)} account series"
        )
        if issues:
            self._logger.warning(f"Excluded {len(issues)} invalid ledger items")
        return LedgerProjection(
            income=income,
            expense=expense,
            accounts=account_series,
            issues=issues,
        )

    def _resolve_transactions(
        self,
        transactions: list[Transaction],
        issues: list[str],
    ) -> list[Transaction]:
        resolved = []
        for transaction in transactions:
            try:
                validate_recurrence(transaction.recurrence)
                value = resolve_transaction_value(transaction)
            except LedgerInputError as exc:
                message = f"Transaction '{transaction.id}' excluded: {exc}"
                self._logger.error(message)
                issues.append(message)
                continue
            resolved.append(replace(transaction, value=value))
        return resolved

    def _coerce_paybacks(
        self,
        accounts: list[Account],
        issues: list[str],
    ) -> tuple[list[Account], list[Transaction]]:
        valid_accounts = []
        paybacks = []
        for account in accounts:
            try:
                synthesized = coerce_account_payback(account)
                for transaction in synthesized:
                    validate_recurrence(transaction.recurrence)
            except LedgerInputError as exc:
                message = f"Account '{account.name}' excluded: {exc}"
                self._logger.error(message)
                issues.append(message)
                continue
            valid_accounts.append(account)
            paybacks.extend(synthesized)
        return valid_accounts, paybacks

    def _reject_duplicate_ids(
        self,
        transactions: list[Transaction],
        issues: list[str],
    ) -> list[Transaction]:
        duplicates = duplicate_transaction_ids(transactions)
        if not duplicates:
            return transactions
        for transaction_id in sorted(duplicates):
            message = (
                f"Transaction id '{transaction_id}' excluded: "
                "shared by more than one transaction"
            )
            self._logger.error(message)
            issues.append(message)
        return [
            transaction
            for transaction in transactions
            if transaction.id not in duplicates
        ]


class ProjectLedgerFromSourceUseCase:
    """Load a ledger from a source port and project it."""

    def __init__(
        self,
        ledger_source: LedgerSourcePort,
        logger=None,
        projector: ProjectLedgerUseCase | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger_source: Port providing transactions and accounts.
            logger: Optional logger compatible with logging.Logger-like API.
            projector: Optional projection use case to delegate to.
        """
        self._ledger_source = ledger_source
        self._logger = logger or get_app_logger()
        self._projector = projector or ProjectLedgerUseCase(logger=self._logger)

    def execute(self, graph_range: GraphRange) -> LedgerProjection:
        """Return the projection of the source ledger over the range."""
        transactions = self._ledger_source.fetch_transactions()
        accounts = self._ledger_source.fetch_accounts()
        self._logger.info(
            f"Loaded {len(transactions)} transactions and "
            f"{len(accounts)} accounts"
        )
        projection = self._projector.execute(transactions, accounts, graph_range)
        source_issues = self._ledger_source.fetch_issues()
        if not source_issues:
            return projection
        return replace(projection, issues=source_issues + projection.issues)


__all__ = [
    "ProjectLedgerUseCase",
    "ProjectLedgerFromSourceUseCase",
    "LedgerProjection",
]
