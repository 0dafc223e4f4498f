"""Domain models for declared ledger input."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum

from src.domain.constants import (
    DEBT_VEHICLE,
    REFERENCE_FROM_TRANSACTION,
    RTYPE_NONE,
    STATIC,
)


class Operation(str, Enum):
    """Combination applied between a formula node and its child."""

    NONE = "none"
    PLUS = "plus"
    MINUS = "minus"

    @property
    def sign(self) -> int:
        """Return the sign applied to the child value."""
        return -1 if self is Operation.MINUS else 1


@dataclass(frozen=True)
class OperationNode:
    """Node of a computed-amount formula tree.

    Attributes:
        reference: Name of the referenced value, or None when unset.
        operation: How the child value combines with this node.
        on: Child node, present only when ``operation`` is not NONE.
    """

    reference: str | None = None
    operation: Operation = Operation.NONE
    on: "OperationNode | None" = None

    @property
    def depth(self) -> int:
        """Return the number of child hops below this node."""
        depth = 0
        node = self.on
        while node is not None:
            depth += 1
            node = node.on
        return depth


@dataclass(frozen=True)
class ReferenceEntry:
    """Named value usable inside a computed-amount formula."""

    name: str
    value: Decimal
    where_from: str = REFERENCE_FROM_TRANSACTION


@dataclass(frozen=True)
class Recurrence:
    """Calendar rule placing a transaction on one or more days.

    Attributes:
        rtype: Recurrence type (see ``RECURRENCE_TYPES``).
        start: First possible occurrence.
        end: Optional last possible occurrence.
        cycle: Day step, weekday (0=Sunday) or day of month, per rtype.
        occurrences: Optional maximum number of occurrences from start.
    """

    start: date
    rtype: str = RTYPE_NONE
    end: date | None = None
    cycle: int | None = None
    occurrences: int | None = None


@dataclass(frozen=True)
class Transaction:
    """Declared income, expense or transfer."""

    id: str
    type: str
    recurrence: Recurrence
    category: str = ""
    description: str = ""
    value_type: str = STATIC
    value: Decimal = Decimal("0")
    computed_amount: OperationNode | None = None
    references: tuple[ReferenceEntry, ...] = ()
    raccount: str | None = None
    from_account: bool = False


@dataclass(frozen=True)
class LiteralAmount:
    """Payback amount given directly."""

    amount: Decimal


@dataclass(frozen=True)
class IndirectAmount:
    """Payback amount read from a named field of the payback block."""

    field: str


PaybackAmount = LiteralAmount | IndirectAmount


@dataclass(frozen=True)
class PaybackEntry:
    """One scheduled repayment of a debt account."""

    id: str
    value: PaybackAmount
    recurrence: Recurrence
    raccount: str | None = None


@dataclass(frozen=True)
class Payback:
    """Repayment schedule attached to a debt account.

    Attributes:
        description: Description copied onto synthesized transactions.
        category: Category copied onto synthesized transactions.
        transactions: Declared repayments.
        fields: Named amounts that indirect payback values resolve against.
    """

    description: str
    category: str
    transactions: tuple[PaybackEntry, ...] = ()
    fields: Mapping[str, Decimal] = field(default_factory=dict)


@dataclass(frozen=True)
class Account:
    """Tracked account whose balance is projected."""

    name: str
    vehicle: str
    starting: Decimal = Decimal("0")
    interest: Decimal | None = None
    payback: Payback | None = None

    @property
    def is_debt(self) -> bool:
        return self.vehicle == DEBT_VEHICLE


__all__ = [
    "Operation",
    "OperationNode",
    "ReferenceEntry",
    "Recurrence",
    "Transaction",
    "LiteralAmount",
    "IndirectAmount",
    "PaybackAmount",
    "PaybackEntry",
    "Payback",
    "Account",
]
