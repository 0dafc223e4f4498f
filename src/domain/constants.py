"""Domain constants for ledger projection."""

INCOME = "income"
EXPENSE = "expense"
TRANSFER = "transfer"

TRANSACTION_TYPES = (INCOME, EXPENSE, TRANSFER)

STATIC = "static"
DYNAMIC = "dynamic"

DEBT_VEHICLE = "debt"

REFERENCE_FROM_TRANSACTION = "transaction"

# Raw form value for a reference that has not been picked yet.
UNSET_REFERENCE = "select"

PAYBACK_EXPENSE_SUFFIX = "EXP"
PAYBACK_TRANSFER_SUFFIX = "TRSF"

RTYPE_NONE = "none"
RTYPE_DAY = "day"
RTYPE_DAY_OF_WEEK = "day of week"
RTYPE_DAY_OF_MONTH = "day of month"
RTYPE_BIMONTHLY = "bimonthly"
RTYPE_ANNUALLY = "annually"

RECURRENCE_TYPES = (
    RTYPE_NONE,
    RTYPE_DAY,
    RTYPE_DAY_OF_WEEK,
    RTYPE_DAY_OF_MONTH,
    RTYPE_BIMONTHLY,
    RTYPE_ANNUALLY,
)


__all__ = [
    "INCOME",
    "EXPENSE",
    "TRANSFER",
    "TRANSACTION_TYPES",
    "STATIC",
    "DYNAMIC",
    "DEBT_VEHICLE",
    "REFERENCE_FROM_TRANSACTION",
    "UNSET_REFERENCE",
    "PAYBACK_EXPENSE_SUFFIX",
    "PAYBACK_TRANSFER_SUFFIX",
    "RTYPE_NONE",
    "RTYPE_DAY",
    "RTYPE_DAY_OF_WEEK",
    "RTYPE_DAY_OF_MONTH",
    "RTYPE_BIMONTHLY",
    "RTYPE_ANNUALLY",
    "RECURRENCE_TYPES",
]
