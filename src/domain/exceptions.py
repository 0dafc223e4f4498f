"""Domain errors for structurally invalid ledger input."""


class LedgerInputError(ValueError):
    """Raised when a transaction or account cannot be projected."""


class MalformedFormulaError(LedgerInputError):
    """Raised when an operation node combines without a child node."""


class PaybackIndirectionError(LedgerInputError):
    """Raised when a payback amount points at a missing payback field."""


__all__ = [
    "LedgerInputError",
    "MalformedFormulaError",
    "PaybackIndirectionError",
]
