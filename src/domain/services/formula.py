"""Resolution and editing of computed-amount formula trees."""

from collections.abc import Iterable, Mapping
from dataclasses import replace
from decimal import Decimal

from src.domain.constants import DYNAMIC
from src.domain.exceptions import MalformedFormulaError
from src.domain.models.ledger import (
    Operation,
    OperationNode,
    ReferenceEntry,
    Transaction,
)
from src.utils.decimal_utils import ZERO, coerce_decimal


def build_reference_map(
    references: Iterable[ReferenceEntry],
) -> dict[str, Decimal]:
    """Index reference values by name.

    Later entries win when two references share a name.

    Args:
        references: Reference entries attached to a transaction.

    Returns:
        dict[str, Decimal]: Reference values keyed by name.
    """
    return {entry.name: coerce_decimal(entry.value) for entry in references}


def resolve_computed_amount(
    node: OperationNode,
    references: Mapping[str, Decimal],
) -> Decimal:
    """Evaluate a formula tree against named reference values.

    Each node looks up its own reference exactly once. Unset or unknown
    references contribute zero so that a formula being edited still
    resolves.

    Args:
        node: Root of the formula tree.
        references: Reference values keyed by name.

    Returns:
        Decimal: Signed sum of the referenced values.

    Raises:
        MalformedFormulaError: If a combining node has no child.
    """
    value = ZERO
    if node.reference is not None:
        value = coerce_decimal(references.get(node.reference))
    if node.operation is Operation.NONE:
        return value
    if node.on is None:
        raise MalformedFormulaError(
            f"Operation '{node.operation.value}' on reference "
            f"'{node.reference}' has no child node"
        )
    return value + node.operation.sign * resolve_computed_amount(
        node.on,
        references,
    )


def resolve_transaction_value(transaction: Transaction) -> Decimal:
    """Return the concrete value of a static or dynamic transaction."""
    if transaction.value_type != DYNAMIC:
        return transaction.value
    if transaction.computed_amount is None:
        return ZERO
    return resolve_computed_amount(
        transaction.computed_amount,
        build_reference_map(transaction.references),
    )


def resolve_dynamic_transactions(
    transactions: Iterable[Transaction],
) -> list[Transaction]:
    """Replace dynamic transaction values by their resolved amounts."""
    resolved = []
    for transaction in transactions:
        if transaction.value_type == DYNAMIC:
            transaction = replace(
                transaction,
                value=resolve_transaction_value(transaction),
            )
        resolved.append(transaction)
    return resolved


def set_operation(node: OperationNode, operation: Operation) -> OperationNode:
    """Return a copy of ``node`` using a new operation.

    Choosing PLUS or MINUS always starts a fresh, unset child so deeper
    fragments of a previous formula cannot come back. Choosing NONE drops
    the child.
    """
    if operation is Operation.NONE:
        return replace(node, operation=operation, on=None)
    return replace(
        node,
        operation=operation,
        on=OperationNode(reference=None, operation=Operation.NONE),
    )


def set_operation_at(
    root: OperationNode,
    depth: int,
    operation: Operation,
) -> OperationNode:
    """Change the operation of the node ``depth`` levels below ``root``."""
    return _edit_at(root, depth, lambda node: set_operation(node, operation))


def set_reference_at(
    root: OperationNode,
    depth: int,
    reference: str | None,
) -> OperationNode:
    """Point the node ``depth`` levels below ``root`` at a new reference."""
    return _edit_at(root, depth, lambda node: replace(node, reference=reference))


def _edit_at(root: OperationNode, depth: int, edit) -> OperationNode:
    if depth < 0:
        raise ValueError(f"Depth must be non-negative, got {depth}")
    if depth == 0:
        return edit(root)
    if root.on is None:
        raise ValueError(f"Formula has no node at depth {depth}")
    return replace(root, on=_edit_at(root.on, depth - 1, edit))


__all__ = [
    "build_reference_map",
    "resolve_computed_amount",
    "resolve_transaction_value",
    "resolve_dynamic_transactions",
    "set_operation",
    "set_operation_at",
    "set_reference_at",
]
