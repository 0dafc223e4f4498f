"""Tests for computed-amount formula resolution."""

from datetime import date
from decimal import Decimal

import pytest

from src.domain.exceptions import MalformedFormulaError
from src.domain.models.ledger import (
    Operation,
    OperationNode,
    Recurrence,
    ReferenceEntry,
    Transaction,
)
from src.domain.services.formula import (
    build_reference_map,
    resolve_computed_amount,
    resolve_dynamic_transactions,
    resolve_transaction_value,
    set_operation,
    set_operation_at,
    set_reference_at,
)


class _CountingReferences(dict):
    """Reference map recording every lookup."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.lookups: list[str] = []

    def get(self, key, default=None):
        self.lookups.append(key)
        return super().get(key, default)


def _chain(*links: tuple[str | None, Operation]) -> OperationNode:
    node = None
    for reference, operation in reversed(links):
        node = OperationNode(reference=reference, operation=operation, on=node)
    return node


def test_single_node_returns_its_reference() -> None:
    """A node without operation contributes only its own value."""
    node = OperationNode(reference="rent")

    assert resolve_computed_amount(node, {"rent": Decimal("850.25")}) == Decimal(
        "850.25"
    )


def test_deep_tree_sums_signed_values_with_one_lookup_per_node() -> None:
    """Depth d resolves with d+1 lookups and the signed sum."""
    node = _chain(
        ("a", Operation.PLUS),
        ("b", Operation.MINUS),
        ("c", Operation.PLUS),
        ("d", Operation.NONE),
    )
    references = _CountingReferences(
        a=Decimal("100"),
        b=Decimal("40"),
        c=Decimal("15"),
        d=Decimal("5"),
    )

    result = resolve_computed_amount(node, references)

    # a + (b - (c + d))
    assert result == Decimal("120")
    assert references.lookups == ["a", "b", "c", "d"]
    assert node.depth == 3


def test_resolver_is_not_limited_to_a_few_levels() -> None:
    """Hundreds of nested nodes still resolve."""
    links = [("unit", Operation.PLUS)] * 300 + [("unit", Operation.NONE)]
    node = _chain(*links)
    references = _CountingReferences(unit=Decimal("0.01"))

    assert resolve_computed_amount(node, references) == Decimal("3.01")
    assert len(references.lookups) == 301


def test_unknown_and_unset_references_contribute_zero() -> None:
    """Missing names at any depth resolve to zero without raising."""
    node = _chain(
        ("known", Operation.MINUS),
        ("missing", Operation.PLUS),
        (None, Operation.NONE),
    )

    assert resolve_computed_amount(node, {"known": Decimal("12")}) == Decimal(
        "12"
    )


def test_combining_node_without_child_is_malformed() -> None:
    """An operation other than none requires a child node."""
    node = OperationNode(reference="a", operation=Operation.PLUS, on=None)

    with pytest.raises(MalformedFormulaError):
        resolve_computed_amount(node, {"a": Decimal("1")})


def test_set_operation_resets_child_subtree() -> None:
    """Choosing plus or minus always leaves an unset child with no operation."""
    tree = _chain(
        ("a", Operation.PLUS),
        ("b", Operation.MINUS),
        ("c", Operation.PLUS),
        ("d", Operation.NONE),
    )

    updated = set_operation_at(tree, 1, Operation.PLUS)

    assert updated.reference == "a"
    assert updated.on.reference == "b"
    assert updated.on.operation is Operation.PLUS
    assert updated.on.on == OperationNode(reference=None, operation=Operation.NONE)
    assert updated.on.on.on is None
    assert updated.depth == 2
    # The original tree is untouched.
    assert tree.depth == 3


def test_set_operation_none_drops_child() -> None:
    """Going back to none removes the child node."""
    node = _chain(("a", Operation.MINUS), ("b", Operation.NONE))

    updated = set_operation(node, Operation.NONE)

    assert updated.operation is Operation.NONE
    assert updated.on is None


def test_set_reference_at_and_invalid_depth() -> None:
    """References can be edited at a given depth; missing depths raise."""
    node = _chain(("a", Operation.PLUS), (None, Operation.NONE))

    updated = set_reference_at(node, 1, "b")

    assert updated.on.reference == "b"
    with pytest.raises(ValueError):
        set_reference_at(node, 5, "c")
    with pytest.raises(ValueError):
        set_operation_at(node, -1, Operation.PLUS)


def test_reference_map_keeps_last_duplicate() -> None:
    """Later references with the same name win."""
    references = [
        ReferenceEntry(name="pay", value=Decimal("1")),
        ReferenceEntry(name="pay", value=Decimal("2")),
    ]

    assert build_reference_map(references) == {"pay": Decimal("2")}


def _transaction(**overrides) -> Transaction:
    values = dict(
        id="t1",
        type="expense",
        recurrence=Recurrence(start=date(2024, 1, 1)),
        value=Decimal("10"),
    )
    values.update(overrides)
    return Transaction(**values)


def test_resolve_transaction_value_static_and_dynamic() -> None:
    """Static values pass through; dynamic values use sibling references."""
    static = _transaction()
    dynamic = _transaction(
        id="t2",
        value_type="dynamic",
        value=Decimal("0"),
        computed_amount=_chain(("salary", Operation.MINUS), ("tax", Operation.NONE)),
        references=(
            ReferenceEntry(name="salary", value=Decimal("3000")),
            ReferenceEntry(name="tax", value=Decimal("750.50")),
        ),
    )
    empty_dynamic = _transaction(id="t3", value_type="dynamic")

    assert resolve_transaction_value(static) == Decimal("10")
    assert resolve_transaction_value(dynamic) == Decimal("2249.50")
    assert resolve_transaction_value(empty_dynamic) == Decimal("0")

    resolved = resolve_dynamic_transactions([static, dynamic])
    assert [item.value for item in resolved] == [
        Decimal("10"),
        Decimal("2249.50"),
    ]
    assert dynamic.value == Decimal("0")
