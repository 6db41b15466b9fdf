from __future__ import annotations

import itertools

from budget_update.ledger.ordering import sort_for_append
from tests.helpers.fakes import make_txn


def _keys(transactions) -> list[tuple[str, int]]:
    return [(t.date.isoformat(), t.sequence_index) for t in transactions]


def test_sorts_by_date_then_sequence_index() -> None:
    batch = [
        make_txn("2018-01-02", 5),
        make_txn("2018-01-01", 1),
        make_txn("2018-01-01", 0),
    ]

    assert _keys(sort_for_append(batch)) == [
        ("2018-01-01", 0),
        ("2018-01-01", 1),
        ("2018-01-02", 5),
    ]


def test_sorting_is_idempotent() -> None:
    batch = [make_txn("2018-01-03", 2), make_txn("2018-01-01", 9), make_txn("2018-01-01", 4)]
    once = sort_for_append(batch)
    assert sort_for_append(once) == once


def test_result_is_independent_of_arrival_order() -> None:
    batch = [
        make_txn("2018-01-01", 3),
        make_txn("2018-01-01", 1),
        make_txn("2018-01-02", 0),
        make_txn("2018-01-01", 2),
    ]
    expected = sort_for_append(batch)

    for permutation in itertools.permutations(batch):
        assert sort_for_append(permutation) == expected


def test_returns_new_list_and_handles_empty_input() -> None:
    batch = [make_txn("2018-01-02", 1), make_txn("2018-01-01", 0)]
    result = sort_for_append(batch)
    assert result is not batch
    assert _keys(batch) == [("2018-01-02", 1), ("2018-01-01", 0)]
    assert sort_for_append([]) == []
