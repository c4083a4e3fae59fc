import pytest

from argwire.core.models.lazy import Lazy, Resolved, UNRESOLVED


@pytest.mark.ut
def test_resolve_computes_once():
    calls = []
    cell: Lazy[int] = Lazy()

    def compute() -> int:
        calls.append(1)
        return 42

    assert cell.resolve(compute) == 42
    assert cell.resolve(compute) == 42
    assert len(calls) == 1
    assert cell.resolved


@pytest.mark.ut
def test_none_is_a_resolved_value():
    calls = []
    cell: Lazy[None] = Lazy()

    def compute() -> None:
        calls.append(1)
        return None

    assert cell.resolve(compute) is None
    assert cell.resolve(compute) is None
    assert len(calls) == 1


@pytest.mark.ut
def test_failed_compute_leaves_cell_unresolved():
    cell: Lazy[int] = Lazy()

    def fail() -> int:
        raise ValueError("nope")

    with pytest.raises(ValueError):
        cell.resolve(fail)

    assert not cell.resolved
    assert cell.peek("default") == "default"
    assert cell.resolve(lambda: 7) == 7


@pytest.mark.ut
def test_of_and_peek():
    cell = Lazy.of("value")

    assert cell.resolved
    assert cell.peek() == "value"
    assert cell.resolve(lambda: "other") == "value"
    assert repr(cell) == "Lazy(Resolved(value='value'))"
    assert repr(Lazy()) == "Lazy(Unresolved)"
    assert Resolved(1) == Resolved(1)
    assert UNRESOLVED is not None
