from dataclasses import dataclass
import logging
import threading

import pytest
from hypothesis import given
from hypothesis.strategies import integers, lists, text

from flowsure.result import Ok, Nil, Err, is_gone
from flowsure.errors import ConsumedReference


@dataclass
class Node:
    name: str
    children: list


@given(lists(integers()))
def test_get_once(xs):
    ok = Ok(xs)
    assert ok.get() == xs
    assert ok.gone and is_gone(ok)
    with pytest.raises(ConsumedReference):
        ok.get()


@given(text())
def test_scalars_are_not_consumed(s):
    ok = Ok(s)
    assert ok.get() == s
    assert ok.get() == s
    assert not ok.gone


def test_tuples_and_callables_are_not_consumed():
    for v in [(1, 2), frozenset({1}), len, lambda: 1, 3.5, None]:
        ok = Ok(v)
        assert ok.get() is ok.get()


def test_payload_is_copied():
    data = {"a": [1, 2]}
    ok = Ok(data)
    data["a"].append(3)
    assert ok.get() == {"a": [1, 2]}


def test_dataclass_payload():
    root = Node("root", [Node("leaf", [])])
    ok = Ok(root)
    got = ok.get()
    assert got == root and got is not root
    with pytest.raises(ConsumedReference):
        ok.get()


def test_uncopyable_payload(caplog):
    lock = threading.Lock()
    with caplog.at_level(logging.WARNING, logger="flowsure"):
        ok = Ok(lock)
    assert "Failed to clone" in caplog.text
    assert ok.get() is lock
    assert ok.gone


def test_operations_after_consumption():
    ok = Ok([1, 2, 3])
    ok.get()

    with pytest.raises(ConsumedReference):
        ok.map(len)

    chained = ok.chain(lambda xs: Ok(len(xs)))
    assert isinstance(chained, Err)
    assert isinstance(chained.error, ConsumedReference)

    assert ok.filter(lambda _: True) is Nil()
    assert ok.or_(lambda: 1) is ok

    matched = ok.match(Ok=lambda xs: xs)
    assert isinstance(matched, Err) and isinstance(matched.error, ConsumedReference)
    assert ok.match(Gone=lambda: "gone") == "gone"
    assert repr(ok) == "Ok(<consumed>)"


def test_chaining_does_not_consume():
    ok = Ok([1, 2, 3])
    assert ok.map(len) == Ok(3)
    assert ok.chain(lambda xs: Ok(sum(xs))) == Ok(6)
    assert ok.filter(lambda xs: len(xs) == 3) is ok
    assert ok.match(Ok=lambda xs: xs[0]) == 1
    assert ok.get() == [1, 2, 3]


def test_match_statement_consumes():
    ok = Ok({"k": "v"})
    match ok:
        case Ok(d):
            assert d == {"k": "v"}
    assert ok.gone


@pytest.mark.asyncio
async def test_await_after_consumption():
    ok = Ok([1])
    ok.get()

    async def first(xs):
        return xs[0]

    r = await ok.await_(first)
    assert isinstance(r, Err) and isinstance(r.error, ConsumedReference)


def test_consumed_values_are_only_equal_to_themselves():
    a, b = Ok([1]), Ok([2])
    a.get()
    b.get()
    assert a != b
    assert a == a
    c = Ok([1])
    assert a != c and c != a
    assert c == Ok([1])
