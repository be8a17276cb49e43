"""Tests for delivering matches to sinks."""

import pytest

from vxsig.diff.dispatch import (
    CollectingSink,
    CountingSink,
    FunctionSink,
    MatchSink,
    as_sink,
    dispatch,
)
from vxsig.diff.errors import CallbackError
from vxsig.diff.models import AddressPair, Granularity

PAIRS = [AddressPair(0x1000 + i, 0x2000 + i) for i in range(10)]


class RejectAt:
    def __init__(self, index: int) -> None:
        self.index = index
        self.seen: list[AddressPair] = []

    def accept(self, match: AddressPair) -> None:
        if len(self.seen) == self.index:
            raise ValueError("unwanted match")
        self.seen.append(match)


def test_dispatch_delivers_every_match_in_order():
    sink = CollectingSink()
    count = dispatch(PAIRS, sink, Granularity.FUNCTION)
    assert count == len(PAIRS)
    assert sink.matches == PAIRS


def test_dispatch_empty():
    sink = CountingSink()
    assert dispatch([], sink, Granularity.INSTRUCTION) == 0
    assert sink.count == 0


def test_dispatch_passes_duplicates():
    sink = CollectingSink()
    dispatch([PAIRS[0], PAIRS[0]], sink, Granularity.BASIC_BLOCK)
    assert len(sink) == 2


def test_dispatch_stops_on_first_failure():
    sink = RejectAt(4)
    with pytest.raises(CallbackError) as exc_info:
        dispatch(PAIRS, sink, Granularity.FUNCTION, path="a.BinDiff")

    err = exc_info.value
    assert sink.seen == PAIRS[:4]
    assert err.match == PAIRS[4]
    assert err.index == 4
    assert err.granularity is Granularity.FUNCTION
    assert err.sink_message == "unwanted match"
    assert err.path == "a.BinDiff"
    assert isinstance(err.__cause__, ValueError)
    assert "0x00001004" in str(err)


def test_dispatch_does_not_pull_past_failure():
    pulled = []

    def source():
        for pair in PAIRS:
            pulled.append(pair)
            yield pair

    with pytest.raises(CallbackError):
        dispatch(source(), RejectAt(2), Granularity.FUNCTION)
    assert pulled == PAIRS[:3]


def test_failure_without_message_uses_exception_name():
    def reject(match):
        raise KeyError()

    with pytest.raises(CallbackError) as exc_info:
        dispatch(PAIRS, FunctionSink(reject), Granularity.INSTRUCTION)
    assert exc_info.value.sink_message == "KeyError"


def test_as_sink_wraps_callables():
    received = []
    sink = as_sink(received.append)
    assert isinstance(sink, MatchSink)
    sink.accept(PAIRS[0])
    assert received == [PAIRS[0]]


def test_as_sink_keeps_sinks():
    sink = CountingSink()
    assert as_sink(sink) is sink


def test_as_sink_rejects_other_objects():
    with pytest.raises(TypeError):
        as_sink(42)


def test_collecting_sink_limit_stops_dispatch():
    sink = CollectingSink(limit=3)
    with pytest.raises(CallbackError) as exc_info:
        dispatch(PAIRS, sink, Granularity.BASIC_BLOCK)
    assert sink.matches == PAIRS[:3]
    assert sink.full
    assert exc_info.value.index == 3
    assert "collected 3 matches" in exc_info.value.sink_message


def test_collecting_sink_limit_not_reached():
    sink = CollectingSink(limit=len(PAIRS))
    assert dispatch(PAIRS, sink, Granularity.FUNCTION) == len(PAIRS)
    assert sink.full


def test_collecting_sink_unlimited_by_default():
    sink = CollectingSink()
    dispatch(PAIRS, sink, Granularity.FUNCTION)
    assert sink.limit is None
    assert not sink.full


def test_collecting_sink_negative_limit():
    with pytest.raises(ValueError):
        CollectingSink(limit=-1)
