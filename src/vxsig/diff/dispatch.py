"""Deliver matches from a cursor to a caller-supplied sink."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Protocol, Union, runtime_checkable

from vxsig.diff.errors import CallbackError
from vxsig.diff.models import AddressPair, Granularity
from vxsig.utils.logging import get_logger

log = get_logger(__name__)


@runtime_checkable
class MatchSink(Protocol):
    """Receives one match at a time. Raising any Exception rejects the match
    and aborts the parse."""

    def accept(self, match: AddressPair) -> None: ...


class FunctionSink:
    """Adapts a plain ``fn(match)`` callable to MatchSink."""

    def __init__(self, fn: Callable[[AddressPair], object]) -> None:
        self._fn = fn

    def accept(self, match: AddressPair) -> None:
        self._fn(match)


class CountingSink:
    def __init__(self) -> None:
        self.count = 0

    def accept(self, match: AddressPair) -> None:
        self.count += 1


class CollectingSink:
    """Keeps matches in delivery order.

    With a ``limit``, the match after the first ``limit`` is rejected, which
    stops the parse.
    """

    def __init__(self, limit: int | None = None) -> None:
        if limit is not None and limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")
        self.limit = limit
        self.matches: list[AddressPair] = []

    @property
    def full(self) -> bool:
        return self.limit is not None and len(self.matches) >= self.limit

    def accept(self, match: AddressPair) -> None:
        if self.full:
            raise ValueError(f"collected {self.limit} matches")
        self.matches.append(match)

    def __len__(self) -> int:
        return len(self.matches)


SinkLike = Union[MatchSink, Callable[[AddressPair], object]]


def as_sink(target: SinkLike) -> MatchSink:
    if isinstance(target, MatchSink):
        return target
    if callable(target):
        return FunctionSink(target)
    raise TypeError(f"Expected a MatchSink or callable, got {type(target).__name__}")


def dispatch(
    matches: Iterable[AddressPair],
    sink: MatchSink,
    granularity: Granularity,
    path: str | None = None,
) -> int:
    """Call ``sink.accept`` once per match, in order. Returns the count.

    The first exception from the sink stops delivery and is re-raised as
    CallbackError. Matches already delivered stay delivered.
    """
    count = 0
    for match in matches:
        try:
            sink.accept(match)
        except Exception as exc:
            log.warning(
                "dispatch_aborted",
                granularity=granularity,
                index=count,
                match=match,
                error=str(exc),
            )
            raise CallbackError(granularity, match, count, str(exc) or type(exc).__name__, path=path) from exc
        count += 1

    log.debug("matches_dispatched", granularity=granularity, count=count)
    return count
