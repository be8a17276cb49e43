"""Reading BinDiff result databases."""

from vxsig.diff.dispatch import CollectingSink, CountingSink, FunctionSink, MatchSink
from vxsig.diff.reader import parse_diff_result

__all__ = ["CollectingSink", "CountingSink", "FunctionSink", "MatchSink", "parse_diff_result"]
