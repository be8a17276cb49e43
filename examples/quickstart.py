"""vxsig quickstart: stream matches out of a BinDiff result."""

import sys
from collections import Counter

from vxsig import DiffResultError, parse_diff_result
from vxsig.config.loader import load_config
from vxsig.diff.dispatch import CollectingSink, CountingSink
from vxsig.utils.logging import setup_logging_from_config


def main(path: str) -> int:
    # 1. Load configuration
    config = load_config()
    setup_logging_from_config(config.logging)

    # 2. Keep function matches, count the rest, tally blocks per secondary page
    functions = CollectingSink()
    instructions = CountingSink()
    pages: Counter[int] = Counter()

    def on_basic_block(match):
        pages[match.secondary >> 12] += 1

    # 3. Parse
    try:
        result = parse_diff_result(
            path,
            functions,
            on_basic_block,
            instructions,
            metadata_requested=True,
            config=config.reader,
        )
    except DiffResultError as exc:
        print(f"{exc.kind}: {exc}", file=sys.stderr)
        return 1

    meta = result.metadata
    print(f"{meta.primary.name} ({meta.primary.content_hash[:8]}) vs "
          f"{meta.secondary.name} ({meta.secondary.content_hash[:8]})")
    print(f"  functions:    {result.function_matches}")
    print(f"  basic blocks: {result.basic_block_matches}")
    print(f"  instructions: {instructions.count}")

    for match in functions.matches[:10]:
        print(f"  {match}")

    for page, count in pages.most_common(5):
        print(f"  page {page << 12:#x}: {count} blocks")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1]))
