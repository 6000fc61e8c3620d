#!/usr/bin/env python3
"""Print the position stream of a satellite as JSON lines.

Usage
-----
::

    python scripts/stream_positions.py --count 5 --calculate-change

Options::

    --satellite-id ID    NORAD catalog number (default: 25544, the ISS)
    --interval-ms MS     Delay between deliveries (minimum 500, default 1000)
    --calculate-change   Attach latitude/longitude deltas per second
    --count N            Stop after N records (default: run until Ctrl-C)
    --verbose / -v       Enable debug logging

Unset options fall back to the ``SATLOC_*`` environment variables.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pysatloc import ErrorRecord, SatLocStream, StreamConfig  # noqa: E402


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Stream satellite positions as JSON lines.")
    parser.add_argument("--satellite-id", help="NORAD catalog number to track")
    parser.add_argument("--interval-ms", type=float, help="Delay between deliveries in milliseconds")
    parser.add_argument("--calculate-change", action="store_true", help="Attach per-second deltas")
    parser.add_argument("--count", type=int, default=0, help="Stop after N records (0 = forever)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


async def main(argv: list[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    overrides: dict[str, Any] = {}
    if args.satellite_id is not None:
        overrides["satellite_id"] = args.satellite_id
    if args.interval_ms is not None:
        overrides["interval_ms"] = args.interval_ms
    if args.calculate_change:
        overrides["options"] = {"calculateChange": True}
    config = StreamConfig.from_env(**overrides)

    received = 0
    async with SatLocStream(config=config) as stream:
        async for record in stream:
            print(json.dumps(record.to_dict()), flush=True)
            if isinstance(record, ErrorRecord):
                print(f"error from {stream.satellite_id}: {record.message}", file=sys.stderr)
            received += 1
            if args.count and received >= args.count:
                break
        stats = stream.stats

    print(
        f"requests={stats.requests_issued} responses={stats.responses_received} "
        f"lag={stats.last_observed_lag_ms:.0f}ms",
        file=sys.stderr,
    )


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
