"""Quote a swap against a pair snapshot saved as JSON.

Usage:
    python -m scripts.quote_pair tests/fixtures/pairs/almm_bin_step_10.json \
        --amount 1000000 --swap-for-y --timestamp-ms 1754900100000
    python -m scripts.quote_pair snapshot.json --amount 500 --exact-out --variant dlmm
"""

import argparse
import json
import sys
import time
from pathlib import Path

import structlog

from binquote.quoter import compute_swap_exact_in, compute_swap_exact_out

logger = structlog.get_logger()


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Quote a swap against a pair snapshot")
    parser.add_argument("snapshot", type=Path, help="Path to the pair snapshot JSON")
    parser.add_argument("--amount", type=int, required=True, help="Input (or output with --exact-out)")
    parser.add_argument("--swap-for-y", action="store_true", help="Swap X for Y (default: Y for X)")
    parser.add_argument("--exact-out", action="store_true", help="Treat --amount as the desired output")
    parser.add_argument("--variant", default="almm", help="Pricing-model variant (almm or dlmm)")
    parser.add_argument(
        "--timestamp-ms",
        type=int,
        default=None,
        help="Quote time in milliseconds (default: now)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every bin crossed")
    args = parser.parse_args()

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(10 if args.verbose else 20),
    )

    timestamp_ms = args.timestamp_ms if args.timestamp_ms is not None else int(time.time() * 1000)
    pair = args.snapshot.read_text()

    compute = compute_swap_exact_out if args.exact_out else compute_swap_exact_in
    result = compute(pair, args.amount, args.swap_for_y, timestamp_ms, args.variant)

    if result.is_error:
        logger.error("quote_failed", error=result.error.value, detail=result.error_detail)
        sys.exit(1)

    print(json.dumps(result.value.to_dict(), indent=2))


if __name__ == "__main__":
    main()
