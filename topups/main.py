"""Command-line entrypoint that writes the company token top-up report."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from topups.core.config import get_settings
from topups.core.errors import DatasetError
from topups.core.logger import get_logger, init_logging, log_context, shutdown_logging
from topups.services.pipeline import run

logger = get_logger(__name__)


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--data-dir", type=Path, default=None, help="Directory holding users.json and companies.json")
    parser.add_argument("--output", type=Path, default=None, help="Report destination (overwritten on each run)")
    parser.add_argument("--log-level", type=str, default=None, help="Logging level (DEBUG, INFO, WARNING, ...)")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    settings = get_settings().override(
        data_dir=args.data_dir,
        output_path=args.output,
        log_level=args.log_level,
    )

    init_logging(level=settings.log_level, log_dir=settings.log_dir)

    try:
        with log_context.scoped(job="topups"):
            try:
                path = run(settings)
            except DatasetError as exc:
                logger.error("Report not written: %s", exc.message)
                return exc.exit_code

            logger.info("Top-up report complete: %s", path)
        return 0
    finally:
        shutdown_logging()


if __name__ == "__main__":
    raise SystemExit(main())
