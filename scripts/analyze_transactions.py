#!/usr/bin/env python3
"""Analyze a payload file and write the insight report.

The input is a JSON request body ``{transactions, shopifyOrders?,
quickbooksInvoices?, quickbooksBills?}``, for example the ``payload.json``
written by ``scripts/generate_sample_data.py``.
"""

import argparse
import json
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from cashpilot.config import CashPilotConfig
from cashpilot.exceptions import CashPilotError, InvalidPayloadError
from cashpilot.logging import get_logger, request_context, setup_logging
from cashpilot.pipeline import build_report
from cashpilot.payload import parse_request
from cashpilot.sinks import ConsoleSink, JsonFileSink

logger = get_logger(__name__)


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Generate insights for a CashPilot payload")
    parser.add_argument("payload", type=Path, help="Path to the JSON request body")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Write report.json here instead of printing it",
    )
    parser.add_argument(
        "--log-format",
        type=str,
        choices=["standard", "json"],
        default="standard",
        help="Log format (default: standard)",
    )
    parser.add_argument(
        "--text",
        action="store_true",
        help="Print a short text summary instead of the JSON report",
    )
    args = parser.parse_args()

    config = CashPilotConfig.from_env()
    setup_logging(config.log_level, args.log_format)

    try:
        with open(args.payload, encoding="utf-8") as f:
            body = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Cannot read %s: %s", args.payload, exc)
        return 1

    with request_context(args.payload.stem):
        try:
            report = build_report(parse_request(body), config)
        except InvalidPayloadError as exc:
            logger.error("%s:\n  %s", exc, "\n  ".join(exc.errors))
            return 1
        except CashPilotError:
            logger.exception("Analysis failed")
            return 1

    if args.output_dir is not None:
        sink = JsonFileSink(args.output_dir, pretty=True, camel_case=True)
    else:
        sink = ConsoleSink(pretty=True, camel_case=True, readable_reports=args.text)
    sink.write_document("report", report)
    sink.close()

    logger.info(
        "Health score %d (%s), %d insights",
        report.health_score.score,
        report.health_score.grade,
        len(report.insights),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
