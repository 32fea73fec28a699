#!/usr/bin/env python3
"""Generate sample analysis payloads.

Runs one synthetic business scenario and writes:
- ``payload.json``: request body accepted by ``scripts/analyze_transactions.py``
- one JSON file per record type, for manual inspection
"""

import argparse
import sys
from dataclasses import replace
from datetime import datetime
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from cashpilot.config import CashPilotConfig, ScenarioConfig
from cashpilot.logging import get_logger, setup_logging
from cashpilot.payload import dump_request
from cashpilot.scenarios import SCENARIOS, build_scenario
from cashpilot.sinks import ConsoleSink, JsonFileSink

logger = get_logger(__name__)


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Generate sample CashPilot analysis payloads")
    parser.add_argument(
        "--scenario",
        type=str,
        choices=sorted(SCENARIOS),
        default="subscription",
        help="Business scenario to simulate (default: subscription)",
    )
    parser.add_argument(
        "--months",
        type=int,
        default=6,
        help="Number of months to generate (default: 6)",
    )
    parser.add_argument(
        "--customers",
        type=int,
        default=25,
        help="Number of customers or subscribers (default: 25)",
    )
    parser.add_argument(
        "--start-date",
        type=str,
        default=None,
        help="First month as YYYY-MM-DD (default: so the last month is the current one)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducibility (default: SEED env var)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Output directory (default: OUTPUT_DIR env var or ./output)",
    )
    parser.add_argument(
        "--console",
        action="store_true",
        help="Also print the first records of each type to stdout",
    )
    args = parser.parse_args()

    config = CashPilotConfig.from_env()
    setup_logging(config.log_level)

    scenario_config = ScenarioConfig(
        name=args.scenario,
        months=args.months,
        num_customers=args.customers,
        start_date=datetime.fromisoformat(args.start_date) if args.start_date else None,
        seed=args.seed if args.seed is not None else config.seed,
    )
    output = config.output
    if args.output_dir is not None:
        output = replace(output, json_output_dir=args.output_dir)

    scenario = build_scenario(scenario_config)
    request = scenario.generate()

    sinks = [JsonFileSink(output.json_output_dir, pretty=output.pretty_json)]
    if args.console:
        sinks.append(ConsoleSink(max_records=3))
    scenario.export(sinks)

    payload_path = sinks[0].write_document("payload", dump_request(request))
    for sink in sinks:
        sink.close()

    logger.info("Payload written to %s", payload_path)


if __name__ == "__main__":
    main()
