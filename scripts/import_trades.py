"""
CLI to import a journal CSV export and print the parsed trades as JSON.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, Iterable, Optional

from config import Config
from import_profile_manager import DEFAULT_CONFIG_DIR, ImportProfileManager
from trade_analyzer import TradeAnalyzer
from trade_import_parser import parse_csv_trades

LOGGER = logging.getLogger(__name__)


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Import trades from a CSV export and emit rows, errors and statistics as JSON."
    )
    parser.add_argument(
        "-i",
        "--input",
        type=Path,
        required=True,
        help="Path to the CSV file.",
    )
    parser.add_argument(
        "--profile",
        type=str,
        help="Import profile name (default: the [import] profile from config.ini).",
    )
    parser.add_argument(
        "--profiles-dir",
        type=Path,
        default=DEFAULT_CONFIG_DIR,
        help="Directory holding presets/, user/ and schemas/ for import profiles.",
    )
    parser.add_argument(
        "--mapping",
        type=str,
        help='Inline JSON header mapping, e.g. \'{"Date": "trade_date"}\'. Replaces the profile mapping.',
    )
    parser.add_argument(
        "--account-balance",
        type=float,
        help="Account balance for P&L back-fill and percentages.",
    )
    parser.add_argument("--risk", type=float, help="Default Risk %% for empty cells.")
    parser.add_argument("--rr", type=float, help="Default RR for empty cells.")
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Append the full statistics report for the imported trades.",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Write the JSON document here instead of stdout.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr.")
    return parser.parse_args(argv)


def build_defaults(args: argparse.Namespace, config: Config, profile: Dict) -> Dict:
    defaults = dict(config.import_defaults())
    defaults.update(profile.get("defaults", {}))
    if args.risk is not None:
        defaults["risk_per_trade"] = args.risk
    if args.rr is not None:
        defaults["risk_reward_ratio"] = args.rr
    if args.account_balance is not None:
        defaults["account_balance"] = args.account_balance
    return defaults


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if not args.input.is_file():
        LOGGER.error("Input file not found: %s", args.input)
        return 1

    config = Config()
    manager = ImportProfileManager(args.profiles_dir)
    try:
        if args.mapping:
            mapping = json.loads(args.mapping)
            if not isinstance(mapping, dict):
                raise ValueError("--mapping must be a JSON object")
            manager.check_mapping("--mapping", mapping)
            profile = {"mapping": mapping, "defaults": {}}
        else:
            profile = manager.load_profile(args.profile or config.import_profile)
    except (FileNotFoundError, ValueError) as exc:
        LOGGER.error("Could not load import mapping: %s", exc)
        return 1

    defaults = build_defaults(args, config, profile)
    csv_text = args.input.read_text(encoding="utf-8-sig")
    result = parse_csv_trades(csv_text, profile["mapping"], defaults)

    document = result.to_dict()
    if args.stats:
        analyzer = TradeAnalyzer(
            result.rows,
            account_balance=defaults.get("account_balance", 0.0),
            intervals=manager.get_intervals(profile),
        )
        document["stats"] = analyzer.report()

    payload = json.dumps(document, indent=2)
    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(payload, encoding="utf-8")
    else:
        print(payload)

    file_failed = any(error.field == "file" for error in result.errors)
    return 1 if file_failed else 0


if __name__ == "__main__":
    sys.exit(main())
