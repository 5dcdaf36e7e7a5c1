#!/usr/bin/env python3
"""
Test runner for the trade import and statistics tests.

Runs each test module on its own so a failure points at the area that broke.
"""

import subprocess
import sys
from pathlib import Path


def run_tests():
    """Run every test module and report per-file results."""
    print("🧪 Running Trade Journal Stats Tests")
    print("=" * 50)

    project_root = Path(__file__).parent
    test_files = [
        "tests/test_csv_line_splitter.py",
        "tests/test_trade_import_parser.py",
        "tests/test_trade_pnl_and_market.py",
        "tests/test_category_stats.py",
        "tests/test_macro_stats.py",
        "tests/test_streak.py",
        "tests/test_trade_analyzer.py",
        "tests/test_import_profile_manager.py",
        "tests/test_config.py",
        "tests/test_import_trades_cli.py",
    ]

    all_passed = True

    for test_file in test_files:
        print(f"\n📁 Testing {test_file}...")
        result = subprocess.run(
            [sys.executable, "-m", "pytest", test_file, "-v"],
            cwd=project_root,
            capture_output=True,
            text=True
        )

        if result.returncode == 0:
            print(f"✅ {test_file} - All tests passed")
        else:
            print(f"❌ {test_file} - Some tests failed")
            print("STDOUT:", result.stdout)
            print("STDERR:", result.stderr)
            all_passed = False

    print("\n" + "=" * 50)
    if all_passed:
        print("🎉 All tests PASSED!")
        return 0
    else:
        print("💥 Some tests FAILED!")
        print("Please check the output above for details.")
        return 1


if __name__ == "__main__":
    sys.exit(run_tests())
