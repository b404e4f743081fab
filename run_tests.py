#!/usr/bin/env python3
"""run_tests.py - run the test suite

Framework: unittest (standard library)

Usage:
    python run_tests.py           # all tests
    python run_tests.py -v        # verbose
"""

import subprocess
import sys
from pathlib import Path

TESTS_DIR = str(Path(__file__).parent / "tests")


def main():
    cmd = [sys.executable, "-m", "unittest", "discover",
           "-s", TESTS_DIR, "-p", "test_*.py"]
    if "-v" in sys.argv:
        cmd.append("-v")
    sys.exit(subprocess.run(cmd).returncode)


if __name__ == "__main__":
    main()
