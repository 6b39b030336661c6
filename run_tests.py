#!/usr/bin/env python3
"""
Simple test runner for the KPS fighter.

Wraps pytest, ruff and pyright behind one command.
"""

import sys
import subprocess
import argparse


def run_command(cmd: list[str], description: str) -> bool:
    """Run a command and handle errors."""
    print(f"=== {description} ===")
    print(f"Running: {' '.join(cmd)}")

    try:
        result = subprocess.run(cmd, check=True, capture_output=True, text=True)
        print(result.stdout)
        if result.stderr:
            print("STDERR:", result.stderr)
        print(f"{description} completed successfully\n")
        return True
    except subprocess.CalledProcessError as e:
        print(f"{description} failed with exit code {e.returncode}")
        print("STDOUT:", e.stdout)
        print("STDERR:", e.stderr)
        print()
        return False


def run_unit_tests(verbose: bool = True) -> bool:
    cmd = [sys.executable, "-m", "pytest", "tests/"]
    if verbose:
        cmd.append("-v")
    return run_command(cmd, "Unit Tests")


def run_specific_test(test_name: str, verbose: bool = True) -> bool:
    """Run test files matching a name anywhere under tests/."""
    cmd = [sys.executable, "-m", "pytest", "tests/", "-k", test_name]
    if verbose:
        cmd.append("-v")
    return run_command(cmd, f"Tests matching: {test_name}")


def run_lint_check() -> bool:
    return run_command([sys.executable, "-m", "ruff", "check", "."], "Code Linting (Ruff)")


def run_type_check() -> bool:
    return run_command(["pyright", "."], "Type Checking (Pyright)")


def main():
    parser = argparse.ArgumentParser(
        description="Simple test runner for the KPS fighter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_tests.py                    # Run all unit tests
  python run_tests.py --quiet            # Run tests with minimal output
  python run_tests.py --test outcome     # Run tests matching 'outcome'
  python run_tests.py --lint             # Run linting only
  python run_tests.py --types            # Run type checking only
  python run_tests.py --all              # Run tests, linting, and type checking
        """
    )

    parser.add_argument("--test", help="Run tests matching a keyword (e.g. 'round_state')")
    parser.add_argument("--quiet", "-q", action="store_true", help="Run with minimal output")
    parser.add_argument("--lint", action="store_true", help="Run code linting only")
    parser.add_argument("--types", action="store_true", help="Run type checking only")
    parser.add_argument("--all", action="store_true", help="Run tests, linting, and type checking")

    args = parser.parse_args()
    verbose = not args.quiet

    if args.test:
        success = run_specific_test(args.test, verbose)
    elif args.lint:
        success = run_lint_check()
    elif args.types:
        success = run_type_check()
    elif args.all:
        success = run_unit_tests(verbose) and run_lint_check() and run_type_check()
    else:
        success = run_unit_tests(verbose)

    if success:
        print("All operations completed successfully!")
        sys.exit(0)
    else:
        print("Some operations failed. See output above for details.")
        sys.exit(1)


if __name__ == "__main__":
    main()
