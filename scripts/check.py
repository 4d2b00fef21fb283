"""Run the code quality checks of the exporter.

Usage:
    python scripts/check.py            # ruff, mypy, vulture, pytest
    python scripts/check.py ruff mypy  # only the named checks
"""

import subprocess
import sys

CHECKS = {
    "ruff": ["ruff", "check", "kubeversion_exporter", "tests"],
    "mypy": ["mypy", "kubeversion_exporter"],
    "vulture": ["vulture", "kubeversion_exporter/", "--min-confidence", "80"],
    "pytest": ["pytest", "-q"],
}


def main(selected: list[str]) -> int:
    unknown = [name for name in selected if name not in CHECKS]
    if unknown:
        print(f"Unknown checks: {', '.join(unknown)}", file=sys.stderr)
        return 2

    failed = [
        name
        for name in selected or list(CHECKS)
        if subprocess.run(CHECKS[name]).returncode != 0
    ]

    if failed:
        print(f"\nFAILED: {', '.join(failed)}")
        return 1

    print("\nAll checks passed.")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
