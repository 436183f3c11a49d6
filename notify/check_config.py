"""
CLI script for checking a notifier configuration.

Assembles every configured pipeline without contacting the forge or the
mailing lists and reports what would run.

Usage:
    # Check the config named by $NOTIFY_CONFIG (default: notify.json)
    python -m notify.check_config

    # Check a specific file with debug logging
    python -m notify.check_config --config deploy/notify.json --verbose
"""

import argparse
import logging
import sys

from notify.factory import NotifierAssembly
from shared.config_loader import load_config
from shared.errors import ConfigurationError


def check_config(path: str | None = None) -> dict[str, int]:
    """
    Load a configuration and assemble its pipelines.

    Returns:
        Dictionary with stats: configured, inert, failed
    """
    config = load_config(path)
    assembly = NotifierAssembly(config)
    notifiers = assembly.create_notifiers()

    for notifier in notifiers:
        print(f"→ {notifier.repository.name} (branches: {notifier.branch_pattern.pattern})")
        for consumer in notifier.consumers:
            print(f"  ✓ {consumer!r}")

    for failure in assembly.failures:
        print(f"  ✗ {failure['repository']}: {failure['pipeline']}: {failure['error']}")
        print(f"    Error details logged to: {failure['report']}")

    stats = {
        "configured": len(notifiers),
        "inert": len(assembly.inert),
        "failed": len(assembly.failures),
    }
    print(
        f"\n{stats['configured']} repositories notifying, "
        f"{stats['inert']} without consumers, "
        f"{stats['failed']} pipelines rejected"
    )
    return stats


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Check the notifier configuration")

    parser.add_argument(
        "--config",
        type=str,
        help="Path to the JSON configuration (defaults to $NOTIFY_CONFIG or notify.json)",
    )

    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        stats = check_config(args.config)
    except ConfigurationError as e:
        print(f"✗ {e}", file=sys.stderr)
        sys.exit(1)

    if stats["failed"]:
        sys.exit(1)


if __name__ == "__main__":
    main()
