"""CLI entrypoint for notifybus."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from importlib import metadata
from pathlib import Path

from .bus import ErrorPolicy, EventBus
from .config import load_config
from .demo import run_store_demo
from .logging_utils import configure_logging


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="notifybus",
        description="notifybus - run the in-process event bus store demo",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a TOML config file",
    )
    parser.add_argument(
        "--error-policy",
        choices=[policy.value for policy in ErrorPolicy],
        default=None,
        help="Override how publish handles failing subscribers",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """Load configuration, set up logging, and run the demo."""

    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.version:
        try:
            version = metadata.version("notifybus")
        except metadata.PackageNotFoundError:
            version = "0.0.0"
        print(f"notifybus {version}")
        return

    config = load_config(args.config)
    if args.error_policy is not None:
        config["bus"]["error_policy"] = args.error_policy
    configure_logging(config["logging"])

    run_store_demo(EventBus.from_config(config))


if __name__ == "__main__":
    main()
