#!/usr/bin/env python3
"""Demo entry point — emits an info line and an error line with an exception."""

import argparse
import dataclasses
import logging

from logstash_layout.config import load_config
from logstash_layout.formatter import configure_logging

logger = logging.getLogger("logstash_layout.demo")


def build_cli_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Logstash JSON layout demo")
    parser.add_argument(
        "--config", default=None,
        help="Path to YAML config file",
    )
    parser.add_argument(
        "--hostname", default=None,
        help="Override the host field (default: resolved local host name)",
    )
    parser.add_argument(
        "--escape-mode", choices=("strict", "compat"), default=None,
        help="String escaping mode (default: from config, else strict)",
    )
    return parser


def main(argv: list[str] | None = None):
    args = build_cli_parser().parse_args(argv)

    config = load_config(args.config)
    overrides = {}
    if args.hostname:
        overrides["hostname"] = args.hostname
    if args.escape_mode:
        overrides["escape_mode"] = args.escape_mode
    if overrides:
        config = dataclasses.replace(config, **overrides)

    configure_logging(config)

    logger.info("This is a test")
    try:
        int(None)
    except TypeError:
        logger.exception("Oops!")


if __name__ == "__main__":
    main()
