"""Main CLI entry point for mboxscan."""

import argparse
import sys
from pathlib import Path
from typing import Optional

from mboxscan.config.config_loader import ConfigError, ConfigLoader
from mboxscan.services.mbox_scanner import MboxScanner
from mboxscan.services.reporting.metadata_formatter import MetadataFormatter
from mboxscan.utils.header_utils import split_sender
from mboxscan.utils.logging_utils import setup_logging


def scan_mbox(
    mbox_path: Path,
    config_path: Optional[Path] = None,
    headers_only: bool = False,
    verbose: bool = False,
) -> tuple[int, Optional[Exception]]:
    """
    Scan an mbox file and print one summary line per message.

    Args:
        mbox_path: Path to the mbox file
        config_path: Optional custom config file path
        headers_only: Scan header blocks only
        verbose: Enable debug logging

    Returns:
        Tuple of (total_messages, scan_error)
    """
    config_loader = ConfigLoader(config_path)
    config = config_loader.load_app_config()
    setup_logging(json=config.logging.json_output, level="DEBUG" if verbose else config.logging.level)

    formatter = MetadataFormatter(config.report)
    scanner_config = config_loader.load_scanner_config(headers_only=headers_only or None)

    total_messages = 0
    with MboxScanner.open(mbox_path, config=scanner_config) as scanner:
        offset = scanner.position
        while scanner.advance():
            total_messages += 1
            print(formatter.format_summary(offset, scanner.message))
            offset = scanner.position

        print("---")
        print(formatter.format_footer(total_messages, scanner.position, scanner.error))
        return total_messages, scanner.error


def collect_stats(mbox_path: Path, config_path: Optional[Path] = None, headers_only: bool = False) -> dict:
    """
    Count the messages and distinct senders of an mbox file.

    Args:
        mbox_path: Path to the mbox file
        config_path: Optional custom config file path
        headers_only: Scan header blocks only

    Returns:
        Dict with message count, distinct senders, bytes scanned and error
    """
    config_loader = ConfigLoader(config_path)
    config = config_loader.load_app_config()
    setup_logging(json=config.logging.json_output, level=config.logging.level)

    senders = set()
    total_messages = 0
    scanner_config = config_loader.load_scanner_config(headers_only=headers_only or None)
    with MboxScanner.open(mbox_path, config=scanner_config) as scanner:
        while scanner.advance():
            total_messages += 1
            _, sender_email = split_sender(scanner.message.get("From"))
            if sender_email:
                senders.add(sender_email.lower())

        return {
            "total_messages": total_messages,
            "distinct_senders": len(senders),
            "bytes_scanned": scanner.position,
            "error": str(scanner.error) if scanner.error else None,
        }


def cmd_scan(args) -> int:
    """Scan command."""
    _, error = scan_mbox(Path(args.mbox), args.config, args.headers_only, args.verbose)
    return 1 if error else 0


def cmd_stats(args) -> int:
    """Stats command."""
    stats = collect_stats(Path(args.mbox), args.config, args.headers_only)

    print(f"Messages:         {stats['total_messages']}")
    print(f"Distinct senders: {stats['distinct_senders']}")
    print(f"Bytes scanned:    {stats['bytes_scanned']}")
    if stats["error"]:
        print(f"Error:            {stats['error']}")
        return 1
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="mboxscan - split mbox archives into messages")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    scan_parser = subparsers.add_parser("scan", help="List the messages of an mbox file")
    scan_parser.add_argument("mbox", help="Mbox file to scan")
    scan_parser.add_argument("--config", type=Path, help="Custom config file path")
    scan_parser.add_argument("--headers-only", action="store_true", help="Scan header blocks only")
    scan_parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")

    stats_parser = subparsers.add_parser("stats", help="Count messages and senders")
    stats_parser.add_argument("mbox", help="Mbox file to scan")
    stats_parser.add_argument("--config", type=Path, help="Custom config file path")
    stats_parser.add_argument("--headers-only", action="store_true", help="Scan header blocks only")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    try:
        if args.command == "scan":
            return cmd_scan(args)
        return cmd_stats(args)
    except (FileNotFoundError, ConfigError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
