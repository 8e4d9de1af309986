#!/usr/bin/env python3
"""Control utility for the qBittorrent automation service."""

import argparse
import dataclasses
import sys
from datetime import datetime
from typing import Optional

from .client import QBittorrentClient
from .config import Config
from .errors import ConnectionFailure
from .events import EventBus
from .ingest import TorrentIngester
from .paths import second_level_domain
from .reaper import SeedReaper, seed_info
from .utils import format_bytes, truncate_name


def format_timestamp(timestamp: Optional[int]) -> str:
    """Format epoch seconds to a readable date."""
    if not timestamp:
        return "-"
    return datetime.fromtimestamp(timestamp).strftime('%Y-%m-%d %H:%M')


def print_message(message, category, source) -> None:
    """Print bus messages to the terminal."""
    stream = sys.stderr if category.value == "error" else sys.stdout
    print(f"[{category.value}] {message}", file=stream)


def connect(config: Config) -> Optional[QBittorrentClient]:
    """Connect to qBittorrent, printing the reason on failure."""
    client = QBittorrentClient(config.connection)
    try:
        client.connect(quiet=True)
    except ConnectionFailure as e:
        print(f"Error: {e.message} ({config.connection.describe()})", file=sys.stderr)
        return None
    return client


def cmd_list(args, config: Config) -> int:
    """List torrents with progress, ratio and tracker."""
    client = connect(config)
    if client is None:
        return 1

    try:
        torrents = client.list_torrents()
        if torrents is None:
            print("Failed to fetch torrents", file=sys.stderr)
            return 1

        if args.limit:
            torrents = torrents[:args.limit]

        print(f"{'Name':<50} {'Progress':>8} {'Ratio':>6} {'Tracker':<14} {'Completed':<16}")
        print("-" * 98)
        for torrent in torrents:
            print(
                f"{truncate_name(torrent.name, 50):<50} "
                f"{torrent.progress * 100:>7.1f}% "
                f"{torrent.ratio:>6.2f} "
                f"{second_level_domain(torrent.tracker)[:14]:<14} "
                f"{format_timestamp(torrent.completion_on):<16}"
            )
        print(f"\nTotal: {len(torrents)} torrent(s)")
        return 0
    finally:
        client.disconnect()


def cmd_transfer(args, config: Config) -> int:
    """Show global transfer statistics."""
    client = connect(config)
    if client is None:
        return 1

    try:
        info = client.transfer_summary()
        if info is None:
            print("Failed to fetch transfer info", file=sys.stderr)
            return 1

        print(f"Download speed: {format_bytes(info.get('dl_info_speed'))}/s")
        print(f"Upload speed:   {format_bytes(info.get('up_info_speed'))}/s")
        print(f"Downloaded:     {format_bytes(info.get('dl_info_data'))}")
        print(f"Uploaded:       {format_bytes(info.get('up_info_data'))}")
        print(f"Status:         {info.get('connection_status', 'unknown')}")
        return 0
    finally:
        client.disconnect()


def cmd_add(args, config: Config) -> int:
    """Add a .torrent file and archive it, as the service does."""
    client = connect(config)
    if client is None:
        return 1

    events = EventBus()
    events.on_message(print_message)
    ingest_config = dataclasses.replace(config.ingest, delay=0)
    try:
        ingester = TorrentIngester(client, ingest_config, events)
        return 0 if ingester.add_torrent(args.path) else 1
    finally:
        client.disconnect()


def cmd_check_seed(args, config: Config) -> int:
    """Run one seed check."""
    client = connect(config)
    if client is None:
        return 1

    events = EventBus()
    events.on_message(print_message)
    behavior = dataclasses.replace(config.behavior, dry_run=config.behavior.dry_run or args.dry_run)
    reaper = SeedReaper(client, config.seed, behavior, events)

    try:
        if behavior.dry_run:
            torrents = client.list_torrents()
            if torrents is None:
                print("Failed to fetch torrents", file=sys.stderr)
                return 1
            candidates = reaper.find_candidates(torrents)
            for torrent, reason in candidates:
                print(f"  {truncate_name(torrent.name, 50)}: {reason.value} {seed_info(torrent)}")
            print(f"\n{len(candidates)} torrent(s) would be removed")
            return 0

        removed = reaper.check_seed()
        print(f"Removed {removed} torrent(s)")
        return 0
    finally:
        client.disconnect()


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog='qbt-autopilot-ctl',
        description='Control utility for qBittorrent Autopilot'
    )

    subparsers = parser.add_subparsers(dest='command', help='Command to execute')

    # List torrents command
    list_parser = subparsers.add_parser('list', help='List torrents in qBittorrent')
    list_parser.add_argument('--limit', type=int, help='Limit number of results')

    # Transfer info command
    subparsers.add_parser('transfer', help='Show transfer statistics')

    # Add torrent command
    add_parser = subparsers.add_parser('add', help='Add a .torrent file and archive it')
    add_parser.add_argument('path', help='Path to the .torrent file')

    # Seed check command
    seed_parser = subparsers.add_parser('check-seed', help='Remove torrents that seeded enough')
    seed_parser.add_argument('--dry-run', action='store_true', help='Only show what would be removed')

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    config = Config.from_environment()

    # Route to appropriate command
    if args.command == 'list':
        return cmd_list(args, config)
    elif args.command == 'transfer':
        return cmd_transfer(args, config)
    elif args.command == 'add':
        return cmd_add(args, config)
    elif args.command == 'check-seed':
        return cmd_check_seed(args, config)

    parser.print_help()
    return 1


if __name__ == '__main__':
    sys.exit(main())
