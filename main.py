"""
easemob-client - command line access to the Easemob IM REST API.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from typing import List, Optional

from internal.config.manager import ConfigManager
from lib.easemob import EasemobClient, EasemobError, ListOptions
from lib.easemob.models import ApiResult
from lib.logging_utils import initLogging
from lib.utils import jsonDumps

# Configure basic logging first
logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=logging.WARNING)
logger = logging.getLogger(__name__)


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Easemob IM REST API client, dood!")
    parser.add_argument(
        "-c",
        "--config",
        default="config.toml",
        help="Path to configuration file (default: config.toml)",
    )
    parser.add_argument(
        "--config-dir",
        action="append",
        help="Directory to search for .toml config files recursively (can be specified multiple times)",
    )
    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Pretty-print loaded configuration and exit",
    )

    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("token", help="Fetch access token with client credentials")

    userGet = subparsers.add_parser("user-get", help="Fetch a user")
    userGet.add_argument("username")

    usersList = subparsers.add_parser("users-list", help="List users (one page)")
    usersList.add_argument("--limit", type=int, default=0)
    usersList.add_argument("--cursor", default="")
    usersList.add_argument("--ql", default="")

    groupGet = subparsers.add_parser("group-get", help="Fetch details of one or more groups")
    groupGet.add_argument("group_ids", nargs="+", metavar="GROUP_ID")

    sendText = subparsers.add_parser("send-text", help="Send text message to users")
    sendText.add_argument("--from", dest="sender", default="", help="Sender username (default: admin)")
    sendText.add_argument("--text", required=True)
    sendText.add_argument("users", nargs="+", metavar="USER")

    args = parser.parse_args(argv)
    args.config = os.path.abspath(args.config)
    if args.config_dir:
        args.config_dir = [os.path.abspath(dir_path) for dir_path in args.config_dir]

    if not args.print_config and args.command is None:
        parser.error("command is required")

    return args


async def runCommand(client: EasemobClient, args: argparse.Namespace) -> ApiResult:
    """Execute CLI command against the API."""
    if args.command == "token":
        return await client.getToken()

    if not client.token:
        await client.getToken()

    match args.command:
        case "user-get":
            return await client.users.get(args.username)
        case "users-list":
            return await client.users.listAll(ListOptions(limit=args.limit, cursor=args.cursor, ql=args.ql))
        case "group-get":
            return await client.groups.get(*args.group_ids)
        case "send-text":
            return await client.messages.sendTextMessagesToUsers(args.sender, args.text, *args.users)
        case _:
            raise ValueError(f"Unknown command: {args.command}")


async def amain(args: argparse.Namespace, configManager: ConfigManager) -> int:
    async with EasemobClient.fromConfig(configManager.getEasemobConfig()) as client:
        try:
            result = await runCommand(client, args)
        except EasemobError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    if args.command == "token":
        print(jsonDumps({"access_token": client.token, "expires_in": client.expires}, indent=2))
    else:
        print(jsonDumps(result.envelope.to_dict(recursive=True, skipNone=True), indent=2))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_arguments(argv)
    configManager = ConfigManager(args.config, args.config_dir)
    initLogging(configManager.getLoggingConfig())

    if args.print_config:
        print(jsonDumps(configManager.config, indent=2))
        return 0

    try:
        return asyncio.run(amain(args, configManager))
    except EasemobError as e:
        logger.error(f"Failed to create client: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
