"""Composition root: build the config, credential store and tools, then serve.

Logs go to stderr because stdout carries the MCP stream.
"""

from __future__ import annotations

import argparse
import logging
import sys

from inbox_assistant.auth import CredentialStore
from inbox_assistant.config import AppConfig, VALID_ACCOUNTS, load_config
from inbox_assistant.tools import AssistantTools, register_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "inbox-assistant"


def create_server(config: AppConfig | None = None):
    """Build a FastMCP server with every tool registered."""
    try:
        from fastmcp import FastMCP
    except ImportError:
        raise ImportError(
            "fastmcp is required to serve the tools. "
            "Install with: pip install inbox-assistant[server]"
        )
    if config is None:
        config = load_config()

    tools = AssistantTools(config, CredentialStore(config))
    server = FastMCP(SERVER_NAME)
    register_tools(server, tools)
    return server


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog=SERVER_NAME)
    parser.add_argument("--home", help="Directory holding accounts.json and credentials.json")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command")
    sub.add_parser("serve", help="Run the tool server on stdio (default)")
    auth = sub.add_parser("authorize", help="One-time OAuth2 authorization for an account")
    auth.add_argument("account", nargs="?", default="work", choices=VALID_ACCOUNTS)
    args = parser.parse_args(argv)

    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = load_config(args.home)

    if args.command == "authorize":
        store = CredentialStore(config)
        try:
            token_path = store.authorize_account(args.account)
        except FileExistsError as e:
            logger.error(str(e))
            return 1
        logger.info(f"Token saved to {token_path}. You can now start the server.")
        return 0

    server = create_server(config)
    logger.info(f"{SERVER_NAME} running on stdio")
    server.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
