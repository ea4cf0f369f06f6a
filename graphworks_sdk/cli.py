# graphworks_sdk/cli.py
# SPDX-License-Identifier: Apache-2.0
"""
GraphWorks CLI

Lightweight entrypoint to ping a GraphWorks service, list its datasets and
run a graph query, printing the results as JSON.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from typing import Any, List, Mapping, Optional

from graphworks_sdk.core.error_context import get_context
from graphworks_sdk.graph.datasource import WorksDataSource
from graphworks_sdk.graph.graph_base import (
    DataSourceSettings,
    WorksAdapterError,
    WorksQuery,
    basic_auth_header,
)
from graphworks_sdk.graph.transport import Transport

LOG = logging.getLogger(__name__)

PING_OK_STATUSES = frozenset({"success", "ok"})


# --------------------------------------------------------------------------- #
# Internal helpers
# --------------------------------------------------------------------------- #

def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _settings_from_args(args: argparse.Namespace, environ: Mapping[str, str]) -> DataSourceSettings:
    """Environment first, then command-line overrides."""
    env = dict(environ)
    if args.url:
        env["GRAPHWORKS_URL"] = args.url
    if args.user is not None:
        env["GRAPHWORKS_BASIC_AUTH"] = basic_auth_header(args.user, args.password or "")
    return DataSourceSettings.from_env(env)


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2, default=str))


async def _run_command(datasource: WorksDataSource, args: argparse.Namespace) -> int:
    if args.command == "ping":
        result = await datasource.test_datasource()
        _print_json(result)
        return 0 if str(result.get("status", "")).lower() in PING_OK_STATUSES else 1

    if args.command == "datasets":
        datasets = await datasource.get_datasets()
        _print_json([d.to_dict() for d in datasets])
        return 0

    if args.command == "query":
        frames = await datasource.execute_graph_query(
            WorksQuery(dataset=args.dataset, query=args.query, query_type=args.type)
        )
        _print_json(frames.to_list())
        return 0

    # This should never happen due to argparse required=True
    print(f"error: unknown command '{args.command}'", file=sys.stderr)
    return 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="graphworks",
        description="GraphWorks CLI - query a GraphWorks knowledge-graph service",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  graphworks --url http://localhost:8080 ping
  graphworks datasets
  graphworks query --dataset gdelt --query "protest" --type getEvents

Configuration (environment variables):
  GRAPHWORKS_URL                Base URL of the service (required unless --url)
  GRAPHWORKS_UID                Data source uid used in node links
  GRAPHWORKS_NAME               Data source name used in node links
  GRAPHWORKS_WITH_CREDENTIALS   Send credentials (1/true/yes)
  GRAPHWORKS_BASIC_AUTH         Preconfigured Authorization header value
        """.strip(),
    )

    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--url", help="Base URL of the service (overrides GRAPHWORKS_URL)")
    parser.add_argument("--user", help="Basic-auth user (overrides GRAPHWORKS_BASIC_AUTH)")
    parser.add_argument("--password", help="Basic-auth password (requires --user)")

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        help="command to execute",
        metavar="COMMAND",
    )
    subparsers.add_parser("ping", help="Test the connection to the service")
    subparsers.add_parser("datasets", help="List the datasets, sorted by label")

    query_parser = subparsers.add_parser("query", help="Run a graph query and print both frames")
    query_parser.add_argument("-d", "--dataset", required=True, help="Dataset to query")
    query_parser.add_argument("-q", "--query", default=None, help="Query text (optional)")
    query_parser.add_argument("-t", "--type", default=None, help="Query type (optional)")
    return parser


# --------------------------------------------------------------------------- #
# main
# --------------------------------------------------------------------------- #

def main(
    argv: Optional[List[str]] = None,
    environ: Optional[Mapping[str, str]] = None,
    transport: Optional[Transport] = None,
) -> int:
    parser = _build_parser()
    try:
        args = parser.parse_args(argv)
        if args.password is not None and args.user is None:
            parser.error("--password requires --user")
    except SystemExit as e:
        return e.code

    _configure_logging(args.verbose)

    try:
        settings = _settings_from_args(args, os.environ if environ is None else environ)
    except WorksAdapterError as e:
        print(f"error: {e.message} (set GRAPHWORKS_URL or pass --url)", file=sys.stderr)
        return 2

    datasource = WorksDataSource(settings, transport=transport)
    try:
        return asyncio.run(_run_command(datasource, args))
    except WorksAdapterError as e:
        context = get_context(e)
        LOG.debug("command failed: %s", dict(context))
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
