from __future__ import annotations
import argparse
import json
import logging
from dataclasses import asdict
from typing import Any, Dict, List, Sequence
from zammad_node.application.load_options import ZammadLoadOptions
from zammad_node.domain.models import RESOURCES, Node
from zammad_node.infrastructure.config_loader import load_client_config, load_zammad_credentials
from zammad_node.infrastructure.zammad_client import ZammadClient
from zammad_node.shared.errors import CredentialsError, NodeError


logger = logging.getLogger(__name__)

def logging_conf(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )

def _parse_qs(pairs: Sequence[str]) -> Dict[str, str]:
    qs: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"Query parameter must be key=value, got {pair!r}")
        qs[key] = value
    return qs

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="zammad-node", description="Call the Zammad REST API")
    p.add_argument("--node-name", default="Zammad", help="node name used in error reports")
    p.add_argument("-v", "--verbose", action="store_true")
    sub = p.add_subparsers(dest="command", required=True)

    req = sub.add_parser("request", help="call an API endpoint and print the JSON body")
    req.add_argument("method")
    req.add_argument("endpoint", help="path below /api/v1, e.g. /tickets")
    req.add_argument("--qs", action="append", default=[], metavar="KEY=VALUE")
    req.add_argument("--body", help="JSON request body")
    req.add_argument("--all", action="store_true", help="follow pagination")
    req.add_argument("--limit", type=int, default=0, help="max items with --all (0 = unlimited)")

    fields = sub.add_parser("fields", help="list attribute load options of a resource")
    fields.add_argument("resource", choices=RESOURCES)
    fields.add_argument("--custom", action="store_true", help="only custom attributes")

    return p

def run(args: argparse.Namespace, client: ZammadClient) -> Any:
    if args.command == "request":
        body = json.loads(args.body) if args.body else None
        qs = _parse_qs(args.qs)
        if args.all:
            return client.request_all_items(args.method, args.endpoint, body, qs, limit=args.limit)
        return client.request(args.method, args.endpoint, body, qs)

    options = ZammadLoadOptions(client).get_fields(args.resource, custom_only=args.custom)
    result: List[Dict[str, Any]] = [asdict(o) for o in options]
    return result

def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging_conf(args.verbose)

    try:
        credentials = load_zammad_credentials()
        config = load_client_config()
    except CredentialsError as exc:
        logger.error("Invalid Zammad configuration: %s", exc)
        return 1

    client = ZammadClient(credentials, Node(name=args.node_name), config)

    try:
        result = run(args, client)
    except NodeError as exc:
        logger.error("Zammad call failed: %s", exc)
        return 1
    except (argparse.ArgumentTypeError, json.JSONDecodeError) as exc:
        logger.error("Invalid arguments: %s", exc)
        return 2

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0
