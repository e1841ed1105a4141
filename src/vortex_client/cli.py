"""Command-line entrypoint for token generation and invitation management."""

import argparse
import json
import logging
import sys
from typing import Any, List, Optional, Sequence

from pydantic import BaseModel, ValidationError

from .config import VortexSettings
from .types import VortexError
from .vortex import VortexClient

logger = logging.getLogger(__name__)


def _target(value: str) -> List[str]:
    kind, sep, rest = value.partition(":")
    if not sep or not kind or not rest:
        raise argparse.ArgumentTypeError(f"expected TYPE:VALUE, got {value!r}")
    return [kind, rest]


def _group(value: str) -> dict:
    parts = value.split(":", 2)
    if len(parts) != 3 or not all(parts):
        raise argparse.ArgumentTypeError(f"expected TYPE:GROUP_ID:NAME, got {value!r}")
    return {"type": parts[0], "groupId": parts[1], "name": parts[2]}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vortex-client",
        description="Generate Vortex widget tokens and manage invitations.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    jwt = subparsers.add_parser("generate-jwt", help="Sign a widget token locally.")
    jwt.add_argument("--user-id", required=True)
    jwt.add_argument(
        "--identifier",
        action="append",
        default=[],
        type=_target,
        metavar="TYPE:VALUE",
        help="User identifier, e.g. email:user@example.com (repeatable).",
    )
    jwt.add_argument(
        "--group",
        action="append",
        default=[],
        type=_group,
        metavar="TYPE:GROUP_ID:NAME",
        help="Group membership (repeatable).",
    )
    jwt.add_argument("--role")

    by_target = subparsers.add_parser("get-invitations", help="List invitations for a target.")
    by_target.add_argument("target", type=_target, metavar="TYPE:VALUE")

    for name, help_text in (
        ("get-invitation", "Fetch a single invitation."),
        ("revoke", "Revoke an invitation."),
        ("reinvite", "Send an invitation again."),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("invitation_id")

    accept = subparsers.add_parser("accept", help="Accept invitations for a target.")
    accept.add_argument("target", type=_target, metavar="TYPE:VALUE")
    accept.add_argument("invitation_ids", nargs="+")

    for name, help_text in (
        ("get-by-group", "List invitations for a group."),
        ("delete-by-group", "Delete all invitations for a group."),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("group_type")
        sub.add_argument("group_id")

    return parser


def _to_jsonable(result: Any) -> Any:
    if isinstance(result, BaseModel):
        return result.model_dump(by_alias=True, exclude_none=True)
    if isinstance(result, list):
        return [_to_jsonable(item) for item in result]
    return result


def _dispatch(client: VortexClient, args: argparse.Namespace) -> Any:
    if args.command == "generate-jwt":
        identifiers = [{"type": kind, "value": value} for kind, value in args.identifier]
        return client.generate_jwt(args.user_id, identifiers, args.group, args.role)
    if args.command == "get-invitations":
        return client.get_invitations_by_target(*args.target)
    if args.command == "get-invitation":
        return client.get_invitation(args.invitation_id)
    if args.command == "revoke":
        return client.revoke_invitation(args.invitation_id)
    if args.command == "reinvite":
        return client.reinvite(args.invitation_id)
    if args.command == "accept":
        kind, value = args.target
        return client.accept_invitations(args.invitation_ids, {"type": kind, "value": value})
    if args.command == "get-by-group":
        return client.get_invitations_by_group(args.group_type, args.group_id)
    if args.command == "delete-by-group":
        return client.delete_invitations_by_group(args.group_type, args.group_id)
    raise ValueError(f"Unknown command: {args.command}")


def main(
    argv: Optional[Sequence[str]] = None,
    settings: Optional[VortexSettings] = None,
) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        settings = settings or VortexSettings()
    except ValidationError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2

    with settings.create_client() as client:
        try:
            result = _dispatch(client, args)
        except VortexError as exc:
            logger.debug("command %s failed", args.command, exc_info=True)
            print(f"Error: {exc}", file=sys.stderr)
            return 1

    if isinstance(result, str):
        print(result)
    else:
        print(json.dumps(_to_jsonable(result), indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
