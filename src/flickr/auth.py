"""
Flickr desktop authentication
getFrob -> user approves in the browser -> getToken.
"""

import argparse
import json
import sys

from .client import FlickrClient, add_credential_args, configure_logging
from .errors import FlickrError
from .transport import RequestsTransport
from .types import DELETE_PERM, READ_PERM, WRITE_PERM, User


def authenticate(client: FlickrClient, perms: str = READ_PERM) -> tuple[str, User]:
    """Full frob handshake. Blocks on stdin until the user confirms approval."""
    frob = client.get_frob()
    print(f"[+] Frob: {frob}", file=sys.stderr)

    print("[*] Open this URL and authorize the application:", file=sys.stderr)
    print(f"    {client.auth_url(perms, frob)}", file=sys.stderr)
    print("[*] Press Enter once authorized...", file=sys.stderr)
    input()

    token, user = client.get_token(frob)
    print(f"[+] Authorized as {user.username}", file=sys.stderr)
    return token, user


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Flickr authorization")
    add_credential_args(parser)
    parser.add_argument(
        "--perms",
        choices=[READ_PERM, WRITE_PERM, DELETE_PERM],
        default=READ_PERM,
    )
    return parser


def main() -> None:
    """CLI entry point: authorize and print the token as JSON."""
    args = _build_parser().parse_args()
    configure_logging(args.verbose)

    if not args.api_key or not args.secret:
        print("[!] API key and secret are required", file=sys.stderr)
        sys.exit(1)

    transport = RequestsTransport(timeout=args.timeout)
    client = FlickrClient(args.api_key, args.secret, transport)
    try:
        token, user = authenticate(client, args.perms)
    except FlickrError as exc:
        print(f"[!] Authorization failed: {exc}", file=sys.stderr)
        sys.exit(1)
    finally:
        transport.close()

    json.dump({"auth_token": token, **user.to_dict()}, sys.stdout, indent=2)
    print()
