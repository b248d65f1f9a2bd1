"""
Flickr API Client
Search, photo info and sizes, photo sets, async uploads and ticket checks.
"""

import argparse
import dataclasses
import json
import logging
import os
import sys
from typing import Callable, Iterable, Mapping, Optional, TypeVar

from . import decoding, signing
from .errors import FlickrError
from .tickets import TicketTracker
from .transport import DEFAULT_TIMEOUT_SEC, RequestsTransport, Transport
from .types import (
    InfoResult,
    PhotoSet,
    SearchResult,
    SizesResult,
    TicketStatus,
    User,
)

T = TypeVar("T")

log = logging.getLogger(__name__)


class FlickrClient:
    """Flickr API client. Every call is signed with the shared secret."""

    def __init__(
        self,
        api_key: str,
        secret: str,
        transport: Optional[Transport] = None,
        auth_token: Optional[str] = None,
    ):
        self._api_key = api_key
        self._secret = secret
        self._transport = transport or RequestsTransport()
        self._auth_token = auth_token or None

    def __repr__(self) -> str:
        return (
            f"FlickrClient(api_key={self._api_key!r}, "
            f"authorized={self._auth_token is not None})"
        )

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def auth_token(self) -> Optional[str]:
        return self._auth_token

    @auth_token.setter
    def auth_token(self, token: str) -> None:
        if self._auth_token is not None:
            raise ValueError("auth token is already set")
        self._auth_token = token or None

    def _get(
        self, method: str, args: Mapping[str, str], decode: Callable[[bytes], T]
    ) -> T:
        log.debug("Calling %s", method)
        url = signing.method_url(
            self._secret, self._api_key, method, args, self._auth_token
        )
        return decode(self._transport.fetch(url))

    # ── Auth ──────────────────────────────────────────────

    def auth_url(self, perms: str, frob: Optional[str] = None) -> str:
        """URL of the page where the user grants perms. No request is made."""
        return signing.auth_url(self._secret, self._api_key, perms, frob)

    def get_frob(self) -> str:
        return self._get("flickr.auth.getFrob", {}, decoding.decode_frob)

    def get_token(self, frob: str) -> tuple[str, User]:
        """Exchange a frob for an auth token; the client keeps it if it has none."""
        token, user = self._get(
            "flickr.auth.getToken", {"frob": frob}, decoding.decode_token
        )
        if self._auth_token is None:
            self.auth_token = token
        return token, user

    # ── Photos ────────────────────────────────────────────

    def search(
        self, args: Optional[Mapping[str, str]] = None, **kwargs: str
    ) -> SearchResult:
        a = {**(args or {}), **kwargs}
        return self._get("flickr.photos.search", a, decoding.decode_search)

    def get_info(self, photo_id: str) -> InfoResult:
        return self._get(
            "flickr.photos.getInfo", {"photo_id": photo_id}, decoding.decode_info
        )

    def get_sizes(self, photo_id: str) -> SizesResult:
        return self._get(
            "flickr.photos.getSizes", {"photo_id": photo_id}, decoding.decode_sizes
        )

    # ── Uploads ───────────────────────────────────────────

    def upload(
        self,
        filename: str,
        photo: bytes,
        args: Optional[Mapping[str, str]] = None,
    ) -> str:
        """Upload photo asynchronously and return its ticket id.

        Unsupported file types are reported by Flickr as APIError.
        """
        req = signing.upload_request(
            self._secret, self._api_key, self._auth_token, filename, photo, args
        )
        log.debug("Uploading %s (%d bytes)", filename, len(photo))
        body = self._transport.send("POST", req.url, req.headers, req.body)
        return decoding.decode_ticket_id(body)

    def check_tickets(self, ticket_ids: Iterable[str]) -> tuple[TicketStatus, ...]:
        """Statuses of the given tickets, in the order they were asked for."""
        ids = list(ticket_ids)
        statuses = self._get(
            "flickr.photos.upload.checkTickets",
            {"tickets": ",".join(ids)},
            decoding.decode_tickets,
        )
        by_id = {s.id: s for s in statuses}
        asked = set(ids)
        ordered = [by_id[i] for i in ids if i in by_id]
        extra = [s for s in statuses if s.id not in asked]
        return tuple(ordered + extra)

    def poll_tickets(self, tracker: TicketTracker) -> TicketTracker:
        """One checkTickets round for the tracker's unfinished tickets."""
        pending = tracker.pending()
        if not pending:
            return tracker
        return tracker.apply(self.check_tickets(pending))

    # ── Sets ──────────────────────────────────────────────

    def get_sets(self, user_id: str) -> tuple[PhotoSet, ...]:
        return self._get(
            "flickr.photosets.getList",
            {"user_id": user_id},
            decoding.decode_photosets,
        )


# ── CLI ───────────────────────────────────────────────────


def add_credential_args(parser: argparse.ArgumentParser) -> None:
    """--api-key/--secret/--timeout/--verbose, defaulting from the environment."""
    parser.add_argument("--api-key", default=os.environ.get("FLICKR_API_KEY"))
    parser.add_argument("--secret", default=os.environ.get("FLICKR_SECRET"))
    parser.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT_SEC)
    parser.add_argument("-v", "--verbose", action="store_true")


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(message)s",
    )


def _key_value(arg: str) -> tuple[str, str]:
    key, sep, value = arg.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {arg!r}")
    return key, value


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Flickr API client")
    add_credential_args(parser)
    parser.add_argument(
        "--auth-token", default=os.environ.get("FLICKR_AUTH_TOKEN")
    )

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("search")
    p.add_argument("--text")
    p.add_argument("--user-id")
    p.add_argument("--per-page", type=int)
    p.add_argument("--page", type=int)
    p.add_argument(
        "--arg", type=_key_value, action="append", default=[],
        help="extra search argument as KEY=VALUE",
    )

    p = sub.add_parser("info")
    p.add_argument("--photo-id", required=True)

    p = sub.add_parser("sizes")
    p.add_argument("--photo-id", required=True)

    p = sub.add_parser("upload")
    p.add_argument("--file", required=True)
    p.add_argument("--title")
    p.add_argument("--description")
    p.add_argument("--tags")

    p = sub.add_parser("check-tickets")
    p.add_argument("--tickets", nargs="+", required=True)

    p = sub.add_parser("sets")
    p.add_argument("--user-id", required=True)

    return parser


def _search_args(a: argparse.Namespace) -> dict[str, str]:
    args = dict(a.arg)
    for key, value in (
        ("text", a.text),
        ("user_id", a.user_id),
        ("per_page", a.per_page),
        ("page", a.page),
    ):
        if value is not None:
            args[key] = str(value)
    return args


def _upload(c: FlickrClient, a: argparse.Namespace) -> dict:
    with open(a.file, "rb") as f:
        photo = f.read()
    args = {
        k: v
        for k, v in (
            ("title", a.title),
            ("description", a.description),
            ("tags", a.tags),
        )
        if v is not None
    }
    return {"ticket_id": c.upload(os.path.basename(a.file), photo, args)}


def _asdict(result):
    if isinstance(result, tuple):
        return [dataclasses.asdict(r) for r in result]
    return dataclasses.asdict(result)


_DISPATCH = {
    "search": lambda c, a: _asdict(c.search(_search_args(a))),
    "info": lambda c, a: _asdict(c.get_info(a.photo_id)),
    "sizes": lambda c, a: _asdict(c.get_sizes(a.photo_id)),
    "upload": _upload,
    "check-tickets": lambda c, a: _asdict(c.check_tickets(a.tickets)),
    "sets": lambda c, a: _asdict(c.get_sets(a.user_id)),
}


def main() -> None:
    """CLI entry point for API operations."""
    args = _build_parser().parse_args()
    configure_logging(args.verbose)

    if not args.api_key or not args.secret:
        print("API key and secret are required (--api-key/--secret or "
              "FLICKR_API_KEY/FLICKR_SECRET)", file=sys.stderr)
        sys.exit(1)

    handler = _DISPATCH.get(args.command)
    if not handler:
        print("Unknown command", file=sys.stderr)
        sys.exit(1)

    transport = RequestsTransport(timeout=args.timeout)
    client = FlickrClient(
        args.api_key, args.secret, transport, auth_token=args.auth_token
    )
    try:
        result = handler(client, args)
        json.dump(result, sys.stdout, ensure_ascii=False, indent=2)
        print()
    except (FlickrError, OSError) as exc:
        print(json.dumps({"error": str(exc)}), file=sys.stderr)
        sys.exit(1)
    finally:
        transport.close()
