"""
Flickr response decoding
Turns <rsp stat="..."> envelopes into typed results or APIError.
"""

import logging
from typing import Optional
from xml.etree.ElementTree import Element, ParseError

from defusedxml import DefusedXmlException
from defusedxml import ElementTree as DefusedET

from .errors import APIError, DecodeError
from .types import (
    Dates,
    InfoResult,
    Owner,
    PhotoSet,
    PhotoUrl,
    SearchPhoto,
    SearchResult,
    Size,
    SizesResult,
    Tag,
    TicketStatus,
    User,
    Visibility,
)

STAT_OK = "ok"
STAT_FAIL = "fail"

log = logging.getLogger(__name__)


# ── Envelope ──────────────────────────────────────────────


def parse_envelope(body: bytes, what: str) -> Element:
    """Parse a response body and return the root of a stat="ok" envelope.

    Raises APIError for stat="fail" and DecodeError for anything that is not
    a well-formed envelope.
    """
    log.debug("Parsing %s response (%d bytes)", what, len(body))
    try:
        root = DefusedET.fromstring(body)
    except (ParseError, DefusedXmlException) as exc:
        raise DecodeError(f"{what} XML parsing failed", exc) from exc

    stat = root.get("stat")
    if stat == STAT_OK:
        return root
    if stat == STAT_FAIL:
        err = root.find("err")
        if err is None:
            raise DecodeError(what, "failure envelope without <err>")
        if not err.get("code"):
            raise DecodeError(what, "failure envelope <err> without code")
        raise APIError(_int(err.get("code"), f"{what} err.code"), err.get("msg", ""))
    raise DecodeError(what, f"unexpected envelope status {stat!r}")


def _payload(root: Element, tag: str, what: str) -> Element:
    el = root.find(tag)
    if el is None:
        raise DecodeError(what, f"missing <{tag}> element")
    return el


# ── Attribute helpers ─────────────────────────────────────


def _int(value: Optional[str], what: str) -> int:
    if value is None or value == "":
        return 0
    try:
        return int(value)
    except ValueError as exc:
        raise DecodeError(what, f"not an integer: {value!r}") from exc


def _flag(value: Optional[str]) -> bool:
    return value == "1"


def _text(el: Element, tag: str) -> str:
    child = el.find(tag)
    if child is None or child.text is None:
        return ""
    return child.text.strip()


def _ratio(width: str, height: str) -> float:
    try:
        w, h = float(width), float(height)
    except ValueError:
        return 0.0
    return w / h if h else 0.0


# ── Shapes ────────────────────────────────────────────────


def decode_search(body: bytes) -> SearchResult:
    what = "photos.search"
    photos = _payload(parse_envelope(body, what), "photos", what)
    return SearchResult(
        page=_int(photos.get("page"), f"{what} page"),
        pages=_int(photos.get("pages"), f"{what} pages"),
        per_page=_int(photos.get("perpage"), f"{what} perpage"),
        total=_int(photos.get("total"), f"{what} total"),
        photos=tuple(_search_photo(p) for p in photos.findall("photo")),
    )


def _search_photo(p: Element) -> SearchPhoto:
    width_t = p.get("width_t", "")
    height_t = p.get("height_t", "")
    return SearchPhoto(
        id=p.get("id", ""),
        secret=p.get("secret", ""),
        server=p.get("server", ""),
        farm=p.get("farm", ""),
        owner=p.get("owner", ""),
        title=p.get("title", ""),
        is_public=_flag(p.get("ispublic")),
        is_friend=_flag(p.get("isfriend")),
        is_family=_flag(p.get("isfamily")),
        width_t=width_t,
        height_t=height_t,
        ratio=_ratio(width_t, height_t),
    )


def decode_info(body: bytes) -> InfoResult:
    what = "photos.getInfo"
    p = _payload(parse_envelope(body, what), "photo", what)

    owner = p.find("owner")
    vis = p.find("visibility")
    dates = p.find("dates")
    return InfoResult(
        id=p.get("id", ""),
        secret=p.get("secret", ""),
        server=p.get("server", ""),
        farm=p.get("farm", ""),
        license=p.get("license", ""),
        rotation=p.get("rotation", ""),
        original_secret=p.get("originalsecret", ""),
        original_format=p.get("originalformat", ""),
        owner=Owner(
            nsid=owner.get("nsid", ""),
            username=owner.get("username", ""),
            realname=owner.get("realname", ""),
            location=owner.get("location", ""),
        ) if owner is not None else Owner(nsid=""),
        title=_text(p, "title"),
        description=_text(p, "description"),
        visibility=Visibility(
            is_public=_flag(vis.get("ispublic")),
            is_friend=_flag(vis.get("isfriend")),
            is_family=_flag(vis.get("isfamily")),
        ) if vis is not None else Visibility(),
        dates=Dates(
            posted=dates.get("posted", ""),
            taken=dates.get("taken", ""),
            last_update=dates.get("lastupdate", ""),
            taken_granularity=_int(
                dates.get("takengranularity"), f"{what} takengranularity"
            ),
        ) if dates is not None else Dates(),
        comments=_int(_text(p, "comments"), f"{what} comments"),
        tags=tuple(
            Tag(
                id=t.get("id", ""),
                text=(t.text or "").strip(),
                author=t.get("author", ""),
                raw=t.get("raw", ""),
            )
            for t in p.findall("tags/tag")
        ),
        urls=tuple(
            PhotoUrl(type=u.get("type", ""), url=(u.text or "").strip())
            for u in p.findall("urls/url")
        ),
    )


def decode_sizes(body: bytes) -> SizesResult:
    what = "photos.getSizes"
    sizes = _payload(parse_envelope(body, what), "sizes", what)
    return SizesResult(
        can_blog=_flag(sizes.get("canblog")),
        can_print=_flag(sizes.get("canprint")),
        can_download=_flag(sizes.get("candownload")),
        sizes=tuple(
            Size(
                label=s.get("label", ""),
                width=_int(s.get("width"), f"{what} width"),
                height=_int(s.get("height"), f"{what} height"),
                source=s.get("source", ""),
                url=s.get("url", ""),
                media=s.get("media", ""),
            )
            for s in sizes.findall("size")
        ),
    )


def decode_photosets(body: bytes) -> tuple[PhotoSet, ...]:
    what = "photosets.getList"
    sets = _payload(parse_envelope(body, what), "photosets", what)
    return tuple(
        PhotoSet(
            id=s.get("id", ""),
            title=_text(s, "title"),
            description=_text(s, "description"),
            photos=_int(s.get("photos"), f"{what} photos"),
            videos=_int(s.get("videos"), f"{what} videos"),
        )
        for s in sets.findall("photoset")
    )


def decode_tickets(body: bytes) -> tuple[TicketStatus, ...]:
    what = "photos.upload.checkTickets"
    uploader = _payload(parse_envelope(body, what), "uploader", what)
    return tuple(
        TicketStatus(
            id=t.get("id", ""),
            complete=_flag(t.get("complete")),
            invalid=_flag(t.get("invalid")),
            photo_id=t.get("photoid", ""),
        )
        for t in uploader.findall("ticket")
    )


def decode_token(body: bytes) -> tuple[str, User]:
    what = "auth.getToken"
    auth = _payload(parse_envelope(body, what), "auth", what)
    user = _payload(auth, "user", what)
    token = _text(auth, "token")
    if not token:
        raise DecodeError(what, "empty <token>")
    return token, User(
        nsid=user.get("nsid", ""),
        username=user.get("username", ""),
        fullname=user.get("fullname", ""),
    )


def decode_frob(body: bytes) -> str:
    what = "auth.getFrob"
    root = parse_envelope(body, what)
    _payload(root, "frob", what)
    return _text(root, "frob")


def decode_ticket_id(body: bytes) -> str:
    what = "upload"
    root = parse_envelope(body, what)
    _payload(root, "ticketid", what)
    return _text(root, "ticketid")
