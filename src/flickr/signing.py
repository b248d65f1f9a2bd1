"""
Flickr request signing
Canonical MD5 signatures, signed REST/auth URLs and multipart upload bodies.
"""

import hashlib
import logging
import os.path
import urllib.parse
from typing import Mapping, Optional

import requests

from .errors import RequestBuildError
from .types import CONTENT_TYPES, SERVICE_URL, UPLOAD_URL, UploadRequest

log = logging.getLogger(__name__)


def canonical_pairs(args: Mapping[str, str]) -> list[tuple[str, str]]:
    """Arguments sorted by the UTF-8 bytes of their keys."""
    return sorted(args.items(), key=lambda kv: kv[0].encode("utf-8"))


def sign(secret: str, args: Mapping[str, str]) -> str:
    """Return the api_sig for args: md5(secret + key1 + value1 + ...) in hex.

    Values are hashed raw; URL escaping only happens when the query is built.
    """
    m = hashlib.md5()
    m.update(secret.encode("utf-8"))
    for key, value in canonical_pairs(args):
        m.update((key + value).encode("utf-8"))
    return m.hexdigest()


def signed_url(
    secret: str, api_key: str, path: str, args: Mapping[str, str]
) -> str:
    """Build <service>/<path>/?<query> with api_key and api_sig added.

    path is "auth" for the authorization page and "rest" for API methods.
    """
    a = dict(args)
    a.pop("api_sig", None)
    a["api_key"] = api_key
    a["api_sig"] = sign(secret, a)
    return f"{SERVICE_URL}/{path}/?{urllib.parse.urlencode(a)}"


def method_url(
    secret: str,
    api_key: str,
    method: str,
    args: Mapping[str, str],
    auth_token: Optional[str] = None,
) -> str:
    """Signed REST URL for an API method; auth_token is included only when set."""
    a = dict(args)
    a["method"] = method
    if auth_token:
        a["auth_token"] = auth_token
    return signed_url(secret, api_key, "rest", a)


def auth_url(
    secret: str, api_key: str, perms: str, frob: Optional[str] = None
) -> str:
    """Authorization page URL asking the user to grant perms."""
    a = {"perms": perms}
    if frob:
        a["frob"] = frob
    return signed_url(secret, api_key, "auth", a)


def content_type_for(filename: str) -> Optional[str]:
    """MIME type for a photo filename, None when the extension is unknown."""
    _, ext = os.path.splitext(filename)
    return CONTENT_TYPES.get(ext.lower())


def upload_request(
    secret: str,
    api_key: str,
    auth_token: Optional[str],
    filename: str,
    photo: bytes,
    args: Optional[Mapping[str, str]] = None,
) -> UploadRequest:
    """Signed multipart POST for the async upload endpoint.

    Plain fields come first, the `photo` file part last. auth_token is always
    sent, as an empty string when unset.
    """
    a = dict(args or {})
    a.pop("api_sig", None)
    a["api_key"] = api_key
    a["auth_token"] = auth_token or ""
    a["async"] = "1"

    for key, value in a.items():
        if not isinstance(key, str) or not isinstance(value, str):
            raise RequestBuildError(
                f"field write failed [{key!r}={value!r}]: values must be str"
            )
    if not isinstance(photo, (bytes, bytearray)):
        raise RequestBuildError(
            f"photo data for {filename} must be bytes, got {type(photo).__name__}"
        )
    a["api_sig"] = sign(secret, a)
    files = {"photo": (filename, bytes(photo), content_type_for(filename))}
    try:
        prepared = requests.Request(
            "POST", UPLOAD_URL, data=a, files=files
        ).prepare()
    except (TypeError, ValueError) as exc:
        raise RequestBuildError(
            f"multipart encoding failed [{filename}]: {exc}"
        ) from exc

    log.debug(
        "Upload body for %s: %d fields, %d photo bytes",
        filename, len(a), len(photo),
    )
    return UploadRequest(
        url=UPLOAD_URL,
        headers={"Content-Type": prepared.headers["Content-Type"]},
        body=prepared.body,
    )
