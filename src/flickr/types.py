"""
Shared types for the Flickr client.
Endpoints, size codes, and the records decoded from API responses.
"""

from dataclasses import dataclass
from datetime import datetime, timezone

from .errors import DecodeError

SERVICE_URL = "https://api.flickr.com/services"
UPLOAD_URL = "https://up.flickr.com/services/upload/"

READ_PERM = "read"
WRITE_PERM = "write"
DELETE_PERM = "delete"

# See http://www.flickr.com/services/api/misc.urls.html
SIZE_SMALL_SQUARE = "s"
SIZE_THUMBNAIL = "t"
SIZE_SMALL = "m"
SIZE_MEDIUM_500 = "-"
SIZE_MEDIUM_640 = "z"
SIZE_LARGE = "b"
SIZE_ORIGINAL = "o"

CONTENT_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".jpe": "image/jpeg",
    ".gif": "image/gif",
    ".png": "image/png",
}

TAKEN_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class User:
    nsid: str
    username: str
    fullname: str = ""

    def to_dict(self) -> dict[str, str]:
        return {
            "nsid": self.nsid,
            "username": self.username,
            "fullname": self.fullname,
        }


@dataclass(frozen=True)
class Photo:
    id: str
    secret: str = ""
    server: str = ""
    farm: str = ""

    def url(self, size: str) -> str:
        """Static image URL of this photo in the given size code."""
        if size == SIZE_MEDIUM_500:
            return (
                f"http://farm{self.farm}.static.flickr.com/"
                f"{self.server}/{self.id}_{self.secret}.jpg"
            )
        return (
            f"http://farm{self.farm}.static.flickr.com/"
            f"{self.server}/{self.id}_{self.secret}_{size}.jpg"
        )


@dataclass(frozen=True)
class SearchPhoto(Photo):
    owner: str = ""
    title: str = ""
    is_public: bool = False
    is_friend: bool = False
    is_family: bool = False
    width_t: str = ""
    height_t: str = ""
    # width_t / height_t, fixed at decode time.
    ratio: float = 0.0


@dataclass(frozen=True)
class SearchResult:
    page: int
    pages: int
    per_page: int
    total: int
    photos: tuple[SearchPhoto, ...] = ()


@dataclass(frozen=True)
class Owner:
    nsid: str
    username: str = ""
    realname: str = ""
    location: str = ""


@dataclass(frozen=True)
class Visibility:
    is_public: bool = False
    is_friend: bool = False
    is_family: bool = False


def _from_timestamp(field: str, value: str) -> datetime:
    try:
        return datetime.fromtimestamp(int(value), tz=timezone.utc)
    except (ValueError, OverflowError, OSError) as exc:
        raise DecodeError(f"dates.{field}", f"not a unix timestamp: {value!r}") from exc


@dataclass(frozen=True)
class Dates:
    """
    Photo dates exactly as the server sent them.

    posted and last_update are unix timestamps, taken is a local
    "YYYY-MM-DD HH:MM:SS" string. Conversion happens only on request.
    """

    posted: str = ""
    taken: str = ""
    last_update: str = ""
    taken_granularity: int = 0

    def posted_at(self) -> datetime:
        return _from_timestamp("posted", self.posted)

    def last_update_at(self) -> datetime:
        return _from_timestamp("lastupdate", self.last_update)

    def taken_at(self) -> datetime:
        """Naive datetime: Flickr does not say which timezone a photo was taken in."""
        try:
            return datetime.strptime(self.taken, TAKEN_FORMAT)
        except ValueError as exc:
            raise DecodeError("dates.taken", f"unexpected format: {self.taken!r}") from exc


@dataclass(frozen=True)
class Tag:
    id: str
    text: str
    author: str = ""
    raw: str = ""


@dataclass(frozen=True)
class PhotoUrl:
    type: str
    url: str


@dataclass(frozen=True)
class InfoResult(Photo):
    license: str = ""
    rotation: str = ""
    original_secret: str = ""
    original_format: str = ""
    owner: Owner = Owner(nsid="")
    title: str = ""
    description: str = ""
    visibility: Visibility = Visibility()
    dates: Dates = Dates()
    comments: int = 0
    tags: tuple[Tag, ...] = ()
    urls: tuple[PhotoUrl, ...] = ()

    def url_of_type(self, url_type: str) -> str:
        """First URL of the given type (e.g. "photopage"), or ""."""
        for u in self.urls:
            if u.type == url_type:
                return u.url
        return ""


@dataclass(frozen=True)
class Size:
    label: str
    width: int
    height: int
    source: str
    url: str
    media: str = ""


@dataclass(frozen=True)
class SizesResult:
    can_blog: bool
    can_print: bool
    can_download: bool
    sizes: tuple[Size, ...] = ()


@dataclass(frozen=True)
class PhotoSet:
    id: str
    title: str = ""
    description: str = ""
    photos: int = 0
    videos: int = 0


@dataclass(frozen=True)
class TicketStatus:
    id: str
    complete: bool = False
    invalid: bool = False
    photo_id: str = ""


@dataclass(frozen=True)
class UploadRequest:
    url: str
    headers: dict[str, str]
    body: bytes
