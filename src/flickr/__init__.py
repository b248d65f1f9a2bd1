"""
flickr — signed Flickr REST client with async uploads.
"""

from .auth import authenticate
from .client import FlickrClient
from .errors import (
    APIError,
    DecodeError,
    FlickrError,
    RequestBuildError,
    TransportError,
)
from .tickets import TicketState, TicketTracker
from .transport import RequestsTransport, Transport
from .types import (
    InfoResult,
    Photo,
    PhotoSet,
    SearchPhoto,
    SearchResult,
    SizesResult,
    TicketStatus,
    User,
)

__all__ = [
    "FlickrClient",
    "authenticate",
    "Transport",
    "RequestsTransport",
    "TicketState",
    "TicketTracker",
    "FlickrError",
    "TransportError",
    "DecodeError",
    "APIError",
    "RequestBuildError",
    "Photo",
    "SearchPhoto",
    "SearchResult",
    "InfoResult",
    "SizesResult",
    "PhotoSet",
    "TicketStatus",
    "User",
]
__version__ = "0.1.0"
