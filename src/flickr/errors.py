"""Exception classes for the flickr package.

Every failure the client reports is one of the classes below, so callers
can branch on the kind of failure without matching message strings.
"""


class FlickrError(Exception):
    """Base exception for all Flickr client errors.

    Catching this exception will catch every error raised by the package.
    """


class TransportError(FlickrError):
    """Raised when the request never produced a usable response body.

    This can occur due to:
    - Network connectivity issues or timeouts
    - Non-2xx HTTP status codes
    """

    def __init__(self, method: str, url: str, reason: object):
        self.method = method
        self.url = url
        self.reason = reason
        super().__init__(f"{method} failed [{url}]: {reason}")


class DecodeError(FlickrError):
    """Raised when a response (or a stored value) cannot be interpreted.

    This can occur due to:
    - Malformed XML in the response body
    - A success envelope missing the expected payload element
    - Non-numeric values where numbers are expected
    - Malformed date strings passed to the date helpers
    """

    def __init__(self, what: str, reason: object):
        self.what = what
        self.reason = reason
        super().__init__(f"{what}: {reason}")


class APIError(FlickrError):
    """Raised when Flickr answers with stat="fail".

    The numeric code and message are kept verbatim, e.g. code 97
    "Missing signature" or code 5 "Filetype was not recognised".
    """

    def __init__(self, code: int, message: str):
        self.code = code
        self.message = message
        super().__init__(f"code {code}: {message}")


class RequestBuildError(FlickrError):
    """Raised when an upload body could not be encoded."""
