# psref/errors.py

"""Exception hierarchy raised by the PSREF client.

Callers can tell "the resource does not exist" (:class:`NotFoundError`)
apart from "the resource could not be fetched" (:class:`RequestError`),
from a search that matched too much (:class:`AmbiguousMatchError`) and
from a caller-side cancellation (:class:`Cancelled`).
"""


class PsrefError(Exception):
    """Base class for every error raised by this package."""


class NotFoundError(PsrefError):
    """The service reports no such resource (HTTP 404 or empty search)."""

    def __init__(self, what: str = "not found") -> None:
        super().__init__(what)
        self.what = what


class RequestError(PsrefError):
    """A single request attempt failed and may be retried."""


class StatusError(RequestError):
    """The service answered with a status other than 200 or 404."""

    def __init__(self, path: str, status_code: int, reason: str = "") -> None:
        status = f"{status_code} {reason}".strip()
        super().__init__(f"{path}: status {status}")
        self.path = path
        self.status_code = status_code
        self.reason = reason


class TransportError(RequestError):
    """The HTTP transport raised before a response was received."""


class DecodeError(RequestError):
    """The response body is not the expected JSON shape."""


class AmbiguousMatchError(PsrefError):
    """A search-based lookup matched more than one entity."""


class MultipleProductsError(AmbiguousMatchError):
    def __init__(self) -> None:
        super().__init__("more than one product matched")


class MultipleModelsError(AmbiguousMatchError):
    def __init__(self) -> None:
        super().__init__("more than one model matched")


class Cancelled(PsrefError):
    """The caller cancelled the operation."""


class DeadlineExceeded(Cancelled):
    """The caller's deadline passed (or would pass while waiting)."""
