"""Error taxonomy for share-state decoding and remote gist resolution.

- ``DecodeError``: a token is not valid URL-safe base64 (or not UTF-8).
- ``MalformedProjectError``: a token decodes fine but does not hold a list
  of file records.
- ``NotFoundError``: the remote gist does not exist (HTTP 404).
- ``TransportError``: any other failure fetching a gist.

``to_user_facing()`` turns any of them into the heading/message pair shown
to the user.
"""

from __future__ import annotations

from dataclasses import dataclass


class PlaygroundShareError(Exception):
    """Base class for all share-state errors."""


class DecodeError(PlaygroundShareError):
    """The token alphabet or its base64 structure is invalid."""


class MalformedProjectError(PlaygroundShareError):
    """The decoded payload is not a well-formed list of project files."""


class RemoteError(PlaygroundShareError):
    """A remote gist could not be fetched.

    Attributes:
        status: HTTP status code, or ``None`` when no response arrived.
    """

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class NotFoundError(RemoteError):
    """The remote gist does not exist."""

    def __init__(self, message: str, status: int | None = 404):
        super().__init__(message, status)


class TransportError(RemoteError):
    """Fetching the remote gist failed for a reason other than 404."""


@dataclass(frozen=True)
class UserFacingError:
    """Human-readable error notification.

    Attributes:
        heading: Short title for the notification.
        message: One-sentence explanation for the user.
        detail: Diagnostic text (exception message), may be empty.
    """

    heading: str
    message: str
    detail: str = ""


GIST_NOT_FOUND = UserFacingError(
    heading="Gist not found",
    message="The given GitHub gist could not be found.",
)


def to_user_facing(error: BaseException) -> UserFacingError:
    """Translate an exception into the notification shown to the user.

    Only a 404 from the gist API gets a specific message; everything else
    is reported generically with the exception text as detail.
    """
    if isinstance(error, NotFoundError) and error.status == 404:
        return UserFacingError(
            heading=GIST_NOT_FOUND.heading,
            message=GIST_NOT_FOUND.message,
            detail=str(error),
        )
    return UserFacingError(
        heading="Unexpected error",
        message="Something went wrong while loading the project.",
        detail=str(error),
    )
