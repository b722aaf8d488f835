"""Tests for the error taxonomy and user-facing translation."""

import pytest

from playground_share.errors import (
    GIST_NOT_FOUND,
    DecodeError,
    MalformedProjectError,
    NotFoundError,
    PlaygroundShareError,
    RemoteError,
    TransportError,
    to_user_facing,
)


def test_hierarchy():
    for cls in (DecodeError, MalformedProjectError, RemoteError):
        assert issubclass(cls, PlaygroundShareError)
    assert issubclass(NotFoundError, RemoteError)
    assert issubclass(TransportError, RemoteError)


def test_not_found_defaults_to_404():
    assert NotFoundError("Gist x not found").status == 404


def test_gist_not_found_message():
    error = to_user_facing(NotFoundError("Gist x not found"))
    assert error.heading == GIST_NOT_FOUND.heading == "Gist not found"
    assert error.message == "The given GitHub gist could not be found."
    assert error.detail == "Gist x not found"


@pytest.mark.parametrize(
    "exc",
    [
        TransportError("Failed to fetch Gist x: HTTP 500", status=500),
        NotFoundError("odd", status=None),
        DecodeError("Token length 5 is not valid base64"),
        MalformedProjectError("Project token repeats a file name"),
        RuntimeError("boom"),
    ],
)
def test_everything_else_is_generic(exc):
    error = to_user_facing(exc)
    assert error.heading == "Unexpected error"
    assert error.detail == str(exc)
