"""Tests for URL fragment parsing."""

import pytest

from playground_share.models import InlineToken, NoShareState, RemoteRef
from playground_share.share.url_state import (
    fragment_params,
    parse_share_state,
    remote_ref_id,
    sample_from_fragment,
    with_fragment,
)
from playground_share.validators import validate_sample_id

DEFAULT = "examples/hello-world"


class TestFragmentParams:
    def test_leading_hash_optional(self):
        assert fragment_params("#a=1&b=2") == fragment_params("a=1&b=2")

    def test_first_occurrence_wins(self):
        assert fragment_params("#gist=a&gist=b") == {"gist": "a"}

    def test_percent_decoding(self):
        assert fragment_params("#sample=a%2Fb") == {"sample": "a/b"}

    def test_empty(self):
        assert fragment_params("") == {}


class TestParseShareState:
    def test_gist(self):
        assert parse_share_state("#gist=abc123") == RemoteRef(id="abc123")

    def test_project(self):
        assert parse_share_state("#project=eyJ9") == InlineToken(token="eyJ9")

    def test_gist_wins_over_project(self):
        state = parse_share_state("#project=eyJ9&gist=abc123")
        assert state == RemoteRef(id="abc123")

    def test_empty_gist_falls_through_to_project(self):
        assert parse_share_state("#gist=&project=tok") == InlineToken(
            token="tok"
        )

    def test_nothing(self):
        assert parse_share_state("") == NoShareState()
        assert parse_share_state("#sample=x&other=y") == NoShareState()

    def test_remote_ref_id(self):
        assert remote_ref_id("#gist=g1&project=p") == "g1"
        assert remote_ref_id("#project=p") is None


class TestSampleFromFragment:
    def test_valid_sample(self):
        assert (
            sample_from_fragment("#sample=tutorials/intro-to-lit", DEFAULT)
            == "tutorials/intro-to-lit"
        )

    def test_missing_sample_uses_default(self):
        assert sample_from_fragment("#other=1", DEFAULT) == DEFAULT

    @pytest.mark.parametrize(
        "value",
        ["%3B%20DROP", "..%2Fetc", "a.b", "a%20b", ""],
    )
    def test_invalid_sample_uses_default(self, value):
        assert sample_from_fragment(f"#sample={value}", DEFAULT) == DEFAULT

    def test_validate_sample_id(self):
        assert validate_sample_id("examples/hello_world-2")
        assert not validate_sample_id("; DROP")
        assert not validate_sample_id(None)


class TestWithFragment:
    def test_replaces_fragment(self):
        assert (
            with_fragment("https://x.dev/p/?q=1#gist=a&sample=b", "project=t")
            == "https://x.dev/p/?q=1#project=t"
        )

    def test_adds_fragment(self):
        assert with_fragment("https://x.dev/p/", "project=t") == (
            "https://x.dev/p/#project=t"
        )
