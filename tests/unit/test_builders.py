"""Unit tests for verification request URL construction."""

from urllib.parse import parse_qs, parse_qsl, urlsplit

import pytest

from yubikiller.builders.request import build_verification_url
from yubikiller.config import YUBICO_API_URL
from yubikiller.errors import RandomSourceError, URLBuildError


def _query(url: str) -> dict[str, list[str]]:
    return parse_qs(urlsplit(url).query, keep_blank_values=True)


class TestBuildVerificationUrl:
    def test_contains_required_params(self):
        url = build_verification_url("cccccccccccc")
        assert "otp=cccccccccccc" in url
        assert "id=1" in url
        query = _query(url)
        assert len(query["nonce"]) == 1
        assert len(query["nonce"][0]) == 16

    def test_otp_round_trips(self):
        url = build_verification_url("cccccccccccc")
        assert _query(url)["otp"] == ["cccccccccccc"]

    def test_special_characters_escaped_and_recovered(self):
        otp = "a b+c&d=e/é"
        url = build_verification_url(otp)
        assert " " not in url
        assert "&d=" not in url
        assert _query(url)["otp"] == [otp]

    def test_keeps_endpoint(self):
        parts = urlsplit(build_verification_url("cccccccccccc"))
        assert parts.scheme == "https"
        assert parts.netloc == "api.yubico.com"
        assert parts.path == "/wsapi/2.0/verify"

    def test_query_keys_sorted(self):
        url = build_verification_url("cccccccccccc")
        keys = [key for key, _ in parse_qsl(urlsplit(url).query)]
        assert keys == ["id", "nonce", "otp"]

    def test_fresh_nonce_per_call(self):
        first = _query(build_verification_url("cccccccccccc"))["nonce"]
        second = _query(build_verification_url("cccccccccccc"))["nonce"]
        assert first != second

    def test_replaces_existing_otp_and_nonce(self):
        url = build_verification_url(
            "newotp", "https://verify.example.test/verify?id=7&otp=old&nonce=stale"
        )
        query = _query(url)
        assert query["id"] == ["7"]
        assert query["otp"] == ["newotp"]
        assert query["nonce"] != ["stale"]

    def test_keeps_extra_base_params(self):
        url = build_verification_url(
            "cccccccccccc", "https://verify.example.test/verify?id=1&timeout=8&sl=50"
        )
        query = _query(url)
        assert query["timeout"] == ["8"]
        assert query["sl"] == ["50"]

    def test_default_base_url(self):
        assert YUBICO_API_URL == "https://api.yubico.com/wsapi/2.0/verify?id=1"

    @pytest.mark.parametrize(
        "base_url",
        ["not a url", "ftp://api.example.test/verify", "https:///verify", "https://[::1/verify"],
        ids=["no_scheme", "wrong_scheme", "no_host", "bad_ipv6"],
    )
    def test_malformed_base_url_raises(self, base_url):
        with pytest.raises(URLBuildError):
            build_verification_url("cccccccccccc", base_url)

    def test_nonce_failure_propagates(self, mocker):
        mocker.patch(
            "yubikiller.builders.request.generate_nonce",
            side_effect=RandomSourceError("system entropy source unavailable"),
        )
        with pytest.raises(RandomSourceError):
            build_verification_url("cccccccccccc")
