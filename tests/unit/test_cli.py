"""Unit tests for the yubikiller command line entry point."""

from unittest.mock import AsyncMock

import pytest

from yubikiller.cli import EXIT_FAILURE, main
from yubikiller.errors import TransportError, ValidationFailure
from yubikiller.infrastructure.context import RequestContext
from yubikiller.schemas.verification import InvalidationOutcome, VerificationStatus

OTP = "cccccccccccbgjjtrhnbcdhvlgbtjdbhikjntcneirbd"


@pytest.fixture
def invalidate(mocker):
    mocker.patch("yubikiller.cli.setup_logging")
    return mocker.patch(
        "yubikiller.cli.invalidate_token",
        new=AsyncMock(return_value=InvalidationOutcome(VerificationStatus.OK, {"status": "OK"})),
    )


class TestMain:
    def test_success(self, invalidate, capsys):
        assert main([OTP]) == 0
        assert capsys.readouterr().out.strip() == "successfully invalidated token"
        assert invalidate.await_args[0][0] == OTP

    @pytest.mark.parametrize("argv", [[], [OTP, OTP]], ids=["none", "two"])
    def test_wrong_argument_count(self, invalidate, capsys, argv):
        assert main(argv) == EXIT_FAILURE == 2
        assert "requires at least 1 yubikey OTP" in capsys.readouterr().out
        invalidate.assert_not_awaited()

    def test_validation_failure(self, invalidate, capsys):
        invalidate.side_effect = ValidationFailure(
            InvalidationOutcome(VerificationStatus.REPLAYED_OTP, {"status": "REPLAYED_OTP"})
        )
        assert main([OTP]) == 2
        out = capsys.readouterr().out
        assert out.startswith("encountered error invalidating token:")
        assert "REPLAYED_OTP" in out

    def test_transport_failure(self, invalidate, capsys):
        invalidate.side_effect = TransportError("deadline exceeded")
        assert main([OTP]) == 2
        assert "deadline exceeded" in capsys.readouterr().out

    def test_timeout_option_sets_context_deadline(self, invalidate, mocker):
        ctx_cls = mocker.patch("yubikiller.cli.RequestContext", wraps=RequestContext)
        assert main(["--timeout", "3", OTP]) == 0
        ctx_cls.assert_called_once_with(timeout=3.0)

    def test_default_timeout_from_settings(self, invalidate, mocker, monkeypatch):
        monkeypatch.setenv("REQUEST_TIMEOUT_SECONDS", "6")
        ctx_cls = mocker.patch("yubikiller.cli.RequestContext", wraps=RequestContext)
        assert main([OTP]) == 0
        ctx_cls.assert_called_once_with(timeout=6.0)

    def test_invalid_setting_reports_failure(self, invalidate, capsys, monkeypatch):
        monkeypatch.setenv("REQUEST_TIMEOUT_SECONDS", "abc")
        assert main([OTP]) == EXIT_FAILURE
        out = capsys.readouterr().out
        assert out.startswith("encountered error invalidating token: invalid configuration")
        assert "request_timeout_seconds" in out
        invalidate.assert_not_awaited()

    def test_production_logs_as_json(self, invalidate, mocker, monkeypatch):
        monkeypatch.setenv("ENV", "production")
        monkeypatch.delenv("LOG_FORMAT", raising=False)
        setup = mocker.patch("yubikiller.cli.setup_logging")
        assert main([OTP]) == 0
        assert setup.call_args[0][0].log_format == "json"
