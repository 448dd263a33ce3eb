"""Tests for tesla_auth exceptions."""

from tesla_auth.exceptions import (
    AuthorizationError,
    AuthorizationExpiredError,
    ConfigError,
    CsrfMismatchError,
    MalformedResponseError,
    MissingParameterError,
    TeslaAuthError,
    TokenExchangeError,
)


class TestExceptions:
    """Tests for the exception hierarchy."""

    def test_tesla_auth_error_is_base_exception(self):
        error = TeslaAuthError("test error")
        assert isinstance(error, Exception)
        assert str(error) == "test error"

    def test_missing_parameter_error_names_parameter(self):
        """MissingParameterError records which parameter is missing."""
        error = MissingParameterError("code")

        assert isinstance(error, AuthorizationError)
        assert error.parameter == "code"
        assert "'code'" in str(error)

    def test_csrf_mismatch_is_authorization_error(self):
        error = CsrfMismatchError()
        assert isinstance(error, AuthorizationError)
        assert error.error == "state_mismatch"

    def test_authorization_error_carries_provider_details(self):
        error = AuthorizationError(
            "denied", error="access_denied", error_description="User cancelled"
        )
        assert error.error == "access_denied"
        assert error.error_description == "User cancelled"

    def test_expired_error_reports_age_and_ttl(self):
        error = AuthorizationExpiredError(700.0, 600.0)
        assert error.age_seconds == 700.0
        assert error.ttl_seconds == 600.0
        assert "600" in str(error)

    def test_malformed_response_is_token_exchange_error(self):
        error = MalformedResponseError("bad body", status_code=200)
        assert isinstance(error, TokenExchangeError)
        assert error.status_code == 200

    def test_exceptions_can_be_caught_as_base_type(self):
        """All exceptions can be caught as TeslaAuthError."""
        exceptions = [
            ConfigError("error"),
            AuthorizationError("error"),
            MissingParameterError("state"),
            CsrfMismatchError(),
            AuthorizationExpiredError(1.0, 0.5),
            TokenExchangeError("error"),
            MalformedResponseError("error"),
        ]

        for exc in exceptions:
            try:
                raise exc
            except TeslaAuthError as caught:
                assert caught is exc
