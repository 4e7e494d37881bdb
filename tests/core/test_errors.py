"""Error Hierarchy — verifies status codes, response bodies and headers.

Tests:
    - Every component family maps to the right HTTP status
    - 401 errors have empty bodies; 500 errors use the canonical envelope
    - Validation errors expose field details and the public message only
    - PublishAuthError carries the Basic challenge header
"""

import pytest

from newsletter.core.errors import (
    INTERNAL_ERROR_RESPONSE, AuthUnexpectedError, ConfirmationUnexpectedError,
    ErrorContext, InsertSubscriberError, InvalidCredentialsError, NewsletterError,
    PoolError, PublishAuthError, PublishUnexpectedError, SendEmailError,
    StoreTokenError, SubscriberValidationError, TransactionCommitError,
    UnknownTokenError,
)


@pytest.mark.parametrize(
    "error, status",
    [
        (SubscriberValidationError("bad", field="name"), 400),
        (PoolError(), 500),
        (InsertSubscriberError(), 500),
        (StoreTokenError(), 500),
        (TransactionCommitError(), 500),
        (SendEmailError(), 500),
        (UnknownTokenError(), 401),
        (ConfirmationUnexpectedError("confirm_subscriber"), 500),
        (InvalidCredentialsError(), 401),
        (AuthUnexpectedError("boom"), 500),
        (PublishAuthError(), 401),
        (PublishUnexpectedError("boom"), 500),
    ],
)
def test_status_codes(error, status):
    assert isinstance(error, NewsletterError)
    assert error.http_status == status


def test_unauthorized_errors_have_empty_body():
    assert UnknownTokenError().to_response() is None
    assert PublishAuthError().to_response() is None


def test_server_errors_never_leak_message():
    error = InsertSubscriberError(ErrorContext(operation="insert_subscriber"))
    assert error.to_response() == INTERNAL_ERROR_RESPONSE
    assert "insert_subscriber" not in str(error.to_response())


def test_validation_error_exposes_field_and_request_id():
    error = SubscriberValidationError(
        "Subscriber name cannot be empty or whitespace", field="name",
        context=ErrorContext(request_id="req-1"),
    )
    body = error.to_response()["error"]
    assert body["code"] == "VALIDATION_ERROR"
    assert body["category"] == "validation"
    assert body["request_id"] == "req-1"
    assert body["details"] == [
        {"field": "name", "message": "Invalid subscriber details"},
    ]


def test_publish_auth_error_has_basic_challenge():
    assert PublishAuthError().response_headers == {
        "WWW-Authenticate": 'Basic realm="publish"',
    }


def test_other_errors_add_no_headers():
    assert UnknownTokenError().response_headers == {}


def test_client_fault_classification():
    assert SubscriberValidationError("bad", field="email").is_client_fault
    assert InvalidCredentialsError().is_client_fault
    assert not SendEmailError().is_client_fault


def test_invalid_credentials_message_is_identical_for_every_cause():
    assert InvalidCredentialsError().message == InvalidCredentialsError().message
    assert InvalidCredentialsError.public_message == "Authentication failed"


def test_validation_error_body_never_quotes_submitted_value():
    error = SubscriberValidationError(
        "'private-value' is not a valid subscriber email", field="email",
    )
    assert "private-value" not in str(error.to_response())
