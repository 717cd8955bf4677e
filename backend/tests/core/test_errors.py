"""Error Hierarchy — codes, statuses and the REST failure envelope."""

from instance_api.core.errors import (
    BackendError,
    ErrorCategory,
    ErrorContext,
    ErrorSeverity,
    InstanceAPIError,
    InstanceNotFoundError,
)


def test_not_found_carries_instance_id():
    error = InstanceNotFoundError("482913")
    assert error.code == "INSTANCE_NOT_FOUND"
    assert error.http_status == 404
    assert error.context.instance_id == "482913"
    assert "482913" in error.message


def test_backend_error_timeout_is_ambiguous():
    error = BackendError("timed out", "save", ambiguous=True)
    assert error.ambiguous is True
    assert error.category == ErrorCategory.TIMEOUT
    assert error.severity == ErrorSeverity.CRITICAL
    assert error.http_status == 503
    assert error.context.operation == "save"


def test_backend_error_default_is_not_ambiguous():
    error = BackendError("script error", "create")
    assert error.ambiguous is False
    assert error.category == ErrorCategory.BACKEND


def test_to_response_envelope():
    error = BackendError(
        "connection error", "pull", context=ErrorContext(instance_id="1"),
    )
    body = error.to_response()
    assert body["success"] is False
    assert body["error"]["code"] == "BACKEND_ERROR"
    assert body["error"]["context"]["instance_id"] == "1"
    assert body["error"]["context"]["operation"] == "pull"
    assert isinstance(body["error"]["timestamp"], str)


def test_all_errors_share_base():
    assert issubclass(BackendError, InstanceAPIError)
    assert issubclass(InstanceNotFoundError, InstanceAPIError)
