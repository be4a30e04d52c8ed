import logging

from ygl_proxy.error_handler import ErrorHandler, InternalError, UpstreamError, ValidationError


def test_handle_exception_wraps_unknown_errors_as_internal():
    eh = ErrorHandler()
    out = eh.handle_exception(Exception("boom"), context={"k": "v"})
    assert out["success"] is False
    assert out["error"] == {"status": 500, "code": "INTERNAL_ERROR", "message": "boom", "details": None}


def test_handle_exception_keeps_tagged_errors():
    eh = ErrorHandler()
    out = eh.handle_exception(ValidationError("Invalid request body", details=[{"field": "page"}]))
    assert out["error"]["status"] == 400
    assert out["error"]["code"] == "VALIDATION_ERROR"
    assert out["error"]["details"] == [{"field": "page"}]


def test_upstream_error_defaults_to_bad_gateway():
    assert UpstreamError("timed out").to_payload()["status"] == 502
    assert UpstreamError("nope", status=404).to_payload()["status"] == 404


def test_empty_message_falls_back():
    out = ErrorHandler().handle_exception(RuntimeError())
    assert out["error"]["message"] == "Unknown error"
    assert isinstance(ErrorHandler().normalize(RuntimeError()), InternalError)


def test_unhandled_errors_are_logged_unless_silenced(caplog):
    with caplog.at_level(logging.ERROR, logger="ygl_proxy.error_handler"):
        ErrorHandler(log_unhandled=True).handle_exception(RuntimeError("loud"))
        ErrorHandler(log_unhandled=False).handle_exception(RuntimeError("quiet"))

    messages = [r.getMessage() for r in caplog.records]
    assert any("loud" in m for m in messages)
    assert not any("quiet" in m for m in messages)
