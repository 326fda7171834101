"""Unit tests for request-scoped logging context."""

import pytest
import structlog

from infrastructure.logging.context import bind_request_context, get_correlation_id


@pytest.mark.unit
class TestBindRequestContext:
    def test_binds_given_correlation_id(self):
        with bind_request_context(
            correlation_id="req-1", request_path="/api/email/send", request_method="POST"
        ) as correlation_id:
            context = structlog.contextvars.get_contextvars()
            assert correlation_id == "req-1"
            assert context["request_path"] == "/api/email/send"
            assert context["request_method"] == "POST"
            assert get_correlation_id() == "req-1"

    def test_generates_correlation_id(self):
        with bind_request_context() as correlation_id:
            assert len(correlation_id) == 36
            assert get_correlation_id() == correlation_id

    def test_unbinds_on_exit(self):
        with bind_request_context(correlation_id="req-2", channel="email"):
            pass

        context = structlog.contextvars.get_contextvars()
        assert "correlation_id" not in context
        assert "channel" not in context

    def test_unbinds_on_error(self):
        with pytest.raises(RuntimeError):
            with bind_request_context(correlation_id="req-3"):
                raise RuntimeError("boom")

        assert get_correlation_id() is None
