"""Tests for tracing setup."""

from opentelemetry import trace

from cc_hook.config import HookConfig
from cc_hook.tracing import create_span, flush_tracing, get_tracer, setup_tracing


class TestTracing:
    """Tests for setup_tracing and create_span."""

    def test_setup_is_cached(self) -> None:
        tracer = setup_tracing(HookConfig())
        assert setup_tracing(HookConfig()) is tracer
        assert get_tracer() is tracer

    def test_create_span_is_current_and_recording(self) -> None:
        with create_span("hook.test", {"hook.event": "Stop"}) as span:
            assert trace.get_current_span() is span
            assert span.is_recording()
        assert not span.is_recording()
        flush_tracing()
