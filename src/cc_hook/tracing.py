"""Spans around each hook run, exported over OTLP when a collector is configured."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import SpanProcessor, TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from cc_hook._version import __version__
from cc_hook.config import HookConfig

SERVICE_NAME = "cc-hook"
FLUSH_TIMEOUT_MILLIS = 2000

_provider: TracerProvider | None = None
_tracer: trace.Tracer | None = None


def _otlp_processor(config: HookConfig) -> SpanProcessor:
    # Imported here: the gRPC stack is slow to load and most hooks never export.
    from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter

    return BatchSpanProcessor(OTLPSpanExporter(endpoint=config.otel_endpoint, insecure=True))


def setup_tracing(config: HookConfig | None = None) -> trace.Tracer:
    """
    Install the process tracer provider once and return the library tracer.

    With ``config.otel_enabled`` unset, spans are created but go nowhere.
    """
    global _provider, _tracer

    if _tracer is not None:
        return _tracer

    config = config or HookConfig()
    provider = TracerProvider(
        resource=Resource.create({"service.name": SERVICE_NAME, "service.version": __version__})
    )
    if config.otel_enabled:
        provider.add_span_processor(_otlp_processor(config))

    # Global, so spans a hook implementation opens become children of hook.run.
    trace.set_tracer_provider(provider)

    _provider = provider
    _tracer = trace.get_tracer(SERVICE_NAME, __version__)
    return _tracer


def get_tracer() -> trace.Tracer:
    return _tracer if _tracer is not None else setup_tracing()


def flush_tracing() -> None:
    """Push buffered spans out before the hook process exits."""
    if _provider is not None:
        _provider.force_flush(FLUSH_TIMEOUT_MILLIS)


@contextmanager
def create_span(name: str, attributes: dict[str, Any] | None = None) -> Iterator[trace.Span]:
    """Open ``name`` as the current span, e.g. ``with create_span("hook.handler"):``."""
    with get_tracer().start_as_current_span(name, attributes=attributes) as span:
        yield span
