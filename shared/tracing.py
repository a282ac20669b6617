"""Tracing utilities built on OpenTelemetry."""

import os
from contextlib import contextmanager
from typing import Any, Dict, Optional

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.trace import Status, StatusCode

TRACER_NAME = "scs_client"

_provider: Optional[TracerProvider] = None


def _parse_otlp_headers(raw: Optional[str]) -> Dict[str, str]:
    """Parse ``k1=v1,k2=v2``; segments without a key are dropped."""
    headers: Dict[str, str] = {}
    for segment in (raw or "").split(","):
        key, sep, value = segment.partition("=")
        if sep and key.strip():
            headers[key.strip()] = value.strip()
    return headers


def _build_otlp_exporter_kwargs(endpoint: str) -> Dict[str, Any]:
    exporter_kwargs: Dict[str, Any] = {"endpoint": endpoint}

    headers = _parse_otlp_headers(os.getenv("OTEL_EXPORTER_OTLP_HEADERS"))
    if headers:
        exporter_kwargs["headers"] = headers

    if endpoint.startswith("http://"):
        exporter_kwargs["insecure"] = True

    return exporter_kwargs


def configure_tracing(
    service_name: str,
    otlp_endpoint: Optional[str] = None,
    enable_console: bool = False,
) -> TracerProvider:
    """Install a tracer provider once per process and instrument httpx.

    Spans are exported over OTLP when an endpoint is given or found in
    ``OTEL_EXPORTER_OTLP_TRACES_ENDPOINT`` / ``OTEL_EXPORTER_OTLP_ENDPOINT``.
    Later calls return the provider installed by the first one.
    """
    global _provider
    if _provider is not None:
        return _provider

    resource = Resource.create({
        "service.name": service_name,
        "service.instance.id": os.getenv("HOSTNAME", "unknown"),
    })
    provider = TracerProvider(resource=resource)

    endpoint = (
        otlp_endpoint
        or os.getenv("OTEL_EXPORTER_OTLP_TRACES_ENDPOINT")
        or os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
    )
    if endpoint:
        provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(**_build_otlp_exporter_kwargs(endpoint))))
    if enable_console:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)

    instrumentor = HTTPXClientInstrumentor()
    if not instrumentor.is_instrumented_by_opentelemetry:
        instrumentor.instrument()

    _provider = provider
    return provider


def get_tracer(name: str = TRACER_NAME):
    return trace.get_tracer(name)


@contextmanager
def trace_operation(operation_name: str, **attributes):
    """Run the block in a span; unset attributes are skipped."""
    with get_tracer().start_as_current_span(operation_name) as span:
        for key, value in attributes.items():
            if value is not None:
                span.set_attribute(key, value)

        try:
            yield span
        except Exception as exc:
            span.set_status(Status(StatusCode.ERROR, str(exc)))
            span.set_attribute("error", True)
            span.set_attribute("error.message", str(exc))
            raise


def mark_span_error(span, error_code: str, message: str) -> None:
    """Flag a span whose call produced an Error result."""
    if span.is_recording():
        span.set_status(Status(StatusCode.ERROR, message))
        span.set_attribute("error", True)
        span.set_attribute("error.code", error_code)
