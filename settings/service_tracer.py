import logging
import os
from typing import Any, Dict
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.trace import Span

logger = logging.getLogger(__name__)

# Exclude both /health and /api/health
EXCLUDED_HEALTH_REGEX = r"^(?:/api)?/health(?:$|/.*)"


def initialize_tracer(service_name, fastapi_app, otlp_endpoint=None):
    """
    Export FastAPI request spans over OTLP.

    Does nothing unless an endpoint is passed or OTEL_EXPORTER_OTLP_ENDPOINT
    is set, so local runs and tests never try to reach a collector.
    """
    otlp_endpoint = otlp_endpoint or os.environ.get("OTEL_EXPORTER_OTLP_ENDPOINT")
    if not otlp_endpoint:
        logger.info("Tracing disabled: OTEL_EXPORTER_OTLP_ENDPOINT not set")
        return None

    tracer_provider = TracerProvider(
        resource=Resource.create({SERVICE_NAME: service_name})
    )
    trace.set_tracer_provider(tracer_provider)

    span_exporter = OTLPSpanExporter(endpoint=f"{otlp_endpoint.rstrip('/')}/v1/traces")
    tracer_provider.add_span_processor(BatchSpanProcessor(span_exporter))

    def server_request_hook(span: Span, scope: Dict[str, Any]) -> None:
        if span and span.is_recording():
            query_string = scope.get("query_string")
            if query_string:
                if isinstance(query_string, (bytes, bytearray)):
                    qs_value = query_string[:2048].decode("utf-8", errors="replace")
                else:
                    qs_value = str(query_string)[:2048]
                span.set_attribute("http.request.query_string", qs_value)

    os.environ.setdefault("OTEL_PYTHON_FASTAPI_EXCLUDED_URLS", EXCLUDED_HEALTH_REGEX)
    FastAPIInstrumentor().instrument_app(
        fastapi_app,
        tracer_provider=tracer_provider,
        server_request_hook=server_request_hook,
        excluded_urls=EXCLUDED_HEALTH_REGEX,
    )

    logger.info(f"Tracing enabled: service={service_name}, endpoint={otlp_endpoint}")
    return tracer_provider
