"""Logging and OpenTelemetry setup for the beverage menu service."""

import logging
import os
from typing import Any

from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from pythonjsonlogger import jsonlogger

logger = logging.getLogger(__name__)

SERVICE_NAME = "beverage-menu-svc"
DEFAULT_OTLP_ENDPOINT = "http://localhost:4318"
METRIC_EXPORT_INTERVAL_MS = 60000

# Libraries that log every request at INFO
NOISY_LOGGERS = ("botocore", "boto3", "urllib3", "httpx", "httpcore")


def _environment() -> str:
    return os.getenv("ENVIRONMENT", "development")


def _otlp_endpoint() -> str:
    return os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", DEFAULT_OTLP_ENDPOINT).rstrip("/")


def get_service_resource() -> Resource:
    """Build the resource identifying this service in traces and metrics.

    Returns:
        Resource with service name, environment and storage backend
    """
    return Resource.create(
        {
            "service.name": os.getenv("OTEL_SERVICE_NAME", SERVICE_NAME),
            "deployment.environment": _environment(),
            "beverage_menu.storage_backend": os.getenv("STORAGE_BACKEND", "dynamodb"),
        }
    )


def setup_tracing(resource: Resource) -> None:
    """Export spans (menu loads, backend fetches, requests) over OTLP/HTTP.

    Args:
        resource: Service resource attached to every span
    """
    endpoint = _otlp_endpoint()

    provider = TracerProvider(resource=resource)
    provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=f"{endpoint}/v1/traces")))
    trace.set_tracer_provider(provider)

    logger.info(f"Trace export enabled to {endpoint}")


def setup_metrics(resource: Resource) -> None:
    """Export menu and cache metrics over OTLP/HTTP once a minute.

    Args:
        resource: Service resource attached to every metric
    """
    endpoint = _otlp_endpoint()

    reader = PeriodicExportingMetricReader(
        OTLPMetricExporter(endpoint=f"{endpoint}/v1/metrics"),
        export_interval_millis=METRIC_EXPORT_INTERVAL_MS,
    )
    metrics.set_meter_provider(MeterProvider(resource=resource, metric_readers=[reader]))

    logger.info(f"Metric export enabled to {endpoint}")


def setup_observability(app: Any = None, enable_exporters: bool = True) -> None:
    """Install providers and instrument the backend client and the API.

    Args:
        app: Optional FastAPI application to instrument
        enable_exporters: Whether to export over OTLP; always off when ENVIRONMENT=test
    """
    resource = get_service_resource()

    if enable_exporters and _environment() != "test":
        setup_tracing(resource)
        setup_metrics(resource)
    else:
        # Local providers only, nothing leaves the process
        trace.set_tracer_provider(TracerProvider(resource=resource))
        metrics.set_meter_provider(MeterProvider(resource=resource))

    # Spans for every call to the hosted beverage backend
    HTTPXClientInstrumentor().instrument()

    if app is not None:
        FastAPIInstrumentor.instrument_app(app, excluded_urls="health")
        logger.info("API routes instrumented")

    logger.info(f"Observability configured for {SERVICE_NAME}")


def configure_logging(log_level: str = "INFO") -> None:
    """Send all logs to stdout as JSON lines tagged with the service name.

    LOG_LEVEL in the environment takes precedence over ``log_level``.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    level_name = os.getenv("LOG_LEVEL", log_level).upper()
    level = getattr(logging, level_name, logging.INFO)

    handler = logging.StreamHandler()
    handler.setFormatter(
        jsonlogger.JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s",
            rename_fields={"levelname": "level", "name": "logger"},
            static_fields={"service": SERVICE_NAME},
            timestamp=True,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers[:] = [handler]
    root_logger.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logger.info(f"JSON logging configured at {level_name}")
