# cart_service/instrumentation.py
import logging

from fastapi import FastAPI
from opentelemetry import _logs, metrics, trace
from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.redis import RedisInstrumentor
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor, LogExporter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import MetricReader, PeriodicExportingMetricReader
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, SpanExporter

from cart_service.utils.logging import get_logger
from cart_service.utils.settings import OTEL_EXPORTER_OTLP_ENDPOINT, OTEL_SERVICE_NAME

logger = get_logger(__name__)

METRIC_EXPORT_INTERVAL_MS = 10000

_tracer_provider: TracerProvider | None = None
_meter_provider: MeterProvider | None = None
_logger_provider: LoggerProvider | None = None


def build_resource() -> Resource:
    return Resource.create({
        SERVICE_NAME: OTEL_SERVICE_NAME,
        SERVICE_VERSION: "1.0.0",
    })


def build_tracer_provider(resource: Resource, exporter: SpanExporter) -> TracerProvider:
    provider = TracerProvider(resource=resource)
    provider.add_span_processor(BatchSpanProcessor(exporter))
    return provider


def build_meter_provider(resource: Resource, reader: MetricReader) -> MeterProvider:
    return MeterProvider(resource=resource, metric_readers=[reader])


def build_logger_provider(resource: Resource, exporter: LogExporter) -> LoggerProvider:
    provider = LoggerProvider(resource=resource)
    provider.add_log_record_processor(BatchLogRecordProcessor(exporter))
    return provider


def attach_log_handler(provider: LoggerProvider, logger_name: str = "cart_service") -> LoggingHandler:
    """Ship records of the given logger (and its children) as OTel log records."""
    handler = LoggingHandler(level=logging.NOTSET, logger_provider=provider)
    logging.getLogger(logger_name).addHandler(handler)
    return handler


def setup_telemetry(app: FastAPI) -> TracerProvider:
    """
    Export traces, metrics (every 10s) and logs over OTLP/gRPC, and
    auto-instrument FastAPI and Redis.

    The global providers can only be set once per process; later calls
    reuse them and only instrument the new app.
    """
    global _tracer_provider, _meter_provider, _logger_provider
    if _tracer_provider is None:
        resource = build_resource()

        _tracer_provider = build_tracer_provider(
            resource, OTLPSpanExporter(endpoint=OTEL_EXPORTER_OTLP_ENDPOINT, insecure=True)
        )
        trace.set_tracer_provider(_tracer_provider)

        _meter_provider = build_meter_provider(
            resource,
            PeriodicExportingMetricReader(
                OTLPMetricExporter(endpoint=OTEL_EXPORTER_OTLP_ENDPOINT, insecure=True),
                export_interval_millis=METRIC_EXPORT_INTERVAL_MS,
            ),
        )
        metrics.set_meter_provider(_meter_provider)

        _logger_provider = build_logger_provider(
            resource, OTLPLogExporter(endpoint=OTEL_EXPORTER_OTLP_ENDPOINT, insecure=True)
        )
        _logs.set_logger_provider(_logger_provider)
        attach_log_handler(_logger_provider)

        RedisInstrumentor().instrument(tracer_provider=_tracer_provider)
        logger.info(f"Exporting traces, metrics and logs to {OTEL_EXPORTER_OTLP_ENDPOINT} as {OTEL_SERVICE_NAME}")

    # health probes would drown the useful spans
    FastAPIInstrumentor.instrument_app(
        app,
        excluded_urls="health,ready",
        tracer_provider=_tracer_provider,
        meter_provider=_meter_provider,
    )
    return _tracer_provider


def shutdown_telemetry() -> None:
    """Flush and stop all three providers."""
    for provider in (_tracer_provider, _meter_provider, _logger_provider):
        if provider is not None:
            provider.shutdown()
