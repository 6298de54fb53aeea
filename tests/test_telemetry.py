import pytest
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import StatusCode

from cart_service.domain.errors import NotFoundError, StorageError
from cart_service.utils.telemetry import traced


@pytest.fixture
def exporter():
    return InMemorySpanExporter()


@pytest.fixture
def tracer(exporter):
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    return provider.get_tracer("test")


def test_success_sets_attributes_and_ok(tracer, exporter):
    with traced("GET /cart", {"userId": "u1", "skipped": None}, tracer=tracer):
        pass

    (span,) = exporter.get_finished_spans()
    assert span.name == "GET /cart"
    assert span.attributes["userId"] == "u1"
    assert "skipped" not in span.attributes
    assert span.status.status_code == StatusCode.OK


def test_client_error_marks_span_without_exception_event(tracer, exporter):
    with pytest.raises(NotFoundError):
        with traced("DELETE /cart/items/:productId", tracer=tracer):
            raise NotFoundError("Item not found in cart")

    (span,) = exporter.get_finished_spans()
    assert span.status.status_code == StatusCode.ERROR
    assert span.status.description == "Item not found in cart"
    assert len(span.events) == 0


def test_storage_error_records_cause(tracer, exporter):
    with pytest.raises(StorageError):
        with traced("POST /cart/items", tracer=tracer):
            try:
                raise ConnectionError("redis unreachable")
            except ConnectionError as e:
                raise StorageError() from e

    (span,) = exporter.get_finished_spans()
    assert span.status.status_code == StatusCode.ERROR
    assert span.events[0].name == "exception"
    assert span.events[0].attributes["exception.type"] == "ConnectionError"


def test_unexpected_error_is_recorded(tracer, exporter):
    with pytest.raises(ValueError):
        with traced("PUT /cart/items/:productId", tracer=tracer):
            raise ValueError("bad")

    (span,) = exporter.get_finished_spans()
    assert span.status.status_code == StatusCode.ERROR
    assert span.events[0].attributes["exception.message"] == "bad"
