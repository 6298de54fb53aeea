# cart_service/utils/telemetry.py
from contextlib import contextmanager
from typing import Any, Dict, Iterator

from opentelemetry import trace
from opentelemetry.trace import Span, Status, StatusCode, Tracer

from cart_service.domain.errors import CartError

TRACER_NAME = "cart-service-routes-tracer"


@contextmanager
def traced(
    operation: str,
    attributes: Dict[str, Any] | None = None,
    tracer: Tracer | None = None,
) -> Iterator[Span]:
    """
    Run a block inside a span named after the operation.

    Expected request failures (CartError subclasses) only mark the span as
    ERROR; anything else is also recorded as an exception event.
    """
    tracer = tracer or trace.get_tracer(TRACER_NAME)
    with tracer.start_as_current_span(
        operation,
        record_exception=False,
        set_status_on_exception=False,
    ) as span:
        for key, value in (attributes or {}).items():
            if value is not None:
                span.set_attribute(key, value)
        try:
            yield span
        except CartError as exc:
            if exc.status_code >= 500:
                span.record_exception(exc.__cause__ or exc)
            span.set_status(Status(StatusCode.ERROR, exc.message))
            raise
        except Exception as exc:
            span.record_exception(exc)
            span.set_status(Status(StatusCode.ERROR, str(exc)))
            raise
        else:
            span.set_status(Status(StatusCode.OK))
