"""Request Tracing — OpenTelemetry spans around every project route.

Invariants:
    - One span per request, named after the route (route.name), ended on every path
    - Parent context is extracted from incoming request headers (W3C traceparent)
    - Exceptions escaping a route are recorded on the span, the span is marked
      ERROR, and the exception is re-raised unchanged
    - Responses with status >= 500 also mark the span ERROR
    - Tracing never alters the response or control flow

Design Decisions:
    - APIRoute subclass installed with APIRouter(route_class=TracedRoute): the
      span wraps body decoding and validation as well as the endpoint itself
    - Tracer injected through app.state.tracer; no module-level tracer handle
"""

import logging
from typing import Any, Callable, Coroutine

from fastapi import Request, Response
from fastapi.routing import APIRoute
from opentelemetry import trace
from opentelemetry.propagate import extract
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.trace import Span, SpanKind, Status, StatusCode, Tracer

logger = logging.getLogger(__name__)

INSTRUMENTATION_NAME = "projects_api"


def setup_tracing(exporter: str = "none", service_name: str = "projects-api") -> TracerProvider:
    """Build an SDK TracerProvider. The caller decides whether to install it globally."""
    provider = TracerProvider(resource=Resource.create({SERVICE_NAME: service_name}))
    if exporter == "console":
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
    elif exporter != "none":
        raise ValueError(f"Unknown tracing exporter: {exporter}")
    logger.info(f"Tracing configured (exporter={exporter})")
    return provider


def build_tracer(provider: trace.TracerProvider | None = None) -> Tracer:
    if provider is None:
        return trace.get_tracer(INSTRUMENTATION_NAME)
    return provider.get_tracer(INSTRUMENTATION_NAME)


def get_request_tracer(request: Request) -> Tracer:
    tracer = getattr(request.app.state, "tracer", None)
    return tracer or build_tracer()


def mark_span_failed(span: Span, exc: BaseException) -> None:
    """Attach the error to the span and flag it as failed."""
    span.record_exception(exc)
    span.set_status(Status(StatusCode.ERROR, f"{type(exc).__name__}: {exc}"))


class TracedRoute(APIRoute):
    """APIRoute whose request handler runs inside a server span."""

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        handler = super().get_route_handler()
        span_name = self.name

        async def traced_handler(request: Request) -> Response:
            tracer = get_request_tracer(request)
            with tracer.start_as_current_span(
                span_name,
                context=extract(request.headers),
                kind=SpanKind.SERVER,
                record_exception=False,
                set_status_on_exception=False,
            ) as span:
                span.set_attribute("http.request.method", request.method)
                span.set_attribute("http.route", self.path)
                title = request.path_params.get("title")
                if title is not None:
                    span.set_attribute("project.title", title)
                try:
                    response = await handler(request)
                except Exception as exc:
                    mark_span_failed(span, exc)
                    raise
                span.set_attribute("http.response.status_code", response.status_code)
                if response.status_code >= 500:
                    span.set_status(Status(StatusCode.ERROR))
                return response

        return traced_handler
