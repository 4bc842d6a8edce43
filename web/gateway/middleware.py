"""Middleware that assigns a request identifier and guards the API.

``RequestIdMiddleware`` ensures every incoming HTTP request receives a
request identifier (UUID). The identifier is read from the incoming
``X-Request-Id`` header when provided by the client, or generated
server-side otherwise. It is stored on the ``request`` object and in a
context variable so code running downstream, including log filters, can
access it without passing the value explicitly. One access log line is
written per ``/api/`` request.

Behavior contract:
- If the incoming request contains the ``X-Request-Id`` header, that value
  is reused as the request id.
- Otherwise a new UUIDv4 is generated.
- The response will include the same id in the ``X-Request-ID`` header.

``ApiSizeLimitMiddleware`` rejects ``/api/`` requests whose declared body
exceeds ``settings.API_MAX_BYTES`` with HTTP 413.
"""

import logging
import time
import uuid
import contextvars
from django.conf import settings
from django.http import JsonResponse

from django.utils.deprecation import MiddlewareMixin

REQUEST_ID_CTX = contextvars.ContextVar("request_id", default="-")

access_logger = logging.getLogger("gateway.access")


class RequestIdMiddleware(MiddlewareMixin):
    """Django middleware that sets and returns a per-request identifier.

    Attributes:
        HEADER (str): The name of the incoming HTTP header (in Django's
            ``request.META`` casing) that may contain a client-provided id.
        RESPONSE_HEADER (str): The name of the header returned on responses.
    """

    HEADER = "HTTP_X_REQUEST_ID"       # incoming header as found in request.META
    RESPONSE_HEADER = "X-Request-ID"   # header to add to outgoing responses

    def process_request(self, request):
        """Attach the request id to the request and the context var.

        Args:
            request: Django HttpRequest instance.
        """
        rid = request.META.get(self.HEADER) or str(uuid.uuid4())
        request.request_id = rid
        request._started_at = time.monotonic()
        REQUEST_ID_CTX.set(rid)

    def process_response(self, request, response):
        """Set the ``X-Request-ID`` header and log API requests.

        Args:
            request: Django HttpRequest (may lack attributes when an
                earlier middleware short-circuited).
            response: Django HttpResponse to modify.

        Returns:
            The same HttpResponse instance with the ``X-Request-ID`` header set.
        """
        rid = getattr(request, "request_id", REQUEST_ID_CTX.get())
        response[self.RESPONSE_HEADER] = rid

        if request.path.startswith("/api/"):
            started = getattr(request, "_started_at", None)
            elapsed_ms = round((time.monotonic() - started) * 1000, 2) if started else None
            access_logger.info(
                "request handled",
                extra={
                    "method": request.method,
                    "path": request.path,
                    "status": response.status_code,
                    "duration_ms": elapsed_ms,
                },
            )
        return response


class ApiSizeLimitMiddleware(MiddlewareMixin):
    """Reject oversized API bodies before they are parsed."""

    def process_request(self, request):
        if request.path.startswith("/api/"):
            clen = request.META.get("CONTENT_LENGTH")
            limit = getattr(settings, "API_MAX_BYTES", 1024 * 1024)
            if clen and clen.isdigit() and int(clen) > limit:
                return JsonResponse({"detail": "PAYLOAD_TOO_LARGE"}, status=413)
