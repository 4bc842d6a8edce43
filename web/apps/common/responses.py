from rest_framework import status
from rest_framework.response import Response

from .errors import DomainError


def error_response(exc: DomainError) -> Response:
    """Build the DRF response for a domain error."""
    return Response(exc.to_body(), status=int(exc.http_status))


def validation_error_response(exc: Exception) -> Response:
    """Build the 400 response for a payload rejected by a pydantic DTO."""
    return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
