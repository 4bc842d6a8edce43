"""Error taxonomy shared by the catalog, users and orders apps.

Every failure a service can report to a caller maps to exactly one of the
classes below. Services raise them inside their transaction scope so the
scope is rolled back; views translate them into HTTP responses with
``apps.common.responses.error_response``.
"""

from http import HTTPStatus


class DomainError(Exception):
    """Base class for errors that are reported to API clients.

    Attributes:
        code: Machine-readable error code returned in the ``detail`` field.
        http_status: HTTP status code used when the error reaches a view.
    """

    code = "DOMAIN_ERROR"
    http_status = HTTPStatus.BAD_REQUEST

    def __init__(self, message: str = ""):
        super().__init__(message or self.code)
        self.message = message or self.code

    def to_body(self) -> dict:
        return {"detail": self.code, "message": self.message}


class InvalidArgument(DomainError, ValueError):
    """The request is structurally invalid (for example a missing id)."""

    code = "INVALID_ARGUMENT"
    http_status = HTTPStatus.BAD_REQUEST


class NotFound(DomainError, LookupError):
    """A referenced entity does not exist.

    Args:
        id: Identifier that could not be resolved.
        resource: Human readable name of the entity kind.
    """

    code = "NOT_FOUND"
    http_status = HTTPStatus.NOT_FOUND

    def __init__(self, id, resource: str = "resource"):
        super().__init__(f"{resource} not found. Id {id}")
        self.id = id
        self.resource = resource

    def to_body(self) -> dict:
        body = super().to_body()
        body["id"] = self.id
        return body


class DatabaseConstraintViolation(DomainError):
    """A write was rejected by a referential or uniqueness constraint."""

    code = "DATABASE_CONSTRAINT_VIOLATION"
    http_status = HTTPStatus.CONFLICT
