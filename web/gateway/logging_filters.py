"""Logging filters for enriching log records with request context.

``RequestIdFilter`` copies the current request id, set by
``RequestIdMiddleware``, onto every record it sees. It is attached to the
console handler in ``config.settings.LOGGING`` so the JSON formatter can
emit ``request_id`` for each line, including lines written by the order
and catalog services.
"""

from logging import Filter, LogRecord
from .middleware import REQUEST_ID_CTX


class RequestIdFilter(Filter):
    """Attach a ``request_id`` attribute to log records.

    Records logged outside a request (management commands, tests) carry
    the context variable's default, a hyphen.
    """

    def filter(self, record: LogRecord) -> bool:
        if not getattr(record, "request_id", None):
            record.request_id = REQUEST_ID_CTX.get()
        return True
