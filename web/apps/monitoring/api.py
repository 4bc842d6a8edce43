"""Liveness endpoint reporting database connectivity."""

import logging
from django.db import connection, DatabaseError
from django.http import JsonResponse

logger = logging.getLogger(__name__)


def health_view(_request):
    """Return 200 when the default database answers ``SELECT 1``, else 503."""
    try:
        with connection.cursor() as cur:
            cur.execute("SELECT 1")
        db_ok = True
    except DatabaseError:
        logger.exception("health check: database unreachable")
        db_ok = False

    return JsonResponse(
        {"ok": db_ok, "components": {"db": {"ok": db_ok, "vendor": connection.vendor}}},
        status=200 if db_ok else 503,
    )
