"""Service provider helper for wiring OrderService with its gateway.

Views call ``get_order_service`` at request time instead of building the
service themselves, so tests can swap the returned service with
``monkeypatch``.
"""

from .domain import OrderService
from .repository import DjangoPersistenceGateway


def get_order_service() -> OrderService:
    """Return an OrderService wired to the Django ORM gateway.

    Returns:
        OrderService: A new instance per call. The gateway holds no state
        and uses the calling thread's database connection.
    """
    return OrderService(gateway=DjangoPersistenceGateway())
