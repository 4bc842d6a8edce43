"""Domain models, persistence port and service for orders.

This module contains the dataclasses that describe orders and the entities
they reference, the request shapes accepted by the service, the
``PersistenceGateway`` protocol the service is written against, and the
``OrderService`` that assembles orders. Nothing here imports Django: the
ORM-backed gateway lives in ``repository`` and an in-process one in
``adapters``.
"""

import logging
from contextlib import AbstractContextManager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Callable, List, Optional, Protocol, Tuple

from apps.common.errors import InvalidArgument, NotFound, DatabaseConstraintViolation

logger = logging.getLogger(__name__)


# ---- Enums ----
class OrderStatus(str, Enum):
    """Lifecycle states of an order. The assembly workflow never inspects
    them; they are stored and returned as given."""

    WAITING_PAYMENT = "WAITING_PAYMENT"
    PAID = "PAID"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELED = "CANCELED"


class DeleteOutcome(str, Enum):
    DELETED = "DELETED"
    NOT_FOUND = "NOT_FOUND"
    CONSTRAINT_VIOLATION = "CONSTRAINT_VIOLATION"


# ---- Entities ----
@dataclass(frozen=True)
class User:
    """Customer referenced by an order as its client."""

    id: int
    name: str
    email: str = ""
    phone: str = ""


@dataclass(frozen=True)
class Product:
    """Catalog product as seen by the order workflow.

    Attributes:
        id: Product identifier.
        name: Display name.
        price: Current list price. Order items copy this value when they
            are created, so later changes never reach existing items.
    """

    id: int
    name: str
    price: Decimal


@dataclass
class Payment:
    """Payment owned by exactly one order.

    ``order`` is the back-reference set by ``OrderService``; callers leave
    it empty. The payment id is the id of its order once persisted.
    """

    id: Optional[int] = None
    moment: Optional[datetime] = None
    order: Optional["Order"] = field(default=None, repr=False, compare=False)


@dataclass(frozen=True)
class OrderItem:
    """A persisted order line. Identified by the (order, product) pair.

    Attributes:
        order_id: Identifier of the saved order this line belongs to.
        product: The resolved product.
        quantity: Units ordered (positive).
        price: Unit price snapshot taken at creation time.
    """

    order_id: int
    product: Product
    quantity: int
    price: Decimal

    @property
    def sub_total(self) -> Decimal:
        return self.price * self.quantity


@dataclass
class Order:
    """Container for order data.

    Attributes:
        id: Persistent identifier, or None until saved.
        moment: Creation instant.
        status: Current OrderStatus.
        client: The resolved client.
        payment: Optional owned payment.
        items: Persisted order lines.
    """

    id: Optional[int]
    moment: Optional[datetime]
    status: OrderStatus
    client: User
    payment: Optional[Payment] = None
    items: List[OrderItem] = field(default_factory=list)

    @property
    def total(self) -> Decimal:
        return sum((it.sub_total for it in self.items), Decimal("0"))


# ---- Requests ----
@dataclass(frozen=True)
class PaymentRequest:
    moment: Optional[datetime] = None


@dataclass(frozen=True)
class OrderItemRequest:
    """A requested order line: product by id, quantity, optional price."""

    product_id: Optional[int]
    quantity: int
    price: Optional[Decimal] = None


@dataclass(frozen=True)
class OrderRequest:
    """Partially populated order as sent by a caller.

    Only references by id are carried; the service resolves them. ``items``
    is a tuple so the request cannot be mutated while it is processed.
    """

    client_id: Optional[int]
    moment: Optional[datetime] = None
    status: Optional[OrderStatus] = None
    payment: Optional[PaymentRequest] = None
    items: Tuple[OrderItemRequest, ...] = ()


@dataclass(frozen=True)
class DeleteResult:
    outcome: DeleteOutcome
    message: str = ""


# ---- Port ----
class PersistenceGateway(Protocol):
    """Key-addressed store for users, products, orders, items and payments.

    Lookups return ``None`` when the key is absent and ``delete_order_by_id``
    reports its outcome instead of raising. ``atomic()`` opens a scope in
    which every write is committed together or not at all.
    """

    def atomic(self) -> AbstractContextManager:
        raise NotImplementedError()

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError()

    def get_product_by_id(self, product_id: int) -> Optional[Product]:
        raise NotImplementedError()

    def find_all_orders(self) -> List[Order]:
        raise NotImplementedError()

    def count_orders(self) -> int:
        raise NotImplementedError()

    def find_orders(self, offset: int, limit: int) -> List[Order]:
        """Return at most ``limit`` orders in id order, skipping ``offset``."""
        raise NotImplementedError()

    def get_order_by_id(self, order_id: int) -> Optional[Order]:
        raise NotImplementedError()

    def get_order_reference_by_id(self, order_id: int) -> Optional[Order]:
        """Load the order header and payment for an in-place update.

        Unlike a lazy reference, absence is reported here and not at write
        time.
        """
        raise NotImplementedError()

    def save_order(self, order: Order) -> Order:
        """Insert or update the order header together with its payment.

        Assigns ``order.id`` on insert. A payment present on the order is
        written in the same call; a missing one removes any stored payment.
        """
        raise NotImplementedError()

    def save_order_item(self, item: OrderItem) -> OrderItem:
        raise NotImplementedError()

    def delete_order_by_id(self, order_id: int) -> DeleteResult:
        raise NotImplementedError()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---- Domain service ----
class OrderService:
    """Domain service that assembles, updates and removes orders.

    All foreign references (client, products) are resolved eagerly through
    the gateway before they are used. Multi-write operations run inside a
    single ``gateway.atomic()`` scope; any ``DomainError`` raised in the
    scope aborts it so no partial order is ever committed.
    """

    def __init__(self, gateway: PersistenceGateway, clock: Callable[[], datetime] = utcnow):
        """Initialize the service with its dependencies.

        Args:
            gateway: Persistence port used for every read and write.
            clock: Returns the current instant; used to default ``moment``.
        """
        self.gateway = gateway
        self.clock = clock

    # -- reads --
    def find_all(self) -> List[Order]:
        return self.gateway.find_all_orders()

    def count(self) -> int:
        return self.gateway.count_orders()

    def find_page(self, offset: int, limit: int) -> List[Order]:
        return self.gateway.find_orders(offset, limit)

    def find_by_id(self, order_id: int) -> Order:
        order = self.gateway.get_order_by_id(order_id)
        if order is None:
            raise NotFound(order_id, "order")
        return order

    # -- insert --
    def insert(self, request: OrderRequest) -> Order:
        """Create an order with its payment and items in one transaction.

        Steps: validate ids, resolve the client, default timestamps, save
        the header with its payment, then resolve each product and save one
        line per requested item using either the supplied price or the
        product's current price.

        Args:
            request: The caller's order request. It is not modified.

        Returns:
            The saved Order with client, payment and all persisted items.

        Raises:
            InvalidArgument: A required id is missing, a quantity is not
                positive, or a product appears twice.
            NotFound: The client or one of the products does not exist.
        """
        self._validate(request)
        requested_items = tuple(request.items)

        with self.gateway.atomic():
            client = self._resolve_client(request.client_id)

            order = Order(
                id=None,
                moment=request.moment or self.clock(),
                status=request.status or OrderStatus.WAITING_PAYMENT,
                client=client,
            )
            order.payment = self._build_payment(order, request.payment)

            saved = self.gateway.save_order(order)

            items: List[OrderItem] = []
            for req in requested_items:
                product = self._resolve_product(req.product_id)
                price = req.price if req.price is not None else product.price
                item = OrderItem(
                    order_id=saved.id,
                    product=product,
                    quantity=req.quantity,
                    price=price,
                )
                items.append(self.gateway.save_order_item(item))
            saved.items = items

        logger.info(
            "order created",
            extra={"order_id": saved.id, "client_id": client.id, "items": len(items)},
        )
        return saved

    # -- update --
    def update(self, order_id: int, request: OrderRequest) -> Order:
        """Replace moment, status, client and payment of an existing order.

        Items are left untouched. ``moment`` and ``status`` keep their
        stored value when the request omits them; the payment is replaced
        wholesale and removed when the request carries none.

        Raises:
            NotFound: The order or the new client does not exist.
            InvalidArgument: The request carries no client id.
        """
        if request.client_id is None:
            raise InvalidArgument("client id is required")

        with self.gateway.atomic():
            entity = self.gateway.get_order_reference_by_id(order_id)
            if entity is None:
                raise NotFound(order_id, "order")

            entity.client = self._resolve_client(request.client_id)
            if request.moment is not None:
                entity.moment = request.moment
            if request.status is not None:
                entity.status = request.status
            entity.payment = self._build_payment(entity, request.payment)

            saved = self.gateway.save_order(entity)

        logger.info("order updated", extra={"order_id": order_id})
        return saved

    # -- delete --
    def delete(self, order_id: int) -> None:
        """Delete an order by id.

        Raises:
            NotFound: No order has this id.
            DatabaseConstraintViolation: Rows elsewhere still reference the
                order; carries the database message.
        """
        result = self.gateway.delete_order_by_id(order_id)
        if result.outcome == DeleteOutcome.NOT_FOUND:
            raise NotFound(order_id, "order")
        if result.outcome == DeleteOutcome.CONSTRAINT_VIOLATION:
            logger.warning("order delete rejected", extra={"order_id": order_id})
            raise DatabaseConstraintViolation(result.message)
        logger.info("order deleted", extra={"order_id": order_id})

    # -- helpers --
    def _validate(self, request: OrderRequest) -> None:
        if request.client_id is None:
            raise InvalidArgument("client id is required")

        seen = set()
        for req in request.items:
            if req.product_id is None:
                raise InvalidArgument("product id is required")
            if req.quantity is None or req.quantity <= 0:
                raise InvalidArgument(f"quantity must be positive for product {req.product_id}")
            if req.product_id in seen:
                raise InvalidArgument(f"product {req.product_id} appears more than once")
            seen.add(req.product_id)

    def _resolve_client(self, client_id: int) -> User:
        client = self.gateway.get_user_by_id(client_id)
        if client is None:
            logger.warning("client not found", extra={"client_id": client_id})
            raise NotFound(client_id, "user")
        return client

    def _resolve_product(self, product_id: int) -> Product:
        product = self.gateway.get_product_by_id(product_id)
        if product is None:
            logger.warning("product not found", extra={"product_id": product_id})
            raise NotFound(product_id, "product")
        return product

    def _build_payment(self, order: Order, request: Optional[PaymentRequest]) -> Optional[Payment]:
        if request is None:
            return None
        return Payment(
            id=order.id,
            moment=request.moment or self.clock(),
            order=order,
        )
