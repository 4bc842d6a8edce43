"""In-process adapter for the orders persistence port.

``InMemoryGateway`` implements ``PersistenceGateway`` with plain dicts and
no database. It backs the unit tests of ``OrderService``, which seed users
and products directly and inspect row counts after each call.
Transactions are emulated by snapshotting the store when the outermost
``atomic()`` scope opens and restoring it if the scope exits with an
exception.
"""

import copy
import threading
from contextlib import contextmanager
from dataclasses import replace
from typing import Dict, List, Optional, Tuple

from .domain import (
    DeleteOutcome,
    DeleteResult,
    Order,
    OrderItem,
    Payment,
    PersistenceGateway,
    Product,
    User,
)


class InMemoryGateway(PersistenceGateway):
    """Dict-backed ``PersistenceGateway``.

    Stored orders are kept as detached copies so callers cannot change the
    store by mutating a returned object. Items are keyed by the
    ``(order_id, product_id)`` pair, as in the relational schema.

    Attributes:
        users: Users by id.
        products: Products by id.
        orders: Order headers (without items) by id.
        payments: Payment moments by order id.
        items: Order lines by (order id, product id).
    """

    def __init__(self, users: Optional[List[User]] = None, products: Optional[List[Product]] = None):
        self.users: Dict[int, User] = {u.id: u for u in users or []}
        self.products: Dict[int, Product] = {p.id: p for p in products or []}
        self.orders: Dict[int, Order] = {}
        self.payments: Dict[int, Payment] = {}
        self.items: Dict[Tuple[int, int], OrderItem] = {}
        self._next_order_id = 1
        self._lock = threading.RLock()
        self._depth = 0

    # ---- seeding helpers ----
    def add_user(self, user: User) -> User:
        self.users[user.id] = user
        return user

    def add_product(self, product: Product) -> Product:
        self.products[product.id] = product
        return product

    def set_product_price(self, product_id: int, price) -> None:
        self.products[product_id] = replace(self.products[product_id], price=price)

    def row_counts(self) -> Dict[str, int]:
        """Number of stored orders, payments and items."""
        return {"orders": len(self.orders), "payments": len(self.payments), "items": len(self.items)}

    # ---- transactions ----
    def _state(self):
        return (
            copy.deepcopy(self.orders),
            dict(self.payments),
            dict(self.items),
            self._next_order_id,
        )

    @contextmanager
    def atomic(self):
        with self._lock:
            snapshot = self._state() if self._depth == 0 else None
            self._depth += 1
            try:
                yield self
            except BaseException:
                if snapshot is not None:
                    self.orders, self.payments, self.items, self._next_order_id = snapshot
                raise
            finally:
                self._depth -= 1

    # ---- lookups ----
    def get_user_by_id(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)

    def get_product_by_id(self, product_id: int) -> Optional[Product]:
        return self.products.get(product_id)

    def _assemble(self, header: Order, with_items: bool = True) -> Order:
        order = Order(
            id=header.id,
            moment=header.moment,
            status=header.status,
            client=self.users.get(header.client.id, header.client),
        )
        stored = self.payments.get(header.id)
        if stored is not None:
            order.payment = Payment(id=stored.id, moment=stored.moment, order=order)
        if with_items:
            order.items = [it for (oid, _), it in self.items.items() if oid == header.id]
        return order

    def find_all_orders(self) -> List[Order]:
        with self._lock:
            return [self._assemble(o) for _, o in sorted(self.orders.items())]

    def count_orders(self) -> int:
        with self._lock:
            return len(self.orders)

    def find_orders(self, offset: int, limit: int) -> List[Order]:
        with self._lock:
            headers = [o for _, o in sorted(self.orders.items())][offset:offset + limit]
            return [self._assemble(o) for o in headers]

    def get_order_by_id(self, order_id: int) -> Optional[Order]:
        with self._lock:
            header = self.orders.get(order_id)
            return self._assemble(header) if header else None

    def get_order_reference_by_id(self, order_id: int) -> Optional[Order]:
        with self._lock:
            header = self.orders.get(order_id)
            return self._assemble(header, with_items=False) if header else None

    # ---- writes ----
    def save_order(self, order: Order) -> Order:
        with self.atomic():
            if order.id is None:
                order.id = self._next_order_id
                self._next_order_id += 1
            elif order.id not in self.orders:
                raise KeyError(order.id)

            self.orders[order.id] = Order(
                id=order.id,
                moment=order.moment,
                status=order.status,
                client=order.client,
            )
            if order.payment is None:
                self.payments.pop(order.id, None)
            else:
                order.payment.id = order.id
                order.payment.order = order
                self.payments[order.id] = Payment(id=order.id, moment=order.payment.moment)
        return order

    def save_order_item(self, item: OrderItem) -> OrderItem:
        with self.atomic():
            if item.order_id not in self.orders:
                raise KeyError(item.order_id)
            self.items[(item.order_id, item.product.id)] = item
        return item

    def delete_order_by_id(self, order_id: int) -> DeleteResult:
        with self.atomic():
            if order_id not in self.orders:
                return DeleteResult(DeleteOutcome.NOT_FOUND)
            if any(oid == order_id for oid, _ in self.items):
                return DeleteResult(
                    DeleteOutcome.CONSTRAINT_VIOLATION,
                    f"order {order_id} is still referenced by order items",
                )
            del self.orders[order_id]
            self.payments.pop(order_id, None)
        return DeleteResult(DeleteOutcome.DELETED)
