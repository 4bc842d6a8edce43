"""Django ORM implementation of the orders persistence gateway.

The gateway maps ORM rows to the dataclasses in ``domain`` so the domain
service is not coupled to Django. Every lookup is eager: relations needed
by the caller are loaded with ``select_related``/``prefetch_related`` and
returned as plain values, never as lazy references.
"""

from django.db import IntegrityError, transaction
from django.db.models import ProtectedError

from apps.catalog.models import ProductModel
from apps.users.models import UserModel
from .models import OrderModel, OrderItemModel, PaymentModel
from .domain import (
    DeleteOutcome,
    DeleteResult,
    Order,
    OrderItem,
    OrderStatus,
    Payment,
    Product,
    User,
)


def _user(row: UserModel) -> User:
    return User(id=row.id, name=row.name, email=row.email, phone=row.phone)


def _product(row: ProductModel) -> Product:
    return Product(id=row.id, name=row.name, price=row.price)


def _payment(row: OrderModel) -> Payment | None:
    try:
        p = row.payment
    except PaymentModel.DoesNotExist:
        return None
    return Payment(id=p.order_id, moment=p.moment)


def _order(row: OrderModel, with_items: bool = True) -> Order:
    order = Order(
        id=row.id,
        moment=row.moment,
        status=OrderStatus(row.status),
        client=_user(row.client),
        payment=_payment(row),
    )
    if order.payment is not None:
        order.payment.order = order
    if with_items:
        order.items = [
            OrderItem(
                order_id=row.id,
                product=_product(it.product),
                quantity=it.quantity,
                price=it.price,
            )
            for it in row.items.all()
        ]
    return order


class DjangoPersistenceGateway:
    """``PersistenceGateway`` backed by the default Django database."""

    def atomic(self):
        return transaction.atomic()

    def get_user_by_id(self, user_id: int) -> User | None:
        row = UserModel.objects.filter(pk=user_id).first()
        return _user(row) if row else None

    def get_product_by_id(self, product_id: int) -> Product | None:
        row = ProductModel.objects.filter(pk=product_id).first()
        return _product(row) if row else None

    def _orders(self):
        return (
            OrderModel.objects.select_related("client", "payment")
            .prefetch_related("items__product")
        )

    def find_all_orders(self) -> list[Order]:
        return [_order(row) for row in self._orders().order_by("id")]

    def count_orders(self) -> int:
        return OrderModel.objects.count()

    def find_orders(self, offset: int, limit: int) -> list[Order]:
        rows = self._orders().order_by("id")[offset:offset + limit]
        return [_order(row) for row in rows]

    def get_order_by_id(self, order_id: int) -> Order | None:
        row = self._orders().filter(pk=order_id).first()
        return _order(row) if row else None

    def get_order_reference_by_id(self, order_id: int) -> Order | None:
        row = (
            OrderModel.objects.select_related("client", "payment")
            .filter(pk=order_id)
            .first()
        )
        return _order(row, with_items=False) if row else None

    def save_order(self, order: Order) -> Order:
        """Write the order header and its payment in one transaction.

        Returns the same ``Order`` with ``id`` (and ``payment.id``) set.
        """
        with transaction.atomic():
            if order.id is None:
                row = OrderModel.objects.create(
                    moment=order.moment,
                    status=order.status.value,
                    client_id=order.client.id,
                )
                order.id = row.id
            else:
                updated = OrderModel.objects.filter(pk=order.id).update(
                    moment=order.moment,
                    status=order.status.value,
                    client_id=order.client.id,
                )
                if not updated:
                    raise OrderModel.DoesNotExist(f"Order {order.id} vanished during update")

            if order.payment is None:
                PaymentModel.objects.filter(order_id=order.id).delete()
            else:
                PaymentModel.objects.update_or_create(
                    order_id=order.id,
                    defaults={"moment": order.payment.moment},
                )
                order.payment.id = order.id
                order.payment.order = order
        return order

    def save_order_item(self, item: OrderItem) -> OrderItem:
        OrderItemModel.objects.create(
            order_id=item.order_id,
            product_id=item.product.id,
            quantity=item.quantity,
            price=item.price,
        )
        return item

    def delete_order_by_id(self, order_id: int) -> DeleteResult:
        try:
            with transaction.atomic():
                deleted, _ = OrderModel.objects.filter(pk=order_id).delete()
        except (IntegrityError, ProtectedError) as e:
            return DeleteResult(DeleteOutcome.CONSTRAINT_VIOLATION, e.args[0] if e.args else str(e))
        if not deleted:
            return DeleteResult(DeleteOutcome.NOT_FOUND)
        return DeleteResult(DeleteOutcome.DELETED)
