"""Pydantic schemas for orders.

This module exposes the request schema accepted by the create and update
endpoints, and the read schema used for every order response. Request
schemas only check shapes; missing reference ids are reported by
``OrderService`` so the error is the same whether the service is called
over HTTP or directly.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from apps.users.schemas import UserOut
from .domain import (
    Order,
    OrderItemRequest,
    OrderRequest,
    OrderStatus,
    PaymentRequest,
)


class ReferenceIn(BaseModel):
    """Reference to an existing entity by id, e.g. ``{"id": 7}``."""

    id: Optional[int] = None


class PaymentIn(BaseModel):
    moment: Optional[datetime] = None


class OrderItemIn(BaseModel):
    """Input schema for a single order line.

    Attributes:
        product: Reference to the product.
        quantity: Positive integer indicating units requested.
        price: Optional unit price. When omitted the product's current
            price is used.
    """

    product: Optional[ReferenceIn] = None
    quantity: int = Field(gt=0)
    price: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)


class OrderIn(BaseModel):
    """Schema for creating or updating an order.

    Attributes:
        client: Reference to the client user.
        moment: Optional order instant, defaults to now on create.
        status: Optional order status.
        payment: Optional payment; its moment defaults to now.
        items: Requested lines (ignored by update). Null is read as no
            lines.
    """

    client: Optional[ReferenceIn] = None
    moment: Optional[datetime] = None
    status: Optional[OrderStatus] = None
    payment: Optional[PaymentIn] = None
    items: Optional[list[OrderItemIn]] = None

    def to_request(self) -> OrderRequest:
        """Map the validated payload to the domain request."""
        return OrderRequest(
            client_id=self.client.id if self.client else None,
            moment=self.moment,
            status=self.status,
            payment=PaymentRequest(moment=self.payment.moment) if self.payment else None,
            items=tuple(
                OrderItemRequest(
                    product_id=i.product.id if i.product else None,
                    quantity=i.quantity,
                    price=i.price,
                )
                for i in self.items or ()
            ),
        )


class ProductRefOut(BaseModel):
    id: int
    name: str
    price: Decimal


class OrderItemOut(BaseModel):
    product: ProductRefOut
    quantity: int
    price: Decimal
    sub_total: Decimal


class PaymentOut(BaseModel):
    id: int
    moment: datetime


class OrderReadDTO(BaseModel):
    """Read schema for an order with its client, payment and items."""

    id: int
    moment: datetime
    status: OrderStatus
    client: UserOut
    payment: Optional[PaymentOut] = None
    items: list[OrderItemOut] = []
    total: Decimal

    @classmethod
    def from_domain(cls, order: Order) -> "OrderReadDTO":
        return cls(
            id=order.id,
            moment=order.moment,
            status=order.status,
            client=UserOut(
                id=order.client.id,
                name=order.client.name,
                email=order.client.email,
                phone=order.client.phone,
            ),
            payment=(
                PaymentOut(id=order.payment.id, moment=order.payment.moment)
                if order.payment
                else None
            ),
            items=[
                OrderItemOut(
                    product=ProductRefOut(id=it.product.id, name=it.product.name, price=it.product.price),
                    quantity=it.quantity,
                    price=it.price,
                    sub_total=it.sub_total,
                )
                for it in order.items
            ],
            total=order.total,
        )
