from django.db import models


class OrderModel(models.Model):

    class Status(models.TextChoices):
        WAITING_PAYMENT = "WAITING_PAYMENT"
        PAID = "PAID"
        SHIPPED = "SHIPPED"
        DELIVERED = "DELIVERED"
        CANCELED = "CANCELED"

    moment = models.DateTimeField()
    status = models.CharField(max_length=32, choices=Status.choices, default=Status.WAITING_PAYMENT)
    client = models.ForeignKey("users.UserModel", on_delete=models.PROTECT, related_name="orders")

    class Meta:
        db_table = "orders"
        ordering = ["id"]


class OrderItemModel(models.Model):
    # Both keys are protected: an order with lines, or a product that was
    # ever ordered, cannot be deleted out from under the line.
    order = models.ForeignKey(OrderModel, on_delete=models.PROTECT, related_name="items")
    product = models.ForeignKey("catalog.ProductModel", on_delete=models.PROTECT, related_name="order_items")
    quantity = models.PositiveIntegerField()
    price = models.DecimalField(max_digits=10, decimal_places=2)

    class Meta:
        db_table = "order_items"
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(fields=["order", "product"], name="uniq_order_item_order_product"),
        ]


class PaymentModel(models.Model):
    # Shares the order's primary key, so a payment belongs to one order only.
    order = models.OneToOneField(
        OrderModel, on_delete=models.CASCADE, primary_key=True, related_name="payment"
    )
    moment = models.DateTimeField()

    class Meta:
        db_table = "payments"
