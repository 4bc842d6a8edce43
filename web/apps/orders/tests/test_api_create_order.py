"""API tests for the create-order endpoint.

These tests exercise ``POST /api/orders`` against the Django ORM gateway:
successful creation with price snapshots and default timestamps, the
``Location`` header, and every failure path, asserting that a failed
request leaves no order, payment or item row behind.
"""
from datetime import datetime, timezone as dt_timezone
from decimal import Decimal

import pytest
from django.utils import timezone

from apps.orders.models import OrderModel, OrderItemModel, PaymentModel

CREATE_URL = "/api/orders"


def assert_nothing_persisted():
    assert OrderModel.objects.count() == 0
    assert PaymentModel.objects.count() == 0
    assert OrderItemModel.objects.count() == 0


@pytest.fixture
def scenario(make_user, make_product):
    """Client 7, product 3 at 19.90 and product 5."""
    make_user(pk=7, name="Alex Green")
    make_product(pk=3, name="Smart TV", price="19.90")
    make_product(pk=5, name="Macbook Pro", price="1250.00")


@pytest.mark.django_db
def test_create_order_end_to_end(client, scenario):
    """Two lines, no payment: prices 19.90 (snapshot) and 9.99 (explicit)."""
    payload = {
        "client": {"id": 7},
        "items": [
            {"product": {"id": 3}, "quantity": 2, "price": None},
            {"product": {"id": 5}, "quantity": 1, "price": 9.99},
        ],
    }
    before = timezone.now()
    r = client.post(CREATE_URL, data=payload, content_type="application/json")
    after = timezone.now()

    assert r.status_code == 201
    body = r.json()
    assert isinstance(body["id"], int)
    assert r["Location"] == f"http://testserver/api/orders/{body['id']}"
    assert body["client"]["id"] == 7
    assert body["payment"] is None
    assert body["status"] == "WAITING_PAYMENT"
    assert [(i["product"]["id"], i["quantity"], Decimal(i["price"])) for i in body["items"]] == [
        (3, 2, Decimal("19.90")),
        (5, 1, Decimal("9.99")),
    ]
    assert Decimal(body["total"]) == Decimal("49.79")

    order = OrderModel.objects.get(pk=body["id"])
    assert before <= order.moment <= after
    assert PaymentModel.objects.count() == 0
    prices = dict(OrderItemModel.objects.filter(order=order).values_list("product_id", "price"))
    assert prices == {3: Decimal("19.90"), 5: Decimal("9.99")}


@pytest.mark.django_db
def test_create_order_with_payment_defaults_its_moment(client, scenario):
    payload = {"client": {"id": 7}, "payment": {}, "items": [{"product": {"id": 3}, "quantity": 1}]}
    before = timezone.now()
    r = client.post(CREATE_URL, data=payload, content_type="application/json")
    after = timezone.now()

    assert r.status_code == 201
    body = r.json()
    assert body["payment"]["id"] == body["id"]
    payment = PaymentModel.objects.get(order_id=body["id"])
    assert before <= payment.moment <= after


@pytest.mark.django_db
def test_create_order_keeps_supplied_moment(client, scenario):
    payload = {"client": {"id": 7}, "moment": "2019-06-20T19:53:07Z", "items": []}
    r = client.post(CREATE_URL, data=payload, content_type="application/json")
    assert r.status_code == 201
    order = OrderModel.objects.get(pk=r.json()["id"])
    assert order.moment == datetime(2019, 6, 20, 19, 53, 7, tzinfo=dt_timezone.utc)


@pytest.mark.django_db
def test_create_order_with_null_items_has_no_lines(client, scenario):
    payload = {"client": {"id": 7}, "items": None}
    r = client.post(CREATE_URL, data=payload, content_type="application/json")
    assert r.status_code == 201
    assert r.json()["items"] == []
    assert OrderModel.objects.count() == 1
    assert OrderItemModel.objects.count() == 0


@pytest.mark.django_db
def test_snapshot_price_is_not_affected_by_later_product_change(client, scenario):
    from apps.catalog.models import ProductModel

    payload = {"client": {"id": 7}, "items": [{"product": {"id": 3}, "quantity": 1}]}
    r = client.post(CREATE_URL, data=payload, content_type="application/json")
    oid = r.json()["id"]

    ProductModel.objects.filter(pk=3).update(price=Decimal("99.00"))

    body = client.get(f"/api/orders/{oid}").json()
    assert Decimal(body["items"][0]["price"]) == Decimal("19.90")
    assert Decimal(body["items"][0]["product"]["price"]) == Decimal("99.00")


@pytest.mark.django_db
def test_create_order_unknown_client_returns_404_and_persists_nothing(client, scenario):
    payload = {
        "client": {"id": 999},
        "payment": {},
        "items": [{"product": {"id": 3}, "quantity": 1}],
    }
    r = client.post(CREATE_URL, data=payload, content_type="application/json")
    assert r.status_code == 404
    assert r.json()["detail"] == "NOT_FOUND"
    assert r.json()["id"] == 999
    assert_nothing_persisted()


@pytest.mark.django_db
def test_create_order_unknown_product_rolls_back_everything(client, scenario):
    """Product 42 is resolved after the header and the first line were written."""
    payload = {
        "client": {"id": 7},
        "payment": {},
        "items": [
            {"product": {"id": 3}, "quantity": 1},
            {"product": {"id": 42}, "quantity": 1},
        ],
    }
    r = client.post(CREATE_URL, data=payload, content_type="application/json")
    assert r.status_code == 404
    assert r.json()["id"] == 42
    assert_nothing_persisted()


@pytest.mark.django_db
@pytest.mark.parametrize(
    "payload, message",
    [
        ({"items": []}, "client id is required"),
        ({"client": {}, "items": []}, "client id is required"),
        ({"client": {"id": 7}, "items": [{"product": {}, "quantity": 1}]}, "product id is required"),
        ({"client": {"id": 7}, "items": [{"quantity": 1}]}, "product id is required"),
    ],
)
def test_create_order_missing_ids_return_400(client, scenario, payload, message):
    r = client.post(CREATE_URL, data=payload, content_type="application/json")
    assert r.status_code == 400
    assert r.json()["detail"] == "INVALID_ARGUMENT"
    assert message in r.json()["message"]
    assert_nothing_persisted()


@pytest.mark.django_db
def test_create_order_repeated_product_returns_400(client, scenario):
    payload = {
        "client": {"id": 7},
        "items": [{"product": {"id": 3}, "quantity": 1}, {"product": {"id": 3}, "quantity": 2}],
    }
    r = client.post(CREATE_URL, data=payload, content_type="application/json")
    assert r.status_code == 400
    assert_nothing_persisted()


@pytest.mark.django_db
def test_create_order_validation_error(client, scenario):
    """Returns 400 when the payload fails DTO validation."""
    payload = {
        "client": {"id": 7},
        "status": "LOST",
        "items": [{"product": {"id": 3}, "quantity": 0}],
    }
    r = client.post(CREATE_URL, data=payload, content_type="application/json")
    assert r.status_code == 400
    assert_nothing_persisted()


@pytest.mark.django_db
def test_create_order_uses_patched_service(client, monkeypatch):
    """The view resolves the service through the provider at request time."""
    from apps.common.errors import NotFound

    class FailingService:
        def insert(self, request):
            raise NotFound(request.client_id, "user")

    monkeypatch.setattr("apps.orders.providers.get_order_service", lambda: FailingService())
    r = client.post(CREATE_URL, data={"client": {"id": 1}}, content_type="application/json")
    assert r.status_code == 404
    assert r.json()["message"] == "user not found. Id 1"
