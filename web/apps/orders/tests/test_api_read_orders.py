import pytest
from decimal import Decimal
from django.utils import timezone

from apps.orders.models import OrderModel, OrderItemModel, PaymentModel

DETAIL_URL = "/api/orders/{oid}"
LIST_URL = "/api/orders/"


@pytest.fixture
def seeded_order(make_user, make_product):
    user = make_user(pk=1, name="Maria Brown")
    p1 = make_product(pk=1, name="The Lord of the Rings", price="90.50")
    p2 = make_product(pk=2, name="Smart TV", price="2190.00")
    o = OrderModel.objects.create(moment=timezone.now(), status="PAID", client=user)
    OrderItemModel.objects.create(order=o, product=p1, quantity=2, price=p1.price)
    OrderItemModel.objects.create(order=o, product=p2, quantity=1, price=p2.price)
    PaymentModel.objects.create(order=o, moment=timezone.now())
    return o


@pytest.mark.django_db
def test_get_order_by_id_returns_200_and_payload(client, seeded_order):
    r = client.get(DETAIL_URL.format(oid=seeded_order.id))
    assert r.status_code == 200
    body = r.json()
    assert body["id"] == seeded_order.id
    assert body["status"] == "PAID"
    assert body["client"]["name"] == "Maria Brown"
    assert body["payment"]["id"] == seeded_order.id
    assert len(body["items"]) == 2
    assert Decimal(body["items"][0]["sub_total"]) == Decimal("181.00")
    assert Decimal(body["total"]) == Decimal("2371.00")


@pytest.mark.django_db
def test_get_order_accepts_trailing_slash(client, seeded_order):
    r = client.get(f"/api/orders/{seeded_order.id}/")
    assert r.status_code == 200


@pytest.mark.django_db
def test_get_order_not_found_returns_404(client):
    r = client.get(DETAIL_URL.format(oid=12345))
    assert r.status_code == 404
    assert r.json()["detail"] == "NOT_FOUND"
    assert r.json()["id"] == 12345


@pytest.mark.django_db
def test_list_orders_returns_paginated_array(client, seeded_order, make_user):
    other = make_user(name="Alex Green")
    OrderModel.objects.create(moment=timezone.now(), status="WAITING_PAYMENT", client=other)
    r = client.get(LIST_URL)
    assert r.status_code == 200
    body = r.json()
    assert body["count"] == 2
    assert isinstance(body["results"], list) and len(body["results"]) == 2
    assert all({"id", "moment", "status", "client", "payment", "items", "total"} <= set(x.keys()) for x in body["results"])
    assert body["results"][1]["payment"] is None


@pytest.mark.django_db
def test_list_orders_page_size(client, seeded_order, make_user):
    other = make_user(name="Alex Green")
    OrderModel.objects.create(moment=timezone.now(), status="WAITING_PAYMENT", client=other)
    body = client.get(LIST_URL, {"page": 2, "page_size": 1}).json()
    assert body["page"] == 2
    assert [o["client"]["name"] for o in body["results"]] == ["Alex Green"]


@pytest.mark.django_db
def test_response_carries_request_id(client):
    r = client.get(LIST_URL, HTTP_X_REQUEST_ID="req-123")
    assert r["X-Request-ID"] == "req-123"


@pytest.mark.django_db
def test_list_orders_loads_only_the_requested_page(client, make_user, monkeypatch):
    from apps.orders.domain import OrderService

    def no_full_scan(self):
        raise AssertionError("list endpoint must not load every order")

    monkeypatch.setattr(OrderService, "find_all", no_full_scan)
    user = make_user(pk=1)
    ids = [OrderModel.objects.create(moment=timezone.now(), status="PAID", client=user).id for _ in range(3)]

    r = client.get(LIST_URL, {"page": 2, "page_size": 2})
    assert r.status_code == 200
    body = r.json()
    assert body["count"] == 3
    assert body["page"] == 2
    assert [o["id"] for o in body["results"]] == ids[2:]


@pytest.mark.django_db
def test_list_orders_query_count_does_not_grow_with_table(client, make_user, django_assert_max_num_queries):
    user = make_user(pk=1)
    for _ in range(30):
        OrderModel.objects.create(moment=timezone.now(), status="PAID", client=user)
    # count + orders + prefetched items + their products
    with django_assert_max_num_queries(4):
        r = client.get(LIST_URL, {"page_size": 5})
    assert len(r.json()["results"]) == 5


@pytest.mark.django_db
@pytest.mark.parametrize("query", [{"page_size": 0}, {"page": 0}, {"page": "abc"}, {"page_size": "-"}])
def test_list_orders_rejects_bad_page_params(client, query):
    r = client.get(LIST_URL, query)
    assert r.status_code == 400
    assert r.json()["detail"] == "INVALID_ARGUMENT"


@pytest.mark.django_db
def test_list_orders_caps_page_size(client):
    r = client.get(LIST_URL, {"page_size": 10_000})
    assert r.status_code == 200
    assert r.json()["page_size"] == 100


@pytest.mark.django_db
def test_list_orders_page_past_end_returns_last_page(client, seeded_order):
    r = client.get(LIST_URL, {"page": 9})
    assert r.status_code == 200
    assert r.json()["page"] == 1
    assert [o["id"] for o in r.json()["results"]] == [seeded_order.id]
