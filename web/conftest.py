from decimal import Decimal

import pytest


@pytest.fixture(autouse=True)
def reset_throttles():
    # DRF throttle history lives in the cache and would leak between tests
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def make_user(db):
    from apps.users.models import UserModel

    def _make(pk=None, name="Maria Brown", email=None, phone="988888888"):
        n = UserModel.objects.count() + 1
        return UserModel.objects.create(
            id=pk,
            name=name,
            email=email or f"user{pk or n}@example.com",
            phone=phone,
        )
    return _make


@pytest.fixture
def make_product(db):
    from apps.catalog.models import ProductModel

    def _make(pk=None, name="The Lord of the Rings", price="90.50", categories=()):
        p = ProductModel.objects.create(id=pk, name=name, price=Decimal(price))
        if categories:
            p.categories.set(categories)
        return p
    return _make


@pytest.fixture
def make_category(db):
    from apps.catalog.models import CategoryModel

    def _make(name="Books"):
        return CategoryModel.objects.create(name=name)
    return _make
