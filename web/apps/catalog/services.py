"""Category CRUD on top of the Django ORM.

The service mirrors the order service's contract: lookups that miss raise
``NotFound`` and integrity failures on delete raise
``DatabaseConstraintViolation`` carrying the database message.
"""

import logging
from django.db import IntegrityError, transaction
from django.db.models import ProtectedError

from apps.common.errors import NotFound, DatabaseConstraintViolation
from .models import CategoryModel, ProductModel

logger = logging.getLogger(__name__)


class CategoryService:

    def find_all(self):
        return CategoryModel.objects.order_by("id")

    def find_by_id(self, pk: int) -> CategoryModel:
        try:
            return CategoryModel.objects.get(pk=pk)
        except CategoryModel.DoesNotExist:
            raise NotFound(pk, "category")

    def insert(self, name: str) -> CategoryModel:
        obj = CategoryModel.objects.create(name=name)
        logger.info("category created", extra={"category_id": obj.id})
        return obj

    def update(self, pk: int, name: str) -> CategoryModel:
        obj = self.find_by_id(pk)
        obj.name = name
        obj.save(update_fields=["name"])
        return obj

    def delete(self, pk: int) -> None:
        try:
            with transaction.atomic():
                deleted, _ = CategoryModel.objects.filter(pk=pk).delete()
        except (IntegrityError, ProtectedError) as e:
            raise DatabaseConstraintViolation(e.args[0] if e.args else str(e))
        if not deleted:
            raise NotFound(pk, "category")
        logger.info("category deleted", extra={"category_id": pk})


class ProductService:

    def find_all(self):
        return ProductModel.objects.prefetch_related("categories").order_by("id")

    def find_by_id(self, pk: int) -> ProductModel:
        try:
            return ProductModel.objects.prefetch_related("categories").get(pk=pk)
        except ProductModel.DoesNotExist:
            raise NotFound(pk, "product")
