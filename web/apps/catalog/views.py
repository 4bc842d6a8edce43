"""HTTP views for the catalog app.

Views validate bodies with Pydantic, delegate to the catalog services and
translate ``DomainError`` subclasses into responses. Category creation
answers 201 with a ``Location`` header pointing at the new resource.
"""

from django.urls import reverse
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.throttling import ScopedRateThrottle

from apps.common.errors import DomainError
from apps.common.responses import error_response, validation_error_response
from apps.common.pagination import paginated_body
from .models import CategoryModel, ProductModel
from .schemas import CategoryIn, CategoryOut, ProductOut
from .services import CategoryService, ProductService


def dump_category(c: CategoryModel) -> dict:
    return CategoryOut.model_validate(c).model_dump(mode="json")


def dump_product(p: ProductModel) -> dict:
    dto = ProductOut(
        id=p.id,
        name=p.name,
        description=p.description,
        price=p.price,
        img_url=p.img_url,
        categories=[CategoryOut.model_validate(c) for c in p.categories.all()],
    )
    return dto.model_dump(mode="json")


class CatalogView(APIView):
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "catalog"


class CategoriesCollectionView(CatalogView):
    """List categories (GET) or create one (POST)."""

    def get(self, request):
        try:
            body = paginated_body(request, CategoryService().find_all(), dump_category)
        except DomainError as e:
            return error_response(e)
        return Response(body)

    def post(self, request):
        try:
            dto = CategoryIn.model_validate(request.data)
        except Exception as e:
            return validation_error_response(e)

        obj = CategoryService().insert(dto.name)
        resp = Response(dump_category(obj), status=status.HTTP_201_CREATED)
        resp["Location"] = request.build_absolute_uri(
            reverse("categories:detail", kwargs={"pk": obj.id})
        )
        return resp


class CategoryDetailView(CatalogView):
    """Retrieve, replace or delete a single category."""

    def get(self, request, pk: str):
        try:
            obj = CategoryService().find_by_id(int(pk))
        except DomainError as e:
            return error_response(e)
        return Response(dump_category(obj))

    def put(self, request, pk: str):
        try:
            dto = CategoryIn.model_validate(request.data)
        except Exception as e:
            return validation_error_response(e)
        try:
            obj = CategoryService().update(int(pk), dto.name)
        except DomainError as e:
            return error_response(e)
        return Response(dump_category(obj))

    def delete(self, request, pk: str):
        try:
            CategoryService().delete(int(pk))
        except DomainError as e:
            return error_response(e)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ProductsCollectionView(CatalogView):

    def get(self, request):
        try:
            body = paginated_body(request, ProductService().find_all(), dump_product)
        except DomainError as e:
            return error_response(e)
        return Response(body)


class ProductDetailView(CatalogView):

    def get(self, request, pk: str):
        try:
            obj = ProductService().find_by_id(int(pk))
        except DomainError as e:
            return error_response(e)
        return Response(dump_product(obj))
