"""HTTP views for the orders app.

This module contains DRF API views used by the orders API. Views are kept
intentionally small: they validate requests (via Pydantic), map to domain
requests, delegate to the domain service, and return an HTTP response.

The views obtain an ``OrderService`` wired to the Django ORM gateway from
``providers.get_order_service()``.

Error mapping: ``InvalidArgument`` → 400, ``NotFound`` → 404,
``DatabaseConstraintViolation`` → 409. Any other exception propagates and
is reported by DRF as a server error.
"""
from django.urls import reverse
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.throttling import ScopedRateThrottle

from apps.common.errors import DomainError
from apps.common.responses import error_response, validation_error_response
from apps.common.pagination import paginated_body
from . import providers
from .schemas import OrderIn, OrderReadDTO


def _dump(order) -> dict:
    return OrderReadDTO.from_domain(order).model_dump(mode="json")


def _parse(request):
    return OrderIn.model_validate(request.data)


class _OrderListing:
    """Sliceable view over the stored orders for ``Paginator``.

    Only the requested page is loaded from the gateway.
    """

    def __init__(self, service):
        self.service = service

    def count(self) -> int:
        return self.service.count()

    def __getitem__(self, window: slice):
        start = window.start or 0
        return self.service.find_page(start, window.stop - start)


class OrdersCollectionView(APIView):
    """List orders (GET) or create an order with its payment and items (POST)."""

    throttle_classes = [ScopedRateThrottle]

    def get_throttles(self):
        # DRF evaluates throttles in initial(), before get/post
        self.throttle_scope = "orders_list" if self.request.method == "GET" else "orders_create"
        return [throttle() for throttle in self.throttle_classes]

    def get(self, request):
        listing = _OrderListing(providers.get_order_service())
        try:
            body = paginated_body(request, listing, _dump)
        except DomainError as e:
            return error_response(e)
        return Response(body, status=200)

    def post(self, request):
        """Create a new order.

        Args:
            request (Request): DRF request with JSON body.

        Returns:
            Response: One of the following responses.
            - 201 with the created order and a ``Location`` header.
            - 400 for DTO validation errors or a missing client/product id.
            - 404 with the missing id when the client or a product does
              not exist. Nothing is persisted in that case.
        """
        try:
            dto = _parse(request)
        except Exception as e:
            return validation_error_response(e)

        try:
            out = providers.get_order_service().insert(dto.to_request())
        except DomainError as e:
            return error_response(e)

        resp = Response(_dump(out), status=status.HTTP_201_CREATED)
        resp["Location"] = request.build_absolute_uri(
            reverse("orders:orders-detail", kwargs={"pk": out.id})
        )
        return resp


class OrderDetailView(APIView):
    """Retrieve, update or delete one order."""

    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "orders_detail"

    def get(self, request, pk: str):
        try:
            order = providers.get_order_service().find_by_id(int(pk))
        except DomainError as e:
            return error_response(e)
        return Response(_dump(order), status=200)

    def put(self, request, pk: str):
        try:
            dto = _parse(request)
        except Exception as e:
            return validation_error_response(e)

        try:
            service = providers.get_order_service()
            service.update(int(pk), dto.to_request())
            order = service.find_by_id(int(pk))
        except DomainError as e:
            return error_response(e)
        return Response(_dump(order), status=200)

    def delete(self, request, pk: str):
        try:
            providers.get_order_service().delete(int(pk))
        except DomainError as e:
            return error_response(e)
        return Response(status=status.HTTP_204_NO_CONTENT)
