"""Read-only HTTP views for users."""

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle

from apps.common.errors import DomainError, NotFound
from apps.common.responses import error_response
from apps.common.pagination import paginated_body
from .models import UserModel
from .schemas import UserOut


def _dump(u: UserModel) -> dict:
    return UserOut.model_validate(u).model_dump(mode="json")


class UsersCollectionView(APIView):
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "catalog"

    def get(self, request):
        try:
            body = paginated_body(request, UserModel.objects.order_by("id"), _dump)
        except DomainError as e:
            return error_response(e)
        return Response(body)


class RetrieveUserView(APIView):
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "catalog"

    def get(self, request, pk: str):
        try:
            u = UserModel.objects.get(pk=int(pk))
        except UserModel.DoesNotExist:
            return error_response(NotFound(int(pk), "user"))
        return Response(_dump(u))
