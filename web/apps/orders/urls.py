from django.urls import re_path
from .views import OrdersCollectionView, OrderDetailView
app_name = "orders"

urlpatterns = [
    re_path(r"^/?$", OrdersCollectionView.as_view(), name="orders-collection"),  # GET list / POST create
    re_path(r"^/(?P<pk>[0-9]+)/?$", OrderDetailView.as_view(), name="orders-detail"),
]
