from django.urls import include, path

from apps.catalog.urls import category_patterns, product_patterns

urlpatterns = [
    path("health/", include("apps.monitoring.urls")),
    path("api/categories", include((category_patterns, "categories"))),
    path("api/products", include((product_patterns, "products"))),
    path("api/users", include("apps.users.urls")),
    path("api/orders", include("apps.orders.urls")),
]
