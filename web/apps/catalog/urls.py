from django.urls import re_path
from .views import (
    CategoriesCollectionView,
    CategoryDetailView,
    ProductsCollectionView,
    ProductDetailView,
)

# Included from the root URLconf under the "categories" and "products"
# namespaces respectively.
category_patterns = [
    re_path(r"^/?$", CategoriesCollectionView.as_view(), name="collection"),
    re_path(r"^/(?P<pk>[0-9]+)/?$", CategoryDetailView.as_view(), name="detail"),
]

product_patterns = [
    re_path(r"^/?$", ProductsCollectionView.as_view(), name="collection"),
    re_path(r"^/(?P<pk>[0-9]+)/?$", ProductDetailView.as_view(), name="detail"),
]
