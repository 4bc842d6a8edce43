from django.urls import re_path
from .views import UsersCollectionView, RetrieveUserView

app_name = "users"

urlpatterns = [
    re_path(r"^/?$", UsersCollectionView.as_view(), name="users-collection"),
    re_path(r"^/(?P<pk>[0-9]+)/?$", RetrieveUserView.as_view(), name="users-detail"),
]
