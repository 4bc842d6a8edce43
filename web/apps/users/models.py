from django.db import models


class UserModel(models.Model):
    """Customer placing orders. Not tied to ``django.contrib.auth``."""

    name = models.CharField(max_length=120)
    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=32, blank=True, default="")

    class Meta:
        db_table = "users"
        ordering = ["id"]

    def __str__(self):
        return self.name
