from django.db import models


class CategoryModel(models.Model):
    name = models.CharField(max_length=120)

    class Meta:
        db_table = "categories"
        ordering = ["id"]

    def __str__(self):
        return self.name


class ProductModel(models.Model):
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True, default="")
    # Current list price; order items copy it at creation time.
    price = models.DecimalField(max_digits=10, decimal_places=2)
    img_url = models.CharField(max_length=500, blank=True, default="")
    categories = models.ManyToManyField(CategoryModel, related_name="products", blank=True)

    class Meta:
        db_table = "products"
        ordering = ["id"]

    def __str__(self):
        return self.name
