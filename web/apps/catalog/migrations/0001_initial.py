from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="CategoryModel",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=120)),
            ],
            options={
                "db_table": "categories",
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="ProductModel",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True, default="")),
                ("price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("img_url", models.CharField(blank=True, default="", max_length=500)),
                ("categories", models.ManyToManyField(blank=True, related_name="products", to="catalog.categorymodel")),
            ],
            options={
                "db_table": "products",
                "ordering": ["id"],
            },
        ),
    ]
