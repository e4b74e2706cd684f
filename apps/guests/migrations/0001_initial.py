import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Guest",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("first_name", models.CharField(max_length=100, verbose_name="First name")),
                ("last_name", models.CharField(max_length=100, verbose_name="Last name")),
                ("email", models.EmailField(blank=True, max_length=254, null=True, unique=True, verbose_name="Email")),
                (
                    "phone",
                    models.CharField(
                        blank=True,
                        max_length=30,
                        validators=[
                            django.core.validators.RegexValidator(
                                message="Invalid phone number.",
                                regex="^\\+?[\\d\\-\\s()]{5,30}$",
                            )
                        ],
                        verbose_name="Phone",
                    ),
                ),
                ("loyalty_points", models.PositiveIntegerField(default=0, verbose_name="Loyalty points")),
                ("nationality", models.CharField(blank=True, max_length=100, verbose_name="Nationality")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Guest",
                "verbose_name_plural": "Guests",
                "ordering": ["last_name", "first_name", "id"],
                "indexes": [models.Index(fields=["last_name", "first_name"], name="guest_name_idx")],
            },
        ),
    ]
