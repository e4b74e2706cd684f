import django.db.models.functions.text
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("guests", "0001_initial"),
    ]

    operations = [
        migrations.AddConstraint(
            model_name="guest",
            constraint=models.UniqueConstraint(
                django.db.models.functions.text.Lower("email"),
                name="guest_email_ci_unique",
                violation_error_message="A guest with this email already exists.",
            ),
        ),
    ]
