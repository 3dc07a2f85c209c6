import django.core.validators
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Invite",
            fields=[
                (
                    "code",
                    models.CharField(
                        max_length=20,
                        primary_key=True,
                        serialize=False,
                        validators=[django.core.validators.MinLengthValidator(6)],
                    ),
                ),
                (
                    "issued_to_email",
                    models.EmailField(blank=True, default="", max_length=254),
                ),
                (
                    "max_uses",
                    models.PositiveIntegerField(
                        default=1,
                        validators=[django.core.validators.MinValueValidator(1)],
                    ),
                ),
                ("uses", models.PositiveIntegerField(default=0)),
                (
                    "expires_at",
                    models.DateTimeField(blank=True, default=None, null=True),
                ),
                ("active", models.BooleanField(default=True)),
                (
                    "created_at",
                    models.DateTimeField(
                        default=django.utils.timezone.now, editable=False
                    ),
                ),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "invites",
                "ordering": ["-created_at"],
                "constraints": [
                    models.CheckConstraint(
                        check=models.Q(("uses__lte", models.F("max_uses"))),
                        name="invites_uses_within_max",
                    ),
                    models.CheckConstraint(
                        check=models.Q(("max_uses__gte", 1)),
                        name="invites_max_uses_positive",
                    ),
                ],
            },
        ),
    ]
