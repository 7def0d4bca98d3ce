import decimal

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("people", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Payment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("payment_type", models.CharField(choices=[("FRAIS_INSCRIPTION", "Frais d'inscription"), ("FRAIS_SCOLARITE", "Frais de scolarité"), ("ASSURANCE", "Assurance"), ("AUTRES", "Autres")], max_length=30)),
                ("amount", models.DecimalField(decimal_places=2, max_digits=12, validators=[django.core.validators.MinValueValidator(decimal.Decimal("0.01"))])),
                ("status", models.CharField(choices=[("PAYE", "Payé"), ("NON_PAYE", "Non payé"), ("EN_COURS", "En cours")], default="NON_PAYE", max_length=20)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("paid_at", models.DateTimeField(blank=True, null=True)),
                ("student", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="payments", to="people.student")),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
    ]
