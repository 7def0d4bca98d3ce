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
            name="Complaint",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("subject", models.CharField(max_length=200)),
                ("message", models.TextField()),
                ("status", models.CharField(choices=[("EN_ATTENTE", "En attente"), ("TRAITEE", "Traitée")], default="EN_ATTENTE", max_length=20)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("processed_at", models.DateTimeField(blank=True, null=True)),
                ("response", models.TextField(blank=True)),
                ("student", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="complaints", to="people.student")),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
    ]
