import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("people", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="DocumentRequest",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("document_type", models.CharField(choices=[("ATTESTATION_SCOLARITE", "Attestation de scolarité"), ("RELEVE_NOTES", "Relevé de notes"), ("CONVENTION_DE_STAGE", "Convention de stage")], max_length=30)),
                ("status", models.CharField(choices=[("EN_ATTENTE", "En attente"), ("APPROVEE", "Approuvée"), ("REFUSEE", "Refusée")], default="EN_ATTENTE", max_length=20)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("processed_at", models.DateTimeField(blank=True, null=True)),
                ("processed_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="processed_requests", to=settings.AUTH_USER_MODEL)),
                ("student", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="document_requests", to="people.student")),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
    ]
