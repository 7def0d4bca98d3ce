import django.core.validators
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
            name="Enrollment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("enrollment_type", models.CharField(choices=[("MASTER", "Master"), ("DOCTORAT", "Doctorat"), ("REINSC", "Réinscription")], max_length=20)),
                ("academic_year", models.CharField(max_length=9)),
                ("status", models.CharField(choices=[("ENREGISTRE", "Enregistrée"), ("CONFIRME", "Confirmée"), ("ANNULE", "Annulée")], default="ENREGISTRE", max_length=20)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("decided_at", models.DateTimeField(blank=True, null=True)),
                ("processed_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="processed_enrollments", to=settings.AUTH_USER_MODEL)),
                ("student", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="enrollments", to="people.student")),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="Grade",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("module", models.CharField(max_length=120)),
                ("value", models.DecimalField(decimal_places=2, max_digits=4, validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(20)])),
                ("student", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="grades", to="people.student")),
            ],
            options={
                "ordering": ["module"],
            },
        ),
    ]
