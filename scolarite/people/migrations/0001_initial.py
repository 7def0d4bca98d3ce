import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Student",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("last_name", models.CharField(max_length=60)),
                ("first_name", models.CharField(max_length=60)),
                ("email", models.EmailField(max_length=254, unique=True)),
                ("code_apogee", models.PositiveIntegerField(unique=True)),
                ("cin", models.CharField(max_length=20)),
                ("program", models.CharField(max_length=120)),
                ("level", models.CharField(max_length=40)),
                ("academic_year", models.CharField(max_length=9)),
                ("user", models.OneToOneField(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="student", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["last_name", "first_name"],
            },
        ),
    ]
