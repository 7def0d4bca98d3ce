from django.conf import settings
from django.db import models

User = settings.AUTH_USER_MODEL

class Student(models.Model):
    user = models.OneToOneField(User, on_delete=models.SET_NULL, null=True, blank=True, related_name="student")

    last_name = models.CharField(max_length=60)
    first_name = models.CharField(max_length=60)
    email = models.EmailField(unique=True)
    code_apogee = models.PositiveIntegerField(unique=True)
    cin = models.CharField(max_length=20)

    program = models.CharField(max_length=120)
    level = models.CharField(max_length=40)
    academic_year = models.CharField(max_length=9)

    class Meta:
        ordering = ["last_name", "first_name"]

    def __str__(self):
        return f"{self.code_apogee} - {self.first_name} {self.last_name}"

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"
