from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    is_school_admin = models.BooleanField(default=False)
    is_student = models.BooleanField(default=False)

    def primary_role(self) -> str:
        if self.is_school_admin or self.is_superuser:
            return "admin"
        if self.is_student:
            return "student"
        return "user"

    def api_role(self) -> str | None:
        return {"admin": "ADMIN", "student": "ETUDIANT"}.get(self.primary_role())
