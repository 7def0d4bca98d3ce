from rest_framework import permissions


class IsSchoolAdmin(permissions.BasePermission):
    message = "Accès réservé aux administrateurs."

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.primary_role() == "admin")


class IsStudent(permissions.BasePermission):
    message = "Accès réservé aux étudiants."

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.primary_role() == "student")
