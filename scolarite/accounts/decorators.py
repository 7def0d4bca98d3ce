from functools import wraps

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.shortcuts import redirect


def _role_required(role):
    def decorator(view):
        @login_required
        @wraps(view)
        def wrapper(request, *args, **kwargs):
            if request.user.primary_role() != role:
                messages.error(request, "Accès non autorisé.")
                return redirect("accounts:dashboard")
            return view(request, *args, **kwargs)
        return wrapper
    return decorator


admin_required = _role_required("admin")
student_required = _role_required("student")
