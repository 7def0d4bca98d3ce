from django.conf import settings


def portal(request):
    user = getattr(request, "user", None)
    role = user.primary_role() if user is not None and user.is_authenticated else None
    return {
        "banner_timeout_ms": settings.PORTAL_BANNER_TIMEOUT_MS,
        "portal_role": role,
        "institution": settings.PORTAL_INSTITUTION,
    }
