"""Core middleware."""
from django.conf import settings
from django.utils.cache import patch_cache_control


class NoStoreAPIMiddleware:
    """Mark API responses as uncacheable; they carry per-user data."""

    def __init__(self, get_response):
        self.get_response = get_response
        self.prefix = getattr(settings, "NO_STORE_PATH_PREFIX", "/api/")

    def __call__(self, request):
        response = self.get_response(request)
        if request.path.startswith(self.prefix) and request.method != "OPTIONS":
            patch_cache_control(response, private=True, no_store=True, max_age=0)
            response["Pragma"] = "no-cache"
        return response
