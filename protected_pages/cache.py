from django.utils.cache import add_never_cache_headers

NO_CACHE_ATTR = "_protected_pages_no_cache"


class PageCacheKillSwitch:
    """Marks a request whose response must never be stored by any cache."""

    def trigger(self, request):
        setattr(request, NO_CACHE_ATTR, True)
        # read by django.middleware.cache.UpdateCacheMiddleware
        request._cache_update_cache = False

    def is_triggered(self, request) -> bool:
        return getattr(request, NO_CACHE_ATTR, False)

    def apply(self, request, response):
        if self.is_triggered(request):
            add_never_cache_headers(response)
        return response
