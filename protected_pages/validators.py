from django.urls import Resolver404, resolve

from .matcher import strip_wildcard


def is_routable(path: str) -> bool:
    """True when some URL pattern answers ``path`` (with or without a trailing slash)."""
    for candidate in (path, path.rstrip("/") + "/"):
        try:
            resolve(candidate)
            return True
        except Resolver404:
            continue
    return False


class WildcardPathValidator:
    """Checks a record path by validating what is left once wildcards are removed."""

    def __init__(self, is_routable=is_routable):
        self.is_routable = is_routable

    def __call__(self, path: str) -> bool:
        return self.is_valid(path)

    def is_valid(self, path: str) -> bool:
        path = strip_wildcard(path) or "/"
        return bool(self.is_routable(path))
