import logging

from django.db import DatabaseError

from .exceptions import CollaboratorUnavailable
from .matcher import normalize_path
from .models import PathAlias

logger = logging.getLogger(__name__)


class AliasResolver:
    """Maps system paths to their public alias and back. Unknown paths map to themselves."""

    def get_alias_by_path(self, path: str) -> str:
        path = normalize_path(path)
        try:
            alias = PathAlias.objects.filter(path=path).values_list("alias", flat=True).first()
        except DatabaseError as e:
            logger.error(f"Alias lookup failed for {path}: {e}")
            raise CollaboratorUnavailable("path aliases unavailable") from e
        return alias or path

    def get_path_by_alias(self, alias: str) -> str:
        alias = normalize_path(alias)
        try:
            path = PathAlias.objects.filter(alias__iexact=alias).values_list("path", flat=True).first()
        except DatabaseError as e:
            logger.error(f"Alias lookup failed for {alias}: {e}")
            raise CollaboratorUnavailable("path aliases unavailable") from e
        return path or alias
