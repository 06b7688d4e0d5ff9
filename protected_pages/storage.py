import logging
from functools import reduce
from operator import or_
from typing import Iterable, List, Optional

from django.contrib.auth.hashers import make_password
from django.core.cache import cache
from django.db import DatabaseError
from django.db.models import Q

from .conf import gate_settings
from .exceptions import CollaboratorUnavailable
from .matcher import ProtectedPathRecord
from .models import ProtectedPage

logger = logging.getLogger(__name__)


class ProtectedPageStorage:
    """Reads and writes ProtectedPage rows. The gate only ever reads (id, path)."""

    def list_active_records(self) -> List[ProtectedPathRecord]:
        try:
            rows = list(ProtectedPage.objects.order_by("pk").values_list("pk", "path"))
        except DatabaseError as e:
            logger.error(f"Could not load protected pages: {e}")
            raise CollaboratorUnavailable("protected pages store unavailable") from e
        return [ProtectedPathRecord(id=pk, path=path) for pk, path in rows]

    def load(self, pid) -> Optional[ProtectedPage]:
        return ProtectedPage.objects.filter(pk=pid).first()

    def path_taken(self, paths: Iterable[str], exclude_pid=None) -> bool:
        paths = [p for p in paths if p]
        if not paths:
            return False
        qs = ProtectedPage.objects.filter(reduce(or_, (Q(path__iexact=p) for p in paths)))
        if exclude_pid is not None:
            qs = qs.exclude(pk=exclude_pid)
        return qs.exists()

    def create(self, path: str, password: str) -> ProtectedPage:
        page = ProtectedPage.objects.create(path=path, password=make_password(password))
        logger.info(f"Protected page {page.pk} created for {path}")
        self._flush()
        return page

    def update(self, pid, path: str, password: Optional[str] = None) -> ProtectedPage:
        page = ProtectedPage.objects.get(pk=pid)
        page.path = path
        fields = ["path", "updated_at"]
        # blank password keeps the stored hash
        if password:
            page.password = make_password(password)
            fields.append("password")
        page.save(update_fields=fields)
        logger.info(f"Protected page {page.pk} updated ({path})")
        self._flush()
        return page

    def delete(self, pid) -> None:
        deleted, _ = ProtectedPage.objects.filter(pk=pid).delete()
        if deleted:
            logger.info(f"Protected page {pid} deleted")
            self._flush()

    def _flush(self):
        # cached copies of newly guarded pages must not outlive the write
        if gate_settings().flush_cache_on_save:
            cache.clear()
