"""
The access gate: decides, once per response, whether the visitor may see
the requested path or has to be sent to the password prompt.

Collaborators are injected so the gate can run against fakes:

    records        .list_active_records() -> [ProtectedPathRecord]
    aliases        .get_alias_by_path(path) -> path
    unlocks        .is_unlocked(session, pid) -> bool
    kill_switch    .trigger(request)
    has_bypass     callable(request) -> bool
"""
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Union
from urllib.parse import urlencode

from django.conf import settings
from django.db import DatabaseError
from django.shortcuts import resolve_url
from django.urls import reverse

from .aliases import AliasResolver
from .cache import PageCacheKillSwitch
from .conf import gate_settings
from .exceptions import CollaboratorUnavailable
from .matcher import find_match, normalize_path
from .sessions import SessionUnlockStore
from .storage import ProtectedPageStorage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Allow:
    reason: str = ""


@dataclass(frozen=True)
class RedirectToLogin:
    pid: int
    url: str


@dataclass(frozen=True)
class Unavailable:
    reason: str


Decision = Union[Allow, RedirectToLogin, Unavailable]


def user_has_bypass(request) -> bool:
    user = getattr(request, "user", None)
    if user is None or not user.is_authenticated:
        return False
    return user.has_perm(gate_settings().bypass_permission)


def login_url(pid: int, destination: str) -> str:
    q = urlencode({"destination": destination, "protected_page": pid})
    return f"{reverse('protected_pages:login')}?{q}"


def exempt_urls():
    return (
        reverse("protected_pages:login"),
        reverse("protected_pages:lock"),
        resolve_url(settings.LOGIN_URL),
    )


class AccessGate:
    def __init__(
        self,
        records=None,
        aliases=None,
        unlocks=None,
        kill_switch=None,
        has_bypass: Optional[Callable] = None,
    ):
        self.records = records or ProtectedPageStorage()
        self.aliases = aliases or AliasResolver()
        self.unlocks = unlocks or SessionUnlockStore()
        self.kill_switch = kill_switch or PageCacheKillSwitch()
        self.has_bypass = has_bypass or user_has_bypass

    def candidate_path(self, request) -> str:
        return self.aliases.get_alias_by_path(normalize_path(request.path_info)).lower()

    def is_exempt(self, request) -> bool:
        path = normalize_path(request.path_info)
        return path in {normalize_path(url) for url in exempt_urls()}

    def evaluate(self, request) -> Decision:
        try:
            return self._evaluate(request)
        except (CollaboratorUnavailable, DatabaseError) as e:
            return Unavailable(str(e))

    def _evaluate(self, request) -> Decision:
        if self.has_bypass(request):
            return Allow("bypass")

        # the prompt and the way to gain a bypass are never guarded
        if self.is_exempt(request):
            return Allow("exempt")

        target = self.candidate_path(request)
        guard = find_match(target, self.records.list_active_records())
        if guard is None:
            return Allow("unprotected")

        if self.unlocks.is_unlocked(request.session, guard.id):
            return Allow("unlocked")

        self.kill_switch.trigger(request)
        logger.debug(f"{target} is guarded by protected page {guard.id}, redirecting to login")
        return RedirectToLogin(pid=guard.id, url=login_url(guard.id, request.get_full_path()))
