import logging

from django.http import HttpResponse, HttpResponseRedirect
from django.utils.deprecation import MiddlewareMixin

from .aliases import AliasResolver
from .conf import gate_settings
from .exceptions import CollaboratorUnavailable
from .gate import AccessGate, RedirectToLogin, Unavailable
from .matcher import normalize_path

logger = logging.getLogger(__name__)


class PathAliasMiddleware(MiddlewareMixin):
    """Routes an aliased path ("/about-us") to its system path ("/node/5")."""

    def __init__(self, get_response):
        super().__init__(get_response)
        self.aliases = AliasResolver()

    def process_request(self, request):
        try:
            system_path = self.aliases.get_path_by_alias(request.path_info)
        except CollaboratorUnavailable:
            return None
        if system_path.lower() != normalize_path(request.path_info).lower():
            # keep Django's trailing-slash URL style
            if request.path_info.endswith("/") and not system_path.endswith("/"):
                system_path += "/"
            request.path_info = system_path
        return None


class ProtectedPagesMiddleware(MiddlewareMixin):
    """Swaps the outbound response for a login redirect on guarded paths."""

    def __init__(self, get_response):
        super().__init__(get_response)
        self.gate = AccessGate()

    def process_response(self, request, response):
        decision = self.gate.evaluate(request)

        if isinstance(decision, RedirectToLogin):
            return self.gate.kill_switch.apply(request, HttpResponseRedirect(decision.url))

        if isinstance(decision, Unavailable):
            if gate_settings().fail_open:
                logger.warning(f"Protection check skipped for {request.path} ({decision.reason})")
                return response
            logger.error(f"Protection check failed for {request.path} ({decision.reason})")
            return HttpResponse("Service temporarily unavailable.", status=503, content_type="text/plain")

        return response
