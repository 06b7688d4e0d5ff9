import logging

from django.contrib import messages
from django.contrib.auth.decorators import permission_required
from django.contrib.auth.hashers import check_password
from django.http import Http404
from django.shortcuts import redirect, render
from django.urls import reverse
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.cache import never_cache

from .forms import ProtectedPageForm
from .sessions import SessionUnlockStore
from .storage import ProtectedPageStorage

logger = logging.getLogger(__name__)

storage = ProtectedPageStorage()
unlocks = SessionUnlockStore()

ADMIN_PERMISSION = "protected_pages.administer_protected_pages"


def _safe_destination(request):
    nxt = request.GET.get("destination") or "/"
    if url_has_allowed_host_and_scheme(nxt, allowed_hosts={request.get_host()}, require_https=request.is_secure()):
        return nxt
    return "/"


def _page_or_404(pid):
    try:
        pid = int(pid)
    except (TypeError, ValueError):
        raise Http404("Unknown protected page.")
    page = storage.load(pid)
    if page is None:
        raise Http404("Unknown protected page.")
    return page


@never_cache
def login_view(request):
    page = _page_or_404(request.GET.get("protected_page"))
    nxt = _safe_destination(request)

    if unlocks.is_unlocked(request.session, page.pk):
        return redirect(nxt)

    error = None
    if request.method == "POST":
        provided = request.POST.get("password", "")
        if provided and check_password(provided, page.password):
            unlocks.unlock(request.session, page.pk)
            # new credential, new session id
            request.session.cycle_key()
            return redirect(nxt)
        logger.info(f"Wrong password for protected page {page.pk}")
        error = "Incorrect password."
    return render(request, "protected_pages/login.html", {"error": error, "page": page, "destination": nxt})


def lock_view(request):
    unlocks.lock(request.session)
    return redirect("/")


def home_view(request):
    return render(request, "protected_pages/home.html")


@permission_required(ADMIN_PERMISSION)
def list_view(request):
    pages = storage.list_active_records()
    return render(request, "protected_pages/list.html", {"pages": pages})


@permission_required(ADMIN_PERMISSION)
def add_view(request):
    form = ProtectedPageForm(request.POST or None, storage=storage)
    if request.method == "POST" and form.is_valid():
        form.save()
        messages.success(request, "The protected page settings have been successfully saved.")
        return redirect(reverse("protected_pages:list"))
    return render(request, "protected_pages/form.html", {"form": form, "title": "Add protected page"})


@permission_required(ADMIN_PERMISSION)
def edit_view(request, pid: int):
    page = _page_or_404(pid)
    form = ProtectedPageForm(request.POST or None, pid=page.pk, storage=storage, initial={"path": page.path})
    if request.method == "POST" and form.is_valid():
        form.save()
        messages.success(request, "The protected page settings have been successfully saved.")
        return redirect(reverse("protected_pages:list"))
    return render(request, "protected_pages/form.html", {"form": form, "page": page, "title": "Edit protected page"})


@permission_required(ADMIN_PERMISSION)
def delete_view(request, pid: int):
    page = _page_or_404(pid)
    if request.method == "POST":
        storage.delete(page.pk)
        messages.success(request, f"The protected page {page.path} has been deleted.")
        return redirect(reverse("protected_pages:list"))
    return render(request, "protected_pages/confirm_delete.html", {"page": page})
