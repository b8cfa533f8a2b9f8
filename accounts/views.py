import logging

from django.contrib import messages
from django.shortcuts import redirect, render
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_POST

from .decorators import SESSION_KEY
from .forms import AdminLoginForm


logger = logging.getLogger(__name__)


def _safe_next(request) -> str | None:
    next_url = request.POST.get("next") or request.GET.get("next")
    if next_url and url_has_allowed_host_and_scheme(
        next_url, allowed_hosts={request.get_host()}, require_https=request.is_secure()
    ):
        return next_url
    return None


def login(request):
    """Open the editing panel for this session after the credential check."""

    if request.method == "POST":
        form = AdminLoginForm(request.POST)
        if form.is_valid():
            request.session.cycle_key()
            request.session[SESSION_KEY] = True
            logger.info("Admin session opened")
            return redirect(_safe_next(request) or "groups:panel")
        logger.warning("Rejected admin login attempt")
    else:
        form = AdminLoginForm()
    return render(
        request,
        "accounts/login.html",
        {"form": form, "next": _safe_next(request) or ""},
    )


@require_POST
def logout(request):
    request.session.pop(SESSION_KEY, None)
    messages.info(request, "Anda telah logout.")
    return redirect("students:home")
