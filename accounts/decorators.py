"""Access control for the editing panel."""

from __future__ import annotations

from functools import wraps
from urllib.parse import urlencode

from django.shortcuts import redirect
from django.urls import reverse

SESSION_KEY = "board_admin"


def is_board_admin(request) -> bool:
    return bool(request.session.get(SESSION_KEY))


def _login_redirect(request):
    query = urlencode({"next": request.get_full_path()})
    return redirect(f"{reverse('accounts:login')}?{query}")


def admin_required(view_func):
    """Redirect to the admin login unless the session passed the credential check."""

    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        if not is_board_admin(request):
            return _login_redirect(request)
        return view_func(request, *args, **kwargs)

    return _wrapped


class AdminRequiredMixin:
    """Class-based counterpart of :func:`admin_required`."""

    def dispatch(self, request, *args, **kwargs):
        if not is_board_admin(request):
            return _login_redirect(request)
        return super().dispatch(request, *args, **kwargs)
