from django import forms
from django.conf import settings
from django.utils.crypto import constant_time_compare
from django.utils.translation import gettext_lazy as _


class AdminLoginForm(forms.Form):
    """Checks the submitted pair against the static panel credentials."""

    username = forms.CharField(label=_("Username"), max_length=150)
    password = forms.CharField(label=_("Password"), widget=forms.PasswordInput)

    error_messages = {
        "invalid_login": _("Username atau Password salah. Silakan coba lagi."),
    }

    def clean(self):
        cleaned_data = super().clean()
        username = cleaned_data.get("username") or ""
        password = cleaned_data.get("password") or ""
        valid_username = constant_time_compare(username, settings.BOARD_ADMIN_USERNAME)
        valid_password = constant_time_compare(password, settings.BOARD_ADMIN_PASSWORD)
        if not (valid_username and valid_password):
            raise forms.ValidationError(
                self.error_messages["invalid_login"], code="invalid_login"
            )
        return cleaned_data
