from django import forms

from .aliases import AliasResolver
from .storage import ProtectedPageStorage
from .validators import WildcardPathValidator


class ProtectedPageForm(forms.Form):
    path = forms.CharField(
        label="Relative path",
        max_length=255,
        help_text='Enter a relative site path. For example, "/node/5", "/new-events" or "/events/*".',
    )
    password = forms.CharField(label="Password", widget=forms.PasswordInput, required=False, strip=False)
    password_confirm = forms.CharField(label="Confirm password", widget=forms.PasswordInput, required=False, strip=False)

    def __init__(self, *args, pid=None, storage=None, aliases=None, validator=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.pid = pid
        self.storage = storage or ProtectedPageStorage()
        self.aliases = aliases or AliasResolver()
        self.validator = validator or WildcardPathValidator()

    def clean_path(self):
        raw = self.cleaned_data["path"].strip()
        entered = raw.rstrip(" \\/")
        if not entered and raw.startswith("/"):
            entered = "/"

        if not entered.startswith("/"):
            raise forms.ValidationError("The path needs to start with a slash.")

        normal_path = self.aliases.get_path_by_alias(entered)
        path_alias = self.aliases.get_alias_by_path(entered).lower()
        if not self.validator.is_valid(normal_path):
            raise forms.ValidationError("Please enter a correct path!")

        stored = self.stored_path(entered)
        if self.storage.path_taken([normal_path, path_alias, stored], exclude_pid=self.pid):
            raise forms.ValidationError(
                "Duplicate path entry is not allowed. There is already a path or its alias exists."
            )
        return stored

    def stored_path(self, entered):
        # the gate matches against the lowercased alias of a request path
        if entered.endswith("/*"):
            base = self.aliases.get_alias_by_path(entered[:-2] or "/").lower()
            return base.rstrip("/") + "/*"
        return self.aliases.get_alias_by_path(entered).lower()

    def clean(self):
        cleaned = super().clean()
        password = cleaned.get("password")
        confirm = cleaned.get("password_confirm")
        if self.pid is None and not password:
            self.add_error("password", "A password is required.")
        elif password != confirm:
            self.add_error("password_confirm", "The specified passwords do not match.")
        return cleaned

    def save(self):
        path = self.cleaned_data["path"]
        password = self.cleaned_data.get("password") or None
        if self.pid is None:
            return self.storage.create(path, password)
        return self.storage.update(self.pid, path, password)
