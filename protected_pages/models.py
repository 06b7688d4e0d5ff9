from django.db import models

from .matcher import normalize_path


class ProtectedPage(models.Model):
    """A path pattern guarded by a password."""

    path = models.CharField(max_length=255, help_text='Relative path, e.g. "/node/5" or "/events/*"')
    password = models.CharField(max_length=128, help_text="Hash made by django.contrib.auth.hashers")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['pk']
        permissions = [
            ('bypass_pages_password_protection', 'Bypass pages password protection'),
            ('administer_protected_pages', 'Administer protected pages'),
        ]

    def __str__(self):
        return self.path


class PathAlias(models.Model):
    """Public alias for a system path ("/about-us" -> "/node/5")."""

    path = models.CharField(max_length=255, db_index=True)
    alias = models.CharField(max_length=255, unique=True)

    class Meta:
        ordering = ['pk']
        verbose_name_plural = 'path aliases'

    def save(self, *args, **kwargs):
        self.path = normalize_path(self.path)
        self.alias = normalize_path(self.alias)
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.alias} -> {self.path}"
