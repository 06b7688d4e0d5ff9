from django.contrib import admin

from .models import PathAlias


@admin.register(PathAlias)
class PathAliasAdmin(admin.ModelAdmin):
    list_display = ("alias", "path")
    search_fields = ("alias", "path")
