from django.urls import path
from . import views

app_name = "protected_pages"

urlpatterns = [
    # Password prompt
    path("protected-page/", views.login_view, name="login"),
    path("protected-page/lock/", views.lock_view, name="lock"),

    # Admin screens
    path("protected-pages/admin/", views.list_view, name="list"),
    path("protected-pages/admin/add/", views.add_view, name="add"),
    path("protected-pages/admin/<int:pid>/edit/", views.edit_view, name="edit"),
    path("protected-pages/admin/<int:pid>/delete/", views.delete_view, name="delete"),
]
