from django.contrib import admin
from django.urls import include, path
from protected_pages import views as gate_views

urlpatterns = [
    path('admin/', admin.site.urls),

    # Password prompt + admin screens for protected paths
    path('', include('protected_pages.urls')),

    # Landing page (never protected unless a record says so)
    path('', gate_views.home_view, name='home'),
]
