"""URL configuration for the Staybook project.

Routes the Django admin and the application-level routers provided by
Django Rest Framework in each app.
"""
from django.contrib import admin  # type: ignore
from django.urls import path, include  # type: ignore

# API versioning. v1 is our initial version; future versions can be added here.

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/v1/listings/', include('apps.listings.urls')),
    path('api/v1/bookings/', include('apps.bookings.urls')),
    path('api/v1/finances/', include('apps.finances.urls')),
]
