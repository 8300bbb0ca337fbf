# qparams/urls.py
from django.urls import path, include

urlpatterns = [
    # Demo page for the query string tags
    path('', include('core.urls', namespace='core')),
]
