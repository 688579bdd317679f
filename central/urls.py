"""
URL configuration for the central de compras web frontend.

The REST API is served separately by ``central_api`` (FastAPI); these routes only
render the management pages that talk to it.
"""
from django.contrib import admin
from django.urls import path, include
from core import views as core_views

urlpatterns = [
    path('admin/', admin.site.urls),
    path('', core_views.home, name='home'),
    path('suppliers/', include('suppliers.urls')),
    path('products/', include('products.urls')),
    path('users/', include('users.urls')),
    path('stores/', include('stores.urls')),
    path('orders/', include('orders.urls')),
    path('campaigns/', include('campaigns.urls')),
]
