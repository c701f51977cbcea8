"""
API URLs for PG Nexus
"""
from django.urls import path, include
from rest_framework.routers import DefaultRouter

from complaints.views import ComplaintViewSet
from notices.views import NoticeViewSet
from payments.views import PaymentViewSet
from properties.views import PropertyViewSet
from rooms.views import RoomViewSet
from tenants.views import TenantViewSet
from users.views import UserViewSet

# Create router; paths carry no trailing slash
router = DefaultRouter(trailing_slash=False)
router.register(r'properties', PropertyViewSet, basename='property')
router.register(r'rooms', RoomViewSet, basename='room')
router.register(r'tenants', TenantViewSet, basename='tenant')
router.register(r'payments', PaymentViewSet, basename='payment')
router.register(r'complaints', ComplaintViewSet, basename='complaint')
router.register(r'notices', NoticeViewSet, basename='notice')
router.register(r'users', UserViewSet, basename='user')

urlpatterns = [
    path('auth/', include('accounts.urls')),
    path('dashboard/', include('dashboard.urls')),
    path('', include(router.urls)),
]
