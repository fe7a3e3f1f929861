from django.urls import path
from rest_framework.routers import DefaultRouter

from .views import AuthMeView, EventViewSet

router = DefaultRouter()
router.register(r'events', EventViewSet)

urlpatterns = [
    path('auth/me/', AuthMeView.as_view(), name='auth-me'),
]
urlpatterns += router.urls
