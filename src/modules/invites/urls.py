"""Invite URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.invites.views import InviteViewSet

router = DefaultRouter(trailing_slash=True)
router.register("invites", InviteViewSet, basename="invite")

urlpatterns = router.urls
