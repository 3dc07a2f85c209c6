"""Invite filters (django-filter)."""

import django_filters

from modules.invites.models import Invite


class InviteFilter(django_filters.FilterSet):
    issued_to_email = django_filters.CharFilter(lookup_expr="iexact")

    class Meta:
        model = Invite
        fields = ["active", "issued_to_email"]
