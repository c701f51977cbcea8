"""
Role-scoped list filtering.
"""
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import filters

from core.constants import UserRole
from core.exceptions import ValidationError


class RoleScopeFilterBackend(filters.BaseFilterBackend):
    """
    Filter querysets to the rows the requester may see.

    Views declare the lookups used for each role:
    - `owner_scope_field`: path to the owning user (e.g. 'property__owner')
    - `tenant_scope_field`: path to the tenant's user (e.g. 'tenant__user');
      when unset, tenants see nothing.
    Admins see everything.
    """

    def filter_queryset(self, request, queryset, view):
        user = request.user
        if not (user and user.is_authenticated):
            return queryset.none()
        if user.role == UserRole.ADMIN:
            return queryset
        if user.role == UserRole.OWNER:
            field = getattr(view, 'owner_scope_field', None)
            return queryset.filter(**{field: user}) if field else queryset.none()
        field = getattr(view, 'tenant_scope_field', None)
        return queryset.filter(**{field: user}) if field else queryset.none()


class QueryParamFilterBackend(filters.BaseFilterBackend):
    """
    Pass explicit query parameters through as exact-match filters.

    Views list the accepted parameters in `filterset_params`, mapping the
    query parameter name to a model lookup, or to a (lookup, converter)
    pair when the raw value needs parsing first.
    """

    def filter_queryset(self, request, queryset, view):
        params = getattr(view, 'filterset_params', {})
        lookups = {}
        for param, lookup in params.items():
            value = request.query_params.get(param)
            if value in (None, ''):
                continue
            if isinstance(lookup, tuple):
                lookup, converter = lookup
                try:
                    value = converter(value)
                except (ValueError, DjangoValidationError) as e:
                    raise ValidationError(message="Invalid filter value", details={param: [str(e)]})
            lookups[lookup] = value
        if not lookups:
            return queryset
        try:
            return queryset.filter(**lookups)
        except (ValueError, DjangoValidationError):
            raise ValidationError(message="Invalid filter value", details={'query': [str(lookups)]})
