"""
API endpoint serving resolved feature flags to POS clients and dashboards.
"""

import logging
import uuid

from django.db import DatabaseError
from django.http import Http404

from rest_framework import permissions, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import PermissionDenied
from rest_framework.response import Response

from apps.core.models import Location, Station
from apps.core.permissions import HasHierarchyAccess

from .context import ResolutionContext
from .exceptions import FlagStoreError
from .services import compute_etag, get_feature_flags_payload, get_ttl_seconds

logger = logging.getLogger(__name__)


def _get_by_id(queryset, raw_id):
    """Fetch by UUID primary key; malformed and unknown ids are both a 404."""
    try:
        pk = uuid.UUID(str(raw_id).strip())
    except ValueError:
        raise Http404(f"Unknown id: {raw_id}") from None

    obj = queryset.filter(pk=pk).first()
    if obj is None:
        raise Http404(f"Unknown id: {raw_id}")
    return obj


def _check_object_access(request, obj, message):
    if not HasHierarchyAccess().has_object_permission(request, None, obj):
        raise PermissionDenied(message)


def get_resolution_context(request):
    """
    Build the context for a request.

    ``?station=`` anchors on a station, ``?location=`` on a location;
    otherwise the requesting user's own location is used. Returns None when
    there is nothing to anchor on.
    """
    user = request.user
    station_id = request.query_params.get("station")
    location_id = request.query_params.get("location")

    if station_id:
        station = _get_by_id(
            Station.objects.select_related("location__franchise"), station_id
        )
        _check_object_access(request, station, "You do not have access to this station.")
        return ResolutionContext.for_station(station)

    if location_id:
        location = _get_by_id(Location.objects.select_related("franchise"), location_id)
        _check_object_access(request, location, "You do not have access to this location.")
        return ResolutionContext.for_location(location)

    if user.location_id:
        location = Location.objects.select_related("franchise").get(pk=user.location_id)
        return ResolutionContext.for_location(location)

    return None


def _etag_matches(request, etag):
    header = request.headers.get("If-None-Match")
    if not header:
        return False
    candidates = [value.strip() for value in header.split(",")]
    return "*" in candidates or etag in candidates or f"W/{etag}" in candidates


@api_view(["GET"])
@permission_classes([permissions.IsAuthenticated, HasHierarchyAccess])
def feature_flags_view(request):
    """
    Resolved feature flags for a station or location.

    GET /api/feature-flags/?station=<id>
    GET /api/feature-flags/?location=<id>

    Responds 304 when the client's ETag matches the resolved flags.
    """
    context = get_resolution_context(request)
    if context is None:
        return Response(
            {"detail": "Specify a station or location."},
            status=status.HTTP_400_BAD_REQUEST,
        )

    try:
        payload = get_feature_flags_payload(context)
    except (DatabaseError, FlagStoreError):
        logger.exception(f"Feature flag resolution failed for {context.cache_token()}")
        return Response(
            {"error": "feature_flags_unavailable"},
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    etag = compute_etag(context, payload["featureFlags"])
    if _etag_matches(request, etag):
        response = Response(status=status.HTTP_304_NOT_MODIFIED)
        response["ETag"] = etag
        return response

    response = Response(payload, status=status.HTTP_200_OK)
    response["ETag"] = etag
    response["Cache-Control"] = f"private, max-age={get_ttl_seconds()}"
    return response
