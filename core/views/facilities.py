"""Facility listing (public) and toggling (admin)."""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound
from rest_framework.response import Response

from core.models import Facility
from core.permissions import IsAdminOrReadOnly
from core.serializers.facilities import FacilityUpdateSerializer
from core.services.facilities import list_facilities, serialize_facility, update_facility


@api_view(['GET'])
@permission_classes([IsAdminOrReadOnly])
def facilities_collection(request):
    available_only = request.query_params.get('availableOnly') == 'true'
    return Response({'success': True, 'facilities': list_facilities(available_only)})


@api_view(['GET', 'PATCH'])
@permission_classes([IsAdminOrReadOnly])
def facility_detail(request, facility_id: str):
    facility = Facility.objects.filter(pk=facility_id).first()
    if not facility:
        raise NotFound('Facility not found.')
    if request.method == 'PATCH':
        s = FacilityUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        facility = update_facility(facility, s.to_model_fields())
    return Response({'success': True, 'facility': serialize_facility(facility)})
