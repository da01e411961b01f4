from __future__ import annotations

import logging

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from core.serializers.contact import ContactSerializer

logger = logging.getLogger(__name__)


@api_view(['POST'])
@permission_classes([AllowAny])
def submit_contact(request):
    s = ContactSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    v = s.validated_data
    logger.info('Contact form submission from %s (%d chars)', v['email'], len(v['message']))
    return Response({
        'success': True,
        'message': 'Thank you for contacting us. We will get back to you soon.',
    })

submit_contact.cls.throttle_scope = 'contact'
