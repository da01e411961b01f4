"""
User administration.

Lets administrators browse accounts and promote or demote them. An
administrator cannot change their own role, so the last admin cannot
lock everyone out by accident.
"""
from __future__ import annotations

import logging

from django.db.models import Q
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.exceptions import BadRequest
from core.models import User
from core.pagination import page_params, paginate
from core.permissions import IsAdminRole, IsEmailVerified
from core.serializers.admin import RoleSerializer
from core.services.auth import serialize_user

logger = logging.getLogger(__name__)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole, IsEmailVerified])
def list_users(request):
    q = request.query_params
    qs = User.objects.all()
    if q.get('role') in {User.ROLE_USER, User.ROLE_ADMIN}:
        qs = qs.filter(role=q['role'])
    search = (q.get('search') or '').strip()
    if search:
        qs = qs.filter(Q(full_name__icontains=search) | Q(email__icontains=search))
    page, limit = page_params(q, default_limit=20)
    users, total, pages = paginate(qs.order_by('-created_at', '-id'), page, limit)
    return Response({
        'success': True,
        'users': [serialize_user(u, detail=True) for u in users],
        'total': total,
        'page': page,
        'pages': pages,
        'limit': limit,
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole, IsEmailVerified])
def set_user_role(request, pk: int):
    s = RoleSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    target = User.objects.filter(pk=pk).first()
    if not target:
        raise NotFound('User not found')
    if target.pk == request.user.pk:
        raise BadRequest('You cannot change your own role')
    new_role = s.validated_data['role']
    if target.role != new_role:
        target.role = new_role
        target.save(update_fields=['role', 'updated_at'])
        logger.info('User %s role set to %s by admin=%s', target.pk, new_role, request.user.pk)
    return Response({'success': True, 'user': serialize_user(target)})
