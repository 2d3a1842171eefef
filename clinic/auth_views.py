"""
Authentication endpoints for API clients.

Sign-in returns both a DRF token and a JWT pair.  The admin flag in the
responses is looked up in the role table after the identity is known;
it is never encoded in the tokens.  Sign-out blacklists the refresh
tokens best effort and always ends the local session.
"""
from __future__ import annotations

import logging

from django.urls import reverse
from rest_framework.authtoken.models import Token
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenRefreshView

from clinic.exceptions import AuthError
from clinic.serializers import validate_or_raise
from clinic.serializers.auth import (
    CredentialsSerializer,
    EmailChangeSerializer,
    PasswordChangeSerializer,
    SignInSerializer,
    SignOutSerializer,
)
from clinic.services import identity
from clinic.services.audit import log_action

logger = logging.getLogger(__name__)


def _user_payload(user) -> dict:
    return {'id': user.pk, 'email': user.email}


# ---------------------------------------------------------------------
# Sign-in / sign-up
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([AllowAny])
def sign_in_view(request):
    creds = validate_or_raise(SignInSerializer, request.data)
    ip = request.META.get('REMOTE_ADDR')
    try:
        user = identity.authenticate_credentials(creds['email'], creds['password'], request=request._request)
    except AuthError:
        log_action(user=None, action='login', object_type='user',
                   detail={'result': 'fail', 'email': creds['email'], 'ip': ip})
        raise
    log_action(user=user, action='login', object_type='user', object_id=user.pk, detail={'result': 'ok', 'ip': ip})

    token_obj, _ = Token.objects.get_or_create(user=user)
    refresh = RefreshToken.for_user(user)
    return Response({
        'ok': True,
        'token': token_obj.key,
        'jwt_access': str(refresh.access_token),
        'jwt_refresh': str(refresh),
        'user': _user_payload(user),
        'is_admin': identity.lookup_is_admin(user),
    })

# ScopedRateThrottle reads throttle_scope from the wrapped APIView class
sign_in_view.cls.throttle_scope = 'login'


@api_view(['POST'])
@permission_classes([AllowAny])
def sign_up_view(request):
    creds = validate_or_raise(CredentialsSerializer, request.data)
    user = identity.sign_up(creds['email'], creds['password'])
    log_action(user=user, action='sign_up', object_type='user', object_id=user.pk)
    return Response({'ok': True, 'user': _user_payload(user), 'is_admin': False}, status=201)

sign_up_view.cls.throttle_scope = 'login'


# ---------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------
@api_view(['GET'])
@permission_classes([AllowAny])
def session_view(request):
    user = identity.current_user(request)
    return Response({
        'ok': True,
        'user': _user_payload(user) if user else None,
        'is_admin': identity.lookup_is_admin(user),
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def sign_out_view(request):
    data = validate_or_raise(SignOutSerializer, request.data)
    user = request.user
    if data.get('refresh'):
        try:
            RefreshToken(data['refresh']).blacklist()
        except TokenError as exc:
            logger.info('refresh token not blacklisted on sign-out: %s', exc)
    identity.sign_out(request._request, user=user)
    return Response({'ok': True})


jwt_refresh_view = TokenRefreshView.as_view()


# ---------------------------------------------------------------------
# Account management
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def email_change_view(request):
    """Send a confirmation link to the new address; the change applies once it is followed."""
    data = validate_or_raise(EmailChangeSerializer, request.data)

    def confirm_url(token):
        return request.build_absolute_uri(reverse('admin-confirm-email', args=[token]))

    identity.update_email(request.user, data['new_email'], build_confirm_url=confirm_url)
    log_action(user=request.user, action='account.email_change_requested', object_type='user',
               object_id=request.user.pk)
    return Response({'ok': True, 'detail': 'Confirmation sent to the new address.'})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def password_change_view(request):
    data = validate_or_raise(PasswordChangeSerializer, request.data)
    identity.update_password(request.user, data['new_password'], data['confirm_password'])
    log_action(user=request.user, action='account.password_changed', object_type='user', object_id=request.user.pk)
    return Response({'ok': True})
