"""
Identity service: credentials, sessions and the role lookup.

Accounts are keyed by email (stored as both ``username`` and ``email``).
The admin privilege is never read from a credential or a token claim; it
is looked up in :class:`~clinic.models.UserRole` once the identity is
known.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

from django.conf import settings
from django.contrib.auth import authenticate, get_user_model, login, logout
from django.contrib.auth.password_validation import validate_password
from django.core import signing
from django.core.exceptions import ValidationError
from django.core.mail import send_mail
from django.core.validators import validate_email
from django.db import DatabaseError, IntegrityError, transaction
from rest_framework.authtoken.models import Token
from rest_framework_simplejwt.token_blacklist.models import BlacklistedToken, OutstandingToken

from ..exceptions import AuthError
from ..models import UserRole

logger = logging.getLogger(__name__)

User = get_user_model()

EMAIL_CHANGE_SALT = 'clinic.email-change'
MIN_PASSWORD_LENGTH = 6


def _normalize_email(email: str) -> str:
    return (email or '').strip().lower()


def _check_password(password: str, user=None) -> None:
    if not password:
        raise AuthError('Please enter a new password.')
    if len(password) < MIN_PASSWORD_LENGTH:
        raise AuthError(f'Password must be at least {MIN_PASSWORD_LENGTH} characters')
    try:
        validate_password(password, user=user)
    except ValidationError as exc:
        raise AuthError(' '.join(exc.messages)) from exc


def _check_email(email: str) -> None:
    try:
        validate_email(email)
    except ValidationError as exc:
        raise AuthError('Please enter a valid email address.') from exc


# ---------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------
def authenticate_credentials(email: str, password: str, request=None):
    """Return the user for valid credentials or raise ``AuthError``."""
    email = _normalize_email(email)
    if not email or not password:
        raise AuthError('Email and password are required')
    user = authenticate(request, username=email, password=password)
    if user is None:
        raise AuthError('Invalid login credentials')
    return user


def sign_in(request, email: str, password: str):
    """Validate credentials and open a browser session."""
    user = authenticate_credentials(email, password, request=request)
    login(request, user)
    return user


def sign_up(email: str, password: str):
    """Register a new identity.  No role row is created for it."""
    email = _normalize_email(email)
    _check_email(email)
    _check_password(password)
    try:
        with transaction.atomic():
            if User.objects.filter(username=email).exists():
                raise AuthError('User already registered')
            user = User.objects.create_user(username=email, email=email, password=password)
    except IntegrityError as exc:
        raise AuthError('User already registered') from exc
    logger.info('registered identity %s', user.pk)
    return user


def revoke_remote_sessions(user) -> int:
    """Blacklist every outstanding refresh token and drop the API token."""
    count = 0
    for token in OutstandingToken.objects.filter(user=user):
        _, created = BlacklistedToken.objects.get_or_create(token=token)
        count += int(created)
    Token.objects.filter(user=user).delete()
    return count


def sign_out(request, user=None) -> None:
    """End the session.  Remote revocation is best effort; the local logout always happens."""
    user = user if user is not None else getattr(request, 'user', None)
    if user is not None and getattr(user, 'is_authenticated', False):
        try:
            revoked = revoke_remote_sessions(user)
            logger.info('revoked %d refresh token(s) for %s', revoked, user.pk)
        except DatabaseError:
            logger.warning('remote session revocation failed for %s', user.pk, exc_info=True)
    logout(request)


def current_user(request):
    user = getattr(request, 'user', None)
    if user is not None and getattr(user, 'is_authenticated', False):
        return user
    return None


# ---------------------------------------------------------------------
# Roles
# ---------------------------------------------------------------------
def lookup_is_admin(user) -> bool:
    """Second step of session resolution: ask the role table."""
    if user is None or not getattr(user, 'is_authenticated', False):
        return False
    return UserRole.objects.filter(user_id=user.pk, role=UserRole.ROLE_ADMIN).exists()


def grant_admin(user) -> bool:
    _, created = UserRole.objects.get_or_create(user=user, role=UserRole.ROLE_ADMIN)
    return created


# ---------------------------------------------------------------------
# Account management
# ---------------------------------------------------------------------
def update_email(user, new_email: str, *, build_confirm_url: Callable[[str], str]) -> str:
    """Send a confirmation link to ``new_email``; the address changes only once it is followed."""
    new_email = _normalize_email(new_email)
    if not new_email or new_email == _normalize_email(user.email):
        raise AuthError('Please enter a different email address.')
    _check_email(new_email)
    if User.objects.filter(username=new_email).exclude(pk=user.pk).exists():
        raise AuthError('A user with this email address has already been registered')
    token = signing.dumps({'uid': user.pk, 'email': new_email}, salt=EMAIL_CHANGE_SALT)
    send_mail(
        subject='Confirm your new email address',
        message=f'Follow this link to confirm the change of your login email:\n\n{build_confirm_url(token)}\n',
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[new_email],
    )
    logger.info('email change requested for %s', user.pk)
    return token


def confirm_email_change(token: str, max_age: Optional[int] = None):
    max_age = settings.EMAIL_CHANGE_MAX_AGE if max_age is None else max_age
    try:
        payload = signing.loads(token, salt=EMAIL_CHANGE_SALT, max_age=max_age)
    except signing.SignatureExpired as exc:
        raise AuthError('Email confirmation link has expired') from exc
    except signing.BadSignature as exc:
        raise AuthError('Email confirmation link is invalid') from exc
    user = User.objects.filter(pk=payload.get('uid')).first()
    if user is None:
        raise AuthError('Email confirmation link is invalid')
    new_email = payload['email']
    if User.objects.filter(username=new_email).exclude(pk=user.pk).exists():
        raise AuthError('A user with this email address has already been registered')
    user.email = new_email
    user.username = new_email
    user.save(update_fields=['email', 'username'])
    return user


def update_password(user, new_password: str, confirm_password: Optional[str] = None) -> None:
    _check_password(new_password, user=user)
    if confirm_password is not None and confirm_password != new_password:
        raise AuthError('Passwords do not match.')
    user.set_password(new_password)
    user.save(update_fields=['password'])
