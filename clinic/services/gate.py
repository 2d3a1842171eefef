"""
Auth gate: the per-request holder of the session and its admin privilege.

One :class:`AuthGate` is created for every request by
:class:`clinic.middleware.AuthGateMiddleware` and handed to admin screens
explicitly (see :func:`clinic.views.decorators.admin_screen`).  Its state
is resolved in two steps: the identity first, then the role lookup for
that identity.  Screens only read the state; sign-in, sign-up and
sign-out go through the gate so that subscribers see every change.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, replace
from typing import Any, Callable

from django.db import DatabaseError

from ..store import TableStore
from . import identity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthState:
    user: Any = None
    is_admin: bool = False
    is_loading: bool = True


class GateDecision(str, enum.Enum):
    LOADING = 'loading'
    LOGIN_REDIRECT = 'login_redirect'
    ACCESS_DENIED = 'access_denied'
    ALLOWED = 'allowed'


def decide(state: AuthState) -> GateDecision:
    """Branch for admin-only screens.

    An authenticated non-admin gets ``ACCESS_DENIED`` rather than a trip
    back to the login page, which would bounce straight back here.
    """
    if state.is_loading:
        return GateDecision.LOADING
    if state.user is None:
        return GateDecision.LOGIN_REDIRECT
    if not state.is_admin:
        return GateDecision.ACCESS_DENIED
    return GateDecision.ALLOWED


Listener = Callable[[AuthState], None]


class AuthGate:
    def __init__(self, request, *, identity_service=identity):
        self._request = request
        self._identity = identity_service
        self._state = AuthState()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> AuthState:
        return self._state

    @property
    def user(self):
        return self._state.user

    @property
    def is_admin(self) -> bool:
        return self._state.is_admin

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set(self, **changes) -> AuthState:
        self._state = replace(self._state, **changes)
        for listener in list(self._listeners):
            listener(self._state)
        return self._state

    def _lookup_role(self, user) -> bool:
        if user is None:
            return False
        try:
            return self._identity.lookup_is_admin(user)
        except DatabaseError:
            logger.warning('role lookup failed for %s', getattr(user, 'pk', None), exc_info=True)
            return False

    def resolve(self) -> AuthState:
        """Resolve the session once; later calls return the cached state."""
        if not self._state.is_loading:
            return self._state
        user = self._identity.current_user(self._request)
        return self._set(user=user, is_admin=self._lookup_role(user), is_loading=False)

    def sign_in(self, email: str, password: str):
        user = self._identity.sign_in(self._request, email, password)
        self._set(user=user, is_admin=self._lookup_role(user), is_loading=False)
        return user

    def sign_up(self, email: str, password: str):
        return self._identity.sign_up(email, password)

    def sign_out(self) -> None:
        try:
            self._identity.sign_out(self._request, user=self._state.user)
        finally:
            self._set(user=None, is_admin=False, is_loading=False)

    def decide(self) -> GateDecision:
        return decide(self.resolve())

    def store(self) -> TableStore:
        state = self.resolve()
        return TableStore(state.user, is_admin=state.is_admin)
