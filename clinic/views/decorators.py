from __future__ import annotations

from functools import wraps

from django.conf import settings
from django.shortcuts import redirect, render

from ..services.gate import AuthGate, GateDecision


def gate_for(request) -> AuthGate:
    gate = getattr(request, 'auth_gate', None)
    if gate is None:
        gate = request.auth_gate = AuthGate(request)
    return gate


def render_decision(request, decision: GateDecision):
    """Response for every branch but ``ALLOWED``; ``None`` when the screen may render."""
    if decision is GateDecision.LOADING:
        return render(request, 'clinic/loading.html')
    if decision is GateDecision.LOGIN_REDIRECT:
        return redirect(settings.LOGIN_URL)
    if decision is GateDecision.ACCESS_DENIED:
        # rendered in place; sending a signed-in non-admin to the login page would loop
        return render(request, 'clinic/access_denied.html', status=403)
    return None


def admin_screen(view):
    """Run ``view(request, gate, ...)`` only for resolved admin sessions."""
    @wraps(view)
    def wrapper(request, *args, **kwargs):
        gate = gate_for(request)
        response = render_decision(request, gate.decide())
        if response is not None:
            return response
        return view(request, gate, *args, **kwargs)
    return wrapper
