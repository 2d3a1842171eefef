"""
Token authentication for API clients.

Kept separate from the views so that REST framework can import the
authentication classes at start-up without pulling in view modules.
"""
from __future__ import annotations

from rest_framework import authentication


class TokenAuthentication(authentication.TokenAuthentication):
    """``Authorization: Token <key>``, the key issued by the sign-in endpoint."""

    keyword = 'Token'
