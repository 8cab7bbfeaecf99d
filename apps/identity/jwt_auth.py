"""
JWT verification utilities.

Tokens are issued elsewhere; this module only verifies them against the
server-held secret and reads their claims.
"""
import jwt
from typing import Optional
from django.conf import settings


def decode_token(token: str) -> Optional[dict]:
    """
    Decode and validate a JWT token.

    Returns:
        Decoded payload if valid, None if invalid/expired/malformed.
    """
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None


def get_email_claim(payload: dict) -> Optional[str]:
    """
    Read the email claim from a decoded payload.

    Returns:
        The email if present and non-empty, None otherwise.
    """
    email = payload.get('email')
    if not isinstance(email, str) or not email.strip():
        return None
    return email


def extract_credential(header_value: Optional[str]) -> str:
    """
    Pull the token out of an Authorization header value.

    Accepts both 'Bearer <token>' and a bare token.
    """
    if not header_value:
        return ''
    parts = header_value.strip().split(' ', 1)
    if len(parts) == 2 and parts[0].lower() == 'bearer':
        return parts[1].strip()
    return header_value.strip()
