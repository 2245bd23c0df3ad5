"""JWT token utilities.

Token issuance (login / refresh) is owned by the identity provider.
This module only handles token *decoding* for stateless validation.
Token creation helpers live in ``tests/helpers/token_factory.py``
and must never be imported from production code.

Tokens identify the user only. Roles are looked up in the role store on
every request, so a role change takes effect without reissuing tokens.
"""

from typing import Any

from jose import jwt

from app.config import get_settings


def decode_token(token: str) -> dict[str, Any]:
    """Decode and validate a JWT token. Raises JWTError on failure."""
    settings = get_settings()
    return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
