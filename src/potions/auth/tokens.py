"""Bearer token issuance and verification."""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt

from potions.commons.exceptions import AuthenticationError
from potions.configs import JWT_ALGORITHM, JWT_SECRET, TOKEN_TTL_SECONDS


class TokenService:
    """Sign and verify JWTs carrying a user principal (``id`` and ``username``)."""

    def __init__(self, secret: str = None, algorithm: str = None, ttl_seconds: int = None):
        self.secret = secret or JWT_SECRET
        self.algorithm = algorithm or JWT_ALGORITHM
        self.ttl_seconds = TOKEN_TTL_SECONDS if ttl_seconds is None else ttl_seconds

    def issue(self, principal: Dict[str, Any]) -> str:
        """Return a signed token for ``principal`` expiring after ``ttl_seconds``."""
        now = datetime.now(tz=timezone.utc)
        payload = {
            "id": principal["id"],
            "username": principal["username"],
            "iat": now,
            "exp": now + timedelta(seconds=self.ttl_seconds),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Dict[str, Any]:
        """Decode ``token`` and return its principal.

        Raises
        ------
        AuthenticationError
            If the token is missing, tampered with or expired.
        """
        if not token:
            raise AuthenticationError("Authentication required.")
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError as e:
            raise AuthenticationError("Session expired.") from e
        except jwt.PyJWTError as e:
            raise AuthenticationError("Invalid token.") from e
        if "id" not in payload or "username" not in payload:
            raise AuthenticationError("Invalid token.")
        return {"id": payload["id"], "username": payload["username"]}
