from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Callable, Optional

import jwt
from loguru import logger

ALGORITHM = "HS256"
TOKEN_TTL = timedelta(hours=24)


class TokenStatus(str, Enum):
    VALID = "valid"
    EXPIRED = "expired"
    INVALID = "invalid"


@dataclass(frozen=True)
class Claim:
    email: str


@dataclass(frozen=True)
class TokenCheck:
    status: TokenStatus
    claim: Optional[Claim] = None


def _now() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    def __init__(self, secret: str, ttl: timedelta = TOKEN_TTL, clock: Callable[[], datetime] = _now):
        self._secret = secret
        self._ttl = ttl
        self._clock = clock

    def issue(self, email: str) -> str:
        issued_at = self._clock()
        payload = {
            "email": email,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self._ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def inspect(self, token: str) -> TokenCheck:
        """Decode `token` and say why it failed, if it did."""
        if not token or not isinstance(token, str):
            return TokenCheck(TokenStatus.INVALID)
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options={"require": ["email", "iat", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            return TokenCheck(TokenStatus.EXPIRED)
        except jwt.InvalidTokenError:
            return TokenCheck(TokenStatus.INVALID)

        email = payload.get("email")
        if not isinstance(email, str) or not email:
            return TokenCheck(TokenStatus.INVALID)
        return TokenCheck(TokenStatus.VALID, Claim(email=email))

    def verify(self, token: str) -> Optional[Claim]:
        check = self.inspect(token)
        if check.status is not TokenStatus.VALID:
            logger.debug(f"Token rejected: {check.status.value}")
            return None
        return check.claim
