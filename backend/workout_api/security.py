import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Dict, Optional
from passlib.context import CryptContext
from jose import jwt
from jose.exceptions import JWTError
from workout_api.errors import InvalidCredentialError
from workout_api.settings import Settings, get_settings

pwd_ctx = CryptContext(schemes=["bcrypt"], deprecated="auto")

def hash_password(p: str) -> str:
    return pwd_ctx.hash(p)

def verify_password(plain: str, hashed: str) -> bool:
    return pwd_ctx.verify(plain, hashed)

def new_confirmation_token() -> str:
    return secrets.token_hex(32)


@dataclass(frozen=True, slots=True)
class IdentityClaim:
    """What a verified bearer token says about its holder, as of issuance."""
    user_id: int
    confirmed: bool


class TokenService:
    """Issues and verifies the HS256 bearer tokens handed out at login."""

    def __init__(self, settings: Settings):
        self.secret = settings.SECRET_KEY
        self.algorithm = settings.ALGORITHM
        self.lifetime = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    def issue(
        self,
        user_id: int,
        confirmed: bool,
        *,
        expires_minutes: Optional[int] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> str:
        now = datetime.now(timezone.utc)
        lifetime = self.lifetime if expires_minutes is None else timedelta(minutes=expires_minutes)
        payload: Dict[str, Any] = {
            "sub": str(user_id),
            "confirmed": bool(confirmed),
            "iat": int(now.timestamp()),
            "exp": int((now + lifetime).timestamp()),
        }
        if extra:
            payload.update(extra)
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode(self, token: str) -> Dict[str, Any]:
        """
        Verify signature and expiration. Raise if token is expired/invalid.
        """
        payload = jwt.decode(
            token,
            self.secret,
            algorithms=[self.algorithm],
            options={
                "verify_signature": True,
                "verify_exp": True,   # ensure `exp` is checked
            },
        )
        if "exp" not in payload:
            raise JWTError("Missing exp")
        return payload

    def verify(self, token: str) -> IdentityClaim:
        try:
            payload = self.decode(token)
        except JWTError as exc:  # also ExpiredSignatureError
            raise InvalidCredentialError() from exc
        try:
            return IdentityClaim(user_id=int(payload["sub"]), confirmed=bool(payload.get("confirmed", False)))
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidCredentialError() from exc


@lru_cache
def get_token_service() -> TokenService:
    return TokenService(get_settings())
