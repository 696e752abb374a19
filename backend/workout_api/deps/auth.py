# workout_api/deps/auth.py
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from workout_api.errors import AuthError, MissingCredentialError
from workout_api.security import IdentityClaim, TokenService, get_token_service

# Exposes Bearer auth in Swagger; login endpoint issues the token.
# auto_error=False so a missing header and a bad token answer differently.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/users/login", auto_error=False)

def get_current_claim(
    token: str | None = Depends(oauth2_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> IdentityClaim:
    """
    Admit the request or stop it with 401.

    The claim is trusted as issued: the confirmation flag is not re-read
    from the database, so it may lag behind for the token's lifetime.
    """
    try:
        if not token:
            raise MissingCredentialError()
        return tokens.verify(token)
    except AuthError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.detail,
            headers={"WWW-Authenticate": "Bearer"},
        ) from e

def ensure_owner(claim: IdentityClaim, user_id: int) -> None:
    """Owner-only guard for routes that name the user they act on."""
    if claim.user_id != user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed for this user")
