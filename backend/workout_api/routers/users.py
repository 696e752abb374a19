from __future__ import annotations
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session
from workout_api.db import get_db
from workout_api.deps.auth import get_current_claim
from workout_api.errors import ConflictError, NotificationError, UnconfirmedAccountError
from workout_api.notifications import Mailer, confirmation_link, get_mailer
from workout_api.repositories.user_repo import UserRepository
from workout_api.schemas.user import ClaimRead, LoginResult, Registered, UserLogin, UserRegister, UserSummary
from workout_api.schemas.workout import Message
from workout_api.security import (
    IdentityClaim,
    TokenService,
    get_token_service,
    hash_password,
    new_confirmation_token,
    verify_password,
)
from workout_api.settings import Settings, get_settings

log = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])

@router.post("/register", response_model=Registered, status_code=status.HTTP_201_CREATED)
def register(
    payload: UserRegister,
    db: Session = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
    settings: Settings = Depends(get_settings),
):
    repo = UserRepository(db)
    if repo.get_by_email(payload.email):
        raise ConflictError("Email is already registered")
    token = new_confirmation_token()
    # a concurrent duplicate still trips the unique index -> ConflictError
    user = repo.create(
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=payload.email,
        password_hash=hash_password(payload.password),
        confirmation_token=token,
    )
    # The account stays registered even if the email cannot be sent
    try:
        mailer.send_confirmation(user.email, user.first_name, confirmation_link(settings, token))
    except NotificationError:
        log.exception("Error sending validation email to user %s", user.id)
        return Registered(message="User registered, but validation email failed to send", email_sent=False)
    return Registered(message="User registered successfully. Please validate your email.", email_sent=True)

@router.post("/login", response_model=LoginResult)
def login(
    payload: UserLogin,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    user = UserRepository(db).get_by_email(payload.email)
    if not user:
        log.info("Login failed: user not found for %s", payload.email)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    if not user.confirmed:
        log.info("Login failed: email not validated for user %s", user.id)
        raise UnconfirmedAccountError()
    if not verify_password(payload.password, user.password_hash):
        log.info("Login failed: incorrect password for user %s", user.id)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    token = tokens.issue(user.id, user.confirmed)
    return LoginResult(access_token=token, user=UserSummary.model_validate(user))

@router.get("/validate/{token}", response_class=PlainTextResponse)
def validate_email(token: str, db: Session = Depends(get_db)):
    repo = UserRepository(db)
    user = repo.get_by_confirmation_token(token)
    if not user:
        return PlainTextResponse("Invalid or expired validation token.", status_code=status.HTTP_400_BAD_REQUEST)
    repo.confirm(user)
    return "Your email has been successfully validated. You can now log in!"

@router.post("/logout", response_model=Message)
def logout():
    # Tokens are stateless; the client simply drops its copy
    return Message(message="Logout successful")

@router.post("/validate-token", response_model=ClaimRead)
def validate_token(claim: IdentityClaim = Depends(get_current_claim)):
    return ClaimRead(id=claim.user_id, confirmed=claim.confirmed)
