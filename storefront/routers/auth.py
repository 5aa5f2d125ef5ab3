# storefront/routers/auth.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from storefront.core.auth import get_current_user
from storefront.database import get_session
from storefront.models.user import User
from storefront.repositories.user_repo import UserRepository
from storefront.schemas.user import (
    AccessTokenResponse,
    AuthResponse,
    ChangePasswordRequest,
    Credentials,
    GoogleAuthRequest,
    GoogleSignupResponse,
    MessageResponse,
    RefreshTokenRequest,
    UpdateEmailRequest,
    UpdateEmailResponse,
    UserPublic,
)
from storefront.services.auth_service import AuthService

router = APIRouter(tags=["Auth"])

repo = UserRepository()
service = AuthService(repo)


# -------- Email / password --------


@router.post(
    "/create-user",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_user(
    payload: Credentials,
    session: Session = Depends(get_session),
):
    """
    Register a new user and return an access/refresh token pair.

    Emails are case-insensitive: "A@x.com" and "a@x.com" are the same account.
    """
    return service.signup(session, payload)


@router.post("/login", response_model=AuthResponse)
def login(
    payload: Credentials,
    session: Session = Depends(get_session),
):
    """
    Sign in with email + password.

    Each login issues a new refresh token; earlier ones stay valid.
    """
    return service.login(session, payload)


@router.post("/token", response_model=AccessTokenResponse)
def refresh_access_token(
    payload: RefreshTokenRequest,
    session: Session = Depends(get_session),
):
    """
    Exchange a refresh token for a new access token.
    """
    return service.refresh(session, payload.refresh_token)


@router.post("/logout", response_model=MessageResponse)
def logout(
    payload: RefreshTokenRequest,
    session: Session = Depends(get_session),
):
    """
    Revoke the given refresh token.
    """
    return service.logout(session, payload.refresh_token)


@router.put("/change-password", response_model=MessageResponse)
def change_password(
    payload: ChangePasswordRequest,
    session: Session = Depends(get_session),
):
    return service.change_password(session, payload)


@router.put("/update-email", response_model=UpdateEmailResponse)
def update_email(
    payload: UpdateEmailRequest,
    session: Session = Depends(get_session),
):
    """
    Change the account email. Clients should log in again afterwards.
    """
    return service.update_email(session, payload)


@router.get("/me", response_model=UserPublic)
def read_me(current_user: User = Depends(get_current_user)):
    """
    Return the user behind the bearer access token.
    """
    return UserPublic(id=current_user.id, email=current_user.email, role=current_user.role)


# -------- Google --------


@router.post("/google-signup", response_model=GoogleSignupResponse)
def google_signup(
    payload: GoogleAuthRequest,
    session: Session = Depends(get_session),
):
    """
    Tell the client whether this Google email can still register.
    """
    return service.google_signup_check(session, payload.email)


@router.post("/google-login", response_model=AuthResponse)
def google_login(
    payload: GoogleAuthRequest,
    session: Session = Depends(get_session),
):
    """
    Sign in an existing user whose email was verified by Google.
    No password check.
    """
    return service.google_login(session, payload.email)


@router.post("/auth/google", response_model=UserPublic)
def google_find_or_create(
    payload: GoogleAuthRequest,
    session: Session = Depends(get_session),
):
    """
    Return the account for a Google email, creating it if needed.
    """
    return service.google_find_or_create(session, payload.email)
