# storefront/services/auth_service.py
import logging
import uuid

from fastapi import HTTPException, status
from jose import JWTError
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from storefront.core.security import (
    decode_refresh_token,
    hash_password,
    is_well_formed,
    issue_access_token,
    issue_refresh_token,
    verify_password,
)
from storefront.models.user import User
from storefront.repositories.user_repo import UserRepository
from storefront.schemas.user import (
    AccessTokenResponse,
    AuthResponse,
    ChangePasswordRequest,
    Credentials,
    GoogleSignupResponse,
    MessageResponse,
    UpdateEmailRequest,
    UpdateEmailResponse,
    UserPublic,
    normalize_email,
)

logger = logging.getLogger(__name__)


class AuthService:
    """
    Session lifecycle: signup, login, refresh, logout, credential changes.

    Session states per user:
      Anonymous -> Authenticated (access + refresh)
                -> Refreshed (new access token, same refresh token)
                -> Revoked (refresh token removed on logout)

    Every login appends a new refresh token, so several devices can be
    signed in at once. Password and email changes do not revoke them.
    """

    def __init__(self, repo: UserRepository):
        self.repo = repo

    # ---- internal helpers ----

    def _issue_tokens(self, session: Session, user: User) -> tuple[str, str]:
        """
        Issue an access/refresh pair and record the refresh token.
        """
        access_token = issue_access_token(user)
        refresh_token = issue_refresh_token(user)

        if not is_well_formed(access_token) or not is_well_formed(refresh_token):
            logger.error("Token generation produced a malformed token for %s", user.id)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Token generation failed",
            )

        self.repo.add_refresh_token(session, user.id, refresh_token)
        return access_token, refresh_token

    def _auth_response(
        self, session: Session, user: User, message: str
    ) -> AuthResponse:
        access_token, refresh_token = self._issue_tokens(session, user)
        return AuthResponse(
            success=True,
            message=message,
            access_token=access_token,
            refresh_token=refresh_token,
            user=UserPublic(id=user.id, email=user.email, role=user.role),
        )

    def _user_from_refresh_token(
        self, session: Session, token: str
    ) -> User | None:
        """
        Verify a refresh token and load its subject.

        Raises:
            JWTError / ValueError: bad signature, expired, or malformed id.
        """
        payload = decode_refresh_token(token)
        user_id = uuid.UUID(str(payload.get("id")))
        return self.repo.get_by_id(session, user_id)

    # ---- signup / login ----

    def signup(self, session: Session, payload: Credentials) -> AuthResponse:
        """
        Register a new user and sign them in.

        Rules:
          - email is normalized before the uniqueness check
          - duplicate email => 400
        """
        if self.repo.get_by_email(session, payload.email):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="User already exists",
            )

        user = User(email=payload.email, password_hash=hash_password(payload.password))
        try:
            user = self.repo.create(session, user)
        except IntegrityError:
            # Concurrent signup with the same email won the race.
            session.rollback()
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="User already exists",
            )

        logger.info("Created user %s", user.id)
        return self._auth_response(session, user, "User Created Successfully")

    def login(self, session: Session, payload: Credentials) -> AuthResponse:
        user = self.repo.get_by_email(session, payload.email)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User does not exist!",
            )

        if not verify_password(payload.password, user.password_hash):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Incorrect password!",
            )

        return self._auth_response(session, user, "Login successfully!")

    # ---- token lifecycle ----

    def refresh(self, session: Session, refresh_token: str | None) -> AccessTokenResponse:
        """
        Exchange a refresh token for a new access token.

        The refresh token must verify against the refresh secret AND still
        be in the user's stored list (i.e. not logged out). It is not rotated.
        """
        if not refresh_token:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Refresh token required",
            )

        try:
            user = self._user_from_refresh_token(session, refresh_token)
        except (JWTError, ValueError):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Invalid or expired refresh token",
            )

        if not user or not self.repo.has_refresh_token(session, user.id, refresh_token):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Invalid refresh token",
            )

        access_token = issue_access_token(user)
        if not is_well_formed(access_token):
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Token generation failed",
            )
        return AccessTokenResponse(access_token=access_token)

    def logout(self, session: Session, refresh_token: str | None) -> MessageResponse:
        """
        Revoke one refresh token. Already-revoked tokens are a no-op.
        """
        if not refresh_token:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Refresh token required",
            )

        try:
            user = self._user_from_refresh_token(session, refresh_token)
        except (JWTError, ValueError):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid refresh token",
            )

        if not user:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="User not found",
            )

        self.repo.remove_refresh_token(session, user.id, refresh_token)
        return MessageResponse(message="Logged out successfully")

    # ---- credential changes ----

    def change_password(
        self, session: Session, payload: ChangePasswordRequest
    ) -> MessageResponse:
        """
        Replace the password hash. Existing refresh tokens stay valid.
        """
        user = self.repo.get_by_email(session, payload.email)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found",
            )

        if not verify_password(payload.old_password, user.password_hash):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Old password is incorrect",
            )

        user.password_hash = hash_password(payload.new_password)
        self.repo.update(session, user)
        return MessageResponse(message="Password changed successfully")

    def update_email(
        self, session: Session, payload: UpdateEmailRequest
    ) -> UpdateEmailResponse:
        """
        Change the account email in place.

        Tokens issued before the change still carry the old email claim;
        access checks resolve users by id, so that claim is never trusted.
        """
        user = self.repo.get_by_email(session, payload.old_email)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found",
            )

        if self.repo.get_by_email(session, payload.new_email):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Email already in use",
            )

        user.email = payload.new_email
        try:
            self.repo.update(session, user)
        except IntegrityError:
            session.rollback()
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Email already in use",
            )

        return UpdateEmailResponse(
            message="Email updated successfully. Please Login again!",
            email=payload.new_email,
        )

    # ---- Google flows ----
    #
    # The caller asserts the email was verified by Google. No password is
    # checked; only existence in the store matters.

    def google_signup_check(self, session: Session, email: str) -> GoogleSignupResponse:
        """success=True means the email is free to register."""
        if self.repo.get_by_email(session, email):
            return GoogleSignupResponse(success=False, message="User exist. Please Login")
        return GoogleSignupResponse(success=True, message="User not exists!")

    def google_login(self, session: Session, email: str) -> AuthResponse:
        user = self.repo.get_by_email(session, email)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not exists!",
            )
        return self._auth_response(session, user, "Login Successfully!")

    def google_find_or_create(self, session: Session, email: str) -> UserPublic:
        """Return the user for this email, creating a password-less one if needed."""
        user = self.repo.get_by_email(session, email)
        if not user:
            try:
                user = self.repo.create(session, User(email=email))
            except IntegrityError:
                session.rollback()
                user = self.repo.get_by_email(session, email)
        return UserPublic(id=user.id, email=user.email, role=user.role)

    # ---- startup ----

    def bootstrap_admin(
        self,
        session: Session,
        email: str | None,
        password: str | None,
    ) -> User | None:
        """
        Create the configured admin account on first start.

        No-op when credentials are unset or the account exists.
        Never raises: failures are logged and startup continues.
        """
        if not email or not password:
            logger.warning("Admin credentials not set; skipping admin bootstrap")
            return None

        email = normalize_email(email)
        try:
            if self.repo.get_by_email(session, email):
                return None
            admin = User(email=email, password_hash=hash_password(password), role="admin")
            admin = self.repo.create(session, admin)
        except Exception:
            session.rollback()
            logger.exception("Error creating admin user")
            return None

        logger.info("Created admin user %s", admin.email)
        return admin
