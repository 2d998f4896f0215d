"""
Authentication service.

Registration is a two step flow: the first step rejects duplicates before a
verification code is sent, the second checks the code and creates the
account. Login accepts the username or the phone number.
"""

from typing import Any, Dict, Mapping, Union

from sqlalchemy.orm import Session

from sevaconnect.core.config import Settings
from sevaconnect.core.exceptions import (
    AuthenticationError,
    DuplicateEntryError,
    ExternalServiceError,
    ResourceNotFoundError,
    ValidationError,
)
from sevaconnect.core.security import JWTManager, PasswordHasher
from sevaconnect.models.base.enums import SELF_REGISTRATION_ROLES
from sevaconnect.models.user.user import User
from sevaconnect.repositories.review import ReviewRepository
from sevaconnect.repositories.society import SocietyRepository
from sevaconnect.repositories.user import UserRepository
from sevaconnect.schemas.auth.auth import (
    LoginRequest,
    LoginResponse,
    PasswordResetConfirm,
    PasswordResetRequest,
    RegistrationRequest,
    RegistrationStart,
)
from sevaconnect.schemas.user.user import UserResponse
from sevaconnect.services.base import BaseService, ServiceResult
from sevaconnect.services.integrations import VerificationProvider, VerificationResult
from sevaconnect.services.users.user_service import to_user_response
from sevaconnect.utils.phone import format_phone_e164

DUPLICATE_PHONE_MESSAGE = "This phone number is already registered to an account."
INVALID_CREDENTIALS_MESSAGE = "Invalid username or password."
MIN_PASSWORD_LENGTH = 4


class AuthService(BaseService):
    """
    Registration, login and password reset.

    The verification provider, password hasher and token manager are
    injected so the service never reaches for global state.
    """

    def __init__(
        self,
        db_session: Session,
        verification_provider: VerificationProvider,
        password_hasher: PasswordHasher,
        jwt_manager: JWTManager,
        settings: Settings,
    ):
        super().__init__(db_session)
        self.repository = UserRepository(db_session)
        self.society_repository = SocietyRepository(db_session)
        self.review_repository = ReviewRepository(db_session)
        self.verification = verification_provider
        self.hasher = password_hasher
        self.jwt = jwt_manager
        self.settings = settings

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def start_registration(
        self,
        data: Union[RegistrationStart, Mapping[str, Any]],
    ) -> ServiceResult[Dict[str, Any]]:
        """
        Validate a registration and send the phone verification code.

        Duplicates are rejected before the provider is contacted.

        Returns:
            ServiceResult containing the E.164 phone the code was sent to
        """
        try:
            request = self._coerce(RegistrationStart, data)
            self._check_role(request.role)
            phone_e164 = self._e164(request.phone)

            if self.repository.is_phone_registered(request.phone, phone_e164):
                raise DuplicateEntryError(DUPLICATE_PHONE_MESSAGE, field="phone")
            self.society_repository.get_or_raise(request.society_id)

            result = self.verification.send(phone_e164)
            if not result.ok:
                raise ExternalServiceError(
                    result.error or "Failed to send verification code",
                    service_name="verification",
                )

            self._logger.info(
                f"Registration code sent to {phone_e164} for {request.name}",
                extra={"society_id": request.society_id, "role": request.role.value},
            )
            return ServiceResult.success(
                {"phone": phone_e164, "status": result.status},
                message="Verification code sent",
            )
        except Exception as e:
            return self._handle_exception(e, "start registration")

    def register(
        self,
        data: Union[RegistrationRequest, Mapping[str, Any]],
    ) -> ServiceResult[UserResponse]:
        """
        Check the verification code and create the account.

        The account is created unverified with the phone as username; a
        society admin verifies it later.
        """
        try:
            request = self._coerce(RegistrationRequest, data)
            self._check_role(request.role)
            phone_e164 = self._e164(request.phone)

            self._require_verified(self.verification.check(phone_e164, request.otp))

            with self.transaction():
                if self.repository.is_phone_registered(request.phone, phone_e164):
                    raise DuplicateEntryError(DUPLICATE_PHONE_MESSAGE, field="phone")
                self.society_repository.get_or_raise(request.society_id)

                user = self.repository.create(
                    User(
                        name=request.name,
                        username=request.phone,
                        phone=request.phone,
                        password_hash=self.hasher.hash(request.password),
                        role=request.role,
                        society_id=request.society_id,
                        is_verified=False,
                        address=request.address,
                        skills=list(request.skills),
                        leaves=[],
                        must_change_password=False,
                    )
                )

            self._log_operation("register", user.id, role=user.role.value, society_id=user.society_id)
            return ServiceResult.success(
                to_user_response(user, self.review_repository),
                message="Registration successful. Pending society admin approval.",
            )
        except Exception as e:
            return self._handle_exception(e, "register")

    # -------------------------------------------------------------------------
    # Login
    # -------------------------------------------------------------------------

    def login(
        self,
        data: Union[LoginRequest, Mapping[str, Any]],
    ) -> ServiceResult[LoginResponse]:
        """
        Authenticate with username or phone and password.

        Returns:
            ServiceResult containing the access token and the user
        """
        try:
            request = self._coerce(LoginRequest, data)
            user = self.repository.find_by_identifier(request.identifier)
            if user is None or not self.hasher.verify(request.password, user.password_hash):
                self._logger.info("Failed login attempt", extra={"identifier": request.identifier})
                raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

            self._log_operation("login", user.id)
            return ServiceResult.success(self._login_response(user))
        except Exception as e:
            return self._handle_exception(e, "login")

    # -------------------------------------------------------------------------
    # Password reset
    # -------------------------------------------------------------------------

    def start_password_reset(
        self,
        data: Union[PasswordResetRequest, Mapping[str, Any]],
    ) -> ServiceResult[bool]:
        """Send a verification code to the account's phone."""
        try:
            request = self._coerce(PasswordResetRequest, data)
            user = self._find_account(request.identifier)
            if not user.phone:
                raise ValidationError("This account has no phone number", field="identifier")

            result = self.verification.send(self._e164(user.phone))
            if not result.ok:
                raise ExternalServiceError(
                    result.error or "Failed to send verification code",
                    service_name="verification",
                )

            self._log_operation("start password reset", user.id)
            return ServiceResult.success(True, message="Verification code sent via SMS")
        except Exception as e:
            return self._handle_exception(e, "start password reset")

    def complete_password_reset(
        self,
        data: Union[PasswordResetConfirm, Mapping[str, Any]],
    ) -> ServiceResult[LoginResponse]:
        """
        Check the reset code and log the user in.

        The account is flagged ``must_change_password`` until
        :meth:`change_password` is called.
        """
        try:
            request = self._coerce(PasswordResetConfirm, data)
            user = self._find_account(request.identifier)
            phone = self._e164(user.phone) if user.phone else request.identifier
            self._require_verified(self.verification.check(phone, request.otp))

            with self.transaction():
                self.repository.update(user, {"must_change_password": True})

            self._log_operation("complete password reset", user.id)
            return ServiceResult.success(self._login_response(user))
        except Exception as e:
            return self._handle_exception(e, "complete password reset")

    def change_password(self, user_id: str, new_password: str) -> ServiceResult[UserResponse]:
        """Set a new password and clear ``must_change_password``."""
        try:
            if not new_password or len(new_password) < MIN_PASSWORD_LENGTH:
                raise ValidationError(
                    f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
                    field="password",
                )

            with self.transaction():
                user = self.repository.get_or_raise(user_id)
                self.repository.update(
                    user,
                    {"password_hash": self.hasher.hash(new_password), "must_change_password": False},
                )

            self._log_operation("change password", user_id)
            return ServiceResult.success(to_user_response(user, self.review_repository))
        except Exception as e:
            return self._handle_exception(e, "change password", user_id)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _e164(self, phone: str) -> str:
        return format_phone_e164(phone, self.settings.verification.DEFAULT_COUNTRY_CODE)

    def _find_account(self, identifier: str) -> User:
        user = self.repository.find_by_identifier(identifier)
        if user is None:
            raise ResourceNotFoundError("User", message="No user found")
        return user

    @staticmethod
    def _check_role(role) -> None:
        if role not in SELF_REGISTRATION_ROLES:
            raise ValidationError("Only maids and households can register themselves", field="role")

    @staticmethod
    def _require_verified(result: VerificationResult) -> None:
        if result.ok:
            return
        if result.unavailable:
            raise ExternalServiceError(result.error or "Verification provider unavailable", service_name="verification")
        raise AuthenticationError(result.error or "Incorrect verification code")

    def _login_response(self, user: User) -> LoginResponse:
        token = self.jwt.create_access_token(user.id, role=user.role.value)
        return LoginResponse(token=token, user=to_user_response(user, self.review_repository))
