"""
Application container.

Builds the shared collaborators once (settings, logging, database, password
hasher, token manager, verification provider) and hands out service
registries bound to a single session per unit of work.
"""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

from sqlalchemy.orm import Session

from sevaconnect.core.config import Settings, get_settings
from sevaconnect.core.logging import get_logger, setup_logging
from sevaconnect.core.security import JWTManager, PasswordHasher
from sevaconnect.db.init_db import init_db
from sevaconnect.db.session import Database
from sevaconnect.services.auth import AuthService
from sevaconnect.services.booking import BookingOtpService, BookingService
from sevaconnect.services.catalogue import CatalogueService, OfferingService
from sevaconnect.services.communication import MessageService
from sevaconnect.services.integrations import TwilioVerifyProvider, VerificationProvider
from sevaconnect.services.review import ReviewService
from sevaconnect.services.society import SocietyManagementService
from sevaconnect.services.users import UserService

logger = get_logger(__name__)


@dataclass
class ServiceRegistry:
    """Every service, sharing one session."""

    session: Session
    catalogue: CatalogueService
    offerings: OfferingService
    bookings: BookingService
    booking_otp: BookingOtpService
    messages: MessageService
    reviews: ReviewService
    auth: AuthService
    users: UserService
    societies: SocietyManagementService


class Application:
    """
    Explicit lifecycle: :meth:`startup` before use, :meth:`close` at
    shutdown.

    Example:
        app = Application().startup()
        with app.unit_of_work() as services:
            services.offerings.list_offerings(society_id)
        app.close()
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        verification_provider: Optional[VerificationProvider] = None,
    ):
        self.settings = settings or get_settings()
        self.database = Database(self.settings.database)
        self.password_hasher = PasswordHasher(self.settings.security.PASSWORD_BCRYPT_ROUNDS)
        self.jwt_manager = JWTManager(
            secret_key=self.settings.security.JWT_SECRET,
            algorithm=self.settings.security.JWT_ALGORITHM,
            access_token_expire_days=self.settings.security.ACCESS_TOKEN_EXPIRE_DAYS,
        )
        self.verification_provider = verification_provider or TwilioVerifyProvider(
            self.settings.verification,
            bypass_code=self.settings.otp.MASTER_OTP,
        )

    def startup(self, create_tables: bool = True, configure_logging: bool = True) -> "Application":
        if configure_logging:
            setup_logging(self.settings)
        self.database.open()
        if create_tables:
            init_db(self.database.engine)
        logger.info(
            f"{self.settings.PROJECT_NAME} {self.settings.PROJECT_VERSION} started",
            extra={"environment": self.settings.ENVIRONMENT},
        )
        return self

    def close(self) -> None:
        if isinstance(self.verification_provider, TwilioVerifyProvider):
            self.verification_provider.close()
        self.database.close()

    def services(self, session: Session) -> ServiceRegistry:
        """Bind every service to ``session``."""
        return ServiceRegistry(
            session=session,
            catalogue=CatalogueService(session),
            offerings=OfferingService(session),
            bookings=BookingService(session),
            booking_otp=BookingOtpService(session, master_otp=self.settings.otp.MASTER_OTP),
            messages=MessageService(session),
            reviews=ReviewService(session),
            auth=AuthService(
                session,
                verification_provider=self.verification_provider,
                password_hasher=self.password_hasher,
                jwt_manager=self.jwt_manager,
                settings=self.settings,
            ),
            users=UserService(session),
            societies=SocietyManagementService(
                session,
                password_hasher=self.password_hasher,
                initial_password_length=self.settings.security.INITIAL_PASSWORD_LENGTH,
            ),
        )

    @contextmanager
    def unit_of_work(self) -> Iterator[ServiceRegistry]:
        """Open a session, yield the services bound to it and close it."""
        with self.database.session() as session:
            yield self.services(session)
