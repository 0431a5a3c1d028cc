from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from studio_auth.adapter.services.mailer import LoggingMailer, SmtpMailer
from studio_auth.adapter.services.password_hasher import BcryptPasswordHasher
from studio_auth.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from studio_auth.app.services.mailer import Mailer
from studio_auth.app.services.password_hasher import PasswordHasher
from studio_auth.app.use_cases.password_reset import ResetPolicy

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_mailer() -> Mailer:
    """SMTP delivery when MAIL_BACKEND is "smtp", log-only otherwise"""
    if ApplicationConfig.MAIL_BACKEND == "smtp":
        return SmtpMailer(
            hostname=ApplicationConfig.SMTP_HOST,
            port=ApplicationConfig.SMTP_PORT,
            sender=ApplicationConfig.MAIL_FROM,
            username=ApplicationConfig.SMTP_USERNAME,
            password=ApplicationConfig.SMTP_PASSWORD,
            use_tls=ApplicationConfig.SMTP_USE_TLS,
            timeout=ApplicationConfig.MAIL_TIMEOUT_SECONDS,
        )
    return LoggingMailer(sender=ApplicationConfig.MAIL_FROM)


def get_password_hasher() -> PasswordHasher:
    return BcryptPasswordHasher(rounds=ApplicationConfig.BCRYPT_ROUNDS)


def get_reset_policy() -> ResetPolicy:
    return ResetPolicy.from_config(ApplicationConfig)
