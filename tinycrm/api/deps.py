"""
FastAPI Dependencies

Provides dependency injection for database sessions, the persistence
gateway, the invoice document renderer and HTTP Basic authentication.

Handlers never reach for module-level state: they receive a ``Repository``
bound to the request's session, so tests swap the store by overriding
``get_db``.
"""

from functools import lru_cache
from typing import Annotated, Optional
from fastapi import Depends, Path
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from sqlalchemy.ext.asyncio import AsyncSession
import bcrypt
import logging

from tinycrm.database import get_db
from tinycrm.config import settings
from tinycrm.exceptions import UnauthorizedError
from tinycrm.models.user import User
from tinycrm.services.invoice_documents import InvoiceDocumentRenderer
from tinycrm.services.repository import Repository

logger = logging.getLogger(__name__)

# Unsigned 32-bit record ids; anything else is a client error
MAX_ID = 2**32 - 1

# auto_error=False so a missing header gets our problem-detail 401
security = HTTPBasic(auto_error=False, realm=settings.AUTH_REALM)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash."""
    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8"),
            hashed_password.encode("utf-8"),
        )
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def get_password_hash(password: str, rounds: Optional[int] = None) -> str:
    """Hash a password."""
    salt = bcrypt.gensalt(rounds) if rounds else bcrypt.gensalt()
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def get_repository(db: Annotated[AsyncSession, Depends(get_db)]) -> Repository:
    return Repository(db)


@lru_cache()
def get_document_renderer() -> InvoiceDocumentRenderer:
    return InvoiceDocumentRenderer(settings.invoice_templates_dir)


async def get_current_user(
    repo: Annotated[Repository, Depends(get_repository)],
    credentials: Annotated[Optional[HTTPBasicCredentials], Depends(security)] = None,
) -> User:
    """
    Resolve the Basic credentials to a stored user.

    Every failure (no header, unknown user, wrong password) yields the same
    401 with a Basic challenge.
    """
    if credentials is None:
        raise UnauthorizedError(settings.AUTH_REALM)

    user = await repo.get_user_by_username(credentials.username)
    if user is None or not verify_password(credentials.password, user.password_hash):
        logger.warning("Rejected credentials", extra={"username": credentials.username})
        raise UnauthorizedError(settings.AUTH_REALM)

    logger.debug("User authenticated", extra={"user_id": user.id})
    return user


# Type aliases for dependency injection
Repo = Annotated[Repository, Depends(get_repository)]
Renderer = Annotated[InvoiceDocumentRenderer, Depends(get_document_renderer)]
CurrentUser = Annotated[User, Depends(get_current_user)]


def resource_id(description: str):
    """Path parameter type for a numeric record id."""
    return Annotated[int, Path(ge=0, le=MAX_ID, description=description)]


CompanyId = resource_id("Company ID")
ProductId = resource_id("Product ID")
RemitId = resource_id("Remit information ID")
InvoiceId = resource_id("Invoice ID")
