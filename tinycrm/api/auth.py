from fastapi import APIRouter

from tinycrm.config import settings
from tinycrm.exceptions import UnauthorizedError

router = APIRouter()


@router.post("/logout")
async def logout():
    """Always answers 401 with a fresh Basic challenge.

    Browsers drop cached Basic credentials when they see the challenge
    again, which is the only way to "log out" of Basic auth.
    """
    raise UnauthorizedError(settings.AUTH_REALM, detail="Logged out successfully")
