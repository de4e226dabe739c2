from functools import lru_cache

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.core.config import settings
from app.core.security import decode_token
from app.schemas.auth import TokenData
from app.services.attachment_lifecycle import AttachmentLifecycle
from app.services.storage import AttachmentStorage

security = HTTPBearer(auto_error=False)


def get_current_admin(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> TokenData:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise credentials_exception

    payload = decode_token(credentials.credentials)
    if payload is None or payload.get("sub") is None:
        raise credentials_exception

    token_data = TokenData(sub=payload.get("sub"), role=payload.get("role"))
    if token_data.role != settings.ADMIN_ROLE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return token_data


@lru_cache()
def get_storage() -> AttachmentStorage:
    """Storage strategy resolved once per process from settings."""
    return AttachmentStorage.from_settings(settings)


def get_lifecycle(storage: AttachmentStorage = Depends(get_storage)) -> AttachmentLifecycle:
    return AttachmentLifecycle(storage)
