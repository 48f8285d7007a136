"""Shared FastAPI dependencies: authentication and service construction."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from clipkeeper.config import settings
from clipkeeper.database import get_db
from clipkeeper.logger import auth_logger
from clipkeeper.models.user import User
from clipkeeper.repository import LinkRepository
from clipkeeper.services.ai_service import AIService
from clipkeeper.services.auth_service import AuthService
from clipkeeper.services.ingest_service import IngestService
from clipkeeper.services.metadata_service import MetadataService
from clipkeeper.services.quota_service import QuotaService
from clipkeeper.services.recommendation_service import RecommendationService

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.api_prefix}/auth/login")


def get_repository(db: Annotated[Session, Depends(get_db)]) -> LinkRepository:
    """Persistence handle bound to the request's session."""
    return LinkRepository(db)


async def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)],
    repository: Annotated[LinkRepository, Depends(get_repository)],
) -> User:
    """Resolve the bearer token to a user, or reject the request with 401."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        user_id = AuthService.decode_token(token, expected_type="access")
    except ValueError as e:
        auth_logger.debug(f"Rejected token: {e}")
        raise credentials_exception

    user = repository.get_user_by_id(user_id)
    if not user:
        raise credentials_exception

    return user


@lru_cache
def get_ai_service() -> AIService:
    """Single AI service (and OpenAI client) for the process."""
    return AIService()


@lru_cache
def get_metadata_service() -> MetadataService:
    return MetadataService()


def get_quota_service(
    repository: Annotated[LinkRepository, Depends(get_repository)],
) -> QuotaService:
    return QuotaService(repository)


def get_ingest_service(
    repository: Annotated[LinkRepository, Depends(get_repository)],
    ai_service: Annotated[AIService, Depends(get_ai_service)],
    metadata_service: Annotated[MetadataService, Depends(get_metadata_service)],
    quota_service: Annotated[QuotaService, Depends(get_quota_service)],
) -> IngestService:
    return IngestService(repository, ai_service, metadata_service, quota_service)


def get_recommendation_service(
    repository: Annotated[LinkRepository, Depends(get_repository)],
    ai_service: Annotated[AIService, Depends(get_ai_service)],
) -> RecommendationService:
    return RecommendationService(repository, ai_service)
