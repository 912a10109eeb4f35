"""
API Dependencies for dependency injection
"""
import uuid
from typing import Annotated, Optional
from uuid import UUID

from fastapi import Depends, Header
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import async_sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from starlette_context import context
from starlette_context.header_keys import HeaderKeys

from parts_catalog.core.config import settings
from parts_catalog.core.database import get_async_session, get_session_factory
from parts_catalog.core.logging import log
from parts_catalog.repositories import ManufacturerRepository
from parts_catalog.services import ManufacturerService


# Database
SessionFactoryDep = Annotated[async_sessionmaker, Depends(get_session_factory)]
AsyncSessionDep = Annotated[AsyncSession, Depends(get_async_session)]


# Repositories
async def get_manufacturer_repository(session_factory: SessionFactoryDep) -> ManufacturerRepository:
    """Get manufacturer repository instance"""
    return ManufacturerRepository(session_factory)


ManufacturerRepoDep = Annotated[ManufacturerRepository, Depends(get_manufacturer_repository)]


# Services
async def get_manufacturer_service(repository: ManufacturerRepoDep) -> ManufacturerService:
    """Get manufacturer service instance"""
    return ManufacturerService(repository)


ManufacturerServiceDep = Annotated[ManufacturerService, Depends(get_manufacturer_service)]


# Actor attribution
async def get_actor_id(authorization: Optional[str] = Header(None)) -> Optional[UUID]:
    """
    Return the user ID carried by a bearer token, if any.

    Tokens are only used to fill audit fields; a missing or invalid token is
    never rejected.
    """
    if not authorization or not authorization.startswith("Bearer "):
        return None

    token = authorization.split(" ", 1)[1]
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
        return UUID(str(payload.get("sub")))
    except (JWTError, ValueError) as e:
        log.debug("Ignoring unusable bearer token", error=str(e))
        return None


ActorIdDep = Annotated[Optional[UUID], Depends(get_actor_id)]


# Request ID
async def get_request_id(x_request_id: Optional[str] = Header(None, alias="X-Request-ID")) -> str:
    """Request ID assigned by the context middleware, echoed in the response header"""
    if context.exists() and context.get(HeaderKeys.request_id):
        return context[HeaderKeys.request_id]
    return x_request_id or str(uuid.uuid4())


RequestIdDep = Annotated[str, Depends(get_request_id)]
