"""FastAPI dependencies shared by the catalog routers."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_host.catalog.service import CatalogService, build_catalog_service
from catalog_host.infrastructure.database import get_session


def get_catalog_service(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CatalogService:
    """Get catalog service bound to the request's session."""
    return build_catalog_service(session)


def not_found(error_code: str, message: str) -> HTTPException:
    """Build a 404 in the standard error format."""
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={"error_code": error_code, "message": message},
    )
