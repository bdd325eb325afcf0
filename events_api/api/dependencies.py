"""
Dependency injection for the Events Registry API.
Provides database sessions, units of work and the bearer-token gate.
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import Generator, Optional

from ..db.database import DatabaseConnection, UnitOfWork
from ..services.jwt_service import JWTService

# Security scheme; missing credentials are reported by get_current_user
security = HTTPBearer(auto_error=False)

# Global instances
db_connection = DatabaseConnection()
jwt_service = JWTService()


def get_database_session() -> Generator[Session, None, None]:
    """
    Get database session dependency.

    Yields:
        SQLAlchemy database session
    """
    yield from db_connection.get_session()


def get_unit_of_work(session: Session = Depends(get_database_session)) -> UnitOfWork:
    """
    Get the per-request unit of work.

    Args:
        session: Database session

    Returns:
        Unit of work bound to the request session
    """
    return UnitOfWork(session)


async def get_jwt_service() -> JWTService:
    """
    Get JWT service dependency.

    Returns:
        JWT service instance
    """
    if not jwt_service._initialized:
        await jwt_service.initialize()
    return jwt_service


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    jwt_svc: JWTService = Depends(get_jwt_service)
) -> str:
    """
    Get current authenticated user dependency.

    Args:
        credentials: HTTP authorization credentials
        jwt_svc: JWT service

    Returns:
        Subject the bearer token was issued to

    Raises:
        HTTPException: If the token is missing or invalid
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        raise credentials_exception

    try:
        subject = jwt_svc.authenticate(credentials.credentials)
    except Exception:
        raise credentials_exception

    if subject is None:
        raise credentials_exception

    return subject
