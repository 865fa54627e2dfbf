from collections.abc import Iterator

from fastapi import Depends, Request
from sqlmodel import Session

from src.userapi.api.http.app_data import ApplicationDependencies
from src.userapi.core.security import PasswordHasher
from src.userapi.core.services import UserService
from src.userapi.runtime.context import get_config


def get_db_session(request: Request) -> Iterator[Session]:
    """Yield a request-scoped database session.

    The session is committed when the request handler returns and rolled
    back if it raises.
    """
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    session = app_deps.database_service.get_session()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def get_password_hasher(request: Request) -> PasswordHasher:
    """Get the password hasher instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.password_hasher


def get_user_service(
    db_session: Session = Depends(get_db_session),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
) -> UserService:
    return UserService(db_session, password_hasher, get_config().users)
