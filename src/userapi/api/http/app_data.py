from dataclasses import dataclass

from src.userapi.core.security import PasswordHasher
from src.userapi.core.services import DbSessionService


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
    password_hasher: PasswordHasher
