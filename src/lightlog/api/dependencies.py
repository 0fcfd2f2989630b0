"""Service container shared by the gateway routes.

Everything stateful hangs off one ``Database`` handle; services are built
once per application and passed to the route classes.
"""

from dataclasses import dataclass
from datetime import timedelta

from lightlog.config import Settings
from lightlog.core.auth import AuthService, PasswordHasher
from lightlog.core.database import Database
from lightlog.modules.logs.sinks import EventSink, LoggingEventSink
from lightlog.modules.logs.validator import EventValidator
from lightlog.modules.projects.services import ProjectService, SchemaRegistry
from lightlog.modules.users.services import UserService


@dataclass
class Services:
    """Application services built around a single database handle."""

    settings: Settings
    db: Database
    hasher: PasswordHasher
    auth: AuthService
    users: UserService
    projects: ProjectService
    schemas: SchemaRegistry
    validator: EventValidator
    sink: EventSink


def build_services(
    settings: Settings,
    db: Database,
    sink: EventSink | None = None,
) -> Services:
    """Wire the application services.

    Args:
        settings: Application settings
        db: Database handle
        sink: Destination for accepted events (defaults to logging them)

    Returns:
        The service container
    """
    hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    return Services(
        settings=settings,
        db=db,
        hasher=hasher,
        auth=AuthService(
            db,
            hasher,
            session_lifetime=timedelta(hours=settings.session_lifetime_hours),
        ),
        users=UserService(db, hasher),
        projects=ProjectService(db),
        schemas=SchemaRegistry(db),
        validator=EventValidator(),
        sink=sink or LoggingEventSink(),
    )
