"""Domain modules.

Importing this package registers every model on ``Base.metadata``.
"""

from lightlog.modules.projects.models import Project
from lightlog.modules.sessions.models import UserSession
from lightlog.modules.users.models import User


__all__ = ["Project", "User", "UserSession"]
