"""Gateway API composition."""

from lightlog.api.dependencies import Services, build_services
from lightlog.api.router import build_router


__all__ = ["Services", "build_router", "build_services"]
