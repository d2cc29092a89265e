"""Front-end interface exports."""
from .base import BufferedSink, Frontend, FrontendManager, frontend_manager
from .command import CommandFrontend
from .python import CallableFrontend

__all__ = [
    "BufferedSink",
    "Frontend",
    "FrontendManager",
    "frontend_manager",
    "CommandFrontend",
    "CallableFrontend",
    "register_builtin_frontends",
]


def register_builtin_frontends() -> None:
    """Register the command and python front-end kinds."""

    for kind, factory in (
        (CommandFrontend.name, CommandFrontend.from_config),
        (CallableFrontend.name, CallableFrontend.from_config),
    ):
        if kind not in frontend_manager.kinds():
            frontend_manager.register(kind, factory)
