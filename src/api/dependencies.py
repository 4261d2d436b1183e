"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from collections.abc import Callable

from fastapi import Depends, HTTPException, Request, status

from src.adapters.directory.memory import InMemoryAccountDirectory
from src.adapters.smtp.console import ConsoleCodeNotifier
from src.api.flows import ResetFlowRegistry
from src.config.settings import Settings
from src.domain.accounts import AccountLifecycleController
from src.domain.models import Role
from src.domain.password_policy import PasswordPolicy
from src.domain.ports import AccountDirectory, CodeNotifier
from src.domain.verification import VerificationCodeIssuer

# Module-level singleton - ConsoleCodeNotifier is stateless
_notifier = ConsoleCodeNotifier()


def get_notifier() -> ConsoleCodeNotifier:
    """Get console code notifier (singleton)."""
    return _notifier


def build_directory(settings: Settings) -> InMemoryAccountDirectory:
    """Create the process-wide directory, seeding the owner account if configured."""
    directory = InMemoryAccountDirectory(bcrypt_cost=settings.bcrypt_cost)
    if settings.owner_name and settings.owner_email and settings.owner_password:
        directory.register(
            settings.owner_name,
            settings.owner_email,
            settings.owner_password,
            role=Role.ADMIN | Role.OWNER,
        )
    return directory


def build_controller_factory(
    directory: AccountDirectory, notifier: CodeNotifier, settings: Settings
) -> Callable[[], AccountLifecycleController]:
    """
    Create a factory for controllers sharing one directory and notifier.

    Each controller gets its own issuer, configured from settings.
    """

    def factory() -> AccountLifecycleController:
        return AccountLifecycleController(
            directory=directory,
            notifier=notifier,
            issuer=VerificationCodeIssuer(
                ttl_seconds=settings.code_ttl_seconds,
                max_attempts=settings.max_code_attempts,
            ),
            policy=PasswordPolicy(min_length=settings.min_password_length),
        )

    return factory


def get_directory(request: Request) -> InMemoryAccountDirectory:
    """
    Get account directory from app state.

    The directory is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.directory


def get_flow_registry(request: Request) -> ResetFlowRegistry:
    """Get password reset flow registry from app state."""
    return request.app.state.flows


def get_controller(request: Request) -> AccountLifecycleController:
    """Create a controller for one-shot operations (register, login)."""
    return request.app.state.controller_factory()


def get_reset_flow(
    flow_id: str,
    registry: ResetFlowRegistry = Depends(get_flow_registry),
) -> AccountLifecycleController:
    """
    Resolve the controller of an open reset flow.

    Raises 404 for unknown or discarded flow ids.
    """
    controller = registry.get(flow_id)
    if controller is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Reset flow not found",
        )
    return controller
