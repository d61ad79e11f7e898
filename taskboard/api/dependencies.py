# taskboard/api/dependencies.py
"""
Request-scoped access to services, and the authentication guard.

The guard is an ordinary FastAPI dependency: routes that need an
identity declare ``Depends(require_identity)`` and never run when it
fails.
"""
import logging

from fastapi import Depends, Request

from taskboard.core.exceptions import ServiceError, UnauthenticatedError
from taskboard.models.auth import Identity
from taskboard.services.auth_service import AuthService
from taskboard.services.container import ServiceContainer
from taskboard.services.credential_store import CredentialStore
from taskboard.services.directory_service import DirectoryService
from taskboard.services.task_service import TaskService

logger = logging.getLogger(__name__)


def get_container(request: Request) -> ServiceContainer:
    container = getattr(request.app.state, "container", None)
    if container is None:
        raise ServiceError("Services are not initialized", service_name="app")
    return container


def get_credential_store(container: ServiceContainer = Depends(get_container)) -> CredentialStore:
    return container.credentials


def get_auth_service(container: ServiceContainer = Depends(get_container)) -> AuthService:
    return container.auth


def get_directory_service(container: ServiceContainer = Depends(get_container)) -> DirectoryService:
    return container.directories


def get_task_service(container: ServiceContainer = Depends(get_container)) -> TaskService:
    return container.tasks


async def require_identity(
    request: Request,
    auth: AuthService = Depends(get_auth_service)
) -> Identity:
    """
    Authenticate the request from its token header.

    The header carries the raw token, with no scheme prefix. On success
    the identity is also stored on ``request.state.identity``.

    Raises:
        UnauthenticatedError: If the header is absent or the token does not verify
    """
    header_name = request.app.state.settings.AUTH_HEADER
    token = request.headers.get(header_name)
    if not token:
        logger.warning(f"❌ Request to {request.url.path} without token")
        raise UnauthenticatedError("Access denied", reason=UnauthenticatedError.MISSING)

    try:
        identity = auth.verify(token)
    except UnauthenticatedError as e:
        logger.warning(f"❌ Rejected token on {request.url.path}: {e.reason}")
        raise

    request.state.identity = identity
    return identity
