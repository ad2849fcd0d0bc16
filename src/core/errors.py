"""Provisioning exceptions.

Every stage wraps the underlying transport/service failure with
``raise ... from exc`` so the original error stays reachable through both
``__cause__`` and the ``cause`` attribute.
"""

from __future__ import annotations

from core.domain.models import Identifier


class ProvisioningError(Exception):
    """Base exception for all provisioning failures."""

    def __init__(self, message: str, cause: BaseException | None = None):
        self.cause = cause
        super().__init__(message)


class TaigaAPIError(Exception):
    """HTTP error returned by the Taiga API.

    Attributes:
        status_code: HTTP status code
        message: Response body
        endpoint: URL that failed
    """

    def __init__(self, status_code: int, message: str, endpoint: str):
        self.status_code = status_code
        self.message = message
        self.endpoint = endpoint
        super().__init__(f"[{status_code}] {endpoint}: {message}")


class ManifestError(ProvisioningError):
    """The provisioning manifest could not be read or validated."""


class AuthError(ProvisioningError):
    """Authentication call failed or the credentials were rejected."""


class BoardCreationError(ProvisioningError):
    """A board-creation call failed."""

    def __init__(self, name: str, index: int, cause: BaseException):
        self.name = name
        self.index = index
        super().__init__(f"Could not create board {name!r} (#{index}): {cause}", cause)


class RoleNotFoundError(ProvisioningError):
    """A created board does not expose the role memberships are granted with."""

    def __init__(self, project_id: Identifier, board_name: str, role_name: str):
        self.project_id = project_id
        self.board_name = board_name
        self.role_name = role_name
        super().__init__(f"Board {board_name!r} (project {project_id}) has no role named {role_name!r}")


class MembershipCreationError(ProvisioningError):
    """A membership-creation call failed."""

    def __init__(self, project_id: Identifier, email: str, cause: BaseException):
        self.project_id = project_id
        self.email = email
        super().__init__(f"Could not add {email} to project {project_id}: {cause}", cause)
