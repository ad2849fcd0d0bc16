"""Membership creation stage.

Runs after every board exists. For each (board, email) pair it grants the
board's ``"Back"`` role. Role lookup happens per board before anything is
dispatched: a board without that role gets no membership calls, while the
other boards still get theirs.
"""

from __future__ import annotations

from typing import NamedTuple, Sequence

import structlog

from core.domain.models import (
    BoardRequest,
    CreatedBoard,
    Identifier,
    MembershipRecord,
    MembershipRequest,
)
from core.errors import MembershipCreationError, RoleNotFoundError
from core.interfaces.gateway import TaigaGateway
from core.services.batching import first_failure, gather_settled

logger = structlog.get_logger()

MEMBER_ROLE_NAME = "Back"


class MemberGrant(NamedTuple):
    """One (board, member) pair waiting to be dispatched."""

    project: Identifier
    role: Identifier
    email: str


def resolve_role_id(board: CreatedBoard, board_name: str, role_name: str = MEMBER_ROLE_NAME) -> Identifier:
    """Exact, case-sensitive lookup of ``role_name`` in the board's roles."""

    for role in board.roles:
        if role.name == role_name:
            return role.id
    raise RoleNotFoundError(board.id, board_name, role_name)


def build_member_grants(
    created_boards: Sequence[CreatedBoard],
    board_requests: Sequence[BoardRequest],
) -> tuple[list[MemberGrant], list[RoleNotFoundError]]:
    """Pair created boards with their requests positionally.

    Returns one grant per member of every board whose role resolved, and the
    role errors for the boards that were skipped.
    """

    if len(created_boards) != len(board_requests):
        raise ValueError(
            f"{len(created_boards)} created boards for {len(board_requests)} board requests"
        )

    grants: list[MemberGrant] = []
    role_errors: list[RoleNotFoundError] = []
    for board, board_request in zip(created_boards, board_requests):
        try:
            role_id = resolve_role_id(board, board_request.name)
        except RoleNotFoundError as exc:
            logger.warning(
                "role_not_found",
                board=board_request.name,
                project_id=board.id,
                role=exc.role_name,
                skipped_members=len(board_request.member_emails),
            )
            role_errors.append(exc)
            continue

        grants.extend(
            MemberGrant(board.id, role_id, email) for email in board_request.member_emails
        )
    return grants, role_errors


async def create_memberships(
    gateway: TaigaGateway,
    token: str,
    created_boards: Sequence[CreatedBoard],
    board_requests: Sequence[BoardRequest],
) -> list[MembershipRecord]:
    """Grant every membership concurrently and wait for all of them.

    Raises the first ``RoleNotFoundError`` if any board was skipped, otherwise
    the first ``MembershipCreationError`` in dispatch order.
    """

    grants, role_errors = build_member_grants(created_boards, board_requests)

    async def create_one(grant: MemberGrant) -> MembershipRecord:
        try:
            request = MembershipRequest(project=grant.project, role=grant.role, email=grant.email)
            body = await gateway.create_membership(token, request.payload())
        except Exception as exc:
            logger.warning(
                "membership_creation_failed",
                project_id=grant.project,
                email=grant.email,
                error=str(exc),
            )
            raise MembershipCreationError(grant.project, grant.email, exc) from exc

        logger.debug("membership_created", project_id=request.project, email=request.email)
        return MembershipRecord(
            id=body.get("id"),
            project=request.project,
            role=request.role,
            email=request.email,
        )

    outcomes = await gather_settled(create_one(grant) for grant in grants)

    if role_errors:
        raise role_errors[0]
    failure = first_failure(outcomes)
    if failure is not None:
        raise failure
    return outcomes  # type: ignore[return-value]
