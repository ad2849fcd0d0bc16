"""Provisioning orchestration.

This module sequences the three stages of a run: authenticate once, create
every board, then grant every membership. Each stage is a concurrent batch
with a barrier at the end; a stage failure stops the run before the next
stage dispatches anything. The CLI delegates to these helpers so that the
pipeline stays reusable from other entry-points (scripts, tests) and free of
printing side-effects.
"""

from __future__ import annotations

from typing import Sequence

import httpx
import structlog

from adapters.http_client import build_async_client
from adapters.taiga_client import TaigaClient
from core.config import AppSettings
from core.domain.models import (
    BoardPlan,
    BoardRequest,
    ProvisioningManifest,
    ProvisioningReport,
    SharedBoardOptions,
)
from core.interfaces.gateway import TaigaGateway
from core.services.authenticator import authenticate
from core.services.board_provisioner import build_project_payloads, create_boards
from core.services.membership_provisioner import create_memberships

logger = structlog.get_logger()


async def provision(
    *,
    gateway: TaigaGateway,
    username: str,
    password: str,
    board_requests: Sequence[BoardRequest],
    shared_options: SharedBoardOptions,
) -> ProvisioningReport:
    """Run authenticate -> create_boards -> create_memberships.

    Resolves once the membership stage has settled. Fails with the first
    stage error; later stages are never started.
    """

    token = await authenticate(gateway, username, password)
    boards = await create_boards(gateway, token, board_requests, shared_options)
    memberships = await create_memberships(gateway, token, boards, board_requests)

    logger.info("provisioning_completed", boards=len(boards), memberships=len(memberships))
    return ProvisioningReport(boards=boards, memberships=memberships)


async def run_provisioning(
    *,
    settings: AppSettings,
    username: str,
    password: str,
    manifest: ProvisioningManifest,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ProvisioningReport:
    """Open one HTTP client for the whole run and provision ``manifest``."""

    async with build_async_client(settings, transport=transport) as client:
        return await provision(
            gateway=TaigaClient(client),
            username=username,
            password=password,
            board_requests=manifest.boards,
            shared_options=manifest.options,
        )


def build_plan(
    board_requests: Sequence[BoardRequest],
    shared_options: SharedBoardOptions,
) -> list[BoardPlan]:
    """Dry-run: the exact `/projects` payloads plus member counts, no network."""

    payloads = build_project_payloads(board_requests, shared_options)
    return [
        BoardPlan(name=board.name, payload=payload, member_count=len(board.member_emails))
        for board, payload in zip(board_requests, payloads)
    ]
