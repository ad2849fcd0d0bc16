"""Board creation stage.

Every board in the request list gets its own ``POST /projects`` call, all
dispatched concurrently. Each call carries its original index so the created
boards can be put back in request order regardless of which response
arrives first.
"""

from __future__ import annotations

from typing import Sequence

import structlog

from core.domain.models import BoardRequest, CreatedBoard, SharedBoardOptions
from core.errors import BoardCreationError
from core.interfaces.gateway import TaigaGateway
from core.services.batching import first_failure, gather_settled

logger = structlog.get_logger()


def build_project_payloads(
    board_requests: Sequence[BoardRequest],
    shared_options: SharedBoardOptions,
) -> list[dict[str, object]]:
    """One payload per board; they only differ in ``name``."""

    return [shared_options.project_payload(board.name) for board in board_requests]


async def create_boards(
    gateway: TaigaGateway,
    token: str,
    board_requests: Sequence[BoardRequest],
    shared_options: SharedBoardOptions,
) -> list[CreatedBoard]:
    """Create all boards and return them aligned with ``board_requests``.

    Waits until every call has settled. If any failed, raises the first
    ``BoardCreationError`` in request order and returns nothing.
    """

    payloads = build_project_payloads(board_requests, shared_options)

    async def create_one(index: int, payload: dict[str, object]) -> tuple[int, CreatedBoard]:
        name = board_requests[index].name
        try:
            body = await gateway.create_project(token, payload)
            board = CreatedBoard.model_validate(body)
        except Exception as exc:
            logger.warning("board_creation_failed", board=name, index=index, error=str(exc))
            raise BoardCreationError(name, index, exc) from exc

        logger.info("board_created", board=name, index=index, project_id=board.id, roles=len(board.roles))
        return index, board

    outcomes = await gather_settled(create_one(i, payload) for i, payload in enumerate(payloads))

    failure = first_failure(outcomes)
    if failure is not None:
        raise failure

    created: list[CreatedBoard | None] = [None] * len(board_requests)
    for index, board in outcomes:  # type: ignore[misc]
        created[index] = board
    return created  # type: ignore[return-value]
