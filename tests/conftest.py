"""Shared test fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
import structlog

# Make _helpers importable from test files
sys.path.insert(0, str(Path(__file__).parent))

from _helpers import FakeTaiga  # noqa: E402

from core.config import AppSettings  # noqa: E402
from core.domain.models import BoardRequest, SharedBoardOptions  # noqa: E402

__all__ = ["FakeTaiga"]


@pytest.fixture(autouse=True)
def _quiet_logging():
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(40))
    yield
    structlog.reset_defaults()


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None, api_base_url="https://taiga.test/api/v1/")


@pytest.fixture
def shared_options() -> SharedBoardOptions:
    return SharedBoardOptions(
        description="d",
        is_private=True,
        backlog_enabled=True,
        issues_enabled=False,
        kanban_enabled=True,
        wiki_enabled=False,
    )


@pytest.fixture
def two_boards() -> list[BoardRequest]:
    return [
        BoardRequest(name="Alpha", member_emails=["a@x.com", "b@x.com"]),
        BoardRequest(name="Beta", member_emails=["c@x.com"]),
    ]
