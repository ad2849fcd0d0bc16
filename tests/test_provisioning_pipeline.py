"""End-to-end tests of the provisioning pipeline against a fake Taiga."""

from __future__ import annotations

import pytest

from _helpers import FakeTaiga
from adapters.http_client import build_async_client
from adapters.taiga_client import TaigaClient
from core.domain.models import BoardRequest, ProvisioningManifest, SharedBoardOptions
from core.errors import AuthError, BoardCreationError, RoleNotFoundError
from core.services.provisioning_pipeline import build_plan, provision, run_provisioning


async def _provision(settings, fake, boards, options):
    async with build_async_client(settings, transport=fake.transport()) as client:
        return await provision(
            gateway=TaigaClient(client),
            username="admin",
            password="s3cret",
            board_requests=boards,
            shared_options=options,
        )


@pytest.mark.asyncio
async def test_single_board_single_member(settings, shared_options):
    fake = FakeTaiga(token="tok-1")
    boards = [BoardRequest(name="Alpha", member_emails=["a@x.com"])]

    report = await _provision(settings, fake, boards, shared_options)

    assert [path for path, _, _ in fake.calls] == ["/auth", "/projects", "/memberships"]
    assert fake.calls_to("/projects")[0]["name"] == "Alpha"
    assert fake.calls_to("/memberships") == [{"project": "p1", "role": 42, "email": "a@x.com"}]
    assert [board.id for board in report.boards] == ["p1"]
    assert [(m.project, m.role, m.email) for m in report.memberships] == [("p1", 42, "a@x.com")]


@pytest.mark.asyncio
async def test_every_call_after_login_uses_the_token(settings, two_boards, shared_options):
    fake = FakeTaiga(token="tok-xyz")

    await _provision(settings, fake, two_boards, shared_options)

    headers = [header for path, _, header in fake.calls if path != "/auth"]
    assert len(headers) == 5
    assert set(headers) == {"Bearer tok-xyz"}


@pytest.mark.asyncio
async def test_membership_stage_starts_after_all_boards(settings, two_boards, shared_options):
    fake = FakeTaiga(delays={"Alpha": 0.03})

    await _provision(settings, fake, two_boards, shared_options)

    paths = [path for path, _, _ in fake.calls]
    assert paths[:3] == ["/auth", "/projects", "/projects"]
    assert paths[3:] == ["/memberships"] * 3
    memberships = fake.calls_to("/memberships")
    # Alpha answered last, so it got p2; its members must still land on p2.
    assert {m["email"]: m["project"] for m in memberships} == {
        "a@x.com": "p2",
        "b@x.com": "p2",
        "c@x.com": "p1",
    }


@pytest.mark.asyncio
async def test_auth_failure_short_circuits(settings, two_boards, shared_options):
    fake = FakeTaiga(reject_auth=True)

    with pytest.raises(AuthError):
        await _provision(settings, fake, two_boards, shared_options)

    assert fake.calls_to("/projects") == []
    assert fake.calls_to("/memberships") == []


@pytest.mark.asyncio
async def test_board_failure_prevents_all_memberships(settings, two_boards, shared_options):
    fake = FakeTaiga(failing_projects={"Beta"})

    with pytest.raises(BoardCreationError) as excinfo:
        await _provision(settings, fake, two_boards, shared_options)

    assert excinfo.value.name == "Beta"
    assert len(fake.calls_to("/projects")) == 2
    assert fake.calls_to("/memberships") == []


@pytest.mark.asyncio
async def test_missing_back_role_spares_sibling_board(settings, two_boards, shared_options):
    fake = FakeTaiga(roles_by_board={"Alpha": [{"id": 1, "name": "Front"}]})

    with pytest.raises(RoleNotFoundError) as excinfo:
        await _provision(settings, fake, two_boards, shared_options)

    assert excinfo.value.board_name == "Alpha"
    assert [m["email"] for m in fake.calls_to("/memberships")] == ["c@x.com"]


@pytest.mark.asyncio
async def test_run_provisioning_opens_its_own_client(settings, two_boards, shared_options):
    fake = FakeTaiga()
    manifest = ProvisioningManifest(options=shared_options, boards=two_boards)

    report = await run_provisioning(
        settings=settings,
        username="admin",
        password="s3cret",
        manifest=manifest,
        transport=fake.transport(),
    )

    assert len(report.boards) == 2
    assert len(report.memberships) == 3


def test_build_plan_makes_no_calls_and_counts_members(two_boards):
    plans = build_plan(two_boards, SharedBoardOptions(description="shared", wiki_enabled=True))

    assert [(p.name, p.member_count) for p in plans] == [("Alpha", 2), ("Beta", 1)]
    assert plans[0].payload["description"] == "shared"
    assert plans[0].payload["is_wiki_activated"] is True
    assert plans[1].payload["name"] == "Beta"


@pytest.mark.asyncio
async def test_empty_username_stops_before_any_board(settings, two_boards, shared_options):
    fake = FakeTaiga()

    async with build_async_client(settings, transport=fake.transport()) as client:
        with pytest.raises(AuthError):
            await provision(
                gateway=TaigaClient(client),
                username="",
                password="s3cret",
                board_requests=two_boards,
                shared_options=shared_options,
            )

    assert fake.calls == []
