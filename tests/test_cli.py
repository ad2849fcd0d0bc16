"""Tests for the Typer CLI."""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from cli.main import app
from core.domain.models import CreatedBoard, MembershipRecord, ProvisioningReport
from core.errors import BoardCreationError, TaigaAPIError

runner = CliRunner()


@pytest.fixture
def manifest_path(tmp_path):
    path = tmp_path / "boards.json"
    path.write_text(
        json.dumps(
            {
                "options": {"description": "d", "isPrivate": True, "isKanbanActivated": True},
                "boards": [
                    {"name": "Alpha", "emails": ["a@x.com", "b@x.com"]},
                    {"name": "Beta", "emails": ["c@x.com"]},
                ],
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.setenv("TAIGA_PROVISIONER_USERNAME", "admin")
    monkeypatch.setenv("TAIGA_PROVISIONER_PASSWORD", "s3cret")


def test_plan_lists_boards(manifest_path):
    result = runner.invoke(app, ["plan", str(manifest_path)])

    assert result.exit_code == 0, result.output
    assert "Alpha" in result.output
    assert "Beta" in result.output
    assert "kanban" in result.output


def test_plan_rejects_invalid_manifest(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("[]", encoding="utf-8")

    result = runner.invoke(app, ["plan", str(path)])

    assert result.exit_code == 1
    assert "Invalid manifest" in result.output


def test_provision_prints_report_and_exports_json(monkeypatch, manifest_path, tmp_path):
    captured = {}

    async def fake_run_provisioning(*, settings, username, password, manifest):
        captured.update(username=username, password=password, boards=[b.name for b in manifest.boards])
        return ProvisioningReport(
            boards=[
                CreatedBoard(id="p1", name="Alpha"),
                CreatedBoard(id="p2", name="Beta"),
            ],
            memberships=[MembershipRecord(id=1, project="p1", role=42, email="a@x.com")],
        )

    monkeypatch.setattr("cli.main.run_provisioning", fake_run_provisioning)
    out = tmp_path / "report.json"

    result = runner.invoke(app, ["provision", str(manifest_path), "--no-banner", "--json-out", str(out)])

    assert result.exit_code == 0, result.output
    assert captured == {"username": "admin", "password": "s3cret", "boards": ["Alpha", "Beta"]}
    assert "p2" in result.output
    assert json.loads(out.read_text(encoding="utf-8"))["boards"][1]["id"] == "p2"


def test_provision_flags_override_settings(monkeypatch, manifest_path):
    captured = {}

    async def fake_run_provisioning(*, settings, username, password, manifest):
        captured.update(username=username, password=password)
        return ProvisioningReport()

    monkeypatch.setattr("cli.main.run_provisioning", fake_run_provisioning)

    result = runner.invoke(
        app, ["provision", str(manifest_path), "--no-banner", "-u", "root", "-p", "pw"]
    )

    assert result.exit_code == 0, result.output
    assert captured == {"username": "root", "password": "pw"}


def test_provision_failure_exits_with_error(monkeypatch, manifest_path):
    async def failing_run_provisioning(**kwargs):
        raise BoardCreationError("Beta", 1, TaigaAPIError(400, "name in use", "https://t/projects"))

    monkeypatch.setattr("cli.main.run_provisioning", failing_run_provisioning)

    result = runner.invoke(app, ["provision", str(manifest_path), "--no-banner"])

    assert result.exit_code == 1
    assert "Provisioning failed" in result.output
    assert "Beta" in result.output


def test_doctor_shows_configuration(monkeypatch):
    async def fake_check(settings):
        return True, "HTTP 200"

    monkeypatch.setattr("cli.doctor._check_http", fake_check)

    result = runner.invoke(app, ["doctor", "run"])

    assert result.exit_code == 0, result.output
    assert "api.taiga.io" in result.output
    assert "HTTP 200" in result.output
    assert "s3cret" not in result.output


def test_provision_report_write_failure_exits_with_error(monkeypatch, manifest_path, tmp_path):
    async def fake_run_provisioning(**kwargs):
        return ProvisioningReport(boards=[CreatedBoard(id="p1", name="Alpha")])

    monkeypatch.setattr("cli.main.run_provisioning", fake_run_provisioning)
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")

    result = runner.invoke(
        app, ["provision", str(manifest_path), "--no-banner", "--json-out", str(blocker / "report.json")]
    )

    assert result.exit_code == 1
    assert "Could not write report" in result.output
    assert "p1" in result.output
