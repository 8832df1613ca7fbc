"""Tests for the command line interface."""
import json

import pytest
from typer.testing import CliRunner

from hostscope import __version__
from hostscope.cli.main import app
from hostscope.core.report import SectionResult, SourceEntry
from hostscope.core.config import AppConfig
from hostscope.storage.snapshot import save_snapshot
from conftest import make_report

runner = CliRunner()


class FakeCollector:
    """Stands in for Collector so no host commands are run."""

    instances = []

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.plan = None
        FakeCollector.instances.append(self)

    def run(self, plan, progress_callback=None):
        self.plan = plan
        if progress_callback:
            progress_callback(len(plan), len(plan))
        return make_report()


@pytest.fixture(autouse=True)
def isolated(monkeypatch, tmp_path):
    """No config files from the real home or working directory, no real collection."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    for name in ("OUTPUT_DIR", "VERBOSE", "TIMEOUT", "DEADLINE", "WORKERS", "ELEVATE", "FORMAT"):
        monkeypatch.delenv(f"HOSTSCOPE_{name}", raising=False)
    FakeCollector.instances = []
    monkeypatch.setattr("hostscope.cli.main.Collector", FakeCollector)


def _saved(tmp_path, name, report):
    config = AppConfig(output_dir=tmp_path / "output")
    run_dir = config.output_dir / name
    run_dir.mkdir(parents=True)
    save_snapshot(report, config, run_dir)
    return run_dir


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert f"hostscope {__version__}" in result.stdout


def test_collect_json():
    result = runner.invoke(app, ["collect", "--format", "json"])
    assert result.exit_code == 0, result.output

    data = json.loads(result.stdout)
    assert [s["title"] for s in data["sections"]] == [
        "SERVER PROFILE",
        "NETWORK: Listening Ports",
        "USERS & SESSIONS",
    ]
    assert data["host"]["hostname"] == "web01"


def test_collect_text():
    result = runner.invoke(app, ["collect", "-f", "text"])
    assert result.exit_code == 0
    assert "## SERVER PROFILE" in result.stdout
    assert "--- Listening Ports (permission-limited)" in result.stdout


def test_collect_rich():
    result = runner.invoke(app, ["collect"])
    assert result.exit_code == 0
    assert "SERVER PROFILE" in result.stdout


def test_collect_passes_options_to_collector():
    result = runner.invoke(
        app,
        ["collect", "-f", "json", "--only", "network", "--skip", "network.dns", "-w", "4", "--deadline", "60"],
    )
    assert result.exit_code == 0

    collector = FakeCollector.instances[-1]
    assert collector.kwargs["workers"] == 4
    assert collector.kwargs["deadline"] == 60
    assert [s.key for s in collector.plan] == ["network.addresses", "network.routing", "network.ports"]


def test_collect_unknown_section_exits_1():
    result = runner.invoke(app, ["collect", "--only", "bogus"])
    assert result.exit_code == 1
    assert FakeCollector.instances == []


def test_collect_invalid_format():
    result = runner.invoke(app, ["collect", "--format", "xml"])
    assert result.exit_code == 2


def test_collect_invalid_workers_exits_1():
    result = runner.invoke(app, ["collect", "-w", "0"])
    assert result.exit_code == 1


def test_config_file_is_used(tmp_path):
    (tmp_path / ".hostscope.yaml").write_text("format: json\nworkers: 3\n")
    result = runner.invoke(app, ["collect"])
    assert result.exit_code == 0
    assert json.loads(result.stdout)["host"]["hostname"] == "web01"
    assert FakeCollector.instances[-1].kwargs["workers"] == 3


def test_collect_save(tmp_path):
    out = tmp_path / "snapshots"
    result = runner.invoke(app, ["collect", "-f", "text", "--save", "-o", str(out)])
    assert result.exit_code == 0

    run_dirs = list(out.iterdir())
    assert len(run_dirs) == 1
    names = {p.name for p in run_dirs[0].iterdir()}
    assert {"report.json", "report.txt", "entries.csv", "metadata.json", "report.html", "hostscope.log"} <= names


def test_show_text(tmp_path):
    run_dir = _saved(tmp_path, "2026-10-19_101500_snapshot", make_report())
    result = runner.invoke(app, ["show", str(run_dir), "-f", "text"])
    assert result.exit_code == 0
    assert "## USERS & SESSIONS" in result.stdout


def test_show_missing_snapshot(tmp_path):
    result = runner.invoke(app, ["show", str(tmp_path / "nope")])
    assert result.exit_code == 1


def test_diff(tmp_path):
    old = _saved(tmp_path, "2026-10-18_101500_snapshot", make_report())
    sections = list(make_report().sections)
    sections[2] = SectionResult(
        key="users",
        title="USERS & SESSIONS",
        entries=(SourceEntry(label="Logged in", text="root pts/0", status="ok", source="who"),),
    )
    new = _saved(tmp_path, "2026-10-19_101500_snapshot", make_report(sections=sections))

    result = runner.invoke(app, ["diff", str(old), str(new)])
    assert result.exit_code == 0
    assert "CHANGED: USERS & SESSIONS / Logged in" in result.stdout
    assert "+root pts/0" in result.stdout


def test_diff_identical(tmp_path):
    old = _saved(tmp_path, "2026-10-18_101500_snapshot", make_report())
    new = _saved(tmp_path, "2026-10-19_101500_snapshot", make_report())
    result = runner.invoke(app, ["diff", str(old), str(new)])
    assert result.exit_code == 0
    assert "No differences" in result.stdout


def test_history(tmp_path):
    _saved(tmp_path, "2026-10-19_101500_snapshot", make_report())
    result = runner.invoke(app, ["history", "-o", str(tmp_path / "output")])
    assert result.exit_code == 0
    assert "web01" in result.stdout


def test_history_empty(tmp_path):
    result = runner.invoke(app, ["history", "-o", str(tmp_path / "empty")])
    assert result.exit_code == 0
    assert "No snapshots found" in result.stdout


def test_sections_lists_plan():
    result = runner.invoke(app, ["sections", "--elevate", "never"])
    assert result.exit_code == 0
    assert "Collection Plan" in result.stdout
    assert "Green candidates" in result.stdout
