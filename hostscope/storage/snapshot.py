"""
Saving and loading report snapshots.

A snapshot directory holds report.json (the canonical form), report.txt,
entries.csv and metadata.json.
"""

import re
from pathlib import Path
from typing import List

from loguru import logger

from hostscope.core.config import AppConfig
from hostscope.core.report import Report
from hostscope.report.text_report import render_text
from hostscope.storage.csv_handler import CSVHandler

REPORT_FILE = "report.json"
RUN_DIR_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}_\d{6}_.+")


def save_snapshot(report: Report, config: AppConfig, run_dir: Path) -> Path:
    """Write all snapshot files for a report into run_dir."""
    (run_dir / REPORT_FILE).write_text(report.model_dump_json(indent=2), encoding="utf-8")
    (run_dir / "report.txt").write_text(render_text(report), encoding="utf-8")
    CSVHandler(run_dir / "entries.csv").write_report(report)

    unavailable = sum(1 for s in report.sections for e in s.entries if not e.available)
    config.save_metadata(
        run_dir,
        {
            "hostname": report.host.hostname,
            "generated_at_start": report.generated_at_start.isoformat(),
            "generated_at_end": report.generated_at_end.isoformat(),
            "sections": len(report.sections),
            "unavailable": unavailable,
            "elevated": report.elevated,
            "truncated": report.truncated,
            "system_info": report.host.model_dump(mode="json"),
        },
    )
    logger.info(f"Snapshot saved to {run_dir}")
    return run_dir


def load_snapshot(path: Path) -> Report:
    """
    Load a report from a snapshot directory or a report.json file.

    Raises:
        FileNotFoundError: if no report.json is found
        pydantic.ValidationError: if the file is not a report
    """
    report_file = path / REPORT_FILE if path.is_dir() else path
    if not report_file.exists():
        raise FileNotFoundError(f"No {REPORT_FILE} in {path}")
    return Report.model_validate_json(report_file.read_text(encoding="utf-8"))


def list_snapshots(output_dir: Path, limit: int = 10) -> List[Path]:
    """Snapshot directories under output_dir, newest first."""
    if not output_dir.exists() or not output_dir.is_dir():
        return []
    run_dirs = sorted(
        [d for d in output_dir.iterdir() if d.is_dir() and RUN_DIR_PATTERN.match(d.name)],
        key=lambda p: p.name,
        reverse=True,
    )
    return run_dirs[:limit]
