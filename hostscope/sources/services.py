"""
Sessions, services, timers and scheduled tasks.
"""

import os
from typing import Optional, Sequence

from hostscope.sources.base import CommandCandidate, DataSource, FileCandidate, FunctionCandidate, Section

CRON_DIRS = ("/etc/cron.hourly", "/etc/cron.daily", "/etc/cron.weekly", "/etc/cron.monthly")


def list_cron_dirs(dirs: Sequence[str] = CRON_DIRS) -> Optional[str]:
    """List the entries of each existing cron directory."""
    blocks = []
    for directory in dirs:
        if not os.path.isdir(directory):
            continue
        try:
            names = sorted(os.listdir(directory))
        except OSError as e:
            blocks.append(f"{directory}: {e.strerror or e}")
            continue
        blocks.append("\n".join([f"{directory}:", *names]))
    return "\n".join(blocks) if blocks else None


USERS = Section(
    key="users",
    title="USERS & SESSIONS",
    sources=[
        # No one logged in is a valid answer
        DataSource("users.who", "Logged in", [
            CommandCandidate(["who"], accept_empty=True),
        ]),
        DataSource("users.last", "Recent logins (last 10)", [
            CommandCandidate(["last", "-n", "10"]),
        ]),
    ],
)

SERVICES = Section(
    key="services",
    title="SERVICES",
    sources=[
        DataSource("services.running", "Running services", [
            CommandCandidate(
                ["systemctl", "list-units", "--type=service", "--state=running", "--no-pager", "--all"]
            ),
            CommandCandidate(["service", "--status-all"]),
            CommandCandidate(["chkconfig", "--list"]),
        ]),
    ],
)

TIMERS = Section(
    key="timers",
    title="SYSTEMD TIMERS (if systemd)",
    sources=[
        DataSource("timers.systemd", "Timers", [
            CommandCandidate(["systemctl", "list-timers", "--all", "--no-pager"]),
        ]),
    ],
)

CRON = Section(
    key="cron",
    title="CRON / SCHEDULED TASKS",
    sources=[
        DataSource("cron.system", "System crontab (/etc/crontab)", [
            FileCandidate("/etc/crontab", accept_empty=True),
        ]),
        DataSource("cron.dirs", "Cron directories", [
            FunctionCandidate(list_cron_dirs, name="list_cron_dirs"),
        ]),
        # crontab -l exits 1 when the user has no crontab or may not read it
        DataSource("cron.user", "User crontab (current user)", [
            CommandCandidate(["crontab", "-l"], ok_codes=(0, 1), accept_empty=True, empty_note="none or no permission"),
        ]),
    ],
)
