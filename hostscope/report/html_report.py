"""
HTML renderer for a HostScope report.

Produces a self-contained page: a header with the run timestamps, a host
card, then one card per section with its entries as preformatted blocks.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, List

from hostscope.core.report import Report, SourceEntry


def _escape(text: Any) -> str:
    """Basic HTML escaping."""
    s = str(text)
    return (
        s.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#39;")
    )


CSS = """
body { font-family: system-ui, -apple-system, BlinkMacSystemFont, "Segoe UI", sans-serif;
       background: #0b1020; color: #f5f5f7; margin: 0; padding: 0; }
header { background: linear-gradient(90deg, #2563eb, #14b8a6); padding: 1.5rem 2rem; color: white; }
header h1 { margin: 0 0 0.3rem 0; font-size: 1.6rem; }
header p { margin: 0.1rem 0; opacity: 0.9; }
main { padding: 1.5rem 2rem 2rem 2rem; }
.card { background: #111827; border-radius: 0.75rem; padding: 1rem 1.2rem; margin-bottom: 1rem;
        border: 1px solid #1f2937; box-shadow: 0 10px 25px rgba(0,0,0,0.4); }
.badge { display: inline-block; padding: 0.1rem 0.6rem; border-radius: 999px; font-size: 0.75rem; }
.badge-ok { background: #065f46; color: #bbf7d0; }
.badge-empty { background: #1e3a8a; color: #bfdbfe; }
.badge-limited { background: #92400e; color: #fed7aa; }
.badge-unavailable { background: #7f1d1d; color: #fecaca; }
.section-title { font-size: 1.1rem; margin-bottom: 0.3rem; }
.entry { margin-top: 0.6rem; }
.entry-label { font-weight: 600; margin-right: 0.4rem; }
.muted { color: #9ca3af; font-size: 0.85rem; }
.pill { display: inline-block; padding: 0.1rem 0.5rem; border-radius: 999px; background: #111827;
        border: 1px solid #1f2937; font-size: 0.75rem; margin-right: 0.25rem; color: #9ca3af; }
pre { background: #020617; padding: 0.5rem 0.7rem; border-radius: 0.4rem; overflow-x: auto;
      font-size: 0.8rem; margin: 0.3rem 0 0 0; }
"""


def status_badge(entry: SourceEntry) -> str:
    if entry.status == "unavailable":
        label = "UNAVAILABLE" if not entry.note else f"UNAVAILABLE: {entry.note}"
        return f'<span class="badge badge-unavailable">{_escape(label)}</span>'
    if entry.note:
        return f'<span class="badge badge-limited">{_escape(entry.note.upper())}</span>'
    if entry.status == "empty":
        return '<span class="badge badge-empty">EMPTY</span>'
    return '<span class="badge badge-ok">OK</span>'


def _entry_html(entry: SourceEntry) -> str:
    source = f"<span class='pill'>{_escape(entry.source)}</span>" if entry.source else ""
    body = f"<pre>{_escape(entry.text)}</pre>" if entry.status == "ok" else ""
    return (
        "<div class='entry'>"
        f"<span class='entry-label'>{_escape(entry.label)}</span>"
        f"{status_badge(entry)} {source}"
        f"{body}"
        "</div>"
    )


def generate_html(report: Report) -> str:
    """
    Generate an HTML string for a report.
    """
    host = report.host
    truncated = (
        "<p><strong>Truncated:</strong> run deadline exceeded</p>" if report.truncated else ""
    )
    header_html = f"""
<header>
  <h1>HostScope Report</h1>
  <p><strong>Host:</strong> {_escape(host.hostname)}</p>
  <p class="muted">{_escape(report.generated_at_start.isoformat(timespec="seconds"))}
     &rarr; {_escape(report.generated_at_end.isoformat(timespec="seconds"))}</p>
  {truncated}
</header>
"""

    sys_rows = [
        f"<div><span class='pill'>{_escape(key)}</span> {_escape(value)}</div>"
        for key, value in host.model_dump().items()
    ]
    sys_rows.append(
        f"<div><span class='pill'>elevated</span> {'yes' if report.elevated else 'no'}</div>"
    )
    sys_html = (
        "<div class='card'>"
        "<div class='section-title'>System Information</div>"
        + "".join(sys_rows)
        + "</div>"
    )

    sections: List[str] = []
    for section in report.sections:
        entries_html = "".join(_entry_html(entry) for entry in section.entries)
        if not entries_html:
            entries_html = "<div class='muted'>No sources in this section.</div>"
        sections.append(
            "<div class='card'>"
            f"<div class='section-title'>{_escape(section.title)}</div>"
            + entries_html
            + "</div>"
        )

    body_html = "<main>" + sys_html + "".join(sections) + "</main>"

    return f"""<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <title>HostScope Report - {_escape(host.hostname)}</title>
    <style>{CSS}</style>
  </head>
  <body>
    {header_html}
    {body_html}
  </body>
</html>
"""


def generate_html_report(report: Report, output_file: Path) -> Path:
    """
    Write the HTML rendering of `report` to `output_file`.

    Returns:
        Path to the generated HTML file.
    """
    output_file.write_text(generate_html(report), encoding="utf-8")
    return output_file
