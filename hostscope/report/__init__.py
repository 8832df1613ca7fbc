"""
Report renderers.
"""

from hostscope.report.diff import EntryChange, diff_reports
from hostscope.report.html_report import generate_html, generate_html_report
from hostscope.report.text_report import render_text

__all__ = [
    "EntryChange",
    "diff_reports",
    "generate_html",
    "generate_html_report",
    "render_text",
]
