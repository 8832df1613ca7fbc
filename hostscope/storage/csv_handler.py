"""
CSV index of report entries.
"""

import csv
from pathlib import Path
from loguru import logger

from hostscope.core.report import Report


class CSVHandler:
    """Write one CSV row per report entry."""

    def __init__(self, csv_file: Path):
        """
        Initialize CSV handler.

        Args:
            csv_file: Path to CSV file
        """
        self.csv_file = csv_file
        self.fieldnames = [
            'section',
            'label',
            'status',
            'source',
            'note',
            'lines',
        ]

    def write_report(self, report: Report) -> int:
        """
        Write every entry of a report, replacing any existing file.

        Returns:
            Number of rows written
        """
        rows = 0
        with open(self.csv_file, 'w', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=self.fieldnames)
            writer.writeheader()
            for section in report.sections:
                for entry in section.entries:
                    writer.writerow({
                        'section': section.title,
                        'label': entry.label,
                        'status': entry.status,
                        'source': entry.source or "",
                        'note': entry.note or "",
                        'lines': len(entry.text.splitlines()) if entry.available else 0,
                    })
                    rows += 1

        logger.debug(f"Wrote {rows} entries to {self.csv_file}")
        return rows
