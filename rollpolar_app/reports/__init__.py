"""
Reporting utilities (plain text) for rollpolar.
"""

from rollpolar_app.reports.simple_text_report import build_session_summary_text

__all__ = [
    "build_session_summary_text",
]
