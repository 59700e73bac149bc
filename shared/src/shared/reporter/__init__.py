"""
Reporting utilities shared by Facteur components.
"""

from shared.reporter.system_reporter import SystemReporter

__all__ = ["SystemReporter"]
