"""Reporters for sequence diagrams.

Inspection views of the abstract fragment tree, not diagram languages.
"""

from interflow.application.reporters.console import ConsoleConfig, ConsoleReporter
from interflow.application.reporters.json import JsonReporter

__all__ = [
    "ConsoleConfig",
    "ConsoleReporter",
    "JsonReporter",
]
