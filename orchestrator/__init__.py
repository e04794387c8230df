"""
Orchestration package for the export pipeline.

Sequences Fetch → Convert → Front matter → Write for every published page.
"""

from .export_orchestrator import ExportOrchestrator

__all__ = [
    'ExportOrchestrator'
]
