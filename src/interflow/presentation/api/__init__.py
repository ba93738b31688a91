"""Public API for interaction extraction."""

from interflow.presentation.api.facade import Interflow

__all__ = ["Interflow"]
