"""Ports - interfaces/protocols for external dependencies."""

from .llm_service import Completion, CompletionService

__all__ = [
    "Completion",
    "CompletionService",
]
