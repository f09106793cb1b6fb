"""Errors raised while integrating issues."""

from __future__ import annotations


class IssueProcessingError(RuntimeError):
    """Fatal failure while processing the issues of one component."""

    def __init__(self, component_key: str) -> None:
        super().__init__(f"Fail to process issues of component '{component_key}'")
        self.component_key = component_key
