"""Component tree nodes handed to the issue integration visitors."""

from __future__ import annotations

from dataclasses import dataclass, field

from .enums import ComponentStatus, ComponentType


@dataclass(frozen=True, slots=True)
class OriginalFile:
    """Identity a moved or renamed file had in the previous analysis."""

    uuid: str
    key: str


@dataclass(frozen=True, slots=True, kw_only=True)
class Component:
    uuid: str
    key: str
    type: ComponentType = ComponentType.FILE
    status: ComponentStatus = ComponentStatus.CHANGED
    original_file: OriginalFile | None = None
    children: tuple[Component, ...] = field(default_factory=tuple["Component", ...])

    @property
    def is_file(self) -> bool:
        return self.type is ComponentType.FILE

    def iter_files(self) -> tuple[Component, ...]:
        """Return every file below (or equal to) this component, post-order."""

        files: list[Component] = []
        for child in self.children:
            files.extend(child.iter_files())
        if self.is_file:
            files.append(self)
        return tuple(files)
