from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

ActivityKind = Literal[
    "VIEW_OPENED",
    "CARET_MOVED",
    "LAYOUT_CHANGED",
    "DOCUMENT_SAVED",
    "FOCUS_CHANGED",
]

Lifecycle = Literal["UNINITIALIZED", "READY", "DISABLED"]


@dataclass(frozen=True)
class ActivityEvent:
    """The user is interacting with `path` now. `path` is None when the view has no file."""
    kind: ActivityKind
    path: Optional[str] = None

    @property
    def forces_refresh(self) -> bool:
        return self.kind == "DOCUMENT_SAVED"


@dataclass
class DebounceState:
    last_update_time: Optional[float] = None  # None until the first update
    last_path: Optional[str] = None
    last_status_text: Optional[str] = None


@dataclass
class AnnotationState:
    previous_caption: Optional[str] = None
    insertion_index: Optional[int] = None  # length of the base text


@dataclass(frozen=True)
class StatusUpdate:
    text: str
    fresh: bool

    def display(self, label: str = "GTM", fresh_marker: str = "*") -> str:
        marker = fresh_marker if self.fresh else ""
        return f"{label}: {self.text}{marker}"

    def annotation(self, label: str = "GTM", fresh_marker: str = "*") -> str:
        return f"[{self.display(label, fresh_marker)}]"
