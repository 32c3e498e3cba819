from __future__ import annotations

from typing import Callable, Literal

from .types import AnnotationState

InsertionMode = Literal["prepend", "append"]


class TitleAnnotator:
    """
    Splices a status annotation into a display string owned by someone else
    (window title, status bar text).

    The previous annotation is cut out before the next one goes in, as long as
    the string still holds exactly what we wrote last time. If anything else
    changed it in between, the whole current value becomes the new base.
    """

    def __init__(
        self,
        read: Callable[[], str],
        write: Callable[[str], None],
        mode: InsertionMode = "prepend",
    ) -> None:
        if mode not in ("prepend", "append"):
            raise ValueError(f"Unknown insertion mode: {mode!r}")
        self._read = read
        self._write = write
        self._mode: InsertionMode = mode
        self._state = AnnotationState()

    def get_state(self) -> AnnotationState:
        return AnnotationState(
            previous_caption=self._state.previous_caption,
            insertion_index=self._state.insertion_index,
        )

    def _base_text(self, current: str) -> str:
        if current != self._state.previous_caption or self._state.insertion_index is None:
            return current
        # insertion_index is the base length; clamp in case the title got shorter
        index = max(0, min(self._state.insertion_index, len(current)))
        if self._mode == "prepend":
            return current[len(current) - index:]
        return current[:index]

    def _compose(self, base: str, annotation: str) -> str:
        if not base:
            return annotation
        if self._mode == "prepend":
            return f"{annotation} {base}"
        return f"{base} {annotation}"

    def annotate(self, annotation: str) -> str:
        current = self._read() or ""
        base = self._base_text(current)
        caption = self._compose(base, annotation)

        self._write(caption)
        self._state.previous_caption = caption
        self._state.insertion_index = len(base)
        return caption

    def reset(self) -> None:
        self._state = AnnotationState()
