"""
Playback — an index into a StepSequence, advanced one step at a time.

Pure read access over an immutable sequence: stepping never changes a
step, it only moves the cursor.
"""

from __future__ import annotations

from app.core.graph import EdgeKey
from app.core.steps import Step, StepSequence


class Playback:
    """
    Cursor over a finished trace.

    ``next()`` past the last step leaves the cursor on the last step and
    marks the playback finished, which is when the authoring UI unlocks
    graph editing again.
    """

    def __init__(self, sequence: StepSequence) -> None:
        if not len(sequence):
            raise ValueError("Cannot play back an empty step sequence.")
        self.sequence = sequence
        self._index = 0
        self._finished = False

    # ── Cursor ─────────────────────────────────────────────────────

    @property
    def index(self) -> int:
        return self._index

    @property
    def total(self) -> int:
        return len(self.sequence)

    @property
    def current(self) -> Step:
        return self.sequence[self._index]

    @property
    def active_edges(self) -> tuple[EdgeKey, ...]:
        return self.current.active_edges

    @property
    def at_end(self) -> bool:
        return self._index == len(self.sequence) - 1

    @property
    def is_finished(self) -> bool:
        return self._finished

    @property
    def is_active(self) -> bool:
        return not self._finished

    # ── Movement ───────────────────────────────────────────────────

    def next(self) -> Step:
        """Advance one step; at the last step, finish instead."""
        if self.at_end:
            self._finished = True
        else:
            self._index += 1
        return self.current

    def previous(self) -> Step:
        if self._index > 0:
            self._index -= 1
        return self.current

    def seek(self, index: int) -> Step:
        if not 0 <= index < len(self.sequence):
            raise IndexError(
                f"Step {index} out of range (0..{len(self.sequence) - 1})."
            )
        self._index = index
        return self.current

    def reset(self) -> Step:
        """Back to the first step, playing again."""
        self._index = 0
        self._finished = False
        return self.current

    def __repr__(self) -> str:
        return f"Playback(step={self._index + 1}/{self.total}, finished={self._finished})"
