"""Frame — one entry of the writer's nesting stack."""

from __future__ import annotations

from dataclasses import dataclass

from . import FrameKind

# Single-character tags used by ``JsonWriter.dump()``.
_TAGS: dict[FrameKind, str] = {
    FrameKind.ROOT: "#",
    FrameKind.ARRAY: "A",
    FrameKind.OBJECT: "O",
    FrameKind.KEY: "K",
}


@dataclass(slots=True)
class Frame:
    """Mutable stack slot.

    Frames live in a fixed arena owned by the writer and are reused across
    pushes, so ``reset`` is used instead of constructing new instances.
    ``emitted`` turns true once the frame has received its first child.
    """

    kind: FrameKind = FrameKind.ROOT
    emitted: bool = False

    def reset(self, kind: FrameKind) -> None:
        self.kind = kind
        self.emitted = False

    @property
    def tag(self) -> str:
        """Debug tag; lowercase once a child has been written."""
        tag = _TAGS[self.kind]
        return tag.lower() if self.emitted else tag
