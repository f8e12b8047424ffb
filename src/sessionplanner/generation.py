"""Interface for text and image generation backends."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Protocol

Resolution = Literal["1K", "2K", "4K"]
RESOLUTIONS: tuple[str, ...] = ("1K", "2K", "4K")


@dataclass
class GeneratedDescription:
    text: str
    sources: list[str] = field(default_factory=list)


class ContentGenerator(Protocol):
    def describe(self, title: str, program: str) -> GeneratedDescription:
        ...

    def illustrate(self, title: str, resolution: Resolution) -> str:
        """Return an image URL (``data:`` URLs included)."""
        ...
