"""
Data models for extraction results and per-pass scoring state.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, FrozenSet, Optional, Tuple

from bs4 import BeautifulSoup, Tag

FLAG_NAMES = ("strip_unlikelys", "weight_classes", "clean_conditionally")


@dataclass(slots=True, frozen=True)
class ExtractResult:
    """Flattened result of HTML content extraction."""

    url: str | None
    text: str
    title: str | None
    images: list[str]
    language: str | None
    score: float  # 0-1

    def __post_init__(self) -> None:
        """Validate the result."""
        if not (0.0 <= self.score <= 1.0):
            raise ValueError("Score must be between 0.0 and 1.0")


@dataclass(frozen=True)
class Flags:
    """The three heuristics the grabber relaxes, in this order, when results come out too short."""

    strip_unlikelys: bool = True
    weight_classes: bool = True
    clean_conditionally: bool = True

    @property
    def active(self) -> FrozenSet[str]:
        return frozenset(name for name in FLAG_NAMES if getattr(self, name))

    def relaxed(self) -> Optional[Flags]:
        """A copy with the first still-active flag turned off, or None when all are off."""
        for name in FLAG_NAMES:
            if getattr(self, name):
                return replace(self, **{name: False})
        return None


class ScoreMap:
    """
    Content scores keyed by element identity.

    bs4 tags compare equal by structure, so they cannot be dict keys directly.
    Each entry keeps a reference to its element, which keeps the id stable for
    the lifetime of the map.
    """

    def __init__(self) -> None:
        self._entries: Dict[int, Tuple[Tag, float]] = {}

    def __contains__(self, element: object) -> bool:
        return id(element) in self._entries

    def __getitem__(self, element: Tag) -> float:
        return self._entries[id(element)][1]

    def __setitem__(self, element: Tag, score: float) -> None:
        self._entries[id(element)] = (element, score)

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, element: Tag, default: Optional[float] = None) -> Optional[float]:
        entry = self._entries.get(id(element))
        return entry[1] if entry is not None else default

    def add(self, element: Tag, delta: float) -> None:
        self[element] = self[element] + delta


@dataclass
class GrabResult:
    """Outcome of the grab loop: the assembled content and how it was reached."""

    content: Tag
    found_candidate: bool
    history: Tuple[Flags, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ExtractionResult:
    """Title and content elements; both stay owned by ``document``."""

    success: bool
    title: Tag
    content: Tag
    document: BeautifulSoup

    @property
    def title_text(self) -> str:
        return self.title.get_text().strip()

    @property
    def content_html(self) -> str:
        return str(self.content)

    @property
    def text(self) -> str:
        return " ".join(self.content.get_text(" ").split())
