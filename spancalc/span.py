from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Span:
    """Half-open [start, end) range of code point offsets into a source line"""

    start: int
    end: int

    def merge(self, other: "Span") -> "Span":
        return Span(start=min(self.start, other.start), end=max(self.end, other.end))

    def __str__(self) -> str:
        return f"[{self.start},{self.end})"


@dataclass(frozen=True)
class Spanned(Generic[T]):
    value: T
    span: Span

    def replace(self, value: U) -> "Spanned[U]":
        return Spanned(value=value, span=self.span)

    def __str__(self) -> str:
        return f"{self.value}@{self.span}"
