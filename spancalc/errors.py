import enum
from dataclasses import dataclass
from typing import ClassVar

from spancalc.span import Span
from spancalc.utils import PrintableEnum


class LexErrorKind(PrintableEnum):
    UNEXPECTED_CHARACTER = enum.auto()
    INVALID_NUMBER_LITERAL = enum.auto()


class StructuralErrorKind(PrintableEnum):
    EXPECTED_EXPRESSION = enum.auto()
    DID_NOT_EXPECT_EXPRESSION = enum.auto()
    UNCLOSED_LEFT_BRACKET = enum.auto()
    UNCLOSED_RIGHT_BRACKET = enum.auto()


class RuntimeErrorKind(PrintableEnum):
    UNASSIGNED_VARIABLE = enum.auto()
    ASSIGNING_TO_EXPRESSION = enum.auto()
    ASSIGNING_TO_NULL = enum.auto()
    ATTEMPTED_TO_USE_NULL = enum.auto()
    ATTEMPTED_TO_PRINT_NULL = enum.auto()
    MALFORMED_EXPRESSION = enum.auto()


ErrorKind = LexErrorKind | StructuralErrorKind | RuntimeErrorKind


@dataclass
class CalcError(Exception):
    """Base for every error a line can produce; always points at a span of the line"""

    family: ClassVar[str] = "Calculator error"

    kind: ErrorKind
    span: Span
    errmsg: str

    def __str__(self) -> str:
        return f"[{self.family}] {self.errmsg}"

    def render(self, code: str, window: int = 10) -> str:
        """Source excerpt around the span, underlined with '~' and a caret at its start"""
        code = code.rstrip("\r\n")
        print_start_idx = max(0, self.span.start - window)
        print_ellipsis_pre = print_start_idx > 0
        print_end_idx = min(len(code), max(self.span.end, self.span.start + 1) + window)
        print_ellipsis_post = print_end_idx < len(code)
        padding = " " * (self.span.start - print_start_idx + (3 if print_ellipsis_pre else 0))
        underline_len = max(1, min(self.span.end, print_end_idx) - self.span.start)
        return "\n".join(
            [
                (
                    ("..." if print_ellipsis_pre else "")
                    + code[print_start_idx:print_end_idx]
                    + ("..." if print_ellipsis_post else "")
                ),
                padding + "~" * underline_len,
                padding + f"^ {self}",
            ]
        )


@dataclass
class LexError(CalcError):
    family: ClassVar[str] = "Lexer error"

    kind: LexErrorKind


@dataclass
class StructuralError(CalcError):
    family: ClassVar[str] = "Structure error"

    kind: StructuralErrorKind


@dataclass
class CalcRuntimeError(CalcError):
    family: ClassVar[str] = "Runtime error"

    kind: RuntimeErrorKind
