import enum
from dataclasses import dataclass
from typing import Callable, Iterator

from spancalc.errors import LexError, LexErrorKind
from spancalc.interner import Interner
from spancalc.span import Span, Spanned
from spancalc.utils import PrintableEnum


class Symbol(PrintableEnum):
    EQUALS = enum.auto()
    ADD = enum.auto()
    SUB = enum.auto()
    MUL = enum.auto()
    DIV = enum.auto()
    LEFT_PAREN = enum.auto()
    RIGHT_PAREN = enum.auto()
    PRINT = enum.auto()
    SEMICOLON = enum.auto()


@dataclass(frozen=True)
class Ident:
    handle: int

    def __str__(self) -> str:
        return f"#{self.handle}"


RawToken = Ident | float | Symbol


def _is_valid_in_number(s: str) -> bool:
    return s.isdecimal() or s == "."


def _is_valid_in_identifier(s: str) -> bool:
    return s.isalpha()


def _read_while(code: str, i: int, predicate: Callable[[str], bool]) -> int:
    """Index just past the run of characters starting at i that satisfy predicate"""
    while i < len(code) and predicate(code[i]):
        i += 1
    return i


SINGLE_CHAR_TOKENS = {
    "=": Symbol.EQUALS,
    "+": Symbol.ADD,
    "-": Symbol.SUB,
    "*": Symbol.MUL,
    "/": Symbol.DIV,
    "(": Symbol.LEFT_PAREN,
    ")": Symbol.RIGHT_PAREN,
    "%": Symbol.PRINT,
    ";": Symbol.SEMICOLON,
}


def tokenize(code: str, interner: Interner) -> Iterator[Spanned[RawToken]]:
    """Lazily scans one line; raises LexError at the first character that can't start a token"""
    i = 0
    while True:
        i = _read_while(code, i, str.isspace)
        if i >= len(code):
            return
        if _is_valid_in_identifier(code[i]):
            ident_end_idx = _read_while(code, i + 1, _is_valid_in_identifier)
            handle = interner.intern(code[i:ident_end_idx])
            yield Spanned(value=Ident(handle), span=Span(i, ident_end_idx))
            i = ident_end_idx
        elif code[i].isdecimal():
            number_end_idx = _read_while(code, i + 1, _is_valid_in_number)
            span = Span(i, number_end_idx)
            lexeme = code[i:number_end_idx]
            try:
                number = float(lexeme)
            except ValueError:
                raise LexError(
                    kind=LexErrorKind.INVALID_NUMBER_LITERAL,
                    span=span,
                    errmsg=f"Invalid number literal: {lexeme!r}",
                ) from None
            yield Spanned(value=number, span=span)
            i = number_end_idx
        elif code[i] in SINGLE_CHAR_TOKENS:
            yield Spanned(value=SINGLE_CHAR_TOKENS[code[i]], span=Span(i, i + 1))
            i += 1
        else:
            raise LexError(
                kind=LexErrorKind.UNEXPECTED_CHARACTER,
                span=Span(i, i + 1),
                errmsg=f"Unexpected character: {code[i]!r}",
            )
