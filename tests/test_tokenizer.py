import pytest

from spancalc.errors import LexError, LexErrorKind
from spancalc.interner import Interner
from spancalc.span import Span, Spanned
from spancalc.tokenizer import Ident, RawToken, Symbol, tokenize


def _tokens(code: str, interner: Interner | None = None) -> list[Spanned[RawToken]]:
    return list(tokenize(code, interner if interner is not None else Interner()))


def test_tokenize_assignment() -> None:
    interner = Interner()
    tokens = _tokens("a = 1 + 2\n", interner)
    a = Ident(interner.intern("a"))
    assert tokens == [
        Spanned(a, Span(0, 1)),
        Spanned(Symbol.EQUALS, Span(2, 3)),
        Spanned(1.0, Span(4, 5)),
        Spanned(Symbol.ADD, Span(6, 7)),
        Spanned(2.0, Span(8, 9)),
    ]


@pytest.mark.parametrize(
    "code, expected_values",
    [
        pytest.param("", []),
        pytest.param("   \t\n", []),
        pytest.param("=+-*/()%;", list(Symbol)),
        pytest.param("12.5", [12.5]),
        pytest.param("3.", [3.0]),
        pytest.param("007", [7.0]),
        pytest.param("1e5", [1.0, Ident(0), 5.0]),
        pytest.param("2x", [2.0, Ident(0)]),
        pytest.param("x2", [Ident(0), 2.0]),
        pytest.param("foo bar foo", [Ident(0), Ident(1), Ident(0)]),
        pytest.param("Foo foo", [Ident(0), Ident(1)]),
        pytest.param("%(x)", [Symbol.PRINT, Symbol.LEFT_PAREN, Ident(0), Symbol.RIGHT_PAREN]),
    ],
)
def test_tokenize_values(code: str, expected_values: list[RawToken]) -> None:
    assert [t.value for t in _tokens(code)] == expected_values


def test_tokenize_spans() -> None:
    assert [t.span for t in _tokens("  abc = 12.25;")] == [Span(2, 5), Span(6, 7), Span(8, 13), Span(13, 14)]


def test_interning_is_shared_between_lines() -> None:
    interner = Interner()
    first = _tokens("x = y", interner)
    second = _tokens("y + x", interner)
    assert first[0].value == second[2].value
    assert first[2].value == second[0].value
    assert interner.lookup(first[0].value.handle) == "x"
    assert len(interner) == 2
    assert "x" in interner and "z" not in interner


@pytest.mark.parametrize(
    "code, expected_kind, expected_span",
    [
        pytest.param("1.2.3", LexErrorKind.INVALID_NUMBER_LITERAL, Span(0, 5)),
        pytest.param("a = 1..", LexErrorKind.INVALID_NUMBER_LITERAL, Span(4, 7)),
        pytest.param("a $ b", LexErrorKind.UNEXPECTED_CHARACTER, Span(2, 3)),
        pytest.param(".5", LexErrorKind.UNEXPECTED_CHARACTER, Span(0, 1)),
        pytest.param("a_b", LexErrorKind.UNEXPECTED_CHARACTER, Span(1, 2)),
        pytest.param("2 ^ 3", LexErrorKind.UNEXPECTED_CHARACTER, Span(2, 3)),
    ],
)
def test_tokenize_errors(code: str, expected_kind: LexErrorKind, expected_span: Span) -> None:
    with pytest.raises(LexError) as exc_info:
        _tokens(code)
    assert exc_info.value.kind is expected_kind
    assert exc_info.value.span == expected_span


def test_tokenize_is_lazy() -> None:
    tokens = tokenize("1 + $", Interner())
    assert next(tokens).value == 1.0
    assert next(tokens).value is Symbol.ADD
    with pytest.raises(LexError):
        next(tokens)
