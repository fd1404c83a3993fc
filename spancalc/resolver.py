"""Reorders the infix token stream of one line into postfix (RPN) execution order.

A shunting-yard engine: values are emitted as soon as they are read, operators wait on a
stack until an operator that binds looser (or as loose, for left associative ones) pushes
them out. Brackets only reshape that stack and never reach the output. Which tokens are
acceptable at a given point is decided by a two-state machine that tracks whether the next
token should start an operand or continue after one.
"""

import enum
from dataclasses import dataclass
from typing import Iterable, Iterator

from spancalc.errors import StructuralError, StructuralErrorKind
from spancalc.span import Span, Spanned
from spancalc.tokenizer import Ident, RawToken, Symbol
from spancalc.utils import PrintableEnum


class Operator(PrintableEnum):
    EQUALS = enum.auto()
    ADD = enum.auto()
    SUB = enum.auto()
    MUL = enum.auto()
    DIV = enum.auto()
    PRINT = enum.auto()
    SEMICOLON = enum.auto()


class Ordering(PrintableEnum):
    """Brackets: above every operator in precedence, closed only by their counterpart"""

    LEFT_PAREN = enum.auto()
    RIGHT_PAREN = enum.auto()


class Associativity(PrintableEnum):
    LEFT = enum.auto()
    RIGHT = enum.auto()


class Expect(PrintableEnum):
    VALUE = enum.auto()
    OPERATOR = enum.auto()


@dataclass(frozen=True)
class OperatorInfo:
    precedence: int
    associativity: Associativity
    arity: int


OPERATOR_TABLE: dict[Operator, OperatorInfo] = {
    Operator.SEMICOLON: OperatorInfo(precedence=0, associativity=Associativity.LEFT, arity=1),
    Operator.EQUALS: OperatorInfo(precedence=1, associativity=Associativity.RIGHT, arity=2),
    Operator.ADD: OperatorInfo(precedence=2, associativity=Associativity.LEFT, arity=2),
    Operator.SUB: OperatorInfo(precedence=2, associativity=Associativity.LEFT, arity=2),
    Operator.MUL: OperatorInfo(precedence=3, associativity=Associativity.LEFT, arity=2),
    Operator.DIV: OperatorInfo(precedence=3, associativity=Associativity.LEFT, arity=2),
    Operator.PRINT: OperatorInfo(precedence=4, associativity=Associativity.RIGHT, arity=1),
}

SYMBOL_OPERATORS = {
    Symbol.EQUALS: Operator.EQUALS,
    Symbol.ADD: Operator.ADD,
    Symbol.SUB: Operator.SUB,
    Symbol.MUL: Operator.MUL,
    Symbol.DIV: Operator.DIV,
    Symbol.PRINT: Operator.PRINT,
    Symbol.SEMICOLON: Operator.SEMICOLON,
}

BINARY_SYMBOLS = {Symbol.EQUALS, Symbol.ADD, Symbol.SUB, Symbol.MUL, Symbol.DIV, Symbol.SEMICOLON}

Value = float | Ident
Token = Value | Operator
StackEntry = Operator | Ordering


def must_precede(stacked: Operator, incoming: Operator, table: dict[Operator, OperatorInfo] = OPERATOR_TABLE) -> bool:
    """Whether an operator already on the stack has to be emitted before `incoming` is pushed"""
    stacked_info = table[stacked]
    incoming_info = table[incoming]
    if stacked_info.precedence != incoming_info.precedence:
        return stacked_info.precedence > incoming_info.precedence
    return incoming_info.associativity is Associativity.LEFT


class Resolver:
    """Incremental resolver state for a single line.

    Feed raw tokens with `push`, each call returning the resolved tokens that became ready;
    `finish` flushes the rest once input is exhausted.
    """

    def __init__(self, table: dict[Operator, OperatorInfo] = OPERATOR_TABLE) -> None:
        self.table = table
        self.expect = Expect.VALUE
        self.stack: list[Spanned[StackEntry]] = []
        # spans of the operands produced so far, used to widen operator spans on emission
        self._operand_spans: list[Span] = []

    def push(self, token: Spanned[RawToken]) -> list[Spanned[Token]]:
        value = token.value
        if self.expect is Expect.VALUE:
            if isinstance(value, (float, Ident)):
                self.expect = Expect.OPERATOR
                self._operand_spans.append(token.span)
                return [token]
            elif value is Symbol.LEFT_PAREN:
                self.stack.append(token.replace(Ordering.LEFT_PAREN))
                return []
            elif value is Symbol.PRINT or value is Symbol.SEMICOLON:
                return self._push_operator(token.replace(SYMBOL_OPERATORS[value]))
            else:
                raise StructuralError(
                    kind=StructuralErrorKind.EXPECTED_EXPRESSION,
                    span=token.span,
                    errmsg=f"Expected an expression, found {value}",
                )
        else:
            if value in BINARY_SYMBOLS:
                self.expect = Expect.VALUE
                return self._push_operator(token.replace(SYMBOL_OPERATORS[value]))
            elif value is Symbol.RIGHT_PAREN:
                return self._close_bracket(token.replace(Ordering.RIGHT_PAREN))
            elif value is Symbol.PRINT:
                # postfix print of the operand just completed
                return self._push_operator(token.replace(Operator.PRINT))
            else:
                raise StructuralError(
                    kind=StructuralErrorKind.DID_NOT_EXPECT_EXPRESSION,
                    span=token.span,
                    errmsg=f"Expected an operator, found {_describe(value)}",
                )

    def finish(self) -> list[Spanned[Token]]:
        result: list[Spanned[Token]] = []
        while self.stack:
            entry = self.stack.pop()
            if isinstance(entry.value, Ordering):
                raise StructuralError(
                    kind=StructuralErrorKind.UNCLOSED_LEFT_BRACKET,
                    span=entry.span,
                    errmsg="Unclosed bracket",
                )
            result.append(self._emit(entry.value, entry.span))
        return result

    def _push_operator(self, operator: Spanned[Operator]) -> list[Spanned[Token]]:
        result = []
        while self.stack:
            top = self.stack[-1]
            if not isinstance(top.value, Operator) or not must_precede(top.value, operator.value, self.table):
                break
            self.stack.pop()
            result.append(self._emit(top.value, top.span))
        if operator.value is Operator.SEMICOLON:
            # nothing binds looser, so the statement ends right here
            result.append(self._emit(operator.value, operator.span))
        else:
            self.stack.append(operator)
        return result

    def _close_bracket(self, right_paren: Spanned[Ordering]) -> list[Spanned[Token]]:
        result = []
        while self.stack:
            top = self.stack.pop()
            if isinstance(top.value, Ordering):
                if self._operand_spans:
                    group = self._operand_spans.pop()
                    self._operand_spans.append(group.merge(top.span).merge(right_paren.span))
                return result
            result.append(self._emit(top.value, top.span))
        raise StructuralError(
            kind=StructuralErrorKind.UNCLOSED_RIGHT_BRACKET,
            span=right_paren.span,
            errmsg="Closing bracket has no matching opening bracket",
        )

    def _emit(self, operator: Operator, span: Span) -> Spanned[Token]:
        for _ in range(min(self.table[operator].arity, len(self._operand_spans))):
            span = span.merge(self._operand_spans.pop())
        self._operand_spans.append(span)
        return Spanned(value=operator, span=span)


def _describe(value: RawToken) -> str:
    if isinstance(value, Ident):
        return "identifier"
    elif isinstance(value, float):
        return "number"
    return str(value)


def resolve(tokens: Iterable[Spanned[RawToken]]) -> Iterator[Spanned[Token]]:
    """Lazily yields the postfix order of `tokens`; raises StructuralError on malformed structure"""
    resolver = Resolver()
    for token in tokens:
        yield from resolver.push(token)
    yield from resolver.finish()
