import logging
import math
import operator
import sys
from typing import Callable, Iterable, TextIO

from spancalc.errors import CalcRuntimeError, RuntimeErrorKind
from spancalc.interner import Interner
from spancalc.resolver import Operator, Token
from spancalc.span import Span, Spanned
from spancalc.tokenizer import Ident
from spancalc.utils import format_number
from spancalc.value import Float, IdentRef, Null, StackValue

logger = logging.getLogger(__name__)

Variables = dict[int, float]


def ieee_div(a: float, b: float) -> float:
    """Float division that yields inf / -inf / nan for a zero divisor instead of raising"""
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


BINARY_OPERATIONS: dict[Operator, Callable[[float, float], float]] = {
    Operator.ADD: operator.add,
    Operator.SUB: operator.sub,
    Operator.MUL: operator.mul,
    Operator.DIV: ieee_div,
}


class Evaluator:
    """Stack machine executing one line of postfix tokens against the session's variables"""

    def __init__(self, variables: Variables, out: TextIO, interner: Interner | None = None) -> None:
        self.variables = variables
        self.out = out
        self.interner = interner
        self.stack: list[Spanned[StackValue]] = []

    def execute(self, token: Spanned[Token]) -> None:
        value = token.value
        if isinstance(value, float):
            self.stack.append(token.replace(Float(value)))
        elif isinstance(value, Ident):
            self.stack.append(token.replace(IdentRef(value.handle)))
        elif value in BINARY_OPERATIONS:
            right = self._pop(token)
            right_v = self._resolve(right)
            left = self._pop(token)
            left_v = self._resolve(left)
            result = BINARY_OPERATIONS[value](left_v, right_v)
            self.stack.append(Spanned(value=Float(result), span=left.span.merge(right.span).merge(token.span)))
        elif value is Operator.EQUALS:
            self._assign(token)
        elif value is Operator.PRINT:
            self._print(token)
        elif value is Operator.SEMICOLON:
            self._end_statement(token.span)
        else:
            raise TypeError(f"Unexpected token: {value!r}")

    def _assign(self, token: Spanned[Operator]) -> None:
        right = self._pop(token)
        number = self._resolve(right)
        target = self._pop(token)
        if isinstance(target.value, Float):
            raise CalcRuntimeError(
                kind=RuntimeErrorKind.ASSIGNING_TO_EXPRESSION,
                span=target.span,
                errmsg=f"Only a variable can be assigned to, not a {target.value.type_name()}",
            )
        elif isinstance(target.value, Null):
            raise CalcRuntimeError(
                kind=RuntimeErrorKind.ASSIGNING_TO_NULL,
                span=target.span,
                errmsg=f"Cannot assign to {target.value.type_name()}, the statement before has already ended",
            )
        handle = target.value.handle
        self.variables[handle] = number
        logger.debug("Assigned %s = %s", self._name(handle), number)
        self.stack.append(Spanned(value=target.value, span=target.span.merge(right.span).merge(token.span)))

    def _print(self, token: Spanned[Operator]) -> None:
        if not self.stack:
            raise self._malformed(token)
        top = self.stack[-1]
        if isinstance(top.value, Null):
            raise CalcRuntimeError(
                kind=RuntimeErrorKind.ATTEMPTED_TO_PRINT_NULL,
                span=top.span,
                errmsg="Nothing to print",
            )
        self.out.write(f" {format_number(self._resolve(top))}")

    def _end_statement(self, span: Span) -> None:
        if self.stack:
            top = self.stack.pop()
            if isinstance(top.value, IdentRef) and top.value.handle not in self.variables:
                raise self._unassigned(top.value.handle, top.span)
            span = span.merge(top.span)
        while self.stack and isinstance(self.stack[-1].value, Null):
            span = span.merge(self.stack.pop().span)
        self.stack.append(Spanned(value=Null(), span=span))

    def _pop(self, token: Spanned[Operator]) -> Spanned[StackValue]:
        if not self.stack:
            raise self._malformed(token)
        return self.stack.pop()

    def _resolve(self, entry: Spanned[StackValue]) -> float:
        value = entry.value
        if isinstance(value, Float):
            return value.v
        elif isinstance(value, IdentRef):
            if value.handle not in self.variables:
                raise self._unassigned(value.handle, entry.span)
            return self.variables[value.handle]
        else:
            raise CalcRuntimeError(
                kind=RuntimeErrorKind.ATTEMPTED_TO_USE_NULL,
                span=entry.span,
                errmsg=f"{value.type_name()} left by a finished statement has no value to use",
            )

    def _unassigned(self, handle: int, span: Span) -> CalcRuntimeError:
        return CalcRuntimeError(
            kind=RuntimeErrorKind.UNASSIGNED_VARIABLE,
            span=span,
            errmsg=f"Variable {self._name(handle)!r} is not assigned",
        )

    def _malformed(self, token: Spanned[Operator]) -> CalcRuntimeError:
        return CalcRuntimeError(
            kind=RuntimeErrorKind.MALFORMED_EXPRESSION,
            span=token.span,
            errmsg=f"Not enough operands for {token.value}",
        )

    def _name(self, handle: int) -> str:
        if self.interner is None:
            return f"#{handle}"
        return self.interner.lookup(handle)


def evaluate(
    tokens: Iterable[Spanned[Token]],
    variables: Variables,
    out: TextIO | None = None,
    interner: Interner | None = None,
) -> list[Spanned[StackValue]]:
    """Runs one line of resolved tokens, ending it with an implicit ';'.

    Printed values go to `out` (stdout by default). Returns the final stack, normally a single
    Null marker spanning the last statement.
    """
    evaluator = Evaluator(variables, out=out if out is not None else sys.stdout, interner=interner)
    end = 0
    for token in tokens:
        logger.debug("Executing %s", token)
        evaluator.execute(token)
        end = max(end, token.span.end)
    evaluator.execute(Spanned(value=Operator.SEMICOLON, span=Span(end, end)))
    return evaluator.stack
