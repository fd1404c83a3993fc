import io
import logging
from typing import TextIO

from spancalc.interner import Interner
from spancalc.resolver import resolve
from spancalc.runtime import Variables, evaluate
from spancalc.tokenizer import tokenize

logger = logging.getLogger(__name__)


class Session:
    """Interner and variables shared by every line run in one calculator session"""

    def __init__(self) -> None:
        self.interner = Interner()
        self.variables: Variables = {}

    def run(self, code: str, out: TextIO | None = None) -> None:
        """Lexes, resolves and evaluates one line, raising the first CalcError encountered.

        Assignments made before the error stay in effect.
        """
        logger.debug("Running %r", code)
        tokens = resolve(tokenize(code, self.interner))
        evaluate(tokens, self.variables, out=out, interner=self.interner)

    def run_capturing(self, code: str) -> str:
        """Same as `run`, returning what the line printed"""
        out = io.StringIO()
        self.run(code, out=out)
        return out.getvalue()

    def get(self, name: str) -> float | None:
        handle = self.interner.handle_of(name)
        if handle is None:
            return None
        return self.variables.get(handle)

    def named_variables(self) -> dict[str, float]:
        return {self.interner.lookup(handle): value for handle, value in self.variables.items()}
