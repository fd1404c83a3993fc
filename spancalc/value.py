import abc
from dataclasses import dataclass


class StackValue(abc.ABC):
    """An entry of the evaluator stack"""

    @classmethod
    @abc.abstractmethod
    def type_name(cls) -> str:
        ...


@dataclass(frozen=True)
class Float(StackValue):
    v: float

    @classmethod
    def type_name(cls) -> str:
        return "Float"


@dataclass(frozen=True)
class IdentRef(StackValue):
    """Identifier not yet looked up, so that it can still be assigned to"""

    handle: int

    @classmethod
    def type_name(cls) -> str:
        return "Identifier"


@dataclass(frozen=True)
class Null(StackValue):
    """Left behind by a finished statement: there is no value to carry over"""

    @classmethod
    def type_name(cls) -> str:
        return "Null"
