from beartype.vale import Is
from beartype.vale._core._valecore import BeartypeValidator


def ge(val: float) -> BeartypeValidator:

    def _ge(x: object, val: float) -> bool:
        return isinstance(x, int | float) and x >= val

    return Is[lambda x: _ge(x, val)]


def all_ge(val: float) -> BeartypeValidator:

    def _all_ge(x: object, val: float) -> bool:
        return all(isinstance(i, int) and i >= val for i in x)

    return Is[lambda x: _all_ge(x, val)]
