from __future__ import annotations


class SternBrocotError(Exception):
    """Base class for all failures raised by this package."""


class DivideByZeroError(SternBrocotError, ZeroDivisionError):
    def __init__(self, msg: str, operand):
        """A zero denominator was supplied to a constructor or a division.

        Args:
            msg: The error message.
            operand: The zero denominator, or the rational divisor.
        """
        super().__init__(msg)
        self.operand = operand


class InvalidBoundError(SternBrocotError, ValueError):
    def __init__(self, msg: str, bound):
        super().__init__(msg)
        self.bound = bound


class NonFiniteInputError(SternBrocotError, ValueError):
    def __init__(self, msg: str, value):
        super().__init__(msg)
        self.value = value


class RationalOverflowError(SternBrocotError, OverflowError):
    def __init__(self, msg: str, value: int, operands: tuple = (), dtype=None):
        """An integer left the representable range of the integer domain.

        Args:
            msg: The error message.
            value: The out-of-range result.
            operands: The operands that produced `value`.
            dtype: The numpy integer dtype whose range was exceeded.
        """
        super().__init__(msg)
        self.value = value
        self.operands = tuple(operands)
        self.dtype = dtype
