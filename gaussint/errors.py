class InexactDivisionError(ArithmeticError):
    """The divisor does not divide the dividend exactly (nonzero remainder)."""


class NonUnitInverseError(ZeroDivisionError):
    """Only the four units 1, -1, i and -i have a multiplicative inverse in Z[i]."""
