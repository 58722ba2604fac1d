from gaussint.errors import InexactDivisionError, NonUnitInverseError
from gaussint.gauss import (
    GaussianFactorization,
    canonical_unit,
    divexact,
    divides,
    divrem,
    extended_gcd,
    floordiv,
    gaussacc,
    gaussianint,
    gcd,
    lcm,
    mod,
)
from gaussint.ring import ZZI, EuclideanRingElement, GaussianIntegerRing

__all__ = [
    "EuclideanRingElement",
    "GaussianFactorization",
    "GaussianIntegerRing",
    "InexactDivisionError",
    "NonUnitInverseError",
    "ZZI",
    "canonical_unit",
    "divexact",
    "divides",
    "divrem",
    "extended_gcd",
    "floordiv",
    "gaussacc",
    "gaussianint",
    "gcd",
    "lcm",
    "mod",
]
