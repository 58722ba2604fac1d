from random import Random
from typing import Any, Optional, Protocol, TypeVar, Union, runtime_checkable

from gaussint.gauss import gaussianint

E = TypeVar("E", bound="EuclideanRingElement")


@runtime_checkable
class EuclideanRingElement(Protocol):
    """
    What a generic Euclidean-domain matrix engine (HNF/SNF row and column reduction)
    needs from the elements it works on.

    gaussianint implements this; so could any other exact Euclidean domain.
    """

    def __add__(self: E, other: E) -> E: ...

    def __sub__(self: E, other: E) -> E: ...

    def __mul__(self: E, other: E) -> E: ...

    def __neg__(self: E) -> E: ...

    def __eq__(self, other: object) -> bool: ...

    def __hash__(self) -> int: ...

    def is_zero(self) -> bool: ...

    def is_one(self) -> bool: ...

    def is_unit(self) -> bool: ...

    def divrem(self: E, other: E) -> tuple[E, E]: ...

    def mod(self: E, other: E) -> E: ...

    def floordiv(self: E, other: E) -> E: ...

    def gcd(self: E, other: E) -> E: ...

    def xgcd(self: E, other: E) -> tuple[E, E, E]: ...

    def is_divisible_by(self: E, other: E) -> bool: ...

    def divexact(self: E, other: E) -> E: ...

    def canonical_unit(self: E) -> E: ...


class GaussianIntegerRing:
    """
    The parent object for Z[i].

    There is exactly one such ring, so elements do not carry a reference to it;
    this object only answers the ring-level questions (identities, metadata, random
    elements) a generic algorithm asks. Use the module-level ZZI instance.
    """

    is_domain = True
    is_exact = True

    def __call__(self, re: Union[int, gaussianint] = 0, im: int = 0) -> gaussianint:
        return gaussianint(re, im)

    def __repr__(self) -> str:
        return "Ring of Gaussian integers"

    def __contains__(self, x: Any) -> bool:
        return isinstance(x, gaussianint)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, GaussianIntegerRing)

    def __hash__(self) -> int:
        return hash(GaussianIntegerRing)

    @staticmethod
    def zero() -> gaussianint:
        return gaussianint(0, 0)

    @staticmethod
    def one() -> gaussianint:
        return gaussianint(1, 0)

    @staticmethod
    def gen() -> gaussianint:
        """The imaginary unit i"""
        return gaussianint(0, 1)

    @staticmethod
    def units() -> list[gaussianint]:
        return list(gaussianint.UNITS)

    @staticmethod
    def characteristic() -> int:
        return 0

    @staticmethod
    def base_ring() -> type:
        """Z[i] is treated as a Z-algebra"""
        return int

    @staticmethod
    def random_element(bound: int = 2 ** 63, rng: Optional[Random] = None) -> gaussianint:
        """
        Pseudo-random element with both parts uniform in [-bound, bound].

        Meant for property testing of generic algorithms; not cryptographic.
        """
        if bound < 0:
            raise ValueError("bound must be >= 0")

        if rng is None:
            rng = Random()

        return gaussianint(rng.randint(-bound, bound), rng.randint(-bound, bound))


ZZI = GaussianIntegerRing()
