import logging

from dataclasses import dataclass
from functools import cache
from typing import ClassVar, Iterator, Union

from sympy import factorint, isprime  # type: ignore

from gaussint.errors import InexactDivisionError, NonUnitInverseError
from gaussint.utils import round_div_ties_away_from_zero, sqrt_minus_one

logger = logging.getLogger(__name__)

OTHER_OP_TYPES = Union[int, float]
_OTHER_OP_TYPES = (int, float)  # mypyc-friendly for isinstance
OP_TYPES = Union["gaussianint", OTHER_OP_TYPES]


# TODO: Once Py3.9 support has been dropped, add slots=True
# @dataclass(frozen=True, slots=True)
@dataclass(frozen=True)
class GaussianFactorization:
    """
    Unique factorization (deterministic):

        x = unit * P1 * P2 * ... * Pk

    - unit is one of 1, i, -1, -i.
    - Pi are Gaussian primes in canonical form (re > 0, im >= 0),
      sorted by (norm, re, im) and repeated according to multiplicity.
    """
    unit: "gaussianint"
    primes: tuple["gaussianint", ...]

    def prod(self) -> "gaussianint":
        """Recreate the number"""
        result = self.unit
        for p in self.primes:
            result = result * p

        return result


class gaussianint:
    """
    Gaussian integer re + im*i with exact (unbounded) integer parts.

    Values are immutable by convention: every operation returns a new instance.

    Notes:
      - The norm N(x) = re^2 + im^2 is the Euclidean size; abs(x) returns it.
      - Division rounds the exact rational quotient to the nearest lattice point,
        ties away from zero, which also fixes the system of residues.
      - The canonical associate of x lies in {0} ∪ {re > 0, im >= 0}.
    """

    __slots__ = ("re", "im")

    re: int
    im: int

    UNITS: ClassVar[list["gaussianint"]] = []

    def __init__(self, re: Union[int, float, "gaussianint"] = 0, im: int = 0) -> None:
        """
        Initialize a gaussianint.

        Args:
            re:
                The real part, or an existing gaussianint to copy (im must then be 0).
            im:
                The imaginary part.

        Raises:
            ValueError: If copying a gaussianint and an imaginary part is also given.
        """
        if isinstance(re, gaussianint):
            if im:
                raise ValueError("Cannot give an imaginary part when copying a gaussianint")
            self.re, self.im = re.re, re.im
            return

        self.re, self.im = int(re), int(im)

    # region constructors / conversions
    @classmethod
    def _make(cls, re: int, im: int) -> "gaussianint":
        """Construct a new value of *this* conceptual type from its two parts."""
        return cls(re, im)

    @classmethod
    def _from_obj(cls, n: OP_TYPES) -> "gaussianint":
        """Convert a random object to a gaussianint"""
        if isinstance(n, _OTHER_OP_TYPES):
            return cls._make(int(n), 0)

        if isinstance(n, gaussianint):
            return n

        return NotImplemented

    @classmethod
    def _coerce(cls, n: OP_TYPES) -> "gaussianint":
        """Like _from_obj, but raise for unsupported types (for the named, non-operator methods)."""
        other = cls._from_obj(n)
        if not isinstance(other, gaussianint):
            raise TypeError(f"Unsupported operand type for gaussianint: {type(n)}")

        return other

    @classmethod
    def from_complex(cls, c: complex) -> "gaussianint":
        """
        Convert a Python complex with integral parts.

        Raises:
            ValueError: If either part is not integral.
        """
        if c.real != int(c.real) or c.imag != int(c.imag):
            raise ValueError(f"{c!r} is not a Gaussian integer")

        return cls._make(int(c.real), int(c.imag))

    def __complex__(self) -> complex:
        return complex(self.re, self.im)
    # endregion

    def conjugate(self) -> "gaussianint":
        """Complex conjugation: re+im*i -> re-im*i."""
        return self._make(self.re, -self.im)

    def norm(self) -> int:
        """N(re+im*i) = re^2 + im^2, always a non-negative integer."""
        return self.re * self.re + self.im * self.im

    def __add__(self, other: OP_TYPES) -> "gaussianint":
        if isinstance(other, _OTHER_OP_TYPES):
            other = self._from_obj(other)

        if isinstance(other, gaussianint):
            return self._make(self.re + other.re, self.im + other.im)

        return NotImplemented

    def __radd__(self, other: OTHER_OP_TYPES) -> "gaussianint":
        return self.__add__(other)

    def __sub__(self, other: OP_TYPES) -> "gaussianint":
        if isinstance(other, _OTHER_OP_TYPES):
            other = self._from_obj(other)

        if isinstance(other, gaussianint):
            return self._make(self.re - other.re, self.im - other.im)

        return NotImplemented

    def __rsub__(self, other: OTHER_OP_TYPES) -> "gaussianint":
        return self.__neg__().__add__(other)

    def __neg__(self) -> "gaussianint":
        return self._make(-self.re, -self.im)

    def __pos__(self) -> "gaussianint":
        return self._make(self.re, self.im)

    def __mul__(self, other: OP_TYPES) -> "gaussianint":
        if isinstance(other, _OTHER_OP_TYPES):
            other = self._from_obj(other)

        if not isinstance(other, gaussianint):
            return NotImplemented

        # (a+bi)(c+di) = (ac-bd) + (ad+bc)i
        a, b = self.re, self.im
        c, d = other.re, other.im
        return self._make(a * c - b * d, a * d + b * c)

    def __rmul__(self, other: OTHER_OP_TYPES) -> "gaussianint":
        return self.__mul__(other)

    def __pow__(self, exp: int) -> "gaussianint":
        e = int(exp)
        base: gaussianint = self
        if e < 0:
            # Raises NonUnitInverseError unless self is a unit
            base = self.inverse()
            e = -e

        result = gaussianint(1, 0)  # multiplicative identity
        while e:
            if e & 1:
                result = result * base

            e >>= 1
            if e:
                base = base * base

        return result

    # region Euclidean division (Z[i] is norm-Euclidean)
    def divrem(self, other: OP_TYPES) -> tuple["gaussianint", "gaussianint"]:
        """
        Nearest-lattice division.

            self = other * q + r    with    N(r) <= N(other) / 2 < N(other)

        The exact quotient self/other = self * conj(other) / N(other) is rounded
        component-wise to the nearest integer, ties away from zero.

        Returns:
            (q, r)

        Raises:
            ZeroDivisionError: if other == 0
            TypeError: if other is an unsupported type
        """
        other = self._coerce(other)

        n = abs(other)
        if n == 0:
            raise ZeroDivisionError("Gaussian integer division by zero")

        num = self * other.conjugate()
        q = self._make(round_div_ties_away_from_zero(num.re, n),
                       round_div_ties_away_from_zero(num.im, n))
        return q, self - other * q

    def __divmod__(self, other: OP_TYPES) -> tuple["gaussianint", "gaussianint"]:
        if isinstance(other, _OTHER_OP_TYPES):
            other = self._from_obj(other)

        if not isinstance(other, gaussianint):
            return NotImplemented

        return self.divrem(other)

    def __rdivmod__(self, other: OTHER_OP_TYPES) -> tuple["gaussianint", "gaussianint"]:
        if isinstance(other, _OTHER_OP_TYPES):
            return self._from_obj(other).divrem(self)

        return NotImplemented

    def floordiv(self, other: OP_TYPES) -> "gaussianint":
        """Quotient of divrem"""
        q, _ = self.divrem(other)
        return q

    def mod(self, other: OP_TYPES) -> "gaussianint":
        """Remainder of divrem"""
        _, r = self.divrem(other)
        return r

    def __floordiv__(self, other: OP_TYPES) -> "gaussianint":
        if isinstance(other, _OTHER_OP_TYPES):
            other = self._from_obj(other)

        if not isinstance(other, gaussianint):
            return NotImplemented

        return self.floordiv(other)

    def __rfloordiv__(self, other: OTHER_OP_TYPES) -> "gaussianint":
        if isinstance(other, _OTHER_OP_TYPES):
            return self._from_obj(other).floordiv(self)

        return NotImplemented

    def __mod__(self, other: OP_TYPES) -> "gaussianint":
        if isinstance(other, _OTHER_OP_TYPES):
            other = self._from_obj(other)

        if not isinstance(other, gaussianint):
            return NotImplemented

        return self.mod(other)

    def __rmod__(self, other: OTHER_OP_TYPES) -> "gaussianint":
        if isinstance(other, _OTHER_OP_TYPES):
            return self._from_obj(other).mod(self)

        return NotImplemented

    def divexact(self, other: OP_TYPES, *, check: bool = True) -> "gaussianint":
        """
        Exact division.

        Args:
            other: The divisor.
            check: If False, skip the remainder check. Only for callers that have
                already established that other divides self; otherwise the result
                is just the rounded quotient.

        Returns:
            gaussianint: q with self == other * q.

        Raises:
            ZeroDivisionError: if other == 0
            InexactDivisionError: if other does not divide self (and check is True)
        """
        q, r = self.divrem(other)
        if check and r:
            raise InexactDivisionError(f"{other!r} does not divide {self!r}")

        return q

    def __truediv__(self, other: OP_TYPES) -> "gaussianint":
        # / is exact division in this domain, // and % are the Euclidean pair
        if isinstance(other, _OTHER_OP_TYPES):
            other = self._from_obj(other)

        if not isinstance(other, gaussianint):
            return NotImplemented

        return self.divexact(other)

    def __rtruediv__(self, other: OTHER_OP_TYPES) -> "gaussianint":
        if isinstance(other, _OTHER_OP_TYPES):
            return self._from_obj(other).divexact(self)

        return NotImplemented

    def is_divisible_by(self, other: OP_TYPES) -> bool:
        """True iff other divides self exactly (self % other == 0)."""
        return not self.mod(other)
    # endregion

    def __abs__(self) -> int:
        """The norm, re^2 + im^2."""
        return self.norm()

    def __bool__(self) -> bool:
        return (self.re | self.im) != 0

    def __iter__(self) -> Iterator[int]:
        return iter((self.re, self.im))

    def __len__(self) -> int:
        return 2

    def __getitem__(self, idx: int) -> int:
        if idx == 0:
            return self.re
        if idx == 1:
            return self.im
        raise IndexError("gaussianint index out of range (valid: 0..1)")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, gaussianint):
            return False

        return self.re == other.re and self.im == other.im

    def __hash__(self) -> int:
        return hash((self.re, self.im))

    def __repr__(self) -> str:
        return f"({self.re}, {self.im})"

    def __str__(self) -> str:
        re, im = self.re, self.im
        if im == 0:
            return str(re)

        mag = -im if im < 0 else im
        mag_str = "" if mag == 1 else str(mag)  # 1i -> i
        if re == 0:
            return f"{'-' if im < 0 else ''}{mag_str}i"

        return f"{re}{'-' if im < 0 else '+'}{mag_str}i"

    # region Predicates / units
    def is_zero(self) -> bool:
        return self.re == 0 and self.im == 0

    def is_one(self) -> bool:
        return self.re == 1 and self.im == 0

    def is_unit(self) -> bool:
        """True iff self is one of 1, -1, i, -i (the elements of norm 1)."""
        return self.norm() == 1

    def inverse(self) -> "gaussianint":
        """
        Multiplicative inverse, defined only for units: 1↔1, -1↔-1, i↔-i.

        Raises:
            NonUnitInverseError: If self is not a unit (including 0).
        """
        if not self.is_unit():
            raise NonUnitInverseError(f"{self!r} is not a unit of Z[i]")

        # u^{-1} == conjugate(u) for units
        return self.conjugate()

    def canonical_unit(self) -> "gaussianint":
        """
        The unit u such that self * u^{-1} is the canonical associate of self.

        Representatives are 0 and the first quadrant with the positive real axis
        included and the positive imaginary axis excluded (re > 0, im >= 0):

            re > 0,  im >= 0  ->  1
            re <= 0, im > 0   ->  i
            re < 0,  im <= 0  -> -1
            re >= 0, im < 0   -> -i
            0                 ->  1

        Returns:
            gaussianint: The canonical unit.
        """
        re, im = self.re, self.im
        if re == 0 and im == 0:
            return gaussianint(1, 0)
        if re > 0 and im >= 0:
            return gaussianint(1, 0)
        if re <= 0 and im > 0:
            return gaussianint(0, 1)
        if re < 0 and im <= 0:
            return gaussianint(-1, 0)
        return gaussianint(0, -1)

    def normalize(self) -> "gaussianint":
        """The canonical associate: self * canonical_unit()^{-1}."""
        return self * self.canonical_unit().inverse()

    def canonical(self) -> "gaussianint":
        """Alias of normalize"""
        return self.normalize()

    def is_canonical(self) -> bool:
        """True iff self is 0 or lies in re > 0, im >= 0."""
        return self.is_zero() or (self.re > 0 and self.im >= 0)

    def associates(self) -> list["gaussianint"]:
        """self * u for each of the four units, in the order of UNITS."""
        return [self * u for u in gaussianint.UNITS]
    # endregion

    # region GCD
    def gcd(self,
            other: OP_TYPES,
            *,
            normalize: bool = True) -> "gaussianint":
        """
        GCD via the Euclidean algorithm.

        gcd(x, 0) is x and gcd(0, 0) is 0; no division by zero ever happens.

        Args:
            other: The second argument.
            normalize: Return the canonical associate of the gcd (default), rather than
                the last nonzero remainder.

        Returns:
            gaussianint: The gcd.

        Raises:
            ArithmeticError: If the remainder norm fails to decrease.
        """
        a = self
        b = self._coerce(other)

        if b:
            last = abs(b)
            while b:
                a, b = b, a.mod(b)

                if b:
                    nb = abs(b)
                    if nb >= last:
                        raise ArithmeticError("Euclidean descent failed (non-decreasing remainder norm)")
                    last = nb

        return a.normalize() if normalize else a

    def xgcd(self,
             other: OP_TYPES,
             *,
             normalize: bool = True) -> tuple["gaussianint", "gaussianint", "gaussianint"]:
        """
        Extended Euclidean algorithm.

        Returns:
            (g, s, t) with g == s*self + t*other, g a gcd of self and other.
            If normalize is set, g is the canonical gcd and s, t are scaled with it.
        """
        old_r, r = self, self._coerce(other)
        old_s, s = gaussianint(1, 0), gaussianint(0, 0)
        old_t, t = gaussianint(0, 0), gaussianint(1, 0)

        while r:
            quotient = old_r.floordiv(r)
            old_r, r = r, old_r - quotient * r
            old_s, s = s, old_s - quotient * s
            old_t, t = t, old_t - quotient * t

        if normalize:
            u = old_r.canonical_unit().inverse()
            old_r, old_s, old_t = old_r * u, old_s * u, old_t * u

        return old_r, old_s, old_t

    def extended_gcd(self,
                     other: OP_TYPES,
                     *,
                     normalize: bool = True) -> tuple["gaussianint", "gaussianint", "gaussianint"]:
        """Alias of xgcd"""
        return self.xgcd(other, normalize=normalize)

    def lcm(self, other: OP_TYPES) -> "gaussianint":
        """Canonical least common multiple; 0 if either argument is 0."""
        other = self._coerce(other)
        if not self or not other:
            return gaussianint(0, 0)

        g = self.gcd(other, normalize=False)
        return (self * other).divexact(g, check=False).normalize()
    # endregion

    # region Factoring
    @staticmethod
    @cache
    def _prime_over_rational(p: int) -> tuple["gaussianint", ...]:
        """
        The distinct canonical Gaussian primes dividing the rational prime p.

            p == 2:          (1+i)              ramified, 2 = -i * (1+i)^2
            p ≡ 3 (mod 4):   (p,)               inert, norm p^2
            p ≡ 1 (mod 4):   (π, conj(π))       split, π = gcd(p, s+i) with s^2 ≡ -1

        Raises:
            ArithmeticError: If the split prime does not come out with norm p.
        """
        if p == 2:
            return (gaussianint(1, 1),)

        if p % 4 == 3:
            return (gaussianint(p, 0),)

        s = sqrt_minus_one(p)
        pi = gaussianint(p, 0).gcd(gaussianint(s, 1))
        if abs(pi) != p:
            raise ArithmeticError("prime construction failed: gcd did not have norm p")

        pi_bar = pi.conjugate().normalize()
        return tuple(sorted((pi, pi_bar), key=lambda x: (x.re, x.im)))

    def factor(self) -> GaussianFactorization:
        """
        Unique factorization into canonical Gaussian primes.

        Returns:
            GaussianFactorization: unit and sorted primes with self == unit * prod(primes).

        Raises:
            ValueError: If self is 0.
            ArithmeticError: If the cofactor left over is not a unit, indicating a bug.
        """
        if not self:
            raise ValueError("0 has no factorization")

        nf = factorint(self.norm())
        logger.debug("factoring %r: norm factors %r", self, nf)

        q = self
        primes: list[gaussianint] = []
        for p in sorted(int(k) for k in nf):
            for pi in gaussianint._prime_over_rational(p):
                while True:
                    qq, r = q.divrem(pi)
                    if r:
                        break
                    q = qq
                    primes.append(pi)

        if not q.is_unit():
            raise ArithmeticError("remaining cofactor is not a unit; factorization incomplete")

        primes.sort(key=lambda x: (x.norm(), x.re, x.im))
        return GaussianFactorization(unit=q, primes=tuple(primes))

    def is_prime(self) -> bool:
        """
        Gaussian primality: the norm is a rational prime, or self is an associate
        of a rational prime p ≡ 3 (mod 4).
        """
        if isprime(self.norm()):
            return True

        if self.re != 0 and self.im != 0:
            return False

        p = abs(self.re) + abs(self.im)
        return p % 4 == 3 and bool(isprime(p))
    # endregion


if not gaussianint.UNITS:
    # 1, i, -1, -i: successive rotations by i
    gaussianint.UNITS = [gaussianint(1, 0), gaussianint(0, 1), gaussianint(-1, 0), gaussianint(0, -1)]


class gaussacc:
    """
    Mutable accumulator for sums and products of Gaussian integers.

    Each *_in_place method mutates and returns self. The accumulator is
    single-writer: it belongs to one call frame and must not be shared between
    threads. Call value() to get an immutable gaussianint out.
    """

    __slots__ = ("re", "im")

    re: int
    im: int

    def __init__(self, start: OP_TYPES = 0) -> None:
        x = gaussianint._coerce(start)
        self.re, self.im = x.re, x.im

    def add_in_place(self, x: OP_TYPES) -> "gaussacc":
        y = gaussianint._coerce(x)
        self.re += y.re
        self.im += y.im
        return self

    def sub_in_place(self, x: OP_TYPES) -> "gaussacc":
        y = gaussianint._coerce(x)
        self.re -= y.re
        self.im -= y.im
        return self

    def mul_in_place(self, x: OP_TYPES) -> "gaussacc":
        y = gaussianint._coerce(x)
        self.re, self.im = self.re * y.re - self.im * y.im, self.re * y.im + self.im * y.re
        return self

    def addmul_in_place(self, x: OP_TYPES, y: OP_TYPES) -> "gaussacc":
        """self += x * y without building the intermediate product."""
        a = gaussianint._coerce(x)
        b = gaussianint._coerce(y)
        self.re += a.re * b.re - a.im * b.im
        self.im += a.re * b.im + a.im * b.re
        return self

    def reset(self) -> "gaussacc":
        self.re, self.im = 0, 0
        return self

    def value(self) -> gaussianint:
        return gaussianint(self.re, self.im)

    def __repr__(self) -> str:
        return f"gaussacc({self.re}, {self.im})"


def divrem(a: "gaussianint", b: OP_TYPES) -> tuple["gaussianint", "gaussianint"]:
    """Simply a helper method to match the ring-plugin naming"""
    return a.divrem(b)


def mod(a: "gaussianint", b: OP_TYPES) -> "gaussianint":
    """Simply a helper method to match the ring-plugin naming"""
    return a.mod(b)


def floordiv(a: "gaussianint", b: OP_TYPES) -> "gaussianint":
    """Simply a helper method to match the ring-plugin naming"""
    return a.floordiv(b)


def gcd(a: "gaussianint", b: OP_TYPES, *, normalize: bool = True) -> "gaussianint":
    """Simply a helper method to match existing Python gcd syntax"""
    return a.gcd(b, normalize=normalize)


def extended_gcd(a: "gaussianint",
                 b: OP_TYPES,
                 *,
                 normalize: bool = True) -> tuple["gaussianint", "gaussianint", "gaussianint"]:
    """Simply a helper method for xgcd"""
    return a.xgcd(b, normalize=normalize)


def lcm(a: "gaussianint", b: OP_TYPES) -> "gaussianint":
    """Simply a helper method to match existing Python lcm syntax"""
    return a.lcm(b)


def divides(a: "gaussianint", b: OP_TYPES) -> bool:
    """True iff b divides a, i.e. mod(a, b) is zero."""
    return a.is_divisible_by(b)


def divexact(a: "gaussianint", b: OP_TYPES, *, check: bool = True) -> "gaussianint":
    """Simply a helper method for divexact"""
    return a.divexact(b, check=check)


def canonical_unit(a: "gaussianint") -> "gaussianint":
    """Simply a helper method for canonical_unit"""
    return a.canonical_unit()
