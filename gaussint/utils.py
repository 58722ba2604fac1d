from functools import cache
from typing import Optional


def round_div_ties_away_from_zero(a: int, b: int) -> int:
    """Round a/b to nearest integer; ties go away from zero. b must be > 0."""
    if b <= 0:
        raise ValueError("b must be > 0")

    if a >= 0:
        return (a + (b // 2)) // b

    # a < 0
    return -((-a + (b // 2)) // b)


def mod_sqrt_prime(n: int, p: int) -> Optional[int]:
    """Return x such that x*x % p == n % p, or None if no sqrt exists. p must be prime."""
    n %= p
    if n == 0:
        return 0

    if p == 2:
        return n

    # Euler's criterion: residue iff n^((p-1)/2) == 1 (mod p)
    if pow(n, (p - 1) // 2, p) != 1:
        return None

    # Fast path when p ≡ 3 (mod 4)
    if p % 4 == 3:
        return pow(n, (p + 1) // 4, p)

    # Tonelli-Shanks
    q = p - 1
    s = 0
    while q % 2 == 0:
        s += 1
        q //= 2

    z = 2
    while pow(z, (p - 1) // 2, p) != p - 1:
        z += 1

    m = s
    c = pow(z, q, p)
    t = pow(n, q, p)
    r = pow(n, (q + 1) // 2, p)

    while t != 1:
        i = 1
        t2i = (t * t) % p
        while i < m and t2i != 1:
            t2i = (t2i * t2i) % p
            i += 1

        b = pow(c, 1 << (m - i - 1), p)
        r = (r * b) % p
        c = (b * b) % p
        t = (t * c) % p
        m = i

    return r


@cache
def sqrt_minus_one(p: int) -> int:
    """
    Smallest s in [0, p) with s*s ≡ -1 (mod p).

    Only exists for p == 2 and primes p ≡ 1 (mod 4).

    Raises:
        ValueError: If -1 is not a square modulo p.
    """
    s = mod_sqrt_prime(-1, p)
    if s is None:
        raise ValueError(f"-1 is not a quadratic residue modulo {p}")

    return min(s, p - s)
