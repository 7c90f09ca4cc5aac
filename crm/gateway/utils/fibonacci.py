"""
CPU-bound workload for the /compute endpoint
"""

from typing import Optional

U64_MASK = 0xFFFFFFFFFFFFFFFF


def fibonacci(n: int) -> int:
    """n-th Fibonacci number in unsigned 64-bit wraparound arithmetic.

    fib(0) = 0, fib(1) = 1.
    """
    if n <= 1:
        return n
    a, b = 0, 1
    for _ in range(2, n + 1):
        a, b = b, (a + b) & U64_MASK
    return b


def parse_n(raw: Optional[str], default: int) -> int:
    """Parse an unsigned 64-bit n, falling back to default"""
    # Plain decimal digits only; int() would also take whitespace and underscores
    if raw is None or not (raw.isascii() and raw.isdigit()) or len(raw.lstrip("0")) > 20:
        return default
    n = int(raw)
    if n > U64_MASK:
        return default
    return n
