"""
Disambiguation suffixes: a bijective base-26 numeration over 'a'..'z'.

    -1 -> ''    0 -> 'a'    25 -> 'z'    26 -> 'aa'    701 -> 'zz'    702 -> 'aaa'
"""

ALPHABET = 'abcdefghijklmnopqrstuvwxyz'
BASE = len(ALPHABET)


def encode(n: int) -> str:
    """Converts a counter (>= -1) into its letter suffix."""
    if isinstance(n, bool) or not isinstance(n, int):
        raise TypeError(f"Counter must be an integer, got {n!r}")
    if n < -1:
        raise ValueError(f"Negative value not allowed ({n})")

    ret = ''
    while n >= 0:
        ret = ALPHABET[n % BASE] + ret
        n = n // BASE - 1
    return ret


def decode(letters: str) -> int:
    """Inverse of encode(): '' -> -1, 'a' -> 0, 'aa' -> 26."""
    n = 0
    for ch in letters:
        idx = ALPHABET.find(ch)
        if idx < 0:
            raise ValueError(f"Not a suffix letter: {ch!r} in {letters!r}")
        n = n * BASE + idx + 1
    return n - 1
