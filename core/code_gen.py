"""
受験番号発行（CodeGeneratorクラス）

Codes are drawn at random and accepted only when they differ from every
used code in at least `min_hamming_distance` positions.
"""
import logging
from itertools import combinations

from core.random_source import RandomSource, make_random_source


class CodeSpaceExhausted(RuntimeError):
    """Raised when `max_attempts` consecutive candidates were all rejected."""

    def __init__(self, prefix: str, attempts: int, min_hamming_distance: int):
        self.prefix = prefix
        self.attempts = attempts
        self.min_hamming_distance = min_hamming_distance
        super().__init__(
            f"no code with prefix {prefix!r} found at distance >= {min_hamming_distance} "
            f"after {attempts} attempts"
        )


def hamming_distance(code1: str, code2: str) -> int:
    """Count differing positions, compared up to the length of the shorter code."""
    return sum(c1 != c2 for c1, c2 in zip(code1, code2))


def find_violations(codes, min_hamming_distance: int) -> list[tuple[str, str, int]]:
    """Return every pair of codes closer than `min_hamming_distance`."""
    violations = []
    for a, b in combinations(codes, 2):
        d = hamming_distance(a, b)
        if d < min_hamming_distance:
            violations.append((a, b, d))
    return violations


def min_pairwise_distance(codes) -> int | None:
    return min((hamming_distance(a, b) for a, b in combinations(codes, 2)), default=None)


def _check_distance(min_hamming_distance: int):
    if min_hamming_distance < 0:
        raise ValueError(f"min_hamming_distance must be >= 0: {min_hamming_distance}")


class CodeGenerator:
    def __init__(self, num_digits: int, rng: RandomSource | None = None,
                 used=None, max_attempts: int | None = None, on_reject=None, logger=None):
        if num_digits < 1:
            raise ValueError(f"num_digits must be >= 1: {num_digits}")
        if max_attempts is not None and max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1: {max_attempts}")
        self.num_digits = num_digits
        self.range = range(0, 10 ** num_digits)
        self.rng = rng if rng is not None else make_random_source()
        self.used: list[str] = list(used) if used is not None else []
        self.max_attempts = max_attempts
        self.on_reject = on_reject
        self.logger = logger

    @property
    def used_codes(self) -> tuple[str, ...]:
        return tuple(self.used)

    def extend_used(self, codes) -> int:
        """Append externally supplied codes to the used list; returns how many were added."""
        start = len(self.used)
        self.used.extend(codes)
        return len(self.used) - start

    def draw_candidate(self, prefix: str = "") -> str:
        value = self.rng.randrange(self.range.start, self.range.stop)
        return f"{prefix}{str(value).zfill(self.num_digits)}"

    def is_acceptable(self, candidate: str, min_hamming_distance: int) -> bool:
        _check_distance(min_hamming_distance)
        return all(hamming_distance(candidate, code) >= min_hamming_distance for code in self.used)

    def new_code(self, prefix: str = "", min_hamming_distance: int = 0) -> str:
        """
        Draw candidates until one is acceptable, record it as used and return it.

        Without `max_attempts` this loops forever when no acceptable code exists.
        """
        _check_distance(min_hamming_distance)
        attempts = 1
        candidate = self.draw_candidate(prefix)
        while not self.is_acceptable(candidate, min_hamming_distance):
            if self.logger and self.logger.isEnabledFor(logging.DEBUG):
                self.logger.debug(f"[new_code] rejected {candidate} (attempt {attempts})")
            if self.on_reject:
                self.on_reject(candidate)
            if self.max_attempts is not None and attempts >= self.max_attempts:
                raise CodeSpaceExhausted(prefix, attempts, min_hamming_distance)
            attempts += 1
            candidate = self.draw_candidate(prefix)
        self.used.append(candidate)
        return candidate

    def new_codes(self, prefix: str, count: int, min_hamming_distance: int):
        """Yield `count` new codes one at a time."""
        for _ in range(count):
            yield self.new_code(prefix, min_hamming_distance)
