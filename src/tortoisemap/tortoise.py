"""Composite map key with a custom total order.

A ``Tortoise`` is identified by its nickname and a free-form descriptor string.
Equality and hashing use both attributes verbatim, while ordering uses the
nickname first and the ``shellThickness`` number embedded in the descriptor
second. Equal tortoises therefore always compare as zero, but two tortoises
with differently formatted descriptors (``"shellThickness=3.1"`` versus
``"shellThickness=3.10"``) are distinct keys that sort next to each other.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

THICKNESS_MARKER = "shellThickness="

# Sorts before every parsed thickness
MISSING_THICKNESS = -math.inf

# Plain decimal literal or Infinity; no `_` separators, "inf" or "nan"
_NUMBER = re.compile(
    r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|[+-]?Infinity",
    re.ASCII,
)


def parse_shell_thickness(descriptor: str | None) -> float:
    """Extract the shell thickness from a descriptor string.

    Everything after ``shellThickness=`` is parsed as a decimal number. Descriptors
    without the marker, or whose value does not parse as a number, yield
    ``MISSING_THICKNESS``.

    Args:
        descriptor: Descriptor text such as ``"shellThickness=3.1"``.

    Returns:
        The parsed thickness, or ``MISSING_THICKNESS``.
    """
    if descriptor is None:
        return MISSING_THICKNESS

    idx = descriptor.find(THICKNESS_MARKER)
    if idx < 0:
        return MISSING_THICKNESS

    text = descriptor[idx + len(THICKNESS_MARKER) :].strip()
    if not _NUMBER.fullmatch(text):
        return MISSING_THICKNESS
    return float(text)


def _nickname_key(nickname: str | None) -> tuple[bool, str]:
    return nickname is not None, nickname or ""


def _sign(left: object, right: object) -> int:
    return (left > right) - (left < right)  # type: ignore[operator]


@dataclass(frozen=True)
class Tortoise:
    """Immutable tortoise used as a map key.

    Attributes:
        nickname: Tortoise nickname (may be None).
        descriptor: Free-form description, optionally embedding
            ``shellThickness=<float>`` (may be None).
    """

    nickname: str | None
    descriptor: str | None = None

    @property
    def shell_thickness(self) -> float:
        """Thickness parsed from the descriptor, or ``MISSING_THICKNESS``."""
        return parse_shell_thickness(self.descriptor)

    def sort_key(self) -> tuple[tuple[bool, str], float]:
        """Key reproducing the natural order for ``sorted()``/``bisect``."""
        return _nickname_key(self.nickname), self.shell_thickness

    # Ordering only looks at the sort key, so `a <= b` can hold for unequal keys
    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Tortoise):
            return NotImplemented
        return compare_tortoises(self, other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Tortoise):
            return NotImplemented
        return compare_tortoises(self, other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Tortoise):
            return NotImplemented
        return compare_tortoises(self, other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Tortoise):
            return NotImplemented
        return compare_tortoises(self, other) >= 0

    def __str__(self) -> str:
        if self.descriptor is not None:
            return (
                f"Tortoise{{nickname='{self.nickname}', "
                f"descriptor='{self.descriptor}', hash={hash(self)}}}"
            )
        return f"Tortoise{{nickname='{self.nickname}', hash={hash(self)}}}"


def compare_tortoises(left: Tortoise, right: Tortoise) -> int:
    """Three-way comparison of two tortoises.

    Nicknames are compared first (``None`` before any string), then the parsed
    shell thickness, ascending.

    Returns:
        Negative, zero or positive, like ``cmp``.
    """
    result = _sign(_nickname_key(left.nickname), _nickname_key(right.nickname))
    if result != 0:
        return result
    return _sign(left.shell_thickness, right.shell_thickness)
