"""
Color sequence for Color Picker rounds.

Maps a round number to a color. Colors are enumerated in tiers: tier 0 is
black, and tier ``reference`` holds every channel coordinate triple whose
largest coordinate equals ``reference``. Each coordinate is then turned into
an intensity by binary subdivision of [0, 1], so early rounds use a coarse
palette and later rounds refine it.
"""
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Tuple

from colorpicker.utils.constants import CHANNEL_MAX


class Channel(IntEnum):
    """Channel positions inside a modifier."""
    RED = 0
    GREEN = 1
    BLUE = 2


class ModifierKind(Enum):
    """How many channels of a modifier sit at the tier reference."""
    SINGLE = "single"
    DOUBLE = "double"
    TRIPLE = "triple"


@dataclass(frozen=True)
class Modifier:
    """Channel coordinates of a color before intensity scaling."""
    red: int
    green: int
    blue: int
    kind: ModifierKind = ModifierKind.TRIPLE
    reference: int = 0

    def channels(self) -> Tuple[int, int, int]:
        """Get the (red, green, blue) coordinates."""
        return (self.red, self.green, self.blue)


@dataclass(frozen=True)
class PrimaryPair:
    """A dyadic fraction dividend/divisor in [0, 1]."""
    dividend: int
    divisor: int


def single(reference: int, left: int, right: int, pos: Channel) -> Modifier:
    """Modifier with the channel at ``pos`` set to ``reference``."""
    coords = [left, right]
    coords.insert(pos, reference)
    return Modifier(*coords, kind=ModifierKind.SINGLE, reference=reference)


def double(reference: int, other: int, pos: Channel) -> Modifier:
    """Modifier with ``other`` at ``pos`` and ``reference`` everywhere else."""
    coords = [reference, reference, reference]
    coords[pos] = other
    return Modifier(*coords, kind=ModifierKind.DOUBLE, reference=reference)


def triple(reference: int) -> Modifier:
    """Modifier with every channel at ``reference``."""
    return Modifier(reference, reference, reference,
                    kind=ModifierKind.TRIPLE, reference=reference)


def tier_size(reference: int) -> int:
    """Number of colors contributed by a tier."""
    if reference == 0:
        return 1
    return 3 * reference * reference + 3 * reference + 1


def tier_of(n: int) -> int:
    """
    Find the tier holding index ``n``.

    Tiers 0..R hold (R + 1) ** 3 colors in total, so the tier is the integer
    cube root of ``n``.

    Args:
        n: Non-negative sequence index

    Returns:
        Largest reference R with R ** 3 <= n
    """
    low, high = 0, 1
    while high ** 3 <= n:
        high *= 2
    # low ** 3 <= n < high ** 3
    while high - low > 1:
        mid = (low + high) // 2
        if mid ** 3 <= n:
            low = mid
        else:
            high = mid
    return low


def number_modifier(n: int) -> Modifier:
    """
    Get the modifier at index ``n`` of the sequence.

    Within tier ``reference`` the order is: singles (left, right, then
    position varying fastest), doubles (other, then position), and finally
    the triple.

    Args:
        n: Non-negative sequence index

    Returns:
        Modifier for that index
    """
    if n < 0:
        raise ValueError(f"Sequence index must be non-negative, got {n}")
    if n == 0:
        return triple(0)

    reference = tier_of(n)
    offset = n - reference ** 3

    singles = 3 * reference * reference
    if offset < singles:
        cell, pos = divmod(offset, 3)
        left, right = divmod(cell, reference)
        return single(reference, left, right, Channel(pos))
    offset -= singles

    if offset < 3 * reference:
        other, pos = divmod(offset, 3)
        return double(reference, other, Channel(pos))

    return triple(reference)


def modifier_to_pair(m: int) -> PrimaryPair:
    """
    Convert a channel coordinate into a dyadic fraction.

    Successive coordinates give 0/1, 1/1, 1/2, 1/4, 3/4, 1/8, 3/8, ...
    After 1/1, coordinate m lists the odd numerators over the next power
    of two, so the fraction is computed directly from m - 1.
    """
    if m < 0:
        raise ValueError(f"Channel coordinate must be non-negative, got {m}")
    if m <= 1:
        return PrimaryPair(m, 1)
    k = m - 1
    divisor = 1 << k.bit_length()
    return PrimaryPair(2 * k - divisor + 1, divisor)


def pair_to_int(pair: PrimaryPair) -> int:
    """Scale a fraction to an 8-bit intensity, rounding halves up."""
    return (2 * CHANNEL_MAX * pair.dividend + pair.divisor) // (2 * pair.divisor)


def modifier_primary(m: int) -> int:
    """Intensity for a single channel coordinate."""
    return pair_to_int(modifier_to_pair(m))


def modifier_rgb(modifier: Modifier) -> Tuple[int, int, int]:
    """Get the (red, green, blue) intensities of a modifier."""
    return tuple(modifier_primary(m) for m in modifier.channels())


def modifier_color(modifier: Modifier) -> str:
    """Format a modifier as a '#rrggbb' hex color."""
    return "#" + "".join(f"{value:02x}" for value in modifier_rgb(modifier))


def color_for(n: int) -> str:
    """Get the hex color shown for round ``n``."""
    return modifier_color(number_modifier(n))
