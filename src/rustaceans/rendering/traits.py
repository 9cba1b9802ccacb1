"""Traits — детерминированный вывод визуальных признаков из token_id.

Pipeline: token_id → seeds (SHA-256) → цвета палитры + параметры формы.
Нет RNG-состояния, нет времени, нет I/O: один token_id всегда даёт одни и те же признаки.
"""

import hashlib
from dataclasses import dataclass
from typing import Final, List, Tuple

from rustaceans.core.math.safe_uint import clamp_int
from rustaceans.rendering.palette import Color, PaletteProvider

# Доменный префикс seed: смена ломает воспроизводимость всех токенов
SEED_DOMAIN: Final[bytes] = b"rustaceans:v1:"

SEED_WORDS: Final[int] = 8

PATTERNS: Final[Tuple[str, ...]] = ("Plain", "Spots", "Stripes", "Barnacles")
CLAW_SIZES: Final[Tuple[Tuple[str, int], ...]] = (("Small", 28), ("Medium", 36), ("Large", 46))

MAX_BUBBLES: Final[int] = 5


@dataclass(frozen=True)
class Bubble:
    x: int
    y: int
    r: int


@dataclass(frozen=True)
class RustaceanTraits:
    """Визуальные признаки одного токена."""

    token_id: int
    background: Color
    shell: Color
    claw: Color
    eye: Color
    pattern: str
    claw_size_name: str
    claw_radius: int
    leg_count: int
    bubbles: Tuple[Bubble, ...]


def derive_seeds(token_id: int) -> List[int]:
    """
    Восемь 32-битных seed из SHA-256(SEED_DOMAIN + token_id).

    Examples:
        >>> len(derive_seeds(0))
        8
    """
    if token_id < 0:
        raise ValueError(f"token_id must be non-negative, got {token_id}")

    digest = hashlib.sha256(SEED_DOMAIN + str(token_id).encode("ascii")).digest()
    return [int.from_bytes(digest[i * 4:(i + 1) * 4], "big") for i in range(SEED_WORDS)]


def _distinct_color(palette: PaletteProvider, seed: int, avoid: Color) -> Color:
    """Цвет для seed, отличный от avoid (сдвиг seed до первого отличного)."""
    color = palette.color_for(seed)
    offset = 1
    while color == avoid and offset < 64:
        color = palette.color_for(seed + offset)
        offset += 1
    return color


def derive_traits(token_id: int, palette: PaletteProvider) -> RustaceanTraits:
    """Признаки токена из seed и палитры."""
    seeds = derive_seeds(token_id)

    background = palette.color_for(seeds[0])
    shell = _distinct_color(palette, seeds[1], background)
    claw = _distinct_color(palette, seeds[2], background)
    eye = _distinct_color(palette, seeds[3], shell)

    pattern = PATTERNS[seeds[4] % len(PATTERNS)]
    claw_size_name, claw_radius = CLAW_SIZES[seeds[5] % len(CLAW_SIZES)]
    leg_count = 6 if seeds[6] % 2 == 0 else 8

    # Пузыри в верхней полосе холста, позиции из seeds[7] и seeds[0..3]
    bubble_count = seeds[7] % (MAX_BUBBLES + 1)
    bubbles = []
    for i in range(bubble_count):
        word = (seeds[7] >> (i * 5)) ^ seeds[i % 4]
        bubbles.append(Bubble(
            x=clamp_int(20 + word % 360, 20, 380),
            y=clamp_int(20 + (word >> 9) % 90, 20, 110),
            r=4 + (word >> 17) % 9,
        ))

    return RustaceanTraits(
        token_id=token_id,
        background=background,
        shell=shell,
        claw=claw,
        eye=eye,
        pattern=pattern,
        claw_size_name=claw_size_name,
        claw_radius=claw_radius,
        leg_count=leg_count,
        bubbles=tuple(bubbles),
    )
