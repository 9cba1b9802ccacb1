"""Palette Provider — чистая функция seed → цвет.

Renderer потребляет палитру через протокол PaletteProvider и не знает,
как она устроена. NamedPalette — палитра по умолчанию: фиксированная
таблица именованных цветов, индекс = seed mod len(table).
"""

from dataclasses import dataclass
from typing import Protocol, Sequence, Tuple


@dataclass(frozen=True)
class Color:
    """Цвет палитры: имя (для атрибутов) и hex (для SVG)."""

    name: str
    hex: str


class PaletteProvider(Protocol):
    """Чистая функция: одинаковый seed всегда даёт одинаковый цвет."""

    def color_for(self, seed: int) -> Color:
        ...


# Порядок таблицы фиксирован: перестановка меняет внешний вид всех токенов
DEFAULT_COLORS: Tuple[Color, ...] = (
    Color("Rust", "#B7410E"),
    Color("Ferris Orange", "#F74C00"),
    Color("Coral", "#FF7F50"),
    Color("Crimson", "#DC143C"),
    Color("Tomato", "#FF6347"),
    Color("Amber", "#FFBF00"),
    Color("Saffron", "#F4C430"),
    Color("Sand", "#C2B280"),
    Color("Kelp", "#4A7023"),
    Color("Sea Green", "#2E8B57"),
    Color("Teal", "#008080"),
    Color("Lagoon", "#4CB7A5"),
    Color("Deep Sea", "#1B3B6F"),
    Color("Cobalt", "#0047AB"),
    Color("Azure", "#007FFF"),
    Color("Foam", "#E0F7FA"),
    Color("Pearl", "#F0EAD6"),
    Color("Slate", "#708090"),
    Color("Ink", "#1C1C1C"),
    Color("Violet", "#8F00FF"),
    Color("Orchid", "#DA70D6"),
    Color("Anemone", "#FF69B4"),
    Color("Plum", "#8E4585"),
    Color("Moss", "#8A9A5B"),
)


class NamedPalette:
    """Палитра из фиксированной таблицы именованных цветов."""

    def __init__(self, colors: Sequence[Color] = DEFAULT_COLORS):
        if not colors:
            raise ValueError("palette must contain at least one color")
        self._colors = tuple(colors)

    def __len__(self) -> int:
        return len(self._colors)

    def color_for(self, seed: int) -> Color:
        if seed < 0:
            raise ValueError(f"seed must be non-negative, got {seed}")
        return self._colors[seed % len(self._colors)]
