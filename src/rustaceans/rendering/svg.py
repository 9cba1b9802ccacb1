"""SVG — фиксированный шаблон Rustacean, параметризованный признаками.

Холст 400x400 (viewBox), координаты только целые: вывод побайтово
воспроизводим для одинаковых признаков.
"""

from typing import List

from rustaceans.rendering.traits import RustaceanTraits

VIEWBOX = 400

_BODY_CX = 200
_BODY_CY = 250
_BODY_RX = 110
_BODY_RY = 68


def _legs(traits: RustaceanTraits) -> List[str]:
    parts = []
    per_side = traits.leg_count // 2
    for i in range(per_side):
        y = 240 + i * (60 // per_side)
        # Левая и правая нога: колено ниже точки крепления
        parts.append(
            f'<path d="M{_BODY_CX - 90} {y} L{_BODY_CX - 150} {y + 20} L{_BODY_CX - 165} {y + 55}" '
            f'stroke="{traits.shell.hex}" stroke-width="8" fill="none" stroke-linecap="round"/>'
        )
        parts.append(
            f'<path d="M{_BODY_CX + 90} {y} L{_BODY_CX + 150} {y + 20} L{_BODY_CX + 165} {y + 55}" '
            f'stroke="{traits.shell.hex}" stroke-width="8" fill="none" stroke-linecap="round"/>'
        )
    return parts


def _claws(traits: RustaceanTraits) -> List[str]:
    r = traits.claw_radius
    parts = []
    for side in (-1, 1):
        cx = _BODY_CX + side * 120
        cy = 150
        arm_x = _BODY_CX + side * 80
        parts.append(
            f'<path d="M{arm_x} 215 L{cx} {cy + r}" stroke="{traits.claw.hex}" '
            f'stroke-width="12" fill="none" stroke-linecap="round"/>'
        )
        parts.append(f'<circle cx="{cx}" cy="{cy}" r="{r}" fill="{traits.claw.hex}"/>')
        # Вырез клешни
        parts.append(
            f'<path d="M{cx} {cy} L{cx + side * r} {cy - r // 2} L{cx + side * r} {cy + r // 3} Z" '
            f'fill="{traits.background.hex}"/>'
        )
    return parts


def _pattern(traits: RustaceanTraits) -> List[str]:
    ink = traits.eye.hex
    if traits.pattern == "Spots":
        return [
            f'<circle cx="{_BODY_CX + dx}" cy="{_BODY_CY + dy}" r="9" fill="{ink}" opacity="0.6"/>'
            for dx, dy in ((-55, -15), (-10, -35), (40, -10), (70, 20), (-30, 25))
        ]
    if traits.pattern == "Stripes":
        return [
            f'<path d="M{_BODY_CX + dx} {_BODY_CY - 55} Q{_BODY_CX + dx + 10} {_BODY_CY} {_BODY_CX + dx} {_BODY_CY + 55}" '
            f'stroke="{ink}" stroke-width="6" fill="none" opacity="0.5"/>'
            for dx in (-60, -20, 20, 60)
        ]
    if traits.pattern == "Barnacles":
        return [
            f'<circle cx="{_BODY_CX + dx}" cy="{_BODY_CY + dy}" r="6" fill="#F0EAD6" '
            f'stroke="{ink}" stroke-width="2"/>'
            for dx, dy in ((-70, 0), (-45, -30), (55, -25), (80, 10))
        ]
    return []


def _eyes(traits: RustaceanTraits) -> List[str]:
    parts = []
    for dx in (-35, 35):
        x = _BODY_CX + dx
        parts.append(
            f'<path d="M{x} {_BODY_CY - 60} L{x} {_BODY_CY - 100}" stroke="{traits.shell.hex}" '
            f'stroke-width="8" stroke-linecap="round"/>'
        )
        parts.append(f'<circle cx="{x}" cy="{_BODY_CY - 108}" r="16" fill="#FFFFFF"/>')
        parts.append(f'<circle cx="{x}" cy="{_BODY_CY - 106}" r="8" fill="{traits.eye.hex}"/>')
    return parts


def build_svg(traits: RustaceanTraits, size: int = VIEWBOX) -> str:
    """
    Сборка SVG документа из признаков.

    Args:
        traits: признаки токена
        size: ширина/высота в px (viewBox всегда 400x400)

    Returns:
        SVG документ (str, без переводов строк)
    """
    parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{size}" height="{size}" '
        f'viewBox="0 0 {VIEWBOX} {VIEWBOX}">',
        f'<rect width="{VIEWBOX}" height="{VIEWBOX}" fill="{traits.background.hex}"/>',
    ]
    parts.extend(
        f'<circle cx="{b.x}" cy="{b.y}" r="{b.r}" fill="none" stroke="#FFFFFF" '
        f'stroke-width="2" opacity="0.7"/>'
        for b in traits.bubbles
    )
    parts.extend(_legs(traits))
    parts.extend(_claws(traits))
    parts.append(
        f'<ellipse cx="{_BODY_CX}" cy="{_BODY_CY}" rx="{_BODY_RX}" ry="{_BODY_RY}" '
        f'fill="{traits.shell.hex}"/>'
    )
    parts.extend(_pattern(traits))
    parts.extend(_eyes(traits))
    parts.append(
        f'<path d="M{_BODY_CX - 25} {_BODY_CY + 20} Q{_BODY_CX} {_BODY_CY + 40} {_BODY_CX + 25} {_BODY_CY + 20}" '
        f'stroke="#1C1C1C" stroke-width="5" fill="none" stroke-linecap="round"/>'
    )
    parts.append(
        f'<text x="{VIEWBOX // 2}" y="{VIEWBOX - 16}" font-family="monospace" font-size="16" '
        f'text-anchor="middle" fill="#FFFFFF">#{traits.token_id}</text>'
    )
    parts.append("</svg>")
    return "".join(parts)
