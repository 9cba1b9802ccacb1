"""Rendering — детерминированный генератор изображения и metadata.

token_id → seeds → палитра/форма → SVG → data URI → JSON → data URI.
"""

from .data_uri import JSON_MEDIA_TYPE, SVG_MEDIA_TYPE, decode_data_uri, encode_data_uri
from .metadata import MetadataRenderer, RenderConfig
from .palette import DEFAULT_COLORS, Color, NamedPalette, PaletteProvider
from .svg import build_svg
from .traits import RustaceanTraits, derive_seeds, derive_traits

__all__ = [
    "JSON_MEDIA_TYPE",
    "SVG_MEDIA_TYPE",
    "encode_data_uri",
    "decode_data_uri",
    "MetadataRenderer",
    "RenderConfig",
    "Color",
    "DEFAULT_COLORS",
    "NamedPalette",
    "PaletteProvider",
    "build_svg",
    "RustaceanTraits",
    "derive_seeds",
    "derive_traits",
]
