"""Metadata Renderer — token_id → inline JSON документ с inline SVG.

Шаги:
1. token_id → seeds → признаки (traits.derive_traits)
2. признаки → SVG (svg.build_svg)
3. SVG → data:image/svg+xml;base64,...
4. {name, description, image, attributes} → JSON (sort_keys, компактные разделители)
5. JSON → data:application/json;base64,...

render(token_id) — чистая функция: два вызова возвращают побайтово одинаковую строку.
Существование токена проверяет контроллер (token_uri), renderer его не знает.
"""

import json
from dataclasses import dataclass

from rustaceans.core.contracts.validators import TokenMetadataValidator
from rustaceans.core.domain.metadata import TokenAttribute, TokenMetadata
from rustaceans.rendering.data_uri import JSON_MEDIA_TYPE, SVG_MEDIA_TYPE, encode_data_uri
from rustaceans.rendering.palette import NamedPalette, PaletteProvider
from rustaceans.rendering.svg import VIEWBOX, build_svg
from rustaceans.rendering.traits import RustaceanTraits, derive_traits


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class RenderConfig:
    """Конфигурация renderer."""

    name_template: str = "Rustacean #{token_id}"
    description: str = (
        "Rustaceans are crafted from Cranes. "
        "Every shell, claw and bubble is generated on read from the token id."
    )
    image_size_px: int = VIEWBOX


# =============================================================================
# RENDERER
# =============================================================================


class MetadataRenderer:
    """Детерминированный генератор metadata-документа."""

    def __init__(
        self,
        palette: PaletteProvider | None = None,
        config: RenderConfig | None = None
    ):
        self.palette = palette or NamedPalette()
        self.config = config or RenderConfig()
        self._validator = TokenMetadataValidator()

    def traits(self, token_id: int) -> RustaceanTraits:
        """Признаки токена (без сериализации)."""
        return derive_traits(token_id, self.palette)

    def document(self, token_id: int) -> TokenMetadata:
        """Metadata-документ как immutable модель."""
        traits = self.traits(token_id)
        svg = build_svg(traits, size=self.config.image_size_px)

        return TokenMetadata(
            name=self.config.name_template.format(token_id=token_id),
            description=self.config.description,
            image=encode_data_uri(svg, SVG_MEDIA_TYPE),
            attributes=[
                TokenAttribute(trait_type="Background", value=traits.background.name),
                TokenAttribute(trait_type="Shell", value=traits.shell.name),
                TokenAttribute(trait_type="Claws", value=traits.claw.name),
                TokenAttribute(trait_type="Eyes", value=traits.eye.name),
                TokenAttribute(trait_type="Pattern", value=traits.pattern),
                TokenAttribute(trait_type="Claw Size", value=traits.claw_size_name),
                TokenAttribute(trait_type="Legs", value=traits.leg_count),
                TokenAttribute(trait_type="Bubbles", value=len(traits.bubbles)),
            ],
        )

    def render_json(self, token_id: int) -> str:
        """
        JSON metadata-документа (каноническая сериализация).

        Raises:
            ValidationError: Если документ не проходит token_metadata.json
        """
        data = self.document(token_id).model_dump(mode="json")
        self._validator.validate(data)
        return json.dumps(data, sort_keys=True, separators=(",", ":"), ensure_ascii=False)

    def render(self, token_id: int) -> str:
        """Inline metadata токена (data:application/json;base64,...)."""
        return encode_data_uri(self.render_json(token_id), JSON_MEDIA_TYPE)
