"""
TokenMetadata — Модель metadata-документа токена

Документ, возвращаемый token_uri (после декодирования data URI):
- name, description
- image: inline SVG в виде data:image/svg+xml;base64,...
- attributes: визуальные признаки, выведенные из token_id

Полная совместимость с JSON Schema (core/contracts/schema/token_metadata.json).
"""

from typing import Union

from pydantic import BaseModel, Field


class TokenAttribute(BaseModel):
    """Признак токена в формате trait_type/value"""

    trait_type: str = Field(..., min_length=1, description="Название признака")
    value: Union[int, str] = Field(..., description="Значение признака")

    model_config = {"frozen": True}


class TokenMetadata(BaseModel):
    """
    Metadata-документ токена.

    Immutable модель (frozen=True). Сериализация в JSON выполняется
    рендерером с сортировкой ключей для побайтовой воспроизводимости.
    """

    name: str = Field(..., min_length=1, description="Имя токена")
    description: str = Field(..., description="Описание токена")
    image: str = Field(
        ..., pattern=r"^data:image/svg\+xml;base64,", description="Inline SVG (data URI)"
    )
    attributes: list[TokenAttribute] = Field(
        default_factory=list, description="Визуальные признаки"
    )

    model_config = {"frozen": True}
