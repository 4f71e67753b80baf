"""Envelope uniforme de resultado das operações.

Toda invocação produz {content: [{type: "text", text}]}, com sucesso ou
erro; isError sinaliza o segundo caso sem mudar o formato.
"""

from __future__ import annotations

import json
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

ERROR_PREFIX = "Error: "
EMPTY_RESULT_TEXT = "No result."


class TextContent(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["text"] = "text"
    text: str


class ContentEnvelope(BaseModel):
    """Resposta de uma invocação de operação."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    content: list[TextContent] = Field(default_factory=list)
    is_error: bool = Field(default=False, alias="isError")

    @classmethod
    def from_text(cls, text: str) -> ContentEnvelope:
        return cls(content=[TextContent(text=text)])

    @classmethod
    def from_result(cls, result: Any) -> ContentEnvelope:
        return cls.from_text(render_result(result))

    @classmethod
    def error(cls, message: str) -> ContentEnvelope:
        return cls(content=[TextContent(text=f"{ERROR_PREFIX}{message}")], is_error=True)

    @property
    def text(self) -> str:
        """Texto concatenado de todos os blocos."""
        return "\n".join(block.text for block in self.content)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


def render_result(result: Any) -> str:
    """Converte o retorno de um handler em texto.

    Texto passa direto; estruturas viram JSON indentado.
    """
    if isinstance(result, str):
        return result
    if result is None:
        return EMPTY_RESULT_TEXT
    if isinstance(result, BaseModel):
        result = result.model_dump(by_alias=True)
    return json.dumps(result, indent=2, ensure_ascii=False, default=str)
