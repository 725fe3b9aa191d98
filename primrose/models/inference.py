"""Embedding and rerank schemas (hosted inference)."""

from __future__ import annotations

from typing import Any, Literal, Sequence

from pydantic import Field

from primrose.models import WireModel


class EmbedInput(WireModel):
    text: str


class EmbedParameters(WireModel):
    input_type: Literal["query", "passage"] | None = None
    truncate: Literal["END", "NONE"] | None = None


class EmbedRequest(WireModel):
    model: str
    inputs: list[EmbedInput]
    parameters: EmbedParameters | None = None

    @classmethod
    def for_texts(
        cls,
        model: str,
        texts: Sequence[str],
        *,
        input_type: Literal["query", "passage"] | None = None,
        truncate: Literal["END", "NONE"] | None = None,
    ) -> "EmbedRequest":
        parameters = None
        if input_type is not None or truncate is not None:
            parameters = EmbedParameters(input_type=input_type, truncate=truncate)
        return cls(model=model, inputs=[EmbedInput(text=text) for text in texts], parameters=parameters)


class Embedding(WireModel):
    values: list[float]


class EmbedUsage(WireModel):
    total_tokens: int = 0


class EmbedResponse(WireModel):
    model: str
    data: list[Embedding] = Field(default_factory=list)
    usage: EmbedUsage = Field(default_factory=EmbedUsage)

    @property
    def vectors(self) -> list[list[float]]:
        return [item.values for item in self.data]


class RerankRequest(WireModel):
    model: str
    query: str
    documents: list[dict[str, Any]]
    top_n: int | None = None
    return_documents: bool | None = None
    rank_fields: list[str] | None = None
    parameters: dict[str, Any] | None = None


class RankedDocument(WireModel):
    index: int
    score: float
    document: dict[str, Any] | None = None


class RerankUsage(WireModel):
    rerank_units: int = 0


class RerankResponse(WireModel):
    model: str
    data: list[RankedDocument] = Field(default_factory=list)
    usage: RerankUsage = Field(default_factory=RerankUsage)


class ModelInfo(WireModel):
    name: str
    type: str
    supported_parameters: list[Any] | None = None
    vector_type: str | None = None
    default_dimension: int | None = None


__all__ = [
    "EmbedInput",
    "EmbedParameters",
    "EmbedRequest",
    "EmbedResponse",
    "EmbedUsage",
    "Embedding",
    "ModelInfo",
    "RankedDocument",
    "RerankRequest",
    "RerankResponse",
    "RerankUsage",
]
