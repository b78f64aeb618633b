"""Declarative response shapes sent to the service as structural constraints.

A ``Shape`` is a small tree of field names, primitive kinds and required-ness.
It renders to the mapping the Gemini API accepts as ``response_schema`` and
can produce a conforming example value, which the mock adapter uses.
"""

from __future__ import annotations

import dataclasses
from enum import StrEnum
from typing import Any

from content_forge.core.types import OperationKind, _require


class ShapeKind(StrEnum):
    STRING = "STRING"
    NUMBER = "NUMBER"
    ENUM = "ENUM"
    ARRAY = "ARRAY"
    OBJECT = "OBJECT"


@dataclasses.dataclass(frozen=True, slots=True)
class ShapeField:
    name: str
    shape: Shape
    required: bool = True


@dataclasses.dataclass(frozen=True, slots=True)
class Shape:
    kind: ShapeKind
    description: str | None = None
    enum: tuple[str, ...] = ()
    items: Shape | None = None
    fields: tuple[ShapeField, ...] = ()

    def __post_init__(self) -> None:
        """Validate that each kind carries exactly what it needs."""
        _require(
            condition=(self.kind is ShapeKind.ENUM) == bool(self.enum),
            message="enum values are required for ENUM and only for ENUM",
            field_name="enum",
        )
        _require(
            condition=(self.kind is ShapeKind.ARRAY) == (self.items is not None),
            message="items are required for ARRAY and only for ARRAY",
            field_name="items",
        )
        _require(
            condition=self.kind is ShapeKind.OBJECT or not self.fields,
            message="only OBJECT shapes have fields",
            field_name="fields",
        )

    @property
    def required_fields(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields if f.required)

    def to_schema(self) -> dict[str, Any]:
        """Render the mapping form of a Gemini ``Schema``."""
        schema: dict[str, Any] = {
            "type": "STRING" if self.kind is ShapeKind.ENUM else self.kind.value
        }
        if self.description:
            schema["description"] = self.description
        if self.enum:
            schema["enum"] = list(self.enum)
        if self.items is not None:
            schema["items"] = self.items.to_schema()
        if self.fields:
            schema["properties"] = {f.name: f.shape.to_schema() for f in self.fields}
            schema["required"] = list(self.required_fields)
        return schema

    def example(self, name: str = "value") -> Any:
        """Return the smallest value that conforms to this shape."""
        match self.kind:
            case ShapeKind.STRING:
                return f"mock {name}"
            case ShapeKind.NUMBER:
                return 5
            case ShapeKind.ENUM:
                return self.enum[0]
            case ShapeKind.ARRAY:
                # items is guaranteed for ARRAY by __post_init__
                return [self.items.example(name)]  # type: ignore[union-attr]
            case ShapeKind.OBJECT:
                return {f.name: f.shape.example(f.name) for f in self.fields}


# --- Builders ---


def string(description: str | None = None) -> Shape:
    return Shape(ShapeKind.STRING, description=description)


def number(description: str | None = None) -> Shape:
    return Shape(ShapeKind.NUMBER, description=description)


def enum(*values: str, description: str | None = None) -> Shape:
    return Shape(ShapeKind.ENUM, description=description, enum=values)


def array(items: Shape, description: str | None = None) -> Shape:
    return Shape(ShapeKind.ARRAY, description=description, items=items)


def obj(*fields: ShapeField, description: str | None = None) -> Shape:
    return Shape(ShapeKind.OBJECT, description=description, fields=fields)


def field(name: str, shape: Shape, *, required: bool = True) -> ShapeField:
    return ShapeField(name=name, shape=shape, required=required)


# --- Shapes per operation ---

NICHE_ANALYSIS_SHAPE = obj(
    field("name", string()),
    field("trendScore", number("Market heat (0-10)")),
    field("competition", enum("Low", "Medium", "High")),
    field("monetization", string("Primary revenue path")),
    field("longevity", string("Projected market life")),
    field("platformFit", string("Primary platform recommendation")),
)

STRATEGY_PLAN_SHAPE = obj(
    field(
        "weeks",
        array(
            obj(
                field("range", string()),
                field("phase", string()),
                field("focus", array(string())),
            )
        ),
    ),
)

VIDEO_CONCEPTS_SHAPE = array(
    obj(
        field("title", string()),
        field("hook", string()),
        field("structure", string()),
        field("visualDirection", string()),
        field(
            "seo",
            obj(
                field("description", string()),
                field("tags", array(string())),
            ),
        ),
    )
)

STORYBOARD_SHAPE = array(
    obj(
        field("id", string()),
        field("text", string("Voiceover text")),
        field("visualPrompt", string("Image generation prompt")),
        field("duration", number("Seconds")),
    )
)

VIRAL_HOOKS_SHAPE = array(
    obj(
        field("hook", string()),
        field("reason", string()),
    )
)

SHAPES: dict[OperationKind, Shape] = {
    OperationKind.NICHE_ANALYSIS: NICHE_ANALYSIS_SHAPE,
    OperationKind.STRATEGY_PLAN: STRATEGY_PLAN_SHAPE,
    OperationKind.VIDEO_CONCEPTS: VIDEO_CONCEPTS_SHAPE,
    OperationKind.STORYBOARD: STORYBOARD_SHAPE,
    OperationKind.VIRAL_HOOKS: VIRAL_HOOKS_SHAPE,
}


def shape_for(kind: OperationKind) -> Shape | None:
    """Return the fixed shape for an operation kind, or None if unconstrained."""
    return SHAPES.get(kind)
