"""Request contracts: prompt text, response shapes and call descriptors."""

from .builder import RequestContractBuilder
from .shapes import SHAPES, Shape, ShapeField, ShapeKind, shape_for

__all__ = [
    "SHAPES",
    "RequestContractBuilder",
    "Shape",
    "ShapeField",
    "ShapeKind",
    "shape_for",
]
