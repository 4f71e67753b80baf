"""Normalizer IncidentIQ - reconciliação dos formatos de resposta upstream."""

from .normalizer import detect_shape, normalize, normalize_collection, normalize_entity

__all__ = [
    "detect_shape",
    "normalize",
    "normalize_collection",
    "normalize_entity",
]
