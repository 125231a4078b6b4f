from .generations import GENERATION_SHAPES, LATEST, GenerationShape, SchemaGeneration
from .reconciler import (
    FieldRule,
    FieldStatus,
    ReconcileReport,
    SchemaReconciler,
    SchemaTableError,
    get_reconciler,
)

__all__ = [
    "GENERATION_SHAPES",
    "LATEST",
    "FieldRule",
    "FieldStatus",
    "GenerationShape",
    "ReconcileReport",
    "SchemaGeneration",
    "SchemaReconciler",
    "SchemaTableError",
    "get_reconciler",
]
