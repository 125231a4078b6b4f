from .schema_metrics import SchemaMetrics, get_schema_metrics

__all__ = ["SchemaMetrics", "get_schema_metrics"]
