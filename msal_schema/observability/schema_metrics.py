"""In-process schema metrics for lightweight observability.

Counters are process-local and reset on restart. ``render_prometheus`` emits
the Prometheus text exposition format so a host application can serve them.
"""

from __future__ import annotations

from threading import Lock

from msal_schema.config import settings

# Simple safeguards against unbounded label cardinality (in-process metrics).
_MAX_ENTITY_LABELS = 50
_OTHER_LABEL = "other"
_KNOWN_OUTCOMES: set[str] = {"delivered", "suppressed", "no_callback"}


def _sanitize_label_value(value: str) -> str:
    # Prometheus label values are quoted, but escaping keeps output safe.
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


class SchemaMetrics:
    """Thread-safe in-process counters for the schema layer."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._entities: set[str] = set()
        self._parse_total: dict[tuple[str, str], int] = {}
        self._violation_total: dict[tuple[str, str], int] = {}
        self._defaulted_total: dict[str, int] = {}
        self._extension_total: dict[str, int] = {}
        self._log_dispatch_total: dict[tuple[str, str], int] = {}

    def _entity_label(self, entity: str) -> str:
        entity = (entity or "unknown").strip()
        if entity in self._entities:
            return entity
        if len(self._entities) >= _MAX_ENTITY_LABELS:
            return _OTHER_LABEL
        self._entities.add(entity)
        return entity

    @staticmethod
    def _bump(counter: dict, key: object, amount: int = 1) -> None:
        counter[key] = counter.get(key, 0) + amount

    def inc_parsed(self, *, entity: str, generation: str) -> None:
        if not settings.metrics_enabled:
            return
        with self._lock:
            self._bump(self._parse_total, (self._entity_label(entity), generation))

    def inc_violation(self, *, entity: str, code: str) -> None:
        if not settings.metrics_enabled:
            return
        with self._lock:
            self._bump(self._violation_total, (self._entity_label(entity), code or "unknown"))

    def inc_defaulted(self, *, entity: str, count: int = 1) -> None:
        if not settings.metrics_enabled or count <= 0:
            return
        with self._lock:
            self._bump(self._defaulted_total, self._entity_label(entity), count)

    def inc_extension_fields(self, *, entity: str, count: int) -> None:
        if not settings.metrics_enabled or count <= 0:
            return
        with self._lock:
            self._bump(self._extension_total, self._entity_label(entity), count)

    def inc_log_dispatch(self, *, level: str, outcome: str) -> None:
        if not settings.metrics_enabled:
            return
        outcome = outcome if outcome in _KNOWN_OUTCOMES else "unknown"
        with self._lock:
            self._bump(self._log_dispatch_total, (level, outcome))

    def snapshot(self) -> dict[str, dict]:
        """Copy of every counter, for tests and ad-hoc inspection."""
        with self._lock:
            return {
                "parse": dict(self._parse_total),
                "violation": dict(self._violation_total),
                "defaulted": dict(self._defaulted_total),
                "extension": dict(self._extension_total),
                "log_dispatch": dict(self._log_dispatch_total),
            }

    def reset(self) -> None:
        with self._lock:
            self._entities.clear()
            self._parse_total.clear()
            self._violation_total.clear()
            self._defaulted_total.clear()
            self._extension_total.clear()
            self._log_dispatch_total.clear()

    def render_prometheus(self) -> str:
        """Render all metrics in Prometheus text exposition format."""
        lines: list[str] = []

        with self._lock:
            lines.append("# HELP schema_parse_total Entities built from dynamic objects")
            lines.append("# TYPE schema_parse_total counter")
            for (entity, generation), count in sorted(self._parse_total.items()):
                entity_label = _sanitize_label_value(entity)
                lines.append(
                    f'schema_parse_total{{entity="{entity_label}",generation="{generation}"}} {count}'
                )

            lines.append("# HELP schema_violation_total Entity constructions rejected")
            lines.append("# TYPE schema_violation_total counter")
            for (entity, code), count in sorted(self._violation_total.items()):
                entity_label = _sanitize_label_value(entity)
                code_label = _sanitize_label_value(code)
                lines.append(
                    f'schema_violation_total{{entity="{entity_label}",code="{code_label}"}} {count}'
                )

            lines.append("# HELP schema_defaulted_total Invalid optional fields reset to default")
            lines.append("# TYPE schema_defaulted_total counter")
            for entity, count in sorted(self._defaulted_total.items()):
                lines.append(
                    f'schema_defaulted_total{{entity="{_sanitize_label_value(entity)}"}} {count}'
                )

            lines.append("# HELP schema_extension_fields_total Unknown fields kept as extensions")
            lines.append("# TYPE schema_extension_fields_total counter")
            for entity, count in sorted(self._extension_total.items()):
                lines.append(
                    f'schema_extension_fields_total{{entity="{_sanitize_label_value(entity)}"}} '
                    f"{count}"
                )

            lines.append("# HELP msal_log_dispatch_total Logger callback dispatch outcomes")
            lines.append("# TYPE msal_log_dispatch_total counter")
            for (level, outcome), count in sorted(self._log_dispatch_total.items()):
                lines.append(
                    f'msal_log_dispatch_total{{level="{_sanitize_label_value(level)}",'
                    f'outcome="{outcome}"}} {count}'
                )

        return "\n".join(lines) + "\n"


_metrics_singleton: SchemaMetrics | None = None


def get_schema_metrics() -> SchemaMetrics:
    global _metrics_singleton
    if _metrics_singleton is None:
        _metrics_singleton = SchemaMetrics()
    return _metrics_singleton
