from prometheus_client import Counter, Gauge, Histogram

from workflow_builder.ports.secondary.metrics import IMetrics


class MetricsRegistry(IMetrics):
    """Prometheus metrics registry."""

    def __init__(self, registry=None):
        kwargs = {"registry": registry} if registry is not None else {}

        # Editing metrics
        self.WORKFLOW_COMMANDS_TOTAL = Counter(
            "workflow_commands_total",
            "Total number of edit commands by outcome",
            ["command", "outcome"],
            **kwargs,
        )

        self.HISTORY_NAVIGATIONS_TOTAL = Counter(
            "workflow_history_navigations_total",
            "Total number of undo/redo requests",
            ["direction", "applied"],
            **kwargs,
        )

        # Validation metrics
        self.VALIDATION_WARNINGS = Histogram(
            "workflow_validation_warnings",
            "Number of warnings reported per validation",
            buckets=(0, 1, 2, 5, 10, 25),
            **kwargs,
        )

        self.ACTIVE_SESSIONS = Gauge(
            "workflow_active_sessions",
            "Number of open editing sessions",
            **kwargs,
        )

    def record_command(self, command: str, outcome: str):
        self.WORKFLOW_COMMANDS_TOTAL.labels(command=command, outcome=outcome).inc()

    def record_history_navigation(self, direction: str, applied: bool):
        self.HISTORY_NAVIGATIONS_TOTAL.labels(direction=direction, applied=str(applied).lower()).inc()

    def observe_warnings(self, count: int):
        self.VALIDATION_WARNINGS.observe(count)

    def set_active_sessions(self, count: int):
        self.ACTIVE_SESSIONS.set(count)


# Global registry instance for adapter/framework layer
metrics_registry = MetricsRegistry()
