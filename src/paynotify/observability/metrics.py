"""
Prometheus metrics for the payment notification workflows.
Runs are short-lived batch jobs, so metrics are written to a textfile
for the node exporter textfile collector rather than served.
"""

import time
from typing import Dict

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    write_to_textfile,
)

# Create a custom registry for our metrics
metrics_registry = CollectorRegistry()

# ====== BUSINESS METRICS ======

workflow_runs_total = Counter(
    "paynotify_workflow_runs_total",
    "Total workflow runs by result",
    ["workflow_type", "status"],  # generation/distribution + success/failed
    registry=metrics_registry,
)

record_outcomes_total = Counter(
    "paynotify_record_outcomes_total",
    "Per-record outcomes",
    ["workflow_type", "outcome"],  # generated, warning, sent, pdf_not_found, ...
    registry=metrics_registry,
)

file_operations_total = Counter(
    "paynotify_file_operations_total",
    "Total document store operations",
    ["operation_type", "status"],  # drive_upload, drive_search + success/failed
    registry=metrics_registry,
)

workflow_steps_total = Counter(
    "paynotify_workflow_steps_total",
    "Total workflow steps executed",
    ["workflow_type", "step_name", "status"],
    registry=metrics_registry,
)

workflow_duration_seconds = Histogram(
    "paynotify_workflow_duration_seconds",
    "Workflow execution duration",
    ["workflow_type"],
    buckets=[5, 15, 30, 60, 120, 300, 600, 1800],
    registry=metrics_registry,
)

last_run_timestamp = Gauge(
    "paynotify_last_run_timestamp_seconds",
    "Unix time of the last finished run",
    ["workflow_type"],
    registry=metrics_registry,
)

# Workflow timing trackers
_workflow_start_times: Dict[str, float] = {}


def record_workflow_result(workflow_type: str, status: str) -> None:
    """Record workflow result (success/failed)."""
    workflow_runs_total.labels(workflow_type=workflow_type, status=status).inc()
    last_run_timestamp.labels(workflow_type=workflow_type).set_to_current_time()


def record_record_outcome(workflow_type: str, outcome: str) -> None:
    """Record the outcome of a single row."""
    record_outcomes_total.labels(workflow_type=workflow_type, outcome=outcome).inc()


def record_file_operation(operation_type: str, status: str) -> None:
    """Record document store operation (upload, search, download)."""
    file_operations_total.labels(operation_type=operation_type, status=status).inc()


def record_workflow_step(workflow_type: str, step_name: str, status: str) -> None:
    """Record workflow step execution result."""
    workflow_steps_total.labels(
        workflow_type=workflow_type, step_name=step_name, status=status
    ).inc()


def start_workflow_timer(run_id: str, workflow_type: str) -> None:
    """Start timing a workflow."""
    _workflow_start_times[run_id] = time.time()


def end_workflow_timer(run_id: str, workflow_type: str) -> None:
    """End timing a workflow and record duration."""
    start_time = _workflow_start_times.pop(run_id, None)
    if start_time:
        duration = time.time() - start_time
        workflow_duration_seconds.labels(workflow_type=workflow_type).observe(duration)


def write_metrics_file(path: str) -> None:
    """Write all metrics in the Prometheus text format."""
    write_to_textfile(path, metrics_registry)
