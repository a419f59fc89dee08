"""
Observability module for the payment notification workflows.
Provides metrics capabilities.
"""

from paynotify.observability.metrics import (
    end_workflow_timer,
    metrics_registry,
    record_file_operation,
    record_record_outcome,
    record_workflow_result,
    record_workflow_step,
    start_workflow_timer,
    write_metrics_file,
)

__all__ = [
    "metrics_registry",
    "record_workflow_result",
    "record_record_outcome",
    "record_file_operation",
    "record_workflow_step",
    "start_workflow_timer",
    "end_workflow_timer",
    "write_metrics_file",
]
