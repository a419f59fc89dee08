"""
Payment notification pipeline.
Generates PDF payment notifications from the payments sheet and emails
them once a person has approved them.
"""

import paynotify.logging  # noqa: F401  Ensures logging is configured
from paynotify.config import config
from paynotify.orchestrator import orchestrator
from paynotify.workflows.base import BaseWorkflow, WorkflowResult, WorkflowStep
from paynotify.workflows.registry import workflow_registry

__all__ = [
    "config",
    "orchestrator",
    "BaseWorkflow",
    "WorkflowResult",
    "WorkflowStep",
    "workflow_registry",
]
