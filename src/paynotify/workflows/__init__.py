"""
Workflows package for the payment notification pipeline.
Contains workflow definitions and the registry.
"""

from paynotify.workflows.base import (
    BaseWorkflow,
    StepStatus,
    WorkflowResult,
    WorkflowStatus,
    WorkflowStep,
)
from paynotify.workflows.distribution_workflow import DistributionWorkflow
from paynotify.workflows.generation_workflow import GenerationWorkflow
from paynotify.workflows.registry import workflow_registry

__all__ = [
    "BaseWorkflow",
    "DistributionWorkflow",
    "GenerationWorkflow",
    "StepStatus",
    "WorkflowResult",
    "WorkflowStatus",
    "WorkflowStep",
    "workflow_registry",
]
