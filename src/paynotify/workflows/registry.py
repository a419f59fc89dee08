"""
Workflow registry for workflow discovery and registration.
"""

from typing import Dict, Type

from loguru import logger

from paynotify.workflows.base import BaseWorkflow
from paynotify.workflows.distribution_workflow import DistributionWorkflow
from paynotify.workflows.generation_workflow import GenerationWorkflow

# Short names accepted on the command line
WORKFLOW_ALIASES = {
    "generate": "generation_workflow",
    "distribute": "distribution_workflow",
}


class WorkflowRegistry:
    """Registry for managing available workflow classes."""

    def __init__(self):
        self._workflow_classes: Dict[str, Type[BaseWorkflow]] = {}
        self._register_built_in_workflows()

    def _register_built_in_workflows(self):
        self.register_workflow_class(GenerationWorkflow)
        self.register_workflow_class(DistributionWorkflow)

    def register_workflow_class(self, workflow_class: Type[BaseWorkflow]):
        """Register a workflow class."""
        # Create a temporary instance to get the workflow_id
        temp_instance = workflow_class()
        workflow_id = temp_instance.workflow_id

        self._workflow_classes[workflow_id] = workflow_class
        logger.debug(
            f"Workflow class registered: {workflow_id} -> {workflow_class.__name__}"
        )

    def resolve_id(self, workflow_id: str) -> str:
        return WORKFLOW_ALIASES.get(workflow_id, workflow_id)

    def create_workflow(self, workflow_id: str, **kwargs) -> BaseWorkflow:
        """Create a workflow instance by ID or alias."""
        return self.get_workflow_class(workflow_id)(**kwargs)

    def get_workflow_class(self, workflow_id: str) -> Type[BaseWorkflow]:
        workflow_id = self.resolve_id(workflow_id)
        if workflow_id not in self._workflow_classes:
            raise ValueError(f"Unknown workflow ID: {workflow_id}")
        return self._workflow_classes[workflow_id]


# Global registry instance
workflow_registry = WorkflowRegistry()
