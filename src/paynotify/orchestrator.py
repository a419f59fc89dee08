"""
Workflow orchestrator for running the notification workflows.

Runs are single-threaded and expected to run one at a time against a
given sheet; nothing here locks the sheet.
"""

import traceback
import uuid
from datetime import datetime
from typing import Dict, Optional

from loguru import logger

from paynotify.logging import get_run_id, set_run_id
from paynotify.observability import (
    end_workflow_timer,
    record_workflow_result,
    record_workflow_step,
    start_workflow_timer,
)
from paynotify.workflows.base import BaseWorkflow, StepStatus, WorkflowResult, WorkflowStatus
from paynotify.workflows.registry import workflow_registry


def new_run_id() -> str:
    return uuid.uuid4().hex[:8]


class WorkflowOrchestrator:
    """Orchestrates the execution of workflows."""

    def __init__(self):
        self.workflows: Dict[str, BaseWorkflow] = {}

    def register_workflow(self, workflow: BaseWorkflow):
        """Register a workflow with the orchestrator."""
        self.workflows[workflow.workflow_id] = workflow
        logger.debug(f"Workflow registered: {workflow.workflow_id} - {workflow.name}")

    def unregister_workflow(self, workflow_id: str):
        if workflow_id in self.workflows:
            del self.workflows[workflow_id]
            logger.debug(f"Workflow unregistered: {workflow_id}")

    def create_workflow(self, workflow_type: str, **params) -> BaseWorkflow:
        """Create workflow instance with given parameters."""
        return workflow_registry.create_workflow(workflow_type, **params)

    def run(
        self, workflow_type: str, run_id: Optional[str] = None, **params
    ) -> WorkflowResult:
        """Create, execute and unregister a workflow in one call."""
        workflow = self.create_workflow(workflow_type, **params)
        self.register_workflow(workflow)

        try:
            return self.execute_workflow(workflow.workflow_id, run_id=run_id)
        finally:
            self.unregister_workflow(workflow.workflow_id)

    def execute_workflow(
        self, workflow_id: str, run_id: Optional[str] = None
    ) -> WorkflowResult:
        """Execute a registered workflow."""
        if workflow_id not in self.workflows:
            raise ValueError(f"Workflow not found: {workflow_id}")

        workflow = self.workflows[workflow_id]
        workflow_type = getattr(workflow, "workflow_type", "unknown")

        # Reset workflow state before execution
        workflow.reset()
        workflow.status = WorkflowStatus.RUNNING
        run_id = run_id or new_run_id()
        previous_run_id = get_run_id()
        set_run_id(run_id)
        workflow.shared_resources["run_id"] = run_id

        result = WorkflowResult(
            workflow_id=workflow_id,
            status=WorkflowStatus.RUNNING,
            steps_completed=0,
            steps_failed=0,
            total_steps=len(workflow.steps),
            started_at=datetime.now(),
        )

        logger.info(f"Starting workflow: {workflow.name}")
        start_workflow_timer(run_id, workflow_type)

        try:
            execution_order = workflow.get_step_execution_order()

            for step_name in execution_order:
                step = workflow.steps[step_name]

                if self._should_skip_step(workflow, step_name):
                    step.status = StepStatus.SKIPPED
                    logger.info(
                        f"Skipping step due to failed dependencies: {step_name}"
                    )
                    continue

                self._execute_step(workflow, step_name, result)

                if step.status == StepStatus.FAILED and step.required:
                    logger.error(
                        f"Required step failed, stopping workflow: {step_name}"
                    )
                    break

            failed_required_steps = sum(
                1
                for step in workflow.steps.values()
                if step.status == StepStatus.FAILED and step.required
            )

            if failed_required_steps > 0:
                result.status = WorkflowStatus.FAILED
                workflow.status = WorkflowStatus.FAILED
                record_workflow_result(workflow_type, "failed")
            else:
                result.status = WorkflowStatus.COMPLETED
                workflow.status = WorkflowStatus.COMPLETED
                record_workflow_result(workflow_type, "success")

            for step_name, step in workflow.steps.items():
                if step.error is not None:
                    result.errors[step_name] = step.error

            result.results.update(workflow.collect_results())

            logger.info(
                f"Workflow completed: {workflow.name} - Status: {result.status.value}"
            )

        except Exception as e:
            logger.error(f"Workflow execution error: {e}")
            logger.error(traceback.format_exc())
            result.status = WorkflowStatus.FAILED
            workflow.status = WorkflowStatus.FAILED
            result.errors["orchestrator"] = (
                f"Workflow execution error: {e}\n{traceback.format_exc()}"
            )
            record_workflow_result(workflow_type, "failed")

        finally:
            result.completed_at = datetime.now()
            result.duration = (result.completed_at - result.started_at).total_seconds()
            end_workflow_timer(run_id, workflow_type)
            workflow.cleanup()
            set_run_id(previous_run_id)

        return result

    def _should_skip_step(self, workflow: BaseWorkflow, step_name: str) -> bool:
        """Check if a step should be skipped due to failed dependencies."""
        step = workflow.steps[step_name]

        for dep_name in step.depends_on:
            if dep_name in workflow.steps:
                dep_step = workflow.steps[dep_name]
                if dep_step.status in (StepStatus.FAILED, StepStatus.SKIPPED):
                    return True

        return False

    def _execute_step(
        self, workflow: BaseWorkflow, step_name: str, result: WorkflowResult
    ):
        """Execute a single workflow step. Failed steps are not retried."""
        step = workflow.steps[step_name]
        step.status = StepStatus.RUNNING
        step.started_at = datetime.now()
        workflow_type = getattr(workflow, "workflow_type", "unknown")

        logger.debug(f"Executing step: {step_name} - {step.description}")

        try:
            step_result = step.handler()
        except Exception as e:
            step.status = StepStatus.FAILED
            step.error = f"Step execution error: {str(e)}\n{traceback.format_exc()}"
            step.original_exception = e
            result.steps_failed += 1
            record_workflow_step(workflow_type, step_name, "failed")
            logger.error(f"Step failed with error: {step_name} - {str(e)}")
        else:
            if step_result:
                step.status = StepStatus.COMPLETED
                step.result = step_result
                result.steps_completed += 1
                record_workflow_step(workflow_type, step_name, "success")
                logger.debug(f"Step completed: {step_name}")
            else:
                step.status = StepStatus.FAILED
                step.error = "Step handler returned False"
                result.steps_failed += 1
                record_workflow_step(workflow_type, step_name, "failed")
                logger.error(f"Step failed: {step_name}")

        step.completed_at = datetime.now()


# Global orchestrator instance
orchestrator = WorkflowOrchestrator()
