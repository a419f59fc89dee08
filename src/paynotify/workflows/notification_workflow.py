"""
Shared plumbing of the generation and distribution workflows.
"""

from typing import Optional

from loguru import logger

from paynotify.config import AppConfig, config
from paynotify.exceptions import PayNotifyException
from paynotify.models import Outcome, PaymentRecord, RunSummary
from paynotify.observability import record_record_outcome
from paynotify.services.factory import ServiceFactory
from paynotify.services.records import PaymentRecordRepository
from paynotify.services.storage import DocumentStore
from paynotify.workflows.base import BaseWorkflow


class NotificationWorkflow(BaseWorkflow):
    """
    Common state for both stages: configuration, the record repository,
    the document store and the run summary.

    Collaborators passed to the constructor are used as-is; missing ones
    are built from configuration in the ``initialize_services`` step.
    """

    workflow_type = "unknown"
    result_keys = ("summary",)

    def __init__(
        self,
        workflow_id: str,
        name: str,
        description: str,
        app_config: Optional[AppConfig] = None,
        repository: Optional[PaymentRecordRepository] = None,
        document_store: Optional[DocumentStore] = None,
        dry_run: bool = False,
    ):
        super().__init__(workflow_id, name, description)
        self.app_config = app_config or config
        self.repository = repository
        self.document_store = document_store
        self.dry_run = dry_run

    def _service_factory(self) -> ServiceFactory:
        factory = self.shared_resources.get("service_factory")
        if factory is None:
            factory = ServiceFactory(self.app_config)
            self.shared_resources["service_factory"] = factory
        return factory

    @property
    def run_id(self) -> str:
        return self.shared_resources.get("run_id", self.workflow_id)

    @property
    def summary(self) -> RunSummary:
        return self.shared_resources["summary"]

    def _initialize_common(self) -> None:
        if self.repository is None:
            self.repository = self._service_factory().create_repository()
        if self.document_store is None:
            self.document_store = self._service_factory().create_document_store()
        self.shared_resources["summary"] = RunSummary(
            workflow_id=self.workflow_id, dry_run=self.dry_run
        )

    def _load_records(self) -> bool:
        """Read every row of the shared sheet."""
        loaded = self.repository.load_records()
        for row_number, _ in loaded.rejected:
            self._record_outcome(Outcome.REJECTED, row_number)

        self.shared_resources["records"] = loaded.records
        return True

    def _record_outcome(self, outcome: str, row_number: int) -> None:
        self.summary.add(outcome, row_number)
        record_record_outcome(self.workflow_type, outcome)

    def _log_failure(self, record: PaymentRecord, error: PayNotifyException) -> None:
        logger.error(f"{record}: {error}")
        logger.debug(f"{record}: error details {error.to_dict()}")
        self.summary.failures[record.row_number] = str(error)
        self._record_outcome(Outcome.FAILED, record.row_number)
