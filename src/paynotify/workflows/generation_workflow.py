"""
Generation workflow: one PDF payment notification per eligible row.
"""

from datetime import date
from typing import Optional, Set

from loguru import logger

from paynotify.config import AppConfig
from paynotify.exceptions import BusinessException, ExternalServiceException
from paynotify.models import Outcome, PaymentRecord, Period, StatusTag
from paynotify.services.eligibility import select_for_generation
from paynotify.services.naming import NotificationName, choose_file_name
from paynotify.services.pdf import NotificationRenderer
from paynotify.services.records import PaymentRecordRepository
from paynotify.services.storage import DocumentStore, StoredFile
from paynotify.workflows.base import WorkflowStep
from paynotify.workflows.notification_workflow import NotificationWorkflow


class GenerationWorkflow(NotificationWorkflow):
    """
    Renders a notification for every row of the current period whose
    status is blank and whose check column is cleared, then marks the row
    pending approval. Rows failing the check are flagged with a warning
    before any rendering starts.
    """

    workflow_type = "generation"

    def __init__(
        self,
        app_config: Optional[AppConfig] = None,
        repository: Optional[PaymentRecordRepository] = None,
        document_store: Optional[DocumentStore] = None,
        renderer: Optional[NotificationRenderer] = None,
        run_date: Optional[date] = None,
        dry_run: bool = False,
    ):
        super().__init__(
            "generation_workflow",
            "Payment Notification Generation",
            "Generate payment notification PDFs for the current period",
            app_config=app_config,
            repository=repository,
            document_store=document_store,
            dry_run=dry_run,
        )
        self.renderer = renderer
        self.run_date = run_date
        self.define_steps()

    @property
    def period(self) -> Period:
        if self.run_date is not None:
            return Period.from_date(self.run_date)
        return Period.current(self.app_config.timezone)

    def define_steps(self):
        """Define the steps for the generation workflow."""
        self.add_step(
            WorkflowStep(
                name="initialize_services",
                description="Connect to the sheet, document store and renderer",
                handler=self._initialize_services,
            )
        )

        self.add_step(
            WorkflowStep(
                name="load_records",
                description="Read all payment rows",
                handler=self._load_records,
                depends_on=["initialize_services"],
            )
        )

        self.add_step(
            WorkflowStep(
                name="select_records",
                description="Split current-period rows into to-process and warning",
                handler=self._select_records,
                depends_on=["load_records"],
            )
        )

        self.add_step(
            WorkflowStep(
                name="flag_warnings",
                description="Mark rows with a non-zero check value",
                handler=self._flag_warnings,
                depends_on=["select_records"],
            )
        )

        self.add_step(
            WorkflowStep(
                name="generate_notifications",
                description="Render, store and mark each eligible row",
                handler=self._generate_notifications,
                depends_on=["flag_warnings"],
            )
        )

    def _initialize_services(self) -> bool:
        self._initialize_common()
        if self.renderer is None:
            self.renderer = self._service_factory().create_renderer(self.run_id)
        self.renderer.verify()

        self.shared_resources["period"] = self.period
        self.summary.period = self.period.label
        logger.info(f"Generating notifications for period {self.period.label}")
        return True

    def _select_records(self) -> bool:
        selection = select_for_generation(
            self.shared_resources["records"], self.shared_resources["period"]
        )
        self.shared_resources["to_process"] = selection.to_process
        self.shared_resources["warnings"] = selection.warnings

        logger.info(
            f"{len(selection.to_process)} rows to generate, "
            f"{len(selection.warnings)} rows to flag"
        )
        return True

    def _flag_warnings(self) -> bool:
        warnings = self.shared_resources["warnings"]
        if not warnings:
            return True

        if self.dry_run:
            for record in warnings:
                self._record_outcome(Outcome.WARNING, record.row_number)
            return True

        updated, stale = self.repository.update_statuses(
            warnings, StatusTag.APPROVAL_WARNING
        )
        for record in updated:
            logger.warning(
                f"{record}: check value {record.check_value!r} is not zero, "
                "flagged for review"
            )
            self._record_outcome(Outcome.WARNING, record.row_number)
        for error in stale:
            self._record_outcome(Outcome.STALE, error.row_number)
        return True

    def _generate_notifications(self) -> bool:
        records = self.shared_resources["to_process"]
        period: Period = self.shared_resources["period"]
        if not records:
            logger.info("No rows to generate")
            return True

        if self.dry_run:
            for record in records:
                logger.info(f"[dry run] would generate notification for {record}")
                self._record_outcome(Outcome.GENERATED, record.row_number)
            return True

        folder_id = self.document_store.ensure_folder(period.folder_name)
        existing_names = self.document_store.list_file_names(folder_id)

        for record in records:
            self._generate_one(record, period, folder_id, existing_names)

        logger.info(f"Generation finished: {self.summary.describe()}")
        return True

    def _generate_one(
        self,
        record: PaymentRecord,
        period: Period,
        folder_id: str,
        existing_names: Set[str],
    ) -> None:
        name = NotificationName.for_record(record, period)

        try:
            file_name = choose_file_name(name, existing_names, period.folder_name)
            content = self.renderer.render(record, period)
            stored = self.document_store.save_pdf(folder_id, file_name, content)
            existing_names.add(file_name)
        except (BusinessException, ExternalServiceException) as e:
            self._log_failure(record, e)
            return

        try:
            self.repository.update_status(record, StatusTag.PENDING_APPROVAL)
        except (BusinessException, ExternalServiceException) as e:
            # The row stays untagged, so the next run renders it again
            if self._discard(stored):
                existing_names.discard(file_name)
            self._log_failure(record, e)
            return

        logger.info(f"{record}: saved {file_name}")
        self._record_outcome(Outcome.GENERATED, record.row_number)

    def _discard(self, stored: StoredFile) -> bool:
        try:
            self.document_store.delete_file(stored)
        except ExternalServiceException as e:
            logger.error(
                f"{stored.name} was saved but its row was not updated, "
                f"and removing it failed: {e}"
            )
            return False
        return True
