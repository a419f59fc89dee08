"""
Distribution workflow: email approved notifications to their recipients.
"""

import time
from typing import Callable, Dict, Optional

from loguru import logger

from paynotify.config import AppConfig
from paynotify.exceptions import BusinessException, ExternalServiceException
from paynotify.models import Outcome, PaymentRecord, StatusTag
from paynotify.services.eligibility import select_for_distribution
from paynotify.services.gmail import MessageTransport
from paynotify.services.naming import NotificationName
from paynotify.services.notification_mail import compose_notification
from paynotify.services.records import PaymentRecordRepository
from paynotify.services.storage import DocumentStore, StoredFile
from paynotify.workflows.base import WorkflowStep
from paynotify.workflows.notification_workflow import NotificationWorkflow


class DistributionWorkflow(NotificationWorkflow):
    """
    Sends the stored PDF of every approved row and marks it sent.

    The payment month is re-validated before anything else; rows whose
    PDF cannot be found are tagged instead of sent.
    """

    workflow_type = "distribution"

    def __init__(
        self,
        app_config: Optional[AppConfig] = None,
        repository: Optional[PaymentRecordRepository] = None,
        document_store: Optional[DocumentStore] = None,
        transport: Optional[MessageTransport] = None,
        dry_run: bool = False,
        sleep: Callable[[float], None] = time.sleep,
    ):
        super().__init__(
            "distribution_workflow",
            "Payment Notification Distribution",
            "Email approved payment notifications",
            app_config=app_config,
            repository=repository,
            document_store=document_store,
            dry_run=dry_run,
        )
        self.transport = transport
        self._sleep = sleep
        self.define_steps()

    def define_steps(self):
        """Define the steps for the distribution workflow."""
        self.add_step(
            WorkflowStep(
                name="initialize_services",
                description="Connect to the sheet, document store and mail transport",
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
                description="Keep rows approved for sending",
                handler=self._select_records,
                depends_on=["load_records"],
            )
        )

        self.add_step(
            WorkflowStep(
                name="send_notifications",
                description="Locate, send and mark each approved row",
                handler=self._send_notifications,
                depends_on=["select_records"],
            )
        )

    def _initialize_services(self) -> bool:
        self._initialize_common()
        if self.transport is None and not self.dry_run:
            self.transport = self._service_factory().create_transport()
        self.shared_resources["folder_ids"] = {}
        return True

    def _select_records(self) -> bool:
        approved = select_for_distribution(self.shared_resources["records"])
        self.shared_resources["approved"] = approved
        logger.info(f"{len(approved)} rows approved for sending")
        return True

    def _send_notifications(self) -> bool:
        approved = self.shared_resources["approved"]
        if not approved:
            logger.info("No rows to send")
            return True

        for record in approved:
            self._send_one(record)

        logger.info(f"Distribution finished: {self.summary.describe()}")
        return True

    def _find_folder(self, folder_name: str) -> Optional[str]:
        folder_ids: Dict[str, Optional[str]] = self.shared_resources["folder_ids"]
        if folder_name not in folder_ids:
            folder_ids[folder_name] = self.document_store.find_folder(folder_name)
        return folder_ids[folder_name]

    def locate_pdf(self, record: PaymentRecord) -> Optional[StoredFile]:
        """Find the record's PDF, trying the unique name before the base name."""
        period = record.period
        folder_id = self._find_folder(period.folder_name)
        if folder_id is None:
            return None

        name = NotificationName.for_record(record, period)
        for candidate in name.lookup_order():
            stored = self.document_store.find_file(folder_id, candidate)
            if stored is not None:
                return stored
        return None

    def _mark(self, record: PaymentRecord, status: StatusTag, outcome: str) -> None:
        if not self.dry_run:
            self.repository.update_status(record, status)
        self._record_outcome(outcome, record.row_number)

    def _send_one(self, record: PaymentRecord) -> None:
        try:
            if not record.has_valid_payment_month:
                logger.warning(
                    f"{record}: payment month {record.raw_payment_month!r} "
                    "is not a valid date"
                )
                self._mark(record, StatusTag.ERROR_INVALID_DATE, Outcome.INVALID_DATE)
                return

            stored = self.locate_pdf(record)
            if stored is None:
                logger.warning(f"{record}: notification PDF not found")
                self._mark(record, StatusTag.ERROR_PDF_NOT_FOUND, Outcome.PDF_NOT_FOUND)
                return

            if self.dry_run:
                logger.info(f"[dry run] would send {stored.name} for {record}")
                self._record_outcome(Outcome.SENT, record.row_number)
                return

            content = self.document_store.read_file(stored)
            message = compose_notification(
                record,
                record.period,
                stored.name,
                content,
                self.app_config.mail,
                currency_symbol=self.app_config.currency_symbol,
            )
            self.transport.send(message)
        except (BusinessException, ExternalServiceException) as e:
            self._log_failure(record, e)
            return

        try:
            self.repository.update_status(record, StatusTag.SENT)
        except (BusinessException, ExternalServiceException) as e:
            logger.error(
                f"{record}: message was sent but the status could not be updated, "
                f"fix the row manually before the next run: {e}"
            )
            self.summary.failures[record.row_number] = f"sent, status not updated: {e}"
            self._record_outcome(Outcome.FAILED, record.row_number)
        else:
            self._record_outcome(Outcome.SENT, record.row_number)

        self._sleep(self.app_config.mail.send_delay_seconds)
