from paynotify.services.pdf.renderer import NotificationRenderer
from paynotify.services.pdf.reportlab_renderer import ReportLabRenderer
from paynotify.services.pdf.sheet_export_renderer import SheetExportRenderer

__all__ = ["NotificationRenderer", "ReportLabRenderer", "SheetExportRenderer"]
