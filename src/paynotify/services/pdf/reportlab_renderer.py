import io
from datetime import date, datetime
from typing import Callable, Optional
from xml.sax.saxutils import escape
from zoneinfo import ZoneInfo

from reportlab.graphics.shapes import Drawing, Line
from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_LEFT, TA_RIGHT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.cidfonts import UnicodeCIDFont
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from paynotify.exceptions import RenderError
from paynotify.models import PaymentRecord, Period
from paynotify.services.pdf.renderer import NotificationRenderer
from paynotify.utils import format_amount

# CID font bundled with reportlab, covers Japanese company and agent names
DEFAULT_FONT = "HeiseiKakuGo-W5"


class ReportLabRenderer(NotificationRenderer):
    """
    Builds the payment notification locally with reportlab instead of
    exporting the template sheet.
    """

    def __init__(
        self,
        issuer_name: str = "Accounts Payable",
        currency_symbol: str = "¥",
        timezone: str = "Asia/Tokyo",
        font_name: str = DEFAULT_FONT,
        today: Optional[Callable[[], date]] = None,
    ):
        self.issuer_name = issuer_name
        self.currency_symbol = currency_symbol
        self.font_name = font_name
        self._today = today or (lambda: datetime.now(ZoneInfo(timezone)).date())

        if font_name not in pdfmetrics.getRegisteredFontNames():
            pdfmetrics.registerFont(UnicodeCIDFont(font_name))

        self.styles = self._setup_styles()

    def _setup_styles(self):
        """Define the ParagraphStyles for the document."""
        styles = getSampleStyleSheet()

        styles.add(
            ParagraphStyle(
                name="NoticeHeader",
                fontSize=20,
                alignment=TA_CENTER,
                fontName=self.font_name,
                textColor=colors.Color(0.1, 0.1, 0.5),  # Dark blue
                spaceAfter=10,
            )
        )

        styles.add(
            ParagraphStyle(
                name="Recipient",
                fontSize=12,
                alignment=TA_LEFT,
                fontName=self.font_name,
                spaceAfter=4,
            )
        )

        styles.add(
            ParagraphStyle(
                name="IssueDate",
                fontSize=9,
                alignment=TA_RIGHT,
                fontName=self.font_name,
            )
        )

        styles.add(
            ParagraphStyle(
                name="FieldTitle", fontSize=10, fontName=self.font_name, alignment=TA_LEFT
            )
        )

        styles.add(
            ParagraphStyle(
                name="FieldBody", fontSize=10, fontName=self.font_name, alignment=TA_LEFT
            )
        )

        styles.add(
            ParagraphStyle(
                name="AmountTotal",
                fontSize=12,
                fontName=self.font_name,
                alignment=TA_LEFT,
            )
        )

        styles.add(
            ParagraphStyle(
                name="AmountTotalValue",
                fontSize=12,
                fontName=self.font_name,
                alignment=TA_RIGHT,
            )
        )

        styles.add(
            ParagraphStyle(
                name="Footer",
                fontSize=8,
                alignment=TA_CENTER,
                textColor=colors.grey,
                fontName=self.font_name,
            )
        )
        return styles

    def _create_horizontal_line(self, width: float = 16 * cm) -> Drawing:
        """Creates a horizontal line for section separation."""
        d = Drawing(width, 0.5 * cm)
        d.add(
            Line(
                0,
                0.25 * cm,
                width,
                0.25 * cm,
                strokeColor=colors.black,
                strokeWidth=0.5,
            )
        )
        return d

    def _field_table(self, rows) -> Table:
        data = [
            [
                Paragraph(escape(label), self.styles["FieldTitle"]),
                Paragraph(escape(value), self.styles["FieldBody"]),
            ]
            for label, value in rows
        ]
        table = Table(data, colWidths=[4.5 * cm, 11.5 * cm])
        table.setStyle(
            TableStyle(
                [
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("LEFTPADDING", (0, 0), (-1, -1), 0),
                    ("RIGHTPADDING", (0, 0), (-1, -1), 5),
                    ("TOPPADDING", (0, 0), (-1, -1), 3),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
                ]
            )
        )
        return table

    def render(self, record: PaymentRecord, period: Period) -> bytes:
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            leftMargin=2 * cm,
            rightMargin=2 * cm,
            topMargin=2 * cm,
            bottomMargin=2 * cm,
            title=f"Payment Notification {period.label}",
        )
        story = []

        story.append(
            Paragraph(
                f"Issued: {self._today().isoformat()}", self.styles["IssueDate"]
            )
        )
        story.append(Paragraph("Payment Notification", self.styles["NoticeHeader"]))
        story.append(self._create_horizontal_line())
        story.append(Spacer(1, 0.3 * cm))

        story.append(Paragraph(escape(record.company_name), self.styles["Recipient"]))
        story.append(
            Paragraph(f"{escape(record.agent_name)} 様", self.styles["Recipient"])
        )
        story.append(Spacer(1, 0.5 * cm))

        payment_month = (
            record.payment_month.strftime("%Y/%m")
            if record.payment_month
            else str(record.raw_payment_month or "")
        )
        story.append(
            self._field_table(
                [
                    ("Payment month:", payment_month),
                    ("Bank account:", record.bank_account),
                    ("Issuer:", self.issuer_name),
                ]
            )
        )
        story.append(Spacer(1, 0.5 * cm))

        amount_table = Table(
            [
                [
                    Paragraph("Payment amount", self.styles["AmountTotal"]),
                    Paragraph(
                        escape(format_amount(record.amount, self.currency_symbol)),
                        self.styles["AmountTotalValue"],
                    ),
                ]
            ],
            colWidths=[12 * cm, 4 * cm],
        )
        amount_table.setStyle(
            TableStyle(
                [
                    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                    ("LEFTPADDING", (0, 0), (-1, -1), 0),
                    ("RIGHTPADDING", (0, 0), (-1, -1), 0),
                    ("LINEBELOW", (0, 0), (-1, -1), 0.5, colors.black),
                ]
            )
        )
        story.append(amount_table)

        story.append(Spacer(1, 1 * cm))
        story.append(
            Paragraph(
                "This notification was generated automatically.", self.styles["Footer"]
            )
        )

        try:
            doc.build(story)
        except Exception as e:
            raise RenderError(
                f"Failed to build PDF for row {record.row_number}", original_exception=e
            )

        return buffer.getvalue()
