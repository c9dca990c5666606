"""
Calendar PDF Service
Renders generated calendar reports (monthly or term) as PDF documents.
"""

import io
from xml.sax.saxutils import escape
from typing import List
from reportlab.lib.pagesizes import letter
from reportlab.lib.units import inch
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib.enums import TA_LEFT

from app.schemas.calendar_report import MonthlyCalendarReport, TermCalendarReport, ReportSummary


class CalendarPdfService:
    """Service for rendering calendar reports to PDF."""

    def __init__(self, title: str = "Academic Calendar Report"):
        self.title = title
        self.page_width, self.page_height = letter
        self.left_margin = 0.75 * inch
        self.right_margin = 0.75 * inch
        self.top_margin = 0.75 * inch
        self.bottom_margin = 0.75 * inch

        styles = getSampleStyleSheet()
        self.title_style = ParagraphStyle(
            'CalendarTitle',
            parent=styles['Heading1'],
            fontSize=20,
            textColor=colors.HexColor('#1e3a8a'),
            spaceAfter=12,
            alignment=TA_LEFT,
            fontName='Helvetica-Bold'
        )
        self.heading_style = ParagraphStyle(
            'CalendarHeading',
            parent=styles['Heading2'],
            fontSize=14,
            textColor=colors.HexColor('#1e40af'),
            spaceAfter=8,
            spaceBefore=12,
            fontName='Helvetica-Bold'
        )
        self.normal_style = ParagraphStyle(
            'CalendarNormal',
            parent=styles['Normal'],
            fontSize=10,
            leading=14
        )

    @property
    def available_width(self) -> float:
        return self.page_width - self.left_margin - self.right_margin

    @staticmethod
    def _table_style(header: bool = False) -> TableStyle:
        commands = [
            ('TEXTCOLOR', (0, 0), (-1, -1), colors.black),
            ('ALIGN', (0, 0), (-1, -1), 'LEFT'),
            ('FONTNAME', (0, 0), (-1, -1), 'Helvetica'),
            ('FONTSIZE', (0, 0), (-1, -1), 9),
            ('GRID', (0, 0), (-1, -1), 0.5, colors.grey),
            ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
            ('LEFTPADDING', (0, 0), (-1, -1), 6),
            ('RIGHTPADDING', (0, 0), (-1, -1), 6),
            ('TOPPADDING', (0, 0), (-1, -1), 4),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 4),
        ]
        if header:
            commands += [
                ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#f3f4f6')),
                ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ]
        else:
            commands += [
                ('BACKGROUND', (0, 0), (0, -1), colors.HexColor('#f3f4f6')),
                ('FONTNAME', (0, 0), (0, -1), 'Helvetica-Bold'),
            ]
        return TableStyle(commands)

    def _info_table(self, rows: List[List[str]]) -> Table:
        table = Table(rows, colWidths=[2.5*inch, self.available_width - 2.5*inch])
        table.setStyle(self._table_style())
        return table

    def _summary_elements(self, summary: ReportSummary) -> list:
        elements = []

        elements.append(Paragraph("Summary", self.heading_style))
        elements.append(self._info_table([
            ['Total Events:', str(summary.total_events)],
            ['Total Holidays:', str(summary.total_holidays)],
            ['Working Days:', str(summary.working_days)],
        ]))
        elements.append(Spacer(1, 0.2 * inch))

        elements.append(Paragraph("Holidays", self.heading_style))
        if summary.holidays_by_type:
            rows = [['Type', 'Name', 'Dates', 'Created By']]
            for group in summary.holidays_by_type:
                for record in group.records:
                    rows.append([
                        f"{group.type} ({group.count})",
                        record.name,
                        f"{record.start_date:%d %b %Y} - {record.end_date:%d %b %Y}",
                        record.created_by
                    ])
            elements.append(self._records_table(rows))
        else:
            elements.append(Paragraph("No holidays in this period.", self.normal_style))
        elements.append(Spacer(1, 0.2 * inch))

        elements.append(Paragraph("Academic Events", self.heading_style))
        if summary.events_by_type:
            rows = [['Type', 'Name', 'Dates', 'Academic Cycle']]
            for group in summary.events_by_type:
                for record in group.records:
                    rows.append([
                        f"{group.type} ({group.count})",
                        record.name,
                        f"{record.start_date:%d %b %Y} - {record.end_date:%d %b %Y}",
                        record.academic_cycle or 'N/A'
                    ])
            elements.append(self._records_table(rows))
        else:
            elements.append(Paragraph("No academic events in this period.", self.normal_style))

        return elements

    def _records_table(self, rows: List[List[str]]) -> Table:
        width = self.available_width
        table = Table(rows, colWidths=[width * 0.2, width * 0.35, width * 0.25, width * 0.2], repeatRows=1)
        table.setStyle(self._table_style(header=True))
        return table

    def _build(self, elements: list) -> io.BytesIO:
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=letter,
            leftMargin=self.left_margin,
            rightMargin=self.right_margin,
            topMargin=self.top_margin,
            bottomMargin=self.bottom_margin
        )
        doc.build(elements)

        buffer.seek(0)
        return buffer

    def render_monthly_report(self, report: MonthlyCalendarReport) -> io.BytesIO:
        """Render a monthly report. Returns a BytesIO buffer containing the PDF."""
        elements = [
            Paragraph(escape(f"{self.title}: {report.period.month}"), self.title_style),
            Spacer(1, 0.2 * inch),
            self._info_table([
                ['Period:', f"{report.period.start:%d %b %Y} - {report.period.end:%d %b %Y}"],
                ['Campus:', str(report.campus_id) if report.campus_id else 'All campuses'],
            ]),
            Spacer(1, 0.3 * inch),
        ]
        elements += self._summary_elements(report.summary)
        return self._build(elements)

    def render_term_report(self, report: TermCalendarReport) -> io.BytesIO:
        """Render a term report followed by a short line per month."""
        elements = [
            Paragraph(escape(f"{self.title}: {report.term.name}"), self.title_style),
            Spacer(1, 0.2 * inch),
            self._info_table([
                ['Term:', report.term.name],
                ['Academic Cycle:', report.term.academic_cycle or 'N/A'],
                ['Dates:', f"{report.term.start_date:%d %b %Y} - {report.term.end_date:%d %b %Y}"],
                ['Campus:', str(report.campus_id) if report.campus_id else 'All campuses'],
            ]),
            Spacer(1, 0.3 * inch),
        ]
        elements += self._summary_elements(report.summary)

        if report.monthly_breakdowns:
            elements.append(Paragraph("Monthly Breakdown", self.heading_style))
            rows = [['Month', 'Events', 'Holidays', 'Working Days']]
            for month in report.monthly_breakdowns:
                rows.append([
                    month.period.month,
                    str(month.summary.total_events),
                    str(month.summary.total_holidays),
                    str(month.summary.working_days)
                ])
            table = Table(rows, colWidths=[self.available_width / 4] * 4, repeatRows=1)
            table.setStyle(self._table_style(header=True))
            elements.append(table)

        return self._build(elements)
