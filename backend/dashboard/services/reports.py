"""
End-of-day report assembly and rendering.

The report lists the tasks an employee completed on one local calendar day
together with the client they are assigned to. It renders as plain text or
as a PDF built with reportlab.
"""
import io
import logging
from datetime import date, datetime
from typing import Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
from sqlalchemy import desc
from sqlalchemy.orm import Session

from .. import config
from ..database.models import Client, DoneWork, User, WorkSession
from ..schemas.report import DailyReportResponse, ReportEmployee, ReportTask
from . import timekeeping
from .assignment import UNNAMED_CLIENT

logger = logging.getLogger(__name__)

NO_CLIENT = "No client assigned"
NO_TASKS = "No tasks completed today."


def resolve_client_name(db: Session, user: User) -> str:
    """Name of the user's assigned client, or a placeholder."""
    if not user.assigned_client_id:
        return NO_CLIENT
    client = db.get(Client, user.assigned_client_id)
    if client is None or not client.name:
        return UNNAMED_CLIENT
    return client.name


# PUBLIC_INTERFACE
def build_daily_report(db: Session, user: User, day: Optional[date] = None,
                       tz: Optional[str] = None) -> DailyReportResponse:
    """
    Collect the data for one employee's daily report.

    Args:
        db: Database session
        user: Employee the report is for
        day: Local calendar day (default: today in ``tz``)
        tz: Timezone name (default: the configured report timezone)

    Returns:
        DailyReportResponse: Report data
    """
    tz = tz or config.REPORT_TIMEZONE
    day = day or timekeeping.local_today(tz)
    start, end = timekeeping.day_bounds(day, tz)

    done = db.query(DoneWork).filter(
        DoneWork.user_id == user.id,
        DoneWork.completed_at >= start,
        DoneWork.completed_at <= end
    ).order_by(desc(DoneWork.completed_at)).all()

    sessions = db.query(WorkSession).filter(
        WorkSession.user_id == user.id,
        WorkSession.start_time >= start,
        WorkSession.start_time <= end
    ).all()

    return DailyReportResponse(
        date=day,
        timezone=tz,
        employee=ReportEmployee.model_validate(user),
        client_name=resolve_client_name(db, user),
        tasks=[ReportTask.model_validate(item) for item in done],
        total_tasks=len(done),
        hours_worked=timekeeping.hours_worked(sessions),
        generated_at=timekeeping.utcnow()
    )


def _local_time(value: datetime, tz: str) -> str:
    return timekeeping.as_utc(value).astimezone(timekeeping.get_zone(tz)).strftime("%H:%M")


# PUBLIC_INTERFACE
def render_text(report: DailyReportResponse, notes: Optional[str] = None) -> str:
    """Render a report as plain text."""
    lines = [
        "Daily Work Report",
        "=================",
        f"Date: {report.date.isoformat()}",
        f"Employee: {report.employee.name} <{report.employee.email}>",
        f"Client: {report.client_name}",
        "",
    ]
    if report.tasks:
        lines.append(f"Completed tasks ({report.total_tasks}):")
        for index, task in enumerate(report.tasks, start=1):
            lines.append(f"  {index}. [{_local_time(task.completed_at, report.timezone)}] {task.task}")
    else:
        lines.append(NO_TASKS)
    lines.append("")
    lines.append(f"Hours worked: {report.hours_worked:.2f}")
    lines.append("")
    lines.append("Notes / Feedback:")
    lines.append(notes.strip() if notes and notes.strip() else "(none)")
    return "\n".join(lines) + "\n"


# PUBLIC_INTERFACE
def render_pdf(report: DailyReportResponse, notes: Optional[str] = None) -> bytes:
    """Render a report as a single-page A4 PDF."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=A4,
        leftMargin=40,
        rightMargin=40,
        topMargin=40,
        bottomMargin=32,
        title=f"Daily Work Report {report.date.isoformat()}",
        author=report.employee.name,
    )
    styles = getSampleStyleSheet()
    title_style = styles["Title"]
    title_style.textColor = colors.HexColor("#0f172a")
    subtitle_style = styles["Heading4"]
    subtitle_style.fontName = "Helvetica"
    subtitle_style.textColor = colors.HexColor("#475569")
    cell_style = ParagraphStyle("ReportCell", parent=styles["BodyText"], leading=12)

    elements = [
        Paragraph("Daily Work Report", title_style),
        Paragraph(
            f"{report.date.strftime('%d %b %Y')} &ndash; {escape(report.employee.name)}",
            subtitle_style,
        ),
        Spacer(1, 10),
        Paragraph(f"<b>Client:</b> {escape(report.client_name)}", styles["BodyText"]),
        Paragraph(f"<b>Hours worked:</b> {report.hours_worked:.2f}", styles["BodyText"]),
        Spacer(1, 14),
    ]

    if report.tasks:
        data = [[Paragraph("<b>#</b>", cell_style), Paragraph("<b>Task</b>", cell_style),
                 Paragraph("<b>Time</b>", cell_style)]]
        for index, task in enumerate(report.tasks, start=1):
            data.append([
                Paragraph(str(index), cell_style),
                Paragraph(escape(task.task), cell_style),
                Paragraph(_local_time(task.completed_at, report.timezone), cell_style),
            ])
        table = Table(data, repeatRows=1, hAlign="LEFT",
                      colWidths=[0.4 * doc.width / 4, 3.0 * doc.width / 4, 0.6 * doc.width / 4])
        table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#0f766e")),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.HexColor("#f8fafc"), colors.HexColor("#e2e8f0")]),
                    ("BOX", (0, 0), (-1, -1), 0.6, colors.HexColor("#0f172a")),
                    ("LEFTPADDING", (0, 0), (-1, -1), 8),
                    ("RIGHTPADDING", (0, 0), (-1, -1), 8),
                ]
            )
        )
        elements.append(table)
    else:
        elements.append(Paragraph(NO_TASKS, styles["BodyText"]))

    elements.append(Spacer(1, 16))
    elements.append(Paragraph("Notes / Feedback", styles["Heading3"]))
    body = escape(notes.strip()).replace("\n", "<br/>") if notes and notes.strip() else "(none)"
    elements.append(Paragraph(body, styles["BodyText"]))

    doc.build(elements)
    logger.info("Rendered PDF report for %s on %s", report.employee.email, report.date)
    return buf.getvalue()
