"""
Report API routes.

Provides the signed-in employee's end-of-day report as JSON, plain text,
or a downloadable PDF.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Response
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from ...database.connection import get_db
from ...database.models import User
from ...schemas.report import DailyReportResponse, ReportRenderRequest
from ...auth.dependencies import get_current_user, CurrentUser
from ...services import reports

router = APIRouter(prefix="/reports", tags=["Reports"])


def _build_report(db: Session, current_user: CurrentUser) -> DailyReportResponse:
    user = db.get(User, current_user.user_id)
    return reports.build_daily_report(db, user)


# PUBLIC_INTERFACE
@router.get("/daily", response_model=DailyReportResponse,
           summary="Daily report",
           description="Get today's completed tasks, client and hours for the caller.")
async def get_daily_report(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Build the caller's report for today.

    "Today" is the current calendar day in the configured report timezone.
    """
    return _build_report(db, current_user)


# PUBLIC_INTERFACE
@router.post("/daily/text", response_class=PlainTextResponse,
            summary="Daily report as text",
            description="Render today's report with the caller's notes as plain text.")
async def render_daily_report_text(
    request: Optional[ReportRenderRequest] = None,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    report = _build_report(db, current_user)
    notes = request.notes if request else None
    return PlainTextResponse(reports.render_text(report, notes))


# PUBLIC_INTERFACE
@router.post("/daily/pdf",
            summary="Daily report as PDF",
            description="Render today's report with the caller's notes as a PDF download.",
            responses={200: {"content": {"application/pdf": {}}}})
async def render_daily_report_pdf(
    request: Optional[ReportRenderRequest] = None,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    report = _build_report(db, current_user)
    notes = request.notes if request else None
    content = reports.render_pdf(report, notes)

    filename = f"daily-report-{report.date.isoformat()}.pdf"
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )
