"""
Work session and todo bookkeeping for the signed-in employee.

Office login opens a work session, completing a todo records a done-work
entry stamped with the session's elapsed time, and checkout closes the
session with its final duration.
"""
import logging
from datetime import datetime
from typing import Optional, Tuple
from uuid import UUID, uuid4

from fastapi import HTTPException, status
from sqlalchemy import desc, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..database.models import DoneWork, SessionStatus, Todo, WorkSession
from ..schemas.work import WorkSessionResponse
from . import timekeeping

logger = logging.getLogger(__name__)


def get_active_session(db: Session, user_id: UUID) -> Optional[WorkSession]:
    """Most recently started session that has not been checked out."""
    return db.query(WorkSession).filter(
        WorkSession.user_id == user_id,
        WorkSession.status == SessionStatus.ACTIVE
    ).order_by(desc(WorkSession.start_time)).first()


def start_session(db: Session, user_id: UUID, now: Optional[datetime] = None) -> Tuple[WorkSession, bool]:
    """
    Open a work session unless one is already running.

    The insert is flushed immediately so the one-running-session index
    rejects a concurrent login; the losing request returns the winner's
    session.

    Returns:
        Tuple[WorkSession, bool]: The running session and whether it was
        created by this call
    """
    active = get_active_session(db, user_id)
    if active is not None:
        return active, False

    session = WorkSession(
        id=uuid4(),
        user_id=user_id,
        start_time=now or timekeeping.utcnow(),
        status=SessionStatus.ACTIVE,
        tasks_completed=0
    )
    db.add(session)
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        active = get_active_session(db, user_id)
        if active is None:
            raise
        logger.info("Work session for user %s was opened concurrently", user_id)
        return active, False

    logger.info("Started work session %s for user %s", session.id, user_id)
    return session, True


def completed_todo_count(db: Session, user_id: UUID) -> int:
    return db.query(func.count(Todo.id)).filter(
        Todo.user_id == user_id,
        Todo.completed == True
    ).scalar() or 0


def checkout(db: Session, user_id: UUID, now: Optional[datetime] = None) -> WorkSession:
    """
    Close the running session with its final duration and task count.

    Raises:
        HTTPException: If no session is running
    """
    session = get_active_session(db, user_id)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No active work session"
        )

    end_time = now or timekeeping.utcnow()
    session.end_time = end_time
    session.duration_seconds = timekeeping.elapsed_seconds(session.start_time, end_time)
    session.tasks_completed = completed_todo_count(db, user_id)
    session.status = SessionStatus.COMPLETED
    logger.info("Checked out session %s after %ss", session.id, session.duration_seconds)
    return session


def toggle_todo(db: Session, todo: Todo, now: Optional[datetime] = None) -> Optional[DoneWork]:
    """
    Flip a todo's completed flag.

    Marking a todo done records a done-work entry carrying the running
    session's elapsed seconds (0 when no session is running). Un-marking
    does not remove earlier records.
    """
    todo.completed = not todo.completed
    if not todo.completed:
        return None

    current = now or timekeeping.utcnow()
    active = get_active_session(db, todo.user_id)
    elapsed = timekeeping.elapsed_seconds(active.start_time, now=current) if active else 0

    record = DoneWork(
        id=uuid4(),
        user_id=todo.user_id,
        task=todo.text,
        completed_at=current,
        work_session_duration=elapsed
    )
    db.add(record)
    return record


def session_response(session: WorkSession, now: Optional[datetime] = None) -> WorkSessionResponse:
    elapsed = timekeeping.session_seconds(session, now=now)
    return WorkSessionResponse(
        id=session.id,
        start_time=session.start_time,
        end_time=session.end_time,
        duration_seconds=session.duration_seconds,
        elapsed_seconds=elapsed,
        elapsed=timekeeping.format_duration(elapsed),
        tasks_completed=session.tasks_completed,
        status=session.status.value
    )
