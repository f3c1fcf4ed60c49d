"""
Daily work API routes.

Provides the employee's office login and checkout, the work session
history, and the personal todo list whose completed items feed the
daily report.
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from sqlalchemy import asc, desc
from uuid import UUID, uuid4

from ...database.connection import get_db
from ...database.models import Todo, WorkSession
from ...schemas.work import (
    TodoCreateRequest, TodoResponse, TodosListResponse, WorkSessionResponse
)
from ...auth.dependencies import get_current_user, CurrentUser
from ...services import timekeeping, worklog

router = APIRouter(prefix="/work", tags=["Work"])


def _get_own_todo(db: Session, todo_id: UUID, current_user: CurrentUser) -> Todo:
    todo = db.query(Todo).filter(
        Todo.id == todo_id,
        Todo.user_id == current_user.user_id
    ).first()

    if not todo:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Todo not found"
        )
    return todo


# PUBLIC_INTERFACE
@router.post("/sessions/start", response_model=WorkSessionResponse,
            summary="Office login",
            description="Start a work session, or return the one already running.")
async def start_work_session(
    response: Response,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Start a work session.

    Logging in to the office twice does not open a second session; the
    running one is returned with status 200 instead of 201.
    """
    session, created = worklog.start_session(db, current_user.user_id)
    if created:
        db.commit()
        db.refresh(session)
        response.status_code = status.HTTP_201_CREATED

    return worklog.session_response(session)


# PUBLIC_INTERFACE
@router.get("/sessions/current", response_model=WorkSessionResponse,
           summary="Current work session",
           description="Get the running work session with its elapsed time.")
async def get_current_session(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Return the running session, or 404 when the caller is not logged in to the office."""
    session = worklog.get_active_session(db, current_user.user_id)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No active work session"
        )
    return worklog.session_response(session)


# PUBLIC_INTERFACE
@router.post("/checkout", response_model=WorkSessionResponse,
            summary="Checkout",
            description="Close the running work session.")
async def checkout(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Close the running session.

    Records the final duration and the number of completed todos.
    """
    session = worklog.checkout(db, current_user.user_id)
    db.commit()
    db.refresh(session)
    return worklog.session_response(session)


# PUBLIC_INTERFACE
@router.get("/sessions", response_model=List[WorkSessionResponse],
           summary="List work sessions",
           description="Get the caller's work sessions, newest first.")
async def list_sessions(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    sessions = db.query(WorkSession).filter(
        WorkSession.user_id == current_user.user_id
    ).order_by(desc(WorkSession.start_time)).all()

    now = timekeeping.utcnow()
    return [worklog.session_response(session, now=now) for session in sessions]


# PUBLIC_INTERFACE
@router.get("/todos", response_model=TodosListResponse,
           summary="List todos",
           description="Get the caller's todos, oldest first, and the completed subset.")
async def list_todos(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    todos = db.query(Todo).filter(
        Todo.user_id == current_user.user_id
    ).order_by(asc(Todo.created_at)).all()

    items = [TodoResponse.model_validate(todo) for todo in todos]
    return TodosListResponse(
        todos=items,
        completed=[item for item in items if item.completed]
    )


# PUBLIC_INTERFACE
@router.post("/todos", response_model=TodoResponse, status_code=status.HTTP_201_CREATED,
            summary="Add todo",
            description="Add a task to the caller's todo list.")
async def create_todo(
    request: TodoCreateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    todo = Todo(
        id=uuid4(),
        user_id=current_user.user_id,
        text=request.text,
        completed=False,
        created_at=timekeeping.utcnow()
    )

    db.add(todo)
    db.commit()
    db.refresh(todo)

    return TodoResponse.model_validate(todo)


# PUBLIC_INTERFACE
@router.post("/todos/{todo_id}/toggle", response_model=TodoResponse,
            summary="Toggle todo",
            description="Mark a todo done or not done.")
async def toggle_todo(
    todo_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Flip a todo's completed flag.

    Marking it done also records the task as completed work, stamped with
    the time elapsed in the running session.
    """
    todo = _get_own_todo(db, todo_id, current_user)

    worklog.toggle_todo(db, todo)
    db.commit()
    db.refresh(todo)

    return TodoResponse.model_validate(todo)


# PUBLIC_INTERFACE
@router.delete("/todos/{todo_id}", status_code=status.HTTP_204_NO_CONTENT,
              summary="Delete todo",
              description="Remove a todo from the caller's list.")
async def delete_todo(
    todo_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a todo; completed work already recorded is kept."""
    todo = _get_own_todo(db, todo_id, current_user)

    db.delete(todo)
    db.commit()

    return Response(status_code=status.HTTP_204_NO_CONTENT)
