"""
SQLAlchemy database models for the business dashboard.

Defines the tables for staff accounts, client records, and the per-employee
daily history: todos, completed work, and work sessions.
"""
import uuid
from datetime import datetime, timezone
from sqlalchemy import (
    Column, String, Integer, Boolean, DateTime, Text, Uuid,
    ForeignKey, JSON, Index, Enum, text
)
from sqlalchemy.orm import declarative_base, relationship
import enum

Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserRole(str, enum.Enum):
    """Roles a staff account can hold."""
    ADMIN = "admin"
    EMPLOYEE = "employee"


class SessionStatus(str, enum.Enum):
    """Work session lifecycle states."""
    ACTIVE = "active"
    COMPLETED = "completed"


class User(Base):
    """Staff account with its profile and client assignment."""
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(Enum(UserRole), nullable=False, default=UserRole.EMPLOYEE)
    active = Column(Boolean, nullable=False, default=True)
    last_login = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=utcnow)

    # Profile
    phone_number = Column(String(50), nullable=True)
    department = Column(String(100), nullable=True)
    location = Column(String(255), nullable=True)
    bio = Column(Text, nullable=True)
    skills = Column(JSON, nullable=False, default=list)
    job_title = Column(String(255), nullable=True)
    employee_code = Column(String(100), nullable=True)

    # Assignment, mirrored by Client.assigned_employees
    assigned_client_id = Column(Uuid(as_uuid=True), ForeignKey("clients.id", ondelete="SET NULL"), nullable=True)
    company_name = Column(String(255), nullable=True)

    # Relationships
    assigned_client = relationship("Client", foreign_keys=[assigned_client_id])
    todos = relationship("Todo", back_populates="user", cascade="all, delete-orphan")
    done_work = relationship("DoneWork", back_populates="user", cascade="all, delete-orphan")
    work_sessions = relationship("WorkSession", back_populates="user", cascade="all, delete-orphan")

    __table_args__ = (
        Index('idx_user_active', 'active'),
        Index('idx_user_created_at', 'created_at'),
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role={self.role})>"


class Client(Base):
    """Business customer record."""
    __tablename__ = "clients"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    country = Column(String(100), nullable=True)
    state = Column(String(100), nullable=True)
    timezone = Column(String(64), nullable=True)
    plan = Column(String(255), nullable=True)
    business_type = Column(String(100), nullable=True)
    tech_stack = Column(JSON, nullable=False, default=list)
    # Employee ids as strings, mirrored by User.assigned_client_id
    assigned_employees = Column(JSON, nullable=False, default=list)
    plan_end_date = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=utcnow)

    __table_args__ = (
        Index('idx_client_created_at', 'created_at'),
    )

    def __repr__(self):
        return f"<Client(id={self.id}, name='{self.name}')>"


class Todo(Base):
    """A task an employee plans for the day."""
    __tablename__ = "todos"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False)
    text = Column(Text, nullable=False)
    completed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    user = relationship("User", back_populates="todos")

    __table_args__ = (
        Index('idx_todo_user', 'user_id'),
    )

    def __repr__(self):
        return f"<Todo(id={self.id}, user_id={self.user_id}, completed={self.completed})>"


class DoneWork(Base):
    """Record of a completed task, the source of the daily report."""
    __tablename__ = "done_work"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False)
    task = Column(Text, nullable=False)
    completed_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    work_session_duration = Column(Integer, nullable=False, default=0)  # seconds

    user = relationship("User", back_populates="done_work")

    __table_args__ = (
        Index('idx_done_work_user_completed', 'user_id', 'completed_at'),
    )

    def __repr__(self):
        return f"<DoneWork(id={self.id}, user_id={self.user_id})>"


class WorkSession(Base):
    """Interval between office login and checkout."""
    __tablename__ = "work_sessions"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False)
    start_time = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    end_time = Column(DateTime(timezone=True), nullable=True)
    duration_seconds = Column(Integer, nullable=True)
    tasks_completed = Column(Integer, nullable=False, default=0)
    status = Column(Enum(SessionStatus), nullable=False, default=SessionStatus.ACTIVE)

    user = relationship("User", back_populates="work_sessions")

    __table_args__ = (
        Index('idx_work_session_user_start', 'user_id', 'start_time'),
        Index('idx_work_session_status', 'status'),
        # At most one running session per user
        Index('uq_work_session_user_active', 'user_id', unique=True,
              sqlite_where=text("status = 'ACTIVE'"),
              postgresql_where=text("status = 'ACTIVE'")),
    )

    def __repr__(self):
        return f"<WorkSession(id={self.id}, user_id={self.user_id}, status={self.status})>"
