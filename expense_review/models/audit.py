"""
Audit Models for Weekly Expense Review

Every ledger mutation, refused input and storage hiccup is recorded as an
audit event. This provides:
1. A trace of what happened to the ledger during a session
2. Visibility into failures that are deliberately absorbed (storage errors)
3. Debugging information when a user says "my expense disappeared"

DESIGN DECISION: Audit events are append-only. We never modify them.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Ledger persistence
    LEDGER_LOADED = "ledger_loaded"
    LEDGER_LOAD_FAILED = "ledger_load_failed"
    LEDGER_SAVED = "ledger_saved"
    LEDGER_SAVE_FAILED = "ledger_save_failed"
    
    # Record lifecycle
    EXPENSE_ADDED = "expense_added"
    EXPENSE_REJECTED = "expense_rejected"
    EXPENSE_DELETED = "expense_deleted"
    EXPENSE_DELETE_MISSED = "expense_delete_missed"
    
    # Navigation
    WEEK_CHANGED = "week_changed"
    
    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.
    
    This is the core unit of our audit trail.
    """
    
    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="When the event occurred (UTC)"
    )
    
    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )
    
    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'expense', 'ledger', 'week')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )
    
    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    
    error_message: Optional[str] = None
    
    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )
    
    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.
    
    Usage:
        event = AuditEventBuilder.expense_added(expense_id, "Coffee", "4.50", "Food")
        event = AuditEventBuilder.ledger_save_failed("expenses", "disk full")
    """
    
    @staticmethod
    def ledger_loaded(key: str, record_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_LOADED,
            entity_type="ledger",
            entity_id=key,
            description=f"Ledger loaded with {record_count} expense(s)",
            details={"record_count": record_count},
        )
    
    @staticmethod
    def ledger_load_failed(key: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_LOAD_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="ledger",
            entity_id=key,
            description="Ledger could not be read; starting empty",
            error_message=error_message,
        )
    
    @staticmethod
    def ledger_saved(key: str, record_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_SAVED,
            severity=AuditSeverity.DEBUG,
            entity_type="ledger",
            entity_id=key,
            description=f"Ledger saved with {record_count} expense(s)",
            details={"record_count": record_count},
        )
    
    @staticmethod
    def ledger_save_failed(key: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="ledger",
            entity_id=key,
            description="Ledger could not be saved; in-memory copy kept",
            error_message=error_message,
        )
    
    @staticmethod
    def expense_added(
        expense_id: str,
        description: str,
        amount: str,
        category: str,
        expense_date: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            entity_type="expense",
            entity_id=expense_id,
            description=f"Expense added: {description}",
            details={
                "amount": amount,
                "category": category,
                "date": expense_date,
            },
            is_user_action=True,
        )
    
    @staticmethod
    def expense_rejected(issues: list[dict]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="expense",
            description=f"Expense refused with {len(issues)} issue(s)",
            details={"issues": issues},
            is_user_action=True,
        )
    
    @staticmethod
    def expense_deleted(expense_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_DELETED,
            entity_type="expense",
            entity_id=expense_id,
            description="Expense deleted",
            is_user_action=True,
        )
    
    @staticmethod
    def expense_delete_missed(expense_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_DELETE_MISSED,
            severity=AuditSeverity.DEBUG,
            entity_type="expense",
            entity_id=expense_id,
            description="Delete requested for an expense that is not in the ledger",
            is_user_action=True,
        )
    
    @staticmethod
    def week_changed(anchor: str, start: str, end: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.WEEK_CHANGED,
            severity=AuditSeverity.DEBUG,
            entity_type="week",
            entity_id=start,
            description=f"Viewing week {start} to {end}",
            details={"anchor": anchor, "start": start, "end": end},
            is_user_action=True,
        )
    
    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            details=details or {},
            error_message=error_message,
        )
