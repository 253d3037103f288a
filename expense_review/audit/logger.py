"""
Audit Logger

DESIGN DECISION: Every ledger mutation and every absorbed failure is logged.
Storage errors and refused input never reach the user as exceptions, so
the audit trail is the only place they become visible.

The audit logger:
- Is synchronous, like the rest of the session
- Gracefully handles failures (never raises into the caller)
- Keeps a bounded history of recent events in memory
"""

from collections import deque
from typing import Optional

import structlog

from expense_review.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """
    Central audit logging service.
    
    Logs events both to:
    1. Structured local log (for debugging)
    2. An in-memory history (for inspection during the session)
    """
    
    def __init__(self, history_size: int = 500):
        """
        Initialize audit logger.
        
        Args:
            history_size: How many recent events to keep. 0 disables history.
        """
        self._history: deque[AuditEvent] = deque(maxlen=history_size)
        self._logger = structlog.get_logger("expense_review.audit")
    
    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.
        
        Returns True if the event reached the local log.
        """
        self._history.append(event)
        
        log_dict = event.to_log_dict()
        try:
            if event.severity == AuditSeverity.ERROR:
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception:
            # A broken log handler must not break the ledger
            return False
        return True
    
    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        """Most recent events, newest first."""
        events = list(reversed(self._history))
        return events[:limit]
    
    def clear(self) -> None:
        self._history.clear()
    
    def log_ledger_loaded(self, key: str, record_count: int) -> None:
        self.log(AuditEventBuilder.ledger_loaded(key=key, record_count=record_count))
    
    def log_ledger_load_failed(self, key: str, error_message: str) -> None:
        self.log(AuditEventBuilder.ledger_load_failed(key=key, error_message=error_message))
    
    def log_ledger_saved(self, key: str, record_count: int) -> None:
        self.log(AuditEventBuilder.ledger_saved(key=key, record_count=record_count))
    
    def log_ledger_save_failed(self, key: str, error_message: str) -> None:
        self.log(AuditEventBuilder.ledger_save_failed(key=key, error_message=error_message))
    
    def log_expense_added(
        self,
        expense_id: str,
        description: str,
        amount: str,
        category: str,
        expense_date: str,
    ) -> None:
        """Log a successful add."""
        event = AuditEventBuilder.expense_added(
            expense_id=expense_id,
            description=description,
            amount=amount,
            category=category,
            expense_date=expense_date,
        )
        self.log(event)
    
    def log_expense_rejected(self, issues: list[dict]) -> None:
        """Log an add that failed validation."""
        self.log(AuditEventBuilder.expense_rejected(issues=issues))
    
    def log_expense_deleted(self, expense_id: str) -> None:
        self.log(AuditEventBuilder.expense_deleted(expense_id=expense_id))
    
    def log_expense_delete_missed(self, expense_id: str) -> None:
        self.log(AuditEventBuilder.expense_delete_missed(expense_id=expense_id))
    
    def log_week_changed(self, anchor: str, start: str, end: str) -> None:
        self.log(AuditEventBuilder.week_changed(anchor=anchor, start=start, end=end))
    
    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> None:
        """Log an error."""
        event = AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
        )
        self.log(event)
