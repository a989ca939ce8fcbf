"""In-memory bookkeeping for a single workflow run."""

from __future__ import annotations

import logging
from typing import Callable, TypeVar

from sqlalchemy.orm import Session

from opsdesk.domain.entities import (
    EXECUTION_STATE_FAILED,
    EXECUTION_STATE_PENDING,
    EXECUTION_STATE_RUNNING,
    EXECUTION_STATE_SUCCEEDED,
    CreatedEntity,
    WorkflowExecutionResult,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

ProgressCallback = Callable[[int], None]


class WorkflowError(Exception):
    """A workflow could not continue; reported to the caller as a failed result."""


class WorkflowStepError(WorkflowError):
    """A mandatory step raised; wraps the original exception."""

    def __init__(self, step: str, original: Exception) -> None:
        super().__init__(f"Step '{step}' failed: {original}")
        self.step = step
        self.original = original


class WorkflowExecution:
    """Track state, progress and created entities of one execution.

    The execution moves ``pending -> running -> success`` or
    ``pending -> running -> failed``. Entities recorded before a failure stay
    in ``created_entities``; nothing is undone.
    """

    def __init__(
        self,
        session: Session,
        template: str,
        source_id: int,
        *,
        on_progress: ProgressCallback | None = None,
    ) -> None:
        self.session = session
        self.template = template
        self.source_id = source_id
        self.state = EXECUTION_STATE_PENDING
        self.current_step: str | None = None
        self.completed_steps: list[str] = []
        self.created_entities: list[CreatedEntity] = []
        self.error: str | None = None
        self._progress = 0
        self._on_progress = on_progress

    @property
    def progress(self) -> int:
        return self._progress

    def set_progress(self, value: int) -> None:
        """Advance progress; it never moves backwards and stays within 0-100."""

        value = max(0, min(100, int(value)))
        if value <= self._progress:
            return
        self._progress = value
        if self._on_progress is not None:
            try:
                self._on_progress(value)
            except Exception:
                logger.exception("Progress callback failed for workflow %s", self.template)

    def start(self) -> None:
        self.state = EXECUTION_STATE_RUNNING

    def record(self, entity_type: str, entity_id: int) -> None:
        self.created_entities.append(CreatedEntity(type=entity_type, id=entity_id))

    def run_step(self, name: str, action: Callable[[], T]) -> T:
        """Run a mandatory step; its failure ends the workflow."""

        self.current_step = name
        try:
            outcome = action()
        except WorkflowError:
            self.session.rollback()
            raise
        except Exception as exc:
            self.session.rollback()
            raise WorkflowStepError(name, exc) from exc
        self.completed_steps.append(name)
        return outcome

    def run_optional_step(self, name: str, action: Callable[[], T]) -> T | None:
        """Run a secondary step; its failure is logged and otherwise ignored."""

        self.current_step = name
        try:
            outcome = action()
        except Exception:
            self.session.rollback()
            logger.warning(
                "Optional step %s of workflow %s (source %s) failed",
                name,
                self.template,
                self.source_id,
                exc_info=True,
            )
            return None
        self.completed_steps.append(name)
        return outcome

    def succeed(self) -> None:
        self.state = EXECUTION_STATE_SUCCEEDED
        self.current_step = None

    def fail(self, error: str) -> None:
        self.state = EXECUTION_STATE_FAILED
        self.error = error

    def to_result(self) -> WorkflowExecutionResult:
        return WorkflowExecutionResult(
            template=self.template,
            source_id=self.source_id,
            success=self.state == EXECUTION_STATE_SUCCEEDED,
            created_entities=list(self.created_entities),
            error=self.error,
        )


__all__ = [
    "ProgressCallback",
    "WorkflowError",
    "WorkflowExecution",
    "WorkflowStepError",
]
