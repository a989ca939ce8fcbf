"""Use case running a workflow template against a source record."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Callable

from sqlalchemy.orm import Session

from opsdesk.config import Settings, get_settings
from opsdesk.domain.entities import WorkflowExecutionResult
from opsdesk.utils import now_in_app_timezone

from .execution import ProgressCallback, WorkflowExecution
from .templates import WORKFLOW_HANDLERS, TemplateHandler, WorkflowContext

logger = logging.getLogger(__name__)

TEMPLATE_NOT_FOUND = "Workflow template not found"


class WorkflowOrchestrator:
    """Execute workflow templates on behalf of one user.

    The orchestrator keeps the last execution around so callers polling
    :attr:`progress` see how far the current run got.
    """

    def __init__(
        self,
        session: Session,
        user_id: int,
        *,
        on_progress: ProgressCallback | None = None,
        settings: Settings | None = None,
        clock: Callable[[], datetime] = now_in_app_timezone,
        handlers: Mapping[str, TemplateHandler] | None = None,
    ) -> None:
        self._session = session
        self._on_progress = on_progress
        self._handlers = dict(handlers) if handlers is not None else dict(WORKFLOW_HANDLERS)
        self._context = WorkflowContext(
            user_id=user_id,
            settings=settings or get_settings(),
            clock=clock,
        )
        self._execution: WorkflowExecution | None = None

    @property
    def progress(self) -> int:
        return self._execution.progress if self._execution is not None else 0

    @property
    def current_execution(self) -> WorkflowExecution | None:
        return self._execution

    def execute(
        self,
        template: str,
        source_id: int,
        source_data: Mapping[str, Any] | None = None,
    ) -> WorkflowExecutionResult:
        execution = WorkflowExecution(
            self._session, template, source_id, on_progress=self._on_progress
        )
        self._execution = execution

        handler = self._handlers.get(template)
        if handler is None:
            logger.warning("Unknown workflow template requested: %s", template)
            execution.fail(TEMPLATE_NOT_FOUND)
            return execution.to_result()

        execution.start()
        logger.info(
            "Starting workflow %s for source %s (user %s)",
            template,
            source_id,
            self._context.user_id,
        )
        try:
            handler(execution, self._context, source_id, dict(source_data or {}))
        except Exception as exc:
            self._session.rollback()
            execution.fail(str(exc))
            logger.warning(
                "Workflow %s for source %s failed at step %s: %s",
                template,
                source_id,
                execution.current_step,
                exc,
            )
        else:
            execution.succeed()
            logger.info(
                "Workflow %s for source %s finished; created %s",
                template,
                source_id,
                [(entity.type, entity.id) for entity in execution.created_entities],
            )
        finally:
            execution.set_progress(100)

        return execution.to_result()


def execute_workflow(
    session: Session,
    *,
    user_id: int,
    template: str,
    source_id: int,
    source_data: Mapping[str, Any] | None = None,
    on_progress: ProgressCallback | None = None,
) -> WorkflowExecutionResult:
    """Run ``template`` for ``source_id`` and report the outcome."""

    orchestrator = WorkflowOrchestrator(session, user_id, on_progress=on_progress)
    return orchestrator.execute(template, source_id, source_data)


__all__ = ["TEMPLATE_NOT_FOUND", "WorkflowOrchestrator", "execute_workflow"]
