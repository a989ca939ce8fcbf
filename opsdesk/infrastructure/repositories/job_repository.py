"""Persistence helpers for jobs."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy.orm import Session

from opsdesk.domain.entities import Job
from opsdesk.infrastructure.models import JobModel
from opsdesk.utils import ensure_app_naive_datetime, ensure_app_timezone


class JobRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, job_id: int) -> Job | None:
        model = self.session.get(JobModel, job_id)
        return self._to_entity(model) if model else None

    def get_for_owner(self, job_id: int, owner_id: int) -> Job | None:
        model = self._owned_model(job_id, owner_id)
        return self._to_entity(model) if model else None

    def list_starting_between(
        self, owner_id: int, *, start: datetime, end: datetime
    ) -> Sequence[Job]:
        """Return the owner's jobs whose start falls inside ``[start, end]``."""

        query = (
            self.session.query(JobModel)
            .filter(JobModel.created_by == owner_id)
            .filter(JobModel.start_datetime.is_not(None))
            .filter(JobModel.start_datetime >= ensure_app_naive_datetime(start))
            .filter(JobModel.start_datetime <= ensure_app_naive_datetime(end))
            .order_by(JobModel.start_datetime.asc(), JobModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, job: Job) -> Job:
        model = JobModel(
            client_id=job.client_id,
            title=job.title,
            type=job.type,
            status=job.status,
            start_datetime=ensure_app_naive_datetime(job.start_datetime),
            estimated_revenue=job.estimated_revenue,
            created_by=job.created_by,
        )
        if job.created_at is not None:
            model.created_at = ensure_app_naive_datetime(job.created_at)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update_status(self, job_id: int, status: str, *, owner_id: int | None = None) -> Job:
        if owner_id is None:
            model = self.session.get(JobModel, job_id)
        else:
            model = self._owned_model(job_id, owner_id)
        if model is None:
            raise LookupError(f"Job with id {job_id} not found")
        model.status = status
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def _owned_model(self, job_id: int, owner_id: int) -> JobModel | None:
        return (
            self.session.query(JobModel)
            .filter(JobModel.id == job_id, JobModel.created_by == owner_id)
            .one_or_none()
        )

    @staticmethod
    def _to_entity(model: JobModel) -> Job:
        return Job(
            id=model.id,
            client_id=model.client_id,
            title=model.title,
            type=model.type,
            status=model.status,
            start_datetime=ensure_app_timezone(model.start_datetime),
            estimated_revenue=model.estimated_revenue,
            created_by=model.created_by,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["JobRepository"]
