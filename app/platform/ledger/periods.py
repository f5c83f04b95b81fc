from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone

from sqlalchemy import and_, select
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.metrics import observe_ledger_period_transition
from app.platform.ledger.errors import NotFoundError, ValidationError
from app.platform.ledger.models import FiscalPeriod
from app.platform.ledger.schemas import FiscalPeriodCreate, FiscalPeriodRead


logger = logging.getLogger("app.ledger.periods")


@dataclass(slots=True)
class FiscalPeriodRegistry:
    def find_period_covering(self, session: Session, on_date: date) -> FiscalPeriod | None:
        """Return the period whose inclusive range contains ``on_date``.

        Overlapping periods are not prevented by default; when several match,
        the one with the latest start date wins (then the most recently
        created one).
        """
        return session.scalar(
            select(FiscalPeriod)
            .where(and_(FiscalPeriod.start_date <= on_date, FiscalPeriod.end_date >= on_date))
            .order_by(FiscalPeriod.start_date.desc(), FiscalPeriod.id.desc())
            .limit(1)
        )

    def get_period(self, session: Session, period_id: int) -> FiscalPeriod:
        period = session.get(FiscalPeriod, period_id)
        if period is None:
            raise NotFoundError("Fiscal period")
        return period

    def is_closed(self, session: Session, period_id: int) -> bool:
        return self.get_period(session, period_id).is_closed

    def list_periods(self, session: Session) -> list[FiscalPeriodRead]:
        rows = session.scalars(
            select(FiscalPeriod).order_by(FiscalPeriod.start_date.desc(), FiscalPeriod.id.desc())
        ).all()
        return [FiscalPeriodRead.model_validate(item) for item in rows]

    def open_period(self, session: Session, request: FiscalPeriodCreate) -> FiscalPeriodRead:
        if request.start_date > request.end_date:
            raise ValidationError("start_date must be on or before end_date")

        if get_settings().ledger_reject_overlapping_periods:
            overlapping = session.scalar(
                select(FiscalPeriod.id).where(
                    and_(FiscalPeriod.start_date <= request.end_date, FiscalPeriod.end_date >= request.start_date)
                )
            )
            if overlapping is not None:
                raise ValidationError(
                    "fiscal period overlaps an existing period",
                    details={"overlapping_period_id": overlapping},
                )

        name = request.period_name or f"{request.period_type.upper()} {request.start_date} to {request.end_date}"
        period = FiscalPeriod(
            period_name=name,
            period_type=request.period_type,
            start_date=request.start_date,
            end_date=request.end_date,
            notes=request.notes,
            is_closed=False,
        )
        session.add(period)
        session.commit()
        session.refresh(period)
        return FiscalPeriodRead.model_validate(period)

    def close(self, session: Session, period_id: int, closed_by: str | None = None) -> FiscalPeriodRead:
        period = self.get_period(session, period_id)
        if not period.is_closed:
            period.is_closed = True
            period.closed_at = datetime.now(timezone.utc)
            period.closed_by = closed_by
            session.commit()
            session.refresh(period)
            observe_ledger_period_transition("close")
            logger.info("ledger.period.closed", extra={"fiscal_period_id": period.id})
        return FiscalPeriodRead.model_validate(period)

    def reopen(self, session: Session, period_id: int) -> FiscalPeriodRead:
        period = self.get_period(session, period_id)
        if period.is_closed:
            period.is_closed = False
            period.closed_at = None
            period.closed_by = None
            session.commit()
            session.refresh(period)
            observe_ledger_period_transition("reopen")
            logger.info("ledger.period.reopened", extra={"fiscal_period_id": period.id})
        return FiscalPeriodRead.model_validate(period)


fiscal_period_registry = FiscalPeriodRegistry()
