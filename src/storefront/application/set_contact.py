"""Application services: contact phone and optional scheduled date."""

from __future__ import annotations

from datetime import date
from typing import Callable

from storefront.application.dto import StepResult
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.problems import Problem, ProblemKind
from storefront.domain.model.value_objects import PhoneNumber
from storefront.domain.repository.session_repository import SessionRepository


class SetPhoneHandler:

    def __init__(self, session_repo: SessionRepository) -> None:
        self._session_repo = session_repo

    def handle(self, session_key: str, tenant_id: str, raw_phone: str) -> StepResult:
        if not (raw_phone or "").strip():
            return StepResult(
                problem=Problem(ProblemKind.PHONE_REQUIRED, "A phone number is required.")
            )
        try:
            phone = PhoneNumber.parse(raw_phone)
        except ValidationError as exc:
            return StepResult(problem=Problem(ProblemKind.INVALID_PHONE, str(exc)))

        checkout = self._session_repo.get_checkout(session_key, tenant_id)
        checkout.phone = phone
        self._session_repo.save_checkout(checkout)
        return StepResult()


class ScheduleOrderHandler:
    """Set or clear the date the client wants the order for."""

    def __init__(
        self,
        session_repo: SessionRepository,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._session_repo = session_repo
        self._today = today

    def handle(self, session_key: str, tenant_id: str, scheduled_for: date | None) -> StepResult:
        if scheduled_for is not None and scheduled_for < self._today():
            return StepResult(
                problem=Problem(
                    ProblemKind.INVALID_SCHEDULE,
                    "The scheduled date cannot be in the past.",
                )
            )

        checkout = self._session_repo.get_checkout(session_key, tenant_id)
        checkout.scheduled_for = scheduled_for
        self._session_repo.save_checkout(checkout)
        return StepResult()
