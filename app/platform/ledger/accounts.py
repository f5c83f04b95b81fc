from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from app.platform.ledger.chart import DEFAULT_CHART_OF_ACCOUNTS, ChartAccount
from app.platform.ledger.errors import NotFoundError
from app.platform.ledger.models import Account
from app.platform.ledger.schemas import AccountRead


logger = logging.getLogger("app.ledger.accounts")


@dataclass(slots=True)
class AccountDirectory:
    """Read side of the chart of accounts.

    Adapters refer to accounts by their stable ``account_number`` and resolve
    the surrogate id through this directory, so the chart can be reseeded
    without touching adapter code.
    """

    def resolve_account_id(self, session: Session, account_number: str) -> int:
        account_id = session.scalar(select(Account.id).where(Account.account_number == account_number))
        if account_id is None:
            raise NotFoundError(f"Account {account_number}")
        return account_id

    def get_account(self, session: Session, account_id: int) -> Account:
        account = session.get(Account, account_id)
        if account is None:
            raise NotFoundError("Account")
        return account

    def list_accounts(
        self,
        session: Session,
        *,
        account_type: str | None = None,
        active_only: bool = True,
    ) -> list[AccountRead]:
        stmt: Select[tuple[Account]] = select(Account)
        if account_type is not None:
            stmt = stmt.where(Account.account_type == account_type)
        if active_only:
            stmt = stmt.where(Account.is_active.is_(True))
        rows = session.scalars(stmt.order_by(Account.account_number.asc())).all()
        return [AccountRead.model_validate(item) for item in rows]

    def seed_chart_of_accounts(
        self,
        session: Session,
        chart: Iterable[ChartAccount] = DEFAULT_CHART_OF_ACCOUNTS,
    ) -> list[AccountRead]:
        existing_numbers = set(session.scalars(select(Account.account_number)).all())

        created: list[Account] = []
        for item in chart:
            if item.account_number in existing_numbers:
                continue
            account = Account(
                account_number=item.account_number,
                name=item.name,
                account_type=item.account_type,
                sub_type=item.sub_type,
                is_tax_deductible=item.is_tax_deductible,
                tax_category=item.tax_category,
                description=item.description,
                is_active=True,
            )
            session.add(account)
            created.append(account)
            existing_numbers.add(item.account_number)

        session.commit()
        if created:
            logger.info("ledger.accounts.seeded", extra={"account_count": len(created)})
        return [AccountRead.model_validate(item) for item in created]


account_directory = AccountDirectory()
