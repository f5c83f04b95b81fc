from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


AccountType = Literal["asset", "liability", "equity", "revenue", "expense"]


class AccountRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    account_number: str
    name: str
    account_type: AccountType
    sub_type: str | None
    parent_account_id: int | None
    is_tax_deductible: bool
    tax_category: str | None
    description: str | None
    is_active: bool
    created_at: datetime


class AccountIdRead(BaseModel):
    account_number: str
    account_id: int


class FiscalPeriodCreate(BaseModel):
    period_type: str = Field(min_length=1, max_length=20)
    start_date: date
    end_date: date
    period_name: str | None = Field(default=None, max_length=100)
    notes: str | None = None

    @model_validator(mode="after")
    def _check_range(self) -> FiscalPeriodCreate:
        if self.start_date > self.end_date:
            raise ValueError("start_date must be on or before end_date")
        return self


class FiscalPeriodRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    period_name: str
    period_type: str
    start_date: date
    end_date: date
    is_closed: bool
    closed_at: datetime | None
    closed_by: str | None
    notes: str | None
    created_at: datetime


class JournalLineInput(BaseModel):
    account_id: int
    debit: Decimal | None = Decimal("0")
    credit: Decimal | None = Decimal("0")
    description: str | None = None


class JournalEntryCreate(BaseModel):
    entry_date: date
    description: str = Field(min_length=1, max_length=500)
    reference_type: str | None = Field(default=None, max_length=50)
    reference_id: int | None = None
    is_adjusting: bool = False
    is_closing: bool = False
    fiscal_period_id: int | None = None
    created_by: str | None = None
    lines: list[JournalLineInput] = Field(default_factory=list)


class JournalLineRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    journal_entry_id: int
    account_id: int
    debit: Decimal
    credit: Decimal
    description: str | None
    created_at: datetime


class JournalEntryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    entry_date: date
    description: str
    reference_type: str | None
    reference_id: int | None
    is_adjusting: bool
    is_closing: bool
    fiscal_period_id: int | None
    created_by: str | None
    created_at: datetime
    lines: list[JournalLineRead] = Field(default_factory=list)


class Pagination(BaseModel):
    limit: int
    offset: int
    total: int


class JournalEntryPage(BaseModel):
    entries: list[JournalEntryRead]
    pagination: Pagination
