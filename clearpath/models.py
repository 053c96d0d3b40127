from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .presets import WEEKS_PER_MONTH


class _EmployerBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    overtime_monthly: float = 0.0
    bonus_monthly: float = 0.0
    commission_monthly: float = 0.0
    is_previous: bool = False

    def base_monthly(self) -> float:
        """Monthly base pay; each pay type supplies its own."""
        raise NotImplementedError

    def variable_monthly(self) -> float:
        """Overtime, bonus and commission, counted for every pay type."""
        return self.overtime_monthly + self.bonus_monthly + self.commission_monthly


class SalariedEmployer(_EmployerBase):
    pay_type: Literal["salary"] = "salary"
    annual_salary: float = 0.0

    def base_monthly(self) -> float:
        return self.annual_salary / 12


class HourlyEmployer(_EmployerBase):
    pay_type: Literal["hourly"] = "hourly"
    hourly_rate: float = 0.0
    hours_per_week: float = 0.0

    def base_monthly(self) -> float:
        return self.hourly_rate * self.hours_per_week * WEEKS_PER_MONTH


Employer = Annotated[
    Union[SalariedEmployer, HourlyEmployer], Field(discriminator="pay_type")
]


class OtherIncome(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str = ""
    monthly_amount: float = 0.0


class Asset(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str = ""
    institution: str = ""
    balance: float = 0.0


class Debt(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str = ""
    creditor: str = ""
    balance: float = 0.0
    monthly_payment: float = 0.0


class BorrowerSnapshot(BaseModel):
    """Read-only view of one borrower's interview at a point in time.

    Co-borrower lists are kept even when ``has_co_borrower`` is off so the
    data survives the toggle; the engine ignores them in that case.
    """

    model_config = ConfigDict(frozen=True)

    has_co_borrower: bool = False
    primary_employers: List[Employer] = Field(default_factory=list)
    co_employers: List[Employer] = Field(default_factory=list)
    primary_other_income: List[OtherIncome] = Field(default_factory=list)
    co_other_income: List[OtherIncome] = Field(default_factory=list)
    assets: List[Asset] = Field(default_factory=list)
    debts: List[Debt] = Field(default_factory=list)

    loan_purpose: Literal["Purchase", "Refinance"] = "Purchase"
    purchase_price: float = 0.0
    down_payment_amount: float = 0.0
    property_value: float = 0.0
    current_loan_balance: float = 0.0
    cash_out_amount: float = 0.0

    interest_rate_pct: float = 0.0
    property_taxes_annual: float = 0.0
    insurance_annual: float = 0.0
    hoa_monthly: float = 0.0


class ScenarioAdjustments(BaseModel):
    """What-if overrides; ``None`` keeps the borrower's own value."""

    model_config = ConfigDict(frozen=True)

    home_price: Optional[float] = Field(default=None, ge=0)
    down_payment_pct: Optional[float] = Field(default=None, ge=0, lt=100)
    interest_rate_pct: Optional[float] = Field(default=None, ge=0)
    property_taxes_annual: Optional[float] = Field(default=None, ge=0)
    insurance_annual: Optional[float] = Field(default=None, ge=0)
    hoa_monthly: Optional[float] = Field(default=None, ge=0)

    def is_empty(self) -> bool:
        return all(v is None for v in self.model_dump().values())


class QualificationMetrics(BaseModel):
    """Derived qualification figures.

    Dump with ``by_alias=True`` to get the camelCase field names that export
    layers bind to (``totalMonthlyIncome``, ``frontEndDTI``, ``maxPurchase43``).
    """

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    loan_purpose: Literal["Purchase", "Refinance"] = "Purchase"

    monthly_employment_income: float = 0.0
    co_monthly_employment_income: float = 0.0
    monthly_other_income: float = 0.0
    co_monthly_other_income: float = 0.0
    total_monthly_income: float = 0.0
    annual_income: float = 0.0

    total_assets: float = 0.0
    liquid_assets: float = 0.0

    total_monthly_debts: float = 0.0
    current_dti: float = Field(default=0.0, alias="currentDTI")

    loan_amount: float = 0.0
    ltv: float = 0.0
    property_value_used: float = 0.0

    principal_and_interest: float = 0.0
    monthly_taxes: float = 0.0
    monthly_insurance: float = 0.0
    monthly_hoa: float = Field(default=0.0, alias="monthlyHOA")
    total_piti: float = Field(default=0.0, alias="totalPITI")

    front_end_dti: float = Field(default=0.0, alias="frontEndDTI")
    back_end_dti: float = Field(default=0.0, alias="backEndDTI")

    down_payment_fraction: float = 0.0
    max_purchase_43: float = 0.0
    piti_43: float = 0.0
    max_purchase_45: float = 0.0
    piti_45: float = 0.0
    max_purchase_50: float = 0.0
    piti_50: float = 0.0

    closing_costs: float = 0.0
    prepaid_items: float = 0.0
    cash_to_close: float = 0.0


class CreditHistory(BaseModel):
    model_config = ConfigDict(frozen=True)

    late_payments_12: bool = False
    late_payments_24: bool = False
    bankruptcy: str = "Never"
    foreclosure: str = "Never"
    collections: bool = False
    collections_amount: float = 0.0
