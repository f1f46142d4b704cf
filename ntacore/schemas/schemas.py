"""
Pydantic schemas for strict input validation.
Each request model converts into the plain calculator input.
"""

from pydantic import BaseModel, Field, field_validator

from ntacore.core.tax_rules.cit import CompanyTaxInput
from ntacore.core.tax_rules.pit import Deduction, PersonalTaxInput
from ntacore.core.tax_rules.sectors import BusinessSector


class DeductionItem(BaseModel):
    id: str = ""
    description: str = ""
    amount: float = Field(..., ge=0)

    def to_deduction(self) -> Deduction:
        return Deduction(id=self.id, description=self.description, amount=self.amount)


# ── Personal Tax ──

class PersonalTaxRequest(BaseModel):
    annual_income: float = Field(..., ge=0)
    apply_pension: bool = False
    apply_nhf: bool = False
    annual_rent: float = Field(default=0, ge=0)
    additional_deductions: list[DeductionItem] = Field(default_factory=list)
    ocr_deductions: float = Field(default=0, ge=0)

    def to_input(self) -> PersonalTaxInput:
        return PersonalTaxInput(
            annual_income=self.annual_income,
            apply_pension=self.apply_pension,
            apply_nhf=self.apply_nhf,
            annual_rent=self.annual_rent,
            additional_deductions=[d.to_deduction() for d in self.additional_deductions],
            ocr_deductions=self.ocr_deductions,
        )


# ── Company Tax ──

class CompanyTaxRequest(BaseModel):
    annual_turnover: float = Field(..., ge=0)
    fixed_assets: float = Field(..., ge=0)
    assessable_profit: float = Field(..., ge=0)
    is_professional_service: bool = False
    is_non_resident: bool = False
    is_large_company: bool = False
    is_mne: bool = False
    capital_allowances: float = Field(default=0, ge=0)
    other_deductions: list[DeductionItem] = Field(default_factory=list)
    asset_disposal_proceeds: float = Field(default=0, ge=0)
    asset_tax_written_down_value: float = Field(default=0, ge=0)
    business_sector: BusinessSector = BusinessSector.GENERAL
    is_tax_holiday_active: bool = False
    qualifying_capital_expenditure: float = Field(default=0, ge=0)

    @field_validator("business_sector", mode="before")
    @classmethod
    def normalise_sector(cls, value):
        # Known tags in any casing; unknown ones still fail enum validation
        if isinstance(value, str) and not isinstance(value, BusinessSector):
            return value.strip().lower()
        return value

    def to_input(self) -> CompanyTaxInput:
        return CompanyTaxInput(
            annual_turnover=self.annual_turnover,
            fixed_assets=self.fixed_assets,
            assessable_profit=self.assessable_profit,
            is_professional_service=self.is_professional_service,
            is_non_resident=self.is_non_resident,
            is_large_company=self.is_large_company,
            is_mne=self.is_mne,
            capital_allowances=self.capital_allowances,
            other_deductions=[d.to_deduction() for d in self.other_deductions],
            asset_disposal_proceeds=self.asset_disposal_proceeds,
            asset_tax_written_down_value=self.asset_tax_written_down_value,
            business_sector=self.business_sector,
            is_tax_holiday_active=self.is_tax_holiday_active,
            qualifying_capital_expenditure=self.qualifying_capital_expenditure,
        )


# ── Exemptions ──

class ShareTransferRequest(BaseModel):
    disposal_proceeds: float = Field(..., ge=0)
    cost_basis: float = Field(..., ge=0)
    reinvestment_amount: float | None = Field(default=None, ge=0)


class CompensationRequest(BaseModel):
    total_compensation: float = Field(..., ge=0)
    years_of_service: int | None = Field(default=None, ge=0)
