"""
Personal Income Tax (PIT) Calculator
Based on Nigeria Tax Act 2025, Chapter 2, Part IX, Section 58
Fourth Schedule: Individuals' Income Tax Rates

Tax Bands (after deductions):
  (a) First ₦800,000 at 0%
  (b) Next ₦2,200,000 at 15%
  (c) Next ₦9,000,000 at 18%
  (d) Next ₦13,000,000 at 21%
  (e) Next ₦25,000,000 at 23%
  (f) Above ₦50,000,000 at 25%

Deductions:
  - Pension: 8% of annual income (when contributing)
  - National Housing Fund (NHF): 2.5% of annual income (when contributing)
  - Rent relief: 20% of annual rent paid (max ₦500,000)
  - Any other itemised deductions and receipt-scanned deductions
"""

import dataclasses
import logging
from dataclasses import dataclass, field, asdict

from ntacore.core.currency import format_number
from ntacore.core.tax_rules.rules import TaxYearRules, NTA_2025, get_rules

logger = logging.getLogger(__name__)


@dataclass
class Deduction:
    id: str
    description: str
    amount: float


@dataclass
class PersonalTaxInput:
    annual_income: float
    apply_pension: bool = False
    apply_nhf: bool = False
    annual_rent: float = 0.0
    additional_deductions: list[Deduction] = field(default_factory=list)
    ocr_deductions: float = 0.0


@dataclass
class TaxBandBreakdown:
    band: str
    income: float
    rate: float
    tax: float


@dataclass
class ProgressiveTaxResult:
    total_tax: float
    breakdown: list[TaxBandBreakdown] = field(default_factory=list)


@dataclass
class PersonalTaxResult:
    gross_income: float
    pension_deduction: float
    nhf_deduction: float
    rent_relief: float
    additional_deductions_total: float
    ocr_deductions: float
    total_deductions: float
    taxable_income: float
    total_tax: float
    net_income: float
    effective_rate: float
    tax_breakdown: list[TaxBandBreakdown] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


class PITCalculator:
    """
    Deterministic Personal Income Tax calculator for Nigerian individuals.
    Rates and reliefs come from the tax year rules it is built with.
    """

    def __init__(self, rules: TaxYearRules | None = None):
        self.rules = rules or get_rules()

    def calculate(self, data: PersonalTaxInput) -> PersonalTaxResult:
        income = data.annual_income

        pension = income * self.rules.pension_rate if data.apply_pension else 0.0
        nhf = income * self.rules.nhf_rate if data.apply_nhf else 0.0
        rent_relief = self.calculate_rent_relief(data.annual_rent)
        additional_total = sum(d.amount for d in data.additional_deductions)

        total_deductions = pension + nhf + rent_relief + additional_total + data.ocr_deductions
        taxable_income = max(0.0, income - total_deductions)

        progressive = self._fill_bands(taxable_income)
        total_tax = progressive.total_tax

        net_income = income - total_deductions - total_tax
        effective_rate = (total_tax / income * 100) if income > 0 else 0.0

        logger.debug(
            "PIT %s: taxable %.2f over %d bands, tax %.2f",
            self.rules.tax_year, taxable_income, len(progressive.breakdown), total_tax,
        )

        return PersonalTaxResult(
            gross_income=income,
            pension_deduction=round(pension, 2),
            nhf_deduction=round(nhf, 2),
            rent_relief=round(rent_relief, 2),
            additional_deductions_total=round(additional_total, 2),
            ocr_deductions=data.ocr_deductions,
            total_deductions=round(total_deductions, 2),
            taxable_income=round(taxable_income, 2),
            total_tax=round(total_tax, 2),
            net_income=round(net_income, 2),
            effective_rate=round(effective_rate, 2),
            tax_breakdown=progressive.breakdown,
        )

    def calculate_progressive_tax(self, taxable_income: float) -> ProgressiveTaxResult:
        result = self._fill_bands(taxable_income)
        return ProgressiveTaxResult(
            total_tax=round(result.total_tax, 2),
            breakdown=result.breakdown,
        )

    def calculate_rent_relief(self, annual_rent: float) -> float:
        return min(annual_rent * self.rules.rent_relief_rate, self.rules.rent_relief_max)

    def marginal_rate(self, taxable_income: float) -> float:
        """Rate applied to the next naira of income, as a fraction."""
        ceiling = 0.0
        for band_width, rate in self.rules.personal_bands:
            ceiling += band_width
            if taxable_income <= ceiling:
                return rate
        return self.rules.personal_bands[-1][1]

    def _fill_bands(self, taxable_income: float) -> ProgressiveTaxResult:
        # total_tax is left unrounded so callers can round once
        breakdown = []
        total_tax = 0.0
        remaining = taxable_income
        band_floor = 0.0

        for band_width, rate in self.rules.personal_bands:
            if remaining <= 0:
                break

            income_in_band = min(remaining, band_width)
            tax_in_band = income_in_band * rate

            breakdown.append(
                TaxBandBreakdown(
                    band=self._band_label(band_floor, band_width),
                    income=round(income_in_band, 2),
                    rate=rate * 100,
                    tax=round(tax_in_band, 2),
                )
            )

            total_tax += tax_in_band
            remaining -= income_in_band
            band_floor += band_width

        return ProgressiveTaxResult(total_tax=total_tax, breakdown=breakdown)

    @staticmethod
    def _band_label(band_floor: float, band_width: float) -> str:
        if band_width == float("inf"):
            return f"Over ₦{format_number(band_floor)}"
        lower = band_floor + 1 if band_floor > 0 else 0.0
        return f"₦{format_number(lower)} - ₦{format_number(band_floor + band_width)}"

    def estimate_monthly_paye(
        self,
        monthly_income: float,
        data: PersonalTaxInput | None = None,
    ) -> dict:
        annual_income = monthly_income * 12
        if data is None:
            data = PersonalTaxInput(annual_income=annual_income)
        else:
            data = dataclasses.replace(data, annual_income=annual_income)

        result = self.calculate(data)
        monthly_tax = result.total_tax / 12

        return {
            "monthly_income": monthly_income,
            "annual_income": annual_income,
            "annual_tax": result.total_tax,
            "monthly_paye": round(monthly_tax, 2),
            "effective_rate": result.effective_rate,
        }


_calculator = PITCalculator(NTA_2025)


def calculate_progressive_tax(taxable_income: float) -> ProgressiveTaxResult:
    return _calculator.calculate_progressive_tax(taxable_income)


def calculate_rent_relief(annual_rent: float) -> float:
    return _calculator.calculate_rent_relief(annual_rent)


def calculate_personal_tax(data: PersonalTaxInput) -> PersonalTaxResult:
    return _calculator.calculate(data)
