"""
Company Income Tax (CIT) Calculator
Based on Nigeria Tax Act 2025, Chapter 2, Part IX, Section 56

Classification:
  - Professional services: never small
  - Small: turnover ≤ ₦100M AND fixed assets < ₦250M
  - Large: non-small with turnover > ₦50B, MNEs, or flagged large
  - Big: everything else

CIT Rates:
  - Small companies: 0%
  - Big and large companies: 30% of taxable profit

Development Levy (Section 59):
  - 4% of assessable profit (not taxable profit) for non-small residents

Minimum effective tax rate (OECD Pillar II):
  - Large companies topped up to 15% of taxable profit

Sector incentives (non-small only):
  - Tax holiday: CIT and levy waived for holiday sectors
  - EDI credit: 5% of qualifying capital expenditure, never beyond the tax left

Chargeable gains on asset disposals are added without inflation adjustment.
"""

import logging
from dataclasses import dataclass, field, asdict
from enum import Enum

from ntacore.core.currency import format_number
from ntacore.core.tax_rules.pit import Deduction
from ntacore.core.tax_rules.rules import TaxYearRules, NTA_2025, get_rules
from ntacore.core.tax_rules.sectors import BusinessSector, get_business_type

logger = logging.getLogger(__name__)


class CompanySize(str, Enum):
    SMALL = "small"
    BIG = "big"
    LARGE = "large"


@dataclass
class CompanyTaxInput:
    annual_turnover: float
    fixed_assets: float
    assessable_profit: float
    is_professional_service: bool = False
    is_non_resident: bool = False
    is_large_company: bool = False
    is_mne: bool = False
    capital_allowances: float = 0.0
    other_deductions: list[Deduction] = field(default_factory=list)
    asset_disposal_proceeds: float = 0.0
    asset_tax_written_down_value: float = 0.0
    business_sector: BusinessSector | str | None = None
    is_tax_holiday_active: bool = False
    qualifying_capital_expenditure: float = 0.0


@dataclass
class TaxLineItem:
    description: str
    amount: float


@dataclass
class CompanyTaxResult:
    annual_turnover: float
    fixed_assets: float
    assessable_profit: float
    capital_allowances: float
    other_deductions_total: float
    total_deductions: float
    asset_disposal_gain: float
    taxable_profit: float
    company_size: CompanySize
    classification_reason: str
    business_sector: BusinessSector
    is_professional_service: bool
    is_non_resident: bool
    is_large_company: bool
    is_mne: bool
    tax_rate: float
    corporate_tax: float
    development_levy: float
    etr_top_up: float
    minimum_etr_applied: bool
    is_tax_holiday_active: bool
    tax_holiday_savings: float
    qualifying_capital_expenditure: float
    edi_credit: float
    total_incentive_savings: float
    total_tax: float
    net_profit: float
    effective_rate: float
    tax_breakdown: list[TaxLineItem] = field(default_factory=list)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["company_size"] = self.company_size.value
        data["business_sector"] = self.business_sector.value
        return data


def _pct(rate: float) -> str:
    return f"{rate * 100:g}%"


class CITCalculator:
    """
    Deterministic Company Income Tax calculator for Nigerian companies.
    Rates, thresholds and incentive sectors come from the tax year rules.
    """

    def __init__(self, rules: TaxYearRules | None = None):
        self.rules = rules or get_rules()

    def determine_company_size(
        self,
        annual_turnover: float,
        fixed_assets: float,
        is_professional_service: bool = False,
    ) -> CompanySize:
        if is_professional_service:
            return CompanySize.BIG

        # Turnover cap is inclusive, asset cap is strict
        if (
            annual_turnover <= self.rules.small_company_max_turnover
            and fixed_assets < self.rules.small_company_max_fixed_assets
        ):
            return CompanySize.SMALL

        return CompanySize.BIG

    def classify_company(self, data: CompanyTaxInput) -> tuple[CompanySize, str]:
        sector = BusinessSector.from_tag(data.business_sector)
        is_professional = (
            data.is_professional_service or sector == BusinessSector.PROFESSIONAL_SERVICES
        )

        size = self.determine_company_size(data.annual_turnover, data.fixed_assets, is_professional)
        if size == CompanySize.SMALL:
            return size, (
                f"Turnover ≤ ₦{format_number(self.rules.small_company_max_turnover)} AND "
                f"fixed assets < ₦{format_number(self.rules.small_company_max_fixed_assets)}"
            )

        if data.is_mne:
            return CompanySize.LARGE, "Multinational enterprise - subject to minimum ETR"
        if data.annual_turnover > self.rules.large_company_turnover_threshold:
            return CompanySize.LARGE, (
                f"Turnover > ₦{format_number(self.rules.large_company_turnover_threshold)} - "
                f"subject to minimum ETR"
            )
        if data.is_large_company:
            return CompanySize.LARGE, "Designated large company - subject to minimum ETR"

        if is_professional:
            return size, "Professional services excluded from small company exemption"
        return size, "Exceeds small company thresholds"

    def calculate(self, data: CompanyTaxInput) -> CompanyTaxResult:
        rules = self.rules
        sector = BusinessSector.from_tag(data.business_sector)
        is_professional = (
            data.is_professional_service or sector == BusinessSector.PROFESSIONAL_SERVICES
        )

        asset_disposal_gain = max(
            0.0, data.asset_disposal_proceeds - data.asset_tax_written_down_value
        )
        other_deductions_total = sum(d.amount for d in data.other_deductions)
        total_deductions = data.capital_allowances + other_deductions_total
        taxable_profit = max(
            0.0, data.assessable_profit - total_deductions + asset_disposal_gain
        )

        company_size, reason = self.classify_company(data)
        logger.debug("CIT %s: classified %s (%s)", rules.tax_year, company_size.value, reason)

        breakdown: list[TaxLineItem] = []
        corporate_tax = 0.0
        development_levy = 0.0
        etr_top_up = 0.0
        minimum_etr_applied = False
        tax_holiday_savings = 0.0
        edi_credit = 0.0

        if company_size == CompanySize.SMALL:
            tax_rate = 0.0
            breakdown.append(
                TaxLineItem("Corporate Income Tax (Small Company Exemption)", 0.0)
            )
            breakdown.append(
                TaxLineItem("Development Levy (Small Company Exemption)", 0.0)
            )
        else:
            tax_rate = rules.cit_rate
            corporate_tax = taxable_profit * rules.cit_rate
            breakdown.append(
                TaxLineItem(
                    f"Corporate Income Tax ({_pct(rules.cit_rate)} of "
                    f"₦{format_number(taxable_profit)})",
                    corporate_tax,
                )
            )

            if data.is_non_resident:
                breakdown.append(TaxLineItem("Development Levy (Non-resident Exemption)", 0.0))
            else:
                development_levy = data.assessable_profit * rules.development_levy_rate
                breakdown.append(
                    TaxLineItem(
                        f"Development Levy ({_pct(rules.development_levy_rate)} of "
                        f"₦{format_number(data.assessable_profit)})",
                        development_levy,
                    )
                )

            if company_size == CompanySize.LARGE and taxable_profit > 0:
                current_etr = (corporate_tax + development_levy) / taxable_profit
                if current_etr < rules.minimum_etr:
                    etr_top_up = taxable_profit * rules.minimum_etr - (
                        corporate_tax + development_levy
                    )
                    minimum_etr_applied = True
                    breakdown.append(
                        TaxLineItem(
                            f"Minimum ETR Top-up ({_pct(rules.minimum_etr)} minimum "
                            f"effective rate)",
                            etr_top_up,
                        )
                    )
                    logger.debug(
                        "CIT %s: ETR %.4f below minimum, top-up %.2f",
                        rules.tax_year, current_etr, etr_top_up,
                    )

        gross_tax = corporate_tax + development_levy + etr_top_up

        if company_size != CompanySize.SMALL:
            business_type = get_business_type(sector)

            if data.is_tax_holiday_active and sector in rules.tax_holiday_sectors:
                tax_holiday_savings = corporate_tax + development_levy
                breakdown.append(
                    TaxLineItem(
                        f"Tax Holiday Exemption ({business_type.name})",
                        -tax_holiday_savings,
                    )
                )
                logger.debug("CIT %s: tax holiday waives %.2f", rules.tax_year, tax_holiday_savings)

            if sector in rules.edi_sectors and data.qualifying_capital_expenditure > 0:
                uncapped_credit = data.qualifying_capital_expenditure * rules.edi_credit_rate
                remaining_tax = max(0.0, gross_tax - tax_holiday_savings)
                edi_credit = min(uncapped_credit, remaining_tax)
                description = (
                    f"EDI Credit ({_pct(rules.edi_credit_rate)} of "
                    f"₦{format_number(data.qualifying_capital_expenditure)} QCE)"
                )
                if edi_credit < uncapped_credit:
                    description += " - capped at remaining tax"
                breakdown.append(TaxLineItem(description, -edi_credit))
                logger.debug(
                    "CIT %s: EDI credit %.2f of %.2f", rules.tax_year, edi_credit, uncapped_credit
                )

        total_incentive_savings = tax_holiday_savings + edi_credit
        total_tax = max(0.0, gross_tax - total_incentive_savings)
        net_profit = data.assessable_profit - total_tax
        effective_rate = (total_tax / taxable_profit * 100) if taxable_profit > 0 else 0.0

        return CompanyTaxResult(
            annual_turnover=data.annual_turnover,
            fixed_assets=data.fixed_assets,
            assessable_profit=data.assessable_profit,
            capital_allowances=data.capital_allowances,
            other_deductions_total=round(other_deductions_total, 2),
            total_deductions=round(total_deductions, 2),
            asset_disposal_gain=round(asset_disposal_gain, 2),
            taxable_profit=round(taxable_profit, 2),
            company_size=company_size,
            classification_reason=reason,
            business_sector=sector,
            is_professional_service=is_professional,
            is_non_resident=data.is_non_resident,
            is_large_company=company_size == CompanySize.LARGE,
            is_mne=data.is_mne,
            tax_rate=round(tax_rate * 100, 2),
            corporate_tax=round(corporate_tax, 2),
            development_levy=round(development_levy, 2),
            etr_top_up=round(etr_top_up, 2),
            minimum_etr_applied=minimum_etr_applied,
            is_tax_holiday_active=data.is_tax_holiday_active,
            tax_holiday_savings=round(tax_holiday_savings, 2),
            qualifying_capital_expenditure=data.qualifying_capital_expenditure,
            edi_credit=round(edi_credit, 2),
            total_incentive_savings=round(total_incentive_savings, 2),
            total_tax=round(total_tax, 2),
            net_profit=round(net_profit, 2),
            effective_rate=round(effective_rate, 2),
            tax_breakdown=[
                TaxLineItem(item.description, round(item.amount, 2)) for item in breakdown
            ],
        )


_calculator = CITCalculator(NTA_2025)


def determine_company_size(
    annual_turnover: float,
    fixed_assets: float,
    is_professional_service: bool = False,
) -> CompanySize:
    return _calculator.determine_company_size(annual_turnover, fixed_assets, is_professional_service)


def calculate_company_tax(data: CompanyTaxInput) -> CompanyTaxResult:
    return _calculator.calculate(data)
