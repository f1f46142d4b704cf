"""
Tax Recommendations
Suggests optimisations from the current inputs and the latest tax result.
Advisory only: nothing here changes a computed tax figure.

Personal savings are estimated at the marginal rate, i.e. the band rate that
applies to the next naira of taxable income.
"""

import re
from dataclasses import dataclass
from enum import Enum

from ntacore.core.currency import format_currency
from ntacore.core.tax_rules.cit import CompanySize, CompanyTaxResult
from ntacore.core.tax_rules.pit import PITCalculator, PersonalTaxResult
from ntacore.core.tax_rules.rules import TaxYearRules, NTA_2025, get_rules
from ntacore.core.tax_rules.sectors import IncentiveType, get_business_type


class RecommendationCategory(str, Enum):
    DEDUCTION = "deduction"
    EXEMPTION = "exemption"
    TIMING = "timing"
    STRUCTURE = "structure"


class RecommendationPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ActionType(str, Enum):
    PENSION = "pension"
    NHF = "nhf"
    RENT = "rent"
    SHARE_TRANSFER = "share_transfer"
    COMPENSATION = "compensation"


PRIORITY_ORDER = {
    RecommendationPriority.HIGH: 0,
    RecommendationPriority.MEDIUM: 1,
    RecommendationPriority.LOW: 2,
}

SHARE_TRANSFER_INCOME_THRESHOLD = 25_000_000.0
COMPENSATION_INCOME_THRESHOLD = 12_000_000.0
STRUCTURING_INCOME_THRESHOLD = 50_000_000.0

# Incentives already covered by the size and EDI recommendations
_SIZE_EXEMPTIONS = {
    "Small Company Exemption",
    "Tech Startup Exemption",
    "Agribusiness Small Company Relief",
}


@dataclass
class TaxRecommendation:
    id: str
    title: str
    description: str
    potential_savings: float
    category: RecommendationCategory
    priority: RecommendationPriority
    applicable: bool = True
    action_type: ActionType | None = None


@dataclass
class RecommendationInput:
    annual_income: float
    apply_pension: bool = False
    apply_nhf: bool = False
    annual_rent: float = 0.0
    tax_result: PersonalTaxResult | None = None
    has_share_transfer: bool = False
    has_compensation: bool = False


def _slug(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")


def _sort(recommendations: list[TaxRecommendation]) -> list[TaxRecommendation]:
    return sorted(
        recommendations,
        key=lambda r: (PRIORITY_ORDER[r.priority], -r.potential_savings),
    )


class RecommendationEngine:
    """
    Builds prioritised recommendations for individuals and companies.
    """

    def __init__(self, rules: TaxYearRules | None = None):
        self.rules = rules or get_rules()
        self.pit_calc = PITCalculator(self.rules)

    def marginal_rate(self, taxable_income: float) -> float:
        return self.pit_calc.marginal_rate(taxable_income)

    def potential_savings(self, deduction_amount: float, taxable_income: float) -> float:
        return deduction_amount * self.marginal_rate(taxable_income)

    def generate(self, data: RecommendationInput) -> list[TaxRecommendation]:
        rules = self.rules
        income = data.annual_income
        recommendations: list[TaxRecommendation] = []

        if income <= 0:
            return recommendations

        # A zero taxable income also falls back to gross income
        taxable_income = (data.tax_result.taxable_income if data.tax_result else 0) or income

        if not data.apply_pension:
            pension = income * rules.pension_rate
            savings = self.potential_savings(pension, taxable_income)
            if savings > 0:
                recommendations.append(TaxRecommendation(
                    id="pension-optimization",
                    title="Maximize Pension Contribution",
                    description=(
                        f"You can claim {rules.pension_rate * 100:g}% pension deduction "
                        f"({format_currency(pension)}). This reduces your taxable income and "
                        f"could save you up to {format_currency(savings)} in taxes."
                    ),
                    potential_savings=savings,
                    category=RecommendationCategory.DEDUCTION,
                    priority=RecommendationPriority.HIGH,
                    action_type=ActionType.PENSION,
                ))

        if not data.apply_nhf:
            nhf = income * rules.nhf_rate
            savings = self.potential_savings(nhf, taxable_income)
            if savings > 0:
                recommendations.append(TaxRecommendation(
                    id="nhf-contribution",
                    title="Claim NHF Deduction",
                    description=(
                        f"The {rules.nhf_rate * 100:g}% NHF contribution "
                        f"({format_currency(nhf)}) is deductible. This could save you up to "
                        f"{format_currency(savings)} in taxes."
                    ),
                    potential_savings=savings,
                    category=RecommendationCategory.DEDUCTION,
                    priority=RecommendationPriority.MEDIUM,
                    action_type=ActionType.NHF,
                ))

        if data.annual_rent <= 0 and income > rules.tax_free_threshold:
            recommendations.append(TaxRecommendation(
                id="rent-relief",
                title="Claim Rent Relief",
                description=(
                    f"You may be eligible for rent relief up to "
                    f"{format_currency(rules.rent_relief_max)} "
                    f"({rules.rent_relief_rate * 100:g}% of annual rent). If you're renting, "
                    f"enter your annual rent to claim this deduction."
                ),
                potential_savings=self.potential_savings(rules.rent_relief_max, taxable_income),
                category=RecommendationCategory.DEDUCTION,
                priority=RecommendationPriority.MEDIUM,
                action_type=ActionType.RENT,
            ))

        if not data.has_share_transfer and income > SHARE_TRANSFER_INCOME_THRESHOLD:
            recommendations.append(TaxRecommendation(
                id="share-transfer-exemption",
                title="Share Transfer Exemption Available",
                description=(
                    f"Under {rules.name}, capital gains up to "
                    f"{format_currency(rules.share_transfer_max_exempt_gain)} from share "
                    f"disposals below {format_currency(rules.share_transfer_threshold)} may be "
                    f"exempt. Consider this for investment planning."
                ),
                potential_savings=rules.share_transfer_max_exempt_gain * rules.cgt_rate,
                category=RecommendationCategory.EXEMPTION,
                priority=RecommendationPriority.LOW,
                action_type=ActionType.SHARE_TRANSFER,
            ))

        if not data.has_compensation and income > COMPENSATION_INCOME_THRESHOLD:
            top_rate = rules.personal_bands[-1][1]
            recommendations.append(TaxRecommendation(
                id="compensation-exemption",
                title="Compensation Exemption Threshold",
                description=(
                    f"Under {rules.name}, compensation for loss of office up to "
                    f"{format_currency(rules.compensation_threshold)} is tax-exempt. If you're "
                    f"receiving severance, this could provide significant tax savings."
                ),
                potential_savings=rules.compensation_threshold * top_rate,
                category=RecommendationCategory.EXEMPTION,
                priority=RecommendationPriority.LOW,
                action_type=ActionType.COMPENSATION,
            ))

        if income > STRUCTURING_INCOME_THRESHOLD:
            recommendations.append(TaxRecommendation(
                id="income-structuring",
                title="Consider Legal Income Structuring",
                description=(
                    "For high income earners, consult a tax professional about legitimate "
                    "income structuring options like family trusts, investment companies, or "
                    "pension contributions beyond the minimum."
                ),
                potential_savings=0.0,
                category=RecommendationCategory.STRUCTURE,
                priority=RecommendationPriority.MEDIUM,
            ))

        return _sort(recommendations)

    def generate_for_company(self, result: CompanyTaxResult) -> list[TaxRecommendation]:
        rules = self.rules
        business_type = get_business_type(result.business_sector)
        is_small = result.company_size == CompanySize.SMALL
        recommendations: list[TaxRecommendation] = []

        if not is_small:
            recommendations.append(TaxRecommendation(
                id="capital-allowances",
                title="Maximize Capital Allowances",
                description=(
                    "Claim initial and annual allowances on qualifying assets (machinery, "
                    "equipment, vehicles) to reduce taxable profit."
                ),
                potential_savings=0.0,
                category=RecommendationCategory.DEDUCTION,
                priority=RecommendationPriority.HIGH,
            ))

        if not is_small and not result.is_professional_service:
            recommendations.append(TaxRecommendation(
                id="small-company-exemption",
                title="Consider Small Company Exemption",
                description=(
                    f"Maintain turnover ≤ {format_currency(rules.small_company_max_turnover)} "
                    f"AND fixed assets < {format_currency(rules.small_company_max_fixed_assets)} "
                    f"to qualify for 0% CIT and exemption from the Development Levy."
                ),
                potential_savings=result.corporate_tax + result.development_levy,
                category=RecommendationCategory.STRUCTURE,
                priority=RecommendationPriority.MEDIUM,
                applicable=result.company_size == CompanySize.BIG,
            ))

        if is_small:
            recommendations.append(TaxRecommendation(
                id="maintain-small-company-status",
                title="Maintain Small Company Status",
                description=(
                    f"Your company currently qualifies for 0% CIT and is exempt from the "
                    f"Development Levy. Keep turnover ≤ "
                    f"{format_currency(rules.small_company_max_turnover)} and fixed assets < "
                    f"{format_currency(rules.small_company_max_fixed_assets)} to retain this "
                    f"benefit."
                ),
                potential_savings=0.0,
                category=RecommendationCategory.STRUCTURE,
                priority=RecommendationPriority.LOW,
            ))

        if result.business_sector in rules.edi_sectors:
            qce_note = ""
            if business_type.qce_threshold:
                qce_note = f" (minimum QCE: {format_currency(business_type.qce_threshold)})"
            recommendations.append(TaxRecommendation(
                id="economic-development-incentive",
                title="Economic Development Incentive (EDI)",
                description=(
                    f"As a {business_type.name} business, you qualify for a "
                    f"{rules.edi_credit_rate * 100:g}% annual tax credit on qualifying capital "
                    f"expenditure for up to 5 years{qce_note}."
                ),
                potential_savings=result.edi_credit,
                category=RecommendationCategory.DEDUCTION,
                priority=RecommendationPriority.HIGH,
                applicable=not is_small,
            ))

        for incentive in business_type.tax_incentives:
            if incentive.name in _SIZE_EXEMPTIONS:
                continue
            if incentive.type == IncentiveType.CREDIT and "EDI" in incentive.name:
                continue

            savings = 0.0
            category = RecommendationCategory.EXEMPTION
            if incentive.type == IncentiveType.HOLIDAY:
                category = RecommendationCategory.TIMING
                if result.business_sector in rules.tax_holiday_sectors and not is_small:
                    savings = result.tax_holiday_savings or (
                        result.corporate_tax + result.development_levy
                    )
            elif incentive.type == IncentiveType.DEDUCTION:
                category = RecommendationCategory.DEDUCTION

            description = incentive.description
            if incentive.duration:
                description += f" ({incentive.duration})"
            recommendations.append(TaxRecommendation(
                id=_slug(incentive.name),
                title=incentive.name,
                description=description + ".",
                potential_savings=savings,
                category=category,
                priority=RecommendationPriority.MEDIUM,
                applicable=not is_small,
            ))

        if result.is_non_resident:
            levy_saving = result.assessable_profit * rules.development_levy_rate
            recommendations.append(TaxRecommendation(
                id="non-resident-levy-exemption",
                title="Non-Resident Levy Exemption",
                description=(
                    f"As a non-resident company, you are exempt from the "
                    f"{rules.development_levy_rate * 100:g}% Development Levy "
                    f"({format_currency(levy_saving)} on your assessable profit)."
                ),
                potential_savings=0.0 if is_small else levy_saving,
                category=RecommendationCategory.EXEMPTION,
                priority=RecommendationPriority.LOW,
                applicable=not is_small,
            ))

        if not is_small:
            recommendations.append(TaxRecommendation(
                id="document-deductions",
                title="Document All Deductions",
                description=(
                    f"Maintain receipts for all business expenses: salaries, rent, utilities, "
                    f"marketing, travel, professional fees. Every {format_currency(1_000_000)} "
                    f"in deductions saves {format_currency(1_000_000 * rules.cit_rate)} in CIT."
                ),
                potential_savings=0.0,
                category=RecommendationCategory.DEDUCTION,
                priority=RecommendationPriority.LOW,
            ))

        return _sort(recommendations)


def calculate_total_potential_savings(recommendations: list[TaxRecommendation]) -> float:
    return sum(
        r.potential_savings for r in recommendations
        if r.applicable and r.potential_savings > 0
    )


_engine = RecommendationEngine(NTA_2025)


def get_marginal_tax_rate(taxable_income: float) -> float:
    return _engine.marginal_rate(taxable_income)


def generate_tax_recommendations(data: RecommendationInput) -> list[TaxRecommendation]:
    return _engine.generate(data)


def generate_company_recommendations(result: CompanyTaxResult) -> list[TaxRecommendation]:
    return _engine.generate_for_company(result)
