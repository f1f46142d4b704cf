"""
Tests for the Company Income Tax (CIT) Calculator.
Validates against Nigeria Tax Act 2025, Section 56.

CIT Rates:
  - Small companies (turnover ≤ ₦100M AND fixed assets < ₦250M): 0%
  - All other companies: 30% of taxable profit
  - Development Levy: 4% of assessable profit (non-small residents)
  - Minimum effective rate: 15% (large companies / MNEs)
  - Incentives: tax holiday and 5% EDI credit for eligible sectors
"""

import pytest

from ntacore.core.tax_rules.cit import (
    CITCalculator,
    CompanySize,
    CompanyTaxInput,
    calculate_company_tax,
    determine_company_size,
)
from ntacore.core.tax_rules.pit import Deduction
from ntacore.core.tax_rules.rules import NTA_2025
from ntacore.core.tax_rules.sectors import BusinessSector


@pytest.fixture
def calc():
    return CITCalculator(NTA_2025)


@pytest.fixture
def low_rate_calc():
    # CIT low enough for the 15% minimum ETR to bite
    return CITCalculator(NTA_2025.replace(cit_rate=0.05))


def big_company(**overrides):
    fields = dict(
        annual_turnover=200_000_000,
        fixed_assets=300_000_000,
        assessable_profit=50_000_000,
    )
    fields.update(overrides)
    return CompanyTaxInput(**fields)


def line(result, prefix):
    matches = [item for item in result.tax_breakdown if item.description.startswith(prefix)]
    assert len(matches) == 1, f"expected one '{prefix}' line in {result.tax_breakdown}"
    return matches[0]


class TestCompanyClassification:
    def test_small_company(self, calc):
        assert calc.determine_company_size(80_000_000, 100_000_000) == CompanySize.SMALL

    def test_turnover_boundary_is_inclusive(self, calc):
        assert calc.determine_company_size(100_000_000, 0) == CompanySize.SMALL

    def test_turnover_above_boundary(self, calc):
        assert calc.determine_company_size(100_000_001, 0) == CompanySize.BIG

    def test_asset_boundary_is_strict(self, calc):
        assert calc.determine_company_size(0, 249_999_999) == CompanySize.SMALL
        assert calc.determine_company_size(0, 250_000_000) == CompanySize.BIG

    def test_professional_service_always_big(self, calc):
        assert calc.determine_company_size(0, 0, is_professional_service=True) == CompanySize.BIG

    def test_module_function(self):
        assert determine_company_size(200_000_000, 0) == CompanySize.BIG

    def test_professional_sector_implies_professional_service(self, calc):
        result = calc.calculate(CompanyTaxInput(
            annual_turnover=10_000_000,
            fixed_assets=0,
            assessable_profit=1_000_000,
            business_sector=BusinessSector.PROFESSIONAL_SERVICES,
        ))
        assert result.company_size == CompanySize.BIG
        assert result.is_professional_service is True

    def test_mne_is_large(self, calc):
        result = calc.calculate(big_company(is_mne=True))
        assert result.company_size == CompanySize.LARGE
        assert result.is_large_company is True
        assert "Multinational" in result.classification_reason

    def test_flagged_large_company(self, calc):
        result = calc.calculate(big_company(is_large_company=True))
        assert result.company_size == CompanySize.LARGE

    def test_turnover_above_large_threshold(self, calc):
        result = calc.calculate(big_company(annual_turnover=50_000_000_001))
        assert result.company_size == CompanySize.LARGE

    def test_turnover_at_large_threshold_is_big(self, calc):
        result = calc.calculate(big_company(annual_turnover=50_000_000_000))
        assert result.company_size == CompanySize.BIG
        assert result.is_large_company is False

    def test_large_flags_never_override_small(self, calc):
        result = calc.calculate(CompanyTaxInput(
            annual_turnover=50_000_000,
            fixed_assets=10_000_000,
            assessable_profit=5_000_000,
            is_mne=True,
            is_large_company=True,
        ))
        assert result.company_size == CompanySize.SMALL
        assert result.is_large_company is False
        assert result.total_tax == 0

    def test_classification_reasons(self, calc):
        small = calc.calculate(CompanyTaxInput(80_000_000, 100_000_000, 10_000_000))
        assert small.classification_reason.startswith("Turnover ≤ ₦100,000,000")

        professional = calc.calculate(big_company(is_professional_service=True))
        assert "Professional services" in professional.classification_reason

        big = calc.calculate(big_company())
        assert big.classification_reason == "Exceeds small company thresholds"


class TestSmallCompany:
    def test_small_company_scenario(self, calc):
        result = calc.calculate(CompanyTaxInput(
            annual_turnover=80_000_000,
            fixed_assets=100_000_000,
            assessable_profit=10_000_000,
        ))
        assert result.company_size == CompanySize.SMALL
        assert result.tax_rate == 0
        assert result.corporate_tax == 0
        assert result.development_levy == 0
        assert result.total_tax == 0
        assert result.net_profit == 10_000_000

    def test_small_company_exemption_lines(self, calc):
        result = calc.calculate(CompanyTaxInput(80_000_000, 100_000_000, 10_000_000))
        assert [(i.description, i.amount) for i in result.tax_breakdown] == [
            ("Corporate Income Tax (Small Company Exemption)", 0),
            ("Development Levy (Small Company Exemption)", 0),
        ]

    @pytest.mark.parametrize(
        "turnover, assets, profit",
        [
            (0, 0, 0),
            (100_000_000, 249_999_999.99, 90_000_000),
            (1, 1, 1_000_000_000),
            (55_555_555, 123_456_789, 7_777_777),
        ],
    )
    def test_small_company_always_zero_tax(self, calc, turnover, assets, profit):
        result = calc.calculate(CompanyTaxInput(turnover, assets, profit))
        assert result.company_size == CompanySize.SMALL
        assert result.total_tax == 0

    def test_small_company_gets_no_incentives(self, calc):
        result = calc.calculate(CompanyTaxInput(
            annual_turnover=50_000_000,
            fixed_assets=10_000_000,
            assessable_profit=20_000_000,
            business_sector=BusinessSector.AGRICULTURE,
            is_tax_holiday_active=True,
            qualifying_capital_expenditure=100_000_000,
        ))
        assert result.tax_holiday_savings == 0
        assert result.edi_credit == 0
        assert result.total_incentive_savings == 0
        assert len(result.tax_breakdown) == 2


class TestBigCompany:
    def test_big_company_scenario(self, calc):
        result = calc.calculate(big_company())
        assert result.company_size == CompanySize.BIG
        assert result.tax_rate == 30
        assert result.corporate_tax == 15_000_000
        assert result.development_levy == 2_000_000
        assert result.total_tax == 17_000_000
        assert result.net_profit == 33_000_000
        assert result.effective_rate == 34

    def test_big_company_lines(self, calc):
        result = calc.calculate(big_company())
        assert [(i.description, i.amount) for i in result.tax_breakdown] == [
            ("Corporate Income Tax (30% of ₦50,000,000)", 15_000_000),
            ("Development Levy (4% of ₦50,000,000)", 2_000_000),
        ]

    def test_professional_service_taxed_at_zero_turnover(self, calc):
        result = calc.calculate(CompanyTaxInput(
            annual_turnover=0,
            fixed_assets=0,
            assessable_profit=10_000_000,
            is_professional_service=True,
        ))
        assert result.company_size == CompanySize.BIG
        assert result.corporate_tax == 3_000_000
        assert result.development_levy == 400_000

    @pytest.mark.parametrize("allowances", [0, 1_000_000, 20_000_000, 49_000_000, 80_000_000])
    def test_levy_base_is_assessable_profit(self, calc, allowances):
        result = calc.calculate(big_company(capital_allowances=allowances))
        assert result.development_levy == pytest.approx(50_000_000 * 0.04)

    def test_capital_allowances_reduce_cit_only(self, calc):
        result = calc.calculate(big_company(capital_allowances=20_000_000))
        assert result.taxable_profit == 30_000_000
        assert result.corporate_tax == 9_000_000
        assert result.development_levy == 2_000_000
        assert result.total_tax == 11_000_000
        # Deductions are not subtracted again from net profit
        assert result.net_profit == 39_000_000

    def test_other_deductions_summed(self, calc):
        result = calc.calculate(big_company(
            capital_allowances=2_000_000,
            other_deductions=[
                Deduction(id="rent", description="Office rent", amount=5_000_000),
                Deduction(id="salaries", description="Salaries", amount=3_000_000),
            ],
        ))
        assert result.other_deductions_total == 8_000_000
        assert result.total_deductions == 10_000_000
        assert result.taxable_profit == 40_000_000

    def test_non_resident_levy_exemption(self, calc):
        result = calc.calculate(big_company(is_non_resident=True))
        assert result.development_levy == 0
        assert result.total_tax == 15_000_000
        exemption = line(result, "Development Levy (Non-resident Exemption)")
        assert exemption.amount == 0

    def test_zero_taxable_profit_guards_effective_rate(self, calc):
        result = calc.calculate(CompanyTaxInput(
            annual_turnover=200_000_000,
            fixed_assets=300_000_000,
            assessable_profit=10_000_000,
            capital_allowances=20_000_000,
        ))
        assert result.taxable_profit == 0
        assert result.corporate_tax == 0
        # Levy still charged on assessable profit
        assert result.development_levy == 400_000
        assert result.total_tax == 400_000
        assert result.effective_rate == 0

    def test_totals_reconcile(self, calc):
        result = calc.calculate(big_company(
            capital_allowances=3_333_333.33,
            asset_disposal_proceeds=4_000_000,
            asset_tax_written_down_value=1_500_000,
            business_sector="manufacturing",
            qualifying_capital_expenditure=70_000_000,
        ))
        assert result.taxable_profit == pytest.approx(
            max(0, result.assessable_profit - result.total_deductions + result.asset_disposal_gain),
            abs=0.01,
        )
        assert result.total_tax == pytest.approx(
            max(0, result.corporate_tax + result.development_levy + result.etr_top_up
                - result.total_incentive_savings),
            abs=0.01,
        )
        assert result.net_profit == pytest.approx(result.assessable_profit - result.total_tax)


class TestAssetDisposal:
    def test_disposal_gain_added_to_taxable_profit(self, calc):
        result = calc.calculate(big_company(
            asset_disposal_proceeds=12_000_000,
            asset_tax_written_down_value=5_000_000,
        ))
        assert result.asset_disposal_gain == 7_000_000
        assert result.taxable_profit == 57_000_000
        assert result.corporate_tax == 17_100_000
        assert result.development_levy == 2_000_000

    def test_disposal_loss_is_floored(self, calc):
        result = calc.calculate(big_company(
            asset_disposal_proceeds=3_000_000,
            asset_tax_written_down_value=5_000_000,
        ))
        assert result.asset_disposal_gain == 0
        assert result.taxable_profit == 50_000_000


class TestMinimumETR:
    def test_no_top_up_at_standard_rates(self, calc):
        result = calc.calculate(big_company(is_mne=True))
        assert result.minimum_etr_applied is False
        assert result.etr_top_up == 0
        assert result.total_tax == 17_000_000

    def test_top_up_for_large_company(self, low_rate_calc):
        # CIT 5% of 100M = 5M, levy 4M, ETR 9% -> top-up to 15M
        result = low_rate_calc.calculate(big_company(assessable_profit=100_000_000, is_mne=True))
        assert result.corporate_tax == 5_000_000
        assert result.development_levy == 4_000_000
        assert result.etr_top_up == 6_000_000
        assert result.minimum_etr_applied is True
        assert result.total_tax == 15_000_000
        assert result.effective_rate == 15
        assert line(result, "Minimum ETR Top-up").amount == 6_000_000

    def test_top_up_for_non_resident_large_company(self, low_rate_calc):
        result = low_rate_calc.calculate(big_company(
            assessable_profit=100_000_000, is_mne=True, is_non_resident=True,
        ))
        assert result.etr_top_up == 10_000_000
        assert result.total_tax == 15_000_000

    def test_no_top_up_for_big_company(self, low_rate_calc):
        result = low_rate_calc.calculate(big_company(assessable_profit=100_000_000))
        assert result.company_size == CompanySize.BIG
        assert result.minimum_etr_applied is False
        assert result.total_tax == 9_000_000

    def test_no_top_up_without_taxable_profit(self, low_rate_calc):
        result = low_rate_calc.calculate(big_company(
            assessable_profit=10_000_000, capital_allowances=10_000_000, is_mne=True,
        ))
        assert result.taxable_profit == 0
        assert result.minimum_etr_applied is False
        assert result.etr_top_up == 0


class TestSectorIncentives:
    def test_tax_holiday_waives_cit_and_levy(self, calc):
        result = calc.calculate(big_company(
            business_sector=BusinessSector.AGRICULTURE,
            is_tax_holiday_active=True,
        ))
        assert result.tax_holiday_savings == 17_000_000
        assert result.total_incentive_savings == 17_000_000
        assert result.total_tax == 0
        assert result.net_profit == 50_000_000
        holiday = line(result, "Tax Holiday Exemption")
        assert holiday.amount == -17_000_000
        assert "Agriculture" in holiday.description

    @pytest.mark.parametrize(
        "sector",
        [
            BusinessSector.AGRICULTURE,
            BusinessSector.MINING,
            BusinessSector.GAS_UTILIZATION,
            BusinessSector.EXPORT_ORIENTED,
        ],
    )
    def test_holiday_sectors(self, calc, sector):
        result = calc.calculate(big_company(business_sector=sector, is_tax_holiday_active=True))
        assert result.total_tax == 0

    def test_holiday_requires_active_flag(self, calc):
        result = calc.calculate(big_company(business_sector=BusinessSector.MINING))
        assert result.tax_holiday_savings == 0
        assert result.total_tax == 17_000_000

    def test_holiday_not_available_to_manufacturing(self, calc):
        result = calc.calculate(big_company(
            business_sector=BusinessSector.MANUFACTURING,
            is_tax_holiday_active=True,
        ))
        assert result.tax_holiday_savings == 0
        assert result.total_tax == 17_000_000
        assert result.is_tax_holiday_active is True

    def test_holiday_does_not_cover_etr_top_up(self, low_rate_calc):
        result = low_rate_calc.calculate(big_company(
            assessable_profit=100_000_000,
            is_mne=True,
            business_sector=BusinessSector.AGRICULTURE,
            is_tax_holiday_active=True,
        ))
        assert result.tax_holiday_savings == 9_000_000
        assert result.total_tax == 6_000_000

    def test_edi_credit(self, calc):
        result = calc.calculate(big_company(
            business_sector=BusinessSector.MANUFACTURING,
            qualifying_capital_expenditure=100_000_000,
        ))
        assert result.edi_credit == 5_000_000
        assert result.total_tax == 12_000_000
        credit = line(result, "EDI Credit")
        assert credit.description == "EDI Credit (5% of ₦100,000,000 QCE)"
        assert credit.amount == -5_000_000

    def test_edi_credit_capped_at_tax(self, calc):
        result = calc.calculate(big_company(
            business_sector=BusinessSector.RENEWABLE_ENERGY,
            qualifying_capital_expenditure=10_000_000_000,
        ))
        assert result.edi_credit == 17_000_000
        assert result.total_tax == 0
        assert line(result, "EDI Credit").description.endswith("capped at remaining tax")

    @pytest.mark.parametrize("qce", [0, 1, 340_000_000, 10**12, 10**15])
    def test_edi_never_creates_refund(self, calc, qce):
        result = calc.calculate(big_company(
            business_sector=BusinessSector.HEALTHCARE,
            qualifying_capital_expenditure=qce,
        ))
        assert result.total_tax >= 0
        assert result.edi_credit <= 17_000_000

    def test_edi_after_holiday(self, calc):
        result = calc.calculate(big_company(
            business_sector=BusinessSector.AGRICULTURE,
            is_tax_holiday_active=True,
            qualifying_capital_expenditure=200_000_000,
        ))
        # Holiday already clears all tax, nothing left to credit
        assert result.edi_credit == 0
        assert result.total_tax == 0

    def test_edi_stacks_on_top_up_after_holiday(self, low_rate_calc):
        result = low_rate_calc.calculate(big_company(
            assessable_profit=100_000_000,
            is_mne=True,
            business_sector=BusinessSector.AGRICULTURE,
            is_tax_holiday_active=True,
            qualifying_capital_expenditure=200_000_000,
        ))
        # Top-up 6M left after holiday; EDI 10M capped to 6M
        assert result.edi_credit == 6_000_000
        assert result.total_incentive_savings == 15_000_000
        assert result.total_tax == 0

    def test_edi_not_available_to_technology(self, calc):
        result = calc.calculate(big_company(
            business_sector=BusinessSector.TECHNOLOGY,
            qualifying_capital_expenditure=100_000_000,
        ))
        assert result.edi_credit == 0
        assert not [i for i in result.tax_breakdown if i.description.startswith("EDI")]

    def test_unknown_sector_tag_gets_no_incentives(self, calc):
        result = calc.calculate(big_company(
            business_sector="fintech",
            is_tax_holiday_active=True,
            qualifying_capital_expenditure=100_000_000,
        ))
        assert result.business_sector == BusinessSector.OTHER
        assert result.total_incentive_savings == 0
        assert result.total_tax == 17_000_000

    def test_sector_tag_is_case_insensitive(self, calc):
        result = calc.calculate(big_company(
            business_sector="Manufacturing",
            qualifying_capital_expenditure=100_000_000,
        ))
        assert result.business_sector == BusinessSector.MANUFACTURING
        assert result.edi_credit == 5_000_000

    def test_missing_sector_is_general(self, calc):
        result = calc.calculate(big_company())
        assert result.business_sector == BusinessSector.GENERAL


class TestResultRecord:
    def test_module_function(self):
        assert calculate_company_tax(big_company()).total_tax == 17_000_000

    def test_to_dict_flattens_enums(self, calc):
        data = calc.calculate(big_company(is_mne=True)).to_dict()
        assert data["company_size"] == "large"
        assert data["business_sector"] == "general"
        assert data["tax_breakdown"][0]["amount"] == 15_000_000

    def test_deterministic(self, calc):
        first = calc.calculate(big_company(capital_allowances=1_234_567.89))
        second = calc.calculate(big_company(capital_allowances=1_234_567.89))
        assert first == second
