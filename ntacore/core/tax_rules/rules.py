"""
Tax Year Rule Sets
Every rate, threshold and eligibility set used by the calculators, bundled per
tax year so a future Act can be modelled without touching calculator code.

NTA 2025 (Nigeria Tax Act 2025) is the canonical rule set:
  - Fourth Schedule personal bands (0% to 25%)
  - Pension 8%, NHF 2.5%, rent relief 20% of rent capped at ₦500,000
  - Small company: turnover ≤ ₦100M AND fixed assets < ₦250M
  - Large company: turnover > ₦50B, MNEs, or explicitly flagged
  - CIT 30%, Development Levy 4% of assessable profit, minimum ETR 15%
  - EDI credit 5% of qualifying capital expenditure
  - Share transfer exemption: proceeds ≤ ₦150M, up to ₦10M gain, CGT 10%
  - Compensation for loss of office: first ₦50M exempt
"""

import dataclasses
from dataclasses import dataclass
from datetime import datetime

from ntacore.core.tax_rules.sectors import BusinessSector


@dataclass(frozen=True)
class TaxYearRules:
    tax_year: int
    name: str

    # Personal income tax: (band width, rate), filled bottom-up
    personal_bands: tuple[tuple[float, float], ...]
    pension_rate: float
    nhf_rate: float
    rent_relief_rate: float
    rent_relief_max: float

    # Company income tax
    small_company_max_turnover: float
    small_company_max_fixed_assets: float
    large_company_turnover_threshold: float
    cit_rate: float
    development_levy_rate: float
    minimum_etr: float

    # Sector incentives
    tax_holiday_sectors: frozenset[BusinessSector]
    edi_sectors: frozenset[BusinessSector]
    edi_credit_rate: float

    # Exemptions
    share_transfer_threshold: float
    share_transfer_max_exempt_gain: float
    cgt_rate: float
    compensation_threshold: float

    # Filing
    pit_lodgement_deadline: datetime
    cit_lodgement_deadline: datetime

    @property
    def tax_free_threshold(self) -> float:
        """Width of the 0% personal band."""
        width, rate = self.personal_bands[0]
        return width if rate == 0 else 0.0

    def replace(self, **changes) -> "TaxYearRules":
        return dataclasses.replace(self, **changes)


NTA_2025 = TaxYearRules(
    tax_year=2025,
    name="Nigeria Tax Act 2025",
    personal_bands=(
        (800_000.0, 0.00),
        (2_200_000.0, 0.15),
        (9_000_000.0, 0.18),
        (13_000_000.0, 0.21),
        (25_000_000.0, 0.23),
        (float("inf"), 0.25),
    ),
    pension_rate=0.08,
    nhf_rate=0.025,
    rent_relief_rate=0.20,
    rent_relief_max=500_000.0,
    small_company_max_turnover=100_000_000.0,
    small_company_max_fixed_assets=250_000_000.0,
    large_company_turnover_threshold=50_000_000_000.0,
    cit_rate=0.30,
    development_levy_rate=0.04,
    minimum_etr=0.15,
    tax_holiday_sectors=frozenset({
        BusinessSector.AGRICULTURE,
        BusinessSector.MINING,
        BusinessSector.GAS_UTILIZATION,
        BusinessSector.EXPORT_ORIENTED,
    }),
    edi_sectors=frozenset({
        BusinessSector.AGRICULTURE,
        BusinessSector.MINING,
        BusinessSector.MANUFACTURING,
        BusinessSector.RENEWABLE_ENERGY,
        BusinessSector.HEALTHCARE,
    }),
    edi_credit_rate=0.05,
    share_transfer_threshold=150_000_000.0,
    share_transfer_max_exempt_gain=10_000_000.0,
    cgt_rate=0.10,
    compensation_threshold=50_000_000.0,
    pit_lodgement_deadline=datetime(2026, 3, 31, 23, 59, 59),
    cit_lodgement_deadline=datetime(2026, 6, 30, 23, 59, 59),
)


_RULES_BY_YEAR: dict[int, TaxYearRules] = {
    NTA_2025.tax_year: NTA_2025,
}


def register_rules(rules: TaxYearRules) -> None:
    _RULES_BY_YEAR[rules.tax_year] = rules


def get_rules(tax_year: int | None = None) -> TaxYearRules:
    if tax_year is None:
        from ntacore.config import get_settings
        tax_year = get_settings().TAX_YEAR

    rules = _RULES_BY_YEAR.get(tax_year)
    if rules is None:
        raise ValueError(f"No tax rules registered for tax year {tax_year}")
    return rules
