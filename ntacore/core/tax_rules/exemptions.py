"""
Exemption Calculators
Based on Nigeria Tax Act 2025

Share transfers (capital gains):
  - Disposals with proceeds ≤ ₦150M (raised from ₦100M) qualify
  - Up to ₦10M of the gain is exempt
  - Gain reinvested in qualifying shares is further exempt, up to the gain
  - Remaining gain taxed at 10% CGT

Compensation for loss of office:
  - First ₦50M (raised from ₦10M) is exempt
  - The excess is taxed on the personal bands as if it were the year's only income
"""

from dataclasses import dataclass, asdict

from ntacore.core.tax_rules.pit import PITCalculator
from ntacore.core.tax_rules.rules import TaxYearRules, NTA_2025, get_rules


@dataclass
class ShareTransferResult:
    disposal_proceeds: float
    cost_basis: float
    reinvestment_amount: float
    capital_gain: float
    is_eligible_for_exemption: bool
    exempt_amount: float
    taxable_gain: float
    tax: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class CompensationResult:
    total_compensation: float
    exempt_portion: float
    taxable_portion: float
    tax: float
    years_of_service: int | None = None

    def to_dict(self) -> dict:
        return asdict(self)


class ExemptionCalculator:
    """
    Share transfer and compensation-for-loss-of-office exemptions.
    """

    def __init__(self, rules: TaxYearRules | None = None):
        self.rules = rules or get_rules()
        self.pit_calc = PITCalculator(self.rules)

    def calculate_share_transfer(
        self,
        disposal_proceeds: float,
        cost_basis: float,
        reinvestment_amount: float | None = None,
    ) -> ShareTransferResult:
        reinvestment_amount = reinvestment_amount or 0.0
        capital_gain = max(0.0, disposal_proceeds - cost_basis)
        is_eligible = disposal_proceeds <= self.rules.share_transfer_threshold

        exempt_amount = 0.0
        if is_eligible:
            exempt_amount = min(capital_gain, self.rules.share_transfer_max_exempt_gain)
            if reinvestment_amount > 0:
                exempt_amount += min(reinvestment_amount, capital_gain - exempt_amount)

        taxable_gain = capital_gain - exempt_amount
        tax = taxable_gain * self.rules.cgt_rate

        return ShareTransferResult(
            disposal_proceeds=disposal_proceeds,
            cost_basis=cost_basis,
            reinvestment_amount=reinvestment_amount,
            capital_gain=round(capital_gain, 2),
            is_eligible_for_exemption=is_eligible,
            exempt_amount=round(exempt_amount, 2),
            taxable_gain=round(taxable_gain, 2),
            tax=round(tax, 2),
        )

    def calculate_compensation(
        self,
        total_compensation: float,
        years_of_service: int | None = None,
    ) -> CompensationResult:
        threshold = self.rules.compensation_threshold
        exempt_portion = min(total_compensation, threshold)
        taxable_portion = max(0.0, total_compensation - threshold)

        progressive = self.pit_calc.calculate_progressive_tax(taxable_portion)

        return CompensationResult(
            total_compensation=total_compensation,
            exempt_portion=round(exempt_portion, 2),
            taxable_portion=round(taxable_portion, 2),
            tax=progressive.total_tax,
            years_of_service=years_of_service,
        )


_calculator = ExemptionCalculator(NTA_2025)


def calculate_share_transfer_tax(
    disposal_proceeds: float,
    cost_basis: float,
    reinvestment_amount: float | None = None,
) -> ShareTransferResult:
    return _calculator.calculate_share_transfer(disposal_proceeds, cost_basis, reinvestment_amount)


def calculate_compensation_tax(
    total_compensation: float,
    years_of_service: int | None = None,
) -> CompensationResult:
    return _calculator.calculate_compensation(total_compensation, years_of_service)
