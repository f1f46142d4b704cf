"""
Tax Engine Entry Points
One facade over the calculators, in two flavours:

  - TaxEngine: lenient, never rejects input. Negative amounts are clamped by
    the calculators and unknown sector tags resolve to BusinessSector.OTHER.
  - StrictTaxEngine: validates every payload with the pydantic request models
    first and raises pydantic.ValidationError (a ValueError) on negative
    amounts, unknown sectors or missing fields.

Payloads may be the calculator input dataclasses or plain dicts.
"""

import dataclasses
from typing import Any

from ntacore.config import get_settings
from ntacore.core.recommendations import (
    RecommendationEngine,
    RecommendationInput,
    TaxRecommendation,
)
from ntacore.core.tax_rules.cit import CITCalculator, CompanyTaxInput, CompanyTaxResult
from ntacore.core.tax_rules.exemptions import (
    CompensationResult,
    ExemptionCalculator,
    ShareTransferResult,
)
from ntacore.core.tax_rules.pit import (
    Deduction,
    PersonalTaxInput,
    PersonalTaxResult,
    PITCalculator,
)
from ntacore.core.tax_rules.rules import TaxYearRules, get_rules
from ntacore.schemas.schemas import (
    CompanyTaxRequest,
    CompensationRequest,
    PersonalTaxRequest,
    ShareTransferRequest,
)


def _is_instance_of_dataclass(value: Any) -> bool:
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def _as_dict(data: Any) -> dict:
    if _is_instance_of_dataclass(data):
        return dataclasses.asdict(data)

    fields = dict(data)
    # Deduction lists may mix plain dicts and Deduction records
    for key, value in fields.items():
        if isinstance(value, list):
            fields[key] = [
                dataclasses.asdict(item) if _is_instance_of_dataclass(item) else item
                for item in value
            ]
    return fields


def _deductions(items) -> list[Deduction]:
    deductions = []
    for item in items or []:
        if isinstance(item, Deduction):
            deductions.append(item)
        else:
            deductions.append(Deduction(
                id=item.get("id", ""),
                description=item.get("description", ""),
                amount=item.get("amount", 0.0),
            ))
    return deductions


class TaxEngine:
    """
    Lenient facade: every calculation is total over its input.
    """

    strict = False

    def __init__(self, rules: TaxYearRules | None = None):
        self.rules = rules or get_rules()
        self.pit_calc = PITCalculator(self.rules)
        self.cit_calc = CITCalculator(self.rules)
        self.exemption_calc = ExemptionCalculator(self.rules)
        self.recommender = RecommendationEngine(self.rules)

    def personal_input(self, data: PersonalTaxInput | dict) -> PersonalTaxInput:
        if isinstance(data, PersonalTaxInput):
            return data
        fields = dict(data)
        fields["additional_deductions"] = _deductions(fields.get("additional_deductions"))
        return PersonalTaxInput(**fields)

    def company_input(self, data: CompanyTaxInput | dict) -> CompanyTaxInput:
        if isinstance(data, CompanyTaxInput):
            return data
        fields = dict(data)
        fields["other_deductions"] = _deductions(fields.get("other_deductions"))
        return CompanyTaxInput(**fields)

    def share_transfer_input(self, data: dict) -> dict:
        return _as_dict(data)

    def compensation_input(self, data: dict) -> dict:
        return _as_dict(data)

    def calculate_personal_tax(self, data: PersonalTaxInput | dict) -> PersonalTaxResult:
        return self.pit_calc.calculate(self.personal_input(data))

    def calculate_company_tax(self, data: CompanyTaxInput | dict) -> CompanyTaxResult:
        return self.cit_calc.calculate(self.company_input(data))

    def calculate_share_transfer_tax(self, data: dict) -> ShareTransferResult:
        fields = self.share_transfer_input(data)
        return self.exemption_calc.calculate_share_transfer(
            disposal_proceeds=fields["disposal_proceeds"],
            cost_basis=fields["cost_basis"],
            reinvestment_amount=fields.get("reinvestment_amount"),
        )

    def calculate_compensation_tax(self, data: dict) -> CompensationResult:
        fields = self.compensation_input(data)
        return self.exemption_calc.calculate_compensation(
            total_compensation=fields["total_compensation"],
            years_of_service=fields.get("years_of_service"),
        )

    def generate_recommendations(self, data: RecommendationInput) -> list[TaxRecommendation]:
        return self.recommender.generate(data)

    def generate_company_recommendations(
        self, result: CompanyTaxResult
    ) -> list[TaxRecommendation]:
        return self.recommender.generate_for_company(result)


class StrictTaxEngine(TaxEngine):
    """
    Validating facade: rejects negative amounts and unknown sectors up front.
    """

    strict = True

    def personal_input(self, data: PersonalTaxInput | dict) -> PersonalTaxInput:
        return PersonalTaxRequest.model_validate(_as_dict(data)).to_input()

    def company_input(self, data: CompanyTaxInput | dict) -> CompanyTaxInput:
        fields = _as_dict(data)
        sector = fields.get("business_sector")
        if sector is None or (isinstance(sector, str) and not sector.strip()):
            fields.pop("business_sector", None)
        return CompanyTaxRequest.model_validate(fields).to_input()

    def share_transfer_input(self, data: dict) -> dict:
        return ShareTransferRequest.model_validate(_as_dict(data)).model_dump()

    def compensation_input(self, data: dict) -> dict:
        return CompensationRequest.model_validate(_as_dict(data)).model_dump()


def get_engine(
    strict: bool | None = None,
    rules: TaxYearRules | None = None,
) -> TaxEngine:
    if strict is None:
        strict = get_settings().STRICT_VALIDATION
    if strict:
        return StrictTaxEngine(rules)
    return TaxEngine(rules)
