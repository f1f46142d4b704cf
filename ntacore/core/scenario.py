"""
Scenario Modeler ("What-If" Engine)
Compares tax outcomes between two situations.

Examples:
  - "What if I earn ₦5M more next year?"
  - "What if I contribute to pension and NHF?"
  - "What if I register as a company instead of filing as an individual?"
  - "What would I pay under next year's rules?"
"""

import dataclasses
from dataclasses import dataclass, field

from ntacore.core.currency import format_currency
from ntacore.core.tax_rules.cit import CITCalculator, CompanySize, CompanyTaxInput
from ntacore.core.tax_rules.pit import PersonalTaxInput, PITCalculator
from ntacore.core.tax_rules.rules import TaxYearRules, get_rules


@dataclass
class ScenarioComparison:
    label: str
    current_tax: float
    projected_tax: float
    difference: float
    percentage_change: float
    current_effective_rate: float
    projected_effective_rate: float
    insights: list[str] = field(default_factory=list)


@dataclass
class ScenarioInput:
    scenario_type: str
    current: PersonalTaxInput
    projected: PersonalTaxInput | None = None
    projected_income: float | None = None
    business_expenses: float = 0.0
    fixed_assets: float = 0.0
    alternative_rules: TaxYearRules | None = None


def _comparison(label: str, current, projected, insights: list[str]) -> ScenarioComparison:
    """Build a comparison from two results exposing total_tax and effective_rate."""
    difference = projected.total_tax - current.total_tax
    change = (difference / current.total_tax * 100) if current.total_tax > 0 else 0.0
    return ScenarioComparison(
        label=label,
        current_tax=current.total_tax,
        projected_tax=projected.total_tax,
        difference=round(difference, 2),
        percentage_change=round(change, 2),
        current_effective_rate=current.effective_rate,
        projected_effective_rate=projected.effective_rate,
        insights=insights,
    )


class ScenarioModeler:
    """
    Models different financial scenarios and compares tax outcomes.
    """

    def __init__(self, rules: TaxYearRules | None = None):
        self.rules = rules or get_rules()
        self.pit_calc = PITCalculator(self.rules)
        self.cit_calc = CITCalculator(self.rules)

    def compare_income_change(
        self,
        current: PersonalTaxInput,
        projected_income: float,
    ) -> ScenarioComparison:
        projected = dataclasses.replace(current, annual_income=projected_income)
        current_result = self.pit_calc.calculate(current)
        projected_result = self.pit_calc.calculate(projected)

        difference = projected_result.total_tax - current_result.total_tax
        income_change = projected_income - current.annual_income

        insights = []
        if difference > 0:
            insights.append(
                f"Increasing your income by {format_currency(income_change)} "
                f"would increase your tax by {format_currency(difference)}."
            )
        elif difference < 0:
            insights.append(
                f"Decreasing your income by {format_currency(-income_change)} "
                f"would save you {format_currency(-difference)} in taxes."
            )

        if projected_result.effective_rate > current_result.effective_rate:
            insights.append(
                f"Your effective tax rate would increase from {current_result.effective_rate}% "
                f"to {projected_result.effective_rate}%."
            )

        if income_change > 0:
            marginal_rate = difference / income_change * 100
            insights.append(
                f"The marginal tax rate on the additional {format_currency(income_change)} "
                f"is {marginal_rate:.1f}%."
            )

        return _comparison("Income Change Scenario", current_result, projected_result, insights)

    def compare_deduction_impact(
        self,
        current: PersonalTaxInput,
        projected: PersonalTaxInput,
    ) -> ScenarioComparison:
        current_result = self.pit_calc.calculate(current)
        projected_result = self.pit_calc.calculate(projected)

        difference = projected_result.total_tax - current_result.total_tax

        insights = []
        additional = projected_result.total_deductions - current_result.total_deductions
        if additional > 0 and difference < 0:
            insights.append(
                f"Claiming an additional {format_currency(additional)} in deductions "
                f"would save you {format_currency(-difference)} in taxes."
            )

        if current.annual_rent <= 0 < projected.annual_rent:
            insights.append(
                f"Adding rent relief ({format_currency(projected_result.rent_relief)}) "
                f"contributes to your tax savings."
            )

        if not current.apply_pension and projected.apply_pension:
            insights.append(
                f"Pension contributions of {format_currency(projected_result.pension_deduction)} "
                f"are tax-deductible and reduce your liability."
            )

        if not current.apply_nhf and projected.apply_nhf:
            insights.append(
                f"NHF contributions of {format_currency(projected_result.nhf_deduction)} "
                f"are tax-deductible and reduce your liability."
            )

        return _comparison("Deduction Impact Scenario", current_result, projected_result, insights)

    def compare_individual_vs_company(
        self,
        current: PersonalTaxInput,
        business_expenses: float = 0.0,
        fixed_assets: float = 0.0,
    ) -> ScenarioComparison:
        gross_income = current.annual_income
        pit_result = self.pit_calc.calculate(current)

        company_profit = gross_income - business_expenses
        cit_result = self.cit_calc.calculate(CompanyTaxInput(
            annual_turnover=gross_income,
            fixed_assets=fixed_assets,
            assessable_profit=company_profit,
        ))

        difference = cit_result.total_tax - pit_result.total_tax

        insights = []
        if cit_result.company_size == CompanySize.SMALL:
            insights.append(
                f"As a small company (turnover ≤ "
                f"{format_currency(self.rules.small_company_max_turnover)}), your CIT rate "
                f"would be 0%. You'd save {format_currency(-difference)} compared to "
                f"individual filing."
            )
        elif difference < 0:
            insights.append(
                f"Registering as a company could save you {format_currency(-difference)} "
                f"in taxes."
            )
        else:
            insights.append(
                f"Filing as an individual is currently more tax-efficient, "
                f"saving you {format_currency(difference)} compared to company filing."
            )

        insights.append(
            f"Individual effective rate: {pit_result.effective_rate}% | "
            f"Company effective rate: {cit_result.effective_rate}%"
        )

        if business_expenses > 0:
            insights.append(
                f"Note: Company calculation accounts for {format_currency(business_expenses)} "
                f"in business expenses, reducing assessable profit to "
                f"{format_currency(company_profit)}."
            )

        return _comparison("Individual vs Company Scenario", pit_result, cit_result, insights)

    def compare_rule_sets(
        self,
        current: PersonalTaxInput,
        alternative_rules: TaxYearRules,
    ) -> ScenarioComparison:
        current_result = self.pit_calc.calculate(current)
        projected_result = PITCalculator(alternative_rules).calculate(current)

        difference = projected_result.total_tax - current_result.total_tax

        insights = []
        if difference > 0:
            insights.append(
                f"Under {alternative_rules.name} you would pay {format_currency(difference)} "
                f"more than under {self.rules.name}."
            )
        elif difference < 0:
            insights.append(
                f"Under {alternative_rules.name} you would pay {format_currency(-difference)} "
                f"less than under {self.rules.name}."
            )
        else:
            insights.append(
                f"Your tax is unchanged between {self.rules.name} and {alternative_rules.name}."
            )

        return _comparison("Tax Year Rules Scenario", current_result, projected_result, insights)

    def run_scenario(self, scenario_input: ScenarioInput) -> ScenarioComparison:
        current = scenario_input.current
        if scenario_input.scenario_type == "income_change":
            return self.compare_income_change(
                current=current,
                projected_income=(
                    scenario_input.projected_income
                    if scenario_input.projected_income is not None
                    else current.annual_income
                ),
            )
        elif scenario_input.scenario_type == "deduction_impact":
            return self.compare_deduction_impact(
                current=current,
                projected=scenario_input.projected or current,
            )
        elif scenario_input.scenario_type == "individual_vs_company":
            return self.compare_individual_vs_company(
                current=current,
                business_expenses=scenario_input.business_expenses,
                fixed_assets=scenario_input.fixed_assets,
            )
        elif scenario_input.scenario_type == "rule_change":
            if scenario_input.alternative_rules is None:
                raise ValueError("rule_change scenario requires alternative_rules")
            return self.compare_rule_sets(
                current=current,
                alternative_rules=scenario_input.alternative_rules,
            )
        else:
            raise ValueError(f"Unknown scenario type: {scenario_input.scenario_type}")
