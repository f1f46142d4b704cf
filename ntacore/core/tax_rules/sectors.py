"""
Business Sectors and Tax Incentives
Sector catalogue for company tax under the Nigeria Tax Act 2025.

The Economic Development Incentive (EDI) replaces Pioneer Status: a 5% annual
credit on qualifying capital expenditure (QCE) in priority sectors for up to
5 years. Tax holidays remain for agriculture, mining, gas utilisation and
export-oriented businesses.

Which sectors actually earn a holiday or EDI credit is decided by the tax year
rules; this module only describes the sectors.
"""

from dataclasses import dataclass, field
from enum import Enum


class BusinessSector(str, Enum):
    GENERAL = "general"
    AGRICULTURE = "agriculture"
    MINING = "mining"
    MANUFACTURING = "manufacturing"
    GAS_UTILIZATION = "gas_utilization"
    EXPORT_ORIENTED = "export_oriented"
    RENEWABLE_ENERGY = "renewable_energy"
    TECHNOLOGY = "technology"
    HEALTHCARE = "healthcare"
    PROFESSIONAL_SERVICES = "professional_services"
    OTHER = "other"

    @classmethod
    def from_tag(cls, tag: "str | BusinessSector | None") -> "BusinessSector":
        """Resolve a loose sector tag. Missing tags are GENERAL, unknown ones OTHER."""
        if isinstance(tag, BusinessSector):
            return tag
        if tag is None or not tag.strip():
            return cls.GENERAL
        try:
            return cls(tag.strip().lower())
        except ValueError:
            return cls.OTHER


class IncentiveType(str, Enum):
    EXEMPTION = "exemption"
    CREDIT = "credit"
    DEDUCTION = "deduction"
    HOLIDAY = "holiday"


@dataclass(frozen=True)
class TaxIncentive:
    name: str
    type: IncentiveType
    description: str
    duration: str | None = None
    rate: str | None = None
    requirements: tuple[str, ...] = ()
    qce_threshold: float | None = None


@dataclass(frozen=True)
class BusinessTypeInfo:
    sector: BusinessSector
    name: str
    description: str
    tax_incentives: tuple[TaxIncentive, ...] = field(default_factory=tuple)
    edi_eligible: bool = False
    edi_details: str | None = None

    @property
    def has_tax_holiday(self) -> bool:
        return any(i.type == IncentiveType.HOLIDAY for i in self.tax_incentives)

    @property
    def qce_threshold(self) -> float | None:
        for incentive in self.tax_incentives:
            if incentive.qce_threshold:
                return incentive.qce_threshold
        return None


EDI_INFO = {
    "name": "Economic Development Incentive (EDI)",
    "description": (
        "NTA 2025 replaces Pioneer Status with EDI - a credit-based system focused on "
        "actual capital investment in priority sectors."
    ),
    "credit_rate": "5% per year",
    "max_duration": "5 years",
    "total_credit": "25% of qualifying capital expenditure",
}

_EDI_CREDIT = "EDI Tax Credit"

BUSINESS_TYPES: tuple[BusinessTypeInfo, ...] = (
    BusinessTypeInfo(
        sector=BusinessSector.GENERAL,
        name="General Business",
        description="Standard business operations not in a specific incentive sector",
        tax_incentives=(
            TaxIncentive(
                name="Small Company Exemption",
                type=IncentiveType.EXEMPTION,
                rate="0% CIT",
                description=(
                    "Companies with turnover ≤₦100M and fixed assets <₦250M pay no corporate "
                    "income tax and are exempt from 4% Development Levy"
                ),
                requirements=(
                    "Annual turnover not exceeding ₦100 million",
                    "Fixed assets below ₦250 million",
                    "Not a professional service provider",
                ),
            ),
        ),
    ),
    BusinessTypeInfo(
        sector=BusinessSector.AGRICULTURE,
        name="Agriculture & Agro-Processing",
        description=(
            "Crop production, livestock, aquaculture, forestry, dairy, cocoa processing, "
            "animal feeds manufacturing"
        ),
        tax_incentives=(
            TaxIncentive(
                name="Agricultural Tax Holiday",
                type=IncentiveType.HOLIDAY,
                duration="5 years (extendable to 10)",
                rate="100% exemption",
                description=(
                    "Complete income tax exemption for the first 5 years. Extendable to 10 years "
                    "if 100% of profits are reinvested in expansion"
                ),
                requirements=(
                    "Engaged in agricultural business (crop production, livestock, aquaculture)",
                    "New company or new agricultural venture",
                    "For extension: reinvest 100% of profits into expansion",
                ),
            ),
            TaxIncentive(
                name="Agribusiness Small Company Relief",
                type=IncentiveType.EXEMPTION,
                rate="0% CIT",
                description=(
                    "Agribusinesses with turnover ≤₦100M are exempt from Companies Income Tax"
                ),
                requirements=(
                    "Annual turnover not exceeding ₦100 million",
                    "Engaged in agricultural activities",
                ),
            ),
            TaxIncentive(
                name="Withholding Tax Exemption",
                type=IncentiveType.EXEMPTION,
                rate="0% WHT",
                description=(
                    "Agricultural businesses exempt from WHT deductions on their income, "
                    "improving cash flow"
                ),
            ),
            TaxIncentive(
                name="VAT Zero-Rating",
                type=IncentiveType.EXEMPTION,
                rate="0% VAT (input recoverable)",
                description=(
                    "Basic food items are zero-rated, allowing recovery of input VAT on "
                    "agricultural supplies"
                ),
            ),
            TaxIncentive(
                name=_EDI_CREDIT,
                type=IncentiveType.CREDIT,
                duration="5 years",
                rate="5% per year on QCE",
                description=(
                    "Additional 5% annual tax credit on qualifying capital expenditure for "
                    "agro-processing (total 25% over 5 years)"
                ),
                qce_threshold=100_000_000.0,
            ),
        ),
        edi_eligible=True,
        edi_details=(
            "Agro-processing companies can claim EDI credits on processing equipment, storage "
            "facilities, and cold chain infrastructure, separately from the tax holiday."
        ),
    ),
    BusinessTypeInfo(
        sector=BusinessSector.MINING,
        name="Mining & Solid Minerals",
        description=(
            "Coal, limestone, barite, bitumen, bentonite, lead, zinc, iron ore, gold, lithium, "
            "and other solid minerals"
        ),
        tax_incentives=(
            TaxIncentive(
                name="Mining Tax Holiday",
                type=IncentiveType.HOLIDAY,
                duration="3 years",
                rate="100% exemption",
                description="New mining companies exempt from tax for the first 3 years",
                requirements=(
                    "New company engaged in mining of solid minerals",
                    "Valid mining license",
                ),
            ),
            TaxIncentive(
                name=_EDI_CREDIT,
                type=IncentiveType.CREDIT,
                duration="5 years",
                rate="5% per year on QCE",
                description="Tax credit on capital expenditure for mineral processing facilities",
                qce_threshold=500_000_000.0,
            ),
        ),
        edi_eligible=True,
        edi_details="Priority minerals carry higher QCE thresholds.",
    ),
    BusinessTypeInfo(
        sector=BusinessSector.MANUFACTURING,
        name="Manufacturing & Production",
        description=(
            "Petroleum refining, chemicals, pharmaceuticals, textiles, waste treatment, electric "
            "motors, batteries, agricultural machinery"
        ),
        tax_incentives=(
            TaxIncentive(
                name=_EDI_CREDIT,
                type=IncentiveType.CREDIT,
                duration="5 years",
                rate="5% per year on QCE",
                description=(
                    "Annual tax credit of 5% on qualifying capital expenditure for up to 5 years "
                    "(total 25%)"
                ),
                qce_threshold=200_000_000.0,
            ),
            TaxIncentive(
                name="Accelerated Capital Allowances",
                type=IncentiveType.DEDUCTION,
                rate="95% first year",
                description="Claim up to 95% of plant and machinery cost in the first year",
            ),
        ),
        edi_eligible=True,
    ),
    BusinessTypeInfo(
        sector=BusinessSector.RENEWABLE_ENERGY,
        name="Renewable Energy",
        description="Solar, wind, hydro, biomass energy production and equipment manufacturing",
        tax_incentives=(
            TaxIncentive(
                name="EDI Tax Credit (Enhanced)",
                type=IncentiveType.CREDIT,
                duration="5 years",
                rate="5% per year on QCE",
                description="Newly added to EDI priority sectors under NTA 2025",
                qce_threshold=150_000_000.0,
            ),
            TaxIncentive(
                name="Green Investment Allowance",
                type=IncentiveType.DEDUCTION,
                rate="100% deduction",
                description="Full deduction of investment in qualifying green energy assets",
            ),
        ),
        edi_eligible=True,
    ),
    BusinessTypeInfo(
        sector=BusinessSector.GAS_UTILIZATION,
        name="Gas Utilization",
        description="Downstream gas operations, LNG, gas-to-liquids, gas distribution",
        tax_incentives=(
            TaxIncentive(
                name="Gas Tax Holiday",
                type=IncentiveType.HOLIDAY,
                duration="5 years (extendable)",
                rate="100% exemption",
                description="Tax-free period of up to 5 years, with possible extension",
            ),
            TaxIncentive(
                name="Investment Tax Credit",
                type=IncentiveType.CREDIT,
                rate="15%",
                description="Tax credit on qualifying gas infrastructure investment",
            ),
        ),
        edi_details="Gas utilization has its own incentive regime separate from EDI.",
    ),
    BusinessTypeInfo(
        sector=BusinessSector.EXPORT_ORIENTED,
        name="Export-Oriented Business",
        description=(
            "Companies in Export Processing Zones (EPZ) or Free Trade Zones (FTZ), or exporting "
            "75%+ of goods/services"
        ),
        tax_incentives=(
            TaxIncentive(
                name="EPZ/FTZ Tax Exemption",
                type=IncentiveType.EXEMPTION,
                rate="100% exemption",
                description=(
                    "Complete tax exemption for companies in EPZ/FTZ exporting at least 75% of "
                    "production"
                ),
            ),
            TaxIncentive(
                name="Export Tax Holiday",
                type=IncentiveType.HOLIDAY,
                duration="3 years",
                rate="100% exemption",
                description=(
                    "100% export-oriented companies outside EPZ may enjoy 3-year tax holiday"
                ),
            ),
            TaxIncentive(
                name="Export Expansion Grant",
                type=IncentiveType.CREDIT,
                rate="Up to 30% of export value",
                description="Cash grant based on export performance",
            ),
        ),
    ),
    BusinessTypeInfo(
        sector=BusinessSector.TECHNOLOGY,
        name="Technology & Innovation",
        description="Software development, IT services, fintech, data centers, tech startups",
        tax_incentives=(
            TaxIncentive(
                name="R&D Tax Deduction",
                type=IncentiveType.DEDUCTION,
                rate="120%",
                description="Claim 120% of qualifying R&D expenses",
            ),
            TaxIncentive(
                name="Tech Startup Exemption",
                type=IncentiveType.EXEMPTION,
                rate="0% for small companies",
                description=(
                    "Small tech companies (turnover ≤₦100M) exempt from CIT and 4% "
                    "Development Levy"
                ),
            ),
        ),
        edi_details="Technology companies are not in the core EDI priority sectors.",
    ),
    BusinessTypeInfo(
        sector=BusinessSector.HEALTHCARE,
        name="Healthcare & Pharmaceuticals",
        description="Pharmaceutical manufacturing, medical devices, hospital services",
        tax_incentives=(
            TaxIncentive(
                name="Pharmaceutical EDI Credit",
                type=IncentiveType.CREDIT,
                duration="5 years",
                rate="5% per year on QCE",
                description="Tax credit for pharmaceutical manufacturing facilities",
                qce_threshold=100_000_000.0,
            ),
            TaxIncentive(
                name="Local Drug Manufacturing Incentive",
                type=IncentiveType.DEDUCTION,
                rate="150%",
                description="Enhanced deduction for local drug production costs",
            ),
        ),
        edi_eligible=True,
    ),
    BusinessTypeInfo(
        sector=BusinessSector.PROFESSIONAL_SERVICES,
        name="Professional Services",
        description="Legal, accounting, consulting, engineering, and other professional services",
        edi_details=(
            "Professional services are excluded from small company exemption and most tax "
            "incentive programs."
        ),
    ),
    BusinessTypeInfo(
        sector=BusinessSector.OTHER,
        name="Unclassified Business",
        description="Sector not recognised; no sector incentives apply",
    ),
)

_BUSINESS_TYPES_BY_SECTOR = {bt.sector: bt for bt in BUSINESS_TYPES}


def get_business_type(sector: "BusinessSector | str | None") -> BusinessTypeInfo:
    return _BUSINESS_TYPES_BY_SECTOR[BusinessSector.from_tag(sector)]


def get_edi_eligible_sectors() -> list[BusinessTypeInfo]:
    return [bt for bt in BUSINESS_TYPES if bt.edi_eligible]
