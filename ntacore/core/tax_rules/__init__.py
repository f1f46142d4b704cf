from ntacore.core.tax_rules.rules import TaxYearRules, NTA_2025, get_rules, register_rules
from ntacore.core.tax_rules.sectors import BusinessSector
from ntacore.core.tax_rules.pit import PITCalculator
from ntacore.core.tax_rules.cit import CITCalculator, CompanySize
from ntacore.core.tax_rules.exemptions import ExemptionCalculator

__all__ = [
    "TaxYearRules",
    "NTA_2025",
    "get_rules",
    "register_rules",
    "BusinessSector",
    "PITCalculator",
    "CITCalculator",
    "CompanySize",
    "ExemptionCalculator",
]
