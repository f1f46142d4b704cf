"""
Lodgement Deadlines
Filing deadlines for the tax year and a countdown to them.

  - Personal Income Tax: March 31 following the tax year
  - Company Income Tax: June 30 (6 months after a December year end)
"""

from dataclasses import dataclass
from datetime import datetime

from ntacore.core.tax_rules.rules import TaxYearRules, get_rules


@dataclass
class Countdown:
    days: int
    hours: int
    minutes: int
    seconds: int
    is_past: bool


def get_countdown(target: datetime, now: datetime | None = None) -> Countdown:
    if now is None:
        now = datetime.now()

    delta = (target - now).total_seconds()
    if delta <= 0:
        return Countdown(days=0, hours=0, minutes=0, seconds=0, is_past=True)

    remaining = int(delta)
    days, remaining = divmod(remaining, 86_400)
    hours, remaining = divmod(remaining, 3_600)
    minutes, seconds = divmod(remaining, 60)
    return Countdown(days=days, hours=hours, minutes=minutes, seconds=seconds, is_past=False)


def pit_deadline_countdown(
    now: datetime | None = None,
    rules: TaxYearRules | None = None,
) -> Countdown:
    rules = rules or get_rules()
    return get_countdown(rules.pit_lodgement_deadline, now)


def cit_deadline_countdown(
    now: datetime | None = None,
    rules: TaxYearRules | None = None,
) -> Countdown:
    rules = rules or get_rules()
    return get_countdown(rules.cit_lodgement_deadline, now)
