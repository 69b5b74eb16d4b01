"""
Which cadence buckets are due on a given day.

``daily`` mappings run Monday to Friday, ``weekly`` on Fridays and
``monthly`` on the last calendar day of the month.  Day of week is
recorded 0 = Sunday through 6 = Saturday.
"""
from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date

from django.utils import timezone

from .models import Cadence

FRIDAY = 4  # date.weekday()


@dataclass(frozen=True)
class CadenceResult:
    should_sync: bool
    cadences: list[str] = field(default_factory=list)
    day_of_week: int = 0
    day_of_month: int = 1
    last_day_of_month: int = 31

    def as_dict(self) -> dict:
        return {
            "day_of_week": self.day_of_week,
            "day_of_month": self.day_of_month,
            "last_day_of_month": self.last_day_of_month,
        }


def cadences_for(day: date) -> CadenceResult:
    weekday = day.weekday()
    last_day = calendar.monthrange(day.year, day.month)[1]

    cadences = []
    if weekday < 5:
        cadences.append(Cadence.DAILY.value)
    if weekday == FRIDAY:
        cadences.append(Cadence.WEEKLY.value)
    if day.day == last_day:
        cadences.append(Cadence.MONTHLY.value)

    return CadenceResult(
        should_sync=bool(cadences),
        cadences=cadences,
        day_of_week=(weekday + 1) % 7,
        day_of_month=day.day,
        last_day_of_month=last_day,
    )


def cadences_for_today() -> CadenceResult:
    return cadences_for(timezone.localdate())
