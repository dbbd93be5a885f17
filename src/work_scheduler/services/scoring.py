from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from work_scheduler.services.domain import (
    ApprovedDayOff,
    SchedulingEmployee,
    SchedulingEntry,
    SchedulingShift,
)
from work_scheduler.services.evaluator import SchedulingContext, evaluate
from work_scheduler.services.rules import SchedulingRule, order_rules
from work_scheduler.services.variants import DayVariant


@dataclass
class VariantScore:
    variant: DayVariant
    position: int
    score: int
    satisfied: int
    rule_results: list[bool] = field(default_factory=list)

    @property
    def sort_key(self) -> tuple[int, int, int, int]:
        return (self.score, self.satisfied, int(self.variant.is_rule_aware), -self.position)


def leading_run(results: Sequence[bool]) -> int:
    """Number of ``True`` values before the first ``False``."""

    count = 0
    for passed in results:
        if not passed:
            break
        count += 1
    return count


def score_variant(
    variant: DayVariant,
    position: int,
    day: int,
    month: int,
    year: int,
    schedule: Sequence[SchedulingEntry],
    employees: Sequence[SchedulingEmployee],
    shifts: Sequence[SchedulingShift],
    rules: Sequence[SchedulingRule],
    approved_day_offs: Sequence[ApprovedDayOff] = (),
) -> VariantScore:
    context = SchedulingContext(
        schedule=[*schedule, *variant.entries],
        employees=employees,
        shifts=shifts,
        month=month,
        year=year,
        approved_day_offs=approved_day_offs,
        through_day=day,
    )
    results = [not evaluate(rule, context) for rule in order_rules(rules)]
    return VariantScore(
        variant=variant,
        position=position,
        score=leading_run(results),
        satisfied=sum(results),
        rule_results=results,
    )


def select_best_variant(
    variants: Sequence[DayVariant],
    day: int,
    month: int,
    year: int,
    schedule: Sequence[SchedulingEntry],
    employees: Sequence[SchedulingEmployee],
    shifts: Sequence[SchedulingShift],
    rules: Sequence[SchedulingRule],
    approved_day_offs: Sequence[ApprovedDayOff] = (),
) -> VariantScore | None:
    """Pick the winning candidate for ``day``.

    Higher leading-run score wins, then more satisfied rules overall, then the
    rule-aware candidate, then the earliest generated candidate.
    """

    scored = [
        score_variant(
            variant, position, day, month, year, schedule, employees, shifts, rules, approved_day_offs
        )
        for position, variant in enumerate(variants)
    ]
    if not scored:
        return None
    return max(scored, key=lambda item: item.sort_key)
