"""Hard/soft preference bundle handed to the engine by the constraint interpreter."""

from dataclasses import dataclass, fields
from typing import Any, List, Optional


@dataclass(frozen=True)
class Rule:
    """One preference value plus whether it is hard (filters) or soft (scores)."""
    value: Any
    hard: bool = False


@dataclass(frozen=True)
class ConstraintSet:
    """
    User preferences, each independently optional.

    Value types:
        avoid_days / prefer_online_only_days: frozenset of Day
        avoid_morning / keep_lunch_time / avoid_team_projects / prefer_online_classes: bool
        max_classes_per_day / max_consecutive_classes: int
    """
    avoid_days: Optional[Rule] = None
    avoid_morning: Optional[Rule] = None
    keep_lunch_time: Optional[Rule] = None
    max_classes_per_day: Optional[Rule] = None
    max_consecutive_classes: Optional[Rule] = None
    avoid_team_projects: Optional[Rule] = None
    prefer_online_classes: Optional[Rule] = None
    prefer_online_only_days: Optional[Rule] = None

    def active(self, name: str) -> Any:
        """Value of the rule if it is set and truthy, regardless of hardness."""
        rule = getattr(self, name)
        if rule is None or not rule.value:
            return None
        return rule.value

    def hard(self, name: str) -> Any:
        rule = getattr(self, name)
        if rule is None or not rule.hard:
            return None
        return self.active(name)

    def soft(self, name: str) -> Any:
        rule = getattr(self, name)
        if rule is None or rule.hard:
            return None
        return self.active(name)

    def hard_rule_names(self) -> List[str]:
        return [f.name for f in fields(self) if self.hard(f.name) is not None]

    def to_dict(self):
        result = {}
        for f in fields(self):
            rule = getattr(self, f.name)
            if rule is None:
                continue
            value = rule.value
            if isinstance(value, (set, frozenset)):
                value = sorted(getattr(v, 'value', v) for v in value)
            result[f.name] = {'value': value, 'hard': rule.hard}
        return result
