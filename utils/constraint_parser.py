"""
Constraint interpreter.
Builds the engine's ConstraintSet from the structured constraint payloads the
front end sends. Free text is never interpreted here.
"""

import logging
import re
from typing import Any, Dict, Iterable

from scheduler.constraints import ConstraintSet, Rule
from utils.time_parser import parse_day

logger = logging.getLogger(__name__)

# camelCase request keys -> ConstraintSet fields
FIELD_NAMES = {
    'avoidDays': 'avoid_days',
    'avoidMorning': 'avoid_morning',
    'keepLunchTime': 'keep_lunch_time',
    'maxClassesPerDay': 'max_classes_per_day',
    'maxConsecutiveClasses': 'max_consecutive_classes',
    'avoidTeamProjects': 'avoid_team_projects',
    'preferOnlineClasses': 'prefer_online_classes',
    'preferOnlineOnlyDays': 'prefer_online_only_days',
}
DAY_FIELDS = {'avoid_days', 'prefer_online_only_days'}
INT_FIELDS = {'max_classes_per_day', 'max_consecutive_classes'}

FLAG_TOKENS = {
    'avoid_morning': 'avoid_morning',
    'keep_lunch_time': 'keep_lunch_time',
    'avoid_team_projects': 'avoid_team_projects',
    'prefer_online': 'prefer_online_classes',
    'prefer_online_classes': 'prefer_online_classes',
}
MAX_PER_DAY_RE = re.compile(r'^max_(\d+)_per_day$')
MAX_CONSECUTIVE_RE = re.compile(r'^max_(\d+)_consecutive$')
ONLINE_ONLY_RE = re.compile(r'^online_only_(\w+)$', re.IGNORECASE)


class ConstraintParseError(ValueError):
    """Raised when a constraint payload has the wrong shape."""


def _parse_days(value, field_name: str) -> frozenset:
    if isinstance(value, (str, int)) and not isinstance(value, bool):
        value = [value]
    if not isinstance(value, (list, tuple, set, frozenset)):
        raise ConstraintParseError(f'{field_name} must be a list of days')
    days = set()
    for item in value:
        day = parse_day(item)
        if day is None:
            raise ConstraintParseError(f'Unknown day in {field_name}: {item!r}')
        days.add(day)
    return frozenset(days)


def _parse_value(name: str, value: Any) -> Any:
    if name in DAY_FIELDS:
        return _parse_days(value, name)
    if name in INT_FIELDS:
        if isinstance(value, bool):
            raise ConstraintParseError(f'{name} must be a positive integer')
        try:
            number = int(value)
        except (TypeError, ValueError):
            raise ConstraintParseError(f'{name} must be a positive integer')
        if number <= 0:
            raise ConstraintParseError(f'{name} must be a positive integer')
        return number
    if not isinstance(value, bool):
        raise ConstraintParseError(f'{name} must be true or false')
    return value


def _parse_token(token: str) -> Dict[str, Any]:
    """One grouped-form token -> {field: value}. Unknown tokens give an empty dict."""
    token = token.strip()

    day = parse_day(token)
    if day is not None:
        return {'avoid_days': frozenset([day])}

    # 'MON_WED_FRI'
    parts = token.split('_')
    if len(parts) > 1 and all(parse_day(p) for p in parts):
        return {'avoid_days': frozenset(parse_day(p) for p in parts)}

    lowered = token.lower()
    if lowered in FLAG_TOKENS:
        return {FLAG_TOKENS[lowered]: True}

    match = MAX_PER_DAY_RE.match(lowered)
    if match:
        return {'max_classes_per_day': int(match.group(1))}

    match = MAX_CONSECUTIVE_RE.match(lowered)
    if match:
        return {'max_consecutive_classes': int(match.group(1))}

    match = ONLINE_ONLY_RE.match(token)
    if match:
        day = parse_day(match.group(1))
        if day is not None:
            return {'prefer_online_only_days': frozenset([day])}

    logger.debug('Ignoring unknown constraint token: %r', token)
    return {}


def _collect_tokens(items: Iterable) -> Dict[str, Any]:
    """Merge one group's tokens; day sets union, the last scalar wins."""
    values: Dict[str, Any] = {}
    if not isinstance(items, (list, tuple)):
        raise ConstraintParseError('Constraint groups must be lists')
    for item in items:
        if isinstance(item, dict):
            item = item.get('text')
        if not isinstance(item, str) or not item.strip():
            continue
        for name, value in _parse_token(item).items():
            if name in DAY_FIELDS and name in values:
                values[name] = values[name] | value
            else:
                values[name] = value
    return values


def _parse_grouped(payload: Dict[str, Any]) -> Dict[str, Rule]:
    rules: Dict[str, Rule] = {}
    for name, value in _collect_tokens(payload.get('soft') or []).items():
        rules[name] = Rule(value, hard=False)
    # Hard entries replace soft ones for the same field
    for name, value in _collect_tokens(payload.get('hard') or []).items():
        rules[name] = Rule(value, hard=True)
    return rules


def _parse_flat(payload: Dict[str, Any]) -> Dict[str, Rule]:
    rules: Dict[str, Rule] = {}
    for key, raw in payload.items():
        name = FIELD_NAMES.get(key, key)
        if name not in FIELD_NAMES.values():
            continue

        hard = False
        if isinstance(raw, dict):
            hard = bool(raw.get('hard', False))
            raw = raw.get('value')

        # Absent, null and false mean "no preference"
        if raw is None or raw is False:
            continue
        if name in DAY_FIELDS and not raw:
            continue

        rules[name] = Rule(_parse_value(name, raw), hard=hard)
    return rules


def parse_constraints(payload) -> ConstraintSet:
    """
    Build a ConstraintSet from a request payload.

    Accepts either the flat form ({'avoidDays': ['MON'], 'avoidMorning':
    {'value': True, 'hard': True}, ...}, plain values are soft) or the
    grouped form ({'hard': [...], 'soft': [...]} of tokens such as 'MON',
    'avoid_morning', 'max_3_per_day').
    """
    if payload is None:
        return ConstraintSet()
    if not isinstance(payload, dict):
        raise ConstraintParseError('constraints must be an object')

    if 'hard' in payload or 'soft' in payload:
        rules = _parse_grouped(payload)
    else:
        rules = _parse_flat(payload)

    return ConstraintSet(**rules)
