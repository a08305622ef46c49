from dataclasses import dataclass, fields
from typing import Mapping


@dataclass(frozen=True)
class EngineSettings:
    """Tunables for one engine instance. Times are minutes since midnight."""
    max_candidates: int = 50          # Hard stop for the backtracking search
    credit_slack: int = 3             # Accepted window is [target, target + slack]
    top_n: int = 3
    consecutive_gap_minutes: int = 30 # Gap up to this still counts as back-to-back
    max_search_nodes: int = 200000    # Node budget; 0 disables it
    morning_cutoff: int = 12 * 60     # A slot starting before this is a morning class
    lunch_start: int = 12 * 60
    lunch_end: int = 13 * 60

    # Maps Flask config keys to field names
    CONFIG_KEYS = {
        'MAX_CANDIDATES': 'max_candidates',
        'CREDIT_SLACK': 'credit_slack',
        'TOP_N': 'top_n',
        'CONSECUTIVE_GAP_MINUTES': 'consecutive_gap_minutes',
        'MAX_SEARCH_NODES': 'max_search_nodes',
        'MORNING_CUTOFF_MINUTES': 'morning_cutoff',
        'LUNCH_START_MINUTES': 'lunch_start',
        'LUNCH_END_MINUTES': 'lunch_end',
    }

    @classmethod
    def from_config(cls, config: Mapping) -> 'EngineSettings':
        """Build settings from a Flask config (or any mapping), ignoring missing keys."""
        kwargs = {}
        for key, name in cls.CONFIG_KEYS.items():
            if config.get(key) is not None:
                kwargs[name] = int(config[key])
        return cls(**kwargs)

    def to_dict(self):
        return {f.name: getattr(self, f.name) for f in fields(self)}
