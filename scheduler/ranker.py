from typing import List, Sequence

from .entities import Candidate


def rank_candidates(candidates: Sequence[Candidate], top_n: int = 3) -> List[Candidate]:
    """
    Sort by score (highest first), drop repeated course sets, keep the top N.
    Python's sort is stable, so generation order breaks ties.
    """
    ordered = sorted(candidates, key=lambda c: c.score, reverse=True)

    ranked: List[Candidate] = []
    seen = set()
    for candidate in ordered:
        if candidate.signature in seen:
            continue
        seen.add(candidate.signature)
        ranked.append(candidate)

    return ranked[:top_n]
