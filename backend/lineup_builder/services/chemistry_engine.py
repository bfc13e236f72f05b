"""Chemistry scoring for the current field assignment.

Only field positions are scored; the batting order never contributes. All
functions here are pure: the same field and lookup always give the same
result.
"""

from __future__ import annotations

from typing import Callable, Iterable, Optional

from ..config import builder_config
from ..models.chemistry import ChemistryConnection, PairConnection, PlayerChemistry, TeamAnalysis
from .chemistry_loader import ChemistryMatrix

Lookup = Callable[[str, str], Optional[int]]

POSITIVE = "positive"
NEGATIVE = "negative"
NEUTRAL = "neutral"


def classify_chemistry(value: int) -> str:
    """Classify a pairwise value (boundaries inclusive).

    - value >= positive_min -> "positive"
    - value <= negative_max -> "negative"
    - otherwise -> "neutral"
    """
    thresholds = builder_config.thresholds
    if value >= thresholds.positive_min:
        return POSITIVE
    elif value <= thresholds.negative_max:
        return NEGATIVE
    return NEUTRAL


def connection_strength(value: int) -> float:
    thresholds = builder_config.thresholds
    return min(abs(value) / thresholds.strength_scale, thresholds.strength_cap)


def _occupied_pairs(field: list) -> Iterable[tuple[int, int, str, str]]:
    for i in range(len(field)):
        if field[i] is None:
            continue
        for j in range(i + 1, len(field)):
            if field[j] is None:
                continue
            yield i, j, field[i], field[j]


def total_chemistry(field: list, lookup: Lookup) -> int:
    """Sum of lookup values over every unordered pair of occupied slots.

    Missing lookup entries count as 0.
    """
    return sum(lookup(a, b) or 0 for _, _, a, b in _occupied_pairs(field))


def chemistry_connections(field: list, lookup: Lookup) -> list[ChemistryConnection]:
    """Positive and negative connections between occupied field slots.

    Neutral pairs, including missing lookups, are dropped. Connections come
    out ordered by (pos1, pos2).
    """
    connections = []
    for i, j, a, b in _occupied_pairs(field):
        value = lookup(a, b) or 0
        kind = classify_chemistry(value)
        if kind == NEUTRAL:
            continue
        connections.append(ChemistryConnection(
            pos1=i,
            pos2=j,
            value=value,
            type=kind,
            strength=round(connection_strength(value), 4),
        ))
    return connections


def player_chemistry(player: str, matrix: ChemistryMatrix) -> PlayerChemistry:
    """A player's positive and negative partners, sorted by name."""
    positive = []
    negative = []
    for other, value in matrix.partners(player).items():
        kind = classify_chemistry(value)
        if kind == POSITIVE:
            positive.append(other)
        elif kind == NEGATIVE:
            negative.append(other)
    return PlayerChemistry(name=player, positive=sorted(positive), negative=sorted(negative))


def team_analysis(players: list[str], matrix: ChemistryMatrix) -> TeamAnalysis:
    """Chemistry within a selection of players and with everyone else.

    ``shared_positive``: characters positive with 2+ selected players and
    negative with none. ``shared_negative`` is the mirror. ``mixed``:
    characters positive with some selected players and negative with others.
    """
    appearances: dict[str, dict[str, list]] = {}
    for name in players:
        for other, value in matrix.partners(name).items():
            entry = appearances.setdefault(other, {POSITIVE: [], NEGATIVE: []})
            kind = classify_chemistry(value)
            if kind != NEUTRAL:
                entry[kind].append(name)

    analysis = TeamAnalysis()
    for character, entry in appearances.items():
        pos_count = len(entry[POSITIVE])
        neg_count = len(entry[NEGATIVE])
        if pos_count >= 2 and neg_count == 0:
            analysis.shared_positive[character] = entry[POSITIVE]
        elif neg_count >= 2 and pos_count == 0:
            analysis.shared_negative[character] = entry[NEGATIVE]
        elif pos_count >= 1 and neg_count >= 1:
            analysis.mixed[character] = entry

    for i in range(len(players)):
        for j in range(i + 1, len(players)):
            p1, p2 = players[i], players[j]
            kind = classify_chemistry(matrix.lookup(p1, p2) or 0)
            if kind == POSITIVE:
                analysis.internal_positive += 1
            elif kind == NEGATIVE:
                analysis.internal_negative += 1
            else:
                continue
            analysis.connections.append(PairConnection(player1=p1, player2=p2, type=kind))

    return analysis
