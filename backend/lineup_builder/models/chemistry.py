"""Chemistry connection and analysis models."""

from __future__ import annotations

from pydantic import BaseModel


class ChemistryConnection(BaseModel):
    pos1: int  # field slot index, pos1 < pos2
    pos2: int
    value: int
    type: str  # positive / negative
    strength: float = 0.0


class PlayerChemistry(BaseModel):
    name: str
    positive: list = []
    negative: list = []

    @property
    def pos_count(self) -> int:
        return len(self.positive)

    @property
    def neg_count(self) -> int:
        return len(self.negative)


class PairConnection(BaseModel):
    player1: str
    player2: str
    type: str


class TeamAnalysis(BaseModel):
    internal_positive: int = 0
    internal_negative: int = 0
    connections: list = []  # list[PairConnection]
    shared_positive: dict = {}  # character -> selected players
    shared_negative: dict = {}
    mixed: dict = {}  # character -> {"positive": [...], "negative": [...]}

    @property
    def total_connections(self) -> int:
        return len(self.connections)
