"""Chemistry lookup table: CSV/JSON import, persistence, and player search."""

from __future__ import annotations

import io
import json
import logging
from typing import Optional

import pandas as pd
from thefuzz import fuzz, process

from ..config import builder_config
from ..errors import ChemistryDataError

logger = logging.getLogger(__name__)

# Column name mappings for the chemistry lookup sheet export
CHEMISTRY_COLUMN_MAP = {
    "Player 1": "p1",
    "\ufeffPlayer 1": "p1",  # BOM-prefixed
    "Player1": "p1",
    "player1": "p1",
    "p1": "p1",
    "Player 2": "p2",
    "Player2": "p2",
    "player2": "p2",
    "p2": "p2",
    "Chemistry": "v",
    "Chemistry Value": "v",
    "chemistry": "v",
    "Value": "v",
    "value": "v",
    "v": "v",
}


class ChemistryMatrix:
    """Pairwise chemistry values plus the canonical player list.

    Values are stored in both directions on import; ``lookup`` only falls back
    to the reverse direction when the requested one is missing, so an
    asymmetric table is used as given.
    """

    def __init__(self, players: Optional[list[str]] = None, values: Optional[dict] = None):
        self.players: list[str] = list(players or [])
        self.values: dict[str, dict[str, int]] = values or {}

    def __len__(self) -> int:
        return len(self.players)

    def lookup(self, a: str, b: str) -> Optional[int]:
        if not isinstance(a, str) or not isinstance(b, str):
            return None
        row = self.values.get(a)
        if row is not None and b in row:
            return row[b]
        row = self.values.get(b)
        if row is not None and a in row:
            return row[a]
        return None

    def partners(self, player: str) -> dict[str, int]:
        return dict(self.values.get(player, {}))

    @classmethod
    def from_pairs(cls, pairs: list[tuple[str, str, int]], players: Optional[list[str]] = None) -> "ChemistryMatrix":
        values: dict[str, dict[str, int]] = {}
        names: set[str] = set()
        for p1, p2, v in pairs:
            values.setdefault(p1, {})[p2] = v
            values.setdefault(p2, {})[p1] = v
            names.update((p1, p2))
        return cls(players=players if players is not None else sorted(names), values=values)


# In-memory chemistry singleton
_matrix = ChemistryMatrix()

_DATA_DIR = builder_config.chemistry_dir


def get_matrix() -> ChemistryMatrix:
    return _matrix


def set_matrix(matrix: ChemistryMatrix) -> ChemistryMatrix:
    global _matrix
    _matrix = matrix
    return _matrix


def clear_matrix(delete_files: bool = False) -> None:
    set_matrix(ChemistryMatrix())
    if delete_files and _DATA_DIR.exists():
        for f in _DATA_DIR.iterdir():
            if f.suffix in (".csv", ".json"):
                f.unlink()


def get_player_names() -> list[str]:
    return list(_matrix.players)


def _normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    rename = {orig: target for orig, target in CHEMISTRY_COLUMN_MAP.items() if orig in df.columns}
    return df.rename(columns=rename)


def load_chemistry_csv(csv_content: bytes) -> ChemistryMatrix:
    """Parse a ``Player 1, Player 2, Chemistry`` sheet export.

    Names are trimmed, rows missing either name are skipped, and values are
    rounded to whole numbers.
    """
    try:
        df = pd.read_csv(io.BytesIO(csv_content))
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise ChemistryDataError(f"Could not read chemistry CSV: {e}") from e

    if len(df.columns) < 3:
        raise ChemistryDataError("Chemistry CSV must have Player 1, Player 2 and Chemistry columns")

    df = _normalize_columns(df)
    if not {"p1", "p2", "v"} <= set(df.columns):
        # Headerless three-column export: the first row is data
        df = pd.read_csv(io.BytesIO(csv_content), header=None)
        df = df.rename(columns=dict(zip(df.columns[:3], ["p1", "p2", "v"])))

    pairs = []
    for _, row in df.iterrows():
        p1 = str(row["p1"]).strip() if pd.notna(row["p1"]) else ""
        p2 = str(row["p2"]).strip() if pd.notna(row["p2"]) else ""
        if not p1 or not p2:
            continue
        try:
            value = int(round(float(row["v"]))) if pd.notna(row["v"]) else 0
        except (ValueError, TypeError):
            logger.warning(f"Skipping chemistry row with bad value: {p1}, {p2}, {row['v']!r}")
            continue
        pairs.append((p1, p2, value))

    return ChemistryMatrix.from_pairs(pairs)


def load_chemistry_json(json_content: bytes) -> ChemistryMatrix:
    """Parse the cached chemistry JSON ``{players, pairs: [{p1, p2, v}]}``."""
    try:
        data = json.loads(json_content)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ChemistryDataError(f"Could not read chemistry JSON: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("pairs"), list):
        raise ChemistryDataError("Chemistry JSON must contain a 'pairs' list")

    pairs = []
    for pair in data["pairs"]:
        try:
            pairs.append((str(pair["p1"]).strip(), str(pair["p2"]).strip(), int(round(float(pair["v"])))))
        except (KeyError, TypeError, ValueError):
            logger.warning(f"Skipping malformed chemistry pair: {pair!r}")

    players = data.get("players")
    if isinstance(players, list):
        return ChemistryMatrix.from_pairs(pairs, players=[str(p) for p in players])
    return ChemistryMatrix.from_pairs(pairs)


def load_chemistry_file(content: bytes, filename: str = "chemistry.csv", _persist: bool = True) -> ChemistryMatrix:
    """Load a CSV or JSON chemistry file and make it the active lookup."""
    if filename.lower().endswith(".json"):
        matrix = load_chemistry_json(content)
        suffix = ".json"
    else:
        matrix = load_chemistry_csv(content)
        suffix = ".csv"

    if _persist:
        _save_to_disk(content, suffix)

    logger.info(f"Loaded chemistry for {len(matrix)} players from {filename}")
    return set_matrix(matrix)


def _save_to_disk(content: bytes, suffix: str) -> None:
    """Keep one chemistry file on disk for reload on restart."""
    _DATA_DIR.mkdir(parents=True, exist_ok=True)
    for f in _DATA_DIR.glob("chemistry.*"):
        f.unlink()
    (_DATA_DIR / f"chemistry{suffix}").write_bytes(content)


def load_persisted_chemistry() -> int:
    """Load the saved chemistry file from disk. Called on startup."""
    if not _DATA_DIR.exists():
        return 0
    for f in sorted(_DATA_DIR.glob("chemistry.*")):
        try:
            matrix = load_chemistry_file(f.read_bytes(), filename=f.name, _persist=False)
            return len(matrix)
        except ChemistryDataError as e:
            logger.warning(f"Failed to load {f.name}: {e}")
    return 0


def search_players(query: str, limit: Optional[int] = None) -> list[dict]:
    """Fuzzy search the player list for the picker.

    Returns ``[{name, score}]`` best match first.
    """
    names = _matrix.players
    if not query.strip() or not names:
        return []
    results = process.extract(
        query,
        names,
        scorer=fuzz.partial_ratio,
        limit=limit or builder_config.search_limit,
    )
    return [
        {"name": name, "score": score}
        for name, score in results
        if score >= builder_config.fuzzy_threshold
    ]
