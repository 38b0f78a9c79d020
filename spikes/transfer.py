"""JSON export and import of trajectories and tallies.

Exports come in three kinds: ``trajectories``, ``stats`` (the manual
tally) and ``all``, which wraps both with a timestamp. Imports sniff the
document shape to find out which kind they are. A document is decoded in
full before anything is applied, so a bad file never leaves a store half
imported.
"""

import json
import logging
import os
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Optional

from spikes.config import settings
from spikes.tally import GameTally
from spikes.types import GameTrajectories

logger = logging.getLogger(__name__)

EXPORT_KINDS = {
    "trajectories": "trajectories",
    "stats": "stats",
    "all": "complete",
}


class ImportDataError(ValueError):
    """The imported document is not valid JSON or has an unknown shape."""


@dataclass
class ImportResult:
    kind: str  # "trajectories", "stats" or "all"
    trajectories: Optional[GameTrajectories] = None
    tally: Optional[GameTally] = None


# ----------------------------------------------------------------------
# Export
# ----------------------------------------------------------------------

def export_document(
    kind: str,
    trajectories: GameTrajectories,
    tally: GameTally,
    now: Optional[datetime] = None,
) -> dict:
    """JSON-compatible document for the requested export kind."""
    if kind == "trajectories":
        return trajectories.to_dict()
    if kind == "stats":
        return tally.to_dict()
    if kind == "all":
        now = now or datetime.now(timezone.utc)
        return {
            "trajectories": trajectories.to_dict(),
            "stats": tally.to_dict(),
            "timestamp": now.isoformat(),
        }
    raise ValueError(f"Unknown export kind {kind!r}, expected one of {list(EXPORT_KINDS)}")


def export_filename(kind: str, today: Optional[date] = None) -> str:
    """e.g. voley-stats-complete-2024-05-01.json"""
    if kind not in EXPORT_KINDS:
        raise ValueError(f"Unknown export kind {kind!r}, expected one of {list(EXPORT_KINDS)}")
    today = today or date.today()
    return f"{settings.EXPORT_PREFIX}-{EXPORT_KINDS[kind]}-{today.isoformat()}.json"


def write_export(
    output_dir,
    kind: str,
    trajectories: GameTrajectories,
    tally: GameTally,
    now: Optional[datetime] = None,
) -> str:
    """Write an export file into ``output_dir`` and return its path."""
    now = now or datetime.now(timezone.utc)
    document = export_document(kind, trajectories, tally, now)

    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(str(output_dir), export_filename(kind, now.date()))
    with open(path, "w", encoding="utf-8") as f:
        json.dump(document, f, indent=2)

    logger.info("Exported %s to %s", kind, path)
    return path


# ----------------------------------------------------------------------
# Import
# ----------------------------------------------------------------------

def _is_tally_team(value) -> bool:
    return isinstance(value, dict) and "zones" in value


def _decode_trajectories(data) -> GameTrajectories:
    try:
        return GameTrajectories.from_dict(data)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise ImportDataError(f"Invalid trajectories: {e}") from e


def _decode_tally(data) -> GameTally:
    try:
        return GameTally.from_dict(data)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise ImportDataError(f"Invalid stats: {e}") from e


def parse_import(text: str) -> ImportResult:
    """Decode an exported document of any kind.

    Raises ImportDataError when the text is not JSON, the shape is not one
    of the export kinds, or any part of it fails to decode.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ImportDataError(f"Invalid file: {e.msg}") from e

    if not isinstance(data, dict):
        raise ImportDataError("Invalid file: expected a JSON object")

    if "trajectories" in data and "stats" in data:
        return ImportResult(
            kind="all",
            trajectories=_decode_trajectories(data["trajectories"]),
            tally=_decode_tally(data["stats"]),
        )

    if "own" in data and "opponent" in data:
        if _is_tally_team(data["own"]) and _is_tally_team(data["opponent"]):
            return ImportResult(kind="stats", tally=_decode_tally(data))
        return ImportResult(kind="trajectories", trajectories=_decode_trajectories(data))

    raise ImportDataError("Unrecognized file: no trajectories or stats found")


def read_import(path) -> ImportResult:
    try:
        with open(path, encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ImportDataError(f"Cannot read {path}: {e}") from e
    return parse_import(text)


def apply_import(result: ImportResult, store, tally_store) -> None:
    """Route decoded parts to their stores."""
    if result.trajectories is not None:
        store.replace(result.trajectories)
    if result.tally is not None:
        tally_store.replace(result.tally)
    logger.info("Imported %s", result.kind)
