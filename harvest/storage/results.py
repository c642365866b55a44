"""Tournament result persistence."""

import json
import logging
import uuid
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

import polars as pl

from ..core.config import RESULTS_PATH
from ..core.types import ScoringMatrix, TournamentSummary
from .validation import scoring_to_dict

logger = logging.getLogger(__name__)

ROUND_SCHEMA = {
    "run_id": pl.Utf8,
    "match_index": pl.Int64,
    "round_number": pl.Int64,
    "p1_id": pl.Utf8,
    "p2_id": pl.Utf8,
    "p1_move": pl.Utf8,
    "p2_move": pl.Utf8,
    "p1_score": pl.Int64,
    "p2_score": pl.Int64,
    "outcome": pl.Utf8,
}


def summary_to_rows(summary: TournamentSummary, run_id: str = "") -> List[Dict[str, Any]]:
    """Flatten a summary into one row per played round."""
    rows = []
    for match_index, match in enumerate(summary.matches):
        for round_number, round_ in enumerate(match.rounds, start=1):
            rows.append({
                "run_id": run_id,
                "match_index": match_index,
                "round_number": round_number,
                "p1_id": match.p1_id,
                "p2_id": match.p2_id,
                "p1_move": round_.p1_move.value,
                "p2_move": round_.p2_move.value,
                "p1_score": round_.p1_score,
                "p2_score": round_.p2_score,
                "outcome": round_.key,
            })
    return rows


class ResultStore:
    """Stores finished seasons as date-partitioned Parquet files."""

    def __init__(self, storage_path: str = RESULTS_PATH):
        """Initialize the result store.

        Args:
            storage_path: Root directory for stored seasons.
        """
        self.storage_path = Path(storage_path)
        self.storage_path.mkdir(parents=True, exist_ok=True)

    def _get_run_dir(self, date_: Optional[date] = None) -> Path:
        """Get date-partitioned run directory."""
        date_ = date_ or date.today()
        path = self.storage_path / date_.isoformat()
        path.mkdir(exist_ok=True)
        return path

    def save_summary(
        self,
        summary: TournamentSummary,
        num_rounds: int,
        scoring: ScoringMatrix,
        run_id: Optional[str] = None,
    ) -> str:
        """Save a season's rounds and metadata.

        Args:
            summary: The finished tournament.
            num_rounds: Rounds per match used for the run.
            scoring: Payoff matrix used for the run.
            run_id: Optional identifier, generated when omitted.

        Returns:
            The run identifier.
        """
        run_id = run_id or str(uuid.uuid4())[:8]
        run_dir = self._get_run_dir()

        df = pl.DataFrame(summary_to_rows(summary, run_id), schema=ROUND_SCHEMA)
        df.write_parquet(run_dir / f"season_{run_id}.parquet", compression="zstd")

        metadata = {
            "run_id": run_id,
            "created_at": datetime.now(timezone.utc).isoformat(),
            "num_participants": len(summary.participant_scores),
            "num_matches": len(summary.matches),
            "num_rounds": num_rounds,
            "scoring": scoring_to_dict(scoring),
            "participant_scores": dict(summary.participant_scores),
            "rankings": [
                {
                    "participant_id": r.participant_id,
                    "total_score": r.total_score,
                    "avg_score_per_round": r.avg_score_per_round,
                }
                for r in summary.rankings
            ],
        }
        with open(run_dir / f"season_{run_id}.json", "w") as f:
            json.dump(metadata, f, indent=2)

        logger.debug("Saved season %s (%d rounds of play) to %s", run_id, df.height, run_dir)
        return run_id

    def load_run(self, run_id: str) -> pl.DataFrame:
        """Load a specific season's rounds.

        Raises:
            FileNotFoundError: If the run is not found.
        """
        for date_dir in sorted(self.storage_path.iterdir(), reverse=True):
            if not date_dir.is_dir():
                continue
            filepath = date_dir / f"season_{run_id}.parquet"
            if filepath.exists():
                return pl.read_parquet(filepath)

        raise FileNotFoundError(f"Season {run_id} not found")

    def load_all_runs(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> pl.DataFrame:
        """Load every stored season, optionally filtered by date."""
        parquet_files = []

        for date_dir in self.storage_path.iterdir():
            if not date_dir.is_dir():
                continue

            try:
                dir_date = date.fromisoformat(date_dir.name)
            except ValueError:
                continue

            if start_date and dir_date < start_date:
                continue
            if end_date and dir_date > end_date:
                continue

            parquet_files.extend(date_dir.glob("season_*.parquet"))

        if not parquet_files:
            return pl.DataFrame(schema=ROUND_SCHEMA)

        return pl.concat([pl.read_parquet(f) for f in sorted(parquet_files)])

    def list_runs(self) -> List[Dict[str, Any]]:
        """List metadata of all stored seasons, newest date first."""
        runs = []

        for date_dir in sorted(self.storage_path.iterdir(), reverse=True):
            if not date_dir.is_dir():
                continue

            for json_file in sorted(date_dir.glob("season_*.json")):
                with open(json_file) as f:
                    runs.append(json.load(f))

        return runs
