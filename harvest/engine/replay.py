"""Burr-based paced replay of a finished tournament.

The replay walks an already-computed TournamentSummary match by match and
round by round, waiting on a clock between steps so a presentation layer
can animate the season. It never recomputes or mutates results.
"""

import logging
import os
import time
import uuid
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, Optional

from burr.core import Application, ApplicationBuilder, State, action, default, when

from ..core import config
from ..core.types import GameRound, MatchResult, TournamentSummary

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReplayPacing:
    """Delays (seconds) waited before each replay step."""
    enter_delay: float = config.ENTER_DELAY
    hold_delay: float = config.HOLD_DELAY
    gap_delay: float = config.GAP_DELAY
    match_gap_delay: float = config.MATCH_GAP_DELAY
    finish_delay: float = config.FINISH_DELAY
    speed: float = 1.0

    def delay_for(self, action_name: str) -> float:
        """Delay before the named action runs, scaled by speed."""
        delays = {
            "enter_match": self.enter_delay,
            "hold_round": self.hold_delay,
            "reveal_round": self.gap_delay,
            "next_match": self.match_gap_delay,
            "finish": self.finish_delay,
        }
        if self.speed <= 0:
            raise ValueError(f"Replay speed must be positive, got {self.speed}")
        return delays.get(action_name, 0.0) / self.speed


class SystemClock:
    """Wall clock used when no clock is supplied."""

    def sleep(self, seconds: float) -> None:
        time.sleep(seconds)


@dataclass(frozen=True)
class ReplayFrame:
    """Snapshot of the replay after one step."""
    phase: str
    match_index: int
    round_index: int
    match: Optional[MatchResult]
    current_round: Optional[GameRound]
    scores: Dict[str, int]
    running: bool


# --- Burr Actions ---

@action(reads=["matches", "match_index", "round_index"], writes=["next_step"])
def check_progress(state: State) -> State:
    """Decide what the replay does next."""
    matches = state["matches"]
    match_index = state["match_index"]
    round_index = state["round_index"]

    if match_index >= len(matches):
        next_step = "finish"
    else:
        num_rounds = len(matches[match_index].rounds)
        if round_index == 0 and num_rounds > 0:
            next_step = "enter"
        elif round_index < num_rounds:
            next_step = "hold"
        elif match_index < len(matches) - 1:
            next_step = "next_match"
        else:
            next_step = "finish"

    return state.update(next_step=next_step)


def _add_round_scores(scores: Dict[str, int], match: MatchResult, round_: GameRound) -> Dict[str, int]:
    updated = dict(scores)
    updated[match.p1_id] = updated.get(match.p1_id, 0) + round_.p1_score
    updated[match.p2_id] = updated.get(match.p2_id, 0) + round_.p2_score
    return updated


@action(reads=["matches", "match_index", "scores"], writes=["scores", "round_index", "running"])
def enter_match(state: State) -> State:
    """Bring a match on stage and reveal its first round."""
    match = state["matches"][state["match_index"]]
    return state.update(
        scores=_add_round_scores(state["scores"], match, match.rounds[0]),
        round_index=1,
        running=True,
    )


@action(reads=[], writes=[])
def hold_round(state: State) -> State:
    """Keep the current round on display."""
    return state


@action(reads=["matches", "match_index", "round_index", "scores"], writes=["scores", "round_index"])
def reveal_round(state: State) -> State:
    """Reveal the next round and add its scores."""
    match = state["matches"][state["match_index"]]
    round_index = state["round_index"]
    return state.update(
        scores=_add_round_scores(state["scores"], match, match.rounds[round_index]),
        round_index=round_index + 1,
    )


@action(reads=["match_index"], writes=["match_index", "round_index"])
def next_match(state: State) -> State:
    """Move on to the next pairing."""
    return state.update(match_index=state["match_index"] + 1, round_index=0)


@action(reads=[], writes=["running"])
def finish(state: State) -> State:
    """Terminal action - season replay complete."""
    return state.update(running=False)


def build_replay_app(
    summary: TournamentSummary,
    app_id: Optional[str] = None,
    enable_tracking: bool = config.BURR_TRACKING_ENABLED,
) -> Application:
    """Build the Burr application that steps through a summary.

    Args:
        summary: The finished tournament to replay.
        app_id: Optional application ID for persistence.
        enable_tracking: Whether to enable Burr's tracking UI.

    Returns:
        A configured Burr Application.
    """
    builder = (
        ApplicationBuilder()
        .with_actions(
            check_progress=check_progress,
            enter_match=enter_match,
            hold_round=hold_round,
            reveal_round=reveal_round,
            next_match=next_match,
            finish=finish,
        )
        .with_transitions(
            ("check_progress", "enter_match", when(next_step="enter")),
            ("check_progress", "hold_round", when(next_step="hold")),
            ("check_progress", "next_match", when(next_step="next_match")),
            ("check_progress", "finish", default),
            ("enter_match", "check_progress", default),
            ("hold_round", "reveal_round", default),
            ("reveal_round", "check_progress", default),
            ("next_match", "check_progress", default),
        )
        .with_state(
            matches=summary.matches,
            match_index=0,
            round_index=0,
            scores={},
            next_step="",
            running=bool(summary.matches),
        )
        .with_entrypoint("check_progress")
    )

    if app_id:
        builder = builder.with_identifiers(app_id=app_id)

    if enable_tracking:
        storage_dir = os.path.expanduser(config.BURR_STORAGE_DIR)
        builder = builder.with_tracker(
            "local",
            project=config.BURR_PROJECT,
            params={"storage_dir": storage_dir},
        )

    return builder.build()


class TournamentReplay:
    """Replays a TournamentSummary at a configurable pace.

    Iterating yields a ReplayFrame after every visible step; the clock is
    asked to sleep before each step according to the pacing.
    """

    def __init__(
        self,
        summary: TournamentSummary,
        pacing: Optional[ReplayPacing] = None,
        clock=None,
        enable_tracking: bool = config.BURR_TRACKING_ENABLED,
    ):
        """Initialize the replay.

        Args:
            summary: Finished tournament results.
            pacing: Step delays, defaults from configuration.
            clock: Object with ``sleep(seconds)``. Defaults to the wall clock.
            enable_tracking: Whether to record the run with Burr tracking.
        """
        self.summary = summary
        self.pacing = pacing or ReplayPacing()
        self.clock = clock or SystemClock()
        self.enable_tracking = enable_tracking

    def _delay_for(self, action_name: str) -> float:
        if action_name == "finish" and not self.summary.matches:
            return 0.0
        return self.pacing.delay_for(action_name)

    @staticmethod
    def _frame(action_name: str, state: State) -> ReplayFrame:
        matches = state["matches"]
        match_index = state["match_index"]
        round_index = state["round_index"]
        match = matches[match_index] if match_index < len(matches) else None
        current_round = None
        if match is not None and 0 < round_index <= len(match.rounds):
            current_round = match.rounds[round_index - 1]
        return ReplayFrame(
            phase=action_name,
            match_index=match_index,
            round_index=round_index,
            match=match,
            current_round=current_round,
            scores=dict(state["scores"]),
            running=state["running"],
        )

    def __iter__(self) -> Iterator[ReplayFrame]:
        app_id = f"replay-{uuid.uuid4().hex[:8]}"
        app = build_replay_app(self.summary, app_id=app_id, enable_tracking=self.enable_tracking)

        while True:
            next_action = app.get_next_action()
            if next_action is None:
                break

            delay = self._delay_for(next_action.name)
            if delay > 0:
                self.clock.sleep(delay)

            step = app.step()
            if step is None:
                break
            executed, _, state = step

            logger.debug(
                "Replay %s: %s (match %d, round %d)",
                app_id, executed.name, state["match_index"], state["round_index"],
            )

            if executed.name == "check_progress":
                continue
            yield self._frame(executed.name, state)

    def play(self, on_frame: Optional[Callable[[ReplayFrame], None]] = None) -> Optional[ReplayFrame]:
        """Run the replay to the end.

        Args:
            on_frame: Optional callback receiving every frame.

        Returns:
            The last frame, or None if nothing was replayed.
        """
        last = None
        for frame in self:
            if on_frame:
                on_frame(frame)
            last = frame
        return last
