"""
Session Simulator — drives the Climb core on virtual time so you can watch
sessions, distraction penalties and purchases play out in a second instead of
half an hour. No server needed.

Usage (after `pip install -e .`):
    python scripts/simulate.py                        # cycle all scenarios
    python scripts/simulate.py --scenario wander_off  # specific scenario
    python scripts/simulate.py --mode periodic        # change the penalty mode
    python scripts/simulate.py --preset deep
"""

from __future__ import annotations

import argparse
from typing import Callable, Dict

from climb.clock import VirtualScheduler
from climb.coordinator import Coordinator
from climb.distraction.attention import AttentionSignal
from climb.progress.ledger import ProgressionLedger
from climb.session.presets import get_preset
from climb.settings import PENALTY_MODES, update_settings


def _fresh(points: int = 150) -> tuple[Coordinator, VirtualScheduler]:
    sched = VirtualScheduler()
    coord = Coordinator(sched, ledger=ProgressionLedger(starting_points=points))
    return coord, sched


def _status(coord: Coordinator, label: str) -> None:
    s = coord.ledger.snapshot()
    bar = "█" * min(20, s.climb_height // 50) + "░" * max(0, 20 - s.climb_height // 50)
    phase = coord.session.phase.value
    print(
        f"  [{bar}] {s.climb_height:5d}m  {s.points:5d} XP  lvl {s.level:<2d}  "
        f"{phase:<10} {label}"
    )


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------

def scenario_clean_ascent(preset_id: str) -> None:
    """A full session without leaving the tab."""
    coord, sched = _fresh()
    _status(coord, "basecamp")
    coord.start_session(preset_id)
    sched.advance(get_preset(preset_id).focus_minutes * 30)
    _status(coord, "halfway")
    sched.advance(get_preset(preset_id).focus_minutes * 30)
    _status(coord, "summit reached")


def scenario_wander_off(preset_id: str) -> None:
    """Leave the tab for three minutes mid-session, then come back."""
    coord, sched = _fresh()
    coord.start_session(preset_id)
    sched.advance(300)
    coord.attention(AttentionSignal.LOST)
    _status(coord, "attention lost")
    sched.advance(180)
    _status(coord, "still away after 3 min")
    report = coord.attention(AttentionSignal.REGAINED)
    _status(coord, f"back: -{report.points_lost} XP over {report.minutes_lost} min")
    coord.acknowledge_penalty()
    sched.advance(get_preset(preset_id).focus_minutes * 60)
    _status(coord, "session finished")


def scenario_never_return(preset_id: str) -> None:
    """Leave the tab and never come back before the timer runs out."""
    coord, sched = _fresh()
    coord.start_session(preset_id)
    coord.attention(AttentionSignal.LOST)
    sched.advance(get_preset(preset_id).focus_minutes * 60)
    pending = coord.pending_penalty
    _status(coord, f"timer ran out while away (-{pending.points_lost if pending else 0} XP)")


def scenario_abandon(preset_id: str) -> None:
    """Abort ten minutes in: no reward."""
    coord, sched = _fresh()
    coord.start_session(preset_id)
    sched.advance(600)
    coord.abort_session()
    _status(coord, "aborted after 10 min")


def scenario_shopping(preset_id: str) -> None:
    """Earn enough for a hat, then try for one that is out of reach."""
    coord, sched = _fresh(points=150)
    coord.start_session(preset_id)
    sched.advance(get_preset(preset_id).focus_minutes * 60)
    _status(coord, "after one session")
    for item_id in ("hat-1", "hat-3"):
        result = coord.store.purchase(item_id)
        verdict = "bought" if result.success else "too expensive"
        _status(coord, f"{result.item.name}: {verdict}")


SCENARIOS: Dict[str, Callable[[str], None]] = {
    "clean_ascent": scenario_clean_ascent,
    "wander_off": scenario_wander_off,
    "never_return": scenario_never_return,
    "abandon": scenario_abandon,
    "shopping": scenario_shopping,
}


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------

def main() -> None:
    parser = argparse.ArgumentParser(description="Climb Session Simulator")
    parser.add_argument(
        "--scenario",
        choices=list(SCENARIOS.keys()) + ["cycle"],
        default="cycle",
        help="Which scenario to run (default: cycle through all)",
    )
    parser.add_argument("--preset", default="classic", help="Preset id (default classic)")
    parser.add_argument("--mode", choices=PENALTY_MODES, default="double",
                        help="Distraction penalty mode")
    args = parser.parse_args()

    update_settings({"distraction_penalty_mode": args.mode})
    sequence = list(SCENARIOS) if args.scenario == "cycle" else [args.scenario]

    for name in sequence:
        print(f"\n{'─' * 60}")
        print(f"  SCENARIO: {name.upper().replace('_', ' ')}  ({args.preset}, {args.mode})")
        print(f"{'─' * 60}")
        SCENARIOS[name](args.preset)

    print("\n[✓] Simulation complete.")


if __name__ == "__main__":
    main()
