"""Guided breathing session: alternating inhale/exhale phases over a fixed duration."""
from typing import List, Optional

from pydantic import BaseModel

from corecare.core.config import settings

INHALE = "Breathe in..."
EXHALE = "Breathe out..."

COMPLETED_MESSAGE = (
    "Great job! Your 5-minute breathing session is complete. "
    "Would you like to check your heart rate to see the improvement?"
)
ENDED_EARLY_MESSAGE = (
    "Your breathing session ended early. Consider checking your heart rate "
    "or returning to stress analysis for better health monitoring."
)


class BreathingPhase(BaseModel):
    instruction: str
    start_second: int
    duration_seconds: int


class BreathingState(BaseModel):
    elapsed_seconds: int
    remaining_seconds: int
    instruction: str
    progress_percent: int
    completed: bool
    message: Optional[str] = None


class BreathingPlan(BaseModel):
    total_seconds: int
    phase_seconds: int
    cycles: int
    phases: List[BreathingPhase]
    state: Optional[BreathingState] = None


def phase_at(elapsed: int, phase_seconds: int) -> str:
    return INHALE if elapsed % (2 * phase_seconds) < phase_seconds else EXHALE


def session_state(elapsed: int, total_seconds: Optional[int] = None,
                  phase_seconds: Optional[int] = None, stopped: bool = False) -> BreathingState:
    total = total_seconds or settings.BREATHING_SESSION_SECONDS
    phase = phase_seconds or settings.BREATHING_PHASE_SECONDS
    elapsed = max(0, min(elapsed, total))
    completed = elapsed >= total
    message = None
    if completed:
        message = COMPLETED_MESSAGE
    elif stopped:
        message = ENDED_EARLY_MESSAGE
    return BreathingState(
        elapsed_seconds=elapsed,
        remaining_seconds=total - elapsed,
        instruction=phase_at(elapsed, phase),
        progress_percent=elapsed * 100 // total,
        completed=completed,
        message=message,
    )


def build_session(total_seconds: Optional[int] = None, phase_seconds: Optional[int] = None,
                  elapsed: Optional[int] = None) -> BreathingPlan:
    total = total_seconds or settings.BREATHING_SESSION_SECONDS
    phase = phase_seconds or settings.BREATHING_PHASE_SECONDS

    phases = []
    start = 0
    while start < total:
        phases.append(BreathingPhase(
            instruction=phase_at(start, phase),
            start_second=start,
            duration_seconds=min(phase, total - start),
        ))
        start += phase

    return BreathingPlan(
        total_seconds=total,
        phase_seconds=phase,
        cycles=total // (2 * phase),
        phases=phases,
        state=session_state(elapsed, total, phase) if elapsed is not None else None,
    )
