"""Simulated typists driving a Tracker on a synthetic clock."""

import logging
import random
import statistics
import string
from typing import Optional

from pydantic import BaseModel, Field

from engine.mode import Mode
from engine.tracker import Tracker

log = logging.getLogger("typetrainer.simulation")

DEFAULT_TEXTS: tuple[str, ...] = (
    "The quick brown fox jumps over the lazy dog",
    "Ex voluptate commodo irure est nostrud laborum quis.",
    "Quis incididunt ad deserunt velit ullamco tempor laborum commodo enim velit id.",
    "Cupidatat nostrud id laborum in dolor id laborum.",
    "Commodo labore in ad voluptate amet nulla Lorem anim ipsum nulla nulla minim exercitation.",
)


class SimulationResult(BaseModel):
    """Outcome of one simulated test."""

    iteration: int = Field(..., description="Iteration number (0-based)")
    text: str = Field(..., description="Target text")
    target_wps: float = Field(..., description="Requested words per second")
    actual_wps: float = Field(..., description="Measured net words per second")
    wpm: float = Field(..., description="Net words per minute")
    raw_wpm: float = Field(..., description="Raw words per minute")
    net_wpm: float = Field(..., description="WPM weighted by accuracy")
    accuracy: float = Field(..., description="Accuracy (0-1)")
    consistency: float = Field(..., description="Consistency (0-100)")
    total_errors: int = Field(..., description="Wrong keystrokes")
    elapsed_time_ms: int = Field(..., description="Simulated typing time (ms)")


class SimulationSummary(BaseModel):
    """Aggregate over all simulated tests."""

    total_iterations: int = 0
    average_wps: float = 0.0
    average_wpm: float = 0.0
    average_accuracy: float = 0.0
    average_net_wpm: float = 0.0
    average_consistency: float = 0.0
    min_wps: float = 0.0
    max_wps: float = 0.0
    std_dev_wps: float = 0.0
    results: list[SimulationResult] = Field(default_factory=list)


class SimulatedClock:
    """Clock advanced by the simulation instead of by wall time."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += max(0.0, seconds)


def _wrong_char(expected: str, rng: random.Random) -> str:
    choices = [c for c in string.ascii_lowercase if c != expected]
    return rng.choice(choices)


def simulate(
    text: str,
    wps: float,
    duration: int,
    error_rate: float,
    iteration: int = 0,
    correct_errors: bool = False,
    jitter: float = 0.0,
    rng: Optional[random.Random] = None,
) -> SimulationResult:
    """Type ``text`` at ``wps`` words per second in a time mode test.

    Args:
        text: Target text
        wps: Typing speed in words (5 characters) per second
        duration: Time mode duration in seconds
        error_rate: Probability (0-1) of typing a wrong letter
        iteration: Iteration number reported in the result
        correct_errors: Backspace and retype each wrong letter
        jitter: Relative random variation of the keystroke interval (0-1)
        rng: Random number generator

    Returns:
        The simulated result
    """
    if wps <= 0:
        raise ValueError("WPS must be greater than 0")
    if not 0.0 <= error_rate <= 1.0:
        raise ValueError("Error rate must be between 0.0 and 1.0")

    rng = rng or random.Random()
    clock = SimulatedClock()
    tracker = Tracker(text, Mode.time(duration), clock=clock)
    char_delay = 1.0 / (wps * 5.0)

    tracker.start_typing()
    for expected in tracker.target_text:
        clock.advance(char_delay * (1.0 + rng.uniform(-jitter, jitter)))
        if tracker.check_completion():
            break

        if rng.random() < error_rate:
            tracker.type_char(_wrong_char(expected, rng))
            if correct_errors and not tracker.is_complete():
                clock.advance(char_delay)
                tracker.backspace()
                clock.advance(char_delay)
                tracker.type_char(expected)
        else:
            tracker.type_char(expected)

        if tracker.is_complete():
            break

    summary = tracker.summary()
    log.debug(
        f"Iteration {iteration}: {summary.wpm:.1f} wpm, {summary.accuracy * 100:.1f}% accuracy "
        f"after {summary.elapsed_time.total_seconds():.2f}s"
    )
    return SimulationResult(
        iteration=iteration,
        text=tracker.target_text,
        target_wps=wps,
        actual_wps=summary.wps,
        wpm=summary.wpm,
        raw_wpm=summary.raw_wpm,
        net_wpm=summary.net_wpm(),
        accuracy=summary.accuracy,
        consistency=summary.consistency,
        total_errors=summary.total_errors,
        elapsed_time_ms=int(summary.elapsed_time.total_seconds() * 1000),
    )


def calculate_summary(results: list[SimulationResult]) -> SimulationSummary:
    """Aggregate simulation results."""
    if not results:
        return SimulationSummary()

    wps_values = [r.actual_wps for r in results]
    return SimulationSummary(
        total_iterations=len(results),
        average_wps=statistics.fmean(wps_values),
        average_wpm=statistics.fmean(r.wpm for r in results),
        average_accuracy=statistics.fmean(r.accuracy for r in results),
        average_net_wpm=statistics.fmean(r.net_wpm for r in results),
        average_consistency=statistics.fmean(r.consistency for r in results),
        min_wps=min(wps_values),
        max_wps=max(wps_values),
        std_dev_wps=statistics.pstdev(wps_values),
        results=list(results),
    )
