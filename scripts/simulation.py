#!/usr/bin/env python3
"""Simulate typists of a given speed and error rate against the tracker.

Usage:
    python3 scripts/simulation.py --wps 2.0 --iterations 3
    python3 scripts/simulation.py --text "custom text" --error-rate 0.1 --verbose
    python3 scripts/simulation.py --json > results.json
"""
import argparse
import random
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from engine.simulation import (  # noqa: E402
    DEFAULT_TEXTS,
    SimulationSummary,
    calculate_summary,
    simulate,
)


def print_summary(summary: SimulationSummary, target_wps: float, verbose: bool) -> None:
    print("$ typetrainer-simulation --summary")
    print()
    print(f"Total Iterations: {summary.total_iterations}")
    print(f"Average WPS: {summary.average_wps:.3f} (target: {target_wps:.2f})")
    print(f"Average WPM: {summary.average_wpm:.1f}")
    print(f"Average Accuracy: {summary.average_accuracy * 100:.1f}%")
    print(f"Average Net WPM: {summary.average_net_wpm:.1f}")
    print(f"Average Consistency: {summary.average_consistency:.3f}")
    print(f"WPS Range: {summary.min_wps:.3f} - {summary.max_wps:.3f}")
    print(f"WPS Standard Deviation: {summary.std_dev_wps:.3f}")
    print()

    if verbose:
        print("$ typetrainer-simulation --results")
        print()
        for result in summary.results:
            print(
                f"Iteration #{result.iteration + 1}: WPM={result.wpm:.1f}, "
                f"WPS={result.actual_wps:.3f}, Acc={result.accuracy * 100:.1f}%, "
                f"Net WPM={result.net_wpm:.1f}, Err={result.total_errors}"
            )
        print()


def main():
    parser = argparse.ArgumentParser(description="Typing tracker simulation")
    parser.add_argument("-w", "--wps", type=float, default=2.0, help="Target words per second")
    parser.add_argument("-i", "--iterations", type=int, default=3, help="Number of simulated tests")
    parser.add_argument("-t", "--duration", type=int, default=30, help="Test duration in seconds")
    parser.add_argument("-e", "--error-rate", type=float, default=0.05,
                        help="Probability of a wrong keystroke (0.0-1.0)")
    parser.add_argument("-T", "--text", help="Text to type (defaults to built-in samples)")
    parser.add_argument("--correct", action="store_true", help="Backspace and fix each error")
    parser.add_argument("--jitter", type=float, default=0.2,
                        help="Relative variation of keystroke timing (0.0-1.0)")
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show per-iteration results")
    args = parser.parse_args()

    if args.wps <= 0:
        print("Error: WPS must be greater than 0", file=sys.stderr)
        sys.exit(1)
    if not 0.0 <= args.error_rate <= 1.0:
        print("Error: Error rate must be between 0.0 and 1.0", file=sys.stderr)
        sys.exit(1)

    texts = [args.text] if args.text else list(DEFAULT_TEXTS)
    rng = random.Random(args.seed)

    results = [
        simulate(
            texts[i % len(texts)],
            args.wps,
            args.duration,
            args.error_rate,
            iteration=i,
            correct_errors=args.correct,
            jitter=args.jitter,
            rng=rng,
        )
        for i in range(args.iterations)
    ]
    summary = calculate_summary(results)

    if args.json:
        print(summary.model_dump_json(indent=2))
    else:
        print_summary(summary, args.wps, args.verbose)


if __name__ == "__main__":
    main()
