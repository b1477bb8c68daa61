"""Main standings application logic."""

import argparse
import json
import logging
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

from pydantic import ValidationError

from .elo import adjust_ratings, scaling_for_rating_difference
from .models import (
    Configuration,
    KBracket,
    MatchResult,
    MatchResultsAdapter,
    SeriesKind,
    Standings,
    StandingsAdapter,
)


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(name)s: %(message)s'
)
logger = logging.getLogger("standings:engine")
io_logger = logging.getLogger("standings:io")


# Constants
VERSION = "1.0"
DEFAULT_CONFIG_PATH = "config.json"
LOSER_SCORE = 0.0


SeriesWinWeight = Callable[[SeriesKind], float]


def series_win_weight_from_config(config: Configuration) -> SeriesWinWeight:
    """Build the series win weight lookup from configuration.

    Args:
        config: Configuration holding one score per series kind

    Returns:
        Function mapping a series kind to the winner's actual score
    """
    weights = {
        SeriesKind.BO1: config.bo1_score,
        SeriesKind.BO3: config.bo3_score,
        SeriesKind.BO5: config.bo5_score,
    }

    def series_win_weight(series: SeriesKind) -> float:
        return weights[series]

    return series_win_weight


def apply_match_result(
    result: MatchResult,
    standings: Standings,
    series_win_weight: SeriesWinWeight,
    k_brackets: list[KBracket],
) -> Standings | None:
    """Apply a single match result to standings.

    Args:
        result: Match to apply
        standings: Current standings, left untouched
        series_win_weight: Winner's actual score per series kind
        k_brackets: Brackets used to pick the k-factor

    Returns:
        New standings, or None if a team is unknown or no bracket applies
    """
    for team in (result.winner, result.loser):
        if team not in standings:
            logger.warning(f"Unknown team {team!r} in {result.winner} vs {result.loser}")
            return None

    winner_rating = standings[result.winner]
    loser_rating = standings[result.loser]

    k = scaling_for_rating_difference(winner_rating, loser_rating, k_brackets)
    if k is None:
        logger.warning(
            f"No k bracket for {result.winner} ({winner_rating:.2f}) "
            f"vs {result.loser} ({loser_rating:.2f})"
        )
        return None

    new_winner_rating, new_loser_rating = adjust_ratings(
        winner_rating,
        loser_rating,
        k,
        series_win_weight(result.series),
        LOSER_SCORE,
    )
    logger.debug(
        f"{result.winner} beat {result.loser} ({result.series.value}, k={k}): "
        f"{winner_rating:.2f} -> {new_winner_rating:.2f}, "
        f"{loser_rating:.2f} -> {new_loser_rating:.2f}"
    )

    new_standings = dict(standings)
    new_standings[result.winner] = new_winner_rating
    new_standings[result.loser] = new_loser_rating
    return new_standings


def apply_match_results(
    results: Sequence[MatchResult],
    standings: Standings,
    k_brackets: list[KBracket],
    series_win_weight: SeriesWinWeight,
) -> Standings | None:
    """Apply match results in order, each seeing the ratings of earlier ones.

    Args:
        results: Matches in the order they were played
        standings: Starting standings, left untouched
        k_brackets: Brackets used to pick the k-factor
        series_win_weight: Winner's actual score per series kind

    Returns:
        Final standings, or None if any match could not be applied
    """
    current: Standings = dict(standings)
    for index, result in enumerate(results):
        updated = apply_match_result(result, current, series_win_weight, k_brackets)
        if updated is None:
            logger.error(f"Aborting at match {index + 1} of {len(results)}")
            return None
        current = updated

    logger.info(f"Applied {len(results)} match results to {len(current)} teams")
    return current


def load_standings(text: str) -> Standings:
    """Parse standings from JSON text."""
    return StandingsAdapter.validate_python(json.loads(text))


def dump_standings(standings: Standings) -> str:
    """Serialize standings to pretty-printed JSON text."""
    return json.dumps(standings, indent=2)


def read_standings(path: Path) -> Standings:
    """Read standings from a JSON file."""
    standings = load_standings(path.read_text())
    io_logger.debug(f"Read {len(standings)} teams from {path}")
    return standings


def read_match_results(path: Path) -> list[MatchResult]:
    """Read match results from a JSON file, preserving their order."""
    results = MatchResultsAdapter.validate_python(json.loads(path.read_text()))
    io_logger.debug(f"Read {len(results)} match results from {path}")
    return results


def read_configuration(path: Path) -> Configuration:
    """Read configuration from a JSON file."""
    return Configuration.model_validate(json.loads(path.read_text()))


def write_standings(path: Path, standings: Standings) -> None:
    """Write standings to a JSON file."""
    path.write_text(dump_standings(standings))
    io_logger.debug(f"Wrote {len(standings)} teams to {path}")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="recalculate-standings",
        description="Calculates evolution of team elo after match sets",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=Path(DEFAULT_CONFIG_PATH),
        metavar="FILE",
        help=f"Path to config file (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "-s", "--standings",
        type=Path,
        required=True,
        metavar="FILE",
        help="Path to standings file",
    )
    parser.add_argument(
        "-m", "--matches",
        type=Path,
        required=True,
        metavar="FILE",
        help="Path to matches file",
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        required=True,
        metavar="FILE",
        help="Path to output standings",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log every applied match",
    )
    parser.add_argument("--version", action="version", version=VERSION)
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    """Main entry point."""
    args = parse_args(argv)
    if args.verbose:
        logger.setLevel(logging.DEBUG)
        io_logger.setLevel(logging.DEBUG)

    read_errors = (OSError, json.JSONDecodeError, ValidationError)

    try:
        standings = read_standings(args.standings)
    except read_errors as error:
        logger.error(f"Problem reading standings: {error}")
        sys.exit(1)

    try:
        results = read_match_results(args.matches)
    except read_errors as error:
        logger.error(f"Problem reading match results: {error}")
        sys.exit(1)

    try:
        config = read_configuration(args.config)
    except read_errors as error:
        logger.error(f"Problem reading config: {error}")
        sys.exit(1)

    series_win_weight = series_win_weight_from_config(config)
    new_standings = apply_match_results(
        results, standings, config.k_brackets, series_win_weight
    )
    if new_standings is None:
        logger.error(
            "Problem applying match results: unknown team or no k bracket "
            "for a match, no standings written"
        )
        sys.exit(1)

    try:
        write_standings(args.output, new_standings)
    except OSError as error:
        logger.error(f"Problem writing standings: {error}")
        sys.exit(1)


if __name__ == "__main__":
    main()
