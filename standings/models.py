"""Input and output models for standings."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, FiniteFloat, TypeAdapter, field_validator


# Type alias for standings
Standings = dict[str, float]

StandingsAdapter = TypeAdapter(dict[str, FiniteFloat])


class SeriesKind(str, Enum):
    """Match format of a series."""

    BO1 = "Bo1"
    BO3 = "Bo3"
    BO5 = "Bo5"


class MatchResult(BaseModel):
    """Result of a single decided series.

    Unknown fields in the input are ignored.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    winner: str
    loser: str
    series: SeriesKind


MatchResultsAdapter = TypeAdapter(list[MatchResult])


class KBracket(BaseModel):
    """k-factor applied from a rating threshold upwards."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    start: int
    k: FiniteFloat


class Configuration(BaseModel):
    """Series win weights and k brackets.

    Unknown fields in the input are ignored.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    bo1_score: FiniteFloat
    bo3_score: FiniteFloat
    bo5_score: FiniteFloat
    k_brackets: list[KBracket]

    @field_validator("k_brackets")
    @classmethod
    def check_distinct_starts(cls, k_brackets: list[KBracket]) -> list[KBracket]:
        """Reject brackets sharing a start value."""
        starts = [bracket.start for bracket in k_brackets]
        duplicates = sorted({start for start in starts if starts.count(start) > 1})
        if duplicates:
            raise ValueError(f"duplicate k bracket start values: {duplicates}")
        return k_brackets
