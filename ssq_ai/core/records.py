"""
Value types shared by the engine and its host layers.
All of them are immutable once built.
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from dateutil import parser as date_parser

from ssq_ai.config import DATE_FORMAT, RED_BALLS_PER_DRAW
from ssq_ai.core.errors import ConfigurationError, InputError


class Algorithm(str, Enum):
    """Weighting strategy selector"""
    HOT = "hot"    # hot stays hot
    COLD = "cold"  # cold rebounds

    @classmethod
    def parse(cls, tag) -> "Algorithm":
        if isinstance(tag, cls):
            return tag
        if isinstance(tag, str):
            for member in cls:
                if member.value == tag:
                    return member
        raise ConfigurationError(
            f"Unknown algorithm {tag!r}, expected one of: "
            f"{', '.join(m.value for m in cls)}"
        )


def parse_draw_date(value) -> date:
    """Accept date, datetime or an ISO-like string"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value).strip(), DATE_FORMAT).date()
    except ValueError:
        pass
    try:
        return date_parser.parse(str(value)).date()
    except (ValueError, OverflowError) as e:
        raise InputError(f"Invalid draw date {value!r}: {e}") from e


def whole_number(value, label):
    """Ball value as int; fractional or non-numeric values are rejected"""
    try:
        number = int(value.strip()) if isinstance(value, str) else int(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise InputError(f"{label} must be a whole number, got {value!r}") from e
    if not isinstance(value, str) and number != value:
        raise InputError(f"{label} must be a whole number, got {value!r}")
    return number


@dataclass(frozen=True)
class DrawRecord:
    """One historical draw: 6 red balls and 1 blue ball"""
    issue: str
    date: date
    red_balls: Tuple[int, ...]
    blue_ball: int

    def __post_init__(self):
        object.__setattr__(self, "issue", str(self.issue))
        object.__setattr__(self, "date", parse_draw_date(self.date))
        red_balls = tuple(whole_number(n, f"Draw {self.issue}: red ball") for n in self.red_balls)
        object.__setattr__(self, "red_balls", red_balls)
        object.__setattr__(self, "blue_ball", whole_number(self.blue_ball, f"Draw {self.issue}: blue ball"))

    @property
    def primary_numbers(self) -> Tuple[int, ...]:
        return self.red_balls

    @property
    def secondary_number(self) -> int:
        return self.blue_ball

    @classmethod
    def from_dict(cls, data: dict) -> "DrawRecord":
        """
        Build a record from either storage shape:
        {"red_balls": [...]} or {"red1": .., ..., "red6": ..}
        """
        for key in ("issue", "date", "blue_ball"):
            if key not in data:
                raise InputError(f"Missing field '{key}' in draw record")

        if data.get("red_balls") is not None:
            red_balls = list(data["red_balls"])
            if len(red_balls) != RED_BALLS_PER_DRAW:
                raise InputError(
                    f"red_balls must contain exactly {RED_BALLS_PER_DRAW} elements, "
                    f"got {len(red_balls)}"
                )
        else:
            try:
                red_balls = [data[f"red{i}"] for i in range(1, RED_BALLS_PER_DRAW + 1)]
            except KeyError as e:
                raise InputError(f"Missing field {e} in draw record") from e

        try:
            return cls(
                issue=data["issue"],
                date=data["date"],
                red_balls=tuple(red_balls),
                blue_ball=data["blue_ball"],
            )
        except InputError:
            raise
        except (TypeError, ValueError) as e:
            raise InputError(f"Malformed draw record {data.get('issue')!r}: {e}") from e

    def to_dict(self) -> dict:
        return {
            "issue": self.issue,
            "date": self.date.strftime(DATE_FORMAT),
            "red_balls": list(self.red_balls),
            "blue_ball": self.blue_ball,
        }

    def __str__(self):
        reds = " ".join(f"{n:02d}" for n in self.red_balls)
        return f"{self.issue} ({self.date:%Y-%m-%d}): {reds} + {self.blue_ball:02d}"


@dataclass(frozen=True)
class BallFrequency:
    """Frequency and weight of one ball within one pool"""
    number: int
    frequency: int
    weight: float

    def to_dict(self) -> dict:
        return {"number": self.number, "frequency": self.frequency, "weight": self.weight}


@dataclass(frozen=True)
class PredictionCandidate:
    red_balls: Tuple[int, ...]
    blue_ball: int
    score: float

    @property
    def primary_numbers(self) -> Tuple[int, ...]:
        return self.red_balls

    @property
    def secondary_number(self) -> int:
        return self.blue_ball

    def to_dict(self) -> dict:
        return {
            "red_balls": list(self.red_balls),
            "blue_ball": self.blue_ball,
            "score": self.score,
        }

    def __str__(self):
        reds = " ".join(f"{n:02d}" for n in self.red_balls)
        return f"{reds} + {self.blue_ball:02d} (score {self.score:.2f})"


@dataclass(frozen=True)
class PredictionBatch:
    """
    Ranked predictions of one generation run.

    Behaves like a read-only list of candidates. When fewer than
    `requested` distinct candidates could be produced, `degraded` is set
    and the batch simply holds what was found.
    """
    candidates: Tuple[PredictionCandidate, ...] = field(default_factory=tuple)
    requested: int = 10
    attempts: int = 0
    algorithm: Optional[Algorithm] = None

    @property
    def count(self) -> int:
        return len(self.candidates)

    @property
    def degraded(self) -> bool:
        return self.count < self.requested

    def __len__(self):
        return len(self.candidates)

    def __iter__(self) -> Iterator[PredictionCandidate]:
        return iter(self.candidates)

    def __getitem__(self, index):
        return self.candidates[index]

    def to_list(self) -> List[dict]:
        return [c.to_dict() for c in self.candidates]
