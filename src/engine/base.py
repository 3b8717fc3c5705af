"""
Destiny Dice - Game Engine Base Classes

This module defines the foundational data structures and enums used throughout
the engine. All value classes are immutable (frozen dataclasses) so rolls and
results can be shared with renderers without copying.
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Iterator

from src.engine.errors import InvalidFaceIndex


class Symbol(Enum):
    """The eight outcome symbols a die face can show."""
    SUCCESS = "success"
    FAILURE = "failure"
    ADVANTAGE = "advantage"
    THREAT = "threat"
    TRIUMPH = "triumph"
    DESPAIR = "despair"
    LIGHT = "light"
    DARK = "dark"


class DieType(Enum):
    """Narrative die types, valued by their roll-formula term letter."""
    ABILITY = "a"
    PROFICIENCY = "p"
    BOOST = "b"
    DIFFICULTY = "d"
    CHALLENGE = "c"
    SETBACK = "s"
    FORCE = "f"

    @property
    def face_count(self) -> int:
        return _FACE_COUNTS[self]

    @property
    def term(self) -> str:
        """Roll-formula term, e.g. ``da`` for Ability."""
        return f"d{self.value}"

    @property
    def is_positive(self) -> bool:
        """Ability, Proficiency and Boost dice work for the roller."""
        return self in (DieType.ABILITY, DieType.PROFICIENCY, DieType.BOOST)

    @classmethod
    def from_term(cls, term: str) -> "DieType":
        """Look up a die type from ``da``/``a`` style notation."""
        letter = term.lower()
        if len(letter) == 2 and letter.startswith("d"):
            letter = letter[1]
        try:
            return cls(letter)
        except ValueError:
            raise ValueError(f"Unknown die term '{term}'.") from None


_FACE_COUNTS: dict[DieType, int] = {
    DieType.ABILITY: 8,
    DieType.PROFICIENCY: 12,
    DieType.BOOST: 6,
    DieType.DIFFICULTY: 8,
    DieType.CHALLENGE: 12,
    DieType.SETBACK: 6,
    DieType.FORCE: 12,
}

# Display and formula order
DIE_ORDER: tuple[DieType, ...] = (
    DieType.PROFICIENCY,
    DieType.ABILITY,
    DieType.BOOST,
    DieType.CHALLENGE,
    DieType.DIFFICULTY,
    DieType.SETBACK,
    DieType.FORCE,
)

# Lower tier -> higher tier
TIER_PAIRS: dict[DieType, DieType] = {
    DieType.ABILITY: DieType.PROFICIENCY,
    DieType.DIFFICULTY: DieType.CHALLENGE,
}


class Difficulty(Enum):
    """Standard check difficulties, valued by their Difficulty dice count."""
    SIMPLE = 0
    EASY = 1
    AVERAGE = 2
    HARD = 3
    DAUNTING = 4
    FORMIDABLE = 5


class CheckOutcome(Enum):
    """Pass/fail classification of a net result."""
    SUCCESS = "success"
    FAILURE = "failure"
    NOT_APPLICABLE = "not_applicable"


@dataclass(frozen=True)
class SymbolVector:
    """
    Symbol counts produced by one die face, or summed across many.

    Attributes:
        success, failure, advantage, threat, triumph, despair: Check symbols
        light, dark: Force points
    """
    success: int = 0
    failure: int = 0
    advantage: int = 0
    threat: int = 0
    triumph: int = 0
    despair: int = 0
    light: int = 0
    dark: int = 0

    def __post_init__(self) -> None:
        """Validate that every count is a non-negative integer."""
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, int) or value < 0:
                raise ValueError(
                    f"Symbol count '{f.name}' must be a non-negative integer, got {value!r}."
                )

    def __add__(self, other: "SymbolVector") -> "SymbolVector":
        if not isinstance(other, SymbolVector):
            return NotImplemented
        return SymbolVector(**{
            f.name: getattr(self, f.name) + getattr(other, f.name)
            for f in fields(self)
        })

    def __getitem__(self, symbol: Symbol) -> int:
        return getattr(self, symbol.value)

    @property
    def is_blank(self) -> bool:
        return not any(self.as_dict().values())

    def as_dict(self) -> dict[str, int]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


BLANK = SymbolVector()


@dataclass(frozen=True)
class DieFace:
    """One rolled die: its type and the 1-based face that came up."""
    die_type: DieType
    face_index: int

    def __post_init__(self) -> None:
        """Validate face index is within the die's range."""
        max_face = self.die_type.face_count
        if isinstance(self.face_index, bool) or not (1 <= self.face_index <= max_face):
            raise InvalidFaceIndex(
                f"Invalid face {self.face_index} for {self.die_type.name}. "
                f"Must be between 1 and {max_face}."
            )


@dataclass(frozen=True)
class RollResult:
    """
    Immutable record of a rolled pool, one face per die in pool order.

    Attributes:
        faces: Rolled faces, parallel to the dice of the pool
    """
    faces: tuple[DieFace, ...] = ()

    def __len__(self) -> int:
        return len(self.faces)

    def __iter__(self) -> Iterator[DieFace]:
        return iter(self.faces)

    def __getitem__(self, index: int) -> DieFace:
        return self.faces[index]

    @property
    def die_types(self) -> tuple[DieType, ...]:
        return tuple(face.die_type for face in self.faces)

    @property
    def is_force_only(self) -> bool:
        """True for a non-empty roll made only of Force dice."""
        return bool(self.faces) and all(
            face.die_type is DieType.FORCE for face in self.faces
        )

    @classmethod
    def from_pairs(cls, pairs) -> "RollResult":
        """Create a RollResult from ``(die_type, face_index)`` pairs."""
        return cls(faces=tuple(DieFace(die_type, index) for die_type, index in pairs))


@dataclass(frozen=True)
class NetResult:
    """
    Post-cancellation summary of a roll.

    Signed fields are positive for the "good" symbol and negative for the
    opposing one. They are None when the roll contained only Force dice.

    Attributes:
        success_or_failure: Net successes (+) or failures (-)
        advantage_or_threat: Net advantages (+) or threats (-)
        triumph: Triumphs rolled, never cancelled
        despair: Despairs rolled, never cancelled
        light_or_dark: Net light (+) or dark (-) Force points
    """
    success_or_failure: int | None = 0
    advantage_or_threat: int | None = 0
    triumph: int = 0
    despair: int = 0
    light_or_dark: int = 0

    @property
    def outcome(self) -> CheckOutcome:
        if self.success_or_failure is None:
            return CheckOutcome.NOT_APPLICABLE
        if self.success_or_failure > 0:
            return CheckOutcome.SUCCESS
        return CheckOutcome.FAILURE

    @property
    def is_success(self) -> bool:
        """A check passes only on at least one net success; ties fail."""
        return self.outcome is CheckOutcome.SUCCESS

    @property
    def successes(self) -> int:
        return max(self.success_or_failure or 0, 0)

    @property
    def failures(self) -> int:
        return max(-(self.success_or_failure or 0), 0)

    @property
    def advantages(self) -> int:
        return max(self.advantage_or_threat or 0, 0)

    @property
    def threats(self) -> int:
        return max(-(self.advantage_or_threat or 0), 0)

    @property
    def light(self) -> int:
        return max(self.light_or_dark, 0)

    @property
    def dark(self) -> int:
        return max(-self.light_or_dark, 0)

    def to_dict(self) -> dict[str, int | str | None]:
        """Plain data for renderers."""
        return {
            "outcome": self.outcome.value,
            "success_or_failure": self.success_or_failure,
            "advantage_or_threat": self.advantage_or_threat,
            "successes": self.successes,
            "failures": self.failures,
            "advantages": self.advantages,
            "threats": self.threats,
            "triumph": self.triumph,
            "despair": self.despair,
            "light": self.light,
            "dark": self.dark,
        }

    def __str__(self) -> str:
        parts = []
        for count, name in (
            (self.successes, "Success"),
            (self.failures, "Failure"),
            (self.advantages, "Advantage"),
            (self.threats, "Threat"),
            (self.triumph, "Triumph"),
            (self.despair, "Despair"),
            (self.light, "Light"),
            (self.dark, "Dark"),
        ):
            if count:
                parts.append(f"{count} {name}")
        label = self.outcome.name.replace("_", " ").title()
        if not parts:
            return label
        return f"{label}: " + ", ".join(parts)
