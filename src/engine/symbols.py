"""
Destiny Dice - Symbol Tables

Static face tables for every die type and the theme registry that pairs
them with cosmetic identifiers (icons, fonts, glyphs). Themes never change
symbol values, only how a renderer draws them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from src.engine.base import BLANK, DieType, Symbol, SymbolVector
from src.engine.errors import InvalidFaceIndex, UnknownTheme

logger = logging.getLogger(__name__)

V = SymbolVector

# Faces are listed in order, index 0 is face 1.
CANONICAL_FACES: Mapping[DieType, tuple[SymbolVector, ...]] = MappingProxyType({
    DieType.ABILITY: (
        BLANK,
        V(success=1),
        V(success=1),
        V(success=2),
        V(advantage=1),
        V(advantage=1),
        V(success=1, advantage=1),
        V(advantage=2),
    ),
    DieType.PROFICIENCY: (
        BLANK,
        V(success=1),
        V(success=1),
        V(success=2),
        V(success=2),
        V(advantage=1),
        V(success=1, advantage=1),
        V(success=1, advantage=1),
        V(success=1, advantage=1),
        V(advantage=2),
        V(advantage=2),
        V(success=1, triumph=1),
    ),
    DieType.BOOST: (
        BLANK,
        BLANK,
        V(success=1),
        V(success=1, advantage=1),
        V(advantage=2),
        V(advantage=1),
    ),
    DieType.DIFFICULTY: (
        BLANK,
        V(failure=1),
        V(failure=2),
        V(threat=1),
        V(threat=1),
        V(threat=1),
        V(threat=2),
        V(failure=1, threat=1),
    ),
    DieType.CHALLENGE: (
        BLANK,
        V(failure=1),
        V(failure=1),
        V(failure=2),
        V(failure=2),
        V(threat=1),
        V(threat=1),
        V(failure=1, threat=1),
        V(failure=1, threat=1),
        V(threat=2),
        V(threat=2),
        V(failure=1, despair=1),
    ),
    DieType.SETBACK: (
        BLANK,
        BLANK,
        V(failure=1),
        V(failure=1),
        V(threat=1),
        V(threat=1),
    ),
    DieType.FORCE: (
        V(dark=1),
        V(dark=1),
        V(dark=1),
        V(dark=1),
        V(dark=1),
        V(dark=1),
        V(dark=2),
        V(light=1),
        V(light=1),
        V(light=2),
        V(light=2),
        V(light=2),
    ),
})

_COLOURS: dict[DieType, str] = {
    DieType.ABILITY: "green",
    DieType.PROFICIENCY: "yellow",
    DieType.BOOST: "blue",
    DieType.DIFFICULTY: "purple",
    DieType.CHALLENGE: "red",
    DieType.SETBACK: "black",
    DieType.FORCE: "whiteHex",
}

_SWRPG_FONT = "SWRPG-Symbol-Regular"

_SWRPG_GLYPHS: dict[Symbol, str] = {
    Symbol.SUCCESS: "s",
    Symbol.FAILURE: "f",
    Symbol.ADVANTAGE: "a",
    Symbol.THREAT: "t",
    Symbol.TRIUMPH: "x",
    Symbol.DESPAIR: "y",
    Symbol.LIGHT: "Z",
    Symbol.DARK: "z",
}

_GENESYS_GLYPHS: dict[Symbol, str] = {
    **_SWRPG_GLYPHS,
    Symbol.THREAT: "h",
    Symbol.TRIUMPH: "t",
    Symbol.DESPAIR: "d",
}

# Symbols already implied by the triumph/despair glyph
_IMPLIED: dict[Symbol, Symbol] = {
    Symbol.TRIUMPH: Symbol.SUCCESS,
    Symbol.DESPAIR: Symbol.FAILURE,
}


@dataclass(frozen=True)
class SymbolTable:
    """
    Face table plus the cosmetic identifiers of one theme.

    Attributes:
        name: Theme name
        check_font: Symbol font for the check dice
        glyphs: Font glyph for each symbol
        force_font: Symbol font for the Force die
        faces: Face vectors per die type
    """
    name: str
    check_font: str
    glyphs: Mapping[Symbol, str]
    force_font: str = _SWRPG_FONT
    faces: Mapping[DieType, tuple[SymbolVector, ...]] = field(
        default_factory=lambda: CANONICAL_FACES, repr=False
    )

    def face_count(self, die_type: DieType) -> int:
        return len(self.faces[die_type])

    def face_symbols(self, die_type: DieType, face_index: int) -> SymbolVector:
        """
        Look up the symbols shown on one face.

        Args:
            die_type: Die to look up
            face_index: 1-based face index

        Returns:
            The face's SymbolVector

        Raises:
            InvalidFaceIndex: If face_index is outside [1, face_count]
        """
        faces = self.faces[die_type]
        if (
            isinstance(face_index, bool)
            or not isinstance(face_index, int)
            or not (1 <= face_index <= len(faces))
        ):
            raise InvalidFaceIndex(
                f"Face {face_index!r} is out of range for {die_type.name}. "
                f"Must be between 1 and {len(faces)}."
            )
        return faces[face_index - 1]

    def icon(self, die_type: DieType) -> str:
        """Image path of the die's blank face."""
        return f"images/dice/{self.name}/{_COLOURS[die_type]}.png"

    def font(self, die_type: DieType) -> str:
        if die_type is DieType.FORCE:
            return self.force_font
        return self.check_font

    def face_label(self, die_type: DieType, face_index: int) -> str:
        """Glyph string for a face, e.g. ``sa`` for success + advantage."""
        vector = self.face_symbols(die_type, face_index)
        implied = {
            _IMPLIED[symbol] for symbol in _IMPLIED if vector[symbol]
        }
        label = []
        for symbol in Symbol:
            count = vector[symbol] - (1 if symbol in implied else 0)
            label.append(self.glyphs[symbol] * count)
        return "".join(label)


STARWARS = SymbolTable(
    name="starwars",
    check_font=_SWRPG_FONT,
    glyphs=MappingProxyType(_SWRPG_GLYPHS),
)

GENESYS = SymbolTable(
    name="genesys",
    check_font="Genesys",
    glyphs=MappingProxyType(_GENESYS_GLYPHS),
)

DEFAULT_THEME = STARWARS.name

THEMES: Mapping[str, SymbolTable] = MappingProxyType({
    STARWARS.name: STARWARS,
    GENESYS.name: GENESYS,
})


def load_theme(name: str) -> SymbolTable:
    """
    Return the symbol table registered under a theme name.

    Raises:
        UnknownTheme: If no theme has that name
    """
    try:
        return THEMES[name]
    except KeyError:
        raise UnknownTheme(
            f"Unknown dice theme '{name}'. Available: {', '.join(sorted(THEMES))}."
        ) from None


def resolve_theme(name: str | None) -> SymbolTable:
    """Load a theme, falling back to the default one with a warning."""
    if not name:
        return THEMES[DEFAULT_THEME]
    try:
        return load_theme(name)
    except UnknownTheme:
        logger.warning("Unknown dice theme %r, falling back to %r", name, DEFAULT_THEME)
        return THEMES[DEFAULT_THEME]
