"""
Destiny Dice - Input Validation Utilities

Provides validation functions for engine inputs. All validators
either return validated data or raise descriptive ValueError exceptions.
"""

from src.engine.base import TIER_PAIRS, DieType


def validate_count(count: int, name: str = "Dice count") -> int:
    """
    Validate a non-negative count.

    Args:
        count: Count to validate
        name: Label used in the error message

    Returns:
        Validated count

    Raises:
        ValueError: If count is not a non-negative integer
    """
    if not isinstance(count, int) or isinstance(count, bool):
        raise ValueError(f"{name} must be an integer, got {type(count).__name__}.")

    if count < 0:
        raise ValueError(f"{name} cannot be negative, got {count}.")

    return count


def validate_die_type(die_type: DieType) -> DieType:
    """Ensure a value is a DieType member."""
    if not isinstance(die_type, DieType):
        raise ValueError(f"Expected a DieType, got {type(die_type).__name__}.")
    return die_type


def validate_tier_pair(
    lower: DieType,
    higher: DieType | None = None,
) -> tuple[DieType, DieType]:
    """
    Validate an upgrade pairing.

    Args:
        lower: Lower tier die (Ability or Difficulty)
        higher: Higher tier die, defaults to the paired one

    Returns:
        The validated (lower, higher) pair

    Raises:
        ValueError: If the dice are not a tier pair
    """
    validate_die_type(lower)
    if lower not in TIER_PAIRS:
        raise ValueError(
            f"{lower.name} has no higher tier. "
            f"Only {', '.join(d.name for d in TIER_PAIRS)} can be upgraded."
        )

    expected = TIER_PAIRS[lower]
    if higher is None:
        return lower, expected

    validate_die_type(higher)
    if higher is not expected:
        raise ValueError(
            f"{lower.name} pairs with {expected.name}, not {higher.name}."
        )
    return lower, higher


def validate_rating(value: int, name: str, maximum: int = 6) -> int:
    """
    Validate a characteristic or skill rank.

    Raises:
        ValueError: If value is outside 0..maximum
    """
    validate_count(value, name)
    if value > maximum:
        raise ValueError(f"{name} must be at most {maximum}, got {value}.")
    return value
