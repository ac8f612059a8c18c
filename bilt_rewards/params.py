"""Card variants, display periods and card spend inputs."""

from dataclasses import dataclass
from enum import Enum

YEARLY_MULTIPLIER = 12


class CardVariant(str, Enum):
    BLUE = "blue"
    OBSIDIAN = "obsidian"
    PALLADIUM = "palladium"

    @property
    def display_name(self) -> str:
        return f"Bilt {self.value.capitalize()}"


class BonusCategory(str, Enum):
    """Obsidian-only choice of the 3X category."""

    DINING = "dining"
    GROCERY = "grocery"


class TimePeriod(str, Enum):
    MONTHLY = "monthly"
    YEARLY = "yearly"


def period_multiplier(period: TimePeriod) -> int:
    """Factor applied to recurring monthly amounts for the given display period."""
    return YEARLY_MULTIPLIER if period == TimePeriod.YEARLY else 1


SPEND_CATEGORIES = ("dining", "grocery", "travel", "other")


@dataclass
class SpendInputs:
    """Card spend per category (USD)."""

    dining: float = 0.0
    grocery: float = 0.0
    travel: float = 0.0
    other: float = 0.0

    @property
    def total(self) -> float:
        return self.dining + self.grocery + self.travel + self.other

    def scaled(self, multiplier: float) -> "SpendInputs":
        return SpendInputs(
            dining=self.dining * multiplier,
            grocery=self.grocery * multiplier,
            travel=self.travel * multiplier,
            other=self.other * multiplier,
        )
