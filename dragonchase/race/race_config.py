"""
dragonchase/race/race_config.py

Tunable constants for the dragon race, gathered in one configuration record.

The grace threshold and ratio bands are behavioural contracts: the defaults
below must stay exactly as they are unless the board is deliberately re-tuned.
"""

from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------
DRAGON_EXPONENT: float = 1.3        # > 1: slow start, accelerating finish
DRAGON_CEILING_PCT: float = 90.0    # dragon stops short of 100 % (rescue zone)
BONUS_POINTS: float = 0
GRACE_THRESHOLD_PCT: float = 5.0    # dragon below this -> everyone is safe
SAFE_RATIO: float = 0.9
AT_RISK_RATIO: float = 0.6
DANGER_ZONE_LEAD_PCT: float = 8.0   # red zone reaches past the dragon's head
FINISH_ZONE_PCT: float = 10.0


@dataclass(frozen=True)
class RaceConfig:
    """Configuration for pursuer pacing, scoring bonus, and danger bands.

    Attributes:
        exponent:             Power applied to elapsed course time.
        ceiling:              Pursuer position (percent) at and after the end instant.
        bonus_points:         Fixed bonus added to every student and to the maximum.
        grace_threshold_pct:  Pursuer position below which every student is safe.
        safe_ratio:           student/pursuer ratio at or above which a student is safe.
        at_risk_ratio:        Ratio at or above which a student is at risk (else caught).
        danger_zone_lead_pct: How far past the pursuer the danger zone extends.
        finish_zone_pct:      Width reserved for the finish area on the board.
    """

    exponent: float = DRAGON_EXPONENT
    ceiling: float = DRAGON_CEILING_PCT
    bonus_points: float = BONUS_POINTS
    grace_threshold_pct: float = GRACE_THRESHOLD_PCT
    safe_ratio: float = SAFE_RATIO
    at_risk_ratio: float = AT_RISK_RATIO
    danger_zone_lead_pct: float = DANGER_ZONE_LEAD_PCT
    finish_zone_pct: float = FINISH_ZONE_PCT

    def __post_init__(self) -> None:
        if self.exponent <= 0:
            raise ValueError(f"exponent must be positive, got {self.exponent!r}")
        if not 0 < self.ceiling <= 100:
            raise ValueError(f"ceiling must be in (0, 100], got {self.ceiling!r}")
        if self.bonus_points < 0:
            raise ValueError(f"bonus_points must be >= 0, got {self.bonus_points!r}")
        if not 0 <= self.at_risk_ratio <= self.safe_ratio:
            raise ValueError(
                "ratio bands must satisfy 0 <= at_risk_ratio <= safe_ratio, "
                f"got at_risk_ratio={self.at_risk_ratio!r}, safe_ratio={self.safe_ratio!r}"
            )
