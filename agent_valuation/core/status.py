"""
Survival status for economic agents.

Health labels derived from remaining balance as a percentage of initial
capital.
"""

from enum import Enum


class SurvivalStatus(Enum):
    """Agent health based on balance relative to initial capital."""
    THRIVING = "thriving"      # >= 80% of initial, or in profit
    STABLE = "stable"          # 40-80%
    STRUGGLING = "struggling"  # 10-40%
    CRITICAL = "critical"      # above 0, below 10%
    BANKRUPT = "bankrupt"      # <= 0

    @classmethod
    def from_balance(cls, current_balance: float, initial_balance: float) -> "SurvivalStatus":
        """Calculate survival status from current and initial balance.

        Buckets partition the percentage line at 0, 10, 40 and 80: each
        lower bound belongs to the healthier bucket, except 0 which is
        Bankrupt.

        Args:
            current_balance: Current remaining balance
            initial_balance: Starting balance

        Returns:
            SurvivalStatus for the percentage remaining
        """
        if initial_balance <= 0:
            # No meaningful percentage without positive starting capital
            return cls.BANKRUPT if current_balance <= 0 else cls.THRIVING

        percentage = (current_balance / initial_balance) * 100.0

        if percentage <= 0:
            return cls.BANKRUPT
        if percentage < 10:
            return cls.CRITICAL
        if percentage < 40:
            return cls.STRUGGLING
        if percentage < 80:
            return cls.STABLE
        return cls.THRIVING

    @classmethod
    def default(cls) -> "SurvivalStatus":
        return cls.STABLE

    def is_operational(self) -> bool:
        """Check if the agent can still operate (not bankrupt)."""
        return self is not SurvivalStatus.BANKRUPT

    def needs_intervention(self) -> bool:
        """Check if the agent needs urgent attention."""
        return self in (SurvivalStatus.CRITICAL, SurvivalStatus.BANKRUPT)

    @property
    def emoji(self) -> str:
        return _EMOJI[self]

    @property
    def ansi_color(self) -> str:
        """ANSI color escape for terminal output."""
        return _ANSI_COLORS[self]

    def __str__(self) -> str:
        return self.value.capitalize()


_EMOJI = {
    SurvivalStatus.THRIVING: "🌟",
    SurvivalStatus.STABLE: "✅",
    SurvivalStatus.STRUGGLING: "⚠️",
    SurvivalStatus.CRITICAL: "🚨",
    SurvivalStatus.BANKRUPT: "💀",
}

_ANSI_COLORS = {
    SurvivalStatus.THRIVING: "\x1b[32m",    # green
    SurvivalStatus.STABLE: "\x1b[34m",      # blue
    SurvivalStatus.STRUGGLING: "\x1b[33m",  # yellow
    SurvivalStatus.CRITICAL: "\x1b[31m",    # red
    SurvivalStatus.BANKRUPT: "\x1b[35m",    # magenta
}
