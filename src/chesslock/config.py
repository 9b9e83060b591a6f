"""Tunable settings for the heuristic opponent and its scheduler."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class EngineSettings:
    """All opponent-related settings."""

    # Thinking delay
    think_delay_min_ms: int = 800
    think_delay_max_ms: int = 1500

    # Balanced mix tier
    mix_probability: float = 0.5
    mix_capture_probability: float = 0.6

    # Heuristic thresholds
    minor_piece_value: int = 3
    king_move_bonus: int = 100
    near_king_distance: int = 2

    # Reproducibility
    seed: int | None = None

    def validate(self) -> None:
        """Raise :class:`ValueError` if the settings are inconsistent."""
        if self.think_delay_min_ms < 0:
            raise ValueError("think_delay_min_ms must be non-negative")
        if self.think_delay_max_ms < self.think_delay_min_ms:
            raise ValueError("think_delay_max_ms must be >= think_delay_min_ms")
        for name in ("mix_probability", "mix_capture_probability"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")
        if self.minor_piece_value <= 0:
            raise ValueError("minor_piece_value must be positive")
        if self.near_king_distance < 1:
            raise ValueError("near_king_distance must be at least 1")
