from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from loguru import logger

from utils.constants.paths import ANALYSIS_SETTINGS_FILE
from utils.constants.presets import GamePreset, GameType, game_preset, tournament_preset
from utils.deck_models import DrawRules, MulliganConfig, TournamentConfig


@dataclass(frozen=True)
class AnalysisSettings:
    """Game format, hand and event parameters for one analysis run."""

    game: GameType = GameType.YUGIOH
    deck_size: int = 40
    starting_hand_size: int = 5
    going_second: bool = False
    mulligan: MulliganConfig = field(default_factory=MulliganConfig)
    tournament: TournamentConfig = field(default_factory=TournamentConfig)

    @property
    def preset(self) -> GamePreset:
        return game_preset(self.game)

    def draw_rules(self) -> DrawRules:
        return self.preset.draw_rules(self.starting_hand_size)


class SettingsService:
    """Load analysis settings from a JSON file, falling back to preset defaults."""

    def __init__(self, settings_path: Path | None = None) -> None:
        self.settings_path = settings_path or ANALYSIS_SETTINGS_FILE

    def load(self) -> dict[str, Any]:
        if not self.settings_path.exists():
            return {}
        try:
            with self.settings_path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning(f"Failed to load analysis settings: {exc}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring analysis settings: expected an object, got {type(data)}")
            return {}
        return data

    def load_analysis_settings(self) -> AnalysisSettings:
        return self.parse(self.load())

    @classmethod
    def parse(cls, raw: dict[str, Any]) -> AnalysisSettings:
        try:
            preset = game_preset(raw.get("game", GameType.YUGIOH.value))
        except KeyError as exc:
            logger.warning(f"{exc}; using {GameType.YUGIOH.value}")
            preset = game_preset(GameType.YUGIOH)

        deck_size = cls.clamp_int(
            raw.get("deck_size"),
            default=preset.default_deck_size,
            minimum=preset.min_deck_size,
            maximum=preset.max_deck_size,
        )
        starting_hand_size = cls.clamp_int(
            raw.get("starting_hand_size"),
            default=preset.starting_hand_size,
            minimum=0,
            maximum=deck_size,
        )

        return AnalysisSettings(
            game=preset.game,
            deck_size=deck_size,
            starting_hand_size=starting_hand_size,
            going_second=cls.coerce_bool(raw.get("going_second", False)),
            mulligan=cls._parse_mulligan(raw.get("mulligan"), preset),
            tournament=cls._parse_tournament(raw.get("tournament")),
        )

    @classmethod
    def _parse_mulligan(cls, value: Any, preset: GamePreset) -> MulliganConfig:
        defaults = MulliganConfig.for_preset(preset)
        if not isinstance(value, dict):
            return defaults
        return MulliganConfig(
            enabled=cls.coerce_bool(value.get("enabled", defaults.enabled)),
            mulligan_type=str(value.get("type", defaults.mulligan_type)),
            keep_role=str(value.get("keep_role", defaults.keep_role)),
            keep_min=cls.clamp_int(value.get("keep_min"), default=defaults.keep_min, minimum=0),
            max_mulligans=cls.clamp_int(
                value.get("max_mulligans"), default=defaults.max_mulligans, minimum=0
            ),
        )

    @classmethod
    def _parse_tournament(cls, value: Any) -> TournamentConfig:
        defaults = TournamentConfig()
        if not isinstance(value, dict):
            return defaults

        rounds_default = defaults.rounds
        preset_name = value.get("preset")
        if isinstance(preset_name, str):
            preset = tournament_preset(preset_name)
            if preset is None:
                logger.warning(f"Unknown tournament preset: {preset_name}")
            else:
                rounds_default = preset.rounds

        rounds = cls.clamp_int(value.get("rounds"), default=rounds_default, minimum=0)
        return TournamentConfig(
            rounds=rounds,
            top_cut_threshold=cls.clamp_int(
                value.get("top_cut_threshold"),
                default=min(defaults.top_cut_threshold, rounds),
                minimum=0,
                maximum=rounds,
            ),
            g1_going_first=cls.coerce_bool(value.get("g1_going_first", defaults.g1_going_first)),
            sideboard_variance=cls.clamp_float(
                value.get("sideboard_variance"),
                default=defaults.sideboard_variance,
                minimum=0.0,
                maximum=1.0,
            ),
            brick_sensitivity=cls.coerce_bool(
                value.get("brick_sensitivity", defaults.brick_sensitivity)
            ),
            stamina_factor=cls.coerce_bool(value.get("stamina_factor", defaults.stamina_factor)),
        )

    @staticmethod
    def coerce_bool(value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return bool(value)

    @staticmethod
    def clamp_int(
        value: Any,
        *,
        default: int,
        minimum: int,
        maximum: int | None = None,
    ) -> int:
        try:
            number = int(float(value))
        except (TypeError, ValueError, OverflowError):
            number = default
        if maximum is not None:
            number = min(number, maximum)
        return max(minimum, number)

    @staticmethod
    def clamp_float(value: Any, *, default: float, minimum: float, maximum: float) -> float:
        try:
            number = float(value)
        except (TypeError, ValueError):
            number = default
        return max(minimum, min(number, maximum))


__all__ = ["AnalysisSettings", "SettingsService"]
