"""Game-format presets, default roles and Swiss event sizes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from utils.deck_models import DrawRules


class GameType(Enum):
    """Supported card games; ``CUSTOM`` leaves every limit to the user."""

    YUGIOH = "Yu-Gi-Oh!"
    MTG = "Magic: The Gathering"
    POKEMON = "Pokémon TCG"
    ONE_PIECE = "One Piece TCG"
    CUSTOM = "Custom"


@dataclass(frozen=True)
class GamePreset:
    """Deck-size bounds, opening hand and turn-one draw rules for one game."""

    game: GameType
    default_deck_size: int
    min_deck_size: int
    max_deck_size: int
    starting_hand_size: int
    draw_on_turn_one_first: bool
    draw_on_turn_one_second: bool
    mulligan_type: str

    def draw_rules(self, starting_hand_size: int | None = None) -> DrawRules:
        hand = self.starting_hand_size if starting_hand_size is None else starting_hand_size
        return DrawRules(
            starting_hand_size=hand,
            draw_on_turn_one_first=self.draw_on_turn_one_first,
            draw_on_turn_one_second=self.draw_on_turn_one_second,
        )


GAME_PRESETS: dict[GameType, GamePreset] = {
    GameType.YUGIOH: GamePreset(
        game=GameType.YUGIOH,
        default_deck_size=40,
        min_deck_size=40,
        max_deck_size=60,
        starting_hand_size=5,
        draw_on_turn_one_first=False,
        draw_on_turn_one_second=True,
        mulligan_type="none",
    ),
    GameType.MTG: GamePreset(
        game=GameType.MTG,
        default_deck_size=60,
        min_deck_size=60,
        max_deck_size=300,
        starting_hand_size=7,
        draw_on_turn_one_first=False,
        draw_on_turn_one_second=True,
        mulligan_type="mtg",
    ),
    GameType.POKEMON: GamePreset(
        game=GameType.POKEMON,
        default_deck_size=60,
        min_deck_size=60,
        max_deck_size=60,
        starting_hand_size=7,
        draw_on_turn_one_first=True,
        draw_on_turn_one_second=True,
        mulligan_type="pokemon",
    ),
    GameType.ONE_PIECE: GamePreset(
        game=GameType.ONE_PIECE,
        default_deck_size=50,
        min_deck_size=50,
        max_deck_size=50,
        starting_hand_size=5,
        draw_on_turn_one_first=False,
        draw_on_turn_one_second=True,
        mulligan_type="one-piece",
    ),
    GameType.CUSTOM: GamePreset(
        game=GameType.CUSTOM,
        default_deck_size=40,
        min_deck_size=1,
        max_deck_size=1000,
        starting_hand_size=5,
        draw_on_turn_one_first=False,
        draw_on_turn_one_second=True,
        mulligan_type="none",
    ),
}

DEFAULT_ROLES = ("Starter", "Extender", "Brick", "Defensive", "Utility")
BRICK_ROLE = "Brick"


@dataclass(frozen=True)
class TournamentPreset:
    """Typical Swiss event sizes with recommended brick and playable-hand rates."""

    name: str
    players: int
    rounds: int
    recommended_brick: float
    recommended_playable: float


TOURNAMENT_PRESETS = (
    TournamentPreset(
        "Locals", players=50, rounds=5, recommended_brick=0.15, recommended_playable=0.80
    ),
    TournamentPreset(
        "Regionals", players=500, rounds=9, recommended_brick=0.10, recommended_playable=0.85
    ),
    TournamentPreset(
        "YCS/Pro Tour", players=1500, rounds=12, recommended_brick=0.05, recommended_playable=0.90
    ),
)


def game_preset(game: GameType | str) -> GamePreset:
    """Look up a preset by ``GameType``, enum name or display value."""
    if isinstance(game, GameType):
        return GAME_PRESETS[game]
    for game_type in GameType:
        if game in (game_type.name, game_type.value):
            return GAME_PRESETS[game_type]
    raise KeyError(f"Unknown game type: {game}")


def tournament_preset(name: str) -> TournamentPreset | None:
    lowered = name.strip().lower()
    for preset in TOURNAMENT_PRESETS:
        if preset.name.lower() == lowered:
            return preset
    return None
