"""
Display metadata for action log entries.

The domain ActionType carries no presentation attributes; front ends look up
labels and icon names here.
"""
from typing import Dict, NamedTuple

from ..models import ActionType, GameAction


class ActionStyle(NamedTuple):
    label: str
    icon: str
    tone: str  # semantic color role, resolved by the front end theme


ACTION_STYLES: Dict[ActionType, ActionStyle] = {
    ActionType.TEAM_GOAL: ActionStyle("Goal", "soccerball.circle.fill", "success"),
    ActionType.TEAM_GOAL_WITH_ASSIST: ActionStyle("Goal", "soccerball.circle.fill", "success"),
    ActionType.UNKNOWN_GOAL: ActionStyle("Goal", "questionmark.circle.fill", "secondary"),
    ActionType.OPPONENT_GOAL: ActionStyle("Opponent Goal", "soccerball.circle", "error"),
    ActionType.YELLOW_CARD: ActionStyle("Yellow Card", "square.fill", "warning"),
    ActionType.RED_CARD: ActionStyle("Red Card", "square.fill", "error"),
    ActionType.SAVE: ActionStyle("Save", "hand.raised.fill", "primary"),
    ActionType.SHOT: ActionStyle("Shot", "scope", "secondary"),
}

SUFFIXES = {
    ActionType.YELLOW_CARD: "Yellow Card",
    ActionType.RED_CARD: "Red Card",
    ActionType.SAVE: "Save",
    ActionType.SHOT: "Shot",
}


def _player_label(name: str, number) -> str:
    return f"#{number} {name}" if number is not None else name


def describe_action(action: GameAction) -> str:
    """One-line narrative for an action, e.g. '#9 Sam scored (assist: #7 Alex)'."""
    actor = _player_label(action.player_name, action.player_number)

    if action.action_type is ActionType.UNKNOWN_GOAL:
        return "Unknown player scored"
    if action.action_type is ActionType.OPPONENT_GOAL:
        return f"{action.player_name} scored"
    if action.action_type in SUFFIXES:
        return f"{actor} - {SUFFIXES[action.action_type]}"

    text = f"{actor} scored"
    if action.action_type is ActionType.TEAM_GOAL_WITH_ASSIST and action.assist_player_name:
        assist = _player_label(action.assist_player_name, action.assist_player_number)
        text += f" (assist: {assist})"
    return text


def timeline_entry(action: GameAction) -> str:
    """Action prefixed with its half and clock, e.g. '2nd 12:30 #9 Sam scored'."""
    return f"{action.half.short_name} {action.time_string()} {describe_action(action)}"
