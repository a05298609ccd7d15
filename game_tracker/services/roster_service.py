"""
Roster service for the Soccer Game Tracker.

This module manages the player pool, its starting lineup/bench split and the
team settings, enforcing the goalkeeper and lineup capacity rules. Rule
violations come back as declinable results so the caller can offer an
alternative (for example "add as substitute instead").
"""
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Iterable, List, Optional

from ..models import Player, Position, TeamFormat
from ..utils.constants import (
    DEFAULT_HOME_TEAM_NAME, HOME_TEAM_NAME_KEY, IS_HOME_TEAM_KEY, ROSTER_KEY,
    TEAM_FORMAT_KEY,
)
from .persistence_service import PersistenceService

if TYPE_CHECKING:
    from .lifecycle_service import GameLifecycleManager

logger = logging.getLogger(__name__)


class RosterOutcome(Enum):
    """Outcome of a roster mutation."""
    OK = "ok"
    NOT_FOUND = "not_found"
    GOALKEEPER_LIMIT = "goalkeeper_limit"
    GOALKEEPER_REQUIRED = "goalkeeper_required"
    SWAP_REQUIRED = "swap_required"
    LINEUP_FULL = "lineup_full"


MESSAGES = {
    RosterOutcome.NOT_FOUND: "Player not found in roster",
    RosterOutcome.GOALKEEPER_LIMIT: "You can only have one Goalkeeper in the starting lineup.",
    RosterOutcome.GOALKEEPER_REQUIRED: "The starting lineup needs its Goalkeeper.",
    RosterOutcome.SWAP_REQUIRED: "A starting Goalkeeper already exists; swap goalkeepers instead.",
    RosterOutcome.LINEUP_FULL: "The starting lineup is full.",
}


@dataclass
class RosterResult:
    """Result of a roster operation with the affected player, if any."""
    outcome: RosterOutcome
    player: Optional[Player] = None

    @property
    def ok(self) -> bool:
        return self.outcome is RosterOutcome.OK

    @property
    def message(self) -> str:
        return MESSAGES.get(self.outcome, "")


class RosterService:
    """
    Service for the team roster and team settings.

    Every successful mutation is persisted immediately. The lifecycle manager
    handle, when given, receives display-field updates for the live game; it is
    not owned by the roster.
    """

    def __init__(
        self,
        persistence_service: Optional[PersistenceService] = None,
        game_manager: Optional["GameLifecycleManager"] = None,
    ):
        """
        Initialize RosterService and load saved roster and settings.

        Args:
            persistence_service: Storage for roster and settings
            game_manager: Lifecycle manager notified of player edits
        """
        self.persistence_service = persistence_service or PersistenceService()
        self.game_manager = game_manager
        self.roster: List[Player] = []
        self.team_format: TeamFormat = TeamFormat.ELEVEN_V_ELEVEN
        self.home_team_name: str = DEFAULT_HOME_TEAM_NAME
        self.is_home_team: bool = True
        self._load()

    # ---------- Queries ---------- #

    @property
    def starters(self) -> List[Player]:
        return [p for p in self.roster if not p.is_substitute]

    @property
    def substitutes(self) -> List[Player]:
        return [p for p in self.roster if p.is_substitute]

    def get_player(self, player_id: str) -> Optional[Player]:
        """Get player by id."""
        for player in self.roster:
            if player.id == player_id:
                return player
        return None

    def starting_goalkeepers(self) -> List[Player]:
        return [p for p in self.roster if p.is_starting_goalkeeper]

    def can_add_goalkeeper(self, ignoring_id: Optional[str] = None) -> bool:
        """True if no starter other than ``ignoring_id`` plays Goalkeeper."""
        return not any(p.id != ignoring_id for p in self.starting_goalkeepers())

    def is_starting_lineup_full(self) -> bool:
        return len(self.starters) >= self.team_format.max_players

    # ---------- Player management ---------- #

    def add_player(
        self,
        name: str,
        number: int,
        position: Position,
        is_substitute: Optional[bool] = None,
    ) -> RosterResult:
        """
        Add a new player.

        Args:
            name: Display name
            number: Jersey number
            position: Nominal position
            is_substitute: Bench flag; when omitted the player starts unless
                the lineup is full

        Returns:
            RosterResult with the new player, or LINEUP_FULL / GOALKEEPER_LIMIT
        """
        if is_substitute is None:
            is_substitute = self.is_starting_lineup_full()
        elif not is_substitute and self.is_starting_lineup_full():
            return RosterResult(RosterOutcome.LINEUP_FULL)

        if position is Position.GOALKEEPER and not is_substitute and not self.can_add_goalkeeper():
            return RosterResult(RosterOutcome.GOALKEEPER_LIMIT)

        player = Player(name=name.strip(), number=int(number), position=position,
                        is_substitute=is_substitute)
        self.roster.append(player)
        self._save_roster()
        logger.info("Added #%d %s (%s%s)", player.number, player.name, position.abbreviation,
                    ", substitute" if is_substitute else "")
        return RosterResult(RosterOutcome.OK, player)

    def update_player(self, player: Player) -> RosterResult:
        """
        Replace a player's details by id.

        Returns:
            RosterResult with the stored player, or the rule that blocked it
        """
        index = self._index_of(player.id)
        if index is None:
            logger.warning("Cannot update unknown player %s", player.id)
            return RosterResult(RosterOutcome.NOT_FOUND)

        current = self.roster[index]
        blocked = self._check_update(current, player)
        if blocked is not None:
            return RosterResult(blocked, current)

        updated = replace(player)
        self.roster[index] = updated
        self._save_roster()
        self._sync(updated)
        return RosterResult(RosterOutcome.OK, updated)

    def remove_players(self, player_ids: Iterable[str]) -> RosterResult:
        """
        Remove players by id.

        Refuses the whole removal if it would take away the last starting
        Goalkeeper. Unknown ids are ignored.
        """
        ids = set(player_ids)
        remaining = [p for p in self.roster if p.id not in ids]
        if len(remaining) == len(self.roster):
            return RosterResult(RosterOutcome.NOT_FOUND)

        had_goalkeeper = bool(self.starting_goalkeepers())
        if had_goalkeeper and not any(p.is_starting_goalkeeper for p in remaining):
            return RosterResult(RosterOutcome.GOALKEEPER_REQUIRED)

        self.roster = remaining
        self._save_roster()
        return RosterResult(RosterOutcome.OK)

    def swap_goalkeepers(self, incoming: Player) -> RosterResult:
        """
        Make ``incoming`` the starting Goalkeeper and bench the current one.

        Both changes land in a single replacement of the roster list. The
        incoming player's edited name and number are kept.
        """
        index = self._index_of(incoming.id)
        if index is None:
            logger.warning("Cannot swap in unknown player %s", incoming.id)
            return RosterResult(RosterOutcome.NOT_FOUND)

        outgoing = [p for p in self.starting_goalkeepers() if p.id != incoming.id]
        if not outgoing and self.roster[index].is_substitute and self.is_starting_lineup_full():
            return RosterResult(RosterOutcome.LINEUP_FULL)

        promoted = replace(incoming, position=Position.GOALKEEPER, is_substitute=False)
        changed = [promoted]
        new_roster: List[Player] = []
        for player in self.roster:
            if player.id == promoted.id:
                new_roster.append(promoted)
            elif player.is_starting_goalkeeper:
                benched = replace(player, is_substitute=True)
                new_roster.append(benched)
                changed.append(benched)
            else:
                new_roster.append(player)

        self.roster = new_roster
        self._save_roster()
        for player in changed:
            self._sync(player)
        logger.info("Swapped goalkeepers: #%d %s now starting", promoted.number, promoted.name)
        return RosterResult(RosterOutcome.OK, promoted)

    # ---------- Team settings ---------- #

    def set_team_format(self, team_format: TeamFormat) -> None:
        self.team_format = team_format
        self.persistence_service.save(TEAM_FORMAT_KEY, team_format.value)

    def set_home_team_name(self, name: str) -> None:
        self.home_team_name = name
        self.persistence_service.save(HOME_TEAM_NAME_KEY, name)

    def set_is_home_team(self, is_home_team: bool) -> None:
        self.is_home_team = is_home_team
        self.persistence_service.save(IS_HOME_TEAM_KEY, is_home_team)

    # ---------- Internal helpers ---------- #

    def _index_of(self, player_id: str) -> Optional[int]:
        for index, player in enumerate(self.roster):
            if player.id == player_id:
                return index
        return None

    def _check_update(self, current: Player, updated: Player) -> Optional[RosterOutcome]:
        """Return the rule an update would break, or None."""
        if current.is_starting_goalkeeper and not updated.is_starting_goalkeeper:
            if len(self.starting_goalkeepers()) == 1:
                return RosterOutcome.GOALKEEPER_REQUIRED

        if updated.is_starting_goalkeeper and not self.can_add_goalkeeper(ignoring_id=updated.id):
            if current.is_substitute:
                return RosterOutcome.SWAP_REQUIRED
            return RosterOutcome.GOALKEEPER_LIMIT

        if current.is_substitute and not updated.is_substitute and self.is_starting_lineup_full():
            return RosterOutcome.LINEUP_FULL

        return None

    def _sync(self, player: Player) -> None:
        if self.game_manager is not None:
            self.game_manager.sync_player_to_game(player)

    def _save_roster(self) -> None:
        self.persistence_service.save(ROSTER_KEY, [p.to_dict() for p in self.roster])

    def _load(self) -> None:
        raw_roster = self.persistence_service.load(ROSTER_KEY)
        if isinstance(raw_roster, list):
            migrated = False
            for data in raw_roster:
                try:
                    migrated = migrated or Player.is_legacy_record(data)
                    self.roster.append(Player.from_dict(data))
                except (KeyError, ValueError, TypeError, AttributeError) as e:
                    logger.warning("Skipping unreadable roster entry: %s", e)
            if migrated:
                logger.info("Migrated legacy substitute positions in saved roster")
                self._save_roster()

        raw_format = self.persistence_service.load(TEAM_FORMAT_KEY)
        if raw_format is not None:
            try:
                self.team_format = TeamFormat(raw_format)
            except ValueError:
                logger.warning("Ignoring unknown team format %r", raw_format)

        name = self.persistence_service.load(HOME_TEAM_NAME_KEY)
        if isinstance(name, str):
            self.home_team_name = name

        is_home = self.persistence_service.load(IS_HOME_TEAM_KEY)
        if isinstance(is_home, bool):
            self.is_home_team = is_home
