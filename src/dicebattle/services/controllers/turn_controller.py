"""UI-agnostic turn controller driving the combat state machine."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Literal

from dicebattle.core.rng import RNG
from dicebattle.core.types import DIE_SIDES, CombatPhase
from dicebattle.domain.action_grid import ActionGrid
from dicebattle.domain.combat_models import CombatantView, CombatSession, CombatView, TokenView
from dicebattle.domain.combatant import Combatant, EnemyCombatant, PlayerCombatant
from dicebattle.domain.deck import Deck
from dicebattle.domain.defs import CombatConfig
from dicebattle.domain.errors import HandInvariantError
from dicebattle.domain.events import (
    ActionPhaseEndedEvent,
    ActionPhaseStartedEvent,
    AllEnemiesDefeatedEvent,
    CombatSetupCompleteEvent,
    DieResolvedEvent,
    EnemyActionResolvedEvent,
    EnemyDefeatedEvent,
    EnemySpawnedEvent,
    EnemyTurnEndedEvent,
    EnemyTurnStartedEvent,
    EventBus,
    PhaseChangedEvent,
    PlayerDefeatedEvent,
    PlayerTurnStartedEvent,
    SetupFailedEvent,
    TokenPlacedEvent,
    TokenReclaimedEvent,
)
from dicebattle.domain.hand import Hand
from dicebattle.domain.tokens import TokenInstance
from dicebattle.services.action_resolver import ActionResolver
from dicebattle.services.enemy_ai import EnemyAI
from dicebattle.services.errors import CombatSetupError, FactoryError
from dicebattle.services.factories.enemy_factory import create_enemy_combatant

logger = logging.getLogger(__name__)

RejectReason = Literal[
    "occupied",
    "insufficient_mana",
    "hand_full",
    "not_player_turn",
    "unknown_token",
    "invalid_slot",
    "not_on_grid",
]


@dataclass(frozen=True, slots=True)
class PlacementResult:
    """Outcome of an input request; rejected requests leave state unchanged."""

    accepted: bool
    reason: RejectReason | None = None

    @classmethod
    def ok(cls) -> "PlacementResult":
        return cls(accepted=True)

    @classmethod
    def rejected(cls, reason: RejectReason) -> "PlacementResult":
        return cls(accepted=False, reason=reason)


def validate_combat_config(config: CombatConfig) -> List[str]:
    """Return human-readable problems that prevent a combat from starting."""
    problems: List[str] = []
    if not config.enemies:
        problems.append("enemy roster is empty")
    if config.player_health <= 0:
        problems.append("player_health must be positive")
    if config.player_max_mana < 0:
        problems.append("player_max_mana cannot be negative")
    if config.hand_size <= 0:
        problems.append("hand_size must be positive")
    if config.grid_size <= 0:
        problems.append("grid_size must be positive")
    for token_def in config.deck:
        if type(token_def.sides) is not int or token_def.sides not in DIE_SIDES:
            problems.append(f"token '{token_def.id}' has unsupported sides {token_def.sides}")
        if token_def.mana_cost < 0:
            problems.append(f"token '{token_def.id}' has negative mana_cost")
    for enemy_def in config.enemies:
        if enemy_def.max_health <= 0:
            problems.append(f"enemy '{enemy_def.id}' must have positive max_health")
        if enemy_def.max_attack < enemy_def.min_attack:
            problems.append(f"enemy '{enemy_def.id}' has an empty attack range")
        if enemy_def.max_block < enemy_def.min_block:
            problems.append(f"enemy '{enemy_def.id}' has an empty block range")
    return problems


class TurnController:
    """
    Orchestrates one combat run: player turns, dice resolution and enemy turns.

    Phase sequence::

        setup_combat -> player_turn_start -> player_action_phase
          -> enemy_turn -> enemy_turn_resolved
          -> player_turn_start | enemy_defeated | player_defeated
        enemy_defeated -> setup_next_enemy -> player_turn_start
                        | all_enemies_defeated

    Every transition runs synchronously. The only wait is in
    ``player_action_phase`` for an external ``submit_turn()`` call.

    Non-responsibilities (handled by presentation collaborators):
    - Rendering state or events
    - Capturing input or mapping drags to slots
    """

    def __init__(
        self,
        config: CombatConfig,
        *,
        player: PlayerCombatant,
        deck: Deck,
        hand: Hand,
        grid: ActionGrid,
        resolver: ActionResolver,
        enemy_ai: EnemyAI,
        rng: RNG,
        bus: EventBus,
    ) -> None:
        self._config = config
        self._deck = deck
        self._hand = hand
        self._grid = grid
        self._resolver = resolver
        self._enemy_ai = enemy_ai
        self._rng = rng
        self._bus = bus
        self._session = CombatSession(player=player, roster=tuple(config.enemies))

    # -----------------------
    # Accessors
    # -----------------------
    @property
    def session(self) -> CombatSession:
        return self._session

    @property
    def phase(self) -> CombatPhase:
        return self._session.phase

    @property
    def player(self) -> PlayerCombatant:
        return self._session.player

    @property
    def enemy(self) -> EnemyCombatant | None:
        return self._session.enemy

    @property
    def deck(self) -> Deck:
        return self._deck

    @property
    def hand(self) -> Hand:
        return self._hand

    @property
    def grid(self) -> ActionGrid:
        return self._grid

    @property
    def bus(self) -> EventBus:
        return self._bus

    @property
    def can_submit(self) -> bool:
        return self._session.can_submit and not self._session.resolving

    # -----------------------
    # Combat lifecycle
    # -----------------------
    def start_combat(self) -> None:
        """SetupCombat: validate configuration, reset the player, spawn the first enemy."""
        if self._session.phase != "idle":
            raise CombatSetupError(f"Combat already started (phase '{self._session.phase}').")
        self._set_phase("setup_combat")

        problems = validate_combat_config(self._config)
        if self._config.hand_size > self._hand.capacity:
            problems.append("hand_size exceeds hand capacity")
        if problems:
            self._fail_setup("; ".join(problems))

        config = self._config
        player = self._session.player
        player.initialize(config.player_health, config.player_health, config.player_max_mana, config.player_max_mana)
        self._session.enemy_index = 0
        self._session.turn_number = 0
        try:
            self._spawn_enemy(0)
        except FactoryError as exc:
            self._fail_setup(str(exc))

        assert self._session.enemy is not None
        logger.info("Combat set up against %d enemies.", len(self._session.roster))
        self._bus.publish(
            CombatSetupCompleteEvent(
                player_id=player.instance_id,
                enemy_names=[enemy_def.name for enemy_def in self._session.roster],
            )
        )
        self._start_player_turn()

    def submit_turn(self) -> bool:
        """PlayerActionPhase trigger. Returns False when the submission is rejected."""
        session = self._session
        if session.resolving:
            logger.warning("Turn submission ignored: resolution already in progress.")
            return False
        if session.phase != "player_action_phase" or not session.can_submit:
            logger.warning("Turn submission ignored in phase '%s'.", session.phase)
            return False

        session.resolving = True
        session.can_submit = False
        try:
            self._run_action_phase()
            self._run_enemy_turn()
            self._resolve_enemy_turn()
        finally:
            session.resolving = False
        return True

    # -----------------------
    # Input surface
    # -----------------------
    def request_place(self, token_id: str, grid_slot: int) -> PlacementResult:
        """Place a hand token (spending its mana) or move a grid token to ``grid_slot``."""
        if not self._accepting_input():
            return self._reject("not_player_turn", token_id)
        if not self._grid.is_valid_index(grid_slot):
            return self._reject("invalid_slot", token_id)

        token = self._hand.find(token_id)
        from_area = "hand"
        if token is None:
            token = self._grid.find(token_id)
            from_area = "grid"
        if token is None:
            return self._reject("unknown_token", token_id)

        occupant = self._grid.get(grid_slot)
        if occupant is token:
            return PlacementResult.ok()
        if occupant is not None:
            return self._reject("occupied", token_id)

        mana_spent = 0
        if from_area == "hand":
            cost = token.mana_cost
            if not self._session.player.spend_mana(cost):
                return self._reject("insufficient_mana", token_id)
            mana_spent = cost
            self._hand.take(token)
            self._grid.place(token, grid_slot)
        else:
            self._grid.move(token, grid_slot)

        self._check_exclusive(token)
        logger.debug("Placed %s in grid slot %d (mana spent %d).", token_id, grid_slot, mana_spent)
        self._bus.publish(
            TokenPlacedEvent(token_id=token_id, from_area=from_area, slot=grid_slot, mana_spent=mana_spent)
        )
        return PlacementResult.ok()

    def request_reclaim(self, token_id: str) -> PlacementResult:
        """Return a grid token to the first free hand slot, refunding its mana."""
        if not self._accepting_input():
            return self._reject("not_player_turn", token_id)

        token = self._grid.find(token_id)
        if token is None:
            reason: RejectReason = "not_on_grid" if self._hand.find(token_id) is not None else "unknown_token"
            return self._reject(reason, token_id)
        if self._hand.is_full:
            return self._reject("hand_full", token_id)

        self._grid.remove(token)
        self._hand.reclaim(token)
        refund = token.mana_cost
        self._session.player.gain_mana(refund)

        self._check_exclusive(token)
        assert token.location is not None
        self._bus.publish(
            TokenReclaimedEvent(token_id=token_id, hand_slot=token.location.index, mana_refunded=refund)
        )
        return PlacementResult.ok()

    # -----------------------
    # Views
    # -----------------------
    def get_combat_view(self) -> CombatView:
        """Return structured information for rendering."""
        session = self._session
        player = session.player
        enemy = session.enemy
        return CombatView(
            phase=session.phase,
            turn_number=session.turn_number,
            player=self._to_view(player),
            mana=player.mana,
            max_mana=player.max_mana,
            enemy=self._to_view(enemy) if enemy is not None else None,
            intent=enemy.intent if enemy is not None else None,
            hand=[self._token_view(index, token) for index, token in self._hand.occupied()],
            grid=[self._token_view(index, token) for index, token in self._grid.occupied()],
            hand_capacity=self._hand.capacity,
            grid_capacity=self._grid.capacity,
            draw_count=self._deck.draw_count,
            discard_count=self._deck.discard_count,
            can_submit=self.can_submit,
        )

    # -----------------------
    # Phases
    # -----------------------
    def _start_player_turn(self) -> None:
        session = self._session
        self._set_phase("player_turn_start")
        session.turn_number += 1
        player = session.player
        player.clear_block()
        player.refill_mana_to_max()
        if session.enemy is not None:
            self._enemy_ai.prepare_intent(session.enemy)

        drawn = self._hand.draw_new_hand(self._config.hand_size)
        logger.info("--- Player turn %d begun (%d tokens drawn) ---", session.turn_number, len(drawn))
        self._bus.publish(PlayerTurnStartedEvent(turn_number=session.turn_number, hand_size=len(drawn)))

        self._set_phase("player_action_phase")
        session.can_submit = True

    def _run_action_phase(self) -> None:
        session = self._session
        self._bus.publish(ActionPhaseStartedEvent(turn_number=session.turn_number))

        processed: List[TokenInstance] = []
        for slot, token in self._grid.resolution_order():
            token_def = token.definition
            self._bus.publish(
                DieResolvedEvent(
                    token_id=token.instance_id,
                    action=token_def.action,
                    target=token_def.target,
                    roll=token.roll,
                    source_slot=slot,
                )
            )
            self._resolver.resolve(
                token_def, token.roll, slot, session.player, session.enemy, token_id=token.instance_id
            )
            processed.append(token)

        for token in processed:
            self._grid.remove(token)
            self._deck.discard(token.definition)

        logger.info("Resolved %d placed tokens.", len(processed))
        self._bus.publish(ActionPhaseEndedEvent(resolved_count=len(processed)))

    def _run_enemy_turn(self) -> None:
        session = self._session
        self._set_phase("enemy_turn")
        enemy = session.enemy
        enemy_id = enemy.instance_id if enemy is not None else ""
        self._bus.publish(EnemyTurnStartedEvent(enemy_id=enemy_id))

        action = None
        magnitude = 0
        if enemy is not None and enemy.is_alive:
            enemy.clear_block()
            intent = enemy.intent
            self._enemy_ai.execute_intent(enemy, intent, session.player)
            if intent is not None:
                action = intent.action
                magnitude = intent.magnitude
        elif enemy is None:
            logger.warning("No current enemy to act.")

        self._bus.publish(EnemyActionResolvedEvent(enemy_id=enemy_id, action=action, magnitude=magnitude))
        self._bus.publish(EnemyTurnEndedEvent(enemy_id=enemy_id))
        self._set_phase("enemy_turn_resolved")

    def _resolve_enemy_turn(self) -> None:
        session = self._session
        # Player defeat is checked first: if both fall in one cycle, the player loses.
        if session.player.is_defeated:
            self._set_phase("player_defeated")
            session.can_submit = False
            logger.info("Player defeated on turn %d.", session.turn_number)
            self._bus.publish(PlayerDefeatedEvent(turn_number=session.turn_number))
            return

        if session.enemy is not None and session.enemy.is_defeated:
            self._handle_enemy_defeated()
            return

        self._start_player_turn()

    def _handle_enemy_defeated(self) -> None:
        session = self._session
        enemy = session.enemy
        assert enemy is not None
        self._set_phase("enemy_defeated")
        self._bus.publish(
            EnemyDefeatedEvent(
                enemy_id=enemy.instance_id,
                enemy_name=enemy.display_name,
                remaining=session.remaining_enemies,
            )
        )

        if not session.has_more_enemies:
            session.enemy = None
            session.enemy_index = len(session.roster)
            self._set_phase("all_enemies_defeated")
            session.can_submit = False
            logger.info("All enemies defeated on turn %d.", session.turn_number)
            self._bus.publish(AllEnemiesDefeatedEvent(turn_number=session.turn_number))
            return

        self._set_phase("setup_next_enemy")
        self._spawn_enemy(session.enemy_index + 1)
        self._start_player_turn()

    # -----------------------
    # Helpers
    # -----------------------
    def _spawn_enemy(self, roster_index: int) -> None:
        session = self._session
        enemy_def = session.roster[roster_index]
        session.enemy = create_enemy_combatant(enemy_def, self._rng, self._bus)
        session.enemy_index = roster_index
        logger.info("Spawned enemy %s (%d/%d).", enemy_def.name, roster_index + 1, len(session.roster))
        self._bus.publish(
            EnemySpawnedEvent(
                enemy_id=session.enemy.instance_id,
                enemy_name=session.enemy.display_name,
                roster_index=roster_index,
            )
        )

    def _fail_setup(self, reason: str) -> None:
        self._set_phase("setup_failed")
        self._session.can_submit = False
        logger.error("Combat setup failed: %s", reason)
        self._bus.publish(SetupFailedEvent(reason=reason))
        raise CombatSetupError(reason)

    def _set_phase(self, phase: CombatPhase) -> None:
        previous = self._session.phase
        self._session.phase = phase
        logger.debug("Phase %s -> %s", previous, phase)
        self._bus.publish(PhaseChangedEvent(previous=previous, current=phase))

    def _accepting_input(self) -> bool:
        session = self._session
        return session.phase == "player_action_phase" and session.can_submit and not session.resolving

    def _reject(self, reason: RejectReason, token_id: str) -> PlacementResult:
        logger.info("Rejected request for %s: %s", token_id, reason)
        return PlacementResult.rejected(reason)

    def _check_exclusive(self, token: TokenInstance) -> None:
        in_hand = self._hand.contains(token)
        on_grid = self._grid.contains(token)
        if in_hand == on_grid:
            raise HandInvariantError(
                f"Token {token.instance_id} must be in exactly one of hand or grid "
                f"(hand={in_hand}, grid={on_grid})."
            )

    @staticmethod
    def _to_view(combatant: Combatant) -> CombatantView:
        return CombatantView(
            instance_id=combatant.instance_id,
            name=combatant.display_name,
            health=combatant.health,
            max_health=combatant.max_health,
            block=combatant.block,
            is_alive=combatant.is_alive,
        )

    @staticmethod
    def _token_view(slot: int, token: TokenInstance) -> TokenView:
        token_def = token.definition
        return TokenView(
            instance_id=token.instance_id,
            token_id=token_def.id,
            name=token_def.name,
            action=token_def.action,
            target=token_def.target,
            roll=token.roll,
            sides=token_def.sides,
            mana_cost=token_def.mana_cost,
            slot=slot,
        )
