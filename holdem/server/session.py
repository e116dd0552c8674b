"""
Single-table session: one human seat plus rule-based opponents.

The session owns the engine and is the only writer to it. HTTP handlers and
the agent loop both mutate the table while holding ``session.lock``; every
engine call inside the lock is synchronous, so cancelling the agent task can
only interrupt it between two actions.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
import asyncio
import contextlib
import logging
import random

from holdem.agents.base import BaseAgent
from holdem.agents.rule_based import RuleBasedAgent
from holdem.core.card import Deck
from holdem.core.errors import InvalidTransitionError
from holdem.core.game import ActionResult, HoldemEngine
from holdem.core.player import Player
from holdem.core.rules import GameState, PlayerAction, HAND_START_STATES, MIN_PLAYERS
from holdem.server.settings import TableSettings
from holdem.strategy.betting_helper import BettingAdvisor, BettingRecommendation
from holdem.strategy.range_analyzer import OpponentTracker, RangeAnalyzer
from holdem.strategy.strength import position_for_seat


logger = logging.getLogger(__name__)

HUMAN_ID = "player1"


class TableSession:
    """
    Drives one table for a human player.

    Usage:
        session = TableSession(TableSettings())
        session.start_new_hand()
        session.run_until_human()          # synchronous
        result = session.submit_action(PlayerAction.CALL)
        await session.run_agents()         # paced by ai_action_delay
    """

    def __init__(self, settings: Optional[TableSettings] = None, rng: Optional[random.Random] = None):
        self.settings = settings or TableSettings()
        self.engine = HoldemEngine(
            small_blind=self.settings.small_blind,
            big_blind=self.settings.big_blind,
            deck=Deck(rng),
        )
        self.players: List[Player] = []
        self.agents: Dict[str, BaseAgent] = {}
        self.tracker = OpponentTracker()
        self.advisor = BettingAdvisor()
        self.analyzer = RangeAnalyzer()
        self.lock = asyncio.Lock()
        self._agent_task: Optional[asyncio.Task] = None
        self._reseat_pending = False
        self._seat_players()

    def _seat_players(self) -> None:
        """Seat a fresh table with everybody on the starting stack."""
        self._reseat_pending = False
        stack = self.settings.starting_stack
        self.players = [Player(HUMAN_ID, "You", stack)]
        self.agents = {}
        for i in range(1, self.settings.num_opponents + 1):
            player_id = f"ai{i}"
            self.players.append(Player(player_id, f"Bot {i}", stack, seat=i))
            self.agents[player_id] = RuleBasedAgent(
                player_id,
                name=f"Bot {i}",
                bet_amount=self.settings.ai_bet_amount,
                raise_amount=self.settings.ai_raise_amount,
            )
        self.engine.players = self.players
        logger.info(f"Seated {len(self.players)} players with {stack} chips each")

    @property
    def human(self) -> Player:
        return self.players[0]

    @property
    def human_to_act(self) -> bool:
        engine = self.engine
        return (
            engine.is_hand_running()
            and not engine.is_betting_round_complete()
            and engine.current_player is self.human
            and self.human.can_act
        )

    @property
    def can_start_hand(self) -> bool:
        return self.engine.state in HAND_START_STATES

    @property
    def agents_running(self) -> bool:
        return self._agent_task is not None and not self._agent_task.done()

    def update_settings(self, settings: TableSettings) -> None:
        """
        Apply new settings.

        Blinds take effect from the next hand. A change in the number of
        opponents or the starting stack reseats the table, straight away
        between hands or at the start of the next hand otherwise.
        """
        reseat = (
            settings.num_opponents != self.settings.num_opponents
            or settings.starting_stack != self.settings.starting_stack
        )
        self.settings = settings
        for agent in self.agents.values():
            if isinstance(agent, RuleBasedAgent):
                agent.bet_amount = settings.ai_bet_amount
                agent.raise_amount = settings.ai_raise_amount
        if reseat and not self.engine.is_hand_running():
            self._seat_players()
        elif reseat:
            self._reseat_pending = True

    def start_new_hand(self) -> None:
        """
        Deal the next hand.

        The table is reseated first when a reseat is pending, when it is down
        to one stack or when the human is busted.
        """
        if not self.can_start_hand:
            raise InvalidTransitionError(f"Cannot start a new hand during {self.engine.state.name}")
        if (
            self._reseat_pending
            or sum(1 for p in self.players if p.stack > 0) < MIN_PLAYERS
            or self.human.stack == 0
        ):
            self._seat_players()

        self.engine.small_blind = self.settings.small_blind
        self.engine.big_blind = self.settings.big_blind
        self.tracker.clear()
        self.engine.start_new_hand(self.players)

    def submit_action(self, action: PlayerAction, amount: int = 0) -> ActionResult:
        """Apply the human's action if it is their turn."""
        if not self.human_to_act:
            return ActionResult.rejected("It is not your turn", action)

        result = self.engine.process_player_action(self.human, action, amount)
        if result.success:
            self.engine.next_player()
        return result

    def step(self) -> bool:
        """
        Make one unit of progress: an agent action or a stage change.

        Returns:
            False when the human is due to act or the hand is over
        """
        engine = self.engine

        if engine.state == GameState.SHOWDOWN:
            engine.next_stage()
            return True
        if not engine.is_hand_running():
            return False
        if engine.is_betting_round_complete():
            engine.next_stage()
            return True

        player = engine.current_player
        if not player.can_act:
            engine.next_player()
            return True
        if player.player_id not in self.agents:
            return False

        self._play_agent(player)
        engine.next_player()
        return True

    def _play_agent(self, player: Player) -> None:
        engine = self.engine
        agent = self.agents[player.player_id]
        action = agent.decide(player, list(engine.community_cards), engine.current_bet, engine.pot)
        amount = agent.choose_amount(action, player, engine.current_bet, engine.pot, engine.big_blind)

        stage = engine.state
        result = engine.process_player_action(player, action, amount)
        if not result.success:
            fallback = PlayerAction.CHECK if engine.current_bet == player.current_bet else PlayerAction.CALL
            result = engine.process_player_action(player, fallback, 0)
            result.raise_for_error()
            action = fallback

        self.tracker.record(player.player_id, action, result.amount, stage)

    def run_until_human(self) -> None:
        """Play agents and stages until the human must act or the hand ends."""
        while self.step():
            pass

    async def run_agents(self) -> None:
        """Paced version of run_until_human(), meant to run as a task."""
        while True:
            async with self.lock:
                progressed = self.step()
            if not progressed:
                return
            await asyncio.sleep(self.settings.ai_action_delay)

    def schedule_agents(self) -> asyncio.Task:
        """Start the agent loop in the background, replacing any running one."""
        if self.agents_running:
            self._agent_task.cancel()
        self._agent_task = asyncio.create_task(self.run_agents())
        return self._agent_task

    async def cancel_agents(self) -> None:
        """Stop the agent loop and wait for it to unwind."""
        task, self._agent_task = self._agent_task, None
        if task is None or task.done():
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.debug("Agent loop cancelled")

    def snapshot(self) -> Dict[str, Any]:
        """Engine state as seen from the human seat."""
        state = self.engine.get_state(for_player_id=HUMAN_ID)
        state["human_to_act"] = self.human_to_act
        state["legal_actions"] = (
            [a.value for a in self.engine.get_legal_actions(self.human)]
            if self.human_to_act else []
        )
        return state

    def recommendation(self) -> Optional[BettingRecommendation]:
        """Betting hint for the human, when it is their turn and hints are on."""
        if not self.settings.show_hints or not self.human_to_act:
            return None

        engine = self.engine
        return self.advisor.get_betting_recommendation(
            self.human,
            list(engine.community_cards),
            engine.pot,
            engine.current_bet,
            position_for_seat(self.human.seat, engine.num_players),
            len(engine.contenders),
        )

    def opponent_ranges(self) -> Dict[str, Dict[str, Any]]:
        """Estimated range for every opponent still in the hand who has acted."""
        engine = self.engine
        board = list(engine.community_cards)
        ranges = {}
        for player in self.players:
            if player.player_id == HUMAN_ID or not player.is_in_hand:
                continue
            actions = self.tracker.actions_for(player.player_id)
            if not actions:
                continue

            hand_range = self.analyzer.analyze_opponent_range(
                actions, board, engine.pot, position_for_seat(player.seat, len(self.players))
            )
            strength = self.analyzer.evaluate_range_strength(hand_range, board)
            likely = self.analyzer.get_most_likely_hands(hand_range, board)
            ranges[player.player_id] = {
                "combinations": len(hand_range),
                "probability": hand_range.probability,
                "strength": strength.to_dict(),
                "likely_hands": [
                    {"cards": [c.short_str for c in combo], "strength": value}
                    for combo, value in likely
                ],
            }
        return ranges
