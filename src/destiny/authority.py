"""
Destiny Dice - Destiny Pool Authority

Single-writer coordination of the shared Destiny Pool. One participant
holds the AUTHORITY role (the game master) and is the only one that commits
changes; every other participant is an OBSERVER that mirrors the replicated
state and proposes flips over the broadcast channel.

Proposals are fire-and-forget. The authority applies them in receipt order
and drops any proposal that is not exactly one flip away from its live
state. Proposals sent while no authority is listening are lost, not queued.
"""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Any, Callable

from pydantic import ValidationError

from src.config.engine import EngineConfig
from src.database.world_settings import KeyValueStore
from src.destiny.state import DestinyPoolState, Side
from src.engine.errors import Unauthorized
from src.realtime.channels import BroadcastChannel
from src.realtime.events import (
    DestinyEvent,
    EventPayload,
    FlipProposal,
    StateUpdate,
    classify_message,
)

logger = logging.getLogger(__name__)

StateListener = Callable[[DestinyPoolState, str | None], None]

_PRIVILEGED_MESSAGE = "Only GMs can add or remove points from the Destiny Pool."


class Role(Enum):
    """Participant role for the Destiny Pool."""
    AUTHORITY = "authority"
    OBSERVER = "observer"


class DestinyAuthority:
    """
    One participant's view of the Destiny Pool.

    Args:
        config: Engine configuration (role flag, topics, persistence keys)
        store: Persistence used to load the initial counts and, for the
            authority, to write every committed change
        channel: Broadcast channel shared by all participants
        role: Overrides the role derived from ``config.is_game_master``
    """

    def __init__(
        self,
        config: EngineConfig,
        store: KeyValueStore,
        channel: BroadcastChannel,
        *,
        role: Role | None = None,
    ) -> None:
        self.config = config
        self.role = role or (Role.AUTHORITY if config.is_game_master else Role.OBSERVER)
        self._store = store
        self._channel = channel
        self._lock = threading.RLock()
        self._listeners: list[StateListener] = []
        self._state = self._load()

        if self.is_authority:
            channel.on_message(
                config.proposal_topic,
                lambda data: self._receive(config.proposal_topic, data),
            )
        channel.on_message(
            config.state_topic,
            lambda data: self._receive(config.state_topic, data),
        )
        logger.info(
            "Destiny Pool ready as %s: %d light / %d dark",
            self.role.value, self._state.light, self._state.dark,
        )

    @property
    def is_authority(self) -> bool:
        return self.role is Role.AUTHORITY

    @property
    def state(self) -> DestinyPoolState:
        return self._state

    def add_listener(self, listener: StateListener) -> None:
        """Call ``listener(state, notice)`` after every local or replicated change."""
        self._listeners.append(listener)

    # -- User operations -------------------------------------------------

    def flip(self, from_side: Side) -> DestinyPoolState | None:
        """
        Flip one point away from ``from_side``.

        The authority commits immediately and returns the new state. An
        observer sends a proposal and returns None; the change, if accepted,
        arrives later through state replication.

        Raises:
            InsufficientPool: If ``from_side`` is empty in this participant's view
        """
        with self._lock:
            proposed = self._state.flipped(from_side)
            if self.is_authority:
                return self._commit(proposed, f"Flipped a {from_side.label}.")

            proposal = FlipProposal(
                proposed_light=proposed.light,
                proposed_dark=proposed.dark,
                assumed_prior_total=self._state.total,
            )

        logger.debug("Proposing Destiny flip %s", proposal.to_payload())
        self._channel.send(self.config.proposal_topic, proposal.to_payload())
        return None

    def add_point(self, side: Side) -> DestinyPoolState:
        """
        Add a point to one side. Authority only.

        Raises:
            Unauthorized: If called by an observer
        """
        self._require_authority()
        with self._lock:
            return self._commit(self._state.adjusted(side, 1), f"Added a {side.label}.")

    def remove_point(self, side: Side) -> DestinyPoolState:
        """
        Remove a point from one side. Authority only.

        Raises:
            Unauthorized: If called by an observer
            InsufficientPool: If the side is already empty
        """
        self._require_authority()
        with self._lock:
            return self._commit(self._state.adjusted(side, -1), f"Removed a {side.label}.")

    def _require_authority(self) -> None:
        if not self.is_authority:
            logger.warning("Observer attempted a privileged Destiny Pool change")
            raise Unauthorized(_PRIVILEGED_MESSAGE)

    # -- Proposal handling -----------------------------------------------

    def handle_proposal(self, proposal: FlipProposal) -> bool:
        """
        Validate and apply a flip proposal against the live state.

        Returns:
            True if the proposal was committed, False if it was stale
        """
        if not self.is_authority:
            return False

        with self._lock:
            live = self._state
            if proposal.assumed_prior_total != live.total:
                logger.debug(
                    "Rejected stale Destiny proposal: assumed total %d, live total %d",
                    proposal.assumed_prior_total, live.total,
                )
                return False

            target = DestinyPoolState(
                light=proposal.proposed_light, dark=proposal.proposed_dark
            )
            from_side = live.flip_source(target)
            if from_side is None:
                logger.debug(
                    "Rejected stale Destiny proposal %s against live %s",
                    proposal.to_payload(), live.model_dump(),
                )
                return False

            self._commit(target, f"Flipped a {from_side.label}.")
            return True

    def refresh(self) -> DestinyPoolState:
        """
        Reload the counts from persistence.

        Lets an observer reconcile after missing replicated updates, e.g.
        after a reconnect. The authority's live state is already the
        persisted one and is returned unchanged.
        """
        if self.is_authority:
            return self._state

        with self._lock:
            state = self._load()
            changed = state != self._state
            self._state = state
        if changed:
            self._notify(state, None)
        return state

    # -- Internals -------------------------------------------------------

    def _load(self) -> DestinyPoolState:
        light = self._store.get(self.config.light_key, 0)
        dark = self._store.get(self.config.dark_key, 0)
        try:
            return DestinyPoolState(light=int(light or 0), dark=int(dark or 0))
        except (TypeError, ValueError) as e:
            logger.warning(
                "Invalid persisted Destiny Pool (%r light / %r dark), starting empty: %s",
                light, dark, e,
            )
            return DestinyPoolState()

    def _receive(self, topic: str, data: dict[str, Any]) -> None:
        event = classify_message(topic)
        if event is None:
            return
        payload = EventPayload(event=event, topic=topic, data=data)

        try:
            if payload.event is DestinyEvent.FLIP_PROPOSED:
                logger.info("Received Destiny Pool proposal %s", payload.data)
                self.handle_proposal(FlipProposal.model_validate(payload.data))
            elif payload.event is DestinyEvent.STATE_REPLICATED:
                self._apply_replicated(StateUpdate.model_validate(payload.data))
        except ValidationError:
            logger.warning("Ignoring malformed %s message: %s", payload.event.name, payload.data)

    def _apply_replicated(self, update: StateUpdate) -> None:
        if self.is_authority:
            return
        state = DestinyPoolState(light=update.light, dark=update.dark)
        with self._lock:
            self._state = state
        self._notify(state, update.notice)

    def _commit(self, state: DestinyPoolState, notice: str) -> DestinyPoolState:
        """Persist, replicate and announce a new state. Caller holds the lock."""
        self._state = state
        self._store.set(self.config.light_key, state.light)
        self._store.set(self.config.dark_key, state.dark)
        logger.info("%s Destiny Pool now %d light / %d dark", notice, state.light, state.dark)

        update = StateUpdate(light=state.light, dark=state.dark, notice=notice)
        self._channel.send(self.config.state_topic, update.to_payload())
        self._notify(state, notice)
        return state

    def _notify(self, state: DestinyPoolState, notice: str | None) -> None:
        for listener in list(self._listeners):
            try:
                listener(state, notice)
            except Exception:
                logger.exception("Destiny Pool listener failed")
