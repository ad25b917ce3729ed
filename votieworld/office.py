'''The election office - runs the elections of the world step by step.

The simulation loop hands the office the real time elapsed since the last
step. Every step runs through the same phases:

1.  Simulated time advances by the real delta scaled by the speed
    multiplier.
2.  The election timer ticks; every :data:`ELECTION_INTERVAL` simulated
    seconds a new election opens under a randomly drawn voting method.
3.  Votes cast since the last step are recorded.
4.  Open elections age and the ones open long enough are closed: the
    winning option is applied to the world, listeners are notified and the
    held election enters the history. Elections nobody voted in are
    discarded without effect.

Votes are always recorded before elections are closed, so a vote cast just
before an election's deadline still counts.
'''

import logging
import random
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

import votieworld.system
from votieworld.election import (
    ELECTION_DURATION, Election, ElectionClosedEvent, ElectionHistory,
    ElectionNotFoundError, HeldElection, VoterId, create_election,
)
from votieworld.evaluate.core import ElectionType
from votieworld.option import DEFAULT_FOODS, DoNothing, ElectionOption, FoodTemplate
from votieworld.stats import WorldStats
from votieworld.voter import VoterAttributes

logger = logging.getLogger(__name__)

ELECTION_INTERVAL = 20.
MIN_MULTIPLIER = .1
MAX_MULTIPLIER = 20.

OptionApplier = Callable[[ElectionOption], Any]
ElectionListener = Callable[[ElectionClosedEvent], Any]


class SimTime:
    '''Simulated time, running faster or slower than real time.

    :param multiplier: Simulated seconds per real second, clamped to
        [:data:`MIN_MULTIPLIER`, :data:`MAX_MULTIPLIER`].
    '''
    def __init__(self, multiplier: float = 1.):
        self.multiplier = self._clamp(multiplier)
        self.elapsed = 0.

    @staticmethod
    def _clamp(multiplier: float) -> float:
        return min(max(multiplier, MIN_MULTIPLIER), MAX_MULTIPLIER)

    def set_multiplier(self, multiplier: float) -> None:
        self.multiplier = self._clamp(multiplier)

    def add_to_multiplier(self, to_add: float) -> None:
        self.set_multiplier(self.multiplier + to_add)

    def delta(self, real_delta: float) -> float:
        return real_delta * self.multiplier

    def advance(self, real_delta: float) -> float:
        '''Advance by a real time delta, returning the simulated delta.'''
        delta = self.delta(real_delta)
        self.elapsed += delta
        return delta


class ElectionTimer:
    '''A repeating timer in simulated seconds.'''
    def __init__(self, interval: float = ELECTION_INTERVAL):
        if interval <= 0:
            raise ValueError(f'timer interval must be positive, got {interval}')
        self.interval = interval
        self.elapsed = 0.

    def tick(self, delta: float) -> int:
        '''Advance the timer and return how many times it went off.'''
        self.elapsed += delta
        times_finished = 0
        while self.elapsed >= self.interval:
            self.elapsed -= self.interval
            times_finished += 1
        return times_finished


def log_option(option: ElectionOption) -> None:
    '''Default option applier for a world that cannot build anything.'''
    if isinstance(option, DoNothing):
        logger.info('apathy won!')
    else:
        logger.info('building: %s', option)


class ElectionOffice:
    '''Owns the open elections of the world and their history.

    :param rng: The random stream of the simulation. Shared by option
        generation, voting method draws and voter rating jitter.
    :param stats: World statistics read by the voters.
    :param apply_option: Called with the winning option of every held
        election; builds it in the world.
    :param food_collection: Foods farms can be proposed for.
    :param election_type: Voting method for all elections. If None, every
        election draws its method at random.
    :param election_interval: Simulated seconds between new elections.
    :param election_duration: Simulated seconds an election stays open.
    :param multiplier: Initial simulation speed multiplier.
    '''
    def __init__(self,
                 rng: Optional[random.Random] = None,
                 stats: Optional[WorldStats] = None,
                 apply_option: OptionApplier = log_option,
                 food_collection: Sequence[FoodTemplate] = DEFAULT_FOODS,
                 election_type: Optional[ElectionType] = None,
                 election_interval: float = ELECTION_INTERVAL,
                 election_duration: float = ELECTION_DURATION,
                 multiplier: float = 1.,
                 ):
        self.rng = rng if rng is not None else random.Random()
        self.stats = stats if stats is not None else WorldStats()
        self.apply_option = apply_option
        self.food_collection = food_collection
        self.election_type = election_type
        self.election_duration = election_duration
        self.sim_time = SimTime(multiplier)
        self.timer = ElectionTimer(election_interval)
        self.elections: Dict[int, Election] = {}
        self.history = ElectionHistory()
        self.listeners: List[ElectionListener] = []
        self._pending_votes: List[Tuple[int, VoterId, VoterAttributes]] = []
        self._next_id = 1

    def add_listener(self, listener: ElectionListener) -> None:
        self.listeners.append(listener)

    def open_election(self,
                      election_type: Optional[ElectionType] = None,
                      population: Optional[Iterable[VoterAttributes]] = None,
                      ) -> int:
        '''Open a new election and return its id.

        :param election_type: Voting method; defaults to the office's fixed
            method or a random draw.
        :param population: Current voters, surveyed for their wants.
        '''
        if election_type is None:
            election_type = self.election_type
        if election_type is None:
            election_type = votieworld.system.random_election_type(self.rng)
        election_id = self._next_id
        self._next_id += 1
        self.elections[election_id] = create_election(
            self.rng, election_type, self.food_collection,
            population=population,
            name=f'Election {election_id}',
            duration=self.election_duration,
        )
        return election_id

    def cast(self,
             election_id: int,
             voter_id: VoterId,
             attributes: VoterAttributes,
             ) -> None:
        '''Queue a vote; it is recorded in the next step.

        :raises ElectionNotFoundError: If no such election is open.
        '''
        if election_id not in self.elections:
            raise ElectionNotFoundError(election_id)
        self._pending_votes.append((election_id, voter_id, attributes))

    def step(self,
             real_delta: float,
             population: Optional[Iterable[VoterAttributes]] = None,
             ) -> List[HeldElection]:
        '''Run one simulation step.

        :param real_delta: Real seconds since the last step.
        :param population: Current voters, surveyed when new elections open.
        :returns: Elections held in this step.
        '''
        delta = self.sim_time.advance(real_delta)
        if population is not None:
            population = list(population)
        for _ in range(self.timer.tick(delta)):
            self.open_election(population=population)
        self._record_votes()
        return self._close_due(delta)

    def _record_votes(self) -> None:
        pending, self._pending_votes = self._pending_votes, []
        for election_id, voter_id, attributes in pending:
            try:
                self.elections[election_id].vote(
                    self.rng, voter_id, attributes, self.stats
                )
            except Exception:
                logger.exception('vote of %r in election %d failed,'
                                 ' dropping it', voter_id, election_id)

    def _close_due(self, delta: float) -> List[HeldElection]:
        held_elections = []
        for election_id, election in list(self.elections.items()):
            election.tick(delta)
            if not election.is_due():
                continue
            del self.elections[election_id]
            try:
                held = self.close(election)
            except Exception:
                logger.exception('closing %r failed, dropping it', election)
                continue
            if held is not None:
                held_elections.append(held)
        return held_elections

    def close(self, election: Election) -> Optional[HeldElection]:
        '''Resolve an election that has been open long enough.

        :returns: The held election, or None if nobody voted.
        '''
        if not election.votes:
            logger.info('discarding %r, nobody voted', election)
            return None
        held = HeldElection.hold(election)
        for result in held.results:
            logger.info('%s: %s winner: %s', held.name,
                        result.method_kind(), result.winning_option())
        self.apply_option(held.winner())
        event = ElectionClosedEvent(held)
        for listener in self.listeners:
            listener(event)
        self.history.append(held)
        return held
