'''Elections of the world - their options, votes and records.

An :class:`Election` is created with a fixed list of options and a voting
method, collects one rating vector per voter while it is open and, once it
has been open for :data:`ELECTION_DURATION` simulated seconds, is closed by
the :class:`votieworld.office.ElectionOffice`. Closing evaluates the votes
under the election's own method and, for comparison, under every other
method; the outcome is frozen into a :class:`HeldElection`.
'''

import collections
import dataclasses
import enum
import logging
import random
from typing import (
    Any, Counter, Dict, Hashable, Iterable, List, Optional, Sequence, Tuple,
)

import votieworld.persist
import votieworld.rating
import votieworld.system
from votieworld.evaluate.core import ElectionResult, ElectionType
from votieworld.option import (
    DoNothing, ElectionOption, FoodTemplate, House, MakeFarm,
    MakeReproductiveZone, Mint, MoneyHole, unique_options,
)
from votieworld.stats import WorldStats
from votieworld.vote import OptionRating
from votieworld.voter import VoterAttributes

logger = logging.getLogger(__name__)

ELECTION_DURATION = 15.
HOUSE_DWELLINGS_RANGE = (3, 10)

VoterId = Hashable


class ElectionError(Exception):
    pass


class ElectionNotFoundError(ElectionError, KeyError):
    '''A vote was cast into an election that is not open.'''
    def __init__(self, election_id: Any):
        self.election_id = election_id
        super().__init__(f'no open election with id {election_id!r}')

    def __str__(self):
        return self.args[0]


class Election:
    '''A single open election.

    :param options: Options to choose from; their order is fixed for the
        lifetime of the election and option indices refer to it.
    :param election_type: The voting method deciding the election.
    :param name: Display name.
    :param duration: Simulated seconds the election stays open.
    '''
    def __init__(self,
                 options: Sequence[ElectionOption],
                 election_type: ElectionType,
                 name: str = 'Election',
                 duration: float = ELECTION_DURATION,
                 ):
        if not options:
            raise ValueError('an election needs at least one option')
        self.options = tuple(options)
        self.election_type = election_type
        self.name = name
        self.duration = duration
        self.votes: Dict[VoterId, List[OptionRating]] = {}
        self.time_open = 0.

    def vote(self,
             rng: random.Random,
             voter_id: VoterId,
             attributes: VoterAttributes,
             stats: WorldStats,
             ) -> bool:
        '''Record the vote of a voter, rating the options for them.

        Voters that have already voted are ignored; no random numbers are
        drawn for them.

        :returns: True if the vote was recorded.
        '''
        if voter_id in self.votes:
            return False
        self.votes[voter_id] = votieworld.rating.rate(
            attributes, stats, self.options, rng
        )
        return True

    def tick(self, delta: float) -> None:
        self.time_open += delta

    def is_due(self) -> bool:
        return self.time_open > self.duration

    def rating_vectors(self) -> List[List[OptionRating]]:
        return list(self.votes.values())

    def result_for(self, election_type: ElectionType) -> ElectionResult:
        return votieworld.system.evaluate(
            election_type, self.options, self.rating_vectors()
        )

    def result(self) -> ElectionResult:
        return self.result_for(self.election_type)

    def snapshot(self) -> 'Election':
        '''Return a copy that later votes cannot modify.'''
        copied = Election(
            self.options, self.election_type, self.name, self.duration
        )
        copied.votes = {
            voter_id: list(ratings) for voter_id, ratings in self.votes.items()
        }
        copied.time_open = self.time_open
        return copied

    def to_dict(self) -> Dict[str, Any]:
        return {
            'class': votieworld.persist.scoped_class_name(self),
            'name': self.name,
            'election_type': votieworld.persist.serialize_value(
                self.election_type
            ),
            'options': votieworld.persist.serialize_value(self.options),
            'votes': votieworld.persist.serialize_value(self.votes),
            'time_open': self.time_open,
        }

    def __repr__(self):
        return (
            f'<Election {self.name!r} ({self.election_type}):'
            f' {len(self.options)} options, {len(self.votes)} votes,'
            f' open {self.time_open:g} s>'
        )


@dataclasses.dataclass(frozen=True)
class HeldElection:
    '''The record of a closed election.

    :param name: Display name of the election.
    :param election: Snapshot of the election at closing.
    :param results: Results under the election's own method first, then
        under every other method in declaration order.
    '''
    name: str
    election: Election
    results: Tuple[ElectionResult, ...]

    @classmethod
    def hold(cls, election: Election) -> 'HeldElection':
        '''Evaluate a closed election under all methods.'''
        snapshot = election.snapshot()
        results = votieworld.system.evaluate_all(
            snapshot.election_type, snapshot.options, snapshot.rating_vectors()
        )
        return cls(snapshot.name, snapshot, tuple(results))

    def primary_result(self) -> ElectionResult:
        return self.results[0]

    def winner(self) -> ElectionOption:
        return self.primary_result().winning_option()

    def result_for(self, election_type: ElectionType) -> ElectionResult:
        for result in self.results:
            if result.method_kind() is election_type:
                return result
        raise KeyError(election_type)


@dataclasses.dataclass(frozen=True)
class ElectionClosedEvent:
    held_election: HeldElection


class ElectionHistory:
    '''All elections held so far, oldest first.'''
    def __init__(self):
        self.held_elections: List[HeldElection] = []

    def append(self, held_election: HeldElection) -> None:
        self.held_elections.append(held_election)

    def latest(self) -> Optional[HeldElection]:
        return self.held_elections[-1] if self.held_elections else None

    def winners(self) -> List[ElectionOption]:
        return [held.winner() for held in self.held_elections]

    def __iter__(self):
        return iter(self.held_elections)

    def __len__(self) -> int:
        return len(self.held_elections)


class Want(enum.Enum):
    '''A need shared by a part of the population.'''
    FOOD = 'food'
    REPRODUCTION = 'reproduction'


def survey_wants(population: Iterable[VoterAttributes]) -> Counter[Want]:
    '''Count the voties in need of something an election could provide.

    Voties running low on energy want food; voties ready to reproduce want
    a place to do so.
    '''
    tally = collections.Counter()
    for attributes in population:
        energy = attributes.energy
        if energy is not None and (
            energy.current_kcal
            < energy.max_kcal * votieworld.rating.HUNGRY_ENERGY_FRACTION
        ):
            tally[Want.FOOD] += 1
        reproductive = attributes.reproductive
        if reproductive is not None and reproductive.wants_to_reproduce():
            tally[Want.REPRODUCTION] += 1
    return tally


def get_options(rng: random.Random,
                food_collection: Sequence[FoodTemplate],
                wants: Optional[Counter[Want]] = None,
                ) -> List[ElectionOption]:
    '''Assemble the options for a new election.

    The baseline options are always offered: doing nothing, a house with a
    random number of dwellings, a farm for a random food, a money hole and a
    mint. An unmet want of food adds another farm proposal and a want of
    reproduction adds a reproductive zone. Duplicate proposals collapse.

    :param rng: Random stream; the draws happen in the order the options
        are listed above.
    :param food_collection: Foods a farm can be proposed for.
    :param wants: Result of :func:`survey_wants`, if available.
    '''
    if not food_collection:
        raise ValueError('cannot propose farms without any known food')
    options = [
        DoNothing(),
        House(rng.randint(*HOUSE_DWELLINGS_RANGE)),
        MakeFarm(rng.choice(food_collection)),
        MoneyHole(),
        Mint(),
    ]
    if wants:
        if wants[Want.FOOD]:
            options.append(MakeFarm(rng.choice(food_collection)))
        if wants[Want.REPRODUCTION]:
            options.append(MakeReproductiveZone())
    return unique_options(options)


def create_election(rng: random.Random,
                    election_type: ElectionType,
                    food_collection: Sequence[FoodTemplate],
                    population: Optional[Iterable[VoterAttributes]] = None,
                    name: str = 'Election',
                    duration: float = ELECTION_DURATION,
                    ) -> Election:
    '''Open a new election with generated options.

    :param population: Voters whose wants shape the options. If not given,
        only the baseline options are offered.
    '''
    wants = survey_wants(population) if population is not None else None
    options = get_options(rng, food_collection, wants)
    logger.info('creating %s election %r with options %s',
                election_type, name, [str(option) for option in options])
    return Election(options, election_type, name=name, duration=duration)
