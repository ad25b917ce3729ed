'''Rolling world statistics read by voters when rating options.

The world statistics subsystem samples the state of the world at regular
intervals and keeps a short rolling history of each measure. The election
engine treats a :class:`WorldStats` instance as a read-only snapshot.
'''

import enum
import statistics
from fractions import Fraction
from typing import Dict, Generic, Hashable, List, Optional, TypeVar

# two election cycles of samples
HISTORY_LENGTH = 80

T = TypeVar('T')
K = TypeVar('K', bound=Hashable)


class DeathReason(enum.Enum):
    STARVATION = 'starvation'
    OLD_AGE = 'old_age'
    HOMELESSNESS = 'homelessness'


class Stat(Generic[T]):
    '''A rolling history of a numeric measure, newest sample first.

    Unfilled history slots are ignored by all aggregates. Aggregates of an
    empty history fall back to the zero value.

    :param history_length: Number of samples to retain.
    '''
    def __init__(self, history_length: int = HISTORY_LENGTH):
        if history_length < 1:
            raise ValueError(
                f'history needs at least one slot, got {history_length}'
            )
        self.history_length = history_length
        self.history: List[T] = []

    def push(self, value: T) -> None:
        self.history.insert(0, value)
        del self.history[self.history_length:]

    def max(self) -> T:
        return max(self.history, default=0)

    def min(self) -> T:
        return min(self.history, default=0)

    def average(self) -> float:
        '''Mean over the whole history window.

        Missing samples count as zeros, so a fresh history reads low.
        '''
        return sum(self.history) / self.history_length

    def median(self) -> T:
        if not self.history:
            return 0
        return statistics.median_low(self.history)

    def latest(self) -> T:
        return self.history[0] if self.history else 0

    def __len__(self) -> int:
        return len(self.history)

    def __repr__(self):
        return f'{self.__class__.__name__}({self.history!r})'


class Count(Generic[K]):
    '''A tally of hashable keys, each updated with an absolute count.'''
    def __init__(self, counts: Optional[Dict[K, int]] = None):
        self.map: Dict[K, int] = dict(counts) if counts else {}

    def update(self, key: K, count: int) -> None:
        self.map[key] = count

    def get(self, key: K) -> int:
        return self.map.get(key, 0)

    def sum(self) -> int:
        return sum(self.map.values())

    def min(self) -> int:
        return min(self.map.values(), default=0)

    def max(self) -> int:
        return max(self.map.values(), default=0)

    def __repr__(self):
        return f'{self.__class__.__name__}({self.map!r})'


class WorldStats:
    '''A snapshot of the rolling world statistics.

    :param history_length: Number of samples kept for each measure.
    '''
    def __init__(self, history_length: int = HISTORY_LENGTH):
        self.money = Stat(history_length)
        self.hole_filled_capacity = Stat(history_length)
        self.houses_filled = Stat(history_length)
        self.population = Stat(history_length)
        self.deaths: Count[DeathReason] = Count()

    def recent_population(self) -> int:
        '''Current population plus everyone who died recently.'''
        return self.population.latest() + self.deaths.sum()

    def death_share(self, reason: DeathReason) -> Fraction:
        '''Share of the recent population that died of the given reason.'''
        total = self.recent_population()
        if not total:
            return Fraction(0)
        return Fraction(self.deaths.get(reason), total)
