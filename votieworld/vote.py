'''Ballot types and the encoders filling them from voter ratings.

Every voter produces a single rating vector (see :mod:`votieworld.rating`)
- one :class:`OptionRating` per election option, sorted from the most to the
least wanted option. Each voting method reads that vector through its own
ballot type:

-   **Single option** ballots (:class:`SingleOptionBallot`) - vote for the
    most wanted option.
-   **Least favorite** ballots (:class:`LeastFavoriteSingleOptionBallot`) -
    vote against the least wanted option.
-   **Multiple option** ballots (:class:`MultipleOptionBallot`) - approve all
    options rated at least slightly positively.
-   **Preferential** ballots (:class:`MandatoryPreferentialBallot`) - rank all
    options.
-   **Good/ok/bad** ballots (:class:`GoodBadOkBallot`) - grade every option
    as good, ok or bad.
-   **Score** ballots (:class:`ScoreBallot`) - score every option from 0 to a
    maximum given by the ballot type.

All ballots are immutable and compare and hash by value, so identical
ballots can be bundled together (see :func:`votieworld.util.bundle_votes`).
Option indices in the ballots refer to positions in the election's option
list.
'''

from __future__ import annotations

import abc
import dataclasses
import enum
from typing import (
    Any, FrozenSet, Iterable, List, NamedTuple, Optional, Sequence,
    Tuple, Type,
)

import votieworld.component.scale


class WantLevel:
    '''The fixed levels of the rating scale.'''
    EXTREMELY_NEGATIVE = -30
    NEGATIVE = -20
    SLIGHTLY_NEGATIVE = -10
    NEUTRAL = 0
    SLIGHTLY_POSITIVE = 10
    POSITIVE = 20
    EXTREMELY_POSITIVE = 30

    ALL = (
        EXTREMELY_NEGATIVE, NEGATIVE, SLIGHTLY_NEGATIVE, NEUTRAL,
        SLIGHTLY_POSITIVE, POSITIVE, EXTREMELY_POSITIVE,
    )


class OptionRating(NamedTuple):
    '''A voter's rating of the option at the given index.'''
    option_index: int
    rating: int


class VoteError(Exception, metaclass=abc.ABCMeta):
    '''A vote is invalid given the election rules.'''
    pass


class RatingVectorError(VoteError):
    '''A rating vector does not rate every option exactly once.

    :param message: Description of the defect.
    :param ratings: The offending rating vector, if available.
    '''
    def __init__(self,
                 message: str,
                 ratings: Optional[Sequence[OptionRating]] = None,
                 ):
        self.ratings = ratings
        super().__init__(message)


def validate_ratings(option_ratings: Sequence[OptionRating],
                     n_options: int,
                     ) -> None:
    '''Check that the vector rates each of n_options options exactly once.

    :raises RatingVectorError: If the vector is empty, has a wrong length or
        does not cover all option indices.
    '''
    if not option_ratings:
        raise RatingVectorError('empty rating vector', option_ratings)
    if len(option_ratings) != n_options:
        raise RatingVectorError(
            f'rating vector of length {len(option_ratings)},'
            f' expected {n_options}',
            option_ratings
        )
    indices = {item.option_index for item in option_ratings}
    if indices != set(range(n_options)):
        raise RatingVectorError(
            f'rating vector indices {sorted(indices)} do not cover'
            f' {n_options} options',
            option_ratings
        )


class Ballot(metaclass=abc.ABCMeta):
    '''Base class for ballots. Not intended for direct use.'''
    @classmethod
    @abc.abstractmethod
    def fill(cls, option_ratings: Sequence[OptionRating]) -> Ballot:
        '''Fill the ballot from a descending sorted rating vector.'''
        raise NotImplementedError


@dataclasses.dataclass(frozen=True)
class SingleOptionBallot(Ballot):
    voted_for: int

    @classmethod
    def fill(cls, option_ratings: Sequence[OptionRating]
             ) -> SingleOptionBallot:
        return cls(option_ratings[0].option_index)


@dataclasses.dataclass(frozen=True)
class LeastFavoriteSingleOptionBallot(Ballot):
    least_favorite: int

    @classmethod
    def fill(cls, option_ratings: Sequence[OptionRating]
             ) -> LeastFavoriteSingleOptionBallot:
        return cls(option_ratings[-1].option_index)


@dataclasses.dataclass(frozen=True)
class MultipleOptionBallot(Ballot):
    '''An approval ballot.

    Options rated at least :attr:`APPROVAL_THRESHOLD` are approved.
    '''
    voted_for: FrozenSet[int]

    APPROVAL_THRESHOLD = WantLevel.SLIGHTLY_POSITIVE

    @classmethod
    def fill(cls, option_ratings: Sequence[OptionRating]
             ) -> MultipleOptionBallot:
        return cls(frozenset(
            item.option_index for item in option_ratings
            if item.rating >= cls.APPROVAL_THRESHOLD
        ))


@dataclasses.dataclass(frozen=True)
class MandatoryPreferentialBallot(Ballot):
    '''A full ranking of options, most preferred first.'''
    votes: Tuple[int, ...]

    @classmethod
    def fill(cls, option_ratings: Sequence[OptionRating]
             ) -> MandatoryPreferentialBallot:
        return cls(tuple(item.option_index for item in option_ratings))


class GoodOkBad(enum.IntEnum):
    '''Grades of the good/ok/bad ballot, ordered from worst to best.'''
    BAD = 0
    OK = 1
    GOOD = 2

    @classmethod
    def from_rating(cls, rating: int) -> GoodOkBad:
        if rating >= WantLevel.POSITIVE:
            return cls.GOOD
        elif rating >= WantLevel.SLIGHTLY_NEGATIVE:
            return cls.OK
        else:
            return cls.BAD


def _by_option_index(option_ratings: Sequence[OptionRating],
                     transform,
                     ) -> Tuple[Any, ...]:
    values = [None] * len(option_ratings)
    for item in option_ratings:
        values[item.option_index] = transform(item.rating)
    return tuple(values)


@dataclasses.dataclass(frozen=True)
class GoodBadOkBallot(Ballot):
    '''Grades for all options, indexed by option index.'''
    votes: Tuple[GoodOkBad, ...]

    @classmethod
    def fill(cls, option_ratings: Sequence[OptionRating]) -> GoodBadOkBallot:
        return cls(_by_option_index(option_ratings, GoodOkBad.from_rating))


@dataclasses.dataclass(frozen=True)
class ScoreBallot(Ballot):
    '''Scores for all options, indexed by option index.

    The abstract base has no maximum score; use :meth:`of` to get the ballot
    type for a concrete scale. Ballots of different scales never compare
    equal.
    '''
    votes: Tuple[int, ...]

    max_score = None
    _types = {}

    @classmethod
    def of(cls, max_score: int) -> Type[ScoreBallot]:
        '''Return the score ballot type scoring from 0 to max_score.'''
        if max_score not in cls._types:
            cls._types[max_score] = type(
                f'ScoreBallot{max_score}',
                (ScoreBallot, ),
                {'max_score': max_score, '__module__': __name__},
            )
        return cls._types[max_score]

    @classmethod
    def fill(cls, option_ratings: Sequence[OptionRating]) -> ScoreBallot:
        if cls.max_score is None:
            raise TypeError('use ScoreBallot.of() to select a score scale')
        scale = votieworld.component.scale.get(cls.max_score)
        return cls(_by_option_index(option_ratings, scale.score))


def fill_ballots(ballot_type: Type[Ballot],
                 rating_vectors: Iterable[Sequence[OptionRating]],
                 n_options: Optional[int] = None,
                 ) -> List[Ballot]:
    '''Encode a ballot of the given type for every rating vector.

    :param ballot_type: Ballot class to fill.
    :param rating_vectors: Descending sorted rating vectors, one per voter.
    :param n_options: Number of options in the election. If given, every
        rating vector is validated against it first.
    :raises RatingVectorError: If validation fails.
    '''
    ballots = []
    for option_ratings in rating_vectors:
        if n_options is not None:
            validate_ratings(option_ratings, n_options)
        ballots.append(ballot_type.fill(option_ratings))
    return ballots
