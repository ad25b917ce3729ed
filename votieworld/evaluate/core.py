'''General election evaluator machinery and the single-choice methods.

All evaluators take the option list of an election and one descending
sorted rating vector per voter, encode the ratings into their own ballot
type, bundle identical ballots and tally them. They return an
:class:`ElectionResult` subclass that names the winner and keeps the full
breakdown of the count for display.

Exact ties are resolved in favor of the option listed earlier in the
election's option list, in every method, so that results are reproducible.
'''

from __future__ import annotations

import abc
import dataclasses
import enum
import logging
from typing import Any, ClassVar, Dict, List, Sequence, Tuple, Type, Union
from numbers import Number

import votieworld.persist
import votieworld.util
import votieworld.vote
from votieworld.option import ElectionOption
from votieworld.util import VoteBundle
from votieworld.vote import OptionRating

logger = logging.getLogger(__name__)


class VotingSystemError(Exception):
    '''An election was handed to an evaluator in an unresolvable state.'''
    pass


class ElectionType(enum.Enum):
    '''The voting methods an election can be held under.'''
    FIRST_PAST_THE_POST = 'First Past The Post'
    APPROVAL = 'Approval'
    PREFERENTIAL = 'Preferential'
    GOOD_OK_BAD = 'Good Ok Bad'
    STAR = 'Star'
    ANTI_PLURALITY = 'Anti Plurality'
    USUAL_JUDGMENT = 'Usual Judgment'

    def __str__(self):
        return self.value


class Tie(frozenset):
    '''Option indices tied for a place.

    Produced by :func:`get_n_best` when options have equal tallies and only
    some of them fit into the places to fill.
    '''
    @classmethod
    def break_by_list(cls,
                      elected: List[Union[int, Tie]],
                      breaker: List[int],
                      ) -> List[int]:
        '''Break ties in the elected list according to ordering in breaker.'''
        broken = []
        ties = {}
        for item in elected:
            if isinstance(item, Tie):
                if item in ties:
                    broken.append(ties[item][0])
                    if len(ties[item]) > 1:
                        ties[item] = ties[item][1:]
                    else:
                        del ties[item]
                else:
                    sorted_item = list(sorted(item, key=breaker.index))
                    broken.append(sorted_item[0])
                    ties[item] = sorted_item[1:]
            else:
                broken.append(item)
        return broken


def get_n_best(votes: Dict[int, Number],
               n_seats: int,
               ) -> List[Union[int, Tie]]:
    '''Return n_seats options with the highest number of votes.

    :param votes: Mapping of option indices to their tallies.
    :param n_seats: Number of places to be filled.
    :returns: A list of top n_seats options. If there is a tie, the last
        items will refer to a single Tie object containing the tied options.
    '''
    sorted_items = votieworld.util.sorted_votes(votes)
    if len(sorted_items) > n_seats:
        # find if there is a tie between the last placed and first unplaced
        threshold_votes = sorted_items[n_seats-1][1]
        if sorted_items[n_seats][1] == threshold_votes:
            tied = []
            n_untied = None
            for i, item in enumerate(sorted_items):
                option_index, n_votes = item
                if n_votes == threshold_votes:
                    tied.append(option_index)
                    if n_untied is None:
                        n_untied = i
            n_tie_places = n_seats - n_untied
            return (
                [item[0] for item in sorted_items[:n_untied]]
                + [Tie(tied)] * n_tie_places
            )
        else:
            return [index for index, n_votes in sorted_items[:n_seats]]
    else:
        return [index for index, n_votes in sorted_items]


def select_best(votes: Dict[int, Number], n_seats: int = 1) -> List[int]:
    '''Return n_seats options with the most votes, lower indices first on ties.'''
    return Tie.break_by_list(get_n_best(votes, n_seats), sorted(votes))


def select_worst(votes: Dict[int, Number], n_seats: int = 1) -> List[int]:
    '''Return n_seats options with the fewest votes, lower indices first on ties.'''
    return select_best({index: -n for index, n in votes.items()}, n_seats)


@dataclasses.dataclass(frozen=True)
class VoteCount:
    '''The number of votes an option received.'''
    option_index: int
    option: ElectionOption
    votes: Number


def vote_counts(options: Sequence[ElectionOption],
                tally: Dict[int, Number],
                ascending: bool = False,
                ) -> Tuple[VoteCount, ...]:
    '''Present a tally as counts ordered from the best option.

    :param ascending: Order from the fewest votes instead (for methods where
        fewer votes are better). Equal counts stay in option order.
    '''
    order = sorted(tally, key=lambda index: (
        tally[index] if ascending else -tally[index], index
    ))
    return tuple(
        VoteCount(index, options[index], tally[index]) for index in order
    )


@dataclasses.dataclass(frozen=True)
class ElectionResult:
    '''Result of an election under a single voting method.

    :param winner: The winning option.
    :param winner_index: Index of the winning option in the option list.
    :param total_votes: Number of voters who took part.
    :param bundles: The bundled ballots the result was counted from.
    '''
    winner: ElectionOption
    winner_index: int
    total_votes: int
    bundles: Tuple[VoteBundle, ...]

    election_type: ClassVar[ElectionType]

    def winning_option(self) -> ElectionOption:
        return self.winner

    def method_kind(self) -> ElectionType:
        return self.election_type

    def to_dict(self) -> Dict[str, Any]:
        return votieworld.persist.dataclass_to_dict(
            self, election_type=self.election_type
        )


class Evaluator(metaclass=abc.ABCMeta):
    '''Evaluate the ratings of voters and select the winning option.

    A root abstract base class for all evaluators.
    '''
    election_type: ElectionType
    ballot_type: Type[votieworld.vote.Ballot]

    @abc.abstractmethod
    def evaluate(self,
                 options: Sequence[ElectionOption],
                 rating_vectors: Sequence[Sequence[OptionRating]],
                 ) -> ElectionResult:
        '''Select the winning option.

        :param options: Options of the election in their fixed order.
        :param rating_vectors: One descending sorted rating vector per voter.
        :raises VotingSystemError: If there are no options or no voters.
        :raises votieworld.vote.RatingVectorError: If a rating vector does
            not rate every option exactly once.
        '''
        raise NotImplementedError

    def bundle(self,
               options: Sequence[ElectionOption],
               rating_vectors: Sequence[Sequence[OptionRating]],
               ) -> List[VoteBundle]:
        '''Check the input, encode the ballots and group identical ones.'''
        if not options:
            raise VotingSystemError('cannot evaluate an election without options')
        if not rating_vectors:
            raise VotingSystemError('cannot evaluate an election without votes')
        ballots = votieworld.vote.fill_ballots(
            self.ballot_type, rating_vectors, n_options=len(options)
        )
        bundles = votieworld.util.bundle_votes(ballots)
        logger.debug('%s: %d ballots in %d bundles',
                     self.election_type, len(ballots), len(bundles))
        return bundles

    def __repr__(self):
        return f'{self.__class__.__name__}()'


def _index_tally(options: Sequence[Any]) -> Dict[int, int]:
    return {index: 0 for index in range(len(options))}


@dataclasses.dataclass(frozen=True)
class FirstPastThePostResult(ElectionResult):
    '''First choice counts, the winner first.'''
    tallies: Tuple[VoteCount, ...]

    election_type = ElectionType.FIRST_PAST_THE_POST


class FirstPastThePost(Evaluator):
    '''First-past-the-post (plurality) - the most first choices win.'''
    election_type = ElectionType.FIRST_PAST_THE_POST
    ballot_type = votieworld.vote.SingleOptionBallot

    def evaluate(self,
                 options: Sequence[ElectionOption],
                 rating_vectors: Sequence[Sequence[OptionRating]],
                 ) -> FirstPastThePostResult:
        bundles = self.bundle(options, rating_vectors)
        tally = _index_tally(options)
        for bundle in bundles:
            tally[bundle.ballot.voted_for] += bundle.votes
        winner_index = select_best(tally)[0]
        return FirstPastThePostResult(
            winner=options[winner_index],
            winner_index=winner_index,
            total_votes=votieworld.util.total_votes(bundles),
            bundles=tuple(bundles),
            tallies=vote_counts(options, tally),
        )


@dataclasses.dataclass(frozen=True)
class AntiPluralityResult(ElectionResult):
    '''Least favorite counts, the winner (fewest) first.'''
    vote_tally: Tuple[VoteCount, ...]

    election_type = ElectionType.ANTI_PLURALITY


class AntiPlurality(Evaluator):
    '''Anti-plurality - every voter votes against their least favorite option.

    The option with the fewest votes against it wins.
    '''
    election_type = ElectionType.ANTI_PLURALITY
    ballot_type = votieworld.vote.LeastFavoriteSingleOptionBallot

    def evaluate(self,
                 options: Sequence[ElectionOption],
                 rating_vectors: Sequence[Sequence[OptionRating]],
                 ) -> AntiPluralityResult:
        bundles = self.bundle(options, rating_vectors)
        tally = _index_tally(options)
        for bundle in bundles:
            tally[bundle.ballot.least_favorite] += bundle.votes
        winner_index = select_worst(tally)[0]
        return AntiPluralityResult(
            winner=options[winner_index],
            winner_index=winner_index,
            total_votes=votieworld.util.total_votes(bundles),
            bundles=tuple(bundles),
            vote_tally=vote_counts(options, tally, ascending=True),
        )
