'''Various utility functions for other modules of votieworld.

Hosts the vote aggregator (:func:`bundle_votes`) that all voting methods use
to group identical ballots before counting.
'''

import operator
import collections
from typing import Any, Dict, Hashable, Iterable, List, NamedTuple, Tuple
from numbers import Number


class VoteBundle(NamedTuple):
    '''A ballot together with the number of voters who cast it.'''
    ballot: Any
    votes: int


def bundle_votes(ballots: Iterable[Hashable]) -> List[VoteBundle]:
    '''Group identical ballots together.

    :param ballots: Ballots of any hashable type, one per voter.
    :returns: Bundles sorted by the number of votes in descending order.
        Bundles with equal counts stay in the order their ballot first
        appeared.
    '''
    counts = collections.defaultdict(int)
    for ballot in ballots:
        counts[ballot] += 1
    return [
        VoteBundle(ballot, n_votes)
        for ballot, n_votes in sorted_votes(counts)
    ]


def total_votes(bundles: Iterable[VoteBundle]) -> int:
    return sum(bundle.votes for bundle in bundles)


def sorted_votes(votes: Dict[Any, Number],
                 descending: bool = True,
                 ) -> List[Tuple[Any, Number]]:
    '''Return votes items sorted by value, keeping the order of equal ones.'''
    return list(sorted(
        votes.items(),
        key=operator.itemgetter(1),
        reverse=descending
    ))
