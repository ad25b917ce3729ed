'''Evaluators that operate sequentially on ranked votes.

This hosts the preferential (instant-runoff) evaluator: the first preferences
are counted, the weakest option is eliminated and its votes transfer to the
next preference still in the race, until some option holds a majority.
'''

import dataclasses
import logging
from typing import Dict, FrozenSet, List, Sequence, Tuple

import votieworld.util
import votieworld.vote
import votieworld.evaluate.core
from votieworld.evaluate.core import ElectionResult, ElectionType, VoteCount
from votieworld.option import ElectionOption
from votieworld.vote import OptionRating

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class Round:
    '''A single count of the preferential evaluation.

    :param tally: Current first preferences of the options still in the race,
        the strongest first.
    :param eliminated: Indices of options eliminated after this count. Empty
        for the final count.
    '''
    tally: Tuple[VoteCount, ...]
    eliminated: FrozenSet[int]


@dataclasses.dataclass(frozen=True)
class PreferentialResult(ElectionResult):
    '''All counts of the evaluation, in order; the last one decided.'''
    rounds: Tuple[Round, ...]

    election_type = ElectionType.PREFERENTIAL


class Preferential(votieworld.evaluate.core.Evaluator):
    '''Instant-runoff voting evaluator.

    An option wins once it holds more than half of all votes, or once it is
    the last one standing. Otherwise the option with the fewest current
    preferences is eliminated; of several such options, the one listed last
    in the election goes out first.
    '''
    election_type = ElectionType.PREFERENTIAL
    ballot_type = votieworld.vote.MandatoryPreferentialBallot

    def evaluate(self,
                 options: Sequence[ElectionOption],
                 rating_vectors: Sequence[Sequence[OptionRating]],
                 ) -> PreferentialResult:
        bundles = self.bundle(options, rating_vectors)
        total = votieworld.util.total_votes(bundles)
        remaining = list(range(len(options)))
        rounds: List[Round] = []
        while True:
            tally = self.count(bundles, remaining)
            logger.debug('count %d: %s', len(rounds) + 1, tally)
            leader = votieworld.evaluate.core.select_best(tally)[0]
            if 2 * tally[leader] > total or len(remaining) == 1:
                logger.info('%s wins with %d of %d votes',
                            options[leader], tally[leader], total)
                rounds.append(Round(
                    votieworld.evaluate.core.vote_counts(options, tally),
                    frozenset()
                ))
                break
            loser = self.select_eliminated(tally)
            logger.info('eliminating %s', options[loser])
            rounds.append(Round(
                votieworld.evaluate.core.vote_counts(options, tally),
                frozenset([loser])
            ))
            remaining.remove(loser)
        return PreferentialResult(
            winner=options[leader],
            winner_index=leader,
            total_votes=total,
            bundles=tuple(bundles),
            rounds=tuple(rounds),
        )

    @staticmethod
    def count(bundles: Sequence[votieworld.util.VoteBundle],
              remaining: Sequence[int],
              ) -> Dict[int, int]:
        '''Count the highest preferences for options still in the race.'''
        tally = {index: 0 for index in remaining}
        for bundle in bundles:
            for index in bundle.ballot.votes:
                if index in tally:
                    tally[index] += bundle.votes
                    break
        return tally

    @staticmethod
    def select_eliminated(tally: Dict[int, int]) -> int:
        fewest = min(tally.values())
        return max(index for index, n_votes in tally.items() if n_votes == fewest)
