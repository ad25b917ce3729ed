'''Approval voting.

Every voter approves all options they rate at least slightly positively
(see :class:`votieworld.vote.MultipleOptionBallot`); the option approved by
the most voters wins.
'''

import dataclasses
from typing import Sequence, Tuple

import votieworld.util
import votieworld.vote
import votieworld.evaluate.core
from votieworld.evaluate.core import ElectionResult, ElectionType, VoteCount
from votieworld.option import ElectionOption
from votieworld.vote import OptionRating


@dataclasses.dataclass(frozen=True)
class ApprovalResult(ElectionResult):
    '''Approval totals, the winner first.'''
    approvals: Tuple[VoteCount, ...]

    election_type = ElectionType.APPROVAL


class Approval(votieworld.evaluate.core.Evaluator):
    '''Approval voting evaluator.

    Options no voter approved still appear in the totals with zero
    approvals. If nobody approved anything, the first option wins.
    '''
    election_type = ElectionType.APPROVAL
    ballot_type = votieworld.vote.MultipleOptionBallot

    def evaluate(self,
                 options: Sequence[ElectionOption],
                 rating_vectors: Sequence[Sequence[OptionRating]],
                 ) -> ApprovalResult:
        bundles = self.bundle(options, rating_vectors)
        totals = {index: 0 for index in range(len(options))}
        for bundle in bundles:
            for index in bundle.ballot.voted_for:
                totals[index] += bundle.votes
        winner_index = votieworld.evaluate.core.select_best(totals)[0]
        return ApprovalResult(
            winner=options[winner_index],
            winner_index=winner_index,
            total_votes=votieworld.util.total_votes(bundles),
            bundles=tuple(bundles),
            approvals=votieworld.evaluate.core.vote_counts(options, totals),
        )
