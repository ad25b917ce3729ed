"""Cardinal voting systems - systems that use graded or score votes.

Voters grade every option independently instead of ranking them:

-   :class:`GoodOkBad` grades every option as good, ok or bad, selects two
    finalists by the number of good and bad grades and runs them off.
-   :class:`STAR` (Score Then Automatic Runoff) scores options from 0 to 5,
    and runs off the two options with the highest total score.
-   :class:`UsualJudgment` scores options from 0 to 6 and selects the option
    with the best majority grade, breaking ties in favor of the option whose
    grades are balanced most evenly around it.
"""

import collections
import dataclasses
import logging
from fractions import Fraction
from numbers import Number
from typing import Callable, Dict, Optional, Sequence, Tuple

import votieworld.util
import votieworld.vote
import votieworld.evaluate.core
from votieworld.evaluate.core import ElectionResult, ElectionType
from votieworld.option import ElectionOption
from votieworld.util import VoteBundle
from votieworld.vote import OptionRating

logger = logging.getLogger(__name__)

STAR_MAX_SCORE = 5
USUAL_JUDGMENT_MAX_SCORE = 6
MAJORITY_JUDGMENT_ROUNDS = 50


@dataclasses.dataclass(frozen=True)
class Runoff:
    '''A one-on-one comparison of two finalists.

    Every voter supports the finalist they graded strictly better; voters
    grading both equally support neither. An exact tie goes to the first
    finalist.

    :param finalists: Indices of the two finalists.
    :param votes: Number of voters preferring each of the finalists.
    '''
    finalists: Tuple[int, int]
    votes: Tuple[int, int]

    @property
    def winner_index(self) -> int:
        if self.votes[1] > self.votes[0]:
            return self.finalists[1]
        else:
            return self.finalists[0]


def run_off(bundles: Sequence[VoteBundle],
            first: int,
            second: int,
            ) -> Runoff:
    '''Compare the grades of two finalists ballot by ballot.

    :param bundles: Bundles of ballots with a `votes` tuple indexed by
        option index, holding comparable grades.
    '''
    first_votes = 0
    second_votes = 0
    for bundle in bundles:
        first_grade = bundle.ballot.votes[first]
        second_grade = bundle.ballot.votes[second]
        if first_grade > second_grade:
            first_votes += bundle.votes
        elif second_grade > first_grade:
            second_votes += bundle.votes
    return Runoff((first, second), (first_votes, second_votes))


@dataclasses.dataclass(frozen=True)
class GradeCount:
    '''The number of good, ok and bad grades an option received.'''
    option_index: int
    option: ElectionOption
    good: int
    ok: int
    bad: int


@dataclasses.dataclass(frozen=True)
class GoodOkBadResult(ElectionResult):
    '''Grade counts in option order and the runoff, if one was needed.'''
    grades: Tuple[GradeCount, ...]
    runoff: Optional[Runoff]

    election_type = ElectionType.GOOD_OK_BAD


class GoodOkBad(votieworld.evaluate.core.Evaluator):
    '''Good/ok/bad grading with a runoff.

    The three options with the most good grades are shortlisted; of those,
    the two with the fewest bad grades proceed to the runoff. An election
    with a single option elects it without a runoff.
    '''
    election_type = ElectionType.GOOD_OK_BAD
    ballot_type = votieworld.vote.GoodBadOkBallot

    SHORTLIST_SIZE = 3

    def evaluate(self,
                 options: Sequence[ElectionOption],
                 rating_vectors: Sequence[Sequence[OptionRating]],
                 ) -> GoodOkBadResult:
        bundles = self.bundle(options, rating_vectors)
        counts = {index: collections.Counter() for index in range(len(options))}
        for bundle in bundles:
            for index, grade in enumerate(bundle.ballot.votes):
                counts[index][grade] += bundle.votes
        grades = tuple(
            GradeCount(
                index, options[index],
                good=counts[index][votieworld.vote.GoodOkBad.GOOD],
                ok=counts[index][votieworld.vote.GoodOkBad.OK],
                bad=counts[index][votieworld.vote.GoodOkBad.BAD],
            )
            for index in range(len(options))
        )
        shortlist = votieworld.evaluate.core.select_best(
            {item.option_index: item.good for item in grades},
            min(self.SHORTLIST_SIZE, len(options))
        )
        finalists = sorted(shortlist, key=lambda index: grades[index].bad)[:2]
        logger.debug('good/ok/bad shortlist %s, finalists %s',
                     shortlist, finalists)
        if len(finalists) == 1:
            runoff = None
            winner_index = finalists[0]
        else:
            runoff = run_off(bundles, *finalists)
            winner_index = runoff.winner_index
        return GoodOkBadResult(
            winner=options[winner_index],
            winner_index=winner_index,
            total_votes=votieworld.util.total_votes(bundles),
            bundles=tuple(bundles),
            grades=grades,
            runoff=runoff,
        )


@dataclasses.dataclass(frozen=True)
class STARResult(ElectionResult):
    '''Total scores, the best first, and the runoff, if one was needed.'''
    scores: Tuple[votieworld.evaluate.core.VoteCount, ...]
    runoff: Optional[Runoff]

    election_type = ElectionType.STAR


class STAR(votieworld.evaluate.core.Evaluator):
    '''Score Then Automatic Run-Off (STAR) cardinal voting system.

    Options are scored from 0 to 5 and the two with the highest total scores
    are run off against each other. An exact runoff tie goes to the finalist
    with the higher total score.
    '''
    election_type = ElectionType.STAR
    ballot_type = votieworld.vote.ScoreBallot.of(STAR_MAX_SCORE)

    def evaluate(self,
                 options: Sequence[ElectionOption],
                 rating_vectors: Sequence[Sequence[OptionRating]],
                 ) -> STARResult:
        bundles = self.bundle(options, rating_vectors)
        totals = {index: 0 for index in range(len(options))}
        for bundle in bundles:
            for index, score in enumerate(bundle.ballot.votes):
                totals[index] += score * bundle.votes
        finalists = votieworld.evaluate.core.select_best(totals, 2)
        logger.debug('STAR totals %s, finalists %s', totals, finalists)
        if len(finalists) == 1:
            runoff = None
            winner_index = finalists[0]
        else:
            runoff = run_off(bundles, *finalists)
            winner_index = runoff.winner_index
        return STARResult(
            winner=options[winner_index],
            winner_index=winner_index,
            total_votes=votieworld.util.total_votes(bundles),
            bundles=tuple(bundles),
            scores=votieworld.evaluate.core.vote_counts(options, totals),
            runoff=runoff,
        )


@dataclasses.dataclass(frozen=True)
class ScoreCount:
    '''All scores an option received.

    :param scores: The scores, in ascending order.
    :param histogram: Number of voters who gave each score, indexed by score.
    '''
    option_index: int
    option: ElectionOption
    scores: Tuple[int, ...]
    histogram: Tuple[int, ...]

    @classmethod
    def collect(cls,
                option_index: int,
                option: ElectionOption,
                bundles: Sequence[VoteBundle],
                max_score: int,
                ) -> 'ScoreCount':
        scores = []
        histogram = [0] * (max_score + 1)
        for bundle in bundles:
            score = bundle.ballot.votes[option_index]
            scores.extend([score] * bundle.votes)
            histogram[score] += bundle.votes
        return cls(option_index, option, tuple(sorted(scores)), tuple(histogram))

    @property
    def total(self) -> int:
        return len(self.scores)

    def majority_grade(self) -> int:
        '''Return the highest grade given or exceeded by at least half the voters.'''
        at_least = 0
        for grade in reversed(range(len(self.histogram))):
            at_least += self.histogram[grade]
            if 2 * at_least >= self.total:
                return grade
        return 0

    def share_above(self, grade: int) -> Fraction:
        return Fraction(sum(self.histogram[grade+1:]), self.total)

    def share_below(self, grade: int) -> Fraction:
        return Fraction(sum(self.histogram[:grade]), self.total)

    def tiebreak_score(self, n: int) -> Number:
        '''Return the n-th tiebreak score of the option.

        The score is the majority grade shifted by
        ``(p^n - q^n) / (2 * (1 - (p^n - q^n)))`` where p and q are the
        shares of voters grading the option strictly above and strictly below
        its majority grade.
        '''
        grade = self.majority_grade()
        difference = (
            self.share_above(grade) ** n - self.share_below(grade) ** n
        )
        return grade + difference / (2 * (1 - difference))

    def tiebreak_deviation(self, n: int) -> Number:
        '''Return how far the n-th tiebreak score strays from the majority
        grade, negated so that the steadiest option scores highest.
        '''
        return -abs(self.tiebreak_score(n) - self.majority_grade())


@dataclasses.dataclass(frozen=True)
class UsualJudgmentResult(ElectionResult):
    '''Score counts in option order.

    :param tiebreak_rounds: Number of tiebreak scores computed to separate
        options sharing the best majority grade.
    '''
    score_counts: Tuple[ScoreCount, ...]
    tiebreak_rounds: int

    election_type = ElectionType.USUAL_JUDGMENT


class UsualJudgment(votieworld.evaluate.core.Evaluator):
    '''Usual Judgment, a median-based cardinal voting system.

    The option with the best majority grade wins. Options sharing it are
    compared by their tiebreak scores for increasing exponents, keeping only
    the ones whose score strays least from the shared majority grade, until
    one remains. If max_rounds exponents do not separate them, the first of
    the remaining options wins.

    :param max_rounds: Number of tiebreak scores to try before falling back.
    '''
    election_type = ElectionType.USUAL_JUDGMENT
    ballot_type = votieworld.vote.ScoreBallot.of(USUAL_JUDGMENT_MAX_SCORE)

    def __init__(self, max_rounds: int = MAJORITY_JUDGMENT_ROUNDS):
        self.max_rounds = max_rounds

    def evaluate(self,
                 options: Sequence[ElectionOption],
                 rating_vectors: Sequence[Sequence[OptionRating]],
                 ) -> UsualJudgmentResult:
        bundles = self.bundle(options, rating_vectors)
        score_counts = tuple(
            ScoreCount.collect(
                index, option, bundles, self.ballot_type.max_score
            )
            for index, option in enumerate(options)
        )
        grades = {
            count.option_index: count.majority_grade()
            for count in score_counts
        }
        logger.debug('majority grades: %s', grades)
        best_grade = max(grades.values())
        remaining = [index for index, grade in grades.items()
                     if grade == best_grade]
        n_rounds = 0
        while len(remaining) > 1 and n_rounds < self.max_rounds:
            remaining = self._best_by(
                remaining,
                lambda index: score_counts[index].tiebreak_deviation(n_rounds)
            )
            n_rounds += 1
        if len(remaining) > 1:
            logger.warning(
                'options %s still tied after %d tiebreak rounds,'
                ' electing the first', remaining, n_rounds
            )
        winner_index = remaining[0]
        return UsualJudgmentResult(
            winner=options[winner_index],
            winner_index=winner_index,
            total_votes=votieworld.util.total_votes(bundles),
            bundles=tuple(bundles),
            score_counts=score_counts,
            tiebreak_rounds=n_rounds,
        )

    @staticmethod
    def _best_by(indices: Sequence[int],
                 key: Callable[[int], Number],
                 ) -> list:
        values: Dict[int, Number] = {index: key(index) for index in indices}
        best = max(values.values())
        return [index for index in indices if values[index] == best]

    def __repr__(self):
        return f'{self.__class__.__name__}(max_rounds={self.max_rounds})'
