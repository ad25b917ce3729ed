'''Named voting systems available to the elections of the world.

Maps every :class:`votieworld.evaluate.core.ElectionType` to the evaluator
that implements it.
'''

import random
from typing import Dict, List, Sequence

import votieworld.evaluate
import votieworld.evaluate.approval
import votieworld.evaluate.cardinal
import votieworld.evaluate.sequential
from votieworld.evaluate.core import ElectionResult, ElectionType
from votieworld.option import ElectionOption
from votieworld.vote import OptionRating


class VotingSystem:
    """A named voting system. Wraps an election evaluator.

    :param name: Display name of the system.
    :param evaluator: Evaluator representing the system.
    """
    def __init__(self, name: str, evaluator: votieworld.evaluate.Evaluator):
        self.name = name
        self.evaluator = evaluator

    @property
    def election_type(self) -> ElectionType:
        return self.evaluator.election_type

    def evaluate(self, *args, **kwargs) -> ElectionResult:
        """Return the evaluator's results of the system for the votes given."""
        return self.evaluator.evaluate(*args, **kwargs)

    def __repr__(self):
        return f'<VotingSystem {self.name}: {self.evaluator!r}>'


EVALUATORS: Dict[ElectionType, VotingSystem] = {
    system.election_type: system for system in [
        VotingSystem(
            str(ElectionType.FIRST_PAST_THE_POST),
            votieworld.evaluate.FirstPastThePost()
        ),
        VotingSystem(
            str(ElectionType.APPROVAL),
            votieworld.evaluate.approval.Approval()
        ),
        VotingSystem(
            str(ElectionType.PREFERENTIAL),
            votieworld.evaluate.sequential.Preferential()
        ),
        VotingSystem(
            str(ElectionType.GOOD_OK_BAD),
            votieworld.evaluate.cardinal.GoodOkBad()
        ),
        VotingSystem(
            str(ElectionType.STAR),
            votieworld.evaluate.cardinal.STAR()
        ),
        VotingSystem(
            str(ElectionType.ANTI_PLURALITY),
            votieworld.evaluate.AntiPlurality()
        ),
        VotingSystem(
            str(ElectionType.USUAL_JUDGMENT),
            votieworld.evaluate.cardinal.UsualJudgment()
        ),
    ]
}


def get_system(election_type: ElectionType) -> VotingSystem:
    return EVALUATORS[election_type]


def evaluate(election_type: ElectionType,
             options: Sequence[ElectionOption],
             rating_vectors: Sequence[Sequence[OptionRating]],
             ) -> ElectionResult:
    '''Evaluate the election under the given voting method.

    :param election_type: The voting method to use.
    :param options: Options of the election in their fixed order.
    :param rating_vectors: One descending sorted rating vector per voter.
    '''
    return get_system(election_type).evaluate(options, rating_vectors)


def evaluate_all(primary: ElectionType,
                 options: Sequence[ElectionOption],
                 rating_vectors: Sequence[Sequence[OptionRating]],
                 ) -> List[ElectionResult]:
    '''Evaluate the election under every voting method.

    :returns: The result of the primary method first, then the results of
        the other methods in declaration order of :class:`ElectionType`.
    '''
    order = [primary] + [
        election_type for election_type in ElectionType
        if election_type is not primary
    ]
    return [
        evaluate(election_type, options, rating_vectors)
        for election_type in order
    ]


def random_election_type(rng: random.Random) -> ElectionType:
    return rng.choice(list(ElectionType))
