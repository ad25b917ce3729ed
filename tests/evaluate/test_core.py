
import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import votieworld.evaluate.core
from votieworld.evaluate.core import (
    AntiPlurality, ElectionType, Evaluator, FirstPastThePost, Tie,
    VotingSystemError,
)
from votieworld.option import DoNothing, House, Mint, MoneyHole
from votieworld.vote import OptionRating, RatingVectorError

OPTIONS = [DoNothing(), MoneyHole(), Mint(), House(4)]


def ranking(*indices):
    '''A rating vector ranking the options in the given order.'''
    return [
        OptionRating(index, 30 - 10 * rank)
        for rank, index in enumerate(indices)
    ]


def test_tie_break_by_list():
    tie = Tie([1, 2])
    assert Tie.break_by_list([0, tie, tie], [2, 1, 0]) == [0, 2, 1]


@pytest.mark.parametrize('votes, n_seats, expected', [
    ({0: 5, 1: 3, 2: 1}, 2, [0, 1]),
    ({0: 5, 1: 3, 2: 3}, 2, [0, Tie([1, 2])]),
    ({0: 3, 1: 3, 2: 3}, 2, [Tie([0, 1, 2])] * 2),
    ({0: 5, 1: 3}, 3, [0, 1]),
])
def test_get_n_best(votes, n_seats, expected):
    assert votieworld.evaluate.core.get_n_best(votes, n_seats) == expected


def test_select_best_lowest_index_on_tie():
    assert votieworld.evaluate.core.select_best({2: 4, 1: 4, 0: 1}) == [1]
    assert votieworld.evaluate.core.select_best({0: 1, 1: 4, 2: 4}, 2) == [1, 2]


def test_select_worst():
    assert votieworld.evaluate.core.select_worst({0: 3, 1: 1, 2: 1}) == [1]
    assert votieworld.evaluate.core.select_worst({0: 0, 1: 1}) == [0]


def test_fptp():
    votes = (
        [ranking(0, 1, 2, 3)] * 3
        + [ranking(1, 0, 2, 3)] * 2
        + [ranking(2, 3, 1, 0)]
    )
    result = FirstPastThePost().evaluate(OPTIONS, votes)
    assert result.winner_index == 0
    assert result.winner == DoNothing()
    assert result.total_votes == 6
    assert [count.votes for count in result.tallies] == [3, 2, 1, 0]
    assert [count.option_index for count in result.tallies] == [0, 1, 2, 3]


def test_fptp_tie():
    votes = [ranking(2, 0, 1, 3), ranking(1, 0, 2, 3)]
    result = FirstPastThePost().evaluate(OPTIONS, votes)
    assert result.winner_index == 1


def test_fptp_bundles():
    votes = [ranking(3, 0, 1, 2)] * 4 + [ranking(2, 0, 1, 3)]
    result = FirstPastThePost().evaluate(OPTIONS, votes)
    assert len(result.bundles) == 2
    assert result.bundles[0].votes == 4
    assert result.winner == House(4)


def test_anti_plurality():
    votes = (
        [ranking(0, 1, 2, 3)] * 2
        + [ranking(3, 2, 1, 0)]
        + [ranking(0, 3, 2, 1)]
    )
    result = AntiPlurality().evaluate(OPTIONS, votes)
    # 2 is nobody's least favorite
    assert result.winner_index == 2
    assert [count.votes for count in result.vote_tally] == [0, 1, 1, 2]
    assert [count.option_index for count in result.vote_tally] == [2, 0, 1, 3]


def test_anti_plurality_three_way_tie():
    options = OPTIONS[:3]
    votes = [ranking(1, 2, 0), ranking(2, 0, 1), ranking(0, 1, 2)]
    result = AntiPlurality().evaluate(options, votes)
    assert result.winner_index == 0


def test_evaluator_abstract():
    with pytest.raises(TypeError):
        Evaluator()


@pytest.mark.parametrize('options, votes', [
    ([], [ranking(0)]),
    (OPTIONS, []),
])
def test_nothing_to_evaluate(options, votes):
    with pytest.raises(VotingSystemError):
        FirstPastThePost().evaluate(options, votes)


def test_mismatched_vector():
    with pytest.raises(RatingVectorError):
        FirstPastThePost().evaluate(OPTIONS, [ranking(0, 1, 2)])


def test_result_method_kind():
    result = FirstPastThePost().evaluate(OPTIONS, [ranking(0, 1, 2, 3)])
    assert result.method_kind() is ElectionType.FIRST_PAST_THE_POST
    assert result.winning_option() == DoNothing()


def test_result_to_dict():
    result = AntiPlurality().evaluate(OPTIONS, [ranking(0, 1, 2, 3)])
    result_dict = result.to_dict()
    assert result_dict['class'] == (
        'votieworld.evaluate.core.AntiPluralityResult'
    )
    assert result_dict['election_type']['value'] == 'Anti Plurality'
    assert result_dict['winner_index'] == 0


def test_election_type_str():
    assert str(ElectionType.USUAL_JUDGMENT) == 'Usual Judgment'
    assert len(ElectionType) == 7
