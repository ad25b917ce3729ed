
import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import votieworld.__main__
from votieworld.evaluate.core import ElectionType


def test_argparser():
    args = votieworld.__main__.argparser.parse_args(
        ['-n', '20', '-s', '3', '-m', 'star', '--step', '1']
    )
    assert args.population == 20
    assert args.seed == 3
    assert args.method == 'star'
    assert args.step == 1.
    assert args.n_elections == 3


def test_method_names():
    assert votieworld.__main__.METHOD_NAMES['usual_judgment'] is (
        ElectionType.USUAL_JUDGMENT
    )
    assert len(votieworld.__main__.METHOD_NAMES) == len(ElectionType)


def test_main_runs(capsys):
    votieworld.__main__.main(
        population=15, seed=1, n_elections=1, method='good_ok_bad',
        turnout=.5, step=1., quiet=True,
    )
    output = capsys.readouterr().out
    assert 'Election 1 (Good Ok Bad)' in output
    for election_type in ElectionType:
        assert str(election_type) in output


@pytest.mark.parametrize('flags', [
    ['--turnout', '0'],
    ['-t', '-.5'],
    ['--step', '0'],
    ['--step', '-1'],
])
def test_argparser_rejects_stalling_runs(flags):
    with pytest.raises(SystemExit):
        votieworld.__main__.argparser.parse_args(flags)


@pytest.mark.parametrize('kwargs', [
    {'turnout': 0.},
    {'step': 0.},
    {'step': -1.},
    {'population': 0},
])
def test_main_rejects_stalling_runs(kwargs):
    with pytest.raises(ValueError):
        votieworld.__main__.main(seed=1, n_elections=1, quiet=True, **kwargs)
