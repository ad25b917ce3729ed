
import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import votieworld.generate
import votieworld.voter
from votieworld.generate import PopulationGenerator, WorldStatsGenerator
from votieworld.stats import DeathReason


def test_population_size_and_names():
    voties = PopulationGenerator(random_state=1).generate(12)
    assert len(voties) == 12
    assert list(voties)[:2] == ['votie01', 'votie02']
    assert list(voties)[-1] == 'votie12'


def test_population_reproducible():
    assert (
        PopulationGenerator(random_state=7).generate(20)
        == PopulationGenerator(random_state=7).generate(20)
    )


def test_population_attributes_complete():
    for attributes in PopulationGenerator(random_state=3).generate(50).values():
        assert attributes.energy is not None
        assert attributes.stomach is not None
        assert attributes.food_preferences is not None
        assert attributes.reproductive.drive
        assert attributes.housing is not None
        prefs = attributes.food_preferences
        assert not (prefs.prefers & prefs.wont_eat)
        low, high = votieworld.voter.CARE_RANGE
        assert low <= attributes.voter.money_care <= high


@pytest.mark.parametrize('share, attr_check', [
    (1., lambda attributes: attributes.housing.is_homeless),
    (0., lambda attributes: not attributes.housing.is_homeless),
])
def test_homeless_share(share, attr_check):
    voties = PopulationGenerator(
        homeless_share=share, random_state=5
    ).generate(30)
    assert all(attr_check(attributes) for attributes in voties.values())


def test_all_hungry():
    voties = PopulationGenerator(hungry_share=1., random_state=5).generate(30)
    for attributes in voties.values():
        assert attributes.energy.current_kcal <= attributes.energy.max_kcal * .3


def test_world_stats():
    stats = WorldStatsGenerator(100, n_samples=10, random_state=2).generate()
    assert stats.population.latest() == 100
    assert len(stats.money) == 10
    for reason in DeathReason:
        assert 0 <= stats.deaths.get(reason) <= 10


def test_world_stats_reproducible():
    first = WorldStatsGenerator(40, random_state=11).generate()
    second = WorldStatsGenerator(40, random_state=11).generate()
    assert first.money.history == second.money.history


@pytest.mark.parametrize('n, first, last', [
    (5, 'votie1', 'votie5'),
    (10, 'votie01', 'votie10'),
    (100, 'votie001', 'votie100'),
])
def test_votie_names(n, first, last):
    names = votieworld.generate.votie_names(n)
    assert len(names) == n
    assert (names[0], names[-1]) == (first, last)
