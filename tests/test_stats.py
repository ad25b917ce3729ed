
import sys
import os
from fractions import Fraction

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
from votieworld.stats import Count, DeathReason, Stat, WorldStats


def test_stat_newest_first():
    stat = Stat(history_length=3)
    for value in [1, 2, 3, 4]:
        stat.push(value)
    assert stat.history == [4, 3, 2]
    assert stat.latest() == 4
    assert len(stat) == 3


def test_stat_aggregates():
    stat = Stat(history_length=4)
    for value in [.2, .8, .5]:
        stat.push(value)
    assert stat.max() == .8
    assert stat.min() == .2
    assert stat.median() == .5
    # unfilled slots count as zeros
    assert stat.average() == pytest.approx(1.5 / 4)


def test_stat_empty():
    stat = Stat()
    assert stat.max() == 0
    assert stat.min() == 0
    assert stat.median() == 0
    assert stat.average() == 0
    assert stat.latest() == 0


@pytest.mark.parametrize('history_length', [0, -1])
def test_stat_needs_history(history_length):
    with pytest.raises(ValueError):
        Stat(history_length)
    with pytest.raises(ValueError):
        WorldStats(history_length=history_length)


def test_count():
    count = Count({DeathReason.STARVATION: 2})
    count.update(DeathReason.HOMELESSNESS, 3)
    count.update(DeathReason.STARVATION, 1)
    assert count.get(DeathReason.STARVATION) == 1
    assert count.get(DeathReason.OLD_AGE) == 0
    assert count.sum() == 4
    assert count.max() == 3
    assert count.min() == 1


def test_death_share():
    stats = WorldStats()
    stats.population.push(90)
    stats.deaths.update(DeathReason.STARVATION, 10)
    assert stats.recent_population() == 100
    assert stats.death_share(DeathReason.STARVATION) == Fraction(1, 10)
    assert stats.death_share(DeathReason.HOMELESSNESS) == 0


def test_death_share_empty_world():
    assert WorldStats().death_share(DeathReason.STARVATION) == 0
