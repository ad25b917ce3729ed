
import sys
import os
import random

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import votieworld.option
import votieworld.rating
from votieworld.option import (
    DoNothing, FoodGroup, FoodTemplate, House, MakeFarm, MakeReproductiveZone,
    Mint, MoneyHole,
)
from votieworld.stats import DeathReason, WorldStats
from votieworld.vote import OptionRating, RatingVectorError, WantLevel
from votieworld.voter import (
    Energy, FoodPreferences, Reproductive, RequiresHouse, Voter,
    VoterAttributes,
)

BREAD = FoodTemplate('Bread', 265, 300, groups=[FoodGroup.GRAIN])


class NoJitter:
    def __init__(self):
        self.draws = 0

    def randrange(self, start, stop):
        self.draws += 1
        return 0


def rate_one(option, attributes=None, stats=None):
    if attributes is None:
        attributes = VoterAttributes(Voter())
    if stats is None:
        stats = WorldStats()
    ratings = votieworld.rating.rate(attributes, stats, [option], NoJitter())
    assert len(ratings) == 1
    return ratings[0].rating


def stats_with(history_length=2, **measures):
    stats = WorldStats(history_length=history_length)
    for name, values in measures.items():
        for value in values:
            getattr(stats, name).push(value)
    return stats


def test_empty_options():
    with pytest.raises(RatingVectorError):
        votieworld.rating.rate(
            VoterAttributes(Voter()), WorldStats(), [], NoJitter()
        )


def test_do_nothing_neutral():
    assert rate_one(DoNothing()) == WantLevel.NEUTRAL


def test_farm_hungry():
    hungry = VoterAttributes(Voter(), energy=Energy(100, 1000))
    fed = VoterAttributes(Voter(), energy=Energy(900, 1000))
    assert rate_one(MakeFarm(BREAD), hungry) == WantLevel.POSITIVE
    assert rate_one(MakeFarm(BREAD), fed) == WantLevel.NEUTRAL


def test_farm_liked():
    attributes = VoterAttributes(
        Voter(), food_preferences=FoodPreferences(prefers=[FoodGroup.GRAIN])
    )
    assert rate_one(MakeFarm(BREAD), attributes) == WantLevel.SLIGHTLY_POSITIVE


def test_farm_liked_keeps_hunger():
    attributes = VoterAttributes(
        Voter(),
        energy=Energy(100, 1000),
        food_preferences=FoodPreferences(prefers=[FoodGroup.GRAIN]),
    )
    assert rate_one(MakeFarm(BREAD), attributes) == WantLevel.POSITIVE


def test_farm_veto_beats_hunger():
    attributes = VoterAttributes(
        Voter(food_care=5),
        energy=Energy(0, 1000),
        food_preferences=FoodPreferences(wont_eat=[FoodGroup.GRAIN]),
    )
    assert rate_one(MakeFarm(BREAD), attributes) == (
        WantLevel.EXTREMELY_NEGATIVE + 5
    )


def test_reproductive_zone():
    ready = VoterAttributes(Voter(), reproductive=Reproductive(0., True))
    assert rate_one(MakeReproductiveZone(), ready) == WantLevel.SLIGHTLY_POSITIVE
    assert rate_one(MakeReproductiveZone()) == WantLevel.NEUTRAL


@pytest.mark.parametrize('filled, rating', [
    ([.95, .2], WantLevel.SLIGHTLY_POSITIVE),
    ([.5, .9], WantLevel.NEUTRAL),
])
def test_money_hole(filled, rating):
    stats = stats_with(hole_filled_capacity=filled)
    assert rate_one(MoneyHole(), stats=stats) == rating


@pytest.mark.parametrize('filled, rating', [
    ([.1, .2], WantLevel.POSITIVE),
    ([.4, .4], WantLevel.SLIGHTLY_POSITIVE),
    ([.6, .7], WantLevel.NEUTRAL),
])
def test_mint(filled, rating):
    stats = stats_with(hole_filled_capacity=filled)
    assert rate_one(Mint(), stats=stats) == rating


def test_mint_fresh_world():
    assert rate_one(Mint()) == WantLevel.POSITIVE


def test_house():
    homeless = VoterAttributes(Voter(), housing=RequiresHouse())
    housed = VoterAttributes(Voter(), housing=RequiresHouse(shelter='house'))
    crowded = stats_with(houses_filled=[.95])
    assert rate_one(House(4), homeless) == WantLevel.POSITIVE
    assert rate_one(House(4), housed) == WantLevel.NEUTRAL
    assert rate_one(House(4), housed, crowded) == WantLevel.SLIGHTLY_POSITIVE
    assert rate_one(House(4), homeless, crowded) == (
        WantLevel.POSITIVE + WantLevel.SLIGHTLY_POSITIVE
    )


@pytest.mark.parametrize('option, voter, modifier', [
    (DoNothing(), Voter(money_care=7, food_care=7), 0),
    (MakeFarm(BREAD), Voter(food_care=-4), -4),
    (MakeReproductiveZone(), Voter(reproductive_care=3), 3),
    (MoneyHole(), Voter(money_care=9), 9),
    (Mint(), Voter(money_care=-9, housing_care=2), -9),
    (House(3), Voter(housing_care=6), 6),
])
def test_care_modifier(option, voter, modifier):
    attributes = VoterAttributes(voter)
    assert votieworld.rating.care_modifier(option, attributes) == modifier


def test_death_aversion():
    stats = WorldStats()
    stats.population.push(90)
    stats.deaths.update(DeathReason.STARVATION, 10)
    stats.deaths.update(DeathReason.OLD_AGE, 50)
    attributes = VoterAttributes(Voter(death_care=55))
    # 55 * 10 / 150, rounded up
    assert rate_one(MakeFarm(BREAD), attributes, stats) == 4
    assert rate_one(House(3), attributes, stats) == 0
    assert rate_one(DoNothing(), attributes, stats) == 0


def test_death_aversion_homelessness():
    stats = WorldStats()
    stats.population.push(99)
    stats.deaths.update(DeathReason.HOMELESSNESS, 1)
    attributes = VoterAttributes(Voter(death_care=100))
    assert votieworld.rating.death_aversion(House(5), attributes, stats) == 1


def test_ratings_sorted_stably():
    options = [DoNothing(), MoneyHole(), House(3), Mint()]
    attributes = VoterAttributes(Voter(), housing=RequiresHouse())
    stats = stats_with(hole_filled_capacity=[.6, .6])
    ratings = votieworld.rating.rate(attributes, stats, options, NoJitter())
    assert ratings == [
        OptionRating(2, WantLevel.POSITIVE),
        OptionRating(0, WantLevel.NEUTRAL),
        OptionRating(1, WantLevel.NEUTRAL),
        OptionRating(3, WantLevel.NEUTRAL),
    ]


def test_one_jitter_draw_per_option():
    rng = NoJitter()
    options = [DoNothing(), MoneyHole(), Mint()]
    votieworld.rating.rate(VoterAttributes(Voter()), WorldStats(), options, rng)
    assert rng.draws == 3


def test_jitter_bounds():
    rng = random.Random(1711)
    for i in range(100):
        rating = votieworld.rating.rate(
            VoterAttributes(Voter()), WorldStats(), [DoNothing()], rng
        )[0].rating
        assert WantLevel.SLIGHTLY_NEGATIVE <= rating < WantLevel.SLIGHTLY_POSITIVE


def test_rating_reproducible():
    options = [DoNothing(), MoneyHole(), Mint(), House(4)]
    attributes = VoterAttributes(Voter(money_care=3))
    first = votieworld.rating.rate(
        attributes, WorldStats(), options, random.Random(5)
    )
    second = votieworld.rating.rate(
        attributes, WorldStats(), options, random.Random(5)
    )
    assert first == second
    assert sorted(item.option_index for item in first) == [0, 1, 2, 3]


def test_unknown_option():
    class Spaceship(votieworld.option.ElectionOption):
        pass

    with pytest.raises(TypeError):
        votieworld.rating.baseline_rating(
            Spaceship(), VoterAttributes(Voter()), WorldStats()
        )
