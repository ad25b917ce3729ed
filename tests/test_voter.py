
import sys
import os
import random

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import votieworld.voter
from votieworld.option import FoodGroup, FoodTemplate
from votieworld.voter import (
    FoodPreferences, Reproductive, RequiresHouse, Voter, VoterAttributes,
)

STEAK = FoodTemplate('Steak', 680, 250, groups=[FoodGroup.MEAT, FoodGroup.FAT])


def test_new_random_ranges():
    rng = random.Random(1711)
    low, high = votieworld.voter.CARE_RANGE
    for i in range(200):
        voter = Voter.new_random(rng)
        for care in (voter.money_care, voter.food_care,
                     voter.reproductive_care, voter.housing_care):
            assert low <= care <= high
        assert 0 <= voter.death_care <= 100


def test_new_random_reproducible():
    assert (
        Voter.new_random(random.Random(42)) == Voter.new_random(random.Random(42))
    )


def test_food_preferences():
    vegetarian = FoodPreferences(wont_eat=[FoodGroup.MEAT])
    assert not vegetarian.will_eat(STEAK)
    assert not vegetarian.likes(STEAK)
    fat_lover = FoodPreferences(prefers={FoodGroup.FAT})
    assert fat_lover.will_eat(STEAK)
    assert fat_lover.likes(STEAK)


def test_reproductive():
    assert Reproductive(next_reproduction=0., drive=True).wants_to_reproduce()
    assert not Reproductive(next_reproduction=5., drive=True).wants_to_reproduce()
    assert not Reproductive(next_reproduction=0., drive=False).wants_to_reproduce()


def test_requires_house():
    assert RequiresHouse().is_homeless
    assert not RequiresHouse(shelter='house 1').is_homeless


def test_attributes_optional():
    attributes = VoterAttributes(Voter())
    assert attributes.energy is None
    assert attributes.housing is None
