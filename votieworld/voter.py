'''Voter traits and the slices of agent state that voters bring to the polls.

The agent simulation owns these objects; the election engine only reads
them. :class:`VoterAttributes` bundles everything a single voter presents
when casting a vote. Apart from the :class:`Voter` traits, any attribute
may be missing, in which case it contributes nothing to the ratings.
'''

from __future__ import annotations

import dataclasses
import random
from typing import Any, FrozenSet, Optional

from votieworld.option import FoodGroup, FoodTemplate

CARE_RANGE = (-10, 10)
DEATH_CARE_RANGE = (0, 100)


@dataclasses.dataclass
class Voter:
    '''Personal voting traits of a votie.

    The care traits are signed integers added to the rating of every option
    in the matching category.

    :param money_care: Modifier for mints and money holes.
    :param food_care: Modifier for farms.
    :param reproductive_care: Modifier for reproductive zones.
    :param housing_care: Modifier for houses.
    :param death_care: How strongly recent deaths sway the voter towards
        options that would have prevented them.
    '''
    money_care: int = 0
    food_care: int = 0
    reproductive_care: int = 0
    housing_care: int = 0
    death_care: int = 0

    @classmethod
    def new_random(cls, rng: random.Random) -> Voter:
        return cls(
            money_care=rng.randint(*CARE_RANGE),
            food_care=rng.randint(*CARE_RANGE),
            reproductive_care=rng.randint(*CARE_RANGE),
            housing_care=rng.randint(*CARE_RANGE),
            death_care=rng.randint(*DEATH_CARE_RANGE),
        )


@dataclasses.dataclass
class Energy:
    current_kcal: float
    max_kcal: float


@dataclasses.dataclass
class Stomach:
    content_ml: float = 0.
    size_ml: float = 1000.


@dataclasses.dataclass
class FoodPreferences:
    '''Food groups a votie refuses and food groups it likes.'''
    wont_eat: FrozenSet[FoodGroup] = frozenset()
    prefers: FrozenSet[FoodGroup] = frozenset()

    def __post_init__(self):
        self.wont_eat = frozenset(self.wont_eat)
        self.prefers = frozenset(self.prefers)

    def will_eat(self, food: FoodTemplate) -> bool:
        return not any(group in self.wont_eat for group in food.groups)

    def likes(self, food: FoodTemplate) -> bool:
        return any(group in self.prefers for group in food.groups)


@dataclasses.dataclass
class Reproductive:
    '''Reproductive drive.

    :param next_reproduction: Simulated seconds until the votie is ready to
        reproduce again.
    '''
    next_reproduction: float = 0.
    drive: bool = False

    def wants_to_reproduce(self) -> bool:
        return self.drive and self.next_reproduction <= 0


@dataclasses.dataclass
class RequiresHouse:
    '''Housing need. ``shelter`` is None while the votie is homeless.'''
    shelter: Optional[Any] = None

    @property
    def is_homeless(self) -> bool:
        return self.shelter is None


@dataclasses.dataclass
class VoterAttributes:
    '''Everything a voter brings to the polls.'''
    voter: Voter
    energy: Optional[Energy] = None
    stomach: Optional[Stomach] = None
    food_preferences: Optional[FoodPreferences] = None
    reproductive: Optional[Reproductive] = None
    housing: Optional[RequiresHouse] = None
