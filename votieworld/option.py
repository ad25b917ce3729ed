'''Election options - the buildings (or lack thereof) an election can decide.

An option is one candidate outcome of an election. Options are compared and
hashed by their full value so that two proposals to build the same thing
collapse into one when an option list is assembled.

The following options are recognized:

-   :class:`DoNothing` - apathy; nothing gets built.
-   :class:`MakeFarm` - build a farm producing a given food.
-   :class:`MakeReproductiveZone` - build a zone where voties reproduce.
-   :class:`MoneyHole` - build storage for the treasury overflow.
-   :class:`Mint` - build a mint producing money.
-   :class:`House` - build a house with a given number of dwellings.

Each option belongs to an :class:`OptionCategory` that determines which of
the voter's care traits apply to it.
'''

from __future__ import annotations

import dataclasses
import enum
from typing import FrozenSet, Iterable, List


class OptionCategory(enum.Enum):
    '''The area of voter concern that an option addresses.'''
    NONE = 'none'
    FOOD = 'food'
    REPRODUCTION = 'reproduction'
    MONEY = 'money'
    HOUSING = 'housing'


class FoodGroup(enum.Enum):
    FRUIT = 'fruit'
    VEGETABLE = 'vegetable'
    GRAIN = 'grain'
    MEAT = 'meat'
    DAIRY = 'dairy'
    FAT = 'fat'
    SUGAR = 'sugar'


@dataclasses.dataclass(frozen=True)
class FoodTemplate:
    '''A kind of food a farm can produce.

    :param name: Display name of the food.
    :param kcal: Energy of a single serving.
    :param ml: Volume of a single serving.
    :param groups: Food groups the food belongs to. Voters refusing any of
        these groups will not eat the food.
    :param difficulty: How hard the food is to farm.
    '''
    name: str
    kcal: float
    ml: float
    groups: FrozenSet[FoodGroup] = frozenset()
    difficulty: int = 1

    def __post_init__(self):
        # accept any iterable of groups but keep the template hashable
        object.__setattr__(self, 'groups', frozenset(self.groups))


class ElectionOption:
    '''Base class for election options. Not intended for direct use.'''
    category: OptionCategory = OptionCategory.NONE


@dataclasses.dataclass(frozen=True)
class DoNothing(ElectionOption):
    category = OptionCategory.NONE

    def __str__(self):
        return 'Do Nothing'


@dataclasses.dataclass(frozen=True)
class MakeFarm(ElectionOption):
    food: FoodTemplate
    category = OptionCategory.FOOD

    def __str__(self):
        return f'Make "{self.food.name}" Farm'


@dataclasses.dataclass(frozen=True)
class MakeReproductiveZone(ElectionOption):
    category = OptionCategory.REPRODUCTION

    def __str__(self):
        return 'Make a bone zone'


@dataclasses.dataclass(frozen=True)
class MoneyHole(ElectionOption):
    category = OptionCategory.MONEY

    def __str__(self):
        return 'Make a money hole'


@dataclasses.dataclass(frozen=True)
class Mint(ElectionOption):
    category = OptionCategory.MONEY

    def __str__(self):
        return 'Make a mint'


@dataclasses.dataclass(frozen=True)
class House(ElectionOption):
    dwellings: int
    category = OptionCategory.HOUSING

    def __str__(self):
        return f'Make a {self.dwellings} bedroom house'


def unique_options(options: Iterable[ElectionOption]) -> List[ElectionOption]:
    '''Drop repeated options, keeping the first occurrence of each.'''
    output = []
    for option in options:
        if option not in output:
            output.append(option)
    return output


DEFAULT_FOODS = (
    FoodTemplate('Apple', kcal=95, ml=200,
                 groups=[FoodGroup.FRUIT], difficulty=1),
    FoodTemplate('Carrot', kcal=25, ml=100,
                 groups=[FoodGroup.VEGETABLE], difficulty=1),
    FoodTemplate('Bread', kcal=265, ml=300,
                 groups=[FoodGroup.GRAIN], difficulty=2),
    FoodTemplate('Steak', kcal=680, ml=250,
                 groups=[FoodGroup.MEAT, FoodGroup.FAT], difficulty=4),
    FoodTemplate('Cheese', kcal=400, ml=100,
                 groups=[FoodGroup.DAIRY, FoodGroup.FAT], difficulty=3),
    FoodTemplate('Cake', kcal=350, ml=150,
                 groups=[FoodGroup.GRAIN, FoodGroup.SUGAR, FoodGroup.DAIRY],
                 difficulty=3),
)
