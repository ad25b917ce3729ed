'''The preference rating model - how a votie feels about each option.

Each voter rates every option of an election on a signed integer scale
anchored by the seven levels of :class:`WantLevel`. The rating starts from a
baseline derived from the voter's needs and the state of the world, then
gets randomized slightly (voters do not reason perfectly), adjusted by the
voter's personal care traits and boosted for options that would have
prevented recent deaths.

The resulting rating vector is sorted from the most to the least wanted
option; the ballot encoders in :mod:`votieworld.vote` rely on that order.
'''

import math
import random
from typing import List, Sequence

from votieworld.option import (
    DoNothing, ElectionOption, House, MakeFarm, MakeReproductiveZone, Mint,
    MoneyHole, OptionCategory,
)
from votieworld.stats import DeathReason, WorldStats
from votieworld.voter import VoterAttributes
from votieworld.vote import OptionRating, RatingVectorError, WantLevel

HUNGRY_ENERGY_FRACTION = .3
HOLE_OVERFLOW_FRACTION = .9
TREASURY_LOW_FRACTION = .3
TREASURY_HALF_FRACTION = .5
HOUSES_FULL_FRACTION = .9

DEATH_REASON_CATEGORIES = {
    DeathReason.STARVATION: OptionCategory.FOOD,
    DeathReason.HOMELESSNESS: OptionCategory.HOUSING,
}


def rate(attributes: VoterAttributes,
         stats: WorldStats,
         options: Sequence[ElectionOption],
         rng: random.Random,
         ) -> List[OptionRating]:
    '''Rate all options for a single voter.

    :param attributes: The voter's traits and current needs.
    :param stats: Snapshot of the world statistics.
    :param options: Options of the election, in their fixed order.
    :param rng: The shared simulation random stream. One number is drawn
        per option, in option order.
    :returns: One rating per option, sorted by rating in descending order;
        equally rated options stay in option order.
    :raises votieworld.vote.RatingVectorError: If there are no options.
    '''
    if not options:
        raise RatingVectorError('cannot rate an empty option list')
    ratings = []
    for index, option in enumerate(options):
        rating = baseline_rating(option, attributes, stats)
        rating += rng.randrange(
            WantLevel.SLIGHTLY_NEGATIVE, WantLevel.SLIGHTLY_POSITIVE
        )
        rating += care_modifier(option, attributes)
        rating += death_aversion(option, attributes, stats)
        ratings.append(OptionRating(index, rating))
    return sort_ratings(ratings)


def sort_ratings(ratings: List[OptionRating]) -> List[OptionRating]:
    return sorted(ratings, key=lambda item: item.rating, reverse=True)


def baseline_rating(option: ElectionOption,
                    attributes: VoterAttributes,
                    stats: WorldStats,
                    ) -> int:
    '''Determine the rating from the voter's needs and the world state.

    Includes the food veto: a farm producing food the voter refuses to eat
    is rated extremely negatively no matter how hungry the voter is.
    '''
    if isinstance(option, DoNothing):
        return WantLevel.NEUTRAL
    elif isinstance(option, MakeFarm):
        return _farm_rating(option, attributes)
    elif isinstance(option, MakeReproductiveZone):
        reproductive = attributes.reproductive
        if reproductive is not None and reproductive.wants_to_reproduce():
            return WantLevel.NEUTRAL + WantLevel.SLIGHTLY_POSITIVE
        return WantLevel.NEUTRAL
    elif isinstance(option, MoneyHole):
        if stats.hole_filled_capacity.max() > HOLE_OVERFLOW_FRACTION:
            return WantLevel.SLIGHTLY_POSITIVE
        return WantLevel.NEUTRAL
    elif isinstance(option, Mint):
        filled = stats.hole_filled_capacity.average()
        if filled < TREASURY_LOW_FRACTION:
            return WantLevel.POSITIVE
        elif filled < TREASURY_HALF_FRACTION:
            return WantLevel.SLIGHTLY_POSITIVE
        return WantLevel.NEUTRAL
    elif isinstance(option, House):
        rating = WantLevel.NEUTRAL
        if attributes.housing is not None and attributes.housing.is_homeless:
            rating = WantLevel.POSITIVE
        if stats.houses_filled.max() > HOUSES_FULL_FRACTION:
            rating += WantLevel.SLIGHTLY_POSITIVE
        return rating
    else:
        raise TypeError(f'unknown election option: {option!r}')


def _farm_rating(option: MakeFarm, attributes: VoterAttributes) -> int:
    rating = WantLevel.NEUTRAL
    energy = attributes.energy
    if energy is not None:
        if energy.current_kcal < energy.max_kcal * HUNGRY_ENERGY_FRACTION:
            rating = WantLevel.POSITIVE
    preferences = attributes.food_preferences
    if preferences is not None:
        if preferences.likes(option.food):
            rating = max(rating, WantLevel.SLIGHTLY_POSITIVE)
        if not preferences.will_eat(option.food):
            rating = WantLevel.EXTREMELY_NEGATIVE
    return rating


def care_modifier(option: ElectionOption, attributes: VoterAttributes) -> int:
    '''Return the voter's personal modifier for the option's category.'''
    voter = attributes.voter
    return {
        OptionCategory.NONE: 0,
        OptionCategory.FOOD: voter.food_care,
        OptionCategory.REPRODUCTION: voter.reproductive_care,
        OptionCategory.MONEY: voter.money_care,
        OptionCategory.HOUSING: voter.housing_care,
    }[option.category]


def death_aversion(option: ElectionOption,
                   attributes: VoterAttributes,
                   stats: WorldStats,
                   ) -> int:
    '''Return the bonus for options that would have averted recent deaths.

    The bonus is the voter's death care scaled by the share of the recent
    population (living plus recently dead) that died of a reason the option
    addresses, rounded up.
    '''
    bonus = 0
    for reason, category in DEATH_REASON_CATEGORIES.items():
        if option.category is not category:
            continue
        share = stats.death_share(reason)
        if share:
            bonus += math.ceil(attributes.voter.death_care * share)
    return bonus
