"""Generate random voter populations and world states for simulations.

Without the agent simulation around it, the election engine still needs
voters to run. :class:`PopulationGenerator` produces voties with random
traits and needs, and :class:`WorldStatsGenerator` produces a plausible
history of world statistics for them to react to.
"""

import random
from typing import Dict, List, Optional

from votieworld.option import FoodGroup
from votieworld.stats import DeathReason, WorldStats
from votieworld.voter import (
    Energy, FoodPreferences, Reproductive, RequiresHouse, Stomach, Voter,
    VoterAttributes,
)

MAX_KCAL = 2000.


class PopulationGenerator:
    """Generate voties with random traits and needs.

    Every votie gets random care traits (see :meth:`Voter.new_random`) and
    all optional attributes; the shares determine how many of them are in
    need.

    :param hungry_share: Probability of a votie running low on energy.
    :param reproductive_share: Probability of a votie being ready to
        reproduce.
    :param homeless_share: Probability of a votie having no shelter.
    :param wont_eat_share: Probability of a votie refusing a given food group.
    :param prefers_share: Probability of a votie preferring a given food
        group.
    :param random_state: Seed for the generator.
    """
    def __init__(self,
                 hungry_share: float = .3,
                 reproductive_share: float = .2,
                 homeless_share: float = .2,
                 wont_eat_share: float = .05,
                 prefers_share: float = .15,
                 random_state: Optional[int] = None,
                 ):
        self.hungry_share = hungry_share
        self.reproductive_share = reproductive_share
        self.homeless_share = homeless_share
        self.wont_eat_share = wont_eat_share
        self.prefers_share = prefers_share
        self.random_state = random_state
        self.rng = random.Random(random_state)

    def generate(self, n: int) -> Dict[str, VoterAttributes]:
        """Generate n voties keyed by their names."""
        return {name: self.votie() for name in votie_names(n)}

    def votie(self) -> VoterAttributes:
        rng = self.rng
        if rng.random() < self.hungry_share:
            current_kcal = rng.uniform(0, MAX_KCAL * .3)
        else:
            current_kcal = rng.uniform(MAX_KCAL * .3, MAX_KCAL)
        wont_eat = self._pick_groups(self.wont_eat_share)
        prefers = self._pick_groups(self.prefers_share) - wont_eat
        return VoterAttributes(
            voter=Voter.new_random(rng),
            energy=Energy(current_kcal, MAX_KCAL),
            stomach=Stomach(content_ml=rng.uniform(0, 1000.)),
            food_preferences=FoodPreferences(wont_eat, prefers),
            reproductive=Reproductive(
                next_reproduction=(
                    0. if rng.random() < self.reproductive_share
                    else rng.uniform(1, 60)
                ),
                drive=True,
            ),
            housing=RequiresHouse(
                shelter=(
                    None if rng.random() < self.homeless_share else 'house'
                ),
            ),
        )

    def _pick_groups(self, share: float) -> frozenset:
        return frozenset(
            group for group in FoodGroup if self.rng.random() < share
        )


class WorldStatsGenerator:
    """Generate a history of world statistics.

    :param population: Current size of the population.
    :param n_samples: Number of samples to generate for every measure.
    :param death_rate: Upper bound on the share of the population that died
        recently, per death reason.
    :param random_state: Seed for the generator.
    """
    def __init__(self,
                 population: int,
                 n_samples: int = 20,
                 death_rate: float = .1,
                 random_state: Optional[int] = None,
                 ):
        self.population = population
        self.n_samples = n_samples
        self.death_rate = death_rate
        self.random_state = random_state
        self.rng = random.Random(random_state)

    def generate(self) -> WorldStats:
        rng = self.rng
        stats = WorldStats()
        for _ in range(self.n_samples):
            stats.money.push(rng.randint(0, 1000))
            stats.hole_filled_capacity.push(rng.random())
            stats.houses_filled.push(rng.random())
            stats.population.push(self.population)
        for reason in DeathReason:
            stats.deaths.update(
                reason,
                rng.randint(0, int(self.population * self.death_rate))
            )
        return stats


def votie_names(n: int) -> List[str]:
    width = len(str(n))
    return [f'votie{i:0{width}d}' for i in range(1, n + 1)]
