"""A commandline tool running a headless simulation of the world's elections.

Generates a random population of voties and a random world state, then
steps an election office until the requested number of elections has been
held, printing the winners under every voting method.
"""

import argparse
import logging
import random
from typing import Optional

import votieworld.generate
from votieworld.election import HeldElection
from votieworld.evaluate.core import ElectionType
from votieworld.office import ElectionOffice

METHOD_NAMES = {
    election_type.name.lower(): election_type for election_type in ElectionType
}


def positive_float(value: str) -> float:
    number = float(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f'must be positive, got {value}')
    return number


argparser = argparse.ArgumentParser(
    description=__doc__,
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
)
argparser.add_argument(
    '-n', '--population',
    type=int,
    default=50,
    help='number of voties in the world',
)
argparser.add_argument(
    '-s', '--seed',
    type=int,
    help='seed for all random draws; unseeded runs differ every time',
)
argparser.add_argument(
    '-e', '--n-elections',
    type=int,
    default=3,
    help='stop after holding this many elections',
)
argparser.add_argument(
    '-m', '--method',
    choices=sorted(METHOD_NAMES),
    help='hold all elections under this voting method instead of random ones',
)
argparser.add_argument(
    '-t', '--turnout',
    type=positive_float,
    default=.1,
    help='share of voties reaching the polls in every step',
)
argparser.add_argument(
    '--step',
    type=positive_float,
    default=.5,
    help='real seconds per simulation step',
)
argparser.add_argument(
    '--multiplier',
    type=float,
    default=1.,
    help='simulation speed multiplier (clamped to 0.1 to 20)',
)
argparser.add_argument(
    '-v', '--verbose',
    action='store_true',
    help='show all election log messages',
)
argparser.add_argument(
    '-q', '--quiet',
    action='store_true',
    help='do not show any election log messages',
)


def main(population: int = 50,
         seed: Optional[int] = None,
         n_elections: int = 3,
         method: Optional[str] = None,
         turnout: float = .1,
         step: float = .5,
         multiplier: float = 1.,
         verbose: bool = False,
         quiet: bool = False,
         ) -> None:
    # without voters reaching the polls no election is ever held
    if population <= 0 or turnout <= 0 or step <= 0:
        raise ValueError(
            f'population, turnout and step must be positive, got'
            f' {population}, {turnout} and {step}'
        )
    logging.basicConfig(
        level=(
            logging.DEBUG if verbose
            else (logging.WARNING if quiet else logging.INFO)
        ),
        format='%(levelname)-10s %(message)s'
    )
    voties = votieworld.generate.PopulationGenerator(
        random_state=seed
    ).generate(population)
    stats = votieworld.generate.WorldStatsGenerator(
        population, random_state=seed
    ).generate()
    office = ElectionOffice(
        rng=random.Random(seed),
        stats=stats,
        election_type=(METHOD_NAMES[method] if method else None),
        multiplier=multiplier,
    )
    print(f'Simulating {population} voties until {n_elections} elections'
          f' are held')
    while len(office.history) < n_elections:
        for election_id in office.elections:
            for voter_id, attributes in voties.items():
                if office.rng.random() < turnout:
                    office.cast(election_id, voter_id, attributes)
        for held in office.step(step, population=voties.values()):
            show_held_election(held)
            if len(office.history) >= n_elections:
                break


def show_held_election(held: HeldElection) -> None:
    """Show the winners of a held election under all voting methods."""
    print()
    print(f'{held.name} ({held.election.election_type}),'
          f' {len(held.election.votes)} votes')
    print('Options:')
    for option in held.election.options:
        print(' ' * 10 + str(option))
    n_just_chars = max(len(str(election_type)) for election_type in ElectionType)
    for result in held.results:
        print(str(result.method_kind()).ljust(n_just_chars), ' ',
              result.winning_option())


if __name__ == '__main__':
    args = argparser.parse_args()
    main(**vars(args))
