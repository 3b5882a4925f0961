import logging
import multiprocessing
import os

import numpy as np
from tqdm import tqdm

from protodisk.accrete.accrete import Accrete

logger = logging.getLogger(__name__)


class Universe:
    """
    A collection of independently generated systems. Builds share no state,
    so they are spread over worker processes.
    """

    def __init__(self, systems) -> None:
        self.systems = list(systems)
        self.seeds = [system.seed for system in self.systems]

    def __repr__(self):
        str = "Accrete universe\n"
        str += f"{len(self.systems)} systems generated"
        return str

    def __len__(self):
        return len(self.systems)

    def __iter__(self):
        return iter(self.systems)

    def planet_counts(self):
        return np.array([len(system.planets) for system in self.systems])


def build_system(params):
    return Accrete.from_dict(params).planetary_system()


def create_universe(universe_params, seeds, workers=4):
    """
    Generate one system per seed
    Args:
        universe_params (dict):
            Accrete parameters shared by every system, ``seed`` is ignored
        seeds (iterable):
            Seeds of the systems, in output order
        workers (int):
            Number of worker processes, 1 builds in this process
    Returns:
        Universe
    """
    shared = {key: val for key, val in universe_params.items() if key != "seed"}
    inputs = [dict(shared, seed=int(seed)) for seed in seeds]
    if not inputs:
        return Universe([])

    cores = min(workers, os.cpu_count() or 1, len(inputs))
    if cores <= 1:
        systems = [
            build_system(params)
            for params in tqdm(inputs, desc="Generating systems", leave=False)
        ]
        return Universe(systems)

    logger.info("Generating %d systems on %d cores", len(inputs), cores)
    with multiprocessing.Pool(cores) as pool:
        systems = list(
            tqdm(
                pool.imap(build_system, inputs),
                total=len(inputs),
                desc="Generating systems",
                leave=False,
            )
        )
    return Universe(systems)
