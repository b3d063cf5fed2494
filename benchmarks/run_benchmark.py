"""Benchmark runner for the three reference problems.

Runs the sphere problem, the three-criteria quadratic problem and the
constrained parabola, dumps every selected population to CSV, and measures
the parabola error to its known optima over repeated trials, sweeping the
population size and the mutation chance.

Usage:
    uv run python benchmarks/run_benchmark.py
"""

import csv
import json
import logging
import sys
import time
from datetime import UTC, datetime
from functools import partial
from pathlib import Path

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import numpy as np

from benchmarks.metrics import hypervolume, optima_error
from benchmarks.problems import (
    CRITERIA_BOUNDS,
    PARABOLA_BOUNDS,
    PARABOLA_OPTIMA,
    SPHERE_BOUNDS,
    criteria_evaluators,
    criteria_reference_point,
    parabola_evaluator,
    sphere_evaluator,
)
from radial_evo import (
    GeneticFactory,
    GeneticParameters,
    LinearAnnealing,
    constrained_preference,
    decluster_until_stable,
    evolve,
    rank_constrained,
    run_trials,
    summarize_trials,
)

# Configure logging
logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)

RESULTS_DIR = Path(__file__).parent / "results"

# Sphere
SPHERE_POP_SIZE = 100
SPHERE_GENERATIONS = 100

# Three criteria
CRITERIA_POP_SIZE = 300
CRITERIA_GENERATIONS = 100
CRITERIA_SEARCH_RADIUS = 1.0
CRITERIA_ALLOW_RADIUS = 0.2
CRITERIA_MAX_CHOICES = 5

# Constrained parabola
PARABOLA_POP_SIZE = 300
PARABOLA_GENERATIONS = 100
PARABOLA_SEARCH_RADIUS = 0.01
PARABOLA_ALLOW_RADIUS = 0.005
PARABOLA_MUTATION = 0.2
PARABOLA_EPS_START = 0.01
PARABOLA_EPS_END = 0.005
PARABOLA_ELITES = 5
PARABOLA_RANGE = 0.7

RANK_PRESSURE = 1.3
N_TRIALS = 100
N_JOBS = -1
SEED = 0

POP_SIZE_SWEEP = list(range(50, 501, 25))
MUTATION_SWEEP = [m / 100 for m in range(0, 101, 5)]


def dump_population(writer, generation: int, population) -> None:
    """Write one ``generation, x0, x1, fitness...`` row per chromosome."""
    for ch in population:
        writer.writerow([generation, *ch.point.tolist(), *ch.fitnesses().tolist()])


def run_sphere(seed: int) -> float:
    """Minimize the sphere function; returns the best value found."""
    fe = sphere_evaluator()
    params = GeneticParameters(
        lower=SPHERE_BOUNDS[0],
        upper=SPHERE_BOUNDS[1],
        evaluators=[fe],
        max_cross_choices=5,
        maximize=False,
    )
    result = evolve(GeneticFactory(params, seed=seed), SPHERE_POP_SIZE, SPHERE_GENERATIONS)
    return fe.fitness(result.best())


def run_criteria(seed: int, dump_path: Path | None = None) -> float:
    """Minimize the three criteria together; returns the hypervolume of the final population."""
    params = GeneticParameters(
        lower=CRITERIA_BOUNDS[0],
        upper=CRITERIA_BOUNDS[1],
        evaluators=criteria_evaluators(),
        search_radius=CRITERIA_SEARCH_RADIUS,
        cross_allow_radius=CRITERIA_ALLOW_RADIUS,
        max_cross_choices=CRITERIA_MAX_CHOICES,
        rank_pressure=RANK_PRESSURE,
        maximize=False,
    )
    factory = GeneticFactory(params, seed=seed)

    if dump_path is None:
        result = evolve(factory, CRITERIA_POP_SIZE, CRITERIA_GENERATIONS)
    else:
        with open(dump_path, "w", newline="") as f:
            writer = csv.writer(f)
            result = evolve(
                factory,
                CRITERIA_POP_SIZE,
                CRITERIA_GENERATIONS,
                callback=partial(dump_population, writer),
            )

    objectives = np.array([ch.fitnesses() for ch in result.population])
    return hypervolume(objectives, criteria_reference_point())


def run_parabola(
    seed: int,
    population_size: int = PARABOLA_POP_SIZE,
    mutation_chance: float = PARABOLA_MUTATION,
    dump_path: Path | None = None,
) -> list:
    """Solve the constrained parabola; returns the declustered, ranked elites."""
    fe = parabola_evaluator(eps=PARABOLA_EPS_START)
    params = GeneticParameters(
        lower=PARABOLA_BOUNDS[0],
        upper=PARABOLA_BOUNDS[1],
        evaluators=[fe],
        search_radius=PARABOLA_SEARCH_RADIUS,
        cross_allow_radius=PARABOLA_ALLOW_RADIUS,
        mutation_chance=mutation_chance,
        rank_pressure=RANK_PRESSURE,
        maximize=False,
    )
    schedule = LinearAnnealing(fe, start=PARABOLA_EPS_START, end=PARABOLA_EPS_END, steps=PARABOLA_GENERATIONS)
    factory = GeneticFactory(params, seed=seed)
    elite_count = min(PARABOLA_ELITES, population_size - 1)

    if dump_path is None:
        result = evolve(factory, population_size, PARABOLA_GENERATIONS, elite_count=elite_count, annealing=schedule)
    else:
        with open(dump_path, "w", newline="") as f:
            writer = csv.writer(f)
            result = evolve(
                factory,
                population_size,
                PARABOLA_GENERATIONS,
                elite_count=elite_count,
                annealing=schedule,
                callback=partial(dump_population, writer),
            )

    exemplars = decluster_until_stable(list(result.elites), PARABOLA_RANGE, constrained_preference(fe))
    return rank_constrained(exemplars, fe)


def parabola_error(seed: int, population_size: int = PARABOLA_POP_SIZE, mutation_chance: float = PARABOLA_MUTATION):
    """Mean distance from the two known optima to the closest exemplar."""
    exemplars = run_parabola(seed, population_size=population_size, mutation_chance=mutation_chance)
    points = np.array([ch.point for ch in exemplars])
    return float(optima_error(points, PARABOLA_OPTIMA).mean())


def sweep(name: str, values: list, make_trial) -> list[dict]:
    """Run N_TRIALS parabola trials per value and write ``index, time, error`` rows."""
    rows = []
    for i, value in enumerate(values):
        outcomes = run_trials(make_trial(value), N_TRIALS, n_jobs=N_JOBS, seed=SEED + i, prefer="threads")
        summary = summarize_trials(outcomes)
        logger.info(
            f"  {name}={value}: error={summary.mean_value}, time={summary.mean_elapsed:.3f}s, "
            f"failed={summary.n_failed}"
        )
        rows.append(
            {name: value, "time_seconds": summary.mean_elapsed, "error": summary.mean_value, "failed": summary.n_failed}
        )

    with open(RESULTS_DIR / f"parabola_errors_by_{name}.csv", "w", newline="") as f:
        writer = csv.writer(f)
        for i, row in enumerate(rows):
            writer.writerow([i, row["time_seconds"], row["error"]])
    return rows


def run_benchmark() -> dict:
    """Run the full benchmark suite.

    Returns:
        Dictionary containing metadata and results.
    """
    RESULTS_DIR.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(UTC).isoformat()

    metadata = {
        "timestamp": timestamp,
        "parameters": {
            "n_trials": N_TRIALS,
            "seed": SEED,
            "rank_pressure": RANK_PRESSURE,
            "sphere": {"pop_size": SPHERE_POP_SIZE, "n_generations": SPHERE_GENERATIONS},
            "criteria": {"pop_size": CRITERIA_POP_SIZE, "n_generations": CRITERIA_GENERATIONS},
            "parabola": {
                "pop_size": PARABOLA_POP_SIZE,
                "n_generations": PARABOLA_GENERATIONS,
                "eps": [PARABOLA_EPS_START, PARABOLA_EPS_END],
                "range": PARABOLA_RANGE,
            },
        },
    }

    logger.info("Running sphere")
    sphere = summarize_trials(run_trials(run_sphere, N_TRIALS, n_jobs=N_JOBS, seed=SEED, prefer="threads"))
    logger.info(f"  best value: {sphere.mean_value:.3e}, time: {sphere.mean_elapsed:.2f}s")

    logger.info("Running three criteria (population dump)")
    hv = run_criteria(SEED, dump_path=RESULTS_DIR / "criteria_population.csv")
    logger.info(f"  HV: {hv:.4f}")

    logger.info("Running constrained parabola (population dump)")
    exemplars = run_parabola(SEED, dump_path=RESULTS_DIR / "parabola_population.csv")
    for ch in exemplars:
        logger.info(f"  exemplar {ch.point.round(5).tolist()}: fitness {ch.fitness():.5f}")

    logger.info("Evaluating parabola error")
    errors = summarize_trials(run_trials(parabola_error, N_TRIALS, n_jobs=N_JOBS, seed=SEED, prefer="threads"))
    logger.info(f"  mean error: {errors.mean_value:.5f}")

    logger.info("Sweeping population size")
    by_pop = sweep("population_size", POP_SIZE_SWEEP, lambda v: partial(parabola_error, population_size=v))

    logger.info("Sweeping mutation chance")
    by_mutation = sweep("mutation_chance", MUTATION_SWEEP, lambda v: partial(parabola_error, mutation_chance=v))

    results = {
        "sphere": {"mean_best": sphere.mean_value, "mean_time_seconds": sphere.mean_elapsed},
        "criteria": {"hypervolume": hv},
        "parabola": {
            "exemplars": [ch.point.tolist() for ch in exemplars],
            "mean_error": errors.mean_value,
            "by_population_size": by_pop,
            "by_mutation_chance": by_mutation,
        },
    }
    return {"metadata": metadata, "results": results}


def main() -> None:
    """Main entry point for the benchmark."""
    logger.info("Starting benchmark suite")
    start = time.perf_counter()

    results = run_benchmark()

    output_path = RESULTS_DIR / "benchmark_results.json"
    with open(output_path, "w") as f:
        json.dump(results, f, indent=2)

    logger.info(f"Results saved to {output_path} in {time.perf_counter() - start:.1f}s")


if __name__ == "__main__":
    main()
