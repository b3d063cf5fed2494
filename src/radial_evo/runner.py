"""Run loops built on top of the genetic processor.

This module provides:
- evolve: the generation loop with per-generation elite collection and
  tolerance annealing
- run_trials: independent trials fanned out with joblib, one failure never
  affecting the others
- summarize_trials: mean value and duration over a batch of trials

Example:
    >>> factory = GeneticFactory(params, seed=42)
    >>> result = evolve(factory, population_size=100, n_generations=50, elite_count=5)
    >>> exemplars = decluster_until_stable(list(result.elites), tol=0.7, prefer=fitness_preference(fe))
"""

import logging
import time
from collections.abc import Callable
from typing import Any

import numpy as np
from joblib import Parallel, delayed

from radial_evo.evaluators import LinearAnnealing
from radial_evo.factory import GeneticFactory
from radial_evo.protocols import Chromosome
from radial_evo.results import EvolutionResult, TrialOutcome, TrialSummary

logger = logging.getLogger(__name__)

GenerationCallback = Callable[[int, tuple[Chromosome, ...]], None]
"""Called with ``(generation, population)`` after every selection pass."""


def evolve(
    factory: GeneticFactory,
    population_size: int,
    n_generations: int,
    elite_count: int = 0,
    annealing: LinearAnnealing | None = None,
    callback: GenerationCallback | None = None,
) -> EvolutionResult:
    """Run a full evolutionary search.

    Every generation selects, reports the selected population to ``callback``,
    collects the ``elite_count`` best chromosomes, crosses, mutates and finally
    advances ``annealing``. After the last generation a reducing selection pass
    brings the population back to ``population_size`` and ``callback`` is
    called once more with generation index ``n_generations``. There is no early
    stopping: all ``n_generations`` generations always run.

    Args:
        factory: Factory bound to the run's parameters and seed.
        population_size: Number of chromosomes kept after every selection pass.
        n_generations: Number of generations to run.
        elite_count: Chromosomes collected per generation, ``0 <= elite_count <
            population_size``. 0 disables elite collection.
        annealing: Tolerance schedule, reset before the first generation and
            stepped after every generation.
        callback: Optional observer of each selected population.

    Returns:
        EvolutionResult with the final population and all collected elites.

    Raises:
        ValueError: If population_size < 2, n_generations < 0, or elite_count
            is outside ``[0, population_size)``.
    """
    if population_size < 2:
        raise ValueError(f"population_size must be at least 2, got {population_size}")
    if n_generations < 0:
        raise ValueError(f"n_generations must be non-negative, got {n_generations}")
    if not 0 <= elite_count < population_size:
        raise ValueError(f"elite_count must be in [0, {population_size}), got {elite_count}")

    processor = factory.new_processor().init_population(factory.new_population(population_size))
    elites: list[Chromosome] = []
    if annealing is not None:
        annealing.reset()

    for gen in range(n_generations):
        processor = processor.select()
        if callback is not None:
            callback(gen, processor.population)
        if elite_count > 0:
            elites.extend(processor.top_chromosomes(elite_count))

        processor = processor.cross().mutate()

        if annealing is not None:
            eps = annealing.step()
            logger.debug(f"Generation {gen}: {len(processor.population)} offspring, eps={eps:.6g}")
        else:
            logger.debug(f"Generation {gen}: {len(processor.population)} offspring")

    processor = processor.reduce()
    final = processor.finalize()
    if callback is not None:
        callback(n_generations, tuple(final))

    return EvolutionResult(
        parameters=factory.parameters,
        population=tuple(final),
        elites=tuple(elites),
        generations=n_generations,
    )


def _run_guarded(trial: Callable[[int], Any], index: int, seed: int) -> TrialOutcome:
    start = time.perf_counter()
    try:
        value = trial(seed)
    except Exception as exc:  # noqa: BLE001
        return TrialOutcome(index=index, seed=seed, error=repr(exc), elapsed=time.perf_counter() - start)
    return TrialOutcome(index=index, seed=seed, value=value, elapsed=time.perf_counter() - start)


def run_trials(
    trial: Callable[[int], Any],
    n_trials: int,
    n_jobs: int = 1,
    seed: int | None = None,
    prefer: str | None = None,
) -> list[TrialOutcome]:
    """Run independent trials, optionally in parallel.

    Each trial receives its own seed spawned from ``seed`` with
    ``numpy.random.SeedSequence``, so the batch is reproducible when ``seed`` is
    given. An exception raised by a trial is recorded in its TrialOutcome and
    logged; the other trials are unaffected.

    Args:
        trial: Function of a seed returning the trial's value.
            Must be picklable when run with process-based workers.
        n_trials: Number of trials.
        n_jobs: Number of parallel workers. Use -1 for all CPU cores.
        seed: Root seed. If None, uses system entropy.
        prefer: joblib backend hint, "processes" or "threads".

    Returns:
        Outcomes in trial order.

    Raises:
        ValueError: If n_trials is not positive.

    Example:
        >>> def trial(seed):
        ...     result = evolve(GeneticFactory(params, seed=seed), 100, 50)
        ...     return result.best().point
        >>> outcomes = run_trials(trial, n_trials=20, n_jobs=4, seed=0)
    """
    if n_trials <= 0:
        raise ValueError(f"n_trials must be positive, got {n_trials}")

    seeds = [int(s.generate_state(1)[0]) for s in np.random.SeedSequence(seed).spawn(n_trials)]
    logger.info(f"Running {n_trials} trials with n_jobs={n_jobs}")

    outcomes: list[TrialOutcome] = Parallel(n_jobs=n_jobs, prefer=prefer)(  # type: ignore[assignment]
        delayed(_run_guarded)(trial, i, s) for i, s in enumerate(seeds)
    )

    for outcome in outcomes:
        if not outcome.ok:
            logger.warning(f"Trial {outcome.index} (seed {outcome.seed}) failed: {outcome.error}")
    return outcomes


def summarize_trials(outcomes: list[TrialOutcome]) -> TrialSummary:
    """Average the values and durations of successful trials.

    Values must be numbers or equally shaped arrays.
    """
    succeeded = [o for o in outcomes if o.ok]
    n_failed = len(outcomes) - len(succeeded)
    if not succeeded:
        return TrialSummary(n_trials=len(outcomes), n_failed=n_failed, mean_value=None, mean_elapsed=0.0)

    values = np.stack([np.asarray(o.value, dtype=np.float64) for o in succeeded])
    mean = values.mean(axis=0)
    return TrialSummary(
        n_trials=len(outcomes),
        n_failed=n_failed,
        mean_value=float(mean) if mean.ndim == 0 else mean,
        mean_elapsed=float(np.mean([o.elapsed for o in succeeded])),
    )
