"""Central Limit Theorem demo: Monte-Carlo sampling distribution of the mean."""

import enum
import logging
import math
from dataclasses import dataclass
from typing import Callable

import numpy as np
from pydantic import BaseModel, ConfigDict, Field
from scipy import stats

from .config import TRIALS
from .errors import InvalidParameterError

logger = logging.getLogger(__name__)


class Distribution(enum.Enum):
    UNIFORM = "unif"
    EXPONENTIAL = "exp"
    BETA = "beta"

    @property
    def label(self):
        return _LABELS[self]

    def __str__(self):
        return self.label


_LABELS = {
    Distribution.UNIFORM: "Uniform (0, 1)",
    Distribution.EXPONENTIAL: "Exponential (rate 1)",
    Distribution.BETA: "Beta (0.5, 0.5)",
}


@dataclass(frozen=True)
class Population:
    """Closed-form moments and a sampler for one population family"""

    mean: float
    sd: float
    sampler: Callable[[np.random.Generator, tuple], np.ndarray]

    def draw(self, rng, size):
        return self.sampler(rng, size)


POPULATIONS = {
    Distribution.UNIFORM: Population(
        mean=0.5,
        sd=math.sqrt(1 / 12),
        sampler=lambda rng, size: rng.uniform(0.0, 1.0, size=size),
    ),
    Distribution.EXPONENTIAL: Population(
        mean=1.0,
        sd=1.0,
        sampler=lambda rng, size: rng.exponential(scale=1.0, size=size),
    ),
    # Beta variance: ab / ((a+b)^2 (a+b+1)) = 0.25 / 2 = 0.125
    Distribution.BETA: Population(
        mean=0.5,
        sd=math.sqrt(0.125),
        sampler=lambda rng, size: rng.beta(0.5, 0.5, size=size),
    ),
}


class CLTParameters(BaseModel):
    """Inputs of the CLT demo"""

    distribution: Distribution = Field(
        Distribution.UNIFORM, strict=False, title="Population distribution"
    )
    n: int = Field(5, ge=1, le=200, title="Sample size (n)")
    bins: int = Field(50, ge=10, le=100, title="Number of histogram bins")

    model_config = ConfigDict(frozen=True, strict=True, extra="forbid")


@dataclass(frozen=True, eq=False)
class SamplingResult:
    distribution: Distribution
    n: int
    sample_means: np.ndarray
    population_mean: float
    population_sd: float
    standard_error: float

    @property
    def trials(self):
        return len(self.sample_means)

    def summary(self):
        """Empirical vs theoretical moments of the sample mean"""
        return {
            "empirical_mean": float(np.mean(self.sample_means)),
            "theoretical_mean": self.population_mean,
            "empirical_sd": float(np.std(self.sample_means, ddof=1)),
            "standard_error": self.standard_error,
        }


@dataclass(frozen=True, eq=False)
class Histogram:
    edges: np.ndarray
    density: np.ndarray
    bins: int
    result: SamplingResult

    @property
    def centers(self):
        return (self.edges[:-1] + self.edges[1:]) / 2

    @property
    def widths(self):
        return np.diff(self.edges)


def make_rng(seed=None):
    """numpy Generator from a seed, an existing Generator, or fresh entropy"""
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)


def simulate(dist, n, k=TRIALS, rng=None):
    """Sample means of ``k`` trials of ``n`` i.i.d. draws from ``dist``"""
    dist = Distribution(dist)
    if isinstance(n, bool) or int(n) != n or n < 1:
        raise InvalidParameterError("n", n, "sample size must be an integer >= 1")
    if isinstance(k, bool) or int(k) != k or k < 1:
        raise InvalidParameterError("k", k, "trial count must be an integer >= 1")
    n, k = int(n), int(k)

    population = POPULATIONS[dist]
    rng = make_rng(rng)

    matrix = population.draw(rng, (k, n))
    sample_means = matrix.mean(axis=1)
    sample_means.setflags(write=False)

    logger.debug("Simulated %d means of n=%d from %s", k, n, dist.label)
    return SamplingResult(
        distribution=dist,
        n=n,
        sample_means=sample_means,
        population_mean=population.mean,
        population_sd=population.sd,
        standard_error=population.sd / math.sqrt(n),
    )


def histogram(result, bins):
    """Density-normalised histogram of the sample means"""
    density, edges = np.histogram(result.sample_means, bins=int(bins), density=True)
    density.setflags(write=False)
    edges.setflags(write=False)
    return Histogram(edges=edges, density=density, bins=int(bins), result=result)


def normal_curve(result, x=None, points=200):
    """Theoretical N(mu, SE) density the histogram should approach"""
    if x is None:
        lo = min(float(np.min(result.sample_means)),
                 result.population_mean - 4 * result.standard_error)
        hi = max(float(np.max(result.sample_means)),
                 result.population_mean + 4 * result.standard_error)
        x = np.linspace(lo, hi, points)
    x = np.asarray(x, dtype=float)
    y = stats.norm.pdf(x, loc=result.population_mean, scale=result.standard_error)
    return x, y
