"""
Monte Carlo estimate of the site percolation threshold of the n-by-n square
grid: open uniformly random blocked sites until the grid percolates, record
the fraction opened, repeat, and summarise.

    % percolation-stats 200 100
    mean                    = 0.5929934999999997
    stddev                  = 0.00876990421552567
    95% confidence interval = 0.5912745987737567, 0.5947124012262428
"""
import argparse
import logging
import math
import random
import sys
import time
from typing import Optional

import numpy as np

from logging_config import configure_logging
from percolation import Percolation
from percolation_errors import DegenerateInput, check_positive

logger = logging.getLogger(__name__)

# z-score of the two-sided 95% confidence interval
CONFIDENCE_Z = 1.96


def run_trial(n: int, rng) -> float:
    """
    Opens random sites of a fresh n-by-n grid until it percolates and
    returns the fraction of sites that were open at that moment.

    :param rng: random source with an inclusive randint(a, b), e.g. random.Random.
    """
    perc = Percolation(n)
    while not perc.percolates():
        row = rng.randint(1, n)
        col = rng.randint(1, n)
        # already-open draws are discarded
        if not perc.isOpen(row, col):
            perc.open_site(row, col)
    return perc.numberOfOpenSites() / (n * n)


class PercolationStats:
    # perform trials independent experiments on an n-by-n grid
    def __init__(self, n: int, trials: int, rng=None):
        self.gridSize = check_positive("grid size n", n)
        self.trialCount = check_positive("trials", trials)

        if rng is None:
            rng = random.Random()

        self.trialResults = np.array(
            [run_trial(self.gridSize, rng) for _ in range(self.trialCount)],
            dtype=float,
        )

        self._mean = float(np.mean(self.trialResults))
        # sample standard deviation is undefined for a single trial
        if self.trialCount > 1:
            self._stddev = float(np.std(self.trialResults, ddof=1))
        else:
            self._stddev = math.nan

    def thresholds(self) -> np.ndarray:
        return self.trialResults.copy()

    # sample mean of percolation threshold
    def mean(self) -> float:
        return self._mean

    # sample standard deviation of percolation threshold
    def stddev(self) -> float:
        if self.trialCount < 2:
            raise DegenerateInput("stddev needs at least 2 trials, got 1")
        return self._stddev

    def _margin(self) -> float:
        return CONFIDENCE_Z * self.stddev() / math.sqrt(self.trialCount)

    # low endpoint of 95% confidence interval
    def confidenceLo(self) -> float:
        return self._mean - self._margin()

    # high endpoint of 95% confidence interval
    def confidenceHi(self) -> float:
        return self._mean + self._margin()

    def confidence_interval(self):
        return self.confidenceLo(), self.confidenceHi()


def positive_int(text: str) -> int:
    """argparse type for strictly positive integers."""
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {text!r}")
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return value


def format_report(stats: PercolationStats) -> str:
    try:
        stddev = stats.stddev()
        lo, hi = stats.confidence_interval()
    except DegenerateInput:
        stddev = lo = hi = math.nan
    return "\n".join([
        f"mean                    = {stats.mean()}",
        f"stddev                  = {stddev}",
        f"95% confidence interval = {lo}, {hi}",
    ])


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Estimate the percolation threshold of an n-by-n grid by Monte Carlo simulation."
    )
    parser.add_argument('n', type=positive_int, help="Size of the square grid (n x n).")
    parser.add_argument('trials', type=positive_int, help="The number of Monte Carlo trials to perform.")
    parser.add_argument('--seed', type=int, default=None, help="Seed for a reproducible run.")
    parser.add_argument('-v', '--verbose', action='store_true', help="Log debug output.")
    args = parser.parse_args(argv)

    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    logger.info("running %d trials on a %dx%d grid", args.trials, args.n, args.n)
    t0 = time.time()
    stats = PercolationStats(args.n, args.trials, rng=random.Random(args.seed))
    logger.info("completed in %.2fs", time.time() - t0)
    logger.debug("thresholds: %s", stats.thresholds())

    print(format_report(stats))
    return 0


if __name__ == "__main__":
    sys.exit(main())
