"""
Finite-size analysis: estimate the threshold over a range of grid sizes L
and extrapolate to the infinite lattice by fitting the mean threshold
against L**exponent (exponent -1/nu = -3/4 for 2D percolation). The
intercept at L**exponent = 0 estimates pc(infinity), about 0.5927 for the
square site lattice.
"""
import argparse
import logging
import random
import sys
import time
from dataclasses import dataclass, field
from typing import List, Optional

import matplotlib.pyplot as plt
import numpy as np
from scipy.stats import linregress

from logging_config import configure_logging
from percolation_errors import DegenerateInput, check_positive
from percolation_stats import PercolationStats, format_report, positive_int

logger = logging.getLogger(__name__)

DEFAULT_EXPONENT = -3 / 4


@dataclass
class SweepResult:
    sizes: List[int] = field(default_factory=list)
    means: List[float] = field(default_factory=list)
    stddevs: List[float] = field(default_factory=list)
    stats: List[PercolationStats] = field(default_factory=list)


@dataclass
class Extrapolation:
    pc_inf: float
    slope: float
    r_squared: float
    stderr: float
    exponent: float


def sweep_sizes(sizes, trials: int, rng=None) -> SweepResult:
    """
    Runs a PercolationStats for every grid size in 'sizes', sharing one
    random source across sizes.

    Sizes with a single trial record nan as their stddev.
    """
    trials = check_positive("trials", trials)
    sizes = [check_positive("grid size n", n) for n in sizes]
    if not sizes:
        raise DegenerateInput("sweep needs at least one grid size")
    if rng is None:
        rng = random.Random()

    result = SweepResult()
    for n in sizes:
        logger.info("simulate n = %d", n)
        stats = PercolationStats(n, trials, rng=rng)
        result.sizes.append(n)
        result.means.append(stats.mean())
        result.stddevs.append(stats.stddev() if trials > 1 else float("nan"))
        result.stats.append(stats)
    return result


def extrapolate_threshold(sizes, means, exponent: float = DEFAULT_EXPONENT) -> Extrapolation:
    """
    Least-squares fit of mean = slope * L**exponent + intercept.
    The intercept is the pc(infinity) estimate.
    """
    L_values = np.asarray(sizes, dtype=float)
    means = np.asarray(means, dtype=float)
    if L_values.shape != means.shape:
        raise ValueError(f"got {L_values.size} sizes but {means.size} means")
    if np.unique(L_values).size < 2:
        raise DegenerateInput("extrapolation needs at least two distinct grid sizes")

    X_scaling = L_values ** exponent
    fit = linregress(X_scaling, means)
    return Extrapolation(
        pc_inf=float(fit.intercept),
        slope=float(fit.slope),
        r_squared=float(fit.rvalue ** 2),
        stderr=float(fit.intercept_stderr),
        exponent=exponent,
    )


def plot_sweep(result: SweepResult, extrapolation: Optional[Extrapolation] = None, path=None):
    """
    Error bar plot of mean pc +/- stddev against L, with the scaling fit
    (against L**exponent) in a second panel when 'extrapolation' is given.
    Saves to 'path' if given, otherwise shows the figure.
    """
    L_values = np.asarray(result.sizes, dtype=float)
    ncols = 2 if extrapolation is not None else 1
    fig, axes = plt.subplots(1, ncols, figsize=(10 * ncols, 6), squeeze=False)

    ax = axes[0][0]
    ax.errorbar(
        L_values,
        result.means,
        yerr=np.nan_to_num(result.stddevs),
        fmt='o-',               # Circle markers, connected line
        color='blue',
        ecolor='blue',
        capsize=5,
        label=r'Mean $p_c \pm \sigma$'
    )
    ax.set_xlabel('Linear System Size ($L$)', fontsize=14)
    ax.set_ylabel(r'Mean Critical Probability ($\bar{p}_c$)', fontsize=14)
    ax.set_title('Mean $p_c$ vs. System Size ($L$)', fontsize=16)
    ax.grid(True, linestyle='--', alpha=0.6)
    ax.legend(loc='best')

    if extrapolation is not None:
        ax = axes[0][1]
        X_scaling = L_values ** extrapolation.exponent
        X_line = np.linspace(0.0, float(np.max(X_scaling) * 1.05), 100)
        ax.plot(X_line, extrapolation.slope * X_line + extrapolation.pc_inf, color='green', linestyle='--',
                label=f"Fit: $p_c(\\infty)$ = {extrapolation.pc_inf:.5f}")
        ax.plot(X_scaling, result.means, 'o', color='green', markersize=8, label=r'Data $\bar{p}_c(L)$')
        ax.plot(0, extrapolation.pc_inf, 'x', color='green', markersize=10)
        ax.set_xlabel(f'$L^{{{extrapolation.exponent:.2f}}}$', fontsize=14)
        ax.set_ylabel(r'Mean Critical Probability ($\bar{p}_c$)', fontsize=14)
        ax.set_title('Finite-Size Scaling Extrapolation', fontsize=16)
        ax.grid(True, linestyle='--', alpha=0.6)
        ax.legend(loc='best')

    fig.tight_layout()
    if path is not None:
        fig.savefig(path)
        plt.close(fig)
    else:
        plt.show()
    return fig


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Run a Monte Carlo simulation for 2D percolation over a range of grid sizes."
    )
    parser.add_argument('--Lmin', type=positive_int, default=50,
                        help="Minimum size of the square grid (N_min x N_min).")
    parser.add_argument('--Lmax', type=positive_int, default=200,
                        help="Maximum size of the square grid (N_max x N_max).")
    parser.add_argument('--Lstep', type=positive_int, default=50,
                        help="Step size for increasing the grid size N.")
    parser.add_argument('--t', type=positive_int, default=500,
                        help="The number of Monte Carlo trials to perform per size.")
    parser.add_argument('--exponent', type=float, default=DEFAULT_EXPONENT,
                        help="Scaling exponent used for the extrapolation.")
    parser.add_argument('--seed', type=int, default=None, help="Seed for a reproducible run.")
    parser.add_argument('--plot', metavar='PATH', default=None, help="Save the sweep plot to PATH.")
    parser.add_argument('-v', '--verbose', action='store_true', help="Log debug output.")
    args = parser.parse_args(argv)

    if args.Lmin > args.Lmax:
        parser.error(f"--Lmin ({args.Lmin}) must not exceed --Lmax ({args.Lmax})")

    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    sizes = list(range(args.Lmin, args.Lmax + 1, args.Lstep))
    logger.info("system sizes (N): %d to %d, step %d", args.Lmin, args.Lmax, args.Lstep)
    logger.info("trials per size: %d", args.t)

    t0 = time.time()
    result = sweep_sizes(sizes, args.t, rng=random.Random(args.seed))
    logger.info("completed in %.2fs", time.time() - t0)

    for n, stats in zip(result.sizes, result.stats):
        print("=" * 60)
        print(f"n = {n}")
        print(format_report(stats))
    print("=" * 60)

    extrapolation = None
    if len(sizes) >= 2:
        extrapolation = extrapolate_threshold(result.sizes, result.means, args.exponent)
        print(f"pc(infinity) = {extrapolation.pc_inf:.6f} +/- {extrapolation.stderr:.6f}, "
              f"R^2 = {extrapolation.r_squared:.4f} (exponent {extrapolation.exponent:.2f})")
    else:
        logger.warning("a single grid size cannot be extrapolated")

    if args.plot is not None:
        plot_sweep(result, extrapolation, path=args.plot)
        logger.info("plot written to %s", args.plot)
    return 0


if __name__ == "__main__":
    sys.exit(main())
