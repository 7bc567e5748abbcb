"""Lambert W Function Approximation.

Closed-form approximation of the principal branch W0(x), the solution of
W * exp(W) = x, after Barry et al. (2000), "Analytical approximations for
real values of the Lambert W-function", Mathematics and Computers in
Simulation 53, 95-103.

- x >= 0: interpolation between the single-log (W1) and nested-log (W2)
  expansions with the optimal weight epsilon; relative error < 0.2 %
- -1/e <= x < 0: rational expansion in sqrt(2 + 2e*x) around the branch point
- x < -1/e: outside the real domain, returns 0
"""

import math
import logging

import numpy as np

from config.pv_constants import BARRY, SOLVER_SETTINGS

logger = logging.getLogger(__name__)


def lambert_w_barry(x: float) -> float:
    """Approximate W0(x).

    Args:
        x: Real argument

    Returns:
        Approximation of the principal branch. Arguments below the branch
        point -1/e have no real solution; 0 is returned and a warning logged.
    """
    if x >= 0:
        if x < SOLVER_SETTINGS.lambert_linear_threshold:
            # W(x) = x - x^2 + ... ; the log expansions lose all precision here
            return x

        x_safe = max(x, BARRY.log_floor)

        # First approximation W1
        denom1 = max(math.log(1 + 2 * x_safe), BARRY.log_floor)
        w1 = math.log((2 * x_safe) / denom1)

        # Second approximation W2
        inner = max(math.log(1 + (12 / 5) * x_safe), BARRY.log_floor)
        denom2 = max(math.log(((12 / 5) * x_safe) / inner), BARRY.log_floor)
        w2 = math.log(((6 / 5) * x_safe) / denom2)

        return (1 + BARRY.epsilon) * w2 - BARRY.epsilon * w1

    if x >= BARRY.branch_point:
        eta = max(2 + 2 * math.e * x, 0.0)
        sqrt_eta = math.sqrt(eta)
        return -1 + sqrt_eta / (1 + (BARRY.n1 * sqrt_eta) / (BARRY.n2 + sqrt_eta))

    logger.warning(
        "Lambert W argument %.6g is below -1/e; no real solution, returning 0", x
    )
    return 0.0


def lambert_w_barry_array(x: np.ndarray) -> np.ndarray:
    """Element-wise lambert_w_barry over an array.

    Args:
        x: Array of real arguments

    Returns:
        Array of W0 approximations with the same shape as x
    """
    x = np.asarray(x, dtype=float)
    result = np.zeros_like(x)

    small = (x >= 0) & (x < SOLVER_SETTINGS.lambert_linear_threshold)
    result[small] = x[small]

    positive = x >= SOLVER_SETTINGS.lambert_linear_threshold
    if np.any(positive):
        xp = np.maximum(x[positive], BARRY.log_floor)
        denom1 = np.maximum(np.log(1 + 2 * xp), BARRY.log_floor)
        w1 = np.log((2 * xp) / denom1)
        inner = np.maximum(np.log(1 + (12 / 5) * xp), BARRY.log_floor)
        denom2 = np.maximum(np.log(((12 / 5) * xp) / inner), BARRY.log_floor)
        w2 = np.log(((6 / 5) * xp) / denom2)
        result[positive] = (1 + BARRY.epsilon) * w2 - BARRY.epsilon * w1

    negative = (x < 0) & (x >= BARRY.branch_point)
    if np.any(negative):
        sqrt_eta = np.sqrt(np.maximum(2 + 2 * math.e * x[negative], 0.0))
        result[negative] = -1 + sqrt_eta / (1 + (BARRY.n1 * sqrt_eta) / (BARRY.n2 + sqrt_eta))

    degenerate = x < BARRY.branch_point
    if np.any(degenerate):
        logger.warning(
            "%d Lambert W argument(s) below -1/e; returning 0 for them",
            int(np.count_nonzero(degenerate)),
        )

    return result
