"""
This module contains the functions for keeping subsector shares below their capacity limits.

Capacity limits are applied smoothly. Rather than clipping a share at its limit, the share is passed
through a logistic transform which leaves small shares almost unchanged and approaches the limit as
the share grows.
"""
import numpy as np

from .share_calculation import set_share
from .utils.general_utils import SMALL_NUM

CAP_LIMIT_EXPONENT = 2
CAP_LIMIT_MULTIPLIER = 1.4

# Largest argument for which np.exp stays finite
MAX_EXP_ARGUMENT = 700


def cap_limit_transform(cap_limit: float, org_share: float) -> float:
    """
    Transform `org_share` so that it smoothly approaches `cap_limit`.

    Parameters
    ----------
    cap_limit : float
        The capacity limit, as a share of the sector. Limits of (almost) 1 are inactive.
    org_share : float
        The untransformed share.

    Returns
    -------
    float
        The transformed share. This is `cap_limit` itself when the limit is inactive, close to
        `org_share` when `org_share` is much smaller than `cap_limit`, and never above `cap_limit`.

    Examples
    --------
    >>> cap_limit_transform(1.0, 0.4)
    1.0

    >>> round(cap_limit_transform(0.5, 0.01), 4)
    0.0098
    """
    if cap_limit >= 1 - SMALL_NUM:
        return cap_limit
    if cap_limit <= 0:
        return 0.0

    ratio = org_share / cap_limit
    exponent = (CAP_LIMIT_MULTIPLIER * ratio) ** CAP_LIMIT_EXPONENT
    if exponent > MAX_EXP_ARGUMENT:
        return cap_limit
    factor = np.exp(exponent)
    return org_share * factor / (1 + ratio * factor)


def limit_shares(subsector, multiplier: float, period: int):
    """
    Apply the capacity limit of `subsector` after its sector has summed the normalized shares.

    Parameters
    ----------
    subsector : ShareCal.Subsector
        The subsector to limit. Its share must already be normalized.
    multiplier : float
        Factor by which the sector scales the shares of subsectors which are neither capacity
        limited nor fixed.
    period : int
        The model period.

    Notes
    -----
    - A multiplier of 0 means the sector has no room left and the share is set to 0.
    - Inactive limits (of about 1) never bind. A subsector without a limit is never flagged, so a
      share of 1 is scaled by `multiplier` like any other variable share rather than being kept
      at 1.
    - A share at or above its transformed limit is set to the transformed limit and the subsector
      is flagged as capacity limited. A flagged subsector is never transformed a second time.
    - Fixed subsectors below their limit keep their share.
    """
    if multiplier == 0:
        subsector.share[period] = 0
        return

    share = subsector.share[period]
    cap_limit = subsector.cap_limit[period]
    cap_limit_value = cap_limit_transform(cap_limit, share)
    if cap_limit < 1 - SMALL_NUM and share >= cap_limit_value:
        if not subsector.cap_limited[period]:
            set_share(subsector, cap_limit_value, period)
            subsector.cap_limited[period] = True
    elif subsector.fixed_share[period] == 0:
        set_share(subsector, share * multiplier, period)
