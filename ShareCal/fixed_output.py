"""
This module contains the functions for subsectors with exogenously fixed output.

Fixed output takes precedence over the shares computed by the logit. A sector first works out the
share of its demand that fixed output covers, then shares out the rest of its demand among the
subsectors whose output is variable.
"""
import warnings

from .share_calculation import set_share


def get_fixed_output(subsector, period: int) -> float:
    return sum(tech.get_fixed_output() for tech in subsector.get_technologies(period))


def set_fixed_share(subsector, period: int, share: float):
    """
    Record the share of the sector's demand supplied by the fixed output of `subsector`.
    """
    subsector.fixed_share[period] = share
    if share > 1:
        warnings.warn(f"Fixed share of subsector {subsector.name} in {subsector.sector_name} "
                      f"({subsector.region_name}) set to a value > 1. Value = {share}")


def set_share_to_fixed_value(subsector, period: int):
    set_share(subsector, subsector.fixed_share[period], period)


def reset_fixed_output(subsector, period: int):
    """
    Restore every technology's read-in fixed output, undoing any earlier scaling.
    """
    for tech in subsector.get_technologies(period):
        tech.reset_fixed_output(period)


def scale_fixed_output(subsector, scale_ratio: float, period: int):
    """
    Scale down fixed output, used when the sector's total fixed output exceeds its demand.
    """
    for tech in subsector.get_technologies(period):
        tech.scale_fixed_output(scale_ratio)
    set_fixed_share(subsector, period, subsector.fixed_share[period] * scale_ratio)


def adj_shares(subsector, demand: float, share_ratio: float, total_fixed_output: float,
               period: int):
    """
    Make the share of `subsector` consistent with the fixed output of its sector, then make its
    technology shares consistent with its own fixed output.

    Parameters
    ----------
    subsector : ShareCal.Subsector
        The subsector to adjust.
    demand : float
        Total demand for the sector's output.
    share_ratio : float
        Factor by which variable shares are scaled to leave room for the sector's fixed output.
    total_fixed_output : float
        Fixed output of the whole sector.
    period : int
        The model period.

    Notes
    -----
    A subsector is assumed to be either entirely fixed or entirely variable. A fixed subsector's
    share is its fixed output over the demand. A variable subsector's share is scaled by
    `share_ratio`. Without demand both are 0.
    """
    technologies = subsector.get_technologies(period)

    subsector_fixed_output = 0
    var_share_total = 0
    for tech in technologies:
        subsector_fixed_output += tech.get_fixed_output()
        if not tech.output_is_fixed():
            var_share_total += tech.get_share()

    if total_fixed_output > 0:
        if demand <= 0:
            subsector.share[period] = 0
        elif subsector_fixed_output > 0:
            set_share(subsector, subsector_fixed_output / demand, period)
        else:
            set_share(subsector, subsector.share[period] * share_ratio, period)

    subsector_demand = subsector.share[period] * demand
    for tech in technologies:
        tech.adj_shares(subsector_demand, subsector_fixed_output, var_share_total, period)


def clear_fixed_demands(subsector, period: int):
    """
    Zero the calibrated demand recorded for the fuels of `subsector`, so that tabulating fixed
    demands again for the same period does not count them twice.
    """
    for tech in subsector.get_technologies(period):
        tech.clear_fixed_demands(subsector.region_name, period)


def tabulate_fixed_demands(subsector, period: int):
    for tech in subsector.get_technologies(period):
        tech.tabulate_fixed_demands(subsector.region_name, period)
