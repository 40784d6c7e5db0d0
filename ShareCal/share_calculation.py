"""
This module contains the functions for calculating technology and subsector shares and the
share-weighted subsector prices.
"""
import warnings

from .utils.general_utils import LARGE_SHARE_WEIGHT, VERY_SMALL_NUM


def calc_tech_shares(subsector, gdp, period: int):
    """
    Calculate the cost and normalized share of every technology in `subsector` for one period.

    Parameters
    ----------
    subsector : ShareCal.Subsector
        The subsector whose technologies compete.
    gdp : ShareCal.GDP
        Provides the scaled GDP per capita used by technologies with a fuel preference elasticity.
    period : int
        The model period.

    Returns
    -------
    float
        The sum of the technologies' unnormalized shares.

    Notes
    -----
    - When the unnormalized shares sum to 0 every normalized share is 0.
    - A technology with a non-negative logit exponent competing against other technologies is
      reported, but its share is still used.
    """
    technologies = subsector.get_technologies(period)

    total = 0
    for tech in technologies:
        tech.calc_cost(subsector.region_name, subsector.sector_name, period)
        total += tech.calc_share(subsector.region_name, gdp, period)

    for tech in technologies:
        tech.normalize_share(total)
        if len(technologies) > 1 and tech.get_logit_exponent() >= 0:
            warnings.warn(f"Logit exponent of technology {tech.name} in subsector "
                          f"{subsector.name} of {subsector.sector_name} ({subsector.region_name}) "
                          f"is invalid (>= 0)")

    return total


def calc_price(subsector, period: int):
    """
    Calculate the share-weighted price, fuel price, and CO2 emissions factor of `subsector` from its
    technologies' normalized shares. Technology shares must already be normalized.
    """
    price = 0
    fuel_price = 0
    co2_em_factor = 0
    for tech in subsector.get_technologies(period):
        tech_share = tech.get_share()
        price += tech_share * tech.get_tech_cost()
        fuel_price += tech_share * tech.get_fuel_cost()
        if subsector.world is not None:
            co2_em_factor += tech_share * subsector.world.get_primary_fuel_co2_coef(
                subsector.region_name, tech.get_fuel_name())

    subsector.price[period] = price
    subsector.fuel_price[period] = fuel_price
    subsector.co2_em_factor[period] = co2_em_factor


def calc_share(subsector, gdp, period: int):
    """
    Calculate the unnormalized share of `subsector` for one period.

    Technology shares and the subsector prices are calculated first. The subsector share then
    follows the logit form::

        share = share_weight * price ** logit_exponent * scaled_gdp_per_cap ** fuel_pref_elasticity

    Parameters
    ----------
    subsector : ShareCal.Subsector
        The subsector to calculate.
    gdp : ShareCal.GDP
        Provides the scaled GDP per capita for the fuel preference elasticity term.
    period : int
        The model period.

    Returns
    -------
    float
        The subsector's unnormalized share.

    Notes
    -----
    - A price of exactly 0 gives a share of 0, whatever the share-weight or the sign of the
      logit exponent.
    - Runaway share-weights (above 10,000) and negative shares are reported but left as computed.
    """
    calc_tech_shares(subsector, gdp, period)
    calc_price(subsector, period)

    if subsector.logit_exponent[period] == 0:
        warnings.warn(f"Logit exponent of subsector {subsector.name} in "
                      f"{subsector.sector_name} ({subsector.region_name}) is 0")

    price = subsector.price[period]
    if price == 0:
        subsector.share[period] = 0
    else:
        scaled_gdp_per_cap = 1.0 if gdp is None else gdp.get_best_scaled_gdp_per_cap(period)
        subsector.share[period] = subsector.share_weights[period] \
            * price ** subsector.logit_exponent[period] \
            * scaled_gdp_per_cap ** subsector.fuel_pref_elasticity[period]

    if subsector.share_weights[period] > LARGE_SHARE_WEIGHT:
        warnings.warn(f"Huge share-weight for subsector {subsector.name}: "
                      f"{subsector.share_weights[period]} in region {subsector.region_name}")

    if subsector.share[period] < 0:
        warnings.warn(f"Share is < 0 for {subsector.name} in {subsector.region_name} "
                      f"(price: {price}, share-weight: {subsector.share_weights[period]})")

    return subsector.share[period]


def norm_share(subsector, total: float, period: int):
    """
    Normalize the share of `subsector` by the sum of the shares of all subsectors in its sector.
    """
    if total == 0:
        subsector.share[period] = 0
    else:
        set_share(subsector, subsector.share[period] / total, period)


def set_share(subsector, share: float, period: int):
    """
    Set a share which is supposed to be normalized, reporting values above 1.
    """
    subsector.share[period] = share
    if share > 1 + VERY_SMALL_NUM:
        warnings.warn(f"Share of subsector {subsector.name} in {subsector.sector_name} "
                      f"({subsector.region_name}) set to a value > 1. Value = {share}")


def get_wt_fuel_price(subsector, period: int):
    """
    The fuel price weighted by the subsector share. Shares are lagged by one period, except in the
    base period.
    """
    share = subsector.share[period] if period == 0 else subsector.share[period - 1]
    return share * subsector.fuel_price[period]
