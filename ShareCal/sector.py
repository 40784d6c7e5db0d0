import warnings

import numpy as np

from .config import Configuration
from .utils.general_utils import within_tolerance


class Sector:
    """
    A sector owning a set of competing subsectors.

    The sector normalizes its subsectors' shares, enforces their capacity limits, gives fixed output
    precedence over shared-out demand, and hands its subsectors the sector-wide totals they need for
    calibration.

    Parameters
    ----------
    region_name : str
        Name of the region the sector belongs to.
    name : str
        Name of the sector. Also the name of the good it produces.
    modeltime : ShareCal.ModelTime
        The model periods.
    config : ShareCal.Configuration, optional
        Run configuration. A default configuration is used when none is given.
    """

    def __init__(self, region_name, name, modeltime, config=None):
        self.region_name = region_name
        self.name = name
        self.modeltime = modeltime
        self.config = config or Configuration()
        self.subsectors = {}

        self.price = np.zeros(modeltime.max_per)
        self.output = np.zeros(modeltime.max_per)

    def __repr__(self):
        return f"Sector({self.region_name}.{self.name})"

    def add_subsector(self, subsector):
        if subsector.name in self.subsectors:
            raise ValueError(f"Subsector {subsector.name} already exists in sector {self.name} "
                             f"({self.region_name})")
        self.subsectors[subsector.name] = subsector
        return subsector

    def get_subsector(self, name):
        return self.subsectors[name]

    def complete_init(self, marketplace=None, world=None, land_allocator=None):
        for subsector in self.subsectors.values():
            subsector.complete_init(marketplace, world, land_allocator)

    def clear_fixed_demands(self, period):
        for subsector in self.subsectors.values():
            subsector.clear_fixed_demands(period)

    def init_calc(self, period):
        for subsector in self.subsectors.values():
            subsector.init_calc(period)
        for subsector in self.subsectors.values():
            subsector.tabulate_fixed_demands(period)

    # ------------ Shares ------------ #
    def calc_share(self, period, gdp=None, demand=None):
        """
        Calculate the normalized, capacity-limited shares of every subsector for one period.

        Parameters
        ----------
        period : int
            The model period.
        gdp : ShareCal.GDP, optional
            Provides the scaled GDP per capita for fuel preference elasticities.
        demand : float, optional
            Total demand for the sector. When given, subsectors with fixed output receive the share
            of the demand their fixed output covers.

        Returns
        -------
        float
            The sum of the final subsector shares.
        """
        subsectors = list(self.subsectors.values())
        for subsector in subsectors:
            subsector.set_cap_limit_status(False, period)

        total = sum(subsector.calc_share(period, gdp) for subsector in subsectors)
        for subsector in subsectors:
            subsector.norm_share(total, period)

        if demand is not None and demand > 0:
            for subsector in subsectors:
                fixed = subsector.get_fixed_output(period)
                if fixed > 0:
                    subsector.set_fixed_share(period, fixed / demand)
                    subsector.set_share_to_fixed_value(period)

        self._apply_cap_limits(period)

        total = sum(subsector.get_share(period) for subsector in subsectors)
        if total > 0 and not within_tolerance(total, 1):
            warnings.warn(f"Shares of sector {self.name} ({self.region_name}) sum to {total} "
                          f"in period {period}")
        return total

    def _apply_cap_limits(self, period):
        """
        Repeatedly apply capacity limits, scaling the variable subsectors so that all shares sum to
        1, until a pass limits no new subsector.
        """
        subsectors = [s for s in self.subsectors.values() if s.get_fixed_share(period) == 0]
        fixed_total = sum(s.get_share(period) for s in self.subsectors.values()
                          if s.get_fixed_share(period) > 0)

        for _ in range(self.config.cap_limit_passes):
            limited_total = fixed_total
            variable_total = 0
            for subsector in subsectors:
                if subsector.get_cap_limit_status(period):
                    limited_total += subsector.get_share(period)
                else:
                    variable_total += subsector.get_share(period)

            multiplier = 1.0
            if variable_total > 0:
                multiplier = max(1 - limited_total, 0) / variable_total

            newly_limited = 0
            for subsector in subsectors:
                was_limited = subsector.get_cap_limit_status(period)
                subsector.limit_shares(multiplier, period)
                if subsector.get_cap_limit_status(period) and not was_limited:
                    newly_limited += 1

            if newly_limited == 0:
                return

        warnings.warn(f"Capacity limits of sector {self.name} ({self.region_name}) did not "
                      f"settle after {self.config.cap_limit_passes} passes in period {period}")

    def calc_price(self, period):
        self.price[period] = sum(subsector.get_share(period) * subsector.get_price(period)
                                 for subsector in self.subsectors.values())
        return self.price[period]

    # ------------ Output ------------ #
    def set_output(self, demand, period, gdp=None):
        """
        Share `demand` out to the subsectors. Fixed output is served first, scaled down if it
        exceeds the demand, and the remaining demand is shared out among the variable subsectors.
        """
        subsectors = list(self.subsectors.values())
        for subsector in subsectors:
            subsector.reset_fixed_output(period)

        total_fixed_output = sum(subsector.get_fixed_output(period) for subsector in subsectors)
        if total_fixed_output > demand:
            ratio = demand / total_fixed_output
            for subsector in subsectors:
                subsector.scale_fixed_output(ratio, period)
            total_fixed_output = demand

        variable_share_total = sum(subsector.get_share(period) for subsector in subsectors
                                   if subsector.get_fixed_output(period) == 0)
        share_ratio = 0
        if demand > 0 and variable_share_total > 0:
            share_ratio = (1 - total_fixed_output / demand) / variable_share_total

        for subsector in subsectors:
            subsector.adj_shares(demand, share_ratio, total_fixed_output, period)
        for subsector in subsectors:
            subsector.set_output(demand, period, gdp)

        self.output[period] = sum(subsector.get_output(period) for subsector in subsectors)

    def get_output(self, period):
        return self.output[period]

    # ------------ Calibration ------------ #
    def get_calibration_status(self, period):
        return any(subsector.get_calibration_status(period)
                   for subsector in self.subsectors.values())

    def adjust_for_calibration(self, demand, period):
        """
        Calibrate the share-weights of every calibrated subsector to `demand`. Does nothing when
        calibration is turned off in the configuration.
        """
        if not self.config.get_bool("CalibrationActive"):
            return

        subsectors = list(self.subsectors.values())
        total_fixed_output = sum(subsector.get_fixed_output(period) for subsector in subsectors
                                 if not subsector.get_calibration_status(period))
        total_cal_outputs = sum(subsector.get_total_cal_outputs(period)
                                for subsector in subsectors)
        all_fixed_output = all(subsector.all_output_fixed(period) for subsector in subsectors)

        for subsector in subsectors:
            if subsector.get_calibration_status(period):
                subsector.adjust_for_calibration(demand, total_fixed_output, total_cal_outputs,
                                                 all_fixed_output, period)

    # ------------ Emissions & Summary ------------ #
    def emission(self, period, indirect_coefficients=None):
        """
        Calculate the emissions of every subsector, and their upstream emissions when indirect
        coefficients are given.

        Returns
        -------
        dict {str: float}
            Direct emissions of the sector by gas.
        """
        totals = {}
        for subsector in self.subsectors.values():
            subsector.emission(period)
            if indirect_coefficients is not None:
                subsector.indirect_emission(period, indirect_coefficients)
            for gas, amount in subsector.get_emissions(period).items():
                totals[gas] = totals.get(gas, 0.0) + amount
        return totals

    def get_total_carbon_tax_paid(self, period):
        return sum(subsector.get_total_carbon_tax_paid(period)
                   for subsector in self.subsectors.values())

    def update_summary(self, period):
        for subsector in self.subsectors.values():
            subsector.update_summary(period)
