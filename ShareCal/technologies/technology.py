"""
This module contains the standard logit technology vintage. A `Technology` is a single instance of
a named technology bound to one model period. Subsectors hold one vintage per technology per period
and interact with it only through the methods defined here, which are also the methods every other
technology variant must provide.
"""
import copy
import logging
import warnings

from ..utils import parameters as PARAM

logger = logging.getLogger(__name__)

DEFAULT_LOGIT_EXPONENT = -6.0


class Technology:
    """
    A standard technology whose unnormalized share follows the logit form
    ``share_weight * cost ** logit_exponent * gdp_per_cap ** fuel_pref_elasticity``.

    Parameters
    ----------
    name : str
        The technology name. Every vintage in one row of a subsector's vintage table shares it.
    year : int, optional
        The year of the period this vintage belongs to.

    Attributes
    ----------
    share_weight : float
        Calibration-adjustable multiplier on the technology's logit share.
    logit_exponent : float
        Price elasticity of the technology share. Must be negative when a subsector holds more
        than one technology.
    fuel_name : str or None
        The good consumed by this technology. Used to look up fuel prices and CO2 coefficients.
    efficiency : float
        Output per unit of input.
    non_energy_cost : float
        Cost added to the fuel cost to get the technology cost.
    ghg_coefficients : dict {str: float}
        Emissions per unit of input, keyed by gas name.
    """
    tech_type = PARAM.standard_technology
    valid_params = PARAM.technology_params

    def __init__(self, name, year=None):
        self.name = name
        self.year = year

        # Parameters
        self.share_weight = 1.0
        self.logit_exponent = DEFAULT_LOGIT_EXPONENT
        self.fuel_name = None
        self.efficiency = 1.0
        self.non_energy_cost = 0.0
        self.fuel_pref_elasticity = 0.0
        self.ghg_coefficients = {}
        self._read_in_fixed_output = None
        self._cal_output = None

        # Per-period state
        self.share = 0.0
        self.tech_cost = 0.0
        self.fuel_cost = 0.0
        self.output = 0.0
        self.input = 0.0
        self.fixed_output = 0.0
        self.emissions = {}
        self.emissions_by_fuel = {}
        self.indirect_emissions = {}

        # Collaborators, set by complete_init()
        self.region_name = None
        self.sector_name = None
        self.marketplace = None
        self.modeltime = None

    def __repr__(self):
        return f"{type(self).__name__}({self.name!r}, {self.year})"

    # ------------ Configuration ------------ #
    def parse(self, parameters):
        """
        Apply parameters read from a model description.

        Parameters
        ----------
        parameters : dict {str: any}
            Parameter names (see `ShareCal.utils.parameters`) mapped to their value for this
            vintage. The emissions coefficient parameter maps to a dictionary of
            ``{gas: coefficient}``.

        Returns
        -------
        Technology
            This vintage, to allow chaining.
        """
        for param, value in parameters.items():
            if param not in self.valid_params:
                logger.error(f"Unknown parameter '{param}' for technology {self.name}. Skipping.")
                continue
            self._parse_parameter(param, value)
        return self

    def _parse_parameter(self, param, value):
        if param == PARAM.tech_type:
            return
        elif param == PARAM.fuel:
            self.fuel_name = value
        elif param == PARAM.efficiency:
            self.efficiency = float(value)
        elif param == PARAM.non_energy_cost:
            self.non_energy_cost = float(value)
        elif param == PARAM.share_weight:
            self.share_weight = float(value)
        elif param == PARAM.logit_exponent:
            self.logit_exponent = float(value)
        elif param == PARAM.fuel_pref_elasticity:
            self.fuel_pref_elasticity = float(value)
        elif param == PARAM.fixed_output:
            self._read_in_fixed_output = float(value)
            self.fixed_output = self._read_in_fixed_output
        elif param == PARAM.calibrated_output:
            self._cal_output = float(value)
        elif param == PARAM.emissions_coefficient:
            for gas, coef in value.items():
                self.ghg_coefficients[gas] = float(coef)

    def clone(self):
        cloned = copy.copy(self)
        cloned.ghg_coefficients = dict(self.ghg_coefficients)
        cloned.emissions = {}
        cloned.emissions_by_fuel = {}
        cloned.indirect_emissions = {}
        return cloned

    def set_year(self, year):
        self.year = year

    def _tech_period(self):
        if self.modeltime is None or self.year is None:
            return 0
        return self.modeltime.yr_to_per(self.year)

    def complete_init(self, region_name, sector_name, marketplace=None, modeltime=None,
                      land_allocator=None):
        self.region_name = region_name
        self.sector_name = sector_name
        self.marketplace = marketplace
        self.modeltime = modeltime
        if self.efficiency <= 0:
            warnings.warn(f"Efficiency of {self.efficiency} for technology {self.name} in "
                          f"{sector_name} ({region_name}) is not positive. Reset to 1.")
            self.efficiency = 1.0

    def init_calc(self, region_name, sector_name, period):
        self.output = 0.0
        self.input = 0.0

    # ------------ Cost & Share ------------ #
    def calc_cost(self, region_name, sector_name, period):
        fuel_price = 0.0
        if self.marketplace is not None and self.fuel_name is not None:
            fuel_price = self.marketplace.get_price(self.fuel_name, region_name, period)
        self.fuel_cost = fuel_price / self.efficiency
        self.tech_cost = self.fuel_cost + self.non_energy_cost

    def calc_share(self, region_name, gdp, period):
        """
        Calculate and store the technology's unnormalized share. A non-positive cost gives a share
        of 0, since raising 0 to a negative exponent is undefined.
        """
        if self.tech_cost <= 0:
            self.share = 0.0
            return self.share

        self.share = self.share_weight * self.tech_cost ** self.logit_exponent
        if self.fuel_pref_elasticity != 0 and gdp is not None:
            self.share *= gdp.get_best_scaled_gdp_per_cap(period) ** self.fuel_pref_elasticity
        return self.share

    def normalize_share(self, total):
        if total == 0:
            self.share = 0.0
        else:
            self.share /= total

    def set_share(self, share):
        self.share = share

    def adj_shares(self, subsector_demand, subsector_fixed_output, var_share_total, period):
        """
        Make the technology share consistent with the fixed output inside its subsector. A fixed
        technology takes exactly its fixed output, while variable technologies split the remaining
        subsector demand in proportion to their share of the variable total.
        """
        if subsector_demand <= 0:
            self.share = 0.0
            return

        if self.output_is_fixed():
            self.share = self.fixed_output / subsector_demand
        elif var_share_total > 0:
            remaining = max(subsector_demand - subsector_fixed_output, 0.0)
            self.share = (self.share / var_share_total) * remaining / subsector_demand
        else:
            self.share = 0.0

    # ------------ Production ------------ #
    def production(self, region_name, sector_name, demand, gdp, period):
        if self.output_is_fixed():
            self.output = self.fixed_output
        else:
            self.output = self.share * demand
        self.input = self.output / self.efficiency

    def tabulate_fixed_demands(self, region_name, period):
        """
        Add the input implied by a fixed output to the calibrated demand recorded for the fuel
        market.
        """
        if self.marketplace is None or self.fuel_name is None or not self.output_is_fixed():
            return
        self.marketplace.add_to_market_info_value(self.fuel_name, region_name, period,
                                                  PARAM.cal_demand, self.get_fixed_input())

    def clear_fixed_demands(self, region_name, period):
        if self.marketplace is None or self.fuel_name is None:
            return
        self.marketplace.set_market_info_value(self.fuel_name, region_name, period,
                                               PARAM.cal_demand, 0.0)

    # ------------ Fixed Output ------------ #
    def output_is_fixed(self):
        return self._read_in_fixed_output is not None

    def calc_fixed_output(self, period):
        self.reset_fixed_output(period)

    def reset_fixed_output(self, period):
        self.fixed_output = self._read_in_fixed_output or 0.0

    def scale_fixed_output(self, ratio):
        self.fixed_output *= ratio

    def get_fixed_output(self):
        return self.fixed_output

    def get_fixed_input(self):
        return self.fixed_output / self.efficiency

    # ------------ Calibration ------------ #
    def get_calibration_status(self):
        return self._cal_output is not None

    def get_calibration_output(self):
        return self._cal_output if self._cal_output is not None else 0.0

    def get_calibration_input(self):
        return self.get_calibration_output() / self.efficiency

    def scale_calibration_input(self, factor):
        if self._cal_output is not None:
            self._cal_output *= factor

    def adjust_for_calibration(self, subsector_demand):
        """
        Scale the share-weight of a calibrated technology so that its share of `subsector_demand`
        reproduces its calibrated output.
        """
        if not self.get_calibration_status():
            return

        tech_demand = self.share * subsector_demand
        if tech_demand > 0:
            self.share_weight *= self.get_calibration_output() / tech_demand

        if self.share_weight < 0:
            warnings.warn(f"Share-weight of {self.share_weight} for technology {self.name} in "
                          f"{self.sector_name} ({self.region_name}) is negative. Reset to 1.")
            self.share_weight = 1.0

    def is_tech_available(self):
        return self.share_weight > 0

    # ------------ Accessors ------------ #
    def get_share(self):
        return self.share

    def get_tech_cost(self):
        return self.tech_cost

    def get_fuel_cost(self):
        return self.fuel_cost

    def get_fuel_name(self):
        return self.fuel_name

    def get_output(self):
        return self.output

    def get_input(self):
        return self.input

    def get_efficiency(self):
        return self.efficiency

    def get_intensity(self):
        return 1.0 / self.get_efficiency()

    def get_non_energy_cost(self):
        return self.non_energy_cost

    def get_logit_exponent(self):
        return self.logit_exponent

    def get_share_weight(self):
        return self.share_weight

    def set_share_weight(self, share_weight):
        self.share_weight = float(share_weight)

    def scale_share_weight(self, scale):
        self.share_weight *= scale

    # ------------ Emissions ------------ #
    def get_ghg_names(self):
        return list(self.ghg_coefficients)

    def get_number_of_ghgs(self):
        return len(self.ghg_coefficients)

    def get_ghg_coefficient(self, gas):
        return self.ghg_coefficients.get(gas, 0.0)

    def copy_ghg_parameters(self, previous):
        """
        Inherit the emissions coefficients of the previous period's vintage for any gas this
        vintage didn't define.
        """
        for gas, coef in previous.ghg_coefficients.items():
            if gas not in self.ghg_coefficients:
                self.ghg_coefficients[gas] = coef

    def calc_emission(self):
        """
        Calculate the emissions of each gas from the current input. CO2 emissions are also
        recorded against the fuel consumed.
        """
        self.emissions = {gas: coef * self.input for gas, coef in self.ghg_coefficients.items()}
        self.emissions_by_fuel = {}
        if self.fuel_name is not None:
            self.emissions_by_fuel[self.fuel_name] = self.emissions.get(PARAM.co2, 0.0)
        return self.emissions

    def calc_indirect_emission(self, indirect_coefficients):
        """
        Calculate the emissions released upstream while producing the fuel this technology
        consumes.

        Parameters
        ----------
        indirect_coefficients : dict {str: dict {str: float}}
            Emissions per unit of fuel, keyed by fuel name and then by gas name.
        """
        fuel_coefficients = indirect_coefficients.get(self.fuel_name, {})
        self.indirect_emissions = {gas: coef * self.input
                                   for gas, coef in fuel_coefficients.items()}
        return self.indirect_emissions

    def get_carbon_tax_paid(self, region_name, period):
        """
        Tax paid on the emissions of the last `calc_emission`, using the price of each gas's market.
        Gases without a market are untaxed.
        """
        if self.marketplace is None:
            return 0.0
        return sum(self.marketplace.get_price(gas, region_name, period) * amount
                   for gas, amount in self.emissions.items())
