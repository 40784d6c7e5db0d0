import logging
import warnings

import numpy as np

from . import calibration
from . import capacity_limits
from . import emissions
from . import fixed_output
from . import share_calculation
from . import share_weight_interpolation
from .config import Configuration
from .technologies import create_technology
from .utils import parameters as PARAM
from .vintage_table import VintageTable

logger = logging.getLogger(__name__)

DEFAULT_LOGIT_EXPONENT = -3.0


class Subsector:
    """
    A competing alternative within a sector, made up of one or more technologies.

    The subsector holds its state as one value per model period and its technologies in a
    `VintageTable`. The share, capacity limit, calibration, and share-weight interpolation
    calculations live in their own modules; the methods here pass the subsector to them.

    Parameters
    ----------
    region_name : str
        Name of the region the owning sector belongs to.
    sector_name : str
        Name of the owning sector.
    name : str
        Name of this subsector.
    modeltime : ShareCal.ModelTime
        The model periods.
    config : ShareCal.Configuration, optional
        Run configuration. A default configuration is used when none is given.

    Attributes
    ----------
    share : numpy.ndarray
        Share of the sector by period. Unnormalized after `calc_share`, normalized once the sector
        has normalized it.
    share_weights : numpy.ndarray
        Share-weight by period.
    cap_limit : numpy.ndarray
        Capacity limit (as a share of the sector) by period. 1 means unlimited.
    cap_limited : numpy.ndarray of bool
        Whether the capacity limit is binding in the current iteration.
    fixed_share : numpy.ndarray
        Share of the sector supplied by this subsector's fixed output.
    cal_output_value : numpy.ndarray
        Subsector-level calibrated output, used in periods where `do_calibration` is set.
    calibration_status : numpy.ndarray of bool
        True in periods where the subsector or any of its technologies is calibrated.
    vintages : ShareCal.VintageTable
        The technologies of the subsector.
    emissions : list of dict {str: float}
        Direct emissions by gas for each period, as of the last `emission` call.
    fuel_consumption : list of dict {str: float}
        Technology input by fuel name for each period, as of the last `update_summary` call.
    """

    def __init__(self, region_name, sector_name, name, modeltime, config=None):
        self.region_name = region_name
        self.sector_name = sector_name
        self.name = name
        self.modeltime = modeltime
        self.config = config or Configuration()
        self.debug_checking = self.config.get_bool("debugChecking")

        max_per = modeltime.max_per
        self.share = np.zeros(max_per)
        self.share_weights = np.ones(max_per)
        self.logit_exponent = np.full(max_per, DEFAULT_LOGIT_EXPONENT)
        self.fuel_pref_elasticity = np.zeros(max_per)
        self.cap_limit = np.ones(max_per)
        self.cap_limited = np.zeros(max_per, dtype=bool)
        self.fixed_share = np.zeros(max_per)
        self.cal_output_value = np.zeros(max_per)
        self.do_calibration = np.zeros(max_per, dtype=bool)
        self.calibration_status = np.zeros(max_per, dtype=bool)
        self.price = np.zeros(max_per)
        self.fuel_price = np.zeros(max_per)
        self.co2_em_factor = np.zeros(max_per)
        self.input = np.zeros(max_per)
        self.output = np.zeros(max_per)
        self.emissions = [{} for _ in range(max_per)]
        self.emissions_by_fuel = [{} for _ in range(max_per)]
        self.indirect_emissions = [{} for _ in range(max_per)]
        self.fuel_consumption = [{} for _ in range(max_per)]

        self.base_share_weight = 0.0
        self.scale_year = modeltime.end_year

        self.vintages = VintageTable(modeltime)

        # Collaborators, set by complete_init()
        self.marketplace = None
        self.world = None
        self.land_allocator = None

    def __repr__(self):
        return f"Subsector({self.region_name}.{self.sector_name}.{self.name})"

    # ------------ Configuration ------------ #
    def _set_by_year(self, values, array, name):
        if not isinstance(values, dict):
            array[:] = values
            return
        for year, value in values.items():
            if int(year) not in self.modeltime.years:
                logger.warning(f"Year {year} of '{name}' for subsector {self.name} is not a model "
                               f"year. Skipping.")
                continue
            array[self.modeltime.yr_to_per(year)] = value

    def parse(self, parameters):
        """
        Apply subsector parameters read from a model description.

        Parameters
        ----------
        parameters : dict {str: any}
            Parameter names mapped either to a single value (used for every period) or to a
            dictionary of ``{year: value}``. The base share weight and scale year are single
            values.

        Returns
        -------
        Subsector
            This subsector, to allow chaining.
        """
        for param, value in parameters.items():
            if param == PARAM.capacity_limit:
                self._set_by_year(value, self.cap_limit, param)
            elif param == PARAM.share_weight:
                self._set_by_year(value, self.share_weights, param)
            elif param == PARAM.logit_exponent:
                self._set_by_year(value, self.logit_exponent, param)
            elif param == PARAM.fuel_pref_elasticity:
                self._set_by_year(value, self.fuel_pref_elasticity, param)
            elif param == PARAM.calibrated_output:
                self._set_by_year(value, self.cal_output_value, param)
                flags = {year: True for year in value} if isinstance(value, dict) else True
                self._set_by_year(flags, self.do_calibration, param)
            elif param == PARAM.base_share_weight:
                self.base_share_weight = float(value)
                self.share[0] = self.base_share_weight
            elif param == PARAM.scale_year:
                self.scale_year = int(value)
            else:
                logger.error(f"Unknown parameter '{param}' for subsector {self.name}. Skipping.")
        return self

    def parse_technology(self, name, year_params, tech_type=PARAM.standard_technology,
                         fillout=False, delete=False, nocreate=False):
        """
        Add, update, or delete technology `name` from a configuration fragment.

        Parameters
        ----------
        name : str
            The technology name.
        year_params : dict {int: dict}
            Technology parameters for each configured year.
        tech_type : str, optional
            The type of technology to create for a new row.
        fillout : bool, optional
            Copy each configured vintage into every later period.
        delete : bool, optional
            Remove the technology.
        nocreate : bool, optional
            Only update the technology if it already exists.

        Returns
        -------
        bool
            True if the vintage table changed.
        """
        period_params = {}
        for year, params in sorted(year_params.items()):
            if int(year) not in self.modeltime.years:
                logger.warning(f"Year {year} of technology {name} in subsector {self.name} is "
                               f"not a model year. Skipping.")
                continue
            period_params[self.modeltime.yr_to_per(year)] = params

        def factory(tech_name, period):
            return create_technology(tech_type, tech_name, self.modeltime.per_to_yr(period))

        return self.vintages.merge_fragment(name, period_params, factory, fillout=fillout,
                                            delete=delete, nocreate=nocreate)

    def add_technology(self, technologies):
        """
        Add a technology row made of already constructed vintages, one for each period.
        """
        assert len(technologies) == self.modeltime.max_per, \
            f"Technology row for subsector {self.name} needs one vintage per period"
        return self.vintages.add_row(technologies[0].name, dict(enumerate(technologies)))

    def complete_init(self, marketplace=None, world=None, land_allocator=None):
        """
        Finish setting up the subsector's technologies and freeze its vintage table.
        """
        self.marketplace = marketplace
        self.world = world
        self.land_allocator = land_allocator

        self.vintages.freeze()
        for row in self.vintages:
            for tech in row:
                tech.complete_init(self.region_name, self.sector_name, marketplace,
                                   self.modeltime, land_allocator)

    def get_technologies(self, period):
        return self.vintages.column(period)

    def get_technology(self, name, period):
        return self.vintages.get(self.vintages.row_index(name), period)

    # ------------ Period Initialisation ------------ #
    def init_calc(self, period):
        """
        Prepare the subsector for calculating `period`.

        Technologies are initialised and their fixed outputs restored, the calibration status is
        set, and share-weights are interpolated following a calibrated period. Two guards then
        correct initial states which the share calculation can't handle: a subsector with fixed
        output but no fixed share receives the configured fixed share floor, and a calibrated
        subsector has its capacity limit removed.
        """
        technologies = self.get_technologies(period)
        for tech in technologies:
            tech.init_calc(self.region_name, self.sector_name, period)
            tech.calc_fixed_output(period)

        self.set_calibration_status(period)
        self.interpolate_share_weights(period)
        self.fixed_share[period] = 0

        # Workarounds for the order in which fixed shares and calibration values are initialised
        if self.get_fixed_output(period) > 0 and self.fixed_share[period] == 0:
            self.fixed_share[period] = self.config.fixed_share_floor
        if self.get_total_cal_outputs(period) > 0 and self.cap_limit[period] < 1:
            self.cap_limit[period] = 1.0

        if period == 0:
            return

        previous_technologies = self.get_technologies(period - 1)
        for tech, previous in zip(technologies, previous_technologies):
            if tech.get_fuel_name() != previous.get_fuel_name():
                warnings.warn(f"Type of fuel {previous.get_fuel_name()} changed in period "
                              f"{period}, tech: {tech.name}, subsector: {self.name}, "
                              f"sector: {self.sector_name}, region: {self.region_name}")

            if tech.get_number_of_ghgs() != previous.get_number_of_ghgs():
                warnings.warn(f"Number of GHG objects changed in period {period} to "
                              f"{tech.get_number_of_ghgs()}, tech: {tech.name}, subsector: "
                              f"{self.name}, sector: {self.sector_name}, "
                              f"region: {self.region_name}")

            # Vintages of the first period after the base period keep their own coefficients
            if period > 1:
                tech.copy_ghg_parameters(previous)

    def set_calibration_status(self, period):
        calibration.set_calibration_status(self, period)

    def get_calibration_status(self, period):
        return bool(self.calibration_status[period])

    # ------------ Shares & Prices ------------ #
    def calc_share(self, period, gdp=None):
        return share_calculation.calc_share(self, gdp, period)

    def calc_tech_shares(self, gdp, period):
        return share_calculation.calc_tech_shares(self, gdp, period)

    def calc_price(self, period):
        share_calculation.calc_price(self, period)

    def norm_share(self, total, period):
        share_calculation.norm_share(self, total, period)

    def get_share(self, period):
        return self.share[period]

    def set_share(self, share, period):
        share_calculation.set_share(self, share, period)

    def get_price(self, period):
        return self.price[period]

    def get_fuel_price(self, period):
        return self.fuel_price[period]

    def get_wt_fuel_price(self, period):
        return share_calculation.get_wt_fuel_price(self, period)

    def get_co2_em_factor(self, period):
        return self.co2_em_factor[period]

    def get_share_weight(self, period):
        return self.share_weights[period]

    def scale_share_weight(self, scale_value, period):
        if scale_value != 0:
            self.share_weights[period] *= scale_value

    # ------------ Capacity Limits ------------ #
    @staticmethod
    def cap_limit_transform(cap_limit, org_share):
        return capacity_limits.cap_limit_transform(cap_limit, org_share)

    def limit_shares(self, multiplier, period):
        capacity_limits.limit_shares(self, multiplier, period)

    def get_capacity_limit(self, period):
        return self.cap_limit[period]

    def set_cap_limit_status(self, value, period):
        self.cap_limited[period] = value

    def get_cap_limit_status(self, period):
        return bool(self.cap_limited[period])

    # ------------ Fixed Output ------------ #
    def get_fixed_output(self, period):
        return fixed_output.get_fixed_output(self, period)

    def get_fixed_share(self, period):
        return self.fixed_share[period]

    def set_fixed_share(self, period, share):
        fixed_output.set_fixed_share(self, period, share)

    def set_share_to_fixed_value(self, period):
        fixed_output.set_share_to_fixed_value(self, period)

    def reset_fixed_output(self, period):
        fixed_output.reset_fixed_output(self, period)

    def scale_fixed_output(self, scale_ratio, period):
        fixed_output.scale_fixed_output(self, scale_ratio, period)

    def adj_shares(self, demand, share_ratio, total_fixed_output, period):
        fixed_output.adj_shares(self, demand, share_ratio, total_fixed_output, period)

    def clear_fixed_demands(self, period):
        fixed_output.clear_fixed_demands(self, period)

    def tabulate_fixed_demands(self, period):
        fixed_output.tabulate_fixed_demands(self, period)

    # ------------ Calibration ------------ #
    def adjust_for_calibration(self, sector_demand, total_fixed_output, total_cal_outputs,
                               all_fixed_output, period):
        calibration.adjust_for_calibration(self, sector_demand, total_fixed_output,
                                           total_cal_outputs, all_fixed_output, period)

    def get_total_cal_outputs(self, period):
        return calibration.get_total_cal_outputs(self, period)

    def get_number_avail_techs(self, period):
        return calibration.get_number_avail_techs(self, period)

    def get_cal_and_fixed_inputs(self, period, good_name, both_vals=True):
        return calibration.get_cal_and_fixed_inputs(self, period, good_name, both_vals)

    def get_cal_and_fixed_outputs(self, period, good_name, both_vals=True):
        return calibration.get_cal_and_fixed_outputs(self, period, good_name, both_vals)

    def set_implied_fixed_input(self, period, good_name, required_output):
        return calibration.set_implied_fixed_input(self, period, good_name, required_output)

    def inputs_all_fixed(self, period, good_name):
        return calibration.inputs_all_fixed(self, period, good_name)

    def tech_has_input(self, tech, good_name):
        return calibration.tech_has_input(tech, good_name)

    def scale_calibrated_values(self, period, good_name, scale):
        calibration.scale_calibrated_values(self, period, good_name, scale)

    def scale_calibration_input(self, period, scale_factor):
        calibration.scale_calibration_input(self, period, scale_factor)

    def all_output_fixed(self, period):
        return calibration.all_output_fixed(self, period)

    # ------------ Share-Weight Interpolation ------------ #
    def interpolate_share_weights(self, period):
        share_weight_interpolation.interpolate_share_weights(self, period)

    def share_weight_linear_interp(self, begin_period, end_period):
        share_weight_interpolation.share_weight_linear_interp(self, begin_period, end_period)

    def tech_share_weight_linear_interp(self, begin_period, end_period):
        share_weight_interpolation.tech_share_weight_linear_interp(self, begin_period,
                                                                   end_period)

    def normalize_tech_share_weights(self, period):
        share_weight_interpolation.normalize_tech_share_weights(self, period)

    # ------------ Output ------------ #
    def set_output(self, demand, period, gdp=None):
        """
        Share `demand` (the sector's total demand) out to the technologies of this subsector
        according to its share, and total up the resulting input and output.
        """
        subsector_demand = self.share[period] * demand
        self.input[period] = 0
        for tech in self.get_technologies(period):
            tech.production(self.region_name, self.sector_name, subsector_demand, gdp, period)
            self.input[period] += tech.get_input()
        self.get_output(period)

    def get_output(self, period):
        self.output[period] = sum(tech.get_output() for tech in self.get_technologies(period))
        return self.output[period]

    def get_input(self, period):
        return self.input[period]

    # ------------ Emissions & Summary ------------ #
    def emission(self, period):
        emissions.emission(self, period)

    def indirect_emission(self, period, indirect_coefficients):
        emissions.indirect_emission(self, period, indirect_coefficients)

    def get_emissions(self, period):
        return self.emissions[period]

    def get_emissions_by_fuel(self, period):
        return self.emissions_by_fuel[period]

    def get_indirect_emissions(self, period):
        return self.indirect_emissions[period]

    def get_total_carbon_tax_paid(self, period):
        return emissions.get_total_carbon_tax_paid(self, period)

    def update_summary(self, period):
        emissions.update_summary(self, period)

    def get_fuel_consumption(self, period):
        return self.fuel_consumption[period]

    def clear_fuel_consumption(self, period):
        self.fuel_consumption[period] = {}
