import logging
import warnings

from .land_allocator import LandAllocator
from .technology import Technology
from ..utils import parameters as PARAM
from ..utils.general_utils import SMALL_NUM, TINY_NUM

logger = logging.getLogger(__name__)

# Conversion of market prices from 1975 to 1990 dollars
CVRT_75_TO_90 = 2.212


class FoodProductionTechnology(Technology):
    """
    A profit-based agricultural technology.

    Food production technologies do not compete through the logit share. Instead they publish a
    profit rate to the land allocator, which decides how much land they receive, and produce the
    yield of that land. Their unnormalized share is always 1 and calibration happens in the land
    allocator, so `adjust_for_calibration` does nothing.

    Parameters
    ----------
    name : str
        Name of the crop produced. Also the name this technology is known by in the land allocator.
    year : int, optional
        The year of the period this vintage belongs to.
    """
    tech_type = PARAM.food_production_technology
    valid_params = PARAM.food_production_params

    def __init__(self, name, year=None):
        super().__init__(name, year)
        self.land_type = None
        self.variable_cost = 0.0
        self.cal_yield = None
        self.cal_land_used = None
        self.cal_observed_yield = None
        self.ag_prod_change = 0.0
        self.harvested_to_cropped_land_ratio = 1.0
        self.above_ground_carbon = 0.0
        self.below_ground_carbon = 0.0
        self.land_allocator = None

    def _parse_parameter(self, param, value):
        if param == PARAM.land_type:
            self.land_type = value
        elif param == PARAM.variable_cost:
            self.variable_cost = float(value)
        elif param == PARAM.calibrated_yield:
            self.cal_yield = float(value)
        elif param == PARAM.calibrated_land_used:
            self.cal_land_used = float(value)
        elif param == PARAM.ag_prod_change:
            self.ag_prod_change = float(value)
        elif param == PARAM.harvested_to_cropped_ratio:
            self.harvested_to_cropped_land_ratio = float(value)
        elif param == PARAM.above_ground_carbon:
            self.above_ground_carbon = float(value)
        elif param == PARAM.below_ground_carbon:
            self.below_ground_carbon = float(value)
        else:
            super()._parse_parameter(param, value)

    def complete_init(self, region_name, sector_name, marketplace=None, modeltime=None,
                      land_allocator=None):
        if land_allocator is None:
            raise ValueError(f"Food production technology {self.name} in {sector_name} "
                             f"({region_name}) requires a land allocator")
        self.land_allocator = land_allocator

        super().complete_init(region_name, sector_name, marketplace, modeltime, land_allocator)

        tech_period = self._tech_period()
        self.land_allocator.add_land_usage(self.land_type, self.name, LandAllocator.CROP,
                                           tech_period)

        if self.ag_prod_change > SMALL_NUM and self.get_calibration_status():
            warnings.warn(f"Food production technology {self.name} may not have technical "
                          f"change in a calibration period. Reset to 0.")
            self.ag_prod_change = 0.0

        if self.harvested_to_cropped_land_ratio < SMALL_NUM:
            warnings.warn(f"Invalid harvested to cropped land ratio of "
                          f"{self.harvested_to_cropped_land_ratio} for {self.name}. Reset to 1.")
            self.harvested_to_cropped_land_ratio = 1.0

        self.set_cal_land_values()

    def set_cal_land_values(self):
        """
        Pass calibrated land and yield values to the land allocator. When both calibrated output and
        calibrated land are known, the observed yield is derived from them and takes precedence over
        any read-in calibrated yield.
        """
        tech_period = self._tech_period()
        ratio = self.harvested_to_cropped_land_ratio

        if self.get_calibration_status() and self.cal_land_used is not None:
            if self.cal_land_used <= 0:
                warnings.warn(f"Calibrated land used of {self.cal_land_used} for {self.name} is "
                              f"not positive. Calibrated yield not set.")
                return
            self.cal_observed_yield = self.get_calibration_output() / self.cal_land_used
            if self.cal_yield is not None:
                logger.info(f"Calibrated yield of {self.name} will be overridden by the "
                            f"observed yield.")

            self.land_allocator.set_cal_land_allocation(self.land_type, self.name,
                                                        self.cal_land_used / ratio,
                                                        tech_period, tech_period)
            self.land_allocator.set_cal_observed_yield(self.land_type, self.name,
                                                       self.cal_observed_yield * ratio,
                                                       tech_period)
        elif self.cal_yield is not None:
            self.land_allocator.set_cal_observed_yield(self.land_type, self.name,
                                                       self.cal_yield * ratio, tech_period)

    def init_calc(self, region_name, sector_name, period):
        super().init_calc(region_name, sector_name, period)

        # Technical change may not apply to calibrated periods
        if self.get_calibration_status():
            for past_period in range(period + 1):
                self.land_allocator.apply_ag_prod_change(self.land_type, self.name, 0.0,
                                                         past_period, past_period)
        self.land_allocator.apply_ag_prod_change(self.land_type, self.name, self.ag_prod_change,
                                                 period, period)

        cal_var_cost_name = self.cal_var_cost_name(region_name)
        cal_var_cost = self._calc_cal_var_cost(region_name, sector_name, period,
                                               cal_var_cost_name)

        # Carry the calibrated variable cost to the next period
        if self.marketplace is not None and self.modeltime is not None \
                and period + 1 < self.modeltime.max_per:
            self.marketplace.set_market_info_value(sector_name, region_name, period + 1,
                                                   cal_var_cost_name, cal_var_cost)

        self.land_allocator.set_carbon_content(self.land_type, self.name,
                                               self.above_ground_carbon,
                                               self.below_ground_carbon, period)

    def cal_var_cost_name(self, region_name):
        return f"calVarCost-{self.name}-{region_name}"

    def _calc_cal_var_cost(self, region_name, sector_name, period, cal_var_cost_name):
        if self.marketplace is None:
            return self.variable_cost

        if self.cal_observed_yield is not None:
            cal_price = self.marketplace.get_market_info_value(sector_name, region_name, period,
                                                               PARAM.cal_price)
            unmanaged_rate = self.land_allocator.get_unmanaged_cal_ave_observed_rate(
                period, self.land_type)
            cal_var_cost = cal_price - unmanaged_rate / self.calc_discount_factor() \
                / (self.cal_observed_yield * self.harvested_to_cropped_land_ratio)

            if cal_var_cost > SMALL_NUM:
                self.variable_cost = cal_var_cost
            else:
                logger.debug(f"Read in value for calPrice in {region_name} {self.name} is too "
                             f"low by {abs(cal_var_cost)}")

            if cal_price > 0 and cal_var_cost > cal_price * 0.99:
                logger.debug(f"Calibrated variable cost of {cal_var_cost} in {region_name} sector "
                             f"{sector_name} is very close to calibrated price "
                             f"({(cal_price - cal_var_cost) / cal_price * 100}%)")
        else:
            cal_var_cost = self.marketplace.get_market_info_value(sector_name, region_name,
                                                                  period, cal_var_cost_name)
            if cal_var_cost > SMALL_NUM:
                self.variable_cost = cal_var_cost

        return cal_var_cost

    def calc_discount_factor(self):
        # Food is produced within a single year
        return 1.0

    def calc_profit_rate(self, region_name, product_name, period):
        """
        Profit rate per unit of land. Can be negative.
        """
        price = 0.0
        if self.marketplace is not None:
            price = self.marketplace.get_price(product_name, region_name, period)
        return price * CVRT_75_TO_90 - self.variable_cost

    def calc_cost(self, region_name, sector_name, period):
        profit_rate = self.calc_profit_rate(region_name, sector_name, period)
        self.land_allocator.set_intrinsic_rate(region_name, self.land_type, self.name,
                                               profit_rate, period)
        self.fuel_cost = self.variable_cost
        self.tech_cost = 1.0

    def calc_share(self, region_name, gdp, period):
        self.share = 1.0
        return self.share

    def adjust_for_calibration(self, subsector_demand):
        pass

    def production(self, region_name, sector_name, demand, gdp, period):
        profit_rate = self.calc_profit_rate(region_name, sector_name, period)
        self.land_allocator.calc_yield(self.land_type, self.name, region_name, profit_rate,
                                       period, period)
        self.output = self.calc_supply(region_name, sector_name, period)
        self.input = self.land_allocator.get_land_allocation(self.land_type, self.name, period)

    def calc_supply(self, region_name, product_name, period):
        """
        Food produced, which is the agronomic yield (per harvest) times the harvested land.
        """
        economic_yield = self.land_allocator.get_yield(self.land_type, self.name, period)
        assert economic_yield >= 0

        agronomic_yield = economic_yield / self.harvested_to_cropped_land_ratio
        land_allocation = self.land_allocator.get_land_allocation(self.land_type, self.name,
                                                                  period)
        harvested_land = land_allocation * self.harvested_to_cropped_land_ratio

        if agronomic_yield < SMALL_NUM and land_allocation > 0.1 and self.variable_cost > TINY_NUM:
            logger.info(f"Zero production of {product_name} by technology {self.name} in region "
                        f"{region_name} with a positive land allocation of {land_allocation}.")

        return agronomic_yield * harvested_land

    def get_fuel_cost(self):
        return self.variable_cost

    def get_non_energy_cost(self):
        return 0.0

    def get_efficiency(self):
        return 1.0
