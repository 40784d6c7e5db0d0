import warnings

from .technology import Technology
from ..utils import parameters as PARAM


class TranTechnology(Technology):
    """
    A passenger or freight transport technology.

    Demand and output are service (e.g. passenger-km) while fuel is consumed per vehicle-km. The
    load factor converts between the two, and the fuel intensity per vehicle-km falls over time at
    the technical change rate. Calibration values are read in as fuel input and converted to
    service output.

    Parameters
    ----------
    name : str
        Name of the technology.
    year : int, optional
        The year of the period this vintage belongs to.
    """
    tech_type = PARAM.transportation_technology
    valid_params = PARAM.transportation_params

    def __init__(self, name, year=None):
        super().__init__(name, year)
        self.intensity = 1.0
        self.load_factor = 1.0
        self.tech_change = 0.0
        self._cal_input = None
        self.vehicle_output = 0.0

    def _parse_parameter(self, param, value):
        if param == PARAM.intensity:
            self.intensity = float(value)
        elif param == PARAM.load_factor:
            self.load_factor = float(value)
        elif param == PARAM.tech_change:
            self.tech_change = float(value)
        elif param == PARAM.calibrated_input:
            self._cal_input = float(value)
        else:
            super()._parse_parameter(param, value)

    def complete_init(self, region_name, sector_name, marketplace=None, modeltime=None,
                      land_allocator=None):
        super().complete_init(region_name, sector_name, marketplace, modeltime, land_allocator)
        if self.load_factor <= 0:
            warnings.warn(f"Load factor of {self.load_factor} for technology {self.name} in "
                          f"{sector_name} ({region_name}) is not positive. Reset to 1.")
            self.load_factor = 1.0

    def tech_change_cumulative(self, period):
        """
        Improvement in fuel intensity accumulated since the base period. Technical change starts
        after the first period following the base period.
        """
        if period < 2 or self.modeltime is None:
            return 1.0
        years = self.modeltime.per_to_yr(period - 1) - self.modeltime.start_year
        return (1 + self.tech_change) ** years

    def get_intensity(self, period=None):
        if period is None:
            period = self._tech_period()
        return self.intensity / self.tech_change_cumulative(period)

    def get_efficiency(self):
        return 1.0 / self.get_intensity()

    def calc_cost(self, region_name, sector_name, period):
        fuel_price = 0.0
        if self.marketplace is not None and self.fuel_name is not None:
            fuel_price = self.marketplace.get_price(self.fuel_name, region_name, period)
        self.fuel_cost = fuel_price * self.get_intensity(period) / self.load_factor
        self.tech_cost = self.fuel_cost + self.non_energy_cost

    def production(self, region_name, sector_name, demand, gdp, period):
        if self.output_is_fixed():
            self.output = self.fixed_output
        else:
            self.output = self.share * demand
        self.vehicle_output = self.output / self.load_factor
        self.input = self.vehicle_output * self.get_intensity(period)

    def get_fixed_input(self):
        return self.fixed_output / self.load_factor * self.get_intensity()

    # ------------ Calibration ------------ #
    def get_calibration_status(self):
        return self._cal_input is not None or super().get_calibration_status()

    def get_calibration_output(self):
        if self._cal_input is None:
            return super().get_calibration_output()
        return self._cal_input * self.load_factor / self.get_intensity()

    def get_calibration_input(self):
        if self._cal_input is None:
            return self.get_calibration_output() * self.get_intensity() / self.load_factor
        return self._cal_input

    def scale_calibration_input(self, factor):
        if self._cal_input is not None:
            self._cal_input *= factor
        super().scale_calibration_input(factor)
