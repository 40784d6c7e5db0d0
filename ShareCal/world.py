class World:
    """
    Emissions coefficients of primary fuels. A coefficient can be given for every region (keyed by
    fuel name) or for one region (keyed by a ``(region, fuel)`` tuple); the regional value wins.
    """

    def __init__(self, co2_coefficients=None):
        self.co2_coefficients = dict(co2_coefficients or {})

    def set_primary_fuel_co2_coef(self, fuel, value, region=None):
        key = fuel if region is None else (region, fuel)
        self.co2_coefficients[key] = float(value)

    def get_primary_fuel_co2_coef(self, region, fuel):
        if (region, fuel) in self.co2_coefficients:
            return self.co2_coefficients[(region, fuel)]
        return self.co2_coefficients.get(fuel, 0.0)
