class GDP:
    """
    Scaled GDP per capita by period. The scaled value (GDP per capita relative to the base
    period) drives the fuel-preference elasticity term of a subsector's share.

    Parameters
    ----------
    scaled_gdp_per_capita : sequence of float, optional
        One value per period. Periods beyond the end of the sequence use 1.0.
    """

    def __init__(self, scaled_gdp_per_capita=None):
        self.scaled_gdp_per_capita = [float(v) for v in (scaled_gdp_per_capita or [])]

    def get_best_scaled_gdp_per_cap(self, period):
        if 0 <= period < len(self.scaled_gdp_per_capita):
            return self.scaled_gdp_per_capita[period]
        return 1.0

    def set_scaled_gdp_per_cap(self, period, value):
        while len(self.scaled_gdp_per_capita) <= period:
            self.scaled_gdp_per_capita.append(1.0)
        self.scaled_gdp_per_capita[period] = float(value)
