class ModelTime:
    """
    Mapping between model periods (0, 1, 2, ...) and calendar years.

    Parameters
    ----------
    start_year : int
        The year of period 0 (the base year).
    end_year : int
        The last simulated year. Must be reachable from `start_year` in steps of `step`.
    step : int, optional
        Number of years between consecutive periods.
    """

    def __init__(self, start_year, end_year, step=5):
        if step <= 0:
            raise ValueError(f"Time step must be positive, got {step}")
        if end_year < start_year:
            raise ValueError(f"End year {end_year} precedes start year {start_year}")

        self.start_year = int(start_year)
        self.end_year = int(end_year)
        self.step = int(step)
        self.years = list(range(self.start_year, self.end_year + 1, self.step))
        self.max_per = len(self.years)

    def per_to_yr(self, period):
        assert 0 <= period < self.max_per, f"Period {period} is outside the model horizon"
        return self.years[period]

    def yr_to_per(self, year):
        """
        Convert a year to the period which contains it. Years before the start of the model map
        to period 0 and years after its end map to the last period.
        """
        year = int(year)
        if year <= self.start_year:
            return 0
        if year >= self.end_year:
            return self.max_per - 1
        return (year - self.start_year) // self.step

    def __len__(self):
        return self.max_per

    def __repr__(self):
        return f"ModelTime({self.start_year}, {self.end_year}, step={self.step})"
