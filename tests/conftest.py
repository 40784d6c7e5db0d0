import pytest

import ShareCal
from ShareCal.utils import parameters as PARAM


class FakeLandAllocator(ShareCal.LandAllocator):
    """
    Records every call and allocates a fixed amount of land. Yields are the calibrated observed
    yield when one was given, otherwise 1.
    """
    def __init__(self, land=10.0, unmanaged_rate=0.0):
        self.land = land
        self.unmanaged_rate = unmanaged_rate
        self.land_usage = {}
        self.ag_prod_change = {}
        self.cal_land = {}
        self.cal_yield = {}
        self.intrinsic_rates = {}
        self.carbon = {}

    def add_land_usage(self, land_type, product_name, land_usage_type, period):
        self.land_usage[(land_type, product_name)] = (land_usage_type, period)

    def apply_ag_prod_change(self, land_type, product_name, ag_prod_change, period,
                             harvest_period):
        self.ag_prod_change[(product_name, period)] = ag_prod_change

    def set_cal_land_allocation(self, land_type, product_name, cal_land_used, period,
                                harvest_period):
        self.cal_land[product_name] = cal_land_used

    def set_cal_observed_yield(self, land_type, product_name, cal_observed_yield, period):
        self.cal_yield[product_name] = cal_observed_yield

    def get_unmanaged_cal_ave_observed_rate(self, period, land_type):
        return self.unmanaged_rate

    def set_intrinsic_rate(self, region_name, land_type, product_name, profit_rate, period):
        self.intrinsic_rates[(product_name, period)] = profit_rate

    def calc_yield(self, land_type, product_name, region_name, profit_rate, period,
                   harvest_period):
        pass

    def get_yield(self, land_type, product_name, period):
        return self.cal_yield.get(product_name, 1.0)

    def get_land_allocation(self, land_type, product_name, period):
        return self.cal_land.get(product_name, self.land)

    def set_carbon_content(self, land_type, product_name, above_ground_carbon,
                           below_ground_carbon, period):
        self.carbon[(product_name, period)] = (above_ground_carbon, below_ground_carbon)


@pytest.fixture
def modeltime():
    return ShareCal.ModelTime(1990, 2010, step=5)


@pytest.fixture
def config():
    return ShareCal.Configuration()


@pytest.fixture
def marketplace():
    market = ShareCal.Marketplace()
    for period in range(5):
        market.set_price("coal", "USA", period, 1.0)
        market.set_price("gas", "USA", period, 2.0)
    return market


@pytest.fixture
def land_allocator():
    return FakeLandAllocator()


def _add_tech(subsector, name, fuel, params=None):
    params = dict(params or {})
    params[PARAM.fuel] = fuel
    year_params = {subsector.modeltime.start_year: params}
    subsector.parse_technology(name, year_params, fillout=True)


@pytest.fixture
def add_tech():
    """
    Add a standard technology, with the same parameters in every period, to a subsector.
    """
    return _add_tech


@pytest.fixture
def make_subsector(modeltime, config, marketplace):
    """
    Build an initialised subsector holding one technology per ``(name, fuel)`` or
    ``(name, fuel, params)`` tuple.
    """
    def _make(name="coal", techs=(("coal plant", "coal"),), sector="electricity", params=None):
        subsector = ShareCal.Subsector("USA", sector, name, modeltime, config)
        subsector.parse(params or {})
        for tech in techs:
            _add_tech(subsector, *tech)
        subsector.complete_init(marketplace, ShareCal.World())
        return subsector

    return _make
