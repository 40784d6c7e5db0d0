import logging

import pytest

from ShareCal import FoodProductionTechnology, Marketplace
from ShareCal.technologies.food_production import CVRT_75_TO_90
from ShareCal.utils import parameters as PARAM


@pytest.fixture
def corn_params():
    return {
        PARAM.tech_type: PARAM.food_production_technology,
        PARAM.land_type: "cropland",
        PARAM.variable_cost: 1.5,
        PARAM.above_ground_carbon: 3.0,
        PARAM.below_ground_carbon: 7.0,
    }


@pytest.fixture
def make_corn(modeltime, land_allocator):
    def _make(params, marketplace=None):
        tech = FoodProductionTechnology("corn", 1990).parse(params)
        tech.complete_init("USA", "grain", marketplace or Marketplace(), modeltime,
                           land_allocator)
        return tech
    return _make


class TestFoodProductionTechnology:
    def test_requires_land_allocator(self, corn_params, modeltime):
        tech = FoodProductionTechnology("corn", 1990).parse(corn_params)
        with pytest.raises(ValueError):
            tech.complete_init("USA", "grain", Marketplace(), modeltime)

    def test_registers_land_usage(self, make_corn, corn_params, land_allocator):
        make_corn(corn_params)
        assert land_allocator.land_usage[("cropland", "corn")] == (land_allocator.CROP, 0)

    def test_observed_yield_from_calibrated_land(self, make_corn, corn_params, land_allocator,
                                                 caplog):
        corn_params.update({PARAM.calibrated_output: 50.0, PARAM.calibrated_land_used: 20.0,
                            PARAM.calibrated_yield: 9.0})
        with caplog.at_level(logging.INFO):
            tech = make_corn(corn_params)

        assert tech.cal_observed_yield == pytest.approx(2.5)
        assert land_allocator.cal_land["corn"] == pytest.approx(20.0)
        assert land_allocator.cal_yield["corn"] == pytest.approx(2.5)
        assert "overridden" in caplog.text

    def test_calibrated_yield_without_land(self, make_corn, corn_params, land_allocator):
        corn_params[PARAM.calibrated_yield] = 4.0
        make_corn(corn_params)
        assert land_allocator.cal_yield["corn"] == pytest.approx(4.0)
        assert "corn" not in land_allocator.cal_land

    def test_non_positive_calibrated_land_warns(self, make_corn, corn_params):
        corn_params.update({PARAM.calibrated_output: 50.0, PARAM.calibrated_land_used: 0.0})
        with pytest.warns(UserWarning, match="not positive"):
            tech = make_corn(corn_params)
        assert tech.cal_observed_yield is None

    def test_ag_prod_change_removed_when_calibrated(self, make_corn, corn_params):
        corn_params.update({PARAM.calibrated_output: 50.0, PARAM.ag_prod_change: 0.01})
        with pytest.warns(UserWarning, match="technical change"):
            tech = make_corn(corn_params)
        assert tech.ag_prod_change == 0.0

    def test_invalid_harvest_ratio_reset(self, make_corn, corn_params):
        corn_params[PARAM.harvested_to_cropped_ratio] = 0.0
        with pytest.warns(UserWarning, match="Reset to 1"):
            tech = make_corn(corn_params)
        assert tech.harvested_to_cropped_land_ratio == 1.0

    def test_calibrated_variable_cost(self, make_corn, corn_params, land_allocator):
        corn_params.update({PARAM.calibrated_output: 50.0, PARAM.calibrated_land_used: 20.0})
        market = Marketplace()
        market.set_market_info_value("grain", "USA", 0, PARAM.cal_price, 4.0)
        land_allocator.unmanaged_rate = 5.0
        tech = make_corn(corn_params, market)

        tech.init_calc("USA", "grain", 0)

        # 4 - 5 / (50 / 20)
        assert tech.variable_cost == pytest.approx(2.0)
        assert market.get_market_info_value("grain", "USA", 1, tech.cal_var_cost_name("USA")) \
            == pytest.approx(2.0)
        assert land_allocator.carbon[("corn", 0)] == (3.0, 7.0)

    def test_variable_cost_carried_forward(self, make_corn, corn_params):
        market = Marketplace()
        tech = make_corn(corn_params, market)
        market.set_market_info_value("grain", "USA", 1, tech.cal_var_cost_name("USA"), 2.5)

        tech.init_calc("USA", "grain", 1)

        assert tech.variable_cost == 2.5

    def test_cost_publishes_profit_rate(self, make_corn, corn_params, land_allocator):
        market = Marketplace()
        market.set_price("grain", "USA", 0, 2.0)
        tech = make_corn(corn_params, market)

        tech.calc_cost("USA", "grain", 0)

        assert land_allocator.intrinsic_rates[("corn", 0)] == pytest.approx(2.0 * CVRT_75_TO_90
                                                                            - 1.5)
        assert tech.calc_share("USA", None, 0) == 1.0
        assert tech.get_fuel_cost() == 1.5

    def test_production(self, make_corn, corn_params, land_allocator):
        corn_params[PARAM.harvested_to_cropped_ratio] = 2.0
        tech = make_corn(corn_params)

        tech.production("USA", "grain", 100.0, None, 0)

        # Economic yield of 1 per cropped unit is 0.5 per harvest on twice the harvested land
        assert tech.get_output() == pytest.approx(10.0)
        assert tech.get_input() == pytest.approx(10.0)

    def test_calibration_does_nothing(self, make_corn, corn_params):
        corn_params[PARAM.calibrated_output] = 50.0
        tech = make_corn(corn_params)
        tech.adjust_for_calibration(200.0)
        assert tech.get_share_weight() == 1.0
