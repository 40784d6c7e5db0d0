import logging

import pytest

import ShareCal
from ShareCal.utils import parameters as PARAM


@pytest.fixture
def subsector(modeltime, config):
    return ShareCal.Subsector("USA", "electricity", "coal", modeltime, config)


class TestSubsectorConfiguration:
    def test_defaults(self, subsector):
        assert list(subsector.share_weights) == [1.0] * 5
        assert list(subsector.cap_limit) == [1.0] * 5
        assert subsector.logit_exponent[0] == -3.0
        assert subsector.scale_year == 2010

    def test_parse_by_year(self, subsector):
        subsector.parse({PARAM.share_weight: {1995: 2.0, 2005: 0.5},
                         PARAM.logit_exponent: -2.0,
                         PARAM.base_share_weight: 0.7})

        assert list(subsector.share_weights) == [1.0, 2.0, 1.0, 0.5, 1.0]
        assert list(subsector.logit_exponent) == [-2.0] * 5
        assert subsector.get_share(0) == 0.7

    def test_scale_share_weight(self, subsector):
        subsector.scale_share_weight(1.5, 0)
        assert subsector.get_share_weight(0) == 1.5

        subsector.scale_share_weight(0, 1)
        assert subsector.get_share_weight(1) == 1.0

    def test_non_model_year_skipped(self, subsector, caplog):
        with caplog.at_level(logging.WARNING):
            subsector.parse({PARAM.share_weight: {1991: 2.0}})
        assert "not a model year" in caplog.text
        assert list(subsector.share_weights) == [1.0] * 5

    def test_unknown_parameter(self, subsector, caplog):
        with caplog.at_level(logging.ERROR):
            subsector.parse({"competition type": "tech compete"})
        assert "Unknown parameter 'competition type'" in caplog.text

    def test_add_technology(self, subsector, modeltime, marketplace):
        subsector.add_technology([ShareCal.Technology("hydro dam", year)
                                  for year in modeltime.years])
        subsector.complete_init(marketplace)

        assert subsector.vintages.frozen
        assert subsector.get_technology("hydro dam", 4).year == 2010

    def test_incomplete_technology_row(self, subsector, modeltime):
        with pytest.raises(AssertionError):
            subsector.add_technology([ShareCal.Technology("hydro dam", 1990)])

    def test_technology_rows_fixed_after_init(self, subsector, add_tech, marketplace):
        add_tech(subsector, "coal plant", "coal")
        subsector.complete_init(marketplace)
        with pytest.raises(ValueError):
            add_tech(subsector, "gas plant", "gas")


class TestSubsectorInitCalc:
    def test_fixed_share_floor(self, make_subsector, config):
        subsector = make_subsector(techs=(("reactor", "uranium", {PARAM.fixed_output: 10.0}),))
        subsector.init_calc(0)
        assert subsector.get_fixed_share(0) == config.fixed_share_floor

    def test_calibration_removes_capacity_limit(self, make_subsector):
        subsector = make_subsector(params={PARAM.capacity_limit: 0.5,
                                           PARAM.calibrated_output: {1990: 10.0}})
        subsector.init_calc(0)
        subsector.init_calc(1)

        assert subsector.get_capacity_limit(0) == 1.0
        assert subsector.get_capacity_limit(1) == 0.5

    def test_fuel_change_warns(self, subsector, marketplace):
        subsector.parse_technology("plant", {1990: {PARAM.fuel: "coal"}}, fillout=True)
        subsector.parse_technology("plant", {2000: {PARAM.fuel: "gas"}})
        subsector.complete_init(marketplace)

        with pytest.warns(UserWarning, match="Type of fuel coal changed"):
            subsector.init_calc(2)

    def test_emissions_not_carried_into_first_period(self, subsector, marketplace):
        subsector.parse_technology("plant", {
            1990: {PARAM.fuel: "coal", PARAM.emissions_coefficient: {"CO2": 25.0}},
            1995: {PARAM.fuel: "coal"},
        }, fillout=True)
        subsector.complete_init(marketplace)

        with pytest.warns(UserWarning, match="Number of GHG objects changed"):
            subsector.init_calc(1)

        assert subsector.get_technology("plant", 1).get_ghg_coefficient("CO2") == 0.0

    def test_emissions_carried_forward(self, subsector, marketplace):
        subsector.parse_technology("plant", {
            1990: {PARAM.fuel: "coal", PARAM.emissions_coefficient: {"CO2": 25.0}},
            1995: {PARAM.fuel: "coal", PARAM.emissions_coefficient: {"CO2": 30.0}},
            2000: {PARAM.fuel: "coal"},
        }, fillout=True)
        subsector.complete_init(marketplace)

        with pytest.warns(UserWarning, match="Number of GHG objects changed"):
            subsector.init_calc(2)

        assert subsector.get_technology("plant", 2).get_ghg_coefficient("CO2") == 30.0


class TestSubsectorOutput:
    def test_set_output(self, make_subsector):
        subsector = make_subsector(techs=(("coal plant", "coal", {PARAM.efficiency: 0.5}),))
        subsector.init_calc(0)
        subsector.calc_share(0)
        subsector.set_share(0.5, 0)

        subsector.set_output(100.0, 0)

        assert subsector.get_output(0) == pytest.approx(50.0)
        assert subsector.get_input(0) == pytest.approx(100.0)


class TestSubsectorEmissions:
    @pytest.fixture
    def subsector(self, make_subsector):
        subsector = make_subsector("fossil", techs=(
            ("coal plant", "coal", {PARAM.efficiency: 0.5,
                                    PARAM.emissions_coefficient: {"CO2": 25.0}}),
            ("gas plant", "gas", {PARAM.emissions_coefficient: {"CO2": 15.0, "CH4": 1.0}}),
        ))
        subsector.init_calc(0)
        # Both technologies cost 2 per unit, so each serves half the demand
        subsector.calc_share(0)
        subsector.set_share(1.0, 0)
        subsector.set_output(100.0, 0)
        return subsector

    def test_emission(self, subsector):
        subsector.emission(0)

        assert subsector.get_emissions(0) == pytest.approx({"CO2": 3250.0, "CH4": 50.0})
        assert subsector.get_emissions_by_fuel(0) == pytest.approx({"coal": 2500.0,
                                                                     "gas": 750.0})
        assert subsector.get_emissions(1) == {}

    def test_emission_recalculated(self, subsector):
        subsector.emission(0)
        subsector.emission(0)
        assert subsector.get_emissions(0)["CO2"] == pytest.approx(3250.0)

    def test_indirect_emission(self, subsector):
        subsector.indirect_emission(0, {"coal": {"CO2": 2.0}, "gas": {"CH4": 0.5}})
        assert subsector.get_indirect_emissions(0) == pytest.approx({"CO2": 200.0, "CH4": 25.0})

    def test_carbon_tax_paid(self, subsector, marketplace):
        marketplace.set_price("CO2", "USA", 0, 0.01)
        subsector.emission(0)
        assert subsector.get_total_carbon_tax_paid(0) == pytest.approx(32.5)

    def test_fuel_consumption(self, subsector):
        subsector.update_summary(0)
        assert subsector.get_fuel_consumption(0) == pytest.approx({"coal": 100.0, "gas": 50.0})

        subsector.clear_fuel_consumption(0)
        assert subsector.get_fuel_consumption(0) == {}
