import pytest

import ShareCal
from ShareCal.utils import parameters as PARAM

ELECTRICITY = "ShareCal.USA.electricity"


@pytest.fixture
def create_model(modeltime, config, marketplace):
    model = ShareCal.Model(modeltime, config, marketplace=marketplace)

    coal = model.add_subsector("USA", "electricity", "coal")
    coal.parse_technology("coal plant", {1990: {PARAM.fuel: "coal"}}, fillout=True)

    gas = model.add_subsector("USA", "electricity", "gas")
    gas.parse({PARAM.logit_exponent: -1.0})
    gas.parse_technology("gas plant", {1990: {PARAM.fuel: "gas"}}, fillout=True)

    return model


@pytest.fixture
def demands():
    return {ELECTRICITY: [100.0, 110.0, 120.0, 130.0, 140.0]}


class TestModelStructure:
    def test_graph(self, create_model):
        model = create_model
        assert set(model.graph.nodes) == {"ShareCal", "ShareCal.USA", ELECTRICITY,
                                          ELECTRICITY + ".coal", ELECTRICITY + ".gas"}
        assert model.graph.nodes[ELECTRICITY]["kind"] == "sector"
        assert list(model.graph.successors("ShareCal.USA")) == [ELECTRICITY]

    def test_get_node(self, create_model):
        subsector = create_model.get_node(ELECTRICITY + ".coal")
        assert isinstance(subsector, ShareCal.Subsector)
        with pytest.raises(ValueError):
            create_model.get_node(ELECTRICITY + ".nuclear")

    def test_get_or_add_subsector(self, create_model):
        model = create_model
        assert model.get_or_add_subsector(ELECTRICITY + ".coal") is model.get_node(
            ELECTRICITY + ".coal")

        nuclear = model.get_or_add_subsector("ShareCal.CAN.electricity.nuclear")
        assert nuclear.region_name == "CAN"
        assert len(model.sectors()) == 2

    @pytest.mark.parametrize("branch", [
        "ShareCal.USA.electricity",
        "World.USA.electricity.coal",
        "ShareCal.USA.electricity.coal.old",
    ])
    def test_invalid_subsector_branch(self, create_model, branch):
        with pytest.raises(ValueError):
            create_model.get_or_add_subsector(branch)

    def test_duplicates(self, create_model):
        with pytest.raises(ValueError):
            create_model.add_sector("USA", "electricity")
        with pytest.raises(ValueError):
            create_model.add_subsector("USA", "electricity", "coal")

    def test_structure_fixed_after_init(self, create_model):
        create_model.complete_init()
        with pytest.raises(ValueError):
            create_model.add_subsector("USA", "electricity", "wind")


class TestModelRun:
    def test_run_requires_init(self, create_model, demands):
        with pytest.raises(ValueError):
            create_model.run_period(0, demands)

    def test_run(self, create_model, demands, capsys):
        model = create_model
        model.complete_init()
        model.run(demands)

        assert "***** ***** year: 2010 ***** *****" in capsys.readouterr().out
        assert model.status == "Run completed"

        sector = model.get_node(ELECTRICITY)
        coal = model.get_node(ELECTRICITY + ".coal")
        for period, demand in enumerate(demands[ELECTRICITY]):
            assert sector.get_output(period) == pytest.approx(demand)
            # Unnormalized shares of 1 (coal) and 1/2 (gas)
            assert coal.get_output(period) == pytest.approx(demand * 2 / 3)

    def test_calibrated_run(self, create_model, demands):
        model = create_model
        model.get_node(ELECTRICITY + ".coal").parse({PARAM.calibrated_output: {1990: 30.0}})
        model.get_node(ELECTRICITY + ".gas").parse({PARAM.calibrated_output: {1990: 70.0}})
        model.complete_init()

        model.run_period(0, demands)

        assert model.get_node(ELECTRICITY + ".coal").get_output(0) == pytest.approx(30.0)
        assert model.get_node(ELECTRICITY + ".gas").get_output(0) == pytest.approx(70.0)

    def test_missing_demand_warns(self, create_model):
        create_model.complete_init()
        with pytest.warns(UserWarning, match="No demand"):
            create_model.run_period(0, {})
        assert create_model.get_node(ELECTRICITY).get_output(0) == 0

    def test_rerun_period_keeps_fixed_demands(self, create_model, demands, marketplace):
        model = create_model
        nuclear = model.add_subsector("USA", "electricity", "nuclear")
        nuclear.parse_technology("reactor", {1990: {PARAM.fuel: "uranium",
                                                    PARAM.fixed_output: 30.0}}, fillout=True)
        model.complete_init()

        model.run_period(0, demands)
        model.run_period(0, demands)

        assert marketplace.get_market_info_value("uranium", "USA", 0, PARAM.cal_demand) == 30.0
        assert model.get_node(ELECTRICITY + ".nuclear").get_output(0) == pytest.approx(30.0)

    def test_run_calculates_emissions(self, create_model, demands):
        model = create_model
        model.indirect_coefficients = {"coal": {"CO2": 1.0}}
        model.complete_init()
        coal = model.get_node(ELECTRICITY + ".coal")
        coal.get_technology("coal plant", 0).parse({PARAM.emissions_coefficient: {"CO2": 10.0}})

        model.run_period(0, demands)

        coal_input = demands[ELECTRICITY][0] * 2 / 3
        assert coal.get_emissions(0) == pytest.approx({"CO2": 10.0 * coal_input})
        assert coal.get_indirect_emissions(0) == pytest.approx({"CO2": coal_input})
        assert coal.get_fuel_consumption(0) == pytest.approx({"coal": coal_input})
        assert model.get_node(ELECTRICITY + ".gas").get_emissions(0) == {}
