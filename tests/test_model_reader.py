import pytest

import ShareCal
from ShareCal.utils import model_columns as COL

HEADER = [COL.branch, COL.technology, COL.parameter, COL.context, COL.directive]
COAL = "ShareCal.USA.electricity.coal"
GAS = "ShareCal.USA.electricity.gas"
CORN = "ShareCal.USA.grain.corn"


def write_csv(path, years, rows):
    lines = [",".join(HEADER + [str(y) for y in years])]
    for row in rows:
        lines.append(",".join(str(v) for v in row))
    path.write_text("\n".join(lines) + "\n")
    return str(path)


@pytest.fixture
def base_csv(tmp_path):
    years = [1990, 1995, 2000, 2005, 2010, 2015]
    rows = [
        [COAL, "", "Share Weight", "", "", 1, 1, 1, 1, 2, 5],
        [COAL, "", "Calibrated Output", "", "", 30, "", "", "", "", ""],
        [COAL, "", "Scale Year", "", "", 2005, "", "", "", "", ""],
        [COAL, "coal plant", "Fuel", "", "fillout", "coal", "", "", "", "", ""],
        [COAL, "coal plant", "Efficiency", "", "", 0.4, "", "", "", "", ""],
        [COAL, "coal plant", "Emissions Coefficient", "CO2", "", 25, "", "", "", "", ""],
        [GAS, "gas plant", "Fuel", "", "fillout", "gas", "", "", "", "", ""],
        [GAS, "old gas plant", "Fuel", "", "fillout", "gas", "", "", "", "", ""],
        [CORN, "corn", "Type", "", "fillout", "food production", "", "", "", "", ""],
        [CORN, "corn", "Land Type", "", "", "cropland", "", "", "", "", ""],
        [CORN, "corn", "Variable Cost", "", "", '"1,500"', "", "", "", "", ""],
    ]
    return write_csv(tmp_path / "base.csv", years, rows)


@pytest.fixture
def update_csv(tmp_path):
    rows = [
        [COAL, "coal plant", "Efficiency", "", "fillout", 0.5, ""],
        [COAL, "", "Capacity Limit", "", "", "90%", 0.8],
        [GAS, "old gas plant", "", "", "delete", "", ""],
        [GAS, "new gas plant", "Fuel", "", "nocreate", "gas", ""],
    ]
    return write_csv(tmp_path / "update.csv", [2000, 2010], rows)


@pytest.fixture
def create_model(base_csv, update_csv, modeltime, land_allocator):
    reader = ShareCal.ModelReader([base_csv, update_csv], modeltime)
    model = ShareCal.Model(modeltime, land_allocator=land_allocator)
    return reader.populate(model)


class TestModelReader:
    def test_years(self, base_csv, modeltime):
        reader = ShareCal.ModelReader(base_csv, modeltime)
        # 2015 is outside the model horizon
        assert reader.get_years() == [1990, 1995, 2000, 2005, 2010]

    def test_subsectors(self, create_model):
        model = create_model
        assert {s.name for s in model.sectors()} == {"electricity", "grain"}
        assert set(model.get_node("ShareCal.USA.electricity").subsectors) == {"coal", "gas"}

    def test_subsector_parameters(self, create_model):
        coal = create_model.get_node(COAL)
        assert list(coal.share_weights) == [1.0, 1.0, 1.0, 1.0, 2.0]
        assert coal.cal_output_value[0] == 30.0
        assert list(coal.do_calibration) == [True, False, False, False, False]
        assert coal.scale_year == 2005

    def test_fragment_updates(self, create_model):
        coal = create_model.get_node(COAL)
        assert list(coal.cap_limit) == pytest.approx([1.0, 1.0, 0.9, 1.0, 0.8])

        efficiencies = [tech.get_efficiency() for tech in coal.vintages.row("coal plant")]
        assert efficiencies == [0.4, 0.4, 0.5, 0.5, 0.5]

    def test_technology_parameters(self, create_model):
        coal = create_model.get_node(COAL)
        for period, tech in enumerate(coal.vintages.row("coal plant")):
            assert tech.get_fuel_name() == "coal"
            assert tech.get_ghg_coefficient("CO2") == 25.0
            assert tech.year == 1990 + 5 * period

    def test_directives(self, create_model):
        gas = create_model.get_node(GAS)
        assert gas.vintages.names() == ["gas plant"]

    def test_technology_type(self, create_model):
        corn = create_model.get_node(CORN).get_technology("corn", 3)
        assert isinstance(corn, ShareCal.FoodProductionTechnology)
        assert corn.land_type == "cropland"
        assert corn.variable_cost == 1500.0

    def test_populated_model_initialises(self, create_model, land_allocator):
        create_model.complete_init()
        assert create_model.status == "Initialised"
        assert ("cropland", "corn") in land_allocator.land_usage
