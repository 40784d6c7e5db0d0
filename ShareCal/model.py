import warnings

import networkx as nx

from . import graph_utils
from .config import Configuration
from .gdp import GDP
from .marketplace import Marketplace
from .world import World
from .sector import Sector
from .subsector import Subsector
from .utils import parameters as PARAM

REGION = "region"
SECTOR = "sector"
SUBSECTOR = "subsector"


class Model:
    """
    Regions, sectors, and subsectors arranged in a graph, along with the collaborators they share.
    Also includes the methods needed to initialise the model and run the share and calibration
    calculations for each period.

    Parameters
    ----------
    modeltime : ShareCal.ModelTime
        The model periods.
    config : ShareCal.Configuration, optional
        Run configuration shared by every sector and subsector.
    gdp : ShareCal.GDP, optional
        Scaled GDP per capita by period.
    marketplace : ShareCal.Marketplace, optional
        Market prices and market info.
    world : ShareCal.World, optional
        Emissions coefficients of primary fuels.
    land_allocator : ShareCal.LandAllocator, optional
        Required when the model holds food production technologies.
    indirect_coefficients : dict {str: dict {str: float}}, optional
        Upstream emissions per unit of fuel, keyed by fuel name and then by gas name. Indirect
        emissions are only calculated when these are given.

    Attributes
    ----------
    graph : networkx.DiGraph
        Model nodes in branch notation (``ShareCal.<region>.<sector>.<subsector>``). Each node's
        data holds its `kind` ("region", "sector" or "subsector") and its `object` (the `Sector` or
        `Subsector`; None for regions).
    status : str
        Where the model is in its lifecycle.
    """

    def __init__(self, modeltime, config=None, gdp=None, marketplace=None, world=None,
                 land_allocator=None, indirect_coefficients=None):
        self.modeltime = modeltime
        self.config = config or Configuration()
        self.gdp = gdp or GDP()
        self.marketplace = marketplace or Marketplace()
        self.world = world or World()
        self.land_allocator = land_allocator
        self.indirect_coefficients = indirect_coefficients

        self.root = PARAM.root
        self.graph = nx.DiGraph()
        graph_utils.add_node(self.graph, self.root, "root")

        self.status = "Built"

    # ------------ Building ------------ #
    def _check_not_initialised(self):
        if self.status != "Built":
            raise ValueError("Model structure can't be changed after complete_init() has been "
                             "called")

    def add_region(self, region):
        self._check_not_initialised()
        node = graph_utils.branch_name(self.root, region)
        if node not in self.graph:
            graph_utils.add_node(self.graph, node, REGION)
        return node

    def add_sector(self, region, sector):
        """
        Add a sector (and its region, if needed) to the model.

        Returns
        -------
        ShareCal.Sector
        """
        self._check_not_initialised()
        region_node = self.add_region(region)
        node = graph_utils.branch_name(region_node, sector)
        if node in self.graph:
            raise ValueError(f"Sector {node} already exists")

        sector_obj = Sector(region, sector, self.modeltime, self.config)
        graph_utils.add_node(self.graph, node, SECTOR, sector_obj)
        return sector_obj

    def add_subsector(self, region, sector, name):
        """
        Add a subsector (and its sector and region, if needed) to the model.

        Returns
        -------
        ShareCal.Subsector
        """
        self._check_not_initialised()
        sector_node = graph_utils.branch_name(self.root, region, sector)
        if sector_node not in self.graph:
            self.add_sector(region, sector)
        node = graph_utils.branch_name(sector_node, name)
        if node in self.graph:
            raise ValueError(f"Subsector {node} already exists")

        subsector = Subsector(region, sector, name, self.modeltime, self.config)
        self.graph.nodes[sector_node]["object"].add_subsector(subsector)
        graph_utils.add_node(self.graph, node, SUBSECTOR, subsector)
        return subsector

    def get_node(self, branch):
        """
        Return the `Sector` or `Subsector` at `branch`.
        """
        if branch not in self.graph:
            raise ValueError(f"{branch} is not a node in the model")
        return self.graph.nodes[branch]["object"]

    def get_or_add_subsector(self, branch):
        """
        Return the subsector at `branch` (``ShareCal.<region>.<sector>.<subsector>``), adding it
        to the model if needed.
        """
        parts = branch.split('.')
        if len(parts) != 4 or parts[0] != self.root:
            raise ValueError(f"{branch} is not a subsector branch "
                             f"({self.root}.<region>.<sector>.<subsector>)")
        if branch in self.graph:
            return self.get_node(branch)
        return self.add_subsector(*parts[1:])

    def sectors(self):
        """
        The model's sectors, in the order a top-down traversal visits them.
        """
        found = []

        def collect(graph, node):
            if graph.nodes[node]["kind"] == SECTOR:
                found.append(graph.nodes[node]["object"])

        graph_utils.top_down_traversal(self.graph, collect, root=self.root)
        return found

    # ------------ Running ------------ #
    def complete_init(self):
        for sector in self.sectors():
            sector.complete_init(self.marketplace, self.world, self.land_allocator)
        self.status = "Initialised"

    def _sector_demand(self, demands, sector, period):
        node = graph_utils.branch_name(self.root, sector.region_name, sector.name)
        if node not in demands:
            warnings.warn(f"No demand given for sector {node}. Using 0.")
            return 0.0
        return float(demands[node][period])

    def run_period(self, period, demands, calibration_passes=1):
        """
        Run the share, calibration, output and emissions calculations of every sector for one
        period. Calibrated demands recorded in the marketplace for the period are reset first, so
        a period can be run again.

        Parameters
        ----------
        period : int
            The model period.
        demands : dict {str: sequence of float}
            Demand by period for each sector, keyed by the sector's branch
            (``ShareCal.<region>.<sector>``).
        calibration_passes : int, optional
            Number of share calculation and calibration rounds to run before the final share
            calculation.
        """
        if self.status == "Built":
            raise ValueError("complete_init() must be called before running the model")

        sectors = self.sectors()
        for sector in sectors:
            sector.clear_fixed_demands(period)

        for sector in sectors:
            demand = self._sector_demand(demands, sector, period)
            sector.init_calc(period)

            if sector.get_calibration_status(period):
                for _ in range(calibration_passes):
                    sector.calc_share(period, self.gdp, demand)
                    sector.adjust_for_calibration(demand, period)

            sector.calc_share(period, self.gdp, demand)
            sector.calc_price(period)
            sector.set_output(demand, period, self.gdp)
            sector.emission(period, self.indirect_coefficients)
            sector.update_summary(period)

        self.status = f"Period {period} calculated"

    def run(self, demands, calibration_passes=1):
        """
        Run every model period in order.
        """
        for period in range(self.modeltime.max_per):
            print(f"***** ***** year: {self.modeltime.per_to_yr(period)} ***** *****")
            self.run_period(period, demands, calibration_passes)
        self.status = "Run completed"
