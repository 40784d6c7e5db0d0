from .model import Model
from .model_time import ModelTime
from .config import Configuration
from .gdp import GDP
from .world import World
from .marketplace import Marketplace, MarketInfo
from .sector import Sector
from .subsector import Subsector
from .vintage_table import VintageTable
from .technologies import (Technology, FoodProductionTechnology, TranTechnology, LandAllocator,
                           create_technology)
from .readers import ModelReader
from .model_validation.ModelValidator import ModelValidator

from .about import __version__
