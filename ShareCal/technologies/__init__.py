from .technology import Technology
from .food_production import FoodProductionTechnology
from .land_allocator import LandAllocator
from .tran_technology import TranTechnology

TECHNOLOGY_TYPES = {
    Technology.tech_type: Technology,
    FoodProductionTechnology.tech_type: FoodProductionTechnology,
    TranTechnology.tech_type: TranTechnology,
}


def create_technology(tech_type, name, year=None):
    """
    Create a technology vintage of the named type (see `ShareCal.utils.parameters` for the type
    names).
    """
    tech_type = (tech_type or Technology.tech_type).lower()
    if tech_type not in TECHNOLOGY_TYPES:
        raise ValueError(f"Unknown technology type '{tech_type}' for technology {name}. "
                         f"Valid types are {list(TECHNOLOGY_TYPES)}")
    return TECHNOLOGY_TYPES[tech_type](name, year)
