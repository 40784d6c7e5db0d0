# ------------ Data Structure Constants ------------ #
root = "ShareCal"

# ------------ Subsector ------------ #
capacity_limit = "capacity limit"
share_weight = "share weight"
calibrated_output = "calibrated output"
logit_exponent = "logit exponent"
fuel_pref_elasticity = "fuel preference elasticity"
base_share_weight = "base share weight"
scale_year = "scale year"

subsector_params = [
    capacity_limit,
    share_weight,
    calibrated_output,
    logit_exponent,
    fuel_pref_elasticity,
    base_share_weight,
    scale_year,
]

# ------------ Technology ------------ #
tech_type = "type"
fuel = "fuel"
efficiency = "efficiency"
non_energy_cost = "non-energy cost"
fixed_output = "fixed output"
emissions_coefficient = "emissions coefficient"

technology_params = [
    tech_type,
    fuel,
    efficiency,
    non_energy_cost,
    share_weight,
    logit_exponent,
    fuel_pref_elasticity,
    fixed_output,
    calibrated_output,
    emissions_coefficient,
]

# ------------ Food Production Technology ------------ #
variable_cost = "variable cost"
land_type = "land type"
calibrated_land_used = "calibrated land used"
calibrated_yield = "calibrated yield"
ag_prod_change = "ag prod change"
harvested_to_cropped_ratio = "harvested to cropped ratio"
above_ground_carbon = "above ground carbon"
below_ground_carbon = "below ground carbon"

food_production_params = technology_params + [
    variable_cost,
    land_type,
    calibrated_land_used,
    calibrated_yield,
    ag_prod_change,
    harvested_to_cropped_ratio,
    above_ground_carbon,
    below_ground_carbon,
]

# ------------ Transportation Technology ------------ #
intensity = "intensity"
load_factor = "load factor"
tech_change = "technical change"
calibrated_input = "calibrated input"

transportation_params = technology_params + [
    intensity,
    load_factor,
    tech_change,
    calibrated_input,
]

# ------------ Technology Types ------------ #
standard_technology = "technology"
food_production_technology = "food production"
transportation_technology = "transportation"

# ------------ Emissions ------------ #
co2 = "CO2"

# ------------ Market Info ------------ #
cal_demand = "calDemand"
cal_price = "calPrice"
all_inputs = "allInputs"
