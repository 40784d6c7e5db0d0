"""
Emissions and fuel consumption summaries of a subsector, gathered from its technologies once
they have produced for a period.
"""


def _add_to(totals: dict, values: dict):
    for key, value in values.items():
        totals[key] = totals.get(key, 0.0) + value


def emission(subsector, period: int):
    """
    Recalculate the direct emissions of every technology of `subsector` and total them by gas and
    by fuel.
    """
    subsector.emissions[period] = {}
    subsector.emissions_by_fuel[period] = {}
    for tech in subsector.get_technologies(period):
        tech.calc_emission()
        _add_to(subsector.emissions[period], tech.emissions)
        _add_to(subsector.emissions_by_fuel[period], tech.emissions_by_fuel)


def indirect_emission(subsector, period: int, indirect_coefficients: dict):
    """
    Recalculate the upstream emissions of the fuels used by `subsector` and total them by gas.

    Parameters
    ----------
    subsector : ShareCal.Subsector
    period : int
    indirect_coefficients : dict {str: dict {str: float}}
        Emissions per unit of fuel, keyed by fuel name and then by gas name.
    """
    subsector.indirect_emissions[period] = {}
    for tech in subsector.get_technologies(period):
        _add_to(subsector.indirect_emissions[period],
                tech.calc_indirect_emission(indirect_coefficients))


def get_total_carbon_tax_paid(subsector, period: int) -> float:
    return sum(tech.get_carbon_tax_paid(subsector.region_name, period)
               for tech in subsector.get_technologies(period))


def update_summary(subsector, period: int):
    """
    Total the input of every technology by the fuel of its base period vintage. Technologies
    without a fuel are left out.
    """
    subsector.fuel_consumption[period] = {}
    for row in subsector.vintages:
        fuel_name = row[0].get_fuel_name()
        if fuel_name is None:
            continue
        _add_to(subsector.fuel_consumption[period], {fuel_name: row[period].get_input()})
