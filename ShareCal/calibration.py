"""
This module contains the functions for calibrating subsector shares to historical outputs.

Calibration scales share-weights so that the outputs computed from the logit shares reproduce the
calibrated outputs read in for historical periods. Output which is fixed exogenously takes
precedence over calibration and is never rescaled here.
"""
import warnings

from .utils import parameters as PARAM
from .utils.general_utils import LARGE_SHARE_WEIGHT


def set_calibration_status(subsector, period: int):
    """
    Flag `subsector` as calibrated in `period` if either its own output or the output of any of its
    technologies is calibrated.
    """
    if subsector.do_calibration[period]:
        subsector.calibration_status[period] = True
        return

    for tech in subsector.get_technologies(period):
        if tech.get_calibration_status():
            subsector.calibration_status[period] = True
            return


def get_total_cal_outputs(subsector, period: int) -> float:
    """
    The calibrated output of `subsector`. This is the subsector-level calibrated output when one is
    set, otherwise the sum of the technologies' calibrated outputs. Fixed outputs are not included.
    """
    if subsector.do_calibration[period]:
        return subsector.cal_output_value[period]

    total = 0
    for tech in subsector.get_technologies(period):
        if tech.get_calibration_status():
            if subsector.debug_checking and tech.get_calibration_output() < 0:
                warnings.warn(f"Calibration < 0 for technology {tech.name} in subsector "
                              f"{subsector.name}")
            total += tech.get_calibration_output()
    return total


def get_number_avail_techs(subsector, period: int) -> int:
    return sum(1 for tech in subsector.get_technologies(period) if tech.is_tech_available())


def adjust_for_calibration(subsector, sector_demand: float, total_fixed_output: float,
                           total_cal_outputs: float, all_fixed_output: bool, period: int):
    """
    Scale the share-weight of `subsector` so that its share of `sector_demand` reproduces its
    calibrated output.

    Parameters
    ----------
    subsector : ShareCal.Subsector
        The subsector to calibrate. Its share for `period` must already be calculated.
    sector_demand : float
        Total demand for the sector's output.
    total_fixed_output : float
        Output of the sector which is fixed exogenously.
    total_cal_outputs : float
        Sum of the calibrated outputs of every subsector in the sector.
    all_fixed_output : bool
        True if every subsector's output is calibrated or fixed.
    period : int
        The model period.

    Notes
    -----
    - Calibrated outputs are scaled to the demand which isn't covered by fixed output, unless the
      calibrated total already falls short of it and some output is neither fixed nor calibrated.
      In that case the remaining demand is left to the uncalibrated subsectors.
    - A share-weight of 0 can't be scaled, so it is reset to 1 when a calibrated output exists.
    - A share-weight driven below 0 is reported and reset to 1.
    - Technology share-weights are calibrated only when more than one technology is available.
    """
    cal_output = get_total_cal_outputs(subsector, period)

    if subsector.share_weights[period] == 0 and cal_output > 0:
        subsector.share_weights[period] = 1.0

    available_demand = max(sector_demand - total_fixed_output, 0)

    if not (total_cal_outputs < available_demand and not all_fixed_output):
        if total_cal_outputs > 0:
            cal_output *= available_demand / total_cal_outputs

    subsector_demand = subsector.share[period] * sector_demand
    if subsector_demand > 0:
        subsector.share_weights[period] *= cal_output / subsector_demand

    if subsector.share_weights[period] < 0:
        warnings.warn(f"Share-weight is < 0 in subsector {subsector.name} of "
                      f"{subsector.sector_name} ({subsector.region_name}). Reset to 1.")
        subsector.share_weights[period] = 1.0

    if get_number_avail_techs(subsector, period) > 1:
        for tech in subsector.get_technologies(period):
            if tech.is_tech_available():
                tech.adjust_for_calibration(cal_output)

    if subsector.debug_checking and subsector.share_weights[period] > LARGE_SHARE_WEIGHT:
        warnings.warn(f"Huge share-weight after calibration for subsector {subsector.name} in "
                      f"{subsector.sector_name} ({subsector.region_name}): "
                      f"{subsector.share_weights[period]}")


def tech_has_input(tech, good_name: str) -> bool:
    return tech.get_fuel_name() == good_name


def _matches(tech, good_name):
    return good_name == PARAM.all_inputs or tech_has_input(tech, good_name)


def get_cal_and_fixed_inputs(subsector, period: int, good_name: str, both_vals=True) -> float:
    """
    Total calibrated input of `good_name` (or of every good when `good_name` is "allInputs"). Fixed
    inputs are included as well when `both_vals` is True.
    """
    total = 0
    for tech in subsector.get_technologies(period):
        if not _matches(tech, good_name):
            continue
        if tech.get_calibration_status():
            total += tech.get_calibration_input()
        elif both_vals and tech.output_is_fixed():
            total += tech.get_fixed_input()
    return total


def get_cal_and_fixed_outputs(subsector, period: int, good_name: str, both_vals=True) -> float:
    """
    Total calibrated output of technologies consuming `good_name` (or of every technology when
    `good_name` is "allInputs"). Fixed outputs are included as well when `both_vals` is True.
    """
    total = 0
    for tech in subsector.get_technologies(period):
        if not _matches(tech, good_name):
            continue
        if tech.get_calibration_status():
            total += tech.get_calibration_output()
        elif both_vals and tech.output_is_fixed():
            total += tech.get_fixed_output()
    return total


def set_implied_fixed_input(subsector, period: int, good_name: str,
                            required_output: float) -> bool:
    """
    Add the input of `good_name` needed to produce `required_output` to the calibrated demand of
    that good's market. Only the first technology consuming the good is used.

    Returns
    -------
    bool
        True if a technology consuming `good_name` was found.
    """
    input_was_changed = False
    for tech in subsector.get_technologies(period):
        if not tech_has_input(tech, good_name):
            continue
        if not input_was_changed:
            input_was_changed = True
            input_value = required_output / tech.get_efficiency()
            existing = max(subsector.marketplace.get_market_info_value(
                good_name, subsector.region_name, period, PARAM.cal_demand), 0.0)
            subsector.marketplace.set_market_info_value(good_name, subsector.region_name, period,
                                                        PARAM.cal_demand, existing + input_value)
        else:
            warnings.warn(f"More than one technology input would have been changed in subsector "
                          f"{subsector.name} in sector {subsector.sector_name} in region "
                          f"{subsector.region_name}")
    return input_was_changed


def inputs_all_fixed(subsector, period: int, good_name: str) -> bool:
    """
    True if every technology consuming `good_name` has a calibrated or fixed output, or belongs to a
    subsector with a share-weight of 0.
    """
    for tech in subsector.get_technologies(period):
        if not _matches(tech, good_name):
            continue
        if tech.get_calibration_status() or tech.output_is_fixed():
            continue
        if subsector.share_weights[period] == 0:
            continue
        return False
    return True


def scale_calibrated_values(subsector, period: int, good_name: str, scale: float):
    for tech in subsector.get_technologies(period):
        if tech_has_input(tech, good_name) and tech.get_calibration_status():
            tech.scale_calibration_input(scale)


def scale_calibration_input(subsector, period: int, scale_factor: float):
    for tech in subsector.get_technologies(period):
        tech.scale_calibration_input(scale_factor)


def all_output_fixed(subsector, period: int) -> bool:
    """
    True if the output of `subsector` is calibrated, is 0 because of a share-weight of 0, or comes
    entirely from fixed technologies.
    """
    if subsector.do_calibration[period] or subsector.share_weights[period] == 0:
        return True
    return all(tech.output_is_fixed() for tech in subsector.get_technologies(period))
