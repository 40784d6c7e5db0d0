"""
This module contains the functions for smoothing share-weights across periods after calibration.

Calibration can move a share-weight a long way in a single period. Without smoothing, every later
(uncalibrated) period would inherit that jump. After a calibrated period, share-weights are instead
interpolated linearly from the calibrated value towards the value configured for the subsector's
scale year.
"""
import logging

import numpy as np
from scipy.interpolate import interp1d

logger = logging.getLogger(__name__)


def _linear_trajectory(begin_period, end_period, begin_value, end_value, max_per):
    """
    Values for the periods after `begin_period` along a straight line from `begin_value` to
    `end_value`. When the two periods are the same the value is held constant until the last model
    period.

    Returns
    -------
    periods : numpy.ndarray
        The periods to overwrite.
    values : numpy.ndarray
        The new values for `periods`.
    """
    if end_period > begin_period:
        periods = np.arange(begin_period + 1, end_period)
        line = interp1d([begin_period, end_period], [begin_value, end_value])
        return periods, line(periods)

    periods = np.arange(begin_period + 1, max_per)
    return periods, np.full(len(periods), begin_value, dtype=float)


def share_weight_linear_interp(subsector, begin_period: int, end_period: int):
    """
    Linearly interpolate the share-weights of `subsector` between `begin_period` and `end_period`.
    An `end_period` equal to `begin_period` holds the share-weight constant through the last model
    period.
    """
    periods, values = _linear_trajectory(begin_period, end_period,
                                         subsector.share_weights[begin_period],
                                         subsector.share_weights[end_period],
                                         subsector.modeltime.max_per)
    subsector.share_weights[periods] = values

    logger.debug(f"Share-weights interpolated for subsector {subsector.name} in sector "
                 f"{subsector.sector_name} in region {subsector.region_name}")


def tech_share_weight_linear_interp(subsector, begin_period: int, end_period: int):
    """
    Linearly interpolate the share-weights of every technology of `subsector` between
    `begin_period` and `end_period`. Technologies whose share-weight is 0 in `begin_period` were not
    calibrated and are left alone.
    """
    for row in subsector.vintages:
        begin_value = row[begin_period].get_share_weight()
        if begin_value <= 0:
            continue

        periods, values = _linear_trajectory(begin_period, end_period, begin_value,
                                             row[end_period].get_share_weight(),
                                             subsector.modeltime.max_per)
        for period, value in zip(periods, values):
            row[period].set_share_weight(value)

        logger.debug(f"Share-weights interpolated for technologies in subsector "
                     f"{subsector.name} in sector {subsector.sector_name} in region "
                     f"{subsector.region_name}")


def normalize_tech_share_weights(subsector, period: int):
    """
    Scale the technology share-weights of `subsector` so that they sum to the number of technologies
    with a non-zero share-weight. A share-weight above 1 then means the technology is favoured.
    """
    technologies = subsector.get_technologies(period)
    share_weight_total = sum(tech.get_share_weight() for tech in technologies)
    number_nonzero = sum(1 for tech in technologies if tech.get_share_weight() > 0)

    if share_weight_total == 0:
        logger.error(f"Technology share-weights sum to zero in subsector {subsector.name}")
        return

    for tech in technologies:
        tech.scale_share_weight(number_nonzero / share_weight_total)

    logger.debug(f"Share-weights normalized for technologies in subsector {subsector.name} in "
                 f"sector {subsector.sector_name} in region {subsector.region_name}")


def interpolate_share_weights(subsector, period: int):
    """
    Smooth the share-weights of `subsector` following a calibrated period.

    Parameters
    ----------
    subsector : ShareCal.Subsector
        The subsector whose share-weights are smoothed.
    period : int
        The period being initialised. Share-weights are interpolated from `period - 1`.

    Notes
    -----
    - Nothing happens unless calibration is active, `period - 1` was calibrated, and `period` comes
      after the calibration start year.
    - The interpolation ends at the period of the subsector's scale year. A scale year in
      `period - 1` holds the calibrated share-weight constant to the end of the model. A scale year
      before `period - 1` turns interpolation off. A scale year before the start of the model is
      treated as period 0.
    - A negative share-weight in `period - 1` is never interpolated.
    """
    modeltime = subsector.modeltime
    config = subsector.config

    if period <= modeltime.yr_to_per(config.calibration_start_year):
        return
    if not subsector.calibration_status[period - 1]:
        return
    if not config.get_bool("CalibrationActive"):
        return

    end_period = 0
    if subsector.scale_year >= modeltime.start_year:
        end_period = modeltime.yr_to_per(subsector.scale_year)

    if end_period >= period - 1 and subsector.share_weights[period - 1] >= 0:
        share_weight_linear_interp(subsector, period - 1, end_period)

    if config.interpolate_tech_share_weights and len(subsector.vintages) > 1:
        normalize_tech_share_weights(subsector, period - 1)
        tech_share_weight_linear_interp(subsector, period - 1, modeltime.max_per - 1)
