"""
Run configuration shared by the subsectors and sectors of a model.

A `Configuration` is built once and handed to every object that needs it. Nothing reads
configuration from module-level state, so two models with different settings can live in the
same process.
"""


class Configuration:
    """
    Boolean flags and tunable defaults consumed while initialising and running a model.

    Parameters
    ----------
    calibration_active : bool, optional
        Whether calibration targets are honoured. When False, `adjust_for_calibration` is never
        called by the sector and share-weights are not interpolated after calibration periods.
    debug_checking : bool, optional
        Enables additional diagnostics (e.g. reporting runaway share-weights after calibration).
    calibration_start_year : int, optional
        Share-weight interpolation only happens for periods strictly after the period containing
        this year.
    fixed_share_floor : float, optional
        Fixed share assigned during period initialisation to a subsector which has fixed output
        but whose fixed share has not been computed yet. This is a workaround for the order in
        which fixed shares are initialised and may be tuned.
    cap_limit_passes : int, optional
        Maximum number of capacity-limit passes a sector runs while re-normalising shares.
    interpolate_tech_share_weights : bool, optional
        Also normalize and interpolate technology share-weights after a calibrated period.
    """
    _legacy_names = {
        'CalibrationActive': 'calibration_active',
        'debugChecking': 'debug_checking',
    }

    def __init__(self, calibration_active=True, debug_checking=False,
                 calibration_start_year=1990, fixed_share_floor=0.1, cap_limit_passes=10,
                 interpolate_tech_share_weights=False):
        self.calibration_active = bool(calibration_active)
        self.debug_checking = bool(debug_checking)
        self.calibration_start_year = int(calibration_start_year)
        self.fixed_share_floor = float(fixed_share_floor)
        self.cap_limit_passes = int(cap_limit_passes)
        self.interpolate_tech_share_weights = bool(interpolate_tech_share_weights)

    def get_bool(self, name, default=False):
        """
        Look up a boolean flag by attribute name or by its legacy camelCase name
        (e.g. "CalibrationActive").
        """
        attr = self._legacy_names.get(name, name)
        return bool(getattr(self, attr, default))

    def __repr__(self):
        return (f"Configuration(calibration_active={self.calibration_active}, "
                f"debug_checking={self.debug_checking}, "
                f"calibration_start_year={self.calibration_start_year}, "
                f"fixed_share_floor={self.fixed_share_floor}, "
                f"cap_limit_passes={self.cap_limit_passes}, "
                f"interpolate_tech_share_weights={self.interpolate_tech_share_weights})")
