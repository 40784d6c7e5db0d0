import logging

import numpy as np
import pytest

from ShareCal.utils import parameters as PARAM


@pytest.fixture
def calibrated_in_base_year(make_subsector):
    def _make(scale_year=2010, base_share_weight=0.5, techs=(("coal plant", "coal"),)):
        return make_subsector(techs=techs,
                              params={PARAM.share_weight: {1990: base_share_weight, 2010: 2.0},
                                      PARAM.calibrated_output: {1990: 10.0},
                                      PARAM.scale_year: scale_year})
    return _make


class TestShareWeightInterpolation:
    def test_linear_between_calibration_and_scale_year(self, calibrated_in_base_year):
        subsector = calibrated_in_base_year()
        subsector.init_calc(0)
        subsector.init_calc(1)

        np.testing.assert_allclose(subsector.share_weights, [0.5, 0.875, 1.25, 1.625, 2.0])
        np.testing.assert_allclose(np.diff(subsector.share_weights), 0.375)

    def test_constant_when_scale_year_is_calibration_year(self, calibrated_in_base_year):
        subsector = calibrated_in_base_year(scale_year=1990)
        subsector.init_calc(0)
        subsector.init_calc(1)

        np.testing.assert_allclose(subsector.share_weights, [0.5] * 5)

    def test_scale_year_before_previous_period_turns_interpolation_off(self, make_subsector):
        subsector = make_subsector(params={PARAM.share_weight: {1995: 0.5},
                                           PARAM.calibrated_output: {1995: 10.0},
                                           PARAM.scale_year: 1990})
        for period in range(3):
            subsector.init_calc(period)

        np.testing.assert_allclose(subsector.share_weights, [1.0, 0.5, 1.0, 1.0, 1.0])

    def test_uncalibrated_previous_period(self, make_subsector):
        subsector = make_subsector(params={PARAM.share_weight: {1990: 0.5, 2010: 2.0}})
        subsector.init_calc(0)
        subsector.init_calc(1)

        np.testing.assert_allclose(subsector.share_weights, [0.5, 1.0, 1.0, 1.0, 2.0])

    def test_calibration_inactive(self, calibrated_in_base_year, config):
        config.calibration_active = False
        subsector = calibrated_in_base_year()
        subsector.init_calc(0)
        subsector.init_calc(1)

        np.testing.assert_allclose(subsector.share_weights, [0.5, 1.0, 1.0, 1.0, 2.0])

    def test_negative_share_weight_not_interpolated(self, calibrated_in_base_year):
        subsector = calibrated_in_base_year(base_share_weight=-1.0)
        subsector.init_calc(0)
        subsector.init_calc(1)

        np.testing.assert_allclose(subsector.share_weights, [-1.0, 1.0, 1.0, 1.0, 2.0])

    def test_technology_share_weights(self, calibrated_in_base_year, config):
        config.interpolate_tech_share_weights = True
        techs = (("coal plant", "coal", {PARAM.share_weight: 1.0}),
                 ("gas plant", "gas", {PARAM.share_weight: 3.0}))
        subsector = calibrated_in_base_year(techs=techs)
        subsector.init_calc(0)
        subsector.init_calc(1)

        coal = [tech.get_share_weight() for tech in subsector.vintages.row("coal plant")]
        gas = [tech.get_share_weight() for tech in subsector.vintages.row("gas plant")]
        np.testing.assert_allclose(coal, [0.5, 0.625, 0.75, 0.875, 1.0])
        np.testing.assert_allclose(gas, [1.5, 1.875, 2.25, 2.625, 3.0])

    def test_normalize_zero_technology_share_weights(self, make_subsector, caplog):
        subsector = make_subsector(techs=(("coal plant", "coal", {PARAM.share_weight: 0.0}),))
        with caplog.at_level(logging.ERROR):
            subsector.normalize_tech_share_weights(0)
        assert "sum to zero" in caplog.text
