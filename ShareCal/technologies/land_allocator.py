"""
The interface a land allocator must provide to profit-based food production technologies.

Land allocation itself (how land is split between uses given their profit rates) lives outside this
package. Food production technologies only publish profit rates and calibration values to the
allocator, and read back yields and allocated land.
"""
from abc import ABC, abstractmethod


class LandAllocator(ABC):

    # Land usage types
    CROP = "crop"

    @abstractmethod
    def add_land_usage(self, land_type, product_name, land_usage_type, period):
        """Register `product_name` as a user of `land_type` from `period` on."""

    @abstractmethod
    def apply_ag_prod_change(self, land_type, product_name, ag_prod_change, period, harvest_period):
        """Apply agricultural productivity change to the yield of `product_name`."""

    @abstractmethod
    def set_cal_land_allocation(self, land_type, product_name, cal_land_used, period,
                                harvest_period):
        pass

    @abstractmethod
    def set_cal_observed_yield(self, land_type, product_name, cal_observed_yield, period):
        pass

    @abstractmethod
    def get_unmanaged_cal_ave_observed_rate(self, period, land_type):
        """Average observed rate of return of the unmanaged land competing with `land_type`."""

    @abstractmethod
    def set_intrinsic_rate(self, region_name, land_type, product_name, profit_rate, period):
        pass

    @abstractmethod
    def calc_yield(self, land_type, product_name, region_name, profit_rate, period,
                   harvest_period):
        pass

    @abstractmethod
    def get_yield(self, land_type, product_name, period):
        pass

    @abstractmethod
    def get_land_allocation(self, land_type, product_name, period):
        pass

    @abstractmethod
    def set_carbon_content(self, land_type, product_name, above_ground_carbon,
                           below_ground_carbon, period):
        pass
