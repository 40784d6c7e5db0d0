"""
The marketplace holds market prices and "market info" values for every (good, region, period).

Market info is a side-channel used by technologies and subsectors to publish values that other
objects read later in the same period or in a later period (e.g. implied calibration demand or a
calibrated variable cost carried forward to the next period). Each writer owns the names it writes;
readers of a name that was never written receive the supplied default.
"""


class MarketInfo:
    """
    A keyed store of named floating point values belonging to one (good, region, period).
    """

    def __init__(self):
        self._values = {}

    def get_double(self, name, default=0.0):
        return self._values.get(name, default)

    def set_double(self, name, value):
        self._values[name] = float(value)

    def add_double(self, name, value):
        self._values[name] = self._values.get(name, 0.0) + float(value)

    def names(self):
        return list(self._values)

    def __repr__(self):
        return f"MarketInfo({self._values})"


class Marketplace:
    """
    Prices and market info keyed by ``(good, region, period)``.
    """

    def __init__(self):
        self.prices = {}
        self.market_info = {}

    @staticmethod
    def _key(good, region, period):
        return good, region, int(period)

    def set_price(self, good, region, period, price):
        self.prices[self._key(good, region, period)] = float(price)

    def get_price(self, good, region, period):
        return self.prices.get(self._key(good, region, period), 0.0)

    def get_market_info(self, good, region, period, create=False):
        """
        Return the MarketInfo for a (good, region, period). When none exists a new one is created
        if `create` is True, otherwise None is returned.
        """
        key = self._key(good, region, period)
        if key not in self.market_info:
            if not create:
                return None
            self.market_info[key] = MarketInfo()
        return self.market_info[key]

    def get_market_info_value(self, good, region, period, name, default=0.0):
        info = self.get_market_info(good, region, period)
        if info is None:
            return default
        return info.get_double(name, default)

    def set_market_info_value(self, good, region, period, name, value):
        self.get_market_info(good, region, period, create=True).set_double(name, value)

    def add_to_market_info_value(self, good, region, period, name, value):
        self.get_market_info(good, region, period, create=True).add_double(name, value)
