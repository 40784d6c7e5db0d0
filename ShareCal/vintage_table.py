"""
This module contains the table of technology vintages held by a subsector.

Every row of the table is one technology (identified by its name) and holds one vintage for each
model period. Row order is the order in which technologies were first defined and row indices are
stable, except when a row is deleted by a configuration directive. Once the subsector is initialised
the table is frozen and its structure can no longer change.
"""
import logging

logger = logging.getLogger(__name__)


class VintageTable:
    """
    Technology vintages indexed by row (technology) and period.

    Parameters
    ----------
    modeltime : ShareCal.ModelTime
        The model periods. Every row holds exactly one vintage slot per period.
    """

    def __init__(self, modeltime):
        self.modeltime = modeltime
        self.max_per = modeltime.max_per
        self._rows = []
        self._names = []
        self._name_to_index = {}
        self._frozen = False

    # ------------ Queries ------------ #
    def __len__(self):
        return len(self._rows)

    def __iter__(self):
        return iter(self._rows)

    def __contains__(self, name):
        return name in self._name_to_index

    @property
    def frozen(self):
        return self._frozen

    def names(self):
        return list(self._names)

    def row_index(self, name):
        """
        Return the row index of technology `name`, or None if there is no such row.
        """
        return self._name_to_index.get(name)

    def row(self, name):
        return self._rows[self._name_to_index[name]]

    def get(self, row_index, period):
        return self._rows[row_index][period]

    def column(self, period):
        """
        The vintages of every row for one period, in row order.
        """
        return [row[period] for row in self._rows]

    # ------------ Structural Changes ------------ #
    def _check_mutable(self):
        if self._frozen:
            raise ValueError("Technology rows can't be added, removed or replaced once the "
                             "subsector has been initialised")

    def add_row(self, name, vintages=None):
        """
        Append a new row for technology `name`.

        Parameters
        ----------
        name : str
            The technology name. Must not already have a row.
        vintages : dict {int: Technology}, optional
            Vintages to place in the new row, keyed by period.

        Returns
        -------
        int
            The index of the new row.
        """
        self._check_mutable()
        if name in self._name_to_index:
            raise ValueError(f"Technology {name} already has a row in the vintage table")

        row = [None] * self.max_per
        for period, vintage in (vintages or {}).items():
            row[period] = vintage

        self._rows.append(row)
        self._names.append(name)
        self._name_to_index[name] = len(self._rows) - 1
        return self._name_to_index[name]

    def remove_row(self, name):
        """
        Remove the row for technology `name` and rebuild the name to index map. Rows after the
        removed row move up by one.
        """
        self._check_mutable()
        index = self._name_to_index[name]
        del self._rows[index]
        del self._names[index]
        self._rebuild_index()

    def _rebuild_index(self):
        self._name_to_index = {}
        for index, name in enumerate(self._names):
            assert any(vintage is not None for vintage in self._rows[index]), \
                f"Technology {name} has no vintages"
            self._name_to_index[name] = index

    def set_vintage(self, name, period, vintage):
        self._check_mutable()
        row = self.row(name)
        if row[period] is not None:
            logger.debug(f"Technology {name} is already defined for period {period}. "
                         f"Replacing it.")
        row[period] = vintage

    def fillout(self, name, period):
        """
        Copy the vintage in `period` into every later period, replacing any vintages already there.
        """
        self._check_mutable()
        row = self.row(name)
        source = row[period]
        for later in range(period + 1, self.max_per):
            if row[later] is not None:
                logger.debug(f"Technology {name} is already defined for period {later}. "
                             f"Replacing it with the vintage filled out from period {period}.")
            vintage = source.clone()
            vintage.set_year(self.modeltime.per_to_yr(later))
            row[later] = vintage

    def merge_fragment(self, name, period_params, factory, fillout=False, delete=False,
                       nocreate=False):
        """
        Apply one configuration fragment for technology `name`.

        Parameters
        ----------
        name : str
            The technology name.
        period_params : dict {int: dict}
            Parameters for each configured period, in the order they should be applied.
        factory : function (str, int) -> Technology
            Creates an empty vintage of the right type for a (name, period).
        fillout : bool, optional
            Copy each configured vintage into every later period.
        delete : bool, optional
            Remove the technology's row entirely.
        nocreate : bool, optional
            Only modify an existing row; a fragment for an unknown technology is skipped.

        Returns
        -------
        bool
            True if the table changed.
        """
        self._check_mutable()

        if name in self._name_to_index:
            if delete:
                self.remove_row(name)
                return True

            row = self.row(name)
            for period, params in period_params.items():
                if row[period] is None:
                    row[period] = factory(name, period)
                row[period].parse(params)
                if fillout:
                    self.fillout(name, period)
            return True

        if delete:
            logger.warning(f"Can't delete technology {name}, it has not been defined.")
            return False

        if nocreate:
            logger.warning(f"Technology {name} has not been defined and is marked as nocreate. "
                           f"Skipping.")
            return False

        if len(period_params) == 0:
            logger.warning(f"Technology {name} has no configured periods. Skipping.")
            return False

        self.add_row(name)
        for period, params in period_params.items():
            self.set_vintage(name, period, factory(name, period).parse(params))
            if fillout:
                self.fillout(name, period)
        return True

    def freeze(self):
        """
        Check that every row holds a vintage in every period and prevent further structural
        changes.
        """
        for name, row in zip(self._names, self._rows):
            for period, vintage in enumerate(row):
                assert vintage is not None, \
                    f"Technology {name} has no vintage for period {period}"
        self._frozen = True
