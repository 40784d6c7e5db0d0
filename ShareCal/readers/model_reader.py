import logging
import os

import pandas as pd

from .reader_utils import read_csv, clean_model_df, first_value
from ..utils import model_columns as COL
from ..utils import parameters as PARAM
from ..utils.general_utils import infer_type, is_year

logger = logging.getLogger(__name__)

# Subsector parameters holding a single value rather than one value per year
SCALAR_SUBSECTOR_PARAMS = [PARAM.base_share_weight, PARAM.scale_year]


def _has_value(value):
    return value is not None and not pd.isna(value)


class ModelReader:
    """
    Reads one or more CSV model descriptions and issues the setter calls that build a model from
    them.

    Each file is a configuration fragment. Files are applied in the order given, so a later file
    can update, extend, or delete what an earlier file defined.

    Parameters
    ----------
    csv_file_paths : str or list of str
        Model description CSV files.
    modeltime : ShareCal.ModelTime
        The model periods. Year columns which aren't model years are ignored.
    root_node : str, optional
        The first part of every branch.
    """
    def __init__(self, csv_file_paths, modeltime, root_node=PARAM.root):
        if isinstance(csv_file_paths, (str, os.PathLike)):
            csv_file_paths = [csv_file_paths]

        self.csv_files = list(csv_file_paths)
        self.modeltime = modeltime
        self.year_list = [str(y) for y in modeltime.years]
        self.root = root_node

        self.model_dfs = self._get_model_dfs()

    def _get_model_dfs(self):
        model_dfs = []
        for csv_file in self.csv_files:
            sheet_df = read_csv(csv_file)
            if sheet_df is None:
                continue
            sheet_df.index += 2  # Match CSV line numbers (+1: 0 vs 1 origin, +1: column headers)
            model_dfs.append((csv_file, clean_model_df(sheet_df, self.year_list)))
        return model_dfs

    def get_years(self):
        years = set()
        for _, mdf in self.model_dfs:
            years.update(int(c) for c in mdf.columns if is_year(c))
        return sorted(years)

    def populate(self, model):
        """
        Add the subsectors and technologies described by the CSV files to `model`.

        Parameters
        ----------
        model : ShareCal.Model
            A model which hasn't been initialised yet.

        Returns
        -------
        ShareCal.Model
            The populated model.
        """
        for csv_file, mdf in self.model_dfs:
            year_cols = [c for c in mdf.columns if is_year(c)]
            for branch, branch_df in mdf.groupby(by=COL.branch, sort=False):
                subsector = model.get_or_add_subsector(branch)

                node_df = branch_df[branch_df[COL.technology].isnull()]
                if len(node_df) > 0:
                    subsector.parse(self._subsector_parameters(node_df, year_cols))

                tech_df = branch_df[branch_df[COL.technology].notnull()]
                for tech_name, t_df in tech_df.groupby(by=COL.technology, sort=False):
                    self._parse_technology(subsector, tech_name, t_df, year_cols)

        return model

    @staticmethod
    def _subsector_parameters(node_df, year_cols):
        params = {}
        for _, row in node_df.iterrows():
            param = row[COL.parameter]
            if not _has_value(param):
                continue

            if param in SCALAR_SUBSECTOR_PARAMS:
                value = first_value(row[year_cols])
                if value is not None:
                    params[param] = infer_type(value)
            else:
                by_year = {int(y): infer_type(row[y]) for y in year_cols if _has_value(row[y])}
                if by_year:
                    params[param] = by_year
        return params

    @staticmethod
    def _parse_technology(subsector, tech_name, tech_df, year_cols):
        directives = tech_df[COL.directive].dropna()
        directive = directives.iloc[0] if len(directives) > 0 else None

        tech_type = PARAM.standard_technology
        type_rows = tech_df[tech_df[COL.parameter] == PARAM.tech_type]
        if len(type_rows) > 0:
            tech_type = first_value(type_rows.iloc[0][year_cols]) or tech_type

        year_params = {}
        for _, row in tech_df.iterrows():
            param = row[COL.parameter]
            if not _has_value(param):
                continue
            if param == PARAM.emissions_coefficient and not _has_value(row[COL.context]):
                logger.warning(f"Emissions coefficient of technology {tech_name} in "
                               f"{row[COL.branch]} has no gas in its {COL.context} column. "
                               f"Skipping.")
                continue

            for year in year_cols:
                value = row[year]
                if not _has_value(value):
                    continue
                params = year_params.setdefault(int(year), {})
                if param == PARAM.emissions_coefficient:
                    params.setdefault(param, {})[row[COL.context]] = infer_type(value)
                else:
                    params[param] = infer_type(value)

        subsector.parse_technology(tech_name, year_params, tech_type,
                                   fillout=directive == COL.fillout,
                                   delete=directive == COL.delete,
                                   nocreate=directive == COL.nocreate)
