"""
Checks run by `ModelValidator`. Each check returns a list of ``(line, branch)`` pairs (or
``(line, branch, technology)`` triples) pointing at the offending rows, along with a short
description of the concern.
"""
import pandas as pd

from ..utils import model_columns as COL
from ..utils import parameters as PARAM
from ..utils.general_utils import infer_type, is_year

FILE_COL = "File"


def get_year_cols(df):
    return [c for c in df.columns if is_year(c)]


def _numeric(value):
    if value is None or pd.isna(value):
        return None
    value = infer_type(value)
    if isinstance(value, bool) or not isinstance(value, float):
        return None
    return value


def _tech_rows(df):
    return df[df[COL.technology].notnull()]


def _subsector_rows(df):
    return df[df[COL.technology].isnull()]


def invalid_branches(validator):
    """
    Identify rows whose branch isn't of the form ``<root>.<region>.<sector>.<subsector>``.
    """
    df = validator.model_df
    invalid = []
    for i, branch in zip(df.index, df[COL.branch]):
        if branch is None or pd.isna(branch):
            invalid.append((i, branch))
            continue
        parts = branch.split('.')
        if len(parts) != 4 or parts[0] != validator.root or not all(parts):
            invalid.append((i, branch))

    concern_desc = f"rows have a branch which isn't of the form {validator.root}.<region>." \
                   f"<sector>.<subsector>"
    return invalid, concern_desc


def unknown_parameters(df):
    """
    Identify subsector and technology rows with a parameter that the model doesn't recognise.
    Food production technologies accept the land parameters as well, and transportation
    technologies their intensity and load factor parameters.
    """
    unknown = []

    node_rows = _subsector_rows(df)
    bad_nodes = node_rows[~node_rows[COL.parameter].isin(PARAM.subsector_params)]
    unknown.extend(zip(bad_nodes.index, bad_nodes[COL.branch]))

    year_cols = get_year_cols(df)
    tech_rows = _tech_rows(df)
    for _, tech_df in tech_rows.groupby([FILE_COL, COL.branch, COL.technology], sort=False):
        valid_params = PARAM.technology_params
        type_rows = tech_df[tech_df[COL.parameter] == PARAM.tech_type]
        if len(type_rows) > 0:
            types = [str(v).lower() for v in type_rows[year_cols].values.ravel()
                     if v is not None and not pd.isna(v)]
            if PARAM.food_production_technology in types:
                valid_params = PARAM.food_production_params
            elif PARAM.transportation_technology in types:
                valid_params = PARAM.transportation_params

        bad_techs = tech_df[tech_df[COL.parameter].notnull() &
                            ~tech_df[COL.parameter].isin(valid_params)]
        unknown.extend(zip(bad_techs.index, bad_techs[COL.branch], bad_techs[COL.technology]))

    unknown.sort(key=lambda x: x[0])
    concern_desc = "rows have an unknown parameter"
    return unknown, concern_desc


def invalid_directives(df):
    """
    Identify technology rows with a directive other than delete, nocreate, or fillout.
    """
    directive_rows = df[df[COL.directive].notnull()]
    invalid_rows = directive_rows[~directive_rows[COL.directive].isin(COL.valid_directives)]
    invalid = list(zip(invalid_rows.index, invalid_rows[COL.branch]))

    concern_desc = "rows have an invalid 'Directive'"
    return invalid, concern_desc


def duplicate_definitions(validator):
    """
    Identify parameters given a value for the same year more than once within a single file.
    Later files may redefine values; that is how configuration fragments work.
    """
    df = validator.model_df
    year_cols = get_year_cols(df)
    key_cols = [FILE_COL, COL.branch, COL.technology, COL.parameter, COL.context]
    keys = [df[c].fillna("") for c in key_cols]

    duplicates = []
    for _, group in df.groupby(keys, sort=False):
        if len(group) < 2:
            continue
        counts = group[year_cols].notna().sum()
        if (counts > 1).any():
            duplicates.extend(zip(group.index, group[COL.branch]))

    duplicates.sort(key=lambda x: x[0])
    concern_desc = "rows define a value which is also defined on another row of the same file"
    return duplicates, concern_desc


def nonnegative_tech_logit_exponents(validator):
    """
    Identify technology logit exponents which are zero or positive in subsectors with more than one
    technology. Shares can't be calculated for them.
    """
    df = validator.model_df
    year_cols = get_year_cols(df)
    tech_rows = _tech_rows(df)
    tech_counts = tech_rows.groupby(COL.branch)[COL.technology].nunique()

    lexp_rows = tech_rows[tech_rows[COL.parameter] == PARAM.logit_exponent]
    nonnegative = []
    for i, row in lexp_rows.iterrows():
        if tech_counts.get(row[COL.branch], 0) <= 1:
            continue
        values = [_numeric(row[y]) for y in year_cols]
        if any(v is not None and v >= 0 for v in values):
            nonnegative.append((i, row[COL.branch], row[COL.technology]))

    concern_desc = "technologies have a logit exponent >= 0 in a subsector with more than one " \
                   "technology"
    return nonnegative, concern_desc


def calibrated_with_capacity_limit(validator):
    """
    Identify subsectors with calibrated output and a capacity limit below 1 in the same year. The
    capacity limit is removed when the model runs.
    """
    df = validator.model_df
    year_cols = get_year_cols(df)
    node_rows = _subsector_rows(df)

    conflicts = []
    for branch, branch_df in node_rows.groupby(COL.branch, sort=False):
        cal_rows = branch_df[branch_df[COL.parameter] == PARAM.calibrated_output]
        cap_rows = branch_df[branch_df[COL.parameter] == PARAM.capacity_limit]
        if len(cal_rows) == 0 or len(cap_rows) == 0:
            continue

        # Later rows supersede earlier ones
        calibrated = {}
        for _, row in cal_rows.iterrows():
            for year in year_cols:
                value = _numeric(row[year])
                if value is not None:
                    calibrated[year] = value

        for i, row in cap_rows.iterrows():
            for year in year_cols:
                cap = _numeric(row[year])
                if cap is not None and cap < 1 and calibrated.get(year, 0) > 0:
                    conflicts.append((i, branch))
                    break

    concern_desc = "subsectors have calibrated output along with a capacity limit below 1"
    return conflicts, concern_desc


def techs_without_values(validator):
    """
    Identify technologies defined without a value in any model year. Rows which delete a
    technology don't need values.
    """
    df = validator.model_df
    year_cols = get_year_cols(df)
    tech_rows = _tech_rows(df)

    empty = []
    for (_, branch, tech), tech_df in tech_rows.groupby([FILE_COL, COL.branch, COL.technology],
                                                        sort=False):
        if (tech_df[COL.directive] == COL.delete).any():
            continue
        if tech_df[year_cols].isna().all(axis=None):
            empty.append((tech_df.index[0], branch, tech))

    concern_desc = "technologies have no value in any model year"
    return empty, concern_desc
