import pandas as pd
import polars as pl

from ..utils import model_columns as COL
from ..utils.general_utils import is_year


def read_csv(csv_file):
    """
    Read a model description CSV with every column as a string. Empty cells become None.

    Returns
    -------
    pandas.DataFrame or None
        None when the file can't be parsed.
    """
    try:
        df = pl.read_csv(
            csv_file,
            use_pyarrow=False,
            infer_schema_length=0,
            ).to_pandas()
    except (ValueError, pl.exceptions.PolarsError):
        print(f"Warning: Unable to parse csv_path at {csv_file}. Skipping.")
        return None

    df.columns = [str(c).strip() for c in df.columns]
    return df


def get_node_cols(mdf, year_list):
    """
    Returns the list of node (non-year) columns the model description uses and the list of its
    year columns that are model years.
    """
    node_cols = [c for c in mdf.columns if c in COL.node_columns]
    year_cols = [c for c in mdf.columns if is_year(c) and c in year_list]
    return node_cols, year_cols


def clean_model_df(df, year_list):
    """
    Keep only the known node columns and the model-year columns, add any missing node column, drop
    empty rows, and lower-case parameter names.
    """
    node_cols, year_cols = get_node_cols(df, year_list)
    df = df.loc[:, node_cols + year_cols].copy()
    for col in COL.node_columns:
        if col not in df.columns:
            df[col] = None
    df = df.dropna(axis=0, how="all", subset=[COL.branch, COL.parameter])
    df[COL.parameter] = df[COL.parameter].str.strip().str.lower()
    if df[COL.directive].notna().any():
        df[COL.directive] = df[COL.directive].str.strip().str.lower()
    return df[COL.node_columns + year_cols]


def first_value(values):
    """
    First non-null value of a row's year columns, or None.
    """
    for value in values:
        if value is not None and not pd.isna(value):
            return value
    return None
