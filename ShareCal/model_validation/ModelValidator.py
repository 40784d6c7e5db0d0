import pandas as pd

from . import validation_checks as validate
from .validation_checks import FILE_COL
from ..readers.reader_utils import read_csv, clean_model_df
from ..utils import parameters as PARAM


class ModelValidator:
    """
    Checks CSV model descriptions for problems before they are read into a model.

    Findings are printed as they are found and stored in `warnings`, keyed by the name of the check
    which raised them. Each finding points at the CSV line it came from.

    Parameters
    ----------
    csv_file_paths : str or list of str
        Model description CSV files, in the order they would be read.
    modeltime : ShareCal.ModelTime
        The model periods. Year columns which aren't model years are ignored.
    root_node : str, optional
        The first part of every branch.
    """
    def __init__(self, csv_file_paths, modeltime, root_node=PARAM.root):
        if isinstance(csv_file_paths, str):
            csv_file_paths = [csv_file_paths]

        self.csv_files = list(csv_file_paths)
        self.year_list = [str(y) for y in modeltime.years]
        self.root = root_node

        self.model_df = self._get_model_df()

        self.warnings = {}
        self.verbose = False
        self.validate_count = 0

    def _get_model_df(self):
        appended_data = []
        for file_number, csv_file in enumerate(self.csv_files):
            sheet_df = read_csv(csv_file)
            if sheet_df is None:
                continue
            sheet_df.index += 2  # Match CSV line numbers (+1: 0 vs 1 origin, +1: column headers)
            sheet_df = clean_model_df(sheet_df, self.year_list)
            sheet_df.insert(0, FILE_COL, file_number)
            appended_data.append(sheet_df)

        if not appended_data:
            raise ValueError(f"None of the model description files could be read: "
                             f"{self.csv_files}")

        return pd.concat(appended_data)

    def _raise_concerns(self, concerns, concern_key, concern_desc):
        if len(concerns) <= 0:
            more_info = ""
        else:
            more_info = f"See ModelValidator.warnings['{concern_key}'] for more info."

        info_str = f"{len(concerns)} {concern_desc}. {more_info}"

        if self.verbose or len(concerns) > 0:
            print(info_str)
            self.validate_count += len(concerns)

    def _run_check(self, check_function, **kwargs):
        concern_list, concern_desc = check_function(**kwargs)
        self._raise_concerns(concern_list, check_function.__name__, concern_desc)
        self.warnings[check_function.__name__] = concern_list

    def validate(self, verbose=True):
        """
        Run every check.

        Returns
        -------
        int
            The number of errors found. Warnings aren't counted.
        """
        self.verbose = verbose

        print("\n*** Errors ***")
        self.validate_count = 0
        self._run_check(validate.invalid_branches, validator=self)
        self._run_check(validate.unknown_parameters, df=self.model_df)
        self._run_check(validate.invalid_directives, df=self.model_df)
        self._run_check(validate.duplicate_definitions, validator=self)
        self._run_check(validate.nonnegative_tech_logit_exponents, validator=self)
        error_count = self.validate_count
        if error_count == 0:
            print("No errors found!")

        print("\n*** Warnings ***")
        self.validate_count = 0
        self._run_check(validate.calibrated_with_capacity_limit, validator=self)
        self._run_check(validate.techs_without_values, validator=self)
        if self.validate_count == 0:
            print("No warnings found!")

        return error_count
