"""
Error handling utilities for the tabular helpers.

Provides a decorator and a validator for DataFrame column checks.
"""
import inspect
from functools import wraps
from typing import Set, List, Callable
import pandas as pd
from geohash_index.utils.exceptions import FrameValidationError


def require_columns(required_cols: List[str], df_param: str = "df"):
    """
    Decorator to validate required columns exist in DataFrame.

    Column names may also be taken from keyword arguments of the call:
    any entry of ``required_cols`` that names a parameter of the wrapped
    function is replaced by the argument value (or the parameter default),
    so ``@require_columns(['lat_col'])`` checks whatever column the caller
    asked for.

    Parameters
    ----------
    required_cols : List[str]
        List of required column names (or names of column parameters)
    df_param : str
        Name of the DataFrame parameter to check

    Raises
    ------
    FrameValidationError
        If required columns are missing
    """
    def decorator(func: Callable) -> Callable:
        sig = inspect.signature(func)

        @wraps(func)
        def wrapper(*args, **kwargs):
            bound = sig.bind_partial(*args, **kwargs)
            bound.apply_defaults()

            df = bound.arguments.get(df_param)
            if df is None:
                raise FrameValidationError(f"DataFrame parameter '{df_param}' not found")

            if not isinstance(df, pd.DataFrame):
                raise FrameValidationError(
                    f"Parameter '{df_param}' must be a pandas DataFrame, got {type(df)}"
                )

            columns = set()
            for col in required_cols:
                if col in bound.arguments and col != df_param:
                    columns.add(bound.arguments[col])
                else:
                    columns.add(col)

            validate_columns_exist(df, columns, df_param)
            return func(*args, **kwargs)
        return wrapper
    return decorator


def validate_columns_exist(
    df: pd.DataFrame,
    required_columns: Set[str],
    df_name: str = "DataFrame"
) -> None:
    """
    Validate that all required columns exist in DataFrame.

    Parameters
    ----------
    df : pd.DataFrame
        DataFrame to validate
    required_columns : Set[str]
        Set of required column names
    df_name : str
        Name of DataFrame for error message

    Raises
    ------
    FrameValidationError
        If required columns are missing
    """
    missing_cols = set(required_columns) - set(df.columns)
    if missing_cols:
        raise FrameValidationError(
            f"Missing required columns in {df_name}: {sorted(missing_cols)}. "
            f"Available columns: {sorted(map(str, df.columns.tolist()))}"
        )
