"""
Unit tests for error handling utilities.

Tests the column checks used by the DataFrame helpers.
"""
import pytest
import pandas as pd
from geohash_index.utils.error_handling import (
    require_columns,
    validate_columns_exist,
)
from geohash_index.utils.exceptions import FrameValidationError


class TestRequireColumnsDecorator:
    """Test require_columns decorator."""

    def test_passes_with_all_columns(self):
        """Should pass when all required columns exist."""
        @require_columns(['a', 'b', 'c'], df_param='df')
        def process_df(df):
            return len(df)

        df = pd.DataFrame({'a': [1], 'b': [2], 'c': [3]})
        assert process_df(df) == 1

    def test_raises_on_missing_columns(self):
        """Should raise FrameValidationError when columns are missing."""
        @require_columns(['a', 'b', 'c'], df_param='df')
        def process_df(df):
            return len(df)

        df = pd.DataFrame({'a': [1], 'b': [2]})  # Missing 'c'

        with pytest.raises(FrameValidationError) as exc_info:
            process_df(df)

        assert 'Missing required columns' in str(exc_info.value)
        assert "'c'" in str(exc_info.value)

    def test_works_with_kwargs(self):
        """Should work with keyword arguments."""
        @require_columns(['x', 'y'], df_param='data')
        def process_data(data):
            return data['x'].sum()

        df = pd.DataFrame({'x': [1, 2], 'y': [3, 4]})
        assert process_data(data=df) == 3

    def test_column_names_from_parameters(self):
        """Entries naming a parameter check the column the caller asked for."""
        @require_columns(['col'], df_param='df')
        def first(df, col='value'):
            return df[col].iloc[0]

        df = pd.DataFrame({'value': [7], 'other': [8]})

        assert first(df) == 7
        assert first(df, col='other') == 8
        with pytest.raises(FrameValidationError):
            first(df, col='missing')

    def test_missing_dataframe_param(self):
        @require_columns(['a'], df_param='df')
        def process(df=None):
            return df

        with pytest.raises(FrameValidationError):
            process()

    def test_rejects_non_dataframe(self):
        @require_columns(['a'], df_param='df')
        def process(df):
            return df

        with pytest.raises(FrameValidationError) as exc_info:
            process({'a': [1]})
        assert 'must be a pandas DataFrame' in str(exc_info.value)


class TestValidateColumnsExist:
    """Test validate_columns_exist."""

    def test_all_present(self):
        df = pd.DataFrame({'latitude': [1.0], 'longitude': [2.0]})
        validate_columns_exist(df, {'latitude', 'longitude'})

    def test_reports_missing_and_available(self):
        df = pd.DataFrame({'latitude': [1.0]})

        with pytest.raises(FrameValidationError) as exc_info:
            validate_columns_exist(df, {'latitude', 'longitude'}, 'points')

        message = str(exc_info.value)
        assert 'points' in message
        assert "'longitude'" in message
        assert "Available columns: ['latitude']" in message
