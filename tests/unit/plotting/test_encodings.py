"""
Tests for resolving encoding arguments against trace data.
"""

import numpy as np
import pandas as pd
import polars as pl
import pytest

from plotpipe.utilities.error_handling import EncodingError
from plotpipe.utilities.plotting.encodings import I, as_polars, resolve


class TestAsPolars:

    def test_pandas_frame_is_converted(self):
        frame = as_polars(pd.DataFrame({"a": [1, 2]}, index=[10, 11]))
        assert isinstance(frame, pl.DataFrame)
        assert frame.columns == ["a"]

    def test_dict_is_converted(self):
        assert as_polars({"a": [1, 2]}).height == 2

    def test_lazy_frame_is_collected(self):
        assert isinstance(as_polars(pl.LazyFrame({"a": [1]})), pl.DataFrame)

    def test_unsupported_source(self):
        with pytest.raises(EncodingError, match="Unsupported data source"):
            as_polars([1, 2, 3])


class TestResolve:

    def test_expression(self, flowers):
        resolved = resolve('x', pl.col("length") * 2, flowers)
        assert resolved.is_column
        assert resolved.series.to_list()[0] == pytest.approx(10.2)

    def test_expression_keeps_column_name(self, flowers):
        assert resolve('color', pl.col("species"), flowers).name == "species"

    def test_column_name_string(self, flowers):
        resolved = resolve('y', "width", flowers)
        assert resolved.series.to_list() == flowers["width"].to_list()

    def test_missing_column_expression(self, flowers):
        with pytest.raises(EncodingError) as info:
            resolve('x', pl.col("petal"), flowers)
        assert info.value.encoding == 'x'
        assert "length" in info.value.available

    def test_missing_column_string_for_position(self, flowers):
        with pytest.raises(EncodingError, match="Missing column 'petal'"):
            resolve('x', "petal", flowers)

    def test_unknown_string_for_color_is_literal(self, flowers):
        resolved = resolve('color', "black", flowers)
        assert not resolved.is_column
        assert resolved.value == "black"

    def test_as_is_wins_over_column(self):
        data = pl.DataFrame({"red": [1, 2]})
        resolved = resolve('color', I("red"), data)
        assert resolved.value == "red"

    def test_expression_without_data(self):
        with pytest.raises(EncodingError, match="has no data"):
            resolve('x', pl.col("a"), None)

    def test_aggregate_expression_becomes_constant(self, flowers):
        resolved = resolve('y', pl.col("length").max(), flowers)
        assert resolved.value == pytest.approx(7.1)

    def test_sequence(self):
        resolved = resolve('x', [1, 2, 3], None)
        assert resolved.series.to_list() == [1, 2, 3]

    def test_numpy_vector(self):
        resolved = resolve('y', np.array([0.5, 1.5]), None)
        assert resolved.series.to_list() == [0.5, 1.5]

    def test_matrix_z(self, grid):
        resolved = resolve('z', grid, None)
        assert resolved.is_matrix
        assert resolved.matrix[1] == [4.0, 5.0, 6.0, 7.0]

    def test_scalar(self):
        assert resolve('size', 12, None).value == 12
