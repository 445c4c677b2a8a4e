"""
Tests for default color and symbol scale selection.
"""

import math

import plotly.colors as pc
import polars as pl
import pytest
from loguru import logger

from plotpipe.config.unified import set_runtime_override
from plotpipe.utilities.error_handling import EncodingError
from plotpipe.utilities.plotting.scales import (
    DIVERGING, QUALITATIVE, SEQUENTIAL,
    classify, discrete_levels, resolve_color_mapping, resolve_symbol_mapping
)


@pytest.fixture
def warnings_logged():
    """Collect loguru warnings emitted during a test."""
    messages = []
    handler_id = logger.add(lambda message: messages.append(str(message)), level="WARNING")
    yield messages
    logger.remove(handler_id)


def _scale(name):
    return [list(stop) for stop in pc.get_colorscale(name)]


class TestClassify:
    """Scale kind is chosen from the data type."""

    def test_strings_are_qualitative(self):
        assert classify(pl.Series("s", ["a", "b", "a"])) == QUALITATIVE

    def test_booleans_are_qualitative(self):
        assert classify(pl.Series("b", [True, False])) == QUALITATIVE

    def test_categoricals_are_qualitative(self):
        values = pl.Series("c", ["x", "y"], dtype=pl.Categorical)
        assert classify(values) == QUALITATIVE

    def test_positive_numbers_are_sequential(self):
        assert classify(pl.Series("n", [1, 2, 3])) == SEQUENTIAL

    def test_zero_lower_bound_stays_sequential(self):
        assert classify(pl.Series("n", [0.0, 5.0])) == SEQUENTIAL

    def test_numbers_straddling_zero_are_diverging(self):
        assert classify(pl.Series("n", [-1.5, 0.0, 2.0])) == DIVERGING

    def test_all_negative_is_sequential(self):
        assert classify(pl.Series("n", [-3, -2, -1])) == SEQUENTIAL

    def test_all_null_numeric_is_qualitative(self):
        assert classify(pl.Series("n", [None, None], dtype=pl.Float64)) == QUALITATIVE


class TestDiscreteLevels:
    """Level order drives trace and legend order."""

    def test_first_appearance_order(self):
        assert discrete_levels(pl.Series("s", ["b", "a", "b", None, "c"])) == ["b", "a", "c"]

    def test_enum_keeps_declared_order(self):
        values = pl.Series("e", ["lo", "hi", "lo"], dtype=pl.Enum(["hi", "mid", "lo"]))
        assert discrete_levels(values) == ["hi", "lo"]

    def test_categorical_uses_first_appearance(self):
        values = pl.Series("c", ["lo", "hi", None, "lo"], dtype=pl.Categorical)
        assert discrete_levels(values) == ["lo", "hi"]


class TestColorMapping:
    """Resolution of the color encoding into palettes and colorscales."""

    def test_default_qualitative_palette(self):
        mapping = resolve_color_mapping(pl.Series("species", ["a", "b", "c"]))
        assert mapping.is_discrete
        assert mapping.title == "species"
        assert mapping.levels == ["a", "b", "c"]
        assert [mapping.level_colors[k] for k in "abc"] == pc.qualitative.Set2[:3]

    def test_many_levels_fall_back_to_sequential_samples(self):
        levels = [f"l{i}" for i in range(10)]
        mapping = resolve_color_mapping(pl.Series("many", levels))
        colors = [mapping.level_colors[level] for level in levels]
        assert len(set(colors)) == 10
        assert colors[0] == pc.sample_colorscale(_scale("Viridis"), [0.0])[0]

    def test_named_qualitative_palette(self):
        mapping = resolve_color_mapping(pl.Series("s", ["a", "b"]), colors="Dark2")
        assert mapping.level_colors == {"a": pc.qualitative.Dark2[0], "b": pc.qualitative.Dark2[1]}

    def test_continuous_scale_name_samples_for_discrete_data(self):
        mapping = resolve_color_mapping(pl.Series("s", ["a", "b", "c"]), colors="Viridis")
        assert len(set(mapping.level_colors.values())) == 3

    def test_short_color_list_is_recycled(self, warnings_logged):
        mapping = resolve_color_mapping(pl.Series("s", ["a", "b", "c"]), colors=["red", "blue"])
        assert mapping.level_colors == {"a": "red", "b": "blue", "c": "red"}
        assert any("recycled" in message for message in warnings_logged)

    def test_level_mapping(self):
        mapping = resolve_color_mapping(
            pl.Series("s", ["a", "b"]), colors={"a": "black", "b": "orange", "z": "pink"}
        )
        assert mapping.level_colors == {"a": "black", "b": "orange"}

    def test_level_mapping_missing_level(self):
        with pytest.raises(EncodingError, match="no entry for levels"):
            resolve_color_mapping(pl.Series("s", ["a", "b"]), colors={"a": "black"})

    def test_unknown_palette(self):
        with pytest.raises(EncodingError, match="Unknown palette"):
            resolve_color_mapping(pl.Series("s", ["a"]), colors="NotAPalette")

    def test_missing_level_color(self):
        mapping = resolve_color_mapping(pl.Series("s", ["a", None]))
        assert mapping.color_for(None) == "lightgray"

    def test_sequential_defaults(self):
        mapping = resolve_color_mapping(pl.Series("w", [1.0, 2.5, 4.0]))
        assert mapping.kind == SEQUENTIAL
        assert mapping.colorscale == _scale("Viridis")
        assert (mapping.cmin, mapping.cmax, mapping.cmid) == (1.0, 4.0, None)

    def test_diverging_defaults_centre_on_zero(self):
        mapping = resolve_color_mapping(pl.Series("d", [-2.0, 3.0]))
        assert mapping.kind == DIVERGING
        assert mapping.colorscale == _scale("RdBu")
        assert mapping.cmid == 0.0

    def test_gradient_from_color_list(self):
        mapping = resolve_color_mapping(pl.Series("w", [1, 2]), colors=["#132B43", "#56B1F7"])
        assert mapping.colorscale == [[0.0, "#132B43"], [1.0, "#56B1F7"]]

    def test_level_mapping_rejected_for_numbers(self):
        with pytest.raises(EncodingError):
            resolve_color_mapping(pl.Series("w", [1, 2]), colors={1: "red"})

    def test_marker_kwargs_carry_colorbar(self):
        mapping = resolve_color_mapping(pl.Series("d", [-1.0, 1.0]))
        marker = mapping.marker_kwargs(pl.Series("d", [-1.0, 1.0]))
        assert marker["color"] == [-1.0, 1.0]
        assert marker["cmid"] == 0.0
        assert marker["colorbar"]["title"]["text"] == "d"

    def test_marker_kwargs_turn_nulls_into_nan(self):
        values = pl.Series("v", [1.0, None, 3.0])
        marker = resolve_color_mapping(values).marker_kwargs(values)

        assert marker["color"][0] == 1.0
        assert math.isnan(marker["color"][1])
        assert marker["cmin"] == 1.0

    def test_configured_sequential_scale(self):
        set_runtime_override('sequential_scale', 'Plasma', 'plotting')
        mapping = resolve_color_mapping(pl.Series("w", [1.0, 2.0]))
        assert mapping.colorscale == _scale("Plasma")


class TestSymbolMapping:
    """Symbols apply to discrete data only."""

    def test_default_symbols(self):
        mapping = resolve_symbol_mapping(pl.Series("s", ["a", "b", "c"]))
        assert mapping.level_symbols == {"a": "circle", "b": "triangle-up", "c": "square"}

    def test_too_many_levels_reuse_symbols(self, warnings_logged):
        levels = [f"l{i}" for i in range(7)]
        mapping = resolve_symbol_mapping(pl.Series("s", levels))
        assert mapping.level_symbols["l6"] == mapping.level_symbols["l0"]
        assert any("maximum of 6" in message for message in warnings_logged)

    def test_custom_symbol_list(self):
        mapping = resolve_symbol_mapping(pl.Series("s", ["a", "b"]), symbols=["x", "star"])
        assert mapping.level_symbols == {"a": "x", "b": "star"}

    def test_symbol_mapping_dict(self):
        mapping = resolve_symbol_mapping(pl.Series("s", ["a"]), symbols={"a": "diamond"})
        assert mapping.symbol_for("a") == "diamond"

    def test_numeric_symbol_rejected(self):
        with pytest.raises(EncodingError, match="discrete"):
            resolve_symbol_mapping(pl.Series("n", [1.0, 2.0]))
