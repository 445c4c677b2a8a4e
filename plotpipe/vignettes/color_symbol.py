"""
Mapping data to color, symbol and groups.

The default color scale depends on what is mapped to ``color``: discrete
data gets a qualitative palette (one trace and legend entry per level),
numeric data a sequential colorbar, and numeric data on both sides of zero
a diverging colorbar centred on zero. ``colors`` and ``symbols`` replace the
defaults; ``I()`` marks a constant.
"""

import polars as pl

from plotpipe.utilities.plotting import I, plot_ly
from plotpipe.vignettes import datasets
from plotpipe.vignettes.registry import Example, Vignette


def _iris_base():
    return plot_ly(datasets.iris(), x=pl.col("sepal_length"), y=pl.col("petal_length"))


def build_qualitative():
    return _iris_base().add_markers(color="species")


def build_sequential():
    return _iris_base().add_markers(color="petal_width")


def build_diverging():
    return (
        plot_ly(datasets.iris())
        .mutate(
            sepal_deviation=pl.col("sepal_length") - pl.col("sepal_length").mean()
        )
        .add_markers(
            x=pl.col("sepal_length"),
            y=pl.col("petal_length"),
            color="sepal_deviation"
        )
    )


def build_named_palette():
    return _iris_base().add_markers(color="species", colors="Dark2")


def build_custom_gradient():
    return _iris_base().add_markers(color="petal_width", colors=["#132B43", "#56B1F7"])


def build_level_colors():
    return _iris_base().add_markers(
        color="species",
        colors={'setosa': "#1b9e77", 'versicolor': "#d95f02", 'virginica': "#7570b3"}
    )


def build_symbols():
    return _iris_base().add_markers(
        symbol="species",
        symbols=["circle", "x", "square"],
        marker={'size': 9}
    )


def build_color_and_symbol():
    return plot_ly(
        datasets.tips(),
        x=pl.col("total_bill"),
        y=pl.col("tip"),
        color="sex",
        symbol="smoker",
        type="scatter",
        mode="markers"
    )


def build_constant_color():
    return _iris_base().add_markers(color=I("black"), marker={'opacity': 0.6})


def build_grouped_lines():
    oceania = datasets.gapminder().filter(pl.col("continent") == "Oceania")
    return plot_ly(oceania, x="year", y="gdpPercap").add_lines(color="country")


VIGNETTE = Vignette(
    slug="color-symbol",
    title="Color, symbols and groups",
    summary="Default scales follow the data type; palettes and symbols can be replaced.",
    examples=[
        Example("Qualitative", "A discrete variable gets one color per level.",
                build_qualitative),
        Example("Sequential", "A positive numeric variable gets a colorbar.",
                build_sequential),
        Example("Diverging", "Values on both sides of zero are centred on zero.",
                build_diverging),
        Example("Named palette", "colors can name any plotly palette.",
                build_named_palette),
        Example("Custom gradient", "A list of colors defines a gradient.",
                build_custom_gradient),
        Example("Colors per level", "A mapping pins each level to a color.",
                build_level_colors),
        Example("Symbols", "A discrete variable mapped to marker symbols.",
                build_symbols),
        Example("Color and symbol", "Two discrete encodings split into their combinations.",
                build_color_and_symbol),
        Example("Constant color", "I() uses a value as is.", build_constant_color),
        Example("Lines per group", "Discrete color splits lines per country.",
                build_grouped_lines),
    ]
)
