"""
Arranging charts in a grid.

``subplot`` builds each chart and places it in one cell, row by row.
Axis titles set on each chart move to the axes of its cell.
"""

import polars as pl

from plotpipe.utilities.plotting import plot_ly, subplot
from plotpipe.vignettes import datasets
from plotpipe.vignettes.registry import Example, Vignette


def _continent_lines(continent: str):
    data = datasets.gapminder().filter(pl.col("continent") == continent)
    return (
        plot_ly(data, x="year", y="lifeExp")
        .add_lines(group="country", line={'width': 1}, name=continent)
    )


def build_side_by_side():
    iris = datasets.iris()
    left = plot_ly(iris, x="sepal_length", y="sepal_width", color="species") \
        .layout(xaxis={'title': {'text': "Sepal length"}})
    right = plot_ly(iris, x="petal_length", y="petal_width", color="species") \
        .layout(xaxis={'title': {'text': "Petal length"}})
    return subplot(left, right, titles=["Sepals", "Petals"])


def build_shared_axes():
    charts = [_continent_lines(c) for c in ("Africa", "Americas", "Asia", "Europe")]
    return subplot(*charts, nrows=2, shareX=True, shareY=True,
                   titles=["Africa", "Americas", "Asia", "Europe"]) \
        .layout(showlegend=False)


def build_surface_and_heatmap():
    grid = datasets.volcano()
    surface = plot_ly(z=grid, type="surface")
    heatmap = plot_ly(z=grid, type="heatmap")
    return subplot(surface, heatmap, widths=[0.6, 0.4])


VIGNETTE = Vignette(
    slug="subplots",
    title="Subplots",
    summary="Place several charts in one figure, optionally sharing axes.",
    examples=[
        Example("Side by side", "Two charts in one row with their own titles.",
                build_side_by_side),
        Example("Shared axes", "A 2x2 grid sharing x within columns and y within rows.",
                build_shared_axes),
        Example("3-D cell", "A surface gets a 3-D scene cell next to a heatmap.",
                build_surface_and_heatmap),
    ]
)
