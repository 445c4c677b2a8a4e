"""
Getting started: build charts by chaining calls.

``plot_ly`` takes a data frame and default encodings; further calls add
traces, narrow the data for later traces, derive columns and set layout.
"""

import polars as pl

from plotpipe.utilities.plotting import plot_ly
from plotpipe.vignettes import datasets
from plotpipe.vignettes.registry import Example, Vignette


def build_scatter():
    """Two numeric encodings imply a scatter trace drawn with markers."""
    return plot_ly(
        datasets.iris(),
        x=pl.col("sepal_length"),
        y=pl.col("petal_length")
    )


def build_histogram():
    """A single encoding implies a histogram."""
    return plot_ly(datasets.tips(), x="total_bill")


def build_highlighted_lines():
    """
    Draw every country in grey, then filter to one country and draw it on
    top. Traces added before the filter keep the full data.
    """
    return (
        plot_ly(datasets.gapminder(), x=pl.col("year"), y=pl.col("lifeExp"))
        .add_lines(group="country", name="All countries",
                   line={'color': 'lightgray', 'width': 1}, hoverinfo='skip')
        .filter(pl.col("country") == "Japan")
        .add_lines(name="Japan", line={'color': 'red', 'width': 3})
        .layout(showlegend=True)
    )


def build_layout():
    """Titles and axes are layout options merged onto the chart."""
    return (
        build_scatter()
        .layout(title={'text': "Iris measurements"})
        .layout(xaxis={'title': {'text': "Sepal length (cm)"}},
                yaxis={'title': {'text': "Petal length (cm)"}})
    )


def build_mutate():
    """Derived columns are computed with polars expressions."""
    return (
        plot_ly(datasets.tips())
        .mutate(tip_pct=pl.col("tip") / pl.col("total_bill") * 100)
        .add_markers(x="total_bill", y="tip_pct", text="day")
        .layout(yaxis={'title': {'text': "Tip (% of bill)"}})
    )


def build_bars():
    """Pre-aggregated data drawn as bars."""
    counts = datasets.tips().group_by("day").agg(pl.len().alias("n")).sort("day")
    return plot_ly(counts).add_bars(x="day", y="n")


VIGNETTE = Vignette(
    slug="intro",
    title="Getting started",
    summary="Create a chart from a data frame and extend it through a chain of calls.",
    examples=[
        Example("Scatterplot", "x and y columns imply a scatter trace.", build_scatter),
        Example("Histogram", "One variable implies a histogram.", build_histogram),
        Example(
            "Filter in a pipe",
            "Traces added after a filter only see the filtered rows.",
            build_highlighted_lines
        ),
        Example("Layout", "Layout options are merged, later calls win.", build_layout),
        Example("Derived columns", "mutate adds columns for later traces.", build_mutate),
        Example("Bars", "Counts per day drawn as a bar chart.", build_bars),
    ]
)
