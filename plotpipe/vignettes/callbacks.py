"""
Custom behavior after rendering.

``on_render`` attaches a JavaScript function that runs once the widget is
drawn. It receives the plot element and the chart specification, and can
subscribe to plotly.js events. ``hover_highlight`` is a ready-made hook:
the hovered marker turns red and returns to its own color on unhover.
"""

import polars as pl

from plotpipe.utilities.plotting import plot_ly
from plotpipe.utilities.widgets import hover_highlight
from plotpipe.vignettes import datasets
from plotpipe.vignettes.registry import Example, Vignette

CLICK_TITLE_JS = """function(el, x) {
  el.on('plotly_click', function(data) {
    var point = data.points[0];
    var label = x.data[point.curveNumber].name || 'trace ' + point.curveNumber;
    Plotly.relayout(el, {'title.text': 'Clicked ' + label + ', point ' + point.pointNumber});
  });
}"""


def build_hover_highlight():
    chart = plot_ly(
        datasets.iris(),
        x=pl.col("sepal_length"),
        y=pl.col("petal_length"),
        color="species"
    )
    return chart.pipe(hover_highlight, size=10)


def build_click_title():
    return (
        plot_ly(datasets.tips(), x="total_bill", y="tip", color="day")
        .on_render(CLICK_TITLE_JS)
        .layout(title={'text': "Click a point"})
    )


VIGNETTE = Vignette(
    slug="callbacks",
    title="Render callbacks",
    summary="Attach JavaScript to the rendered widget to react to plotly.js events.",
    examples=[
        Example("Hover highlight", "The hovered marker turns red until unhover.",
                build_hover_highlight),
        Example("Click to retitle", "A click handler relayouts the title.",
                build_click_title),
    ]
)
