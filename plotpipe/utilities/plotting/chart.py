# Chart specification objects and the pipe-style construction interface.
#
# A Chart is never mutated in place: every call returns a new Chart, so a
# partially built chart can be reused as the starting point of several
# variations.

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Optional, Tuple

import plotly.graph_objects as go
import polars as pl

from plotpipe.utilities.configuration.logging_config import get_logger
from plotpipe.utilities.error_handling.exceptions import ChartSpecError, EncodingError
from plotpipe.utilities.plotting.encodings import as_polars
from plotpipe.utilities.plotting.traces import deep_merge, expand_trace

logger = get_logger()

# Attributes whose presence in plot_ly() implies a first trace
IMPLYING_KEYS = ('x', 'y', 'z', 'type')


@dataclass(frozen=True, eq=False)
class TraceSpec:
    """
    One added series.

    ``data`` is the chart data as it was when the trace was added, so a
    later ``filter`` does not affect traces that already exist.
    """
    attrs: Dict[str, Any]
    data: Optional[pl.DataFrame] = None
    inherit: bool = True
    sort_x: bool = False


@dataclass(frozen=True, eq=False)
class RenderHook:
    """A JavaScript post-render callback and the extra data passed to it."""
    js: str
    data: Any = None


@dataclass(frozen=True, eq=False)
class Chart:
    """
    Declarative chart specification.

    Built with :func:`plot_ly` and extended by chaining ``add_*``,
    ``filter``, ``mutate``, ``layout`` and ``on_render`` calls;
    :meth:`build` turns it into a plotly figure.
    """
    data: Optional[pl.DataFrame] = None
    attrs: Dict[str, Any] = field(default_factory=dict)
    traces: Tuple[TraceSpec, ...] = ()
    layout_options: Dict[str, Any] = field(default_factory=dict)
    render_hooks: Tuple[RenderHook, ...] = ()
    implied_trace: Optional[TraceSpec] = None
    base_figure: Optional[go.Figure] = None

    # Traces

    def add_trace(self, data: Any = None, inherit: bool = True,
                  **attrs) -> "Chart":
        """
        Add a series. Chart-level attributes from ``plot_ly`` are inherited
        unless overridden here, or dropped entirely with ``inherit=False``.
        """
        trace_data = as_polars(data) if data is not None else self.data
        spec = TraceSpec(attrs=attrs, data=trace_data, inherit=inherit)
        return replace(self, traces=self.traces + (spec,))

    def add_markers(self, **attrs) -> "Chart":
        return self.add_trace(**{'type': 'scatter', 'mode': 'markers', **attrs})

    def add_lines(self, data: Any = None, inherit: bool = True, **attrs) -> "Chart":
        """Add a line trace; points are connected in order of x."""
        trace_data = as_polars(data) if data is not None else self.data
        spec = TraceSpec(
            attrs={'type': 'scatter', 'mode': 'lines', **attrs},
            data=trace_data, inherit=inherit, sort_x=True
        )
        return replace(self, traces=self.traces + (spec,))

    def add_paths(self, **attrs) -> "Chart":
        """Add a line trace; points are connected in row order."""
        return self.add_trace(**{'type': 'scatter', 'mode': 'lines', **attrs})

    def add_bars(self, **attrs) -> "Chart":
        return self.add_trace(**{'type': 'bar', **attrs})

    def add_histogram(self, **attrs) -> "Chart":
        return self.add_trace(**{'type': 'histogram', **attrs})

    def add_surface(self, **attrs) -> "Chart":
        return self.add_trace(**{'type': 'surface', **attrs})

    def add_heatmap(self, **attrs) -> "Chart":
        return self.add_trace(**{'type': 'heatmap', **attrs})

    # Data

    def filter(self, *predicates: pl.Expr) -> "Chart":
        """Narrow the data used by traces added after this call."""
        if self.data is None:
            raise ChartSpecError("Cannot filter a chart that has no data")
        try:
            filtered = self.data.filter(*predicates)
        except pl.exceptions.PolarsError as e:
            raise EncodingError(
                f"Filter could not be applied: {e}", available=self.data.columns
            ) from e
        return replace(self, data=filtered)

    def mutate(self, **exprs: pl.Expr) -> "Chart":
        """Add or replace columns of the chart data."""
        if self.data is None:
            raise ChartSpecError("Cannot mutate a chart that has no data")
        try:
            mutated = self.data.with_columns(**exprs)
        except pl.exceptions.PolarsError as e:
            raise EncodingError(
                f"Columns could not be derived: {e}", available=self.data.columns
            ) from e
        return replace(self, data=mutated)

    # Layout, hooks and composition

    def layout(self, **options) -> "Chart":
        """Merge layout options; later values win."""
        return replace(self, layout_options=deep_merge(self.layout_options, options))

    def on_render(self, js: str, data: Any = None) -> "Chart":
        """Attach a JavaScript post-render callback, see ``widgets.rendering``."""
        from plotpipe.utilities.widgets.rendering import on_render
        return on_render(self, js, data)

    def pipe(self, func: Callable[..., Any], *args, **kwargs) -> Any:
        """Apply ``func(chart, *args, **kwargs)``."""
        return func(self, *args, **kwargs)

    # Building

    def _trace_specs(self) -> Tuple[TraceSpec, ...]:
        # The plot_ly() trace only survives next to added traces when it
        # names its own type
        if self.implied_trace is None:
            return self.traces
        if not self.traces or 'type' in self.attrs:
            return (self.implied_trace,) + self.traces
        return self.traces

    def trace_dicts(self) -> list:
        """Resolve every trace spec into plotly trace dictionaries."""
        resolved = []
        for spec in self._trace_specs():
            attrs = {**self.attrs, **spec.attrs} if spec.inherit else dict(spec.attrs)
            resolved.extend(expand_trace(attrs, spec.data, sort_x=spec.sort_x))
        return resolved

    def build(self) -> go.Figure:
        """
        Build the plotly figure described by this chart.

        Returns
        -------
        go.Figure

        Raises
        ------
        ChartSpecError
            When encodings cannot be resolved or plotly rejects an attribute.
        """
        fig = go.Figure(self.base_figure) if self.base_figure is not None else go.Figure()
        try:
            for trace in self.trace_dicts():
                fig.add_trace(trace)
            if self.layout_options:
                fig.update_layout(self.layout_options)
        except ValueError as e:
            if isinstance(e, ChartSpecError):
                raise
            raise ChartSpecError(f"plotly rejected the chart specification: {e}") from e

        logger.debug(f"Built figure with {len(fig.data)} traces")
        return fig

    def to_html(self, **kwargs) -> str:
        from plotpipe.utilities.plotting.export import to_html
        return to_html(self, **kwargs)

    def show(self, **kwargs) -> None:
        from plotpipe.utilities.plotting.export import show
        show(self, **kwargs)


def plot_ly(data: Any = None, **attrs) -> Chart:
    """
    Start a chart.

    Parameters
    ----------
    data : polars or pandas DataFrame or dict, optional
        Data the encodings refer to.
    **attrs
        Default encodings (``x``, ``y``, ``z``, ``color``, ``colors``,
        ``symbol``, ``symbols``, ``group``, ``mode``, ``type``, ...) and
        plotly trace attributes. Traces added later inherit them.

    Returns
    -------
    Chart

    Examples
    --------
    >>> import polars as pl
    >>> df = pl.DataFrame({"a": [1, 2, 3], "b": [3, 1, 2]})
    >>> fig = plot_ly(df, x=pl.col("a"), y=pl.col("b")).build()
    """
    frame = as_polars(data)
    implied = None
    if any(key in attrs for key in IMPLYING_KEYS):
        implied = TraceSpec(attrs={}, data=frame)
    return Chart(data=frame, attrs=attrs, implied_trace=implied)
