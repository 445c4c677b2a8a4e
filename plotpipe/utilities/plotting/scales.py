# Default scale selection for color and symbol encodings.
#
# The kind of scale is decided by inspecting the data handed to ``color``:
# discrete data gets a qualitative palette, numeric data a sequential
# colorscale, and numeric data straddling zero a diverging colorscale
# centred on zero. Palettes and colorscales themselves come from plotly.

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Union

import plotly.colors as pc
from plotly.exceptions import PlotlyError
import polars as pl

from plotpipe.config.unified import get_config
from plotpipe.utilities.configuration.logging_config import get_logger
from plotpipe.utilities.error_handling.exceptions import EncodingError

logger = get_logger()

QUALITATIVE = "qualitative"
SEQUENTIAL = "sequential"
DIVERGING = "diverging"

# Color given to rows whose discrete encoding is null
MISSING_COLOR = "lightgray"
MISSING_LABEL = "NA"

DEFAULT_SYMBOLS = ["circle", "triangle-up", "square", "cross", "diamond", "x"]

ColorsArg = Union[None, str, Sequence[str], Dict[Any, str]]


@dataclass
class ColorMapping:
    """
    Resolved color encoding for one trace.

    Discrete mappings carry ``levels`` and ``level_colors``; continuous
    mappings carry a plotly ``colorscale`` and its bounds.
    """
    kind: str
    title: Optional[str] = None
    levels: List[Any] = field(default_factory=list)
    level_colors: Dict[Any, str] = field(default_factory=dict)
    colorscale: Optional[List[List[Any]]] = None
    cmin: Optional[float] = None
    cmax: Optional[float] = None
    cmid: Optional[float] = None

    @property
    def is_discrete(self) -> bool:
        return self.kind == QUALITATIVE

    def color_for(self, level: Any) -> str:
        """Color of a discrete level; null maps to the missing color."""
        if level is None:
            return MISSING_COLOR
        return self.level_colors[level]

    def marker_kwargs(self, values: pl.Series) -> Dict[str, Any]:
        """
        Marker attributes for a continuous mapping over ``values``.

        Nulls (missing data or gaps between groups) become NaN, which
        plotly accepts in a numeric color array and draws without color.
        """
        marker = {
            'color': [float('nan') if v is None else v for v in values.to_list()],
            'colorscale': self.colorscale,
            'cmin': self.cmin,
            'cmax': self.cmax,
            'showscale': True,
            'colorbar': {'title': {'text': self.title or ''}}
        }
        if self.cmid is not None:
            marker['cmid'] = self.cmid
        return marker


@dataclass
class SymbolMapping:
    """Resolved symbol encoding: one plotly marker symbol per level."""
    title: Optional[str] = None
    levels: List[Any] = field(default_factory=list)
    level_symbols: Dict[Any, str] = field(default_factory=dict)

    def symbol_for(self, level: Any) -> str:
        if level is None:
            return "circle-open"
        return self.level_symbols[level]


def is_discrete_dtype(dtype: pl.DataType) -> bool:
    """Strings, booleans, categoricals and enums are discrete."""
    if dtype in (pl.Utf8, pl.Boolean, pl.Null, pl.Object):
        return True
    return isinstance(dtype, (pl.Categorical, pl.Enum))


def classify(values: pl.Series) -> str:
    """
    Decide which kind of color scale suits ``values``.

    Parameters
    ----------
    values : pl.Series
        The resolved color encoding.

    Returns
    -------
    str
        One of ``"qualitative"``, ``"sequential"`` or ``"diverging"``.
    """
    if is_discrete_dtype(values.dtype) or not values.dtype.is_numeric():
        return QUALITATIVE

    non_null = values.drop_nulls()
    if non_null.is_empty():
        return QUALITATIVE

    lo, hi = non_null.min(), non_null.max()
    if lo < 0 < hi:
        return DIVERGING
    return SEQUENTIAL


def discrete_levels(values: pl.Series) -> List[Any]:
    """
    Levels of a discrete series, without nulls.

    Enums keep their declared order; everything else is ordered by first
    appearance.
    """
    present = values.drop_nulls().unique(maintain_order=True)
    if isinstance(values.dtype, pl.Enum):
        seen = set(present.to_list())
        return [level for level in values.dtype.categories.to_list() if level in seen]
    return present.to_list()


def _named_qualitative(name: str) -> Optional[List[str]]:
    palette = getattr(pc.qualitative, name, None)
    if isinstance(palette, list):
        return list(palette)
    return None


def _named_colorscale(name: str) -> Optional[List[List[Any]]]:
    try:
        return [list(stop) for stop in pc.get_colorscale(name)]
    except PlotlyError:
        return None


def _colorscale_from_colors(colors: Sequence[str]) -> List[List[Any]]:
    colors = list(colors)
    if len(colors) == 1:
        return [[0.0, colors[0]], [1.0, colors[0]]]
    step = 1.0 / (len(colors) - 1)
    return [[round(i * step, 6), color] for i, color in enumerate(colors)]


def sample_scale(scale_name: str, n: int) -> List[str]:
    """Sample ``n`` evenly spaced colors from a named plotly colorscale."""
    colorscale = _named_colorscale(scale_name)
    if colorscale is None:
        raise EncodingError(f"Unknown colorscale '{scale_name}'", encoding="colors")
    if n == 1:
        return pc.sample_colorscale(colorscale, [0.5])
    points = [i / (n - 1) for i in range(n)]
    return pc.sample_colorscale(colorscale, points)


def _qualitative_colors(levels: List[Any], colors: ColorsArg) -> Dict[Any, str]:
    n = len(levels)

    if isinstance(colors, dict):
        missing = [level for level in levels if level not in colors]
        if missing:
            raise EncodingError(
                f"colors mapping has no entry for levels: {missing}",
                encoding="colors"
            )
        return {level: colors[level] for level in levels}

    if isinstance(colors, str):
        palette = _named_qualitative(colors)
        if palette is None:
            # A continuous scale name used for discrete data
            if _named_colorscale(colors) is None:
                raise EncodingError(f"Unknown palette '{colors}'", encoding="colors")
            return dict(zip(levels, sample_scale(colors, n)))
    elif colors is not None:
        palette = list(colors)
        if not palette:
            raise EncodingError("colors must not be empty", encoding="colors")
    else:
        default_name = get_config('qualitative_palette', 'plotting', 'Set2')
        palette = _named_qualitative(default_name) or list(pc.qualitative.Set2)
        if n > len(palette):
            scale_name = get_config('sequential_scale', 'plotting', 'Viridis')
            logger.info(
                f"{n} levels exceed the {len(palette)}-color {default_name} palette; "
                f"sampling {scale_name} instead"
            )
            return dict(zip(levels, sample_scale(scale_name, n)))
        return dict(zip(levels, palette))

    if n > len(palette):
        logger.warning(
            f"Only {len(palette)} colors supplied for {n} levels; colors will be recycled"
        )
    return {level: palette[i % len(palette)] for i, level in enumerate(levels)}


def continuous_colorscale(kind: str, colors: ColorsArg) -> List[List[Any]]:
    if colors is None:
        if kind == DIVERGING:
            name = get_config('diverging_scale', 'plotting', 'RdBu')
        else:
            name = get_config('sequential_scale', 'plotting', 'Viridis')
        return _named_colorscale(name)

    if isinstance(colors, dict):
        raise EncodingError(
            "A level-to-color mapping cannot be used with numeric color data",
            encoding="colors"
        )

    if isinstance(colors, str):
        colorscale = _named_colorscale(colors)
        if colorscale is None:
            palette = _named_qualitative(colors)
            if palette is None:
                raise EncodingError(f"Unknown colorscale '{colors}'", encoding="colors")
            return _colorscale_from_colors(palette)
        return colorscale

    colors = list(colors)
    if not colors:
        raise EncodingError("colors must not be empty", encoding="colors")
    return _colorscale_from_colors(colors)


def resolve_color_mapping(values: pl.Series, colors: ColorsArg = None,
                          title: Optional[str] = None) -> ColorMapping:
    """
    Build the color mapping for an encoded series.

    Parameters
    ----------
    values : pl.Series
        Resolved ``color`` encoding.
    colors : str, sequence or dict, optional
        Palette name, colorscale name, explicit list of colors, or (for
        discrete data) a level-to-color mapping.
    title : str, optional
        Legend group or colorbar title.

    Returns
    -------
    ColorMapping
    """
    kind = classify(values)
    title = title if title is not None else values.name

    if kind == QUALITATIVE:
        levels = discrete_levels(values)
        return ColorMapping(
            kind=kind,
            title=title,
            levels=levels,
            level_colors=_qualitative_colors(levels, colors)
        )

    non_null = values.drop_nulls()
    cmin, cmax = float(non_null.min()), float(non_null.max())
    return ColorMapping(
        kind=kind,
        title=title,
        colorscale=continuous_colorscale(kind, colors),
        cmin=cmin,
        cmax=cmax,
        cmid=0.0 if kind == DIVERGING else None
    )


def resolve_symbol_mapping(values: pl.Series,
                           symbols: Union[None, Sequence[str], Dict[Any, str]] = None,
                           title: Optional[str] = None) -> SymbolMapping:
    """
    Build the symbol mapping for an encoded series.

    Symbols only make sense for discrete data; numeric series raise
    ``EncodingError``.
    """
    if classify(values) != QUALITATIVE:
        raise EncodingError(
            f"symbol requires discrete data, got {values.dtype} for '{values.name}'",
            encoding="symbol"
        )

    levels = discrete_levels(values)
    title = title if title is not None else values.name

    if isinstance(symbols, dict):
        missing = [level for level in levels if level not in symbols]
        if missing:
            raise EncodingError(
                f"symbols mapping has no entry for levels: {missing}",
                encoding="symbols"
            )
        return SymbolMapping(title=title, levels=levels,
                             level_symbols={level: symbols[level] for level in levels})

    if symbols is None:
        sequence = list(get_config('symbol_sequence', 'plotting', DEFAULT_SYMBOLS))
        limit = get_config('max_symbols', 'plotting', len(sequence))
        sequence = sequence[:limit]
    elif isinstance(symbols, str):
        sequence = [symbols]
    else:
        sequence = list(symbols)
        if not sequence:
            raise EncodingError("symbols must not be empty", encoding="symbols")

    if len(levels) > len(sequence):
        logger.warning(
            f"The symbol palette can deal with a maximum of {len(sequence)} discrete "
            f"values; {len(levels)} levels of '{title}' will reuse symbols"
        )

    return SymbolMapping(
        title=title,
        levels=levels,
        level_symbols={level: sequence[i % len(sequence)] for i, level in enumerate(levels)}
    )
