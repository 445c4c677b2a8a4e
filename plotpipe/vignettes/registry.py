"""
Vignette descriptors and the registry the gallery and tests iterate over.
"""

from dataclasses import dataclass, field
from typing import Callable, List

from plotpipe.utilities.plotting.chart import Chart


@dataclass(frozen=True)
class Example:
    """One runnable example: a title, a short narrative and a builder."""
    title: str
    description: str
    build: Callable[[], Chart]


@dataclass(frozen=True)
class Vignette:
    slug: str
    title: str
    summary: str
    examples: List[Example] = field(default_factory=list)


def all_vignettes() -> List[Vignette]:
    """Every vignette, in reading order."""
    from plotpipe.vignettes import callbacks, color_symbol, intro, subplots
    return [intro.VIGNETTE, color_symbol.VIGNETTE, subplots.VIGNETTE, callbacks.VIGNETTE]


def get_vignette(slug: str) -> Vignette:
    for vignette in all_vignettes():
        if vignette.slug == slug:
            return vignette
    raise KeyError(f"No vignette named '{slug}'")
