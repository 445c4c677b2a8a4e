"""
Narrative examples: each module builds a set of charts around one topic.
"""

from plotpipe.vignettes.registry import Example, Vignette, all_vignettes, get_vignette

__all__ = ['Example', 'Vignette', 'all_vignettes', 'get_vignette']
