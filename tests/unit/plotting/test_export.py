"""
Tests for HTML widgets, static images and download links.
"""

import base64

import plotly.graph_objects as go
import pytest

from plotpipe import plot_ly, save_html, to_html
from plotpipe.config.unified import set_runtime_override
from plotpipe.utilities.plotting import export


@pytest.fixture
def scatter(flowers):
    return plot_ly(flowers, x="length", y="width")


class TestHtmlExport:

    def test_full_document(self, scatter):
        html = to_html(scatter)
        assert html.lstrip().startswith("<html>")
        assert "cdn.plot.ly" in html

    def test_fragment(self, scatter):
        html = to_html(scatter, full_html=False, include_plotlyjs=False)
        assert "<html>" not in html
        assert "cdn.plot.ly" not in html

    def test_configured_plotlyjs_mode(self, scatter):
        set_runtime_override('include_plotlyjs', False, 'export')
        assert "cdn.plot.ly" not in to_html(scatter, full_html=False)

    def test_hooks_are_injected(self, scatter):
        js = "function(el, x, data) { el.dataset.points = data.n; }"
        html = scatter.on_render(js, {"n": 7}).to_html(div_id="chart")

        assert "document.getElementById('chart')" in html
        assert '(el, x, {"n": 7});' in html
        assert "el.dataset.points = data.n" in html

    def test_no_hooks_no_post_script(self, scatter):
        html = to_html(scatter, div_id="chart")
        assert "document.getElementById('chart')" not in html

    def test_script_end_tags_are_escaped(self, scatter):
        html = to_html(scatter.on_render("function(el, x, data) {}", {"label": "</script>"}))
        assert '{"label": "<\\/script>"}' in html

    def test_plain_figure(self):
        html = to_html(go.Figure(go.Bar(x=["a"], y=[1])), full_html=False)
        assert "plotly-graph-div" in html

    def test_save_html(self, scatter, tmp_path):
        path = save_html(scatter, tmp_path / "chart.html")
        assert path.exists()
        assert "cdn.plot.ly" in path.read_text(encoding="utf-8")


class TestImageExport:

    def test_to_image_uses_configured_defaults(self, scatter, monkeypatch):
        calls = {}

        def fake_to_image(self, **kwargs):
            calls.update(kwargs)
            return b"image"

        monkeypatch.setattr(go.Figure, "to_image", fake_to_image)
        assert export.to_image(scatter) == b"image"
        assert calls == {"format": "png", "scale": 2}

    def test_to_image_leaves_caller_figure_alone(self, monkeypatch):
        rendered = []
        monkeypatch.setattr(go.Figure, "to_image", lambda self, **kwargs: rendered.append(self) or b"image")
        fig = go.Figure(go.Scatter(x=[1, 2], y=[3, 4]))

        export.to_image(fig)

        assert fig.layout.xaxis.automargin is None
        assert fig.layout.yaxis.automargin is None
        assert rendered[0].layout.xaxis.automargin is True

    def test_download_link(self, scatter, monkeypatch):
        monkeypatch.setattr(export, "to_image", lambda item, format=None, scale=None: b"png-bytes")
        link = export.figure_download_link(scatter, filename="flowers.png")

        encoded = base64.b64encode(b"png-bytes").decode()
        assert link.startswith(f'<a href="data:image/png;base64,{encoded}"')
        assert 'download="flowers.png"' in link
        assert link.endswith("Download high-res PNG</a>")
