from __future__ import annotations

import pytest

from mortgage_compare.app.surfaces import SnapshotSurface
from mortgage_compare.core.charts import (
    BALANCE_SURFACE,
    COMPARISON_SURFACE,
    ChartPresenter,
    comparison_config,
)
from mortgage_compare.core.render_cache import Rendered, SeriesAlignmentCache, Uninitialized
from mortgage_compare.schemas.chart import ChartSeries
from mortgage_compare.schemas.comparison import ComparisonSeries


class RecordingRenderer:
    def __init__(self):
        self.updates = []
        self.destroyed = False

    def update(self, config):
        self.updates.append(config)

    def destroy(self):
        self.destroyed = True


def test_create_only_once_per_surface():
    cache = SeriesAlignmentCache()

    assert cache.should_create("balance")
    assert isinstance(cache.slot("balance"), Uninitialized)

    renderer = RecordingRenderer()
    cache.remember("balance", renderer, "chart")

    assert not cache.should_create("balance")
    assert cache.should_update("balance")
    assert cache.slot("balance") == Rendered(renderer=renderer, dataset_key="chart")
    # other surfaces are independent
    assert cache.should_create("comparison")


def test_remember_refuses_to_leak_a_renderer():
    cache = SeriesAlignmentCache()
    cache.remember("balance", RecordingRenderer(), "chart")

    with pytest.raises(RuntimeError):
        cache.remember("balance", RecordingRenderer(), "chart")


def test_release_destroys_and_resets():
    cache = SeriesAlignmentCache()
    renderer = RecordingRenderer()
    cache.remember("balance", renderer, "chart")

    assert cache.release("balance") is renderer
    assert renderer.destroyed
    assert cache.should_create("balance")
    assert cache.release("balance") is None


def test_release_all():
    cache = SeriesAlignmentCache()
    renderers = [RecordingRenderer(), RecordingRenderer()]
    cache.remember("a", renderers[0], "chart")
    cache.remember("b", renderers[1], "comparison")

    cache.release_all()

    assert all(r.destroyed for r in renderers)
    assert cache.should_create("a") and cache.should_create("b")


def test_presenter_releases_before_switching_dataset(compare_body):
    surface = SnapshotSurface(BALANCE_SURFACE)
    presenter = ChartPresenter({BALANCE_SURFACE: surface})
    series = ComparisonSeries.model_validate(compare_body())

    presenter.draw(BALANCE_SURFACE, "chart", {"type": "line"})
    first = presenter.cache.slot(BALANCE_SURFACE).renderer
    presenter.draw(BALANCE_SURFACE, "comparison", comparison_config(series))

    assert first.destroyed
    assert surface.created == 2
    assert surface.current()["config"]["data"]["labels"] == ["Year 0", "Year 1", "Year 2", "Year 3"]


def test_presenter_skips_empty_series_and_missing_surfaces():
    surface = SnapshotSurface(COMPARISON_SURFACE)
    presenter = ChartPresenter({COMPARISON_SURFACE: surface})

    presenter.show_comparison(ComparisonSeries())
    presenter.show_chart(
        ChartSeries(
            years=[0],
            standardBalance=[1.0],
            offsetBalance=[1.0],
            savingsBalance=[0.0],
            yearlyPrincipal=[0.0],
            yearlyInterest=[0.0],
        )
    )

    assert surface.created == 0
    assert surface.current() is None


def test_comparison_config_dashes_difference(compare_body):
    config = comparison_config(ComparisonSeries.model_validate(compare_body()), currency="EUR")

    labels = [dataset["label"] for dataset in config["data"]["datasets"]]
    assert labels == [
        "Offset Cumulative Benefit",
        "Savings Cumulative Benefit",
        "Difference (Offset - Savings)",
    ]
    assert config["data"]["datasets"][2]["borderDash"] == [5, 5]
    assert config["options"]["scales"]["y"]["title"]["text"] == "Benefit (EUR)"
