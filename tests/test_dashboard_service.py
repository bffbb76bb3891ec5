"""
tests/test_dashboard_service.py

Pytest unit tests for DashboardService.

No HTTP layer is involved; uploads are passed as raw bytes.
"""

from __future__ import annotations

import pytest

from app.schemas.dashboard import DashboardConfig
from app.services.dashboard_service import (
    EMPTY_DATASET_MESSAGE,
    CSVDecodeError,
    DashboardService,
    EmptyDatasetError,
)

SALES_CSV = (
    "region,product,revenue,units\n"
    "East,Widget,1200.5,10\n"
    "West,Widget,800,8\n"
    "East,Gadget,300,3\n"
    "North,Gadget,not_a_number,1\n"
    "broken,row\n"
).encode("utf-8")


@pytest.fixture()
def svc() -> DashboardService:
    return DashboardService(sample_rows=2)


@pytest.fixture()
def config() -> DashboardConfig:
    return DashboardConfig.model_validate(
        {
            "title": "Sales",
            "domain": "Retail",
            "summary": "Quarterly sales.",
            "kpis": [
                {"label": "Revenue", "column": "revenue", "operation": "sum", "format": "currency"},
                {"label": "Orders", "column": "units", "operation": "count"},
            ],
            "charts": [
                {
                    "id": "by-region",
                    "type": "bar",
                    "title": "Revenue by region",
                    "xAxisKey": "region",
                    "dataKey": "revenue",
                    "aggregation": "sum",
                },
                {
                    "id": "scatter",
                    "type": "scatter",
                    "title": "Units vs revenue",
                    "xAxisKey": "units",
                    "dataKey": "revenue",
                    "aggregation": "raw",
                },
            ],
            "recommendations": ["Push gadgets in the West."],
            "statisticalAnalysis": "Two regions drive most revenue.",
            "forecastAnalysis": "Flat next quarter.",
        }
    )


# ---------------------------------------------------------------------------
# load_dataset
# ---------------------------------------------------------------------------


class TestLoadDataset:
    def test_parses_records_and_counts_dropped_lines(self, svc: DashboardService) -> None:
        dataset = svc.load_dataset(SALES_CSV)
        assert dataset.row_count == 4
        assert dataset.rows_dropped == 1

    def test_accepts_text(self, svc: DashboardService) -> None:
        assert svc.load_dataset("a,b\n1,2\n").records == [{"a": 1, "b": 2}]

    def test_strips_utf8_bom(self, svc: DashboardService) -> None:
        dataset = svc.load_dataset("\ufeffa,b\n1,2\n".encode("utf-8"))
        assert list(dataset.records[0]) == ["a", "b"]

    @pytest.mark.parametrize("raw", [b"", b"a,b\n", b"a,b\n1,2,3\n"])
    def test_empty_result_raises(self, svc: DashboardService, raw: bytes) -> None:
        with pytest.raises(EmptyDatasetError) as exc_info:
            svc.load_dataset(raw)
        assert str(exc_info.value) == EMPTY_DATASET_MESSAGE

    def test_non_utf8_raises_decode_error(self, svc: DashboardService) -> None:
        with pytest.raises(CSVDecodeError):
            svc.load_dataset(b"a,b\n\xff\xfe,1\n")


# ---------------------------------------------------------------------------
# profile_dataset
# ---------------------------------------------------------------------------


class TestProfileDataset:
    def test_profile_contents(self, svc: DashboardService) -> None:
        profile = svc.profile_dataset(svc.load_dataset(SALES_CSV))

        assert profile.rows_parsed == 4
        assert profile.rows_dropped == 1
        assert [(c.name, c.type) for c in profile.columns] == [
            ("region", "string"),
            ("product", "string"),
            ("revenue", "number"),
            ("units", "number"),
        ]
        assert profile.filter_options == {
            "region": ["East", "North", "West"],
            "product": ["Gadget", "Widget"],
        }

    def test_sample_is_capped(self, svc: DashboardService) -> None:
        profile = svc.profile_dataset(svc.load_dataset(SALES_CSV))
        assert len(profile.sample) == 2
        assert profile.sample[0]["region"] == "East"


# ---------------------------------------------------------------------------
# render_dashboard
# ---------------------------------------------------------------------------


class TestRenderDashboard:
    def test_kpis_and_charts(self, svc: DashboardService, config: DashboardConfig) -> None:
        rendered = svc.render_dashboard(svc.load_dataset(SALES_CSV), config)

        assert [kpi.value for kpi in rendered.kpis] == ["$2,301", "4"]
        by_region = rendered.charts[0]
        assert by_region.config["id"] == "by-region"
        assert by_region.data == [
            {"region": "East", "revenue": 1500.5, "name": "East"},
            {"region": "West", "revenue": 800, "name": "West"},
            {"region": "North", "revenue": 0, "name": "North"},
        ]
        scatter = rendered.charts[1]
        assert len(scatter.data) == 4
        assert scatter.data[0] == {"units": 10, "revenue": 1200.5, "name": 10}

    def test_narrative_fields_pass_through(self, svc: DashboardService, config: DashboardConfig) -> None:
        rendered = svc.render_dashboard(svc.load_dataset(SALES_CSV), config)

        assert rendered.title == "Sales"
        assert rendered.domain == "Retail"
        assert rendered.recommendations == ["Push gadgets in the West."]
        assert rendered.statistical_analysis == "Two regions drive most revenue."
        assert rendered.forecast_analysis == "Flat next quarter."

    def test_filters_apply_to_kpis_and_charts(self, svc: DashboardService, config: DashboardConfig) -> None:
        rendered = svc.render_dashboard(
            svc.load_dataset(SALES_CSV),
            config,
            {"region": "East", "product": ""},
        )

        assert rendered.active_filters == {"region": "East"}
        assert rendered.total_rows == 4
        assert rendered.filtered_rows == 2
        assert rendered.kpis[0].value == "$1,501"
        assert [point["region"] for point in rendered.charts[0].data] == ["East"]

    def test_filter_matching_nothing_yields_zero_kpis(
        self, svc: DashboardService, config: DashboardConfig
    ) -> None:
        rendered = svc.render_dashboard(svc.load_dataset(SALES_CSV), config, {"region": "South"})

        assert [kpi.value for kpi in rendered.kpis] == ["0", "0"]
        assert rendered.charts[0].data == []

    def test_drill_pins_clicked_chart_element(self, svc: DashboardService, config: DashboardConfig) -> None:
        rendered = svc.render_dashboard(
            svc.load_dataset(SALES_CSV),
            config,
            {"region": "East"},
            drill=("product", "Gadget"),
        )

        assert rendered.active_filters == {"region": "East", "product": "Gadget"}
        assert rendered.filtered_rows == 1
        assert rendered.kpis[0].value == "$300"

    def test_drill_replaces_filter_on_same_column(self, svc: DashboardService, config: DashboardConfig) -> None:
        rendered = svc.render_dashboard(
            svc.load_dataset(SALES_CSV),
            config,
            {"region": "East"},
            drill=("region", "West"),
        )

        assert rendered.active_filters == {"region": "West"}
        assert rendered.kpis[0].value == "$800"
