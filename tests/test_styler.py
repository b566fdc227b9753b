"""
Choropleth colours, rounding and popup text.
"""

import math

import pytest

from config import CATEGORY_PHRASES, MULTI_NEED_COLORS
from models import Feature
from styler import (
    FormatError,
    category_phrase,
    click_detail,
    color_for,
    hover_summary,
    legend_entries,
    round_to,
    style_for,
)


class TestColorFor:
    @pytest.mark.parametrize(
        "value, bucket",
        [
            (-1.0, 0),
            (0.5, 1),
            (1.1, 2),
            (1.2, 3),
            (1.45, 4),
            (1.6, 5),
            (1.7, 6),
            (1.9, 7),
            (2.2, 8),
            (3.0, 8),
        ],
    )
    def test_bucket_interiors(self, value, bucket):
        assert color_for(value) == MULTI_NEED_COLORS[bucket]

    @pytest.mark.parametrize(
        "value, bucket",
        [(0, 1), (1.0642, 2), (1.1628, 3), (1.3778, 4), (1.5574, 5), (1.6431, 6), (1.8035, 7), (2.1022, 8)],
    )
    def test_break_takes_bucket_above(self, value, bucket):
        assert color_for(value) == MULTI_NEED_COLORS[bucket]

    def test_just_below_break_takes_bucket_below(self):
        assert color_for(1.0641) == MULTI_NEED_COLORS[1]

    def test_unbounded_at_both_ends(self):
        assert color_for(-100) == MULTI_NEED_COLORS[0]
        assert color_for(10) == MULTI_NEED_COLORS[-1]
        assert color_for(1e6) == MULTI_NEED_COLORS[-1]

    def test_low_is_blue_high_is_red(self):
        assert color_for(0.5) == "#4393c3"
        assert color_for(5) == "#b2182b"

    def test_nan_raises(self):
        with pytest.raises(FormatError):
            color_for(float("nan"))


class TestRoundTo:
    def test_rounds_on_decimal_digits(self):
        assert round_to(1.0005, 3) == 1.001
        assert round_to(1.2345, 2) == 1.23
        assert round_to(1.647, 1) == 1.6

    def test_halves_round_away_from_zero(self):
        assert round_to(2.5, 0) == 3.0
        assert round_to(-2.5, 0) == -3.0

    @pytest.mark.parametrize("value", [0.0, 1.0642, 1.06419, 2.10225, -0.1235, 15.000000000000002, 123456.7891])
    def test_idempotent(self, value):
        once = round_to(value, 3)
        assert round_to(once, 3) == once

    def test_nan_propagates(self):
        assert math.isnan(round_to(float("nan"), 3))


class TestCategoryPhrase:
    @pytest.mark.parametrize("cat", [1, 2, 3, 4, 5])
    def test_known_categories(self, cat):
        assert category_phrase(cat) == CATEGORY_PHRASES[cat]
        assert category_phrase(cat)

    @pytest.mark.parametrize("cat", [0, 6, -1, None, "3", True])
    def test_unknown_categories_are_empty(self, cat):
        assert category_phrase(cat) == ""

    def test_has_exactly_5_phrases(self):
        assert len(CATEGORY_PHRASES) == 5


class TestStyleFor:
    def test_fixed_style_fields(self, reference_feature):
        style = style_for(reference_feature)
        assert style.fill_opacity == 0.35
        assert style.outline_color == "white"
        assert style.outline_weight == 2
        assert style.outline_opacity == 1
        assert style.interactive is True

    def test_fill_matches_rounded_value(self):
        # 1.0643 is above the 1.0642 break but displays as 1.064
        feature = Feature(LGA="Edge", MultiNeed=1.0643)
        assert color_for(1.0643) == MULTI_NEED_COLORS[2]
        assert style_for(feature).fill_color == MULTI_NEED_COLORS[1]

    def test_numeric_string_is_coerced(self):
        assert style_for(Feature(LGA="S", MultiNeed="2.5")).fill_color == MULTI_NEED_COLORS[-1]

    @pytest.mark.parametrize("value", [None, "n/a", [1.2]])
    def test_bad_multi_need_raises(self, value):
        with pytest.raises(FormatError):
            style_for(Feature(LGA="Bad", MultiNeed=value))

    def test_leaflet_options(self, reference_feature):
        opts = style_for(reference_feature).to_leaflet()
        assert opts == {
            "color": "white",
            "weight": 2,
            "opacity": 1,
            "fillOpacity": 0.35,
            "fillColor": MULTI_NEED_COLORS[6],
            "interactive": True,
        }


class TestHoverSummary:
    def test_above_target(self):
        text = hover_summary(Feature(LGA="Test", Shortfall=0.05))
        assert "Tracking 5% above 2051 target" in text
        assert "Test" in text

    def test_below_target_keeps_sign(self):
        text = hover_summary(Feature(LGA="Test", Shortfall=-0.12))
        assert "Tracking -12% below 2051 target" in text

    def test_exactly_on_target_is_above(self):
        assert "Tracking 0% above 2051 target" in hover_summary(Feature(LGA="Test", Shortfall=0))

    def test_name_is_escaped(self):
        text = hover_summary(Feature(LGA="Hume & <Whittlesea>", Shortfall=0.1))
        assert "Hume &amp; &lt;Whittlesea&gt;" in text

    def test_missing_shortfall_raises(self):
        with pytest.raises(FormatError, match="Shortfall"):
            hover_summary(Feature(LGA="Test"))

    def test_missing_name_raises(self):
        with pytest.raises(FormatError):
            hover_summary(Feature(Shortfall=0.1))


class TestClickDetail:
    def test_reference_feature(self, reference_feature):
        text = click_detail(reference_feature)
        for expected in ["1,000", "1,235", "15%", "823", "500", "1.6x", CATEGORY_PHRASES[3]]:
            assert expected in text

    def test_additional_dwellings_rounded(self, reference_feature):
        text = click_detail(reference_feature)
        assert 'additional <span class="dynamic-attribute">235</span> dwellings' in text
        assert 'target: <span class="dynamic-attribute">1,235</span>' in text

    def test_large_figures_are_grouped(self, reference_feature):
        feature = Feature(**{**reference_feature.properties(), "Curr": 123456, "Add": 65432.4})
        text = click_detail(feature)
        assert "123,456" in text
        assert "188,888" in text
        assert "65,432" in text

    def test_unknown_category_leaves_phrase_empty(self, reference_feature):
        feature = Feature(**{**reference_feature.properties(), "Cat": 9})
        assert '<span class="dynamic-attribute"></span> 2051 target' in click_detail(feature)

    @pytest.mark.parametrize("name", ["Curr", "Add", "PcInc", "ReqYearly", "HistYearly", "MultiNeed"])
    def test_missing_figure_raises(self, reference_feature, name):
        feature = Feature(**{**reference_feature.properties(), name: None})
        with pytest.raises(FormatError, match=name):
            click_detail(feature)

    def test_non_numeric_figure_raises(self, reference_feature):
        feature = Feature(**{**reference_feature.properties(), "Curr": "lots"})
        with pytest.raises(FormatError):
            click_detail(feature)

    def test_out_of_range_integer_raises(self, reference_feature):
        feature = Feature(**{**reference_feature.properties(), "Curr": 10**400})
        with pytest.raises(FormatError, match="Curr"):
            click_detail(feature)


class TestLegendEntries:
    def test_one_entry_per_colour(self):
        entries = legend_entries()
        assert [color for _, color in entries] == MULTI_NEED_COLORS

    def test_labels_cover_both_ends(self):
        entries = legend_entries()
        assert entries[0][0] == "below 0x"
        assert entries[1][0] == "0x to 1.0642x"
        assert entries[-1][0] == "2.1022x and above"
