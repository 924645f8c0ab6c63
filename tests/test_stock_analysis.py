"""Tests for storage bin analysis."""

import pytest

from stockcheck.parsers.inventory_csv import read_inventory_text
from stockcheck.services.stock_analysis import (
    BinUsage,
    analyze_bins,
    extract_bin_location,
    format_bin_analysis,
    location_sort_key,
    sort_bins,
)


class TestExtractBinLocation:
    def test_plain_bin(self) -> None:
        assert extract_bin_location("A-0-1-4") == "A-0-1-4"

    def test_slot_suffix_dropped(self) -> None:
        assert extract_bin_location("A-0-1-4-L0") == "A-0-1-4"
        assert extract_bin_location("C-1-2-10-R") == "C-1-2-10"

    def test_too_few_parts(self) -> None:
        assert extract_bin_location("A-0-1") is None

    def test_fourth_part_not_numeric(self) -> None:
        assert extract_bin_location("A-0-1-X") is None

    def test_blank(self) -> None:
        assert extract_bin_location(None) is None
        assert extract_bin_location("   ") is None


class TestLocationSortKey:
    def test_numeric_parts(self) -> None:
        assert location_sort_key("A-0-1-2") < location_sort_key("A-0-1-10")

    def test_shelf_letters(self) -> None:
        assert location_sort_key("A-9-9-9") < location_sort_key("B-0-0-1")
        assert location_sort_key("C-0-0-1") < location_sort_key("D-0-0-1")

    def test_blank_sorts_last(self) -> None:
        assert location_sort_key("D-9-9-99") < location_sort_key(None)
        assert location_sort_key("") == location_sort_key(None)

    def test_slot_suffix_ignored(self) -> None:
        assert location_sort_key("A-0-1-4-L0") == location_sort_key("A-0-1-4")


class TestAnalyzeBins:
    def test_sample_inventory(self, sample_inventory_csv: str) -> None:
        listings = read_inventory_text(sample_inventory_csv).listings

        analysis = analyze_bins(listings, min_free_slots=1)

        assert analysis.capacity == 60
        assert analysis.bins == [
            BinUsage(location="A-0-1-4", cards=2, capacity=60),
            BinUsage(location="A-0-1-10", cards=1, capacity=60),
            BinUsage(location="B-0-0-1", cards=3, capacity=60),
        ]

    def test_slots_share_bin(self, make_listing) -> None:
        listings = [
            make_listing("Opt", 10, location="A-0-0-1-L0"),
            make_listing("Shock", 5, location="A-0-0-1-R"),
        ]

        analysis = analyze_bins(listings, min_free_slots=0, capacity=20)

        assert analysis.bins == [BinUsage(location="A-0-0-1", cards=15, capacity=20)]
        assert analysis.bins[0].free_slots == 5

    def test_full_bins_filtered(self, make_listing) -> None:
        listings = [
            make_listing("Opt", 58, location="A-0-0-1"),
            make_listing("Shock", 10, location="A-0-0-2"),
        ]

        analysis = analyze_bins(listings, min_free_slots=5)

        assert [usage.location for usage in analysis.bins] == ["A-0-0-2"]

    def test_unlocated_listings_ignored(self, make_listing) -> None:
        listings = [make_listing("Opt", 5), make_listing("Shock", 5, location="bulk box")]

        assert analyze_bins(listings, min_free_slots=0).bins == []

    def test_logs_summary(self, make_listing, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level("INFO", logger="stockcheck.services.stock_analysis"):
            analyze_bins([make_listing("Opt", 1, location="A-0-0-1")], min_free_slots=1)

        assert "bin_analysis_complete" in caplog.text


class TestSortBins:
    def test_free_slots_first(self, make_listing) -> None:
        listings = [
            make_listing("Opt", 30, location="A-0-0-1"),
            make_listing("Opt", 10, location="B-0-0-1"),
            make_listing("Opt", 10, location="A-0-0-2"),
        ]
        analysis = analyze_bins(listings, min_free_slots=1)

        ordered = sort_bins(analysis, "free_slots")

        assert [usage.location for usage in ordered] == ["A-0-0-2", "B-0-0-1", "A-0-0-1"]

    def test_location_order(self, make_listing) -> None:
        listings = [
            make_listing("Opt", 30, location="B-0-0-1"),
            make_listing("Opt", 10, location="A-0-0-1"),
        ]
        analysis = analyze_bins(listings, min_free_slots=1)

        ordered = sort_bins(analysis, "location")

        assert [usage.location for usage in ordered] == ["A-0-0-1", "B-0-0-1"]


class TestFormatBinAnalysis:
    def test_text(self, make_listing) -> None:
        analysis = analyze_bins([make_listing("Opt", 12, location="A-0-0-1")], min_free_slots=1)

        lines = format_bin_analysis(analysis).splitlines()

        assert lines[0] == "Bin Analysis (Maximum Capacity per Bin: 60 cards)"
        assert lines[-1] == "A-0-0-1: 12 cards (48 slots free)"
