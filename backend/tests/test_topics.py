"""
Unit tests for topic naming and region/source normalization.
"""
import pytest

from backend.core.topics import (
    REGIONS,
    SOURCES,
    generate_topic,
    normalize_region,
    normalize_source,
    parse_topic,
)


# ============================================================================
# normalize_region
# ============================================================================

class TestNormalizeRegion:
    @pytest.mark.parametrize("region", REGIONS)
    def test_known_regions_pass_through(self, region):
        assert normalize_region(region) == region

    def test_lowercase(self):
        assert normalize_region("tr") == "TR"

    def test_mixed_case(self):
        assert normalize_region("LaTaM") == "LATAM"

    def test_none_defaults_to_eu(self):
        assert normalize_region(None) == "EU"

    def test_empty_defaults_to_eu(self):
        assert normalize_region("") == "EU"

    def test_unknown_defaults_to_eu(self):
        assert normalize_region("MARS") == "EU"

    def test_non_string_defaults_to_eu(self):
        assert normalize_region(42) == "EU"

    def test_no_trimming(self):
        assert normalize_region(" tr ") == "EU"


# ============================================================================
# normalize_source
# ============================================================================

class TestNormalizeSource:
    @pytest.mark.parametrize("source", SOURCES)
    def test_known_sources(self, source):
        assert normalize_source(source) == source

    def test_none_is_store(self):
        assert normalize_source(None) == "store"

    def test_unknown_is_store(self):
        assert normalize_source("market") == "store"

    def test_case_sensitive(self):
        assert normalize_source("Night") == "store"


# ============================================================================
# generate_topic / parse_topic
# ============================================================================

class TestTopics:
    def test_canonical_form(self):
        assert generate_topic("EU", "store", "prime-vandal") == "valohub/EU/store/prime-vandal"

    def test_deterministic(self):
        assert generate_topic("TR", "night", "x") == generate_topic("TR", "night", "x")

    def test_parse(self):
        assert parse_topic("valohub/KR/bundle/reaver") == ("KR", "bundle", "reaver")

    def test_parse_keeps_slashes_in_skin_id(self):
        topic = generate_topic("NA", "store", "weapons/reaver-vandal")
        assert parse_topic(topic) == ("NA", "store", "weapons/reaver-vandal")

    def test_parse_rejects_foreign_namespace(self):
        with pytest.raises(ValueError):
            parse_topic("other/EU/store/x")

    def test_parse_rejects_short_topic(self):
        with pytest.raises(ValueError):
            parse_topic("valohub/EU/store")
