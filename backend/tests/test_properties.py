"""
Tests for the property catalog, panels and rescaling formulas
"""

import pytest

from core.errors import UnknownPropertyError
from core.properties import (
    PANEL_LABELS,
    PANELS,
    PROPERTY_DEFINITIONS,
    Polarity,
    PropertyKind,
    get_properties_for_panel,
    get_property_by_id,
    list_properties,
    require_property,
)


class TestCatalog:

    def test_catalog_ids(self):
        ids = [p.id for p in PROPERTY_DEFINITIONS]
        assert ids == [
            "bbb", "caco2", "ppbr", "logp", "ames", "dili", "herg", "ld50",
            "ic50", "kd", "clinical_phase1", "clinical_phase2", "clinical_phase3",
        ]

    def test_ids_are_unique(self):
        ids = [p.id for p in list_properties()]
        assert len(ids) == len(set(ids))

    def test_lookup_known_property(self):
        prop = get_property_by_id("bbb")
        assert prop is not None
        assert prop.kind == PropertyKind.CATEGORICAL
        assert prop.label_phrase("A") == "Does not cross"
        assert prop.label_phrase("B") == "Crosses BBB"

    def test_lookup_unknown_property_returns_none(self):
        assert get_property_by_id("foo") is None

    def test_require_unknown_property_raises(self):
        with pytest.raises(UnknownPropertyError, match="Unknown property: foo"):
            require_property("foo")

    def test_categorical_properties_carry_labels(self):
        for prop in PROPERTY_DEFINITIONS:
            if prop.is_categorical:
                assert set(prop.labels) == {"A", "B"}, prop.id

    def test_binding_properties_require_target(self):
        assert [p.id for p in PROPERTY_DEFINITIONS if p.requires_target] == ["ic50", "kd"]

    def test_definitions_are_immutable(self):
        prop = get_property_by_id("logp")
        with pytest.raises(Exception):
            prop.name = "Changed"

    def test_to_dict_uses_wire_names(self):
        data = get_property_by_id("caco2").to_dict()
        assert data["shortName"]
        assert data["type"] == "continuous"
        assert data["unit"] == "cm/s (log)"
        assert "labels" not in data


class TestPolarity:

    @pytest.mark.parametrize("property_id", ["bbb", "clinical_phase1", "clinical_phase2", "clinical_phase3"])
    def test_second_outcome_favorable(self, property_id):
        assert get_property_by_id(property_id).polarity == Polarity.SECOND_FAVORABLE

    @pytest.mark.parametrize("property_id", ["ames", "dili", "herg"])
    def test_second_outcome_unfavorable(self, property_id):
        assert get_property_by_id(property_id).polarity == Polarity.SECOND_UNFAVORABLE

    def test_continuous_properties_have_no_polarity(self):
        for prop in PROPERTY_DEFINITIONS:
            if prop.is_continuous:
                assert prop.polarity == Polarity.NONE, prop.id


class TestRescaling:

    @pytest.mark.parametrize("property_id,raw,expected", [
        ("logp", 500, 3.0),
        ("logp", 0, -2.0),
        ("ppbr", 500, 50.0),
        ("caco2", 500, -0.5),
        ("ld50", 300, 100.0),
        ("ic50", 250, 250.0),
        ("kd", 1000, 1000.0),
    ])
    def test_formula(self, property_id, raw, expected):
        prop = get_property_by_id(property_id)
        assert prop.rescaling.apply(raw) == pytest.approx(expected)


class TestPanels:

    def test_panel_order_is_preserved(self):
        assert [p.id for p in get_properties_for_panel("toxicity")] == ["ames", "dili", "herg", "ld50"]

    def test_unknown_panel_is_empty(self):
        assert get_properties_for_panel("nope") == []

    def test_unknown_ids_in_panel_are_dropped(self, monkeypatch):
        monkeypatch.setitem(PANELS, "mixed", ["bbb", "missing", "logp"])
        assert [p.id for p in get_properties_for_panel("mixed")] == ["bbb", "logp"]

    def test_every_panel_has_a_label(self):
        assert set(PANELS) == set(PANEL_LABELS)
        assert PANEL_LABELS["admet"] == "General ADMET"

    def test_every_panel_resolves_fully(self):
        for panel_id, ids in PANELS.items():
            assert len(get_properties_for_panel(panel_id)) == len(ids)
