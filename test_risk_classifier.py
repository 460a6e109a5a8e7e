"""
Threshold ladders and the summary precedence of the live-data classifier.
"""

from flood_engine.classifier import (
    FloodPotential,
    Severity,
    classify,
    classify_drainage,
    classify_rain,
    classify_river,
    classify_soil,
)
from flood_engine.snapshot import EnvironmentalSnapshot, Measurement, default_snapshot


def snapshot(elevation=120.0, rain=5.0, soil=0.20, discharge=30.0, hour=9):
    return EnvironmentalSnapshot(
        elevation=elevation,
        precipitation_sum=Measurement(rain, "mm"),
        soil_moisture_surface=Measurement(soil, "m³/m³"),
        river_discharge_mean=Measurement(discharge, "m³/s"),
        hour_of_day=hour,
    )


def test_calm_conditions_are_baseline_low():
    a = classify(snapshot())
    assert all(v.severity is Severity.NORMAL for _, v in a.verdicts())
    assert a.overall_flood_potential.level is FloodPotential.LOW
    assert "normal range" in a.overall_flood_potential.text
    assert a.hour_of_day == 9


def test_any_severe_escalates_to_high():
    a = classify(snapshot(soil=0.45))
    assert a.soil_condition.severity is Severity.SEVERE
    assert a.overall_flood_potential.level is FloodPotential.HIGH
    assert "soil moisture" in a.overall_flood_potential.text


def test_moderate_weighted_majority():
    # river (1.5) + rain (1.5) out of 5.0
    a = classify(snapshot(rain=30.0, discharge=200.0))
    assert a.river_status.severity is Severity.MODERATE
    assert a.rain_analysis.severity is Severity.MODERATE
    assert a.overall_flood_potential.level is FloodPotential.MODERATE


def test_moderate_share_exactly_half_is_moderate():
    # drainage (1.0) + river (1.5) = 2.5 of 5.0
    a = classify(snapshot(elevation=5.0, rain=10.0, soil=0.10, discharge=150.0))
    assert a.drainage.severity is Severity.MODERATE
    assert a.overall_flood_potential.level is FloodPotential.MODERATE


def test_moderate_minority_stays_low_with_watch_note():
    a = classify(snapshot(soil=0.35))
    assert a.overall_flood_potential.level is FloodPotential.LOW
    assert "keep watching soil moisture" in a.overall_flood_potential.text


def test_soil_ladder():
    assert classify_soil(0.29).severity is Severity.NORMAL
    assert classify_soil(0.30).severity is Severity.MODERATE
    assert classify_soil(0.40).severity is Severity.SEVERE


def test_river_ladder():
    assert classify_river(99.9).severity is Severity.NORMAL
    assert classify_river(100).severity is Severity.MODERATE
    assert classify_river(500).severity is Severity.SEVERE


def test_rain_ladder_labels():
    assert classify_rain(0).label == "No rain"
    assert classify_rain(19.9).label == "Light rain"
    assert classify_rain(20).severity is Severity.MODERATE
    assert classify_rain(75).label == "Heavy rain"
    assert classify_rain(100).severity is Severity.SEVERE
    assert classify_rain(150).label == "Extreme rain"


def test_drainage_combines_elevation_and_rain():
    assert classify_drainage(3.0, 60.0).severity is Severity.SEVERE
    assert classify_drainage(3.0, 0.0).severity is Severity.MODERATE
    assert classify_drainage(-2.0, 10.0).severity is Severity.MODERATE
    assert classify_drainage(30.0, 60.0).label == "Strained"
    assert classify_drainage(30.0, 10.0).severity is Severity.NORMAL
    assert classify_drainage(400.0, 200.0).severity is Severity.NORMAL


def test_negative_readings_are_clamped_to_zero():
    assert classify_rain(-5.0) == classify_rain(0.0)
    assert classify_soil(-0.1) == classify_soil(0.0)
    assert classify_river(-1.0) == classify_river(0.0)
    a = classify(snapshot(rain=-10.0, soil=-1.0, discharge=-50.0))
    assert a.overall_flood_potential.level is FloodPotential.LOW


def test_classify_is_deterministic():
    s = snapshot(elevation=8.0, rain=65.0, soil=0.33, discharge=250.0)
    assert classify(s) == classify(s)
    assert classify(s).to_dict() == classify(s).to_dict()


def test_default_snapshot_classifies():
    a = classify(default_snapshot(0))
    # zero elevation reads as low-lying terrain
    assert a.drainage.severity is Severity.MODERATE
    assert a.overall_flood_potential.level is FloodPotential.LOW


def test_to_dict_shape():
    d = classify(snapshot(soil=0.45)).to_dict()
    assert set(d["result"]) == {"drainage", "soil_condition", "river_status", "rain_analysis"}
    assert d["result"]["soil_condition"]["severity"] == "severe"
    assert d["overall_flood_potential"]["level"] == "high"
