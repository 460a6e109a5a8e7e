"""
What-if simulator: scenario outcomes, boundaries and invariants.
"""

from flood_engine.simulator import (
    PRESET_SCENARIOS,
    RiskLevel,
    SimulationParameters,
    SoilAbsorption,
    risk_color,
    risk_level_for,
    round_half_up,
    simulate,
    simulate_parameters,
)


def test_optimal_ecosystem_is_low_risk():
    r = simulate(80, 100, "high")
    assert r.flood_probability < 30
    assert r.flood_probability == 25
    assert r.risk_level is RiskLevel.LOW
    assert r.environmental_health == 75
    assert r.water_runoff == 24
    assert r.factors.to_dict() == {"forest_impact": 20, "rainfall_impact": 33, "soil_impact": 20}


def test_critical_condition_is_critical():
    r = simulate(20, 250, "low")
    assert r.flood_probability > 70
    assert r.flood_probability == 83
    assert r.risk_level is RiskLevel.CRITICAL
    assert r.water_runoff == 83
    assert r.factors.to_dict() == {"forest_impact": 80, "rainfall_impact": 83, "soil_impact": 90}


def test_typical_condition_is_high():
    r = simulate(50, 180, SoilAbsorption.MEDIUM)
    assert r.flood_probability == 54
    assert r.risk_level is RiskLevel.HIGH


def test_rainfall_reference_point():
    for forest in (0, 35, 100):
        r = simulate(forest, 300, "medium")
        assert r.factors.rainfall_impact == 100


def test_rainfall_above_reference_is_not_clamped():
    r = simulate(50, 450, "medium")
    assert r.factors.rainfall_impact == 150
    assert r.flood_probability <= 100


def test_runoff_can_exceed_one_hundred():
    r = simulate(0, 3000, "low")
    assert r.flood_probability == 100
    assert r.environmental_health == 0
    assert r.risk_level is RiskLevel.CRITICAL
    assert r.water_runoff == 368


def test_health_plus_probability_is_always_one_hundred():
    for forest in range(0, 101, 10):
        for rainfall in range(0, 601, 25):
            for soil in ("low", "medium", "high"):
                r = simulate(forest, rainfall, soil)
                assert r.environmental_health + r.flood_probability == 100
                assert 0 <= r.flood_probability <= 100


def test_boundary_probability_falls_into_lower_bucket():
    # 0 + 26 + 4 = 30
    r = simulate(100, 195, "high")
    assert r.flood_probability == 30
    assert r.risk_level is RiskLevel.LOW


def test_risk_level_steps():
    assert risk_level_for(0) is RiskLevel.LOW
    assert risk_level_for(30) is RiskLevel.LOW
    assert risk_level_for(31) is RiskLevel.MEDIUM
    assert risk_level_for(50) is RiskLevel.MEDIUM
    assert risk_level_for(51) is RiskLevel.HIGH
    assert risk_level_for(70) is RiskLevel.HIGH
    assert risk_level_for(71) is RiskLevel.CRITICAL


def test_unknown_soil_label_falls_back_to_medium():
    assert simulate(50, 150, "sandy") == simulate(50, 150, "medium")
    assert simulate(50, 150, None) == simulate(50, 150, SoilAbsorption.MEDIUM)
    assert SoilAbsorption.parse(" HIGH ") is SoilAbsorption.HIGH


def test_out_of_range_inputs_are_clamped():
    assert simulate(50, -100, "medium").factors.rainfall_impact == 0
    over = simulate(150, 0, "high")
    assert over.factors.forest_impact == 0
    assert over.flood_probability == 4
    assert simulate(-20, 0, "high") == simulate(0, 0, "high")


def test_simulate_is_pure():
    a = simulate(42, 137, "low")
    b = simulate(42, 137, "low")
    assert a == b
    assert a.to_dict() == b.to_dict()


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(0.5) == 1
    assert round_half_up(2.49) == 2


def test_risk_colors():
    assert risk_color(RiskLevel.LOW) == "#10b981"
    assert risk_color("medium") == "#f59e0b"
    assert risk_color(RiskLevel.HIGH) == "#ef4444"
    assert risk_color(RiskLevel.CRITICAL) == "#991b1b"
    assert risk_color("unknown") == "#10b981"


def test_presets_match_expected_levels():
    levels = {p["key"]: simulate_parameters(p["parameters"]).risk_level for p in PRESET_SCENARIOS}
    assert levels == {
        "optimal_ecosystem": RiskLevel.LOW,
        "critical_condition": RiskLevel.CRITICAL,
        "typical_condition": RiskLevel.HIGH,
    }


def test_default_parameters():
    params = SimulationParameters()
    assert params.to_dict() == {"forest_cover": 60.0, "rainfall": 150.0, "soil_absorption": "medium"}


def test_non_finite_rainfall_still_returns_a_result():
    r = simulate(50, float("inf"), "low")
    assert r.flood_probability == 100
    assert r.environmental_health == 0
    assert r.risk_level is RiskLevel.CRITICAL
    assert r.factors.rainfall_impact == 10000
    assert r.water_runoff == 3043
    assert simulate(50, float("nan"), "low") == simulate(50, 0, "low")
    assert simulate(float("nan"), 100, "high") == simulate(0, 100, "high")
