import math
import logging
from flask import Flask, request, jsonify
from flask_cors import CORS

import config
from flood_engine import (
    PRESET_SCENARIOS,
    Present,
    SimulationParameters,
    SoilAbsorption,
    aggregate,
    classify,
    recommend,
    risk_color,
    simulate_parameters,
)
from flood_engine.simulator import DEFAULT_FOREST_COVER, DEFAULT_RAINFALL_MM, DEFAULT_SOIL_ABSORPTION
from integrations import fetch_sources_sequential
from utils.api_logging import ApiCallLogger
from utils.parallel_api_executor import fetch_sources_sync

log = logging.getLogger('werkzeug')
log.setLevel(logging.ERROR)

logger = logging.getLogger(__name__)
logging.basicConfig(level=getattr(logging, config.LOG_LEVEL, logging.INFO))

# Injected into the fetch layer; the flood core never logs
api_logger = ApiCallLogger(logging.getLogger("flood.api"))

# --- Flask App Initialization ---
app = Flask(__name__)

CORS(app, resources={r"/*": {
    "origins": config.ALLOWED_ORIGINS,
    "methods": ["GET", "POST", "OPTIONS"],
    "allow_headers": ["Content-Type", "Authorization", "Accept"]
}})


class BadRequest(ValueError):
    pass


def _parse_number(raw, name, default=None):
    if raw is None or raw == "":
        if default is None:
            raise BadRequest(f"Missing {name}.")
        return default
    if isinstance(raw, bool):
        raise BadRequest(f"{name} must be a number.")
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise BadRequest(f"{name} must be a number.")
    if not math.isfinite(value):
        raise BadRequest(f"{name} must be a finite number.")
    return value


def _parse_coordinates(lat_raw, lng_raw):
    if not lat_raw or not lng_raw:
        raise BadRequest("Missing latitude or longitude in query parameters.")
    lat = _parse_number(lat_raw, "latitude")
    lng = _parse_number(lng_raw, "longitude")
    if not -90 <= lat <= 90 or not -180 <= lng <= 180:
        raise BadRequest("Latitude must be within ±90 and longitude within ±180.")
    return lat, lng


def _fetch_sources(lat, lng):
    if config.PARALLEL_FETCH:
        return fetch_sources_sync(lat, lng, api_logger)
    return fetch_sources_sequential(lat, lng, api_logger)


def _source_status(source):
    return "present" if isinstance(source, Present) else "absent"


def predict_flood(lat, lng):
    """Live path: fetch -> aggregate -> classify."""
    weather, hydrology = _fetch_sources(lat, lng)
    snapshot = aggregate(weather, hydrology)
    assessment = classify(snapshot)

    prediction = {
        "elevation": snapshot.elevation,
        "precipitation_sum_today": str(snapshot.precipitation_sum),
        "soil_moisture_surface": str(snapshot.soil_moisture_surface),
        "river_discharge_mean": str(snapshot.river_discharge_mean),
        "snapshot": snapshot.to_dict(),
        "sources": {
            "weather": _source_status(weather),
            "hydrology": _source_status(hydrology),
        },
    }
    prediction.update(assessment.to_dict())
    return prediction


def run_simulation(params):
    """Hypothetical path: simulate -> recommend."""
    result = simulate_parameters(params)
    return {
        "parameters": params.to_dict(),
        "result": result.to_dict(),
        "risk_color": risk_color(result.risk_level),
        "recommendations": [r.to_dict() for r in recommend(result)],
    }


# --- 1. Health Check Route ---
@app.route('/health', methods=['GET'])
def health():
    return jsonify({"status": "healthy"}), 200


@app.route('/api/predict-flood', methods=['GET', 'OPTIONS'])
def predict_flood_route():
    if request.method == 'OPTIONS':
        return jsonify({"status": "ok"}), 200

    lat_raw = request.args.get('latitude', '')
    lng_raw = request.args.get('longitude', '')
    try:
        lat, lng = _parse_coordinates(lat_raw, lng_raw)
    except BadRequest as e:
        return jsonify({"lat": lat_raw, "lng": lng_raw, "error": str(e)}), 400

    try:
        prediction = predict_flood(lat, lng)
        return jsonify({"flood_prediction": prediction, "lat": lat, "lng": lng})
    except Exception as e:
        logger.exception(f"Flood prediction error: {e}")
        return jsonify({"error": "Failed to compute flood prediction."}), 500


@app.route('/api/simulate', methods=['POST', 'OPTIONS'])
def simulate_route():
    if request.method == 'OPTIONS':
        return jsonify({"status": "ok"}), 200

    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    try:
        params = SimulationParameters(
            forest_cover_percent=_parse_number(
                data.get('forest_cover'), "forest_cover", DEFAULT_FOREST_COVER),
            rainfall_mm=_parse_number(
                data.get('rainfall'), "rainfall", DEFAULT_RAINFALL_MM),
            soil_absorption=SoilAbsorption.parse(
                data.get('soil_absorption', DEFAULT_SOIL_ABSORPTION)),
        )
    except BadRequest as e:
        return jsonify({"error": str(e)}), 400

    try:
        return jsonify(run_simulation(params))
    except Exception as e:
        logger.exception(f"Simulation error: {e}")
        return jsonify({"error": "Failed to run simulation."}), 500


@app.route('/api/simulate/scenarios', methods=['GET'])
def scenarios_route():
    scenarios = []
    for preset in PRESET_SCENARIOS:
        entry = {k: v for k, v in preset.items() if k != "parameters"}
        entry.update(run_simulation(preset["parameters"]))
        scenarios.append(entry)
    return jsonify({"scenarios": scenarios})


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=config.PORT)
