from __future__ import annotations
from typing import Any, Dict
import logging

from flask import Flask, request, jsonify, Response

from simulator.config.env import get_log_config, get_server_config
from simulator.kpi.parameters import DEFAULT_PARAMETERS, TAX_RATE_CHOICES, BusinessParameters, InvalidInput
from simulator.levers.scenario import Comparison, simulate
from simulator.levers.toggles import LeverToggles
from simulator.exports.writers import export_filename, write_comparison_csv
from simulator.exports.reports import assumptions_md, impact_summary_md

logger = logging.getLogger(__name__)

app = Flask(__name__)


def _object(payload: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = payload.get(key, {})
    if value is None:
        value = {}
    if not isinstance(value, dict):
        raise InvalidInput(f"{key} must be an object")
    return value


def _comparison_from_request() -> Comparison:
    payload = request.get_json(force=True, silent=True)
    if payload is None:
        if request.get_data():
            raise InvalidInput("request body must be valid JSON")
        payload = {}
    if not isinstance(payload, dict):
        raise InvalidInput("request body must be a JSON object")
    params = BusinessParameters.from_mapping(_object(payload, "parameters"))
    toggles = LeverToggles.from_mapping(_object(payload, "levers"))
    return simulate(params, toggles)


@app.errorhandler(InvalidInput)
def _invalid_input(e: InvalidInput):
    logger.warning("rejected input on %s: %s", request.path, e)
    return jsonify({'error': str(e)}), 400


@app.get('/defaults')
def get_defaults():
    return jsonify({
        'parameters': DEFAULT_PARAMETERS.to_dict(),
        'levers': LeverToggles().to_dict(),
        'tax_rate_choices': list(TAX_RATE_CHOICES),
    })


@app.post('/simulate')
def post_simulate():
    c = _comparison_from_request()
    logger.info("simulate: ebit %.0f -> %.0f", c.base.ebit, c.tuned.ebit)
    body = c.to_dict()
    return jsonify({
        'base': body['base'],
        'tuned': body['tuned'],
        'adjusted_parameters': body['adjusted_parameters'],
        'deltas': body['deltas'],
    })


@app.post('/export')
def post_export():
    c = _comparison_from_request()
    name = export_filename()
    logger.info("export: %s", name)
    return Response(write_comparison_csv(c), mimetype='text/csv', headers={
        'Content-Disposition': f'attachment; filename="{name}"'
    })


@app.post('/report')
def post_report():
    c = _comparison_from_request()
    logger.info("report: roi %.4f -> %.4f", c.base.roi, c.tuned.roi)
    body = impact_summary_md(c) + "\n" + assumptions_md(c.parameters, c.toggles)
    return Response(body, mimetype='text/markdown')


if __name__ == '__main__':
    logging.basicConfig(level=get_log_config().level)
    cfg = get_server_config()
    app.run(host=cfg.host, port=cfg.port)
