from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List, Optional

from flask import Blueprint, Flask, current_app, jsonify, render_template, request, session
from pydantic import ValidationError

from ..config import settings
from ..errors import ReactorModelError
from ..logs import get_logger
from ..reactors import Feed
from ..schemas import PFRIn, SimulationRequest, SimulationResponse, StageOut
from ..train import ReactorTrain
from .store import DatasheetStore

logger = get_logger(__name__)

bp = Blueprint("lab", __name__)

PAGES = ["theory", "procedure", "prequiz", "simulation", "postquiz", "video", "calculation"]
SESSION_KEY = "datasheet_id"


def _store() -> DatasheetStore:
    return current_app.extensions["datasheets"]


@bp.route("/")
def index():
    return render_template("index.html")


def _page_view(name: str):
    def view():
        return render_template(f"{name}.html")

    view.__name__ = name
    return view


for _name in PAGES:
    bp.add_url_rule(f"/{_name}", endpoint=_name, view_func=_page_view(_name))


def datasheet_rows(data: Dict[str, Any]) -> Optional[List[List[Any]]]:
    """Rows of (tau, Xa at T1, Xa at T2) when the payload has the lab's shape."""
    tau_data = data.get("tau_data")
    xa_data = data.get("Xa_data")
    if not isinstance(tau_data, list) or not isinstance(xa_data, list):
        return None
    if xa_data and all(isinstance(s, list) for s in xa_data):
        series = xa_data
    else:
        series = [xa_data]
    if any(len(s) != len(tau_data) for s in series):
        return None
    return [[tau] + [s[i] for s in series] for i, tau in enumerate(tau_data)]


@bp.route("/datasheet", methods=["GET"])
def show_datasheet():
    token = request.args.get("id") or session.get(SESSION_KEY)
    data = _store().get(token)
    if data is None:
        return render_template("datasheet_missing.html"), 404
    if not isinstance(data, dict):
        data = {"Xa_data": data}
    return render_template(
        "datasheet.html",
        tau_data=data.get("tau_data"),
        Xa_data=data.get("Xa_data"),
        temps=data.get("temps"),
        rows=datasheet_rows(data),
    )


@bp.route("/datasheet", methods=["POST"])
def post_datasheet():
    data = request.get_json(silent=True)
    if data is None:
        data = {
            key: values[0] if len(values) == 1 else values
            for key, values in request.form.to_dict(flat=False).items()
        }
    token = _store().put(data, session.get(SESSION_KEY))
    session[SESSION_KEY] = token
    logger.info("Stored datasheet %s", token)
    return jsonify({"id": token}), 201


@bp.route("/api/simulate", methods=["POST"])
def simulate():
    payload = SimulationRequest.model_validate(request.get_json(silent=True) or {})
    f = payload.feed
    train = ReactorTrain(
        feed=Feed.from_lph(f.fa, f.fb, f.na, f.nb),
        temperature=f.temperature,
        tau_min=payload.tau_min,
        tau_max=payload.tau_max,
    )
    for stage in payload.stages:
        if isinstance(stage, PFRIn):
            train.add_pfr(stage.diameter, stage.length)
        else:
            train.add_cstr(stage.volume)
    sheet = train.datasheet()
    response = SimulationResponse(
        Xa=train.xa,
        tau=train.tau,
        pipe=train.pipe(),
        stages=[StageOut(**asdict(s)) for s in train.stages],
        temps=train.temps,
        tau_data=sheet["tau_data"],
        Xa_data=sheet["Xa_data"],
    )
    return jsonify(response.model_dump())


@bp.app_errorhandler(ReactorModelError)
def handle_model_error(err: ReactorModelError):
    return jsonify({"error": str(err)}), 422


@bp.app_errorhandler(ValidationError)
def handle_validation_error(err: ValidationError):
    details = err.errors(include_url=False, include_context=False, include_input=False)
    return jsonify({"error": "Invalid simulation input", "details": details}), 422


def create_app(test_config: Optional[Dict[str, Any]] = None) -> Flask:
    app = Flask(__name__)
    app.config.update(
        SECRET_KEY=settings.secret_key,
        MAX_DATASHEETS=settings.max_datasheets,
    )
    if test_config:
        app.config.update(test_config)
    app.extensions["datasheets"] = DatasheetStore(app.config["MAX_DATASHEETS"])
    app.register_blueprint(bp)
    return app


if __name__ == "__main__":
    create_app().run(host=settings.host, port=settings.port)
