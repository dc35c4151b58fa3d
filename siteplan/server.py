"""Flask application exposing the editing session to the map UI."""

import io
import logging

from flask import Flask, jsonify, request, send_file

from .dxf_builder import write_dxf
from .paper import GeoBoundingBox
from .session import FetchInProgress, Session

logger = logging.getLogger(__name__)

app = Flask(__name__)

# One session per server process; the UI is single-user.
session = Session()

EXPORT_FILENAME = "siteplan-export.dxf"


@app.route("/api/state")
def get_state():
    return jsonify(session.summary())


@app.route("/api/bbox", methods=["POST"])
def set_bbox():
    data = request.get_json(force=True)
    try:
        bbox = GeoBoundingBox.from_list(data["bbox"])
    except (KeyError, TypeError, ValueError) as exc:
        return jsonify({"error": f"Invalid parameters: {exc}"}), 400
    session.set_bbox(bbox)
    return jsonify({"bbox": bbox.as_list()})


@app.route("/api/center", methods=["POST"])
def center_bbox():
    data = request.get_json(force=True)
    try:
        lon = float(data["lon"])
        lat = float(data["lat"])
        bbox = session.recenter(lon, lat)
    except (KeyError, TypeError, ValueError) as exc:
        return jsonify({"error": f"Invalid parameters: {exc}"}), 400
    return jsonify({"bbox": bbox.as_list()})


@app.route("/api/paper", methods=["POST"])
def set_paper():
    data = request.get_json(force=True)
    try:
        scale = data.get("scale")
        bbox = session.update_paper(
            scale=int(scale) if scale is not None else None,
            paper_size=data.get("paper_size"),
            orientation=data.get("orientation"),
        )
    except (AttributeError, TypeError, ValueError) as exc:
        return jsonify({"error": f"Invalid parameters: {exc}"}), 400
    return jsonify({"bbox": bbox.as_list(), **session.summary()["paper"]})


@app.route("/api/categories", methods=["POST"])
def set_categories():
    data = request.get_json(force=True)
    categories = data.get("categories") if isinstance(data, dict) else None
    if not isinstance(categories, list):
        return jsonify({"error": "categories must be a list"}), 400
    try:
        selected = session.set_categories(categories)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    return jsonify({"categories": list(selected)})


@app.route("/api/fetch", methods=["POST"])
def fetch():
    try:
        ok = session.fetch()
    except FetchInProgress as exc:
        return jsonify({"error": str(exc)}), 409
    if not ok:
        return jsonify({"error": session.error}), 502
    return jsonify(session.summary())


@app.route("/api/preview")
def preview():
    return jsonify(session.preview())


@app.route("/api/export", methods=["POST"])
def export():
    result = session.export()
    logger.info("Exporting %d drawing instructions (%gx%g mm)",
                len(result.instructions), result.page.width, result.page.height)

    dxf_stream = io.StringIO()
    write_dxf(result, dxf_stream)
    dxf_bytes = dxf_stream.getvalue().encode("utf-8")

    return send_file(
        io.BytesIO(dxf_bytes),
        download_name=EXPORT_FILENAME,
        as_attachment=True,
        mimetype="application/dxf",
    )
