# app.py
import logging

from flask import Flask, jsonify, request

from main import run
from pipeline_notify import InvalidBatchError

logging.basicConfig(level=logging.INFO)
log = logging.getLogger("pipeline-notify-app")

app = Flask(__name__)


@app.get("/")
def health():
    return jsonify({"ok": True})


@app.post("/events")
def events():
    event = request.get_json(silent=True)
    try:
        delivered = run(event)
        return jsonify({"status": "ok", "records": delivered})
    except InvalidBatchError as e:
        log.warning("Rejected event: %s", e)
        return jsonify({"status": "invalid", "detail": str(e)}), 400
    except Exception as e:
        log.exception("Relay failed")
        # 500 so the upstream trigger can retry if configured
        return jsonify({"status": "error", "detail": str(e)}), 500


if __name__ == "__main__":
    # Local dev only; in production this runs behind gunicorn
    app.run(host="0.0.0.0", port=8080)
