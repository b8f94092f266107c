# astrocal/main.py
from __future__ import annotations

import logging
import os
import traceback
from time import perf_counter
from typing import Any, Dict, Optional

from flask import Flask, Response, jsonify, request
from flask_cors import CORS
from prometheus_client import CONTENT_TYPE_LATEST, REGISTRY, generate_latest
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix

from astrocal.api.routes import api as _routes_bp
from astrocal.utils.config import build_engine_config, load_config
from astrocal.utils.metrics import GAUGE_APP_UP, MET_REQUESTS, REQ_LATENCY, seed_routes
from astrocal.version import VERSION

_SEEDED_ROUTES = (
    "/", "/health", "/healthz", "/metrics",
    "/api/health", "/api/config",
    "/api/calendar/day-count", "/api/calendar/civil", "/api/calendar/month",
    "/api/calendar/add-days", "/api/calendar/now",
    "/api/degrees/normalize", "/api/degrees/polar", "/api/degrees/compare", "/api/degrees/dms",
    "/api/rules/orb", "/api/rules/dignity",
)

# ───────────────────────── helpers: logging & errors ─────────────────────────
def _configure_logging(app: Flask) -> None:
    gerr = logging.getLogger("gunicorn.error")
    if gerr.handlers:
        app.logger.handlers = gerr.handlers
        app.logger.setLevel(gerr.level)
    else:
        logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"))

def _register_errors(app: Flask) -> None:
    @app.errorhandler(HTTPException)
    def _http(e: HTTPException):
        app.logger.warning("HTTP %s at %s %s: %s", e.code, request.method, request.path, e.description)
        return jsonify(
            ok=False,
            error="http_error",
            code=e.code,
            name=e.name,
            message=e.description,
            path=request.path,
        ), e.code

    @app.errorhandler(Exception)
    def _any(e: Exception):
        tb = traceback.format_exc()
        app.logger.error("UNHANDLED %s at %s %s\n%s", type(e).__name__, request.method, request.path, tb)
        return jsonify(
            ok=False,
            error="internal_error",
            type=type(e).__name__,
            message=str(e),
            path=request.path,
        ), 500

# ───────────────────────── health ─────────────────────────
def _register_health(app: Flask) -> None:
    @app.route("/", methods=["GET"])
    def root():
        return jsonify(ok=True, service="astrocal", version=VERSION, health="/health"), 200

    @app.route("/health", methods=["GET"])
    @app.route("/healthz", methods=["GET"])
    def health():
        return jsonify(ok=True, status="ok"), 200

def _metrics_auth_ok() -> bool:
    auth = request.authorization
    user = os.getenv("METRICS_USER", "")
    pw = os.getenv("METRICS_PASS", "")
    return bool(
        auth and auth.type == "basic" and auth.username == user and auth.password == pw and user and pw
    )

# ───────────────────────── app factory ─────────────────────────
def create_app(config: Optional[Dict[str, Any]] = None) -> Flask:
    """
    Build the Flask app. ``config`` (already-parsed mapping) bypasses the YAML
    loader; tests use it to inject alternate reforms or rule tables.
    """
    app = Flask(__name__)
    app.json.sort_keys = False
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1)  # type: ignore

    _configure_logging(app)

    cfg = config if config is not None else load_config()
    reform, rules = build_engine_config(cfg)
    app.config["ASTROCAL_REFORM"] = reform
    app.config["ASTROCAL_RULES"] = rules

    seed_routes(_SEEDED_ROUTES)
    GAUGE_APP_UP.set(1.0)

    @app.before_request
    def _before():
        p = request.path or ""
        if p.startswith("/api/") or p in ("/", "/health", "/healthz", "/metrics"):
            MET_REQUESTS.labels(route=p).inc()
            request._t0 = perf_counter()

    @app.after_request
    def _after(resp):
        p = request.path or ""
        t0 = getattr(request, "_t0", None)
        if t0 is not None and p != "/metrics":
            REQ_LATENCY.labels(route=p).observe(perf_counter() - t0)
        return resp

    _register_health(app)
    _register_errors(app)
    app.register_blueprint(_routes_bp)

    @app.get("/__debug/routes")
    def __debug_routes():
        rules_out = []
        for r in app.url_map.iter_rules():
            methods = sorted(m for m in (r.methods or []) if m not in ("HEAD", "OPTIONS"))
            rules_out.append({"rule": str(r), "endpoint": r.endpoint, "methods": methods})
        rules_out.sort(key=lambda x: x["rule"])
        return jsonify({"count": len(rules_out), "rules": rules_out}), 200

    # /metrics (Basic Auth)
    @app.route("/metrics", methods=["GET"])
    def metrics_endpoint():
        if not _metrics_auth_ok():
            return Response("Unauthorized", 401, {"WWW-Authenticate": 'Basic realm="metrics"'})
        GAUGE_APP_UP.set(1.0)
        data = generate_latest(REGISTRY)
        return Response(data, mimetype=CONTENT_TYPE_LATEST)

    # CORS for browser UIs
    allowed_origin = os.environ.get("CORS_ALLOW_ORIGIN") or "*"
    CORS(
        app,
        resources={r"/.*": {"origins": allowed_origin}},
        supports_credentials=False,
        methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        max_age=600,
    )

    app.logger.info(
        "App initialized; version=%s; reform=%04d-%02d-%02d/%02d; %d aspects, %d classified bodies",
        VERSION, reform.year, reform.month, reform.last_old_day, reform.first_new_day,
        len(rules.aspect_orbs), len(rules.body_orb_caps),
    )
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=int(os.environ.get("PORT", 5000)))
