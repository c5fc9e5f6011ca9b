# backend/phoneshop/__init__.py
from __future__ import annotations

import logging
import time

from flask import Flask, g, request

from .config import Config
from .extensions import db, migrate


def configure_logging(app: Flask) -> None:
    level = getattr(logging, app.config.get("LOG_LEVEL", "INFO"), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    app.logger.setLevel(level)


def create_app(config_overrides: dict | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    configure_logging(app)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)

    # Import models so Alembic can discover metadata reliably
    from . import models  # noqa: F401

    # Probes the SQL engine once; falls back to memory when unusable
    from .services.kv_store import kv
    kv.init_app(app)

    # Register blueprints
    from .routes.system import system_bp
    from .routes.resources import categories_bp, expenses_bp, customer_requests_bp, phone_stocks_bp
    from .routes.products import products_bp
    from .routes.sales import sales_bp
    from .routes.repairs import repairs_bp
    from .routes.customers import customers_bp, customer_transactions_bp
    from .routes.phone_sales import phone_sales_bp
    from .routes.reports import reports_bp

    blueprints = [
        system_bp,
        categories_bp,
        products_bp,
        sales_bp,
        repairs_bp,
        customers_bp,
        customer_transactions_bp,
        phone_sales_bp,
        phone_stocks_bp,
        expenses_bp,
        customer_requests_bp,
        reports_bp,
    ]

    # One route set, mounted once per configured prefix
    for index, prefix in enumerate(app.config["API_MOUNT_PREFIXES"]):
        for bp in blueprints:
            url_prefix = f"{prefix}{bp.url_prefix or ''}" or None
            name = bp.name if index == 0 else f"{bp.name}_{index}"
            app.register_blueprint(bp, url_prefix=url_prefix, name=name)

    @app.before_request
    def start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def add_cors_headers(response):
        response.headers["Access-Control-Allow-Origin"] = "*"
        response.headers["Access-Control-Allow-Headers"] = "Content-Type, Authorization"
        response.headers["Access-Control-Allow-Methods"] = "GET,POST,PUT,DELETE,OPTIONS"
        response.headers["Access-Control-Expose-Headers"] = "Content-Length"
        response.headers["Access-Control-Max-Age"] = "600"
        return response

    @app.after_request
    def log_request(response):
        if app.config.get("REQUEST_LOGGING"):
            started = g.get("request_started")
            elapsed_ms = (time.perf_counter() - started) * 1000 if started else 0.0
            app.logger.info("%s %s -> %s (%.1f ms)", request.method, request.path, response.status_code, elapsed_ms)
        return response

    # Register CLI commands
    from .cli import register_commands
    register_commands(app)

    return app
