# backend/storeledger/__init__.py
from __future__ import annotations

import logging

from flask import Flask

from .config import Config
from .extensions import db, migrate


def create_app(config_overrides: dict | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    logging.basicConfig(level=app.config["LOG_LEVEL"])
    app.logger.setLevel(app.config["LOG_LEVEL"])

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)

    # Import models so Alembic can discover metadata reliably
    from . import models  # noqa: F401

    # One ledger engine per app; state is loaded lazily on first use
    from .services.ledger_store import LedgerStore
    from .services.sql_repository import SqlLedgerRepository

    app.extensions["storeledger"] = LedgerStore(
        SqlLedgerRepository(),
        payable_term_days=app.config["PAYABLE_TERM_DAYS"],
    )

    # Register blueprints
    from .routes.system import system_bp
    from .routes.catalog import catalog_bp
    from .routes.customers import customers_bp
    from .routes.sales import sales_bp
    from .routes.stock import stock_bp
    from .routes.finance import finance_bp
    from .routes.purchase_orders import purchase_orders_bp

    app.register_blueprint(system_bp)
    app.register_blueprint(catalog_bp)
    app.register_blueprint(customers_bp)
    app.register_blueprint(sales_bp)
    app.register_blueprint(stock_bp)
    app.register_blueprint(finance_bp)
    app.register_blueprint(purchase_orders_bp)

    # Register CLI commands
    from .cli import register_commands
    register_commands(app)

    return app
