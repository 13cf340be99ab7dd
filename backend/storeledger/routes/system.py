# backend/storeledger/routes/system.py
"""
System health endpoint.

Reports database connectivity and the size of the loaded ledger.
"""

import time

from flask import Blueprint, current_app

from ..extensions import db

system_bp = Blueprint("system", __name__)


def check_database_health() -> dict:
    """
    Check database connectivity.

    Returns dict with status and latency.
    """
    start_time = time.time()
    try:
        db.session.execute(db.text("SELECT 1"))
        elapsed_ms = (time.time() - start_time) * 1000
        return {"status": "healthy", "latency_ms": round(elapsed_ms, 2)}
    except Exception:
        elapsed_ms = (time.time() - start_time) * 1000
        current_app.logger.exception("Database health check failed")
        return {
            "status": "unhealthy",
            "latency_ms": round(elapsed_ms, 2),
            "error": "Database error",
        }


@system_bp.get("/api/health")
def health():
    database = check_database_health()
    store = current_app.extensions["storeledger"]
    body = {
        "status": "ok" if database["status"] == "healthy" else "degraded",
        "database": database,
        "ledger": {
            "products": len(store.products),
            "sales": len(store.sales),
            "receivables": len(store.receivables),
            "payables": len(store.payables),
        },
    }
    return body, 200 if database["status"] == "healthy" else 503
