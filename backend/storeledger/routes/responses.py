# Overview: Shared helpers that turn engine Results into JSON responses.

from __future__ import annotations

from flask import current_app, jsonify, request

from ..services.ledger_store import LedgerStore
from ..services.results import Result

STATUS_BY_KIND = {
    "NotFoundError": 404,
    "DuplicateError": 409,
}


def get_ledger() -> LedgerStore:
    """The app's LedgerStore, loaded from the database on first access."""
    store = current_app.extensions["storeledger"]
    store.ensure_loaded()
    return store


def json_object() -> dict | None:
    """Request body as a dict ({} when absent); None when it is not a JSON object."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    return data if isinstance(data, dict) else None


def invalid_body():
    return jsonify({"error": "Request body must be a JSON object.", "kind": "ValidationError"}), 400


def error_response(result: Result):
    return jsonify(result.to_dict()), STATUS_BY_KIND.get(result.kind, 400)


def result_response(result: Result, key: str, status: int = 200):
    """
    Success -> {key: serialized value}; failure -> {"error", "kind"} with
    404 for NotFoundError, 409 for DuplicateError and 400 otherwise.
    """
    if not result.ok:
        return error_response(result)
    value = result.value
    if hasattr(value, "to_dict"):
        value = value.to_dict()
    return jsonify({key: value}), status


def deleted_response(result: Result):
    if not result.ok:
        return error_response(result)
    return jsonify({"deleted": True}), 200


def internal_error(action: str):
    current_app.logger.exception("Failed to %s", action)
    return jsonify({"error": "Internal server error"}), 500
