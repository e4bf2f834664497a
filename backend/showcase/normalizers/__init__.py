from flask import jsonify


def envelope(data, message=None, status_code=200):
    """Single success envelope used by every endpoint: {"data": ..., "message"?}."""
    body = {"data": data}
    if message:
        body["message"] = message
    return jsonify(body), status_code
