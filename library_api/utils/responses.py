from flask import jsonify


def json_ok(data=None, message=None, code=200, pagination=None):
    body = {"success": True}
    if data is not None:
        body["data"] = data
    if message:
        body["message"] = message
    if pagination is not None:
        body["pagination"] = pagination
    return jsonify(body), code


def json_error(message, code=400):
    return jsonify({"success": False, "error": message}), code
