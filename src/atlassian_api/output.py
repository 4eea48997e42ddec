"""Text and JSON output for the atlassian command line."""

import json
import sys

from pydantic import BaseModel

from atlassian_api.errors import APIError

_json_mode = False


def set_json_mode(enabled: bool):
    global _json_mode
    _json_mode = enabled


def to_jsonable(data):
    if isinstance(data, BaseModel):
        return data.model_dump(mode='json', by_alias=True, exclude_none=True)
    if isinstance(data, list):
        return [to_jsonable(item) for item in data]
    if isinstance(data, dict):
        return {key: to_jsonable(value) for key, value in data.items()}
    return data


def _write_json(payload, stream=None, indent=None):
    print(json.dumps(to_jsonable(payload), indent=indent), file=stream or sys.stdout)


def emit(prefix, message, data=None):
    """``PREFIX message`` in text mode; in JSON mode one object with ``data`` merged in."""
    if not _json_mode:
        print(f'{prefix} {message}')
        return
    payload = {'status': prefix.lower(), 'message': message}
    payload.update(to_jsonable(data or {}))
    _write_json(payload)


def emit_json(data):
    _write_json(data, indent=2)


def emit_error(error):
    """Report a message or an exception on stderr.

    In JSON mode an APIError also reports its HTTP status and endpoint.
    """
    payload = {'status': 'error', 'message': str(error)}
    if isinstance(error, APIError):
        payload['code'] = error.status
        if error.response is not None:
            payload['endpoint'] = error.response.endpoint

    if _json_mode:
        _write_json(payload, stream=sys.stderr)
    else:
        print(f'ERR {payload["message"]}', file=sys.stderr)
