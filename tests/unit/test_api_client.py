from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests

from ne_attend.api.client import BackendError, BulkUploadClient
from ne_attend.models import RowError, ScheduleRecord, UploadKind, UploadResult


def _response(ok=True, status=200, body=None, json_error=False):
    resp = MagicMock()
    resp.ok = ok
    resp.status_code = status
    if json_error:
        resp.json.side_effect = ValueError("no json")
    else:
        resp.json.return_value = body if body is not None else {}
    return resp


def _result():
    # any object with to_payload() works as a record
    record = ScheduleRecord(weekdays=("Monday",), start_time="07:00", end_time="08:00")
    return UploadResult(valid_records=[record], row_errors=[RowError(2, ("Invalid email format",))])


def test_submit_posts_records_and_row_errors():
    session = MagicMock()
    body = {"success": True, "data": {"createdCount": 1}}
    session.post.return_value = _response(body=body)
    client = BulkUploadClient("http://api.local/api/", token="tok", timeout=5, session=session)

    assert client.submit(UploadKind.STUDENTS, _result()) == body

    args, kwargs = session.post.call_args
    assert args == ("http://api.local/api/users/bulk-students",)
    assert kwargs["json"] == {
        "students": [{"weekdays": ["Monday"], "startTime": "07:00", "endTime": "08:00"}],
        "rowErrors": [{"rowIndex": 2, "errors": ["Invalid email format"]}],
    }
    assert kwargs["headers"]["Authorization"] == "Bearer tok"
    assert kwargs["timeout"] == 5


def test_instructor_endpoint_and_no_token():
    session = MagicMock()
    session.post.return_value = _response(body={"success": True})
    client = BulkUploadClient("http://api.local/api", session=session)
    client.submit(UploadKind.INSTRUCTORS, _result())
    args, kwargs = session.post.call_args
    assert args[0].endswith("/users/bulk-instructors")
    assert "instructors" in kwargs["json"]
    assert "Authorization" not in kwargs["headers"]


def test_error_response_uses_server_message():
    session = MagicMock()
    session.post.return_value = _response(ok=False, status=409, body={"message": "Duplicate email"})
    client = BulkUploadClient("http://api.local/api", session=session)
    with pytest.raises(BackendError) as exc:
        client.submit(UploadKind.STUDENTS, _result())
    assert str(exc.value) == "Duplicate email"
    assert exc.value.status_code == 409


def test_error_response_without_json_uses_default_message():
    session = MagicMock()
    session.post.return_value = _response(ok=False, status=502, json_error=True)
    client = BulkUploadClient("http://api.local/api", session=session)
    with pytest.raises(BackendError, match="Failed to process bulk upload."):
        client.submit(UploadKind.STUDENTS, _result())


def test_transport_error_wrapped():
    session = MagicMock()
    session.post.side_effect = requests.exceptions.ConnectionError("refused")
    client = BulkUploadClient("http://api.local/api", session=session)
    with pytest.raises(BackendError, match="refused") as exc:
        client.submit(UploadKind.STUDENTS, _result())
    assert exc.value.status_code is None
