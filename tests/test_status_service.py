# tests/test_status_service.py
import asyncio

import pytest

from model.aps import Manifest
from service.status_service import flatten_messages
from util.errors import UpstreamError


def _message(code: str) -> dict:
    return {"type": "warning", "code": code, "message": f"{code} happened"}


def test_unknown_urn_reports_not_available(statuses):
    status = asyncio.run(statuses.get_status("bm9wZQ"))
    assert status.to_payload() == {"status": "n/a"}


def test_messages_flatten_derivative_then_children(fake_aps, statuses):
    fake_aps.manifests["dXJu"] = {
        "status": "inprogress",
        "progress": "50% complete",
        "derivatives": [
            {
                "messages": [_message("A1"), _message("A2")],
                "children": [{"messages": [_message("A3")]}],
            },
            {"messages": [_message("B1")], "children": []},
        ],
    }

    status = asyncio.run(statuses.get_status("dXJu"))

    assert status.status == "inprogress"
    assert status.progress == "50% complete"
    assert [m["code"] for m in status.messages] == ["A1", "A2", "A3", "B1"]


def test_messages_keep_duplicates_and_strings():
    manifest = Manifest.model_validate(
        {
            "status": "failed",
            "derivatives": [
                {"messages": ["boom", "boom"], "children": [{"messages": None}]},
            ],
        }
    )
    assert flatten_messages(manifest) == ["boom", "boom"]


def test_null_derivatives_give_empty_messages(fake_aps, statuses):
    fake_aps.manifests["dXJu"] = {
        "status": "pending",
        "progress": "0% complete",
        "derivatives": None,
    }

    status = asyncio.run(statuses.get_status("dXJu"))

    assert status.to_payload() == {
        "status": "pending",
        "progress": "0% complete",
        "messages": [],
    }


def test_manifest_errors_other_than_missing_propagate(fake_aps, statuses):
    fake_aps.manifests["dXJu"] = {"status": "success", "derivatives": []}
    fake_aps.fail("GET", "/dXJu/manifest", 500)

    with pytest.raises(UpstreamError) as exc:
        asyncio.run(statuses.get_status("dXJu"))

    assert exc.value.status_code == 500


def test_each_derivative_is_followed_by_its_children(fake_aps, statuses):
    fake_aps.manifests["dXJu"] = {
        "status": "success",
        "progress": "complete",
        "derivatives": [
            {"messages": [_message("D1")], "children": [{"messages": [_message("C1")]}]},
            {"messages": [_message("D2")], "children": [{"messages": [_message("C2")]}]},
        ],
    }

    status = asyncio.run(statuses.get_status("dXJu"))

    assert [m["code"] for m in status.messages] == ["D1", "C1", "D2", "C2"]
