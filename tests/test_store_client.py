"""
Content store client tests. requests is patched, nothing leaves the process.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from orderdesk.core import ContentStoreClient, StoreError


def _response(status_code=200, payload=None):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload if payload is not None else {}
    return response


@pytest.fixture
def client():
    return ContentStoreClient(project_id="abc123", dataset="production", token="sk-test")


def test_fetch_queries_live_api(client):
    with patch("orderdesk.core.store.requests.request") as request:
        request.return_value = _response(payload={"ms": 3, "query": "*", "result": [{"_id": "ord-a"}]})

        result = client.fetch('*[_type == "order"]')

    assert result == [{"_id": "ord-a"}]
    args, kwargs = request.call_args
    assert args == ("GET", "https://abc123.api.sanity.io/v2024-02-07/data/query/production")
    assert kwargs["params"] == {"query": '*[_type == "order"]'}
    assert kwargs["headers"]["Authorization"] == "Bearer sk-test"
    assert kwargs["timeout"] == 30


def test_fetch_encodes_query_params(client):
    with patch("orderdesk.core.store.requests.request") as request:
        request.return_value = _response(payload={"result": None})
        client.fetch("*[_id == $id][0]", {"id": "ord-a"})

    assert request.call_args.kwargs["params"]["$id"] == '"ord-a"'


def test_patch_set_commit_sends_single_field_patch(client):
    with patch("orderdesk.core.store.requests.request") as request:
        request.return_value = _response(payload={"transactionId": "tx1", "results": [{"id": "ord-a", "operation": "update"}]})

        result = client.patch("ord-a").set({"status": "dispatch"}).commit()

    assert result["transactionId"] == "tx1"
    args, kwargs = request.call_args
    assert args == ("POST", "https://abc123.api.sanity.io/v2024-02-07/data/mutate/production")
    assert kwargs["json"] == {"mutations": [{"patch": {"id": "ord-a", "set": {"status": "dispatch"}}}]}


def test_empty_patch_is_rejected(client):
    with patch("orderdesk.core.store.requests.request") as request:
        with pytest.raises(StoreError):
            client.patch("ord-a").commit()
    request.assert_not_called()


def test_delete_sends_delete_mutation(client):
    with patch("orderdesk.core.store.requests.request") as request:
        request.return_value = _response(payload={"transactionId": "tx2", "results": [{"id": "ord-b", "operation": "delete"}]})

        result = client.delete("ord-b")

    assert result["results"][0]["operation"] == "delete"
    assert request.call_args.kwargs["json"] == {"mutations": [{"delete": {"id": "ord-b"}}]}


def test_error_body_becomes_store_error(client):
    payload = {"error": {"description": "Insufficient permissions; permission \"update\" required", "type": "mutationError"}}
    with patch("orderdesk.core.store.requests.request") as request:
        request.return_value = _response(403, payload)

        with pytest.raises(StoreError) as excinfo:
            client.delete("ord-b")

    assert excinfo.value.status_code == 403
    assert "Insufficient permissions" in str(excinfo.value)


def test_error_without_body_uses_status(client):
    with patch("orderdesk.core.store.requests.request") as request:
        response = _response(502)
        response.json.side_effect = ValueError("no json")
        request.return_value = response

        with pytest.raises(StoreError) as excinfo:
            client.fetch("*")

    assert excinfo.value.message == "HTTP 502"


def test_transport_failure_becomes_store_error(client):
    with patch("orderdesk.core.store.requests.request", side_effect=requests.ConnectionError("refused")):
        with pytest.raises(StoreError) as excinfo:
            client.fetch("*")

    assert "unreachable" in excinfo.value.message
    assert excinfo.value.status_code is None


def test_unconfigured_client_never_calls_out():
    client = ContentStoreClient(project_id="abc123", dataset="production", token=None)
    assert not client.is_configured

    with patch("orderdesk.core.store.requests.request") as request:
        with pytest.raises(StoreError):
            client.delete("ord-a")
    request.assert_not_called()


def test_from_config_reads_app_config(app):
    app.config.update(
        SANITY_PROJECT_ID="proj9",
        SANITY_DATASET="staging",
        SANITY_API_TOKEN="sk-live",
        SANITY_API_VERSION="v2021-10-21",
        STORE_TIMEOUT="5",
    )
    with app.app_context():
        client = ContentStoreClient.from_config()

    assert client.is_configured
    assert client.base_url == "https://proj9.api.sanity.io/v2021-10-21/data"
    assert client.dataset == "staging"
    assert client.timeout == 5
