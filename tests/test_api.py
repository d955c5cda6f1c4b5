import pytest
from fastapi.testclient import TestClient

from nft_indexer.api.app import app, get_service
from nft_indexer.errors import IndexerTransportError

from conftest import ALICE, FakeEnricher, FakeIndexer, make_connection, make_node


@pytest.fixture
def indexer():
    return FakeIndexer(make_connection(
        [make_node("1"), make_node("2", listed=1, price="150")],
        total_count=12, has_next=True, has_previous=False,
    ))


@pytest.fixture
def client(indexer, make_service):
    service = make_service(indexer, FakeEnricher())
    app.dependency_overrides[get_service] = lambda: service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def test_list_all_nfts(client, indexer):
    response = client.get("/api/nfts")

    assert response.status_code == 200
    body = response.json()
    assert [nft["id"] for nft in body["data"]] == ["1", "2"]
    assert body["totalCount"] == 2
    assert body["data"][1]["priceTiime"] == "0"
    assert indexer.queries[0].operation_name == "AllNFTs"


def test_list_nfts_paginated(client, indexer):
    response = client.get("/api/nfts", params={"page": 3, "limit": 5})

    assert response.status_code == 200
    body = response.json()
    assert body["totalCount"] == 12
    assert body["hasNextPage"] is True
    assert body["hasPreviousPage"] is False
    assert indexer.queries[0].variables == {"first": 5, "offset": 10}


def test_list_nfts_page_only_uses_default_limit(client, indexer):
    client.get("/api/nfts", params={"page": 2})
    assert indexer.queries[0].variables == {"first": 10, "offset": 10}


@pytest.mark.parametrize("params", [{"page": 0}, {"limit": 0}, {"limit": 1000}])
def test_list_nfts_rejects_bad_paging(client, params):
    assert client.get("/api/nfts", params=params).status_code == 422


def test_get_nft(client, indexer):
    response = client.get("/api/nfts/1")

    assert response.status_code == 200
    assert response.json()["id"] == "1"
    assert response.json()["name"] == "NFT #1"
    assert indexer.queries[0].variables == {"id": "1"}


def test_get_nft_not_found(client, indexer):
    indexer.response = make_connection([])

    response = client.get("/api/nfts/404")

    assert response.status_code == 404
    assert response.json() == {"detail": "Couldn't get NFT"}


def test_indexer_failure_is_bad_gateway(client, indexer):
    indexer.response = IndexerTransportError("down")

    response = client.get("/api/nfts")

    assert response.status_code == 502
    assert response.json() == {"detail": "Couldn't get NFTs"}


def test_owner_nfts(client, indexer):
    response = client.get(f"/api/nfts/owner/{ALICE}")

    assert response.status_code == 200
    assert response.json()["totalCount"] == 2
    assert indexer.queries[0].variables == {"owner": ALICE}


def test_owner_nfts_paginated(client, indexer):
    response = client.get(f"/api/nfts/owner/{ALICE}", params={"limit": 4})

    assert response.status_code == 200
    assert indexer.queries[0].variables == {"owner": ALICE, "first": 4, "offset": 0}


def test_owner_nfts_failure(client, indexer):
    indexer.response = IndexerTransportError("down")

    response = client.get(f"/api/nfts/owner/{ALICE}")

    assert response.status_code == 502
    assert response.json() == {"detail": "Couldn't get user's NFTs"}


def test_owner_id_is_validated(client, indexer):
    response = client.get("/api/nfts/owner/not-an-address")

    assert response.status_code == 400
    assert indexer.queries == []


def test_owner_route_without_id(client, indexer):
    response = client.get("/api/nfts/owner")

    assert response.status_code == 400
    assert response.json() == {"detail": "Missing owner id"}
    assert indexer.queries == []


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
