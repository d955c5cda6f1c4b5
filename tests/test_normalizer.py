import pytest

from nft_indexer.models import NFT, CompleteNFT, PaginatedResponse
from nft_indexer.normalizer import Normalizer, convert_ipfs_to_http

GATEWAY = "https://gateway.test/ipfs"
CID = "Qm" + "x" * 44


@pytest.mark.parametrize("uri, expected", [
    (CID, f"{GATEWAY}/{CID}"),
    (f"{CID}/image.png", f"{GATEWAY}/{CID}/image.png"),
    (f"ipfs://{CID}", f"{GATEWAY}/{CID}"),
    (f"ipfs://ipfs/{CID}/1.json", f"{GATEWAY}/{CID}/1.json"),
    ("https://example.com/1.json", "https://example.com/1.json"),
    ("", None),
    ("hello", None),
])
def test_convert_ipfs_to_http(uri, expected):
    assert convert_ipfs_to_http(uri, GATEWAY + "/") == expected


def test_normalize_ternoa_metadata():
    metadata = Normalizer.normalize_metadata({
        "title": "Sunset",
        "description": "Orange sky",
        "image": "https://example.com/preview.png",
        "properties": {
            "media": {"hash": CID, "type": "image/png"},
            "cryptedMedia": {"hash": "Qm" + "y" * 44},
        },
    }, GATEWAY)

    assert metadata.name == "Sunset"
    assert metadata.description == "Orange sky"
    assert metadata.media.url == f"{GATEWAY}/{CID}"
    assert metadata.crypted_media.url == f"{GATEWAY}/{'Qm' + 'y' * 44}"


def test_normalize_falls_back_to_name_and_image():
    metadata = Normalizer.normalize_metadata({"name": "Moon", "image": f"ipfs://{CID}"}, GATEWAY)

    assert metadata.name == "Moon"
    assert metadata.media.url == f"{GATEWAY}/{CID}"
    assert metadata.crypted_media is None


def test_normalize_ignores_garbage():
    metadata = Normalizer.normalize_metadata({"properties": "nope", "image": 3}, GATEWAY)
    assert metadata.media is None
    assert Normalizer.normalize_metadata([], GATEWAY).name is None


@pytest.mark.parametrize("document", [
    {"title": 2024, "description": {"en": "Orange sky"}},
    {"title": ["Sunset"], "name": None, "description": 7},
])
def test_normalize_drops_non_string_text(document):
    metadata = Normalizer.normalize_metadata(document, GATEWAY)

    assert metadata.name is None
    assert metadata.description is None


def test_normalize_falls_back_to_name_when_title_is_not_text():
    assert Normalizer.normalize_metadata({"title": 2024, "name": "Moon"}, GATEWAY).name == "Moon"


def test_nft_accepts_wire_names_and_coerces_amounts():
    nft = NFT.model_validate({
        "id": "1",
        "owner": "5Owner",
        "listed": 1,
        "price": 1000000000000000000000,
        "priceTiime": None,
        "serieId": 42,
        "timestampList": "2021-11-02T10:00:00",
    })

    assert nft.price == "1000000000000000000000"
    assert nft.price_tiime == "0"
    assert nft.serie_id == "42"
    assert nft.creator is None
    assert nft.to_wire()["priceTiime"] == "0"


def test_paginated_response_wire_format():
    page = PaginatedResponse[CompleteNFT](
        data=[CompleteNFT(id="1", owner="5Owner", name="One")],
        total_count=11,
        has_next_page=True,
        has_previous_page=False,
    )

    wire = page.to_wire()

    assert wire["totalCount"] == 11
    assert wire["hasNextPage"] is True
    assert wire["hasPreviousPage"] is False
    assert wire["data"][0]["name"] == "One"
    assert "ownerData" in wire["data"][0]
