import io
import json

import pytest

pytest.importorskip("flask")

from PIL import Image

from card_layers.app import create_app
from card_layers.config import LayerSettings


@pytest.fixture
def client(tmp_path):
    settings = LayerSettings(
        source_url="http://example.com/card.png",
        cache_dir=str(tmp_path / "cache"),
        output_dir=str(tmp_path / "images"),
        port=5500,
        timeout=1.0,
        retries=0,
        max_content_length=1_000_000,
        log_level="WARNING",
    )
    return create_app(settings).test_client()


def _png_bytes(size=(20, 20)):
    buffer = io.BytesIO()
    Image.new("L", size, color=30).save(buffer, "PNG")
    return buffer.getvalue()


def test_health_lists_presets(client):
    payload = client.get("/health").get_json()

    assert payload["ok"] is True
    assert payload["presets"] == ["artwork", "card"]


def test_presets_are_serialised_as_region_records(client):
    payload = client.get("/presets").get_json()

    assert payload["card"][0] == {"x": 0, "y": 0, "width": 735, "height": 39}
    assert any(record.get("filter") == "darkest" for record in payload["card"])


def test_layers_returns_composed_png(client):
    regions = [
        {"x": 0, "y": 0, "width": 10, "height": 10},
        {"x": 10, "y": 10, "width": 4, "height": 4, "filter": "dotted"},
    ]
    response = client.post(
        "/layers",
        data={"image": (io.BytesIO(_png_bytes()), "card.png"), "regions": json.dumps(regions)},
        content_type="multipart/form-data",
    )

    assert response.status_code == 200
    assert response.mimetype == "image/png"
    with Image.open(io.BytesIO(response.data)) as out:
        assert out.size == (20, 20)
        assert out.getpixel((5, 5)) == 30
        assert out.getpixel((11, 11)) == 0
        assert out.getpixel((10, 10)) == 255
        assert out.getpixel((18, 2)) == 255


def test_layers_rejects_bad_regions(client):
    response = client.post(
        "/layers",
        data={"image": (io.BytesIO(_png_bytes()), "card.png"), "regions": "{not json"},
        content_type="multipart/form-data",
    )

    assert response.status_code == 400


def test_layers_requires_a_source(client):
    response = client.post("/layers", data={"preset": "card"}, content_type="multipart/form-data")

    assert response.status_code == 400


def test_layers_reports_undecodable_upload(client):
    response = client.post(
        "/layers",
        data={
            "image": (io.BytesIO(b"garbage"), "card.png"),
            "regions": json.dumps([{"x": 0, "y": 0, "width": 2, "height": 2}]),
        },
        content_type="multipart/form-data",
    )

    assert response.status_code == 422
