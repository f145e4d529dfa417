"""Tests for the command line entry point."""

import io
import json

import pytest
from PIL import Image

from card_layers.__main__ import main


def _png_bytes(size=(40, 40), color=30):
    buffer = io.BytesIO()
    Image.new("L", size, color=color).save(buffer, "PNG")
    return buffer.getvalue()


class FakeResponse:
    def __init__(self, body):
        self.body = body
        self.headers = {"content-type": "image/png", "content-length": str(len(body))}

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def raise_for_status(self):
        pass

    def iter_content(self, chunk_size=1):
        yield self.body


class FakeSession:
    def __init__(self, body):
        self.headers = {}
        self.body = body
        self.calls = []

    def get(self, url, timeout=None, stream=False):
        self.calls.append(url)
        return FakeResponse(self.body)


@pytest.fixture(autouse=True)
def env(tmp_path, monkeypatch):
    monkeypatch.setenv("CACHE_DIR", str(tmp_path / "cache"))
    monkeypatch.setenv("OUTPUT_DIR", str(tmp_path / "images"))
    monkeypatch.setenv("SOURCE_RETRIES", "0")
    monkeypatch.setenv("SOURCE_URL", "http://example.com/default.png")


@pytest.fixture
def source(tmp_path):
    path = tmp_path / "src" / "card.png"
    path.parent.mkdir()
    path.write_bytes(_png_bytes())
    return path


def test_build_with_regions_file(tmp_path, source, capsys):
    regions = tmp_path / "regions.json"
    regions.write_text(
        json.dumps(
            [
                {"x": 0, "y": 0, "width": 10, "height": 10},
                {"x": 20, "y": 20, "width": 4, "height": 4, "filter": "dotted"},
            ]
        )
    )
    dest = tmp_path / "out" / "card.png"

    assert main(["build", str(source), str(dest), "--regions", str(regions)]) == 0

    assert capsys.readouterr().out.strip() == str(dest)
    with Image.open(dest) as out:
        assert out.getpixel((5, 5)) == 30
        assert out.getpixel((21, 21)) == 0
        assert out.getpixel((20, 20)) == 255
    assert sorted(path.name for path in dest.parent.iterdir()) == ["card.png"]


def test_build_with_preset_defaults_to_output_dir(tmp_path, source):
    assert main(["build", str(source), "--preset", "card"]) == 0

    out_path = tmp_path / "images" / "card.png"
    with Image.open(out_path) as out:
        assert out.size == (40, 40)
        # Card edge, unfiltered.
        assert out.getpixel((5, 5)) == 30


def test_build_fetches_url_sources_first(tmp_path):
    session = FakeSession(_png_bytes(color=60))
    dest = tmp_path / "out.png"

    code = main(
        ["build", "http://example.com/cards/pika.png", str(dest), "--preset", "artwork"],
        session_factory=lambda: session,
    )

    assert code == 0
    assert session.calls == ["http://example.com/cards/pika.png"]
    assert (tmp_path / "cache" / "pika.png").exists()
    assert dest.exists()


def test_fetch_stores_download_under_name(tmp_path, capsys):
    session = FakeSession(_png_bytes())

    assert main(["fetch", "--name", "saved.png"], session_factory=lambda: session) == 0

    saved = tmp_path / "cache" / "saved.png"
    assert session.calls == ["http://example.com/default.png"]
    assert saved.read_bytes() == _png_bytes()
    assert capsys.readouterr().out.strip() == str(saved)


def test_build_returns_error_code_for_undecodable_source(tmp_path):
    src = tmp_path / "card.png"
    src.write_bytes(b"not an image")

    assert main(["build", str(src), str(tmp_path / "out.png"), "--preset", "card"]) == 1
    assert not (tmp_path / "out.png").exists()


@pytest.mark.parametrize(
    "payload",
    [
        {"x": 0},
        [1, 2],
        [{"x": None, "y": 0, "width": 1, "height": 1}],
        [{"x": 0, "y": 0, "width": 0, "height": 1}],
        "not json",
    ],
)
def test_build_returns_error_code_for_bad_regions(tmp_path, source, payload):
    regions = tmp_path / "regions.json"
    regions.write_text(payload if isinstance(payload, str) else json.dumps(payload))
    dest = tmp_path / "out.png"

    assert main(["build", str(source), str(dest), "--regions", str(regions)]) == 1
    assert not dest.exists()
