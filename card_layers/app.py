from __future__ import annotations

import asyncio
import json
import tempfile
from pathlib import Path

from flask import Flask, jsonify, request
from werkzeug.utils import secure_filename

from . import __version__
from .config import LayerSettings, configure_logging
from .errors import DecodeError, LayerBuildError, SourceError
from .infrastructure.network import SourceFetcher, is_url
from .infrastructure.responses import send_png
from .pipeline import build
from .presets import PRESETS, preset_regions
from .regions import regions_from_records

APP_VERSION = __version__


def _requested_regions(form):
    if form.get("regions"):
        return regions_from_records(json.loads(form["regions"]))
    if form.get("preset"):
        return preset_regions(form["preset"])
    return []


def create_app(settings: LayerSettings | None = None, fetcher: SourceFetcher | None = None) -> Flask:
    settings = settings or LayerSettings.from_env()
    log = configure_logging(settings)
    fetcher = fetcher or SourceFetcher(settings)
    app = Flask(__name__)

    @app.route("/health")
    def health():
        return jsonify(ok=True, version=APP_VERSION, presets=sorted(PRESETS))

    @app.route("/presets")
    def presets():
        return jsonify(
            {name: [region.to_mapping() for region in factory()] for name, factory in PRESETS.items()}
        )

    @app.route("/layers", methods=["POST"])
    def layers():
        try:
            regions = _requested_regions(request.form)
        except (TypeError, ValueError) as exc:
            return jsonify(error=f"Invalid regions: {exc}"), 400

        with tempfile.TemporaryDirectory(prefix="card-layers-") as workdir:
            work = Path(workdir)
            upload = request.files.get("image")
            source_url = request.form.get("source_url", "")
            try:
                if upload is not None and upload.filename:
                    src = work / (secure_filename(upload.filename) or "source.png")
                    upload.save(src)
                elif is_url(source_url):
                    src = fetcher.download(source_url, cache_dir=work)
                else:
                    return jsonify(error="Provide an image upload or a source_url"), 400

                out = asyncio.run(build(src, work / "out" / f"{src.stem}.png", regions))
                return send_png(out)
            except SourceError as exc:
                return jsonify(error=str(exc)), 502
            except DecodeError as exc:
                return jsonify(error=str(exc)), 422
            except LayerBuildError as exc:
                log.exception("Layer build failed")
                return jsonify(error=str(exc)), 500

    return app
