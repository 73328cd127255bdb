#!/usr/bin/env python3
"""
id_pack HTTP service
─────────────────────────────────────────────────────────────
* POST /encode        id set        → token
* POST /decode        token         → id list
* POST /sync/encode   {id: ts}      → sync string
* POST /sync/decode   sync string   → {id: ts}
"""
from __future__ import annotations
import logging, os

from flask import Flask, request, jsonify, abort
from flask_cors import CORS

from id_pack import IdPacker, PackerConfig, InvalidInput

# ───────────────────────── configuration ──────────────────────
PORT         = int(os.getenv("PORT",         "5000"))
HOST         = os.getenv("HOST",             "0.0.0.0")
CORS_ORIGINS = os.getenv("CORS_ORIGINS",     "*")
LOG_LEVEL    = os.getenv("LOG_LEVEL",        "INFO")


def create_app(config: PackerConfig | None = None) -> Flask:
    packer = IdPacker(config or PackerConfig.from_env())

    app = Flask(__name__)
    CORS(app, origins=CORS_ORIGINS)

    def body_field(name: str):
        data = request.get_json(force=True, silent=True) or {}
        if name not in data:
            abort(400, description=f"missing field '{name}'")
        return data[name], data

    @app.errorhandler(InvalidInput)
    def invalid_input(e):
        return {"error": str(e)}, 400

    @app.errorhandler(400)
    def bad_request(e):
        return {"error": e.description}, 400

    # ───────────────────────── id sets ────────────────────────────
    @app.post("/encode")
    def encode():
        ids, data = body_field("ids")
        if not isinstance(ids, (list, dict)):
            abort(400, description="'ids' must be a list or an object")
        return {"encoded": packer.encode(ids, window_size=data.get("window_size"))}

    @app.post("/decode")
    def decode():
        encoded, _ = body_field("encoded")
        return {"ids": packer.decode(encoded)}

    # ───────────────────────── sync strings ───────────────────────
    @app.post("/sync/encode")
    def sync_encode():
        synced_at, _ = body_field("synced_at")
        if not isinstance(synced_at, dict):
            abort(400, description="'synced_at' must be an object")
        return {"sync_str": packer.encode_sync(synced_at)}

    @app.post("/sync/decode")
    def sync_decode():
        sync_str, data = body_field("sync_str")
        base = data.get("base_timestamp", 0)
        if isinstance(base, bool) or not isinstance(base, int):
            abort(400, description="'base_timestamp' must be an integer")
        decoded = packer.decode_sync(sync_str, base)
        return jsonify(synced_at={str(k): v for k, v in decoded.items()})

    @app.get("/config")
    def config():
        return packer.config.as_dict()

    return app


# ───────────────────────── launch ─────────────────────────────
if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL)
    cfg = PackerConfig.from_env()
    app = create_app(cfg)
    print(f"✓ window size → {cfg.window_size}")
    print(f"✓ alphabet → {cfg.alphabet}")
    print(f"✓ listening → {HOST}:{PORT}")
    app.run(host=HOST, port=PORT)
