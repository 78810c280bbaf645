#!/usr/bin/env python3
"""
Seed the configured product store from a JSON file.

The file may hold a list of products or an object with an "items" list; each
entry uses the API's wire keys (nombre, descripcion, codigoBarras, precio,
stock, categoria, imagen). Products whose barcode already exists are skipped.
Without --file the built-in sample products are used.

Usage:
    STORE_BACKEND=sql python scripts/seed_products.py --file products.json
"""
import argparse
import json
import os
import sys

# allow running from repo/scripts
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from inventory_api.config import settings
from inventory_api.repositories import build_store
from inventory_api.seed import SAMPLE_PRODUCTS, seed_products


def load_entries(path: str) -> list:
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise RuntimeError(f"Failed to parse JSON from {path}: {e}")

    if isinstance(data, dict) and isinstance(data.get("items"), list):
        return data["items"]
    if isinstance(data, list):
        return data
    raise RuntimeError(f"{path} holds neither a list nor an object with an 'items' list")


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--file", "-f", default=None, help="Path to a JSON list of products")
    args = parser.parse_args()

    if args.file and not os.path.exists(args.file):
        print("File not found:", args.file)
        sys.exit(1)

    entries = load_entries(args.file) if args.file else SAMPLE_PRODUCTS
    store = build_store(settings)
    try:
        created = seed_products(store, entries)
    finally:
        store.close()
    print(f"Seeded products: {created} ({store.backend} store)")
