#!/usr/bin/env python3
"""
Génère champions.json (id -> nom) depuis Riot Data Dragon

Usage:
    python scripts/fetch_champions.py [--output champions.json] [--version 14.10.1] [--locale en_US]
"""

import argparse
import json
import sys
from pathlib import Path

import httpx

DDRAGON = "https://ddragon.leagueoflegends.com"


def latest_version(client: httpx.Client) -> str:
    resp = client.get(f"{DDRAGON}/api/versions.json")
    resp.raise_for_status()
    return resp.json()[0]


def build_champion_map(payload: dict) -> dict[str, str]:
    """Data Dragon indexe par nom interne; le bot veut la clé numérique."""
    champions = {}
    for champion in payload.get("data", {}).values():
        key = champion.get("key")
        name = champion.get("name")
        if key and name:
            champions[str(key)] = name
    return dict(sorted(champions.items(), key=lambda item: int(item[0])))


def main():
    parser = argparse.ArgumentParser(description="Download champion id -> name table")
    parser.add_argument('--output', default='champions.json')
    parser.add_argument('--version', default=None, help='Data Dragon version (default: latest)')
    parser.add_argument('--locale', default='en_US')
    args = parser.parse_args()

    try:
        with httpx.Client(timeout=15.0) as client:
            version = args.version or latest_version(client)
            resp = client.get(f"{DDRAGON}/cdn/{version}/data/{args.locale}/champion.json")
            resp.raise_for_status()
            champions = build_champion_map(resp.json())
    except httpx.HTTPError as e:
        print(f"❌ Data Dragon request failed: {e}")
        sys.exit(1)

    output = Path(args.output)
    with open(output, 'w', encoding='utf-8') as f:
        json.dump(champions, f, indent=2, ensure_ascii=False)

    print(f"✅ {len(champions)} champions (patch {version}) written to {output}")


if __name__ == "__main__":
    main()
