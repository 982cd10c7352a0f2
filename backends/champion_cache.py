"""
🏆 Champion Cache - Table statique id -> nom de champion

Chargée une seule fois depuis champions.json ({"266": "Aatrox", ...}),
lecture seule ensuite. Si le fichier manque ou est invalide, les noms
dégradent vers "Unknown(<id>)" au lieu de faire tomber le bot.
"""

import json
import logging
import threading
from pathlib import Path
from typing import Optional


class ChampionCache:
    """Lookup id numérique -> nom d'affichage (chargé au plus une fois)."""

    def __init__(self, champions_file: str | Path = "champions.json"):
        self.champions_file = Path(champions_file)
        self.logger = logging.getLogger(__name__)

        # None = pas encore chargé (état explicite unloaded -> loaded)
        self._champions: Optional[dict[int, str]] = None
        self._load_failed = False
        self._lock = threading.Lock()

    @property
    def loaded(self) -> bool:
        return self._champions is not None

    def load(self) -> bool:
        """
        Charge la table depuis le fichier (no-op si déjà chargée).

        Returns:
            True si la table est disponible
        """
        with self._lock:
            return self._load_locked()

    def _load_locked(self) -> bool:
        if self._champions is not None:
            return True

        try:
            with open(self.champions_file, encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            self.logger.error(f"❌ Failed to load {self.champions_file}: {e}")
            self._load_failed = True
            return False

        if not isinstance(raw, dict):
            self.logger.error(f"❌ {self.champions_file} must contain a JSON object")
            self._load_failed = True
            return False

        champions: dict[int, str] = {}
        for id_str, name in raw.items():
            try:
                champions[int(id_str)] = str(name)
            except (TypeError, ValueError):
                self.logger.warning(f"⚠️ Skipping invalid champion id {id_str!r}")

        self._champions = champions
        self.logger.info(f"🏆 Loaded {len(champions)} champions from {self.champions_file}")
        return True

    def name(self, champion_id: int) -> str:
        """Nom du champion, ou Unknown(<id>) si absent / table indisponible."""
        with self._lock:
            # Lazy load: une seule tentative si load() n'a jamais été appelé
            if self._champions is None and (self._load_failed or not self._load_locked()):
                return f"Unknown({champion_id})"
            return self._champions.get(champion_id, f"Unknown({champion_id})")

    def __len__(self) -> int:
        return len(self._champions) if self._champions is not None else 0
