"""
Command Cooldowns - Anti-spam par commande

Un token de commande s'exécute au plus une fois par fenêtre de `cooldown`
secondes, quel que soit l'utilisateur. Pas de persistance: reset au redémarrage.

Single-writer: seul le dispatcher lit/écrit la table (pas de lock).
"""
import logging
import time
from typing import Callable, Dict

LOGGER = logging.getLogger(__name__)


class CooldownTable:
    """Table token -> timestamp du dernier dispatch (horloge monotone)."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._last_used: Dict[str, float] = {}

    def is_on_cooldown(self, token: str, cooldown_seconds: float) -> bool:
        """True si le token a été dispatché il y a moins de cooldown_seconds."""
        last = self._last_used.get(token)
        if last is None:
            return False

        elapsed = self._clock() - last
        if elapsed < cooldown_seconds:
            LOGGER.debug(f"⏱️ [{token}] on cooldown: {elapsed:.1f}s < {cooldown_seconds}s")
            return True
        return False

    def record(self, token: str) -> None:
        """Enregistre un dispatch (succès ou échec du handler)."""
        self._last_used[token] = self._clock()

    def last_used(self, token: str) -> float | None:
        return self._last_used.get(token)

    def __len__(self) -> int:
        return len(self._last_used)
