"""
📋 Command Config - Chargement des commandes chat

Charge commands.json (ou .yaml) et construit le registre immuable:
- Clés normalisées (lowercase, ASCII only, trim)
- Validation des types (static / api) et des endpoints connus
- Erreur fatale si le fichier est illisible ou mal formé
"""
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional

import yaml

LOGGER = logging.getLogger(__name__)

KIND_STATIC = "static"
KIND_API = "api"

# Endpoints remote supportés (voir commands/registry.py)
REMOTE_ENDPOINTS = frozenset({
    "twitch_stream_info",
    "riot_rank_info",
    "stream_stats_info",
    "current_bans_info",
})


class CommandConfigError(Exception):
    """Fichier de commandes illisible ou invalide (erreur fatale au démarrage)."""


def normalize_command(text: str) -> str:
    """
    Normalise un message chat en token de commande.

    lowercase → suppression de tout caractère non-ASCII (les caractères
    restants sont décalés, pas remplacés) → strip.
    Le lowercase passe avant le filtre: "!ranK" (signe Kelvin) donne "!rank".
    Le strip passe en dernier: "!rank 🔥" donne "!rank".
    """
    return "".join(ch for ch in text.lower() if ord(ch) < 128).strip()


@dataclass(frozen=True)
class CommandSpec:
    """Définition d'une commande (immutable une fois chargée)."""
    kind: str                        # "static" | "api"
    cooldown: int = 0                # Secondes entre deux dispatch
    response: Optional[str] = None   # Texte (static uniquement)
    endpoint: Optional[str] = None   # Opération remote (api uniquement)

    @property
    def is_static(self) -> bool:
        return self.kind == KIND_STATIC


class CommandRegistry:
    """Registre immuable: token normalisé -> CommandSpec."""

    def __init__(self, commands: Mapping[str, CommandSpec]):
        self._commands = MappingProxyType(dict(commands))

    def get(self, token: str) -> Optional[CommandSpec]:
        return self._commands.get(token)

    def __contains__(self, token: str) -> bool:
        return token in self._commands

    def __len__(self) -> int:
        return len(self._commands)

    def __iter__(self) -> Iterator[str]:
        return iter(self._commands)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "CommandRegistry":
        """
        Construit le registre depuis le mapping brut du fichier de config.

        Si deux clés se normalisent vers le même token, la dernière
        (dans l'ordre du fichier) gagne.

        Raises:
            CommandConfigError: Entrée mal formée
        """
        if not isinstance(raw, Mapping):
            raise CommandConfigError("Command config must be a mapping of command -> definition")

        commands: dict[str, CommandSpec] = {}
        for raw_key, definition in raw.items():
            token = normalize_command(str(raw_key))
            if not token:
                raise CommandConfigError(f"Command {raw_key!r} is empty after normalization")

            spec = _parse_definition(raw_key, definition)
            if token in commands:
                LOGGER.warning(f"⚠️ Command {raw_key!r} overrides an earlier definition of [{token}]")
            commands[token] = spec

        return cls(commands)


def _parse_definition(raw_key: Any, definition: Any) -> CommandSpec:
    if not isinstance(definition, Mapping):
        raise CommandConfigError(f"Command {raw_key!r}: definition must be a mapping")

    kind = definition.get("type")
    cooldown = definition.get("cooldown", 0)
    if isinstance(cooldown, bool) or not isinstance(cooldown, int) or cooldown < 0:
        raise CommandConfigError(f"Command {raw_key!r}: cooldown must be a non-negative integer")

    if kind == KIND_STATIC:
        response = definition.get("response")
        if not isinstance(response, str) or not response:
            raise CommandConfigError(f"Command {raw_key!r}: static command needs a 'response'")
        return CommandSpec(kind=KIND_STATIC, cooldown=cooldown, response=response)

    if kind == KIND_API:
        endpoint = definition.get("endpoint")
        if endpoint not in REMOTE_ENDPOINTS:
            raise CommandConfigError(
                f"Command {raw_key!r}: unknown endpoint {endpoint!r} "
                f"(expected one of {sorted(REMOTE_ENDPOINTS)})"
            )
        return CommandSpec(kind=KIND_API, cooldown=cooldown, endpoint=endpoint)

    raise CommandConfigError(f"Command {raw_key!r}: unknown type {kind!r}")


def load_commands(path: str | Path) -> CommandRegistry:
    """
    Charge le fichier de commandes.

    Args:
        path: commands.json, ou commands.yaml / .yml

    Returns:
        CommandRegistry prêt à l'emploi

    Raises:
        CommandConfigError: Fichier absent, illisible ou invalide
    """
    config_file = Path(path)
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            if config_file.suffix.lower() in (".yaml", ".yml"):
                raw = yaml.safe_load(f)
            else:
                raw = json.load(f)
    except OSError as e:
        raise CommandConfigError(f"Error reading {config_file}: {e}") from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise CommandConfigError(f"Error parsing {config_file}: {e}") from e

    registry = CommandRegistry.from_mapping(raw or {})

    LOGGER.info(f"📋 Loaded {len(registry)} commands from {config_file}")
    for token in registry:
        LOGGER.info(f"   ↳ [{token!r}]")

    return registry
