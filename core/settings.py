#!/usr/bin/env python3
"""
Configuration via variables d'environnement (+ fichier .env).

Toutes les identités/credentials sont obligatoires: un champ manquant ou
vide lève une ValidationError au démarrage (fail fast).
"""

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration du bot."""

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        str_strip_whitespace=True,
        str_min_length=1,
    )

    # Twitch chat
    twitch_channel: str
    twitch_bot_username: str
    twitch_oauth_token: str

    # Twitch Helix (App Token)
    twitch_client_id: str
    twitch_client_secret: str

    # Joueur suivi (Riot ID)
    summoner_name: str
    summoner_tag: str

    # Riot API
    riot_token: str
    riot_platform: str = "na1"
    riot_region: str = "americas"

    # Timeouts / intervalles (secondes)
    riot_timeout: float = 15.0
    helix_timeout: float = 8.0
    app_token_refresh_interval: float = 50 * 60
    irc_idle_timeout: float = 420.0


def invalid_fields(error: ValidationError) -> list[str]:
    """Variables d'environnement manquantes ou vides, pour le log de démarrage."""
    return [
        str(err["loc"][0]).upper()
        for err in error.errors()
        if err.get("loc")
    ]
