"""
twitchapi/
==========

Tout ce qui parle à Twitch.

Organisation:
- app_token.py : App Access Token (client credentials) + refresh périodique
- helix.py : Helix avec App Token (infos stream)
- transports/ : Transport chat
  - irc_client.py : IRC Twitch (lignes brutes)
"""

from twitchapi.app_token import AppToken, AppTokenRefresher
from twitchapi.helix import HelixClient, HelixError

__all__ = ["AppToken", "AppTokenRefresher", "HelixClient", "HelixError"]
