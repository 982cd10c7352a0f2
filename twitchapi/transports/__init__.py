"""
twitchapi/transports/
=====================

Transport chat Twitch.

Modules:
- irc_client : Client IRC Twitch (lecture de frames, PRIVMSG)
"""

from twitchapi.transports.irc_client import IRCClient, TransportError

__all__ = ["IRCClient", "TransportError"]
