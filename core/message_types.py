"""
📦 Message Types - DTOs entre le transport et la logique de commandes
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class ChatMessage:
    """Message chat entrant (PRIVMSG)"""
    sender: str      # Login de l'utilisateur (sans ':' ni '!host')
    channel: str     # Nom du channel (sans #)
    text: str        # Contenu brut, avant normalisation
