"""
Core - Logique du bot (commandes, cooldowns, dispatch)
"""

from core.command_config import CommandRegistry, CommandSpec, normalize_command
from core.cooldowns import CooldownTable

__all__ = ["CommandRegistry", "CommandSpec", "CooldownTable", "normalize_command"]
