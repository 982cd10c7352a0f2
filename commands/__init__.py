"""
Commands - Opérations remote (endpoints de commands.json)
"""
