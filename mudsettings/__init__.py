"""
mudsettings - runtime settings registry for a terminal MUD client.
"""

__version__ = "0.9.0"
