"""mccomplete: context-aware completion for Brigadier command grammars."""

__version__ = "0.1.0"
