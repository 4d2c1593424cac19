"""An IRC bot that learns channel speech, generates sentences from it and runs a word game."""

__version__ = "0.9.0"