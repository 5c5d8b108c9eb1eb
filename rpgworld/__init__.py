"""Game-logic core of an online action RPG: characters, players, monsters, stages and game info data."""

__version__ = "0.1.0"