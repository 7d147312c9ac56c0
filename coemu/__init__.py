"""Game server building blocks: packets, map floors, regions, commands, tokens and a map data tool."""

__version__ = "0.1.0"