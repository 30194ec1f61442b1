"""Core War machine pieces: instruction table, memory, processes, instructions and champion files."""

__version__ = "0.1.0"