"""Omnicast serverless functions: API proxy, turn generator and speech synthesizer."""

__version__ = "0.1.0"
