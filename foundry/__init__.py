"""Foundry - Go project scaffolding and middleware auto-wiring CLI"""

__version__ = "0.3.0"
