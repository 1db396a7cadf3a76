"""Flask chat front-end for the parrot engine."""
from .web import app, main

__all__ = ["app", "main"]
