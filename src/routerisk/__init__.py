"""Routerisk - multi-factor travel risk scoring for road routes."""

__version__ = "0.1.0"
