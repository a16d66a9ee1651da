"""Integration modules"""
from .clickup_client import ClickUpClient, FetchResult

__all__ = ["ClickUpClient", "FetchResult"]
