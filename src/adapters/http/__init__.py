"""Adapters HTTP para serviços externos."""

from .brasil_api import BrasilApiCepClient

__all__ = ["BrasilApiCepClient"]
