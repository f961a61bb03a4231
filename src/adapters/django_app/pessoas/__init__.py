"""Adapter Django do domínio de Pessoas (models, repositories, API)."""
