"""Importable test data: SDK-shaped responses and sample payloads."""
