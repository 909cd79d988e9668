"""Adapter Django: conexão, esquema e repositórios SQL."""
