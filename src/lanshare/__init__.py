"""LanShare: раздача каталога по HTTP в локальной сети."""

__version__ = "0.1.0"
