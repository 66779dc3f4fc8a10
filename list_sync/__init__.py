"""Синхронизация списков записей с хранилищем и отображением."""

__version__ = "0.1.0"
