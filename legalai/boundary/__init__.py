"""Boundary adapters: relational store, blob storage, language-model gateway."""
