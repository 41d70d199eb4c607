"""Interfaces/abstracciones del Core.

- Define contratos (Protocol) que implementan adaptadores concretos.
- El core depende de estas abstracciones, no de httpx ni del disco.
"""
