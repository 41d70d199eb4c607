"""Servicios de orquestación usados por la CLI."""
