"""
Constructores de propiedades de Notion.

Funciones puras (sin I/O) que devuelven el formato de valor que espera la
API de Notion para cada tipo de propiedad.
"""

from __future__ import annotations

from typing import Any


def title(content: str) -> dict[str, Any]:
    return {"title": [{"text": {"content": content}}]}


def rich_text(content: str) -> dict[str, Any]:
    return {"rich_text": [{"text": {"content": content}}]}


def number(value: int | float) -> dict[str, Any]:
    return {"number": value}


def date(start: str) -> dict[str, Any]:
    return {"date": {"start": start}}


def select(name: str) -> dict[str, Any]:
    return {"select": {"name": name}}
