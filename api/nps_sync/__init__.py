"""
Sincronizacion one-way de encuestas NPS: Firestore -> Notion.

Dos disparadores comparten el mismo mapeo:
- migracion masiva bajo demanda (endpoint y script CLI)
- sincronizacion por evento al crearse una encuesta
"""
