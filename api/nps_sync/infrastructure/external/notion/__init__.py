"""
Integracion con la API REST de Notion (creacion de paginas).
"""
