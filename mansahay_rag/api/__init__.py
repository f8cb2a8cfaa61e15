"""
Mansahay RAG - HTTP API
"""
