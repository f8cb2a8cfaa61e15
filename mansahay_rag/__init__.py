"""
Mansahay RAG

Ingestion and multi-query fusion search for the Mansahay wellness companion.
"""

__version__ = "0.1.0"
