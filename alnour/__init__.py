"""
Al Nour - Console d'administration de l'association.
"""

__version__ = "1.0.0"
