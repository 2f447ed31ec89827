"""CLI package for Book Manager"""
from .main import cli

__all__ = ['cli']
