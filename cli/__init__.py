"""CLI package for the home library"""
from .main import cli

__all__ = ['cli']
