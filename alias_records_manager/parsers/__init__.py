"""
Input file parsers.
"""

from .domain_config import DomainConfigParser

__all__ = ["DomainConfigParser"]
