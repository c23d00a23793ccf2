"""
Distribution fitting backends.
"""

from pyfitstats.distributions.backends.cpu import CPUSimplexBackend

__all__ = ['CPUSimplexBackend']
