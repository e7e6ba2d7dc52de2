"""
rcli - Text signing, verification and encryption utilities.
"""

__version__ = "0.1.0"
