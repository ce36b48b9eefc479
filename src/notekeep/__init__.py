"""
Notekeep Backend - Personal Note Keeping Service

Notes with colors, images, pinning and archiving, behind a small REST API.

Version: 1.0.0
"""

__version__ = "1.0.0"
