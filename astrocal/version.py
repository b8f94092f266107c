# astrocal/version.py
from __future__ import annotations
import os

# Reported by /, /api/health and /api/config; CI may override via env.
VERSION = os.getenv("ASTROCAL_VERSION", "0.1.0")
