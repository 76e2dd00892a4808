# Vercel Python runtime entry: serves the same ASGI app as main.py
import os, sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from main import app  # noqa: E402
