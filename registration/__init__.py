# registration/__init__.py
"""
Hackathon team registration service.

Usage (development):
    python -m uvicorn registration.main:app --reload

Install in editable mode for a reliable import path during auto-reload:
    pip install -e .
"""
