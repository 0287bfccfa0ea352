# src/txbench/__init__.py
"""
txbench: Transactional load generation for pluggable storage backends.

Turns a stream of abstract operations into measured backend calls and
groups them into client-side transactions measured as one unit.
"""

__version__ = "0.1.0"
