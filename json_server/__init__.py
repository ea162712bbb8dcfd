"""
Read-only HTTP API over a directory of JSON files.

Each ``<name>.json`` file directly inside the data directory is served at
``/api/<name>``; ``/api`` lists the available names.
"""

__version__ = "0.1.0"
