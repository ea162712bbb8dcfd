"""
File-system access for the JSON fixture server.

This package is responsible for:
* Enumerating the data directory into the startup resource index.
* Reading and parsing the JSON document behind an indexed resource name.
"""
