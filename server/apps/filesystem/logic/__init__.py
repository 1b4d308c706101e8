"""Business logic layer for filesystem app.

This package contains all business logic for the virtual file system:
- Store: persistence of guilds, folders and files
- Resolver: folder and file names to row identifiers
- Filesystem operations: one function per chat command
- Listing: pagination of the folder tree into pages

Keep chat presentation out of here, see ``presentation.py``.
"""
