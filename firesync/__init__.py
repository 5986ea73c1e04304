"""
firesync: Firebase Realtime Database sync for local JSON files.

Uploads local JSON into the database, downloads a database path into a
local JSON file, or keeps both sides in sync while watching for changes.
"""

__version__ = "0.3.0"
