"""Service layer for firesync.

Sub-packages:
- firebase/: connection, upload/download engine, live sync
"""
