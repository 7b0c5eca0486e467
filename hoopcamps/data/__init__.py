"""Data access layer for HoopCamps (PocketBase collections and file storage)."""
