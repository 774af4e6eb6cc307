"""Folder/file API over a flat S3 key space."""
