"""
Configuration management for the Drive API.

Contains the pydantic settings for the bucket, credentials and presigned URL
expiry, plus the cached accessor used by the app and the CLI.
"""
