"""Thin boto3 wrappers, one function per S3 API call."""
