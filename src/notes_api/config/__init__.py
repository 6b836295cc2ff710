"""
Configuration management for the Notes API.

Contains Pydantic settings that select the editor backend (remote row/blob
stores or the local key-value store) across local-dev, aws-mock, and
aws-prod deployment modes.
"""
