"""
Adapter layer for the Notes API.

Contains the editor adapters (remote row/blob stores, local key-value store)
and the blob stores, plus the factory that picks them from settings.
"""
