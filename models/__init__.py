"""Data models and utility functions.

This package contains:
- bridge: BridgeInfo snapshot of the bridge config
- light: LightResource and LightUpdate for the CLIP v2 light resource
- types: Credential and stored config types
- utils: Utility functions (name lookup, fuzzy matching, state formatting)
"""
