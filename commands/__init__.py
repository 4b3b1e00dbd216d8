"""CLI command modules.

This package contains:
- setup: Registration, version check and configuration commands
- inspection: Light listing and details (list, show)
- control: Direct light control (power, brightness, colour-temp, dim)
- helpers: Shared command helpers (settings injection, error reporting)
"""
