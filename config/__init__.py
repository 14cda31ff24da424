"""
Configuration module.

Exports:
    settings: Application settings instance
    get_settings: Function to get settings (for dependency injection)
    default_mapping_configuration: Fresh ERP mapping defaults per session
"""

from config.settings import settings, get_settings, Settings
from config.erp_mapping import (
    default_account_entries,
    default_order_entries,
    default_line_item_entries,
    default_mapping_configuration,
)

__all__ = [
    # Settings
    "settings",
    "get_settings",
    "Settings",

    # ERP mapping defaults
    "default_account_entries",
    "default_order_entries",
    "default_line_item_entries",
    "default_mapping_configuration",
]
