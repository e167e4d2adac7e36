"""
Label Janitor
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.
"""

from label_janitor.client import ApiError, GraphQLClient, TransportError
from label_janitor.config import ConfigError, Settings, load_settings
from label_janitor.labels import Label, fetch_all_labels, select_unused

__all__ = [
    "ApiError",
    "ConfigError",
    "GraphQLClient",
    "Label",
    "Settings",
    "TransportError",
    "fetch_all_labels",
    "load_settings",
    "select_unused",
]
