"""
Configuration module for the timesheet and invoicing system.
"""
from .settings import (
    InvoicingConfig,
    get_config,
    load_config,
    reload_config
)

__all__ = [
    'InvoicingConfig',
    'get_config',
    'load_config',
    'reload_config'
]
