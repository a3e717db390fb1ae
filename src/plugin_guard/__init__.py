"""Conformance guard for Magento 2 style interceptor plugins in PHP sources."""

from plugin_guard.guards.plugin_rules import MethodKind, PluginRule, classify, validate
from plugin_guard.php_file import PhpFile
from plugin_guard.tokens import tokenize_php

__all__ = [
    "MethodKind",
    "PhpFile",
    "PluginRule",
    "classify",
    "tokenize_php",
    "validate",
]
