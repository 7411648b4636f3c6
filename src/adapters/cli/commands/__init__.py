"""Sous-package CLI commands - re-exporte les commandes publiques."""

from src.adapters.cli.commands.reconcile_command import reconcile
from src.adapters.cli.commands.registry_commands import (
    placeholders_app,
    placeholders_list,
    runtime_app,
    runtime_get,
    runtime_set,
)
from src.adapters.cli.commands.stub_commands import stub_app, stub_find

__all__ = [
    # reconciliation
    "reconcile",
    # registres
    "runtime_app",
    "runtime_get",
    "runtime_set",
    "placeholders_app",
    "placeholders_list",
    # stubs
    "stub_app",
    "stub_find",
]
