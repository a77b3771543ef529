"""
Shared Application Layer
Command/query contracts and handler bases
"""
from devkit.application.base_command import BaseCommand
from devkit.application.base_query import BaseQuery
from devkit.application.command_handler import CommandHandler
from devkit.application.query_handler import QueryHandler
from devkit.application.validation import errors_from_validation, validate_model

__all__ = [
    "BaseCommand",
    "BaseQuery",
    "CommandHandler",
    "QueryHandler",
    "errors_from_validation",
    "validate_model",
]
