"""
Base Command Handler
Abstract base for all command handlers
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from devkit.application.base_command import BaseCommand
from devkit.domain import Error, Result
from devkit.logging import bind_context, get_logger

logger = get_logger(__name__)

TCommand = TypeVar("TCommand", bound=BaseCommand)
TResult = TypeVar("TResult")


class CommandHandler(ABC, Generic[TCommand, TResult]):
    """
    Abstract base class for command handlers.

    Command handlers orchestrate domain logic and repositories and report
    their outcome as a Result. Expected failures are Result values; an
    exception escaping handle() is a collaborator fault and is turned into
    an UNEXPECTED failure by __call__.

    Type Parameters:
        TCommand: Command type this handler processes
        TResult: Value type of a successful Result

    Example:
        class DeleteCustomerCommandHandler(CommandHandler[DeleteCustomerCommand, None]):
            async def handle(self, command: DeleteCustomerCommand) -> Result[None]:
                ...
    """

    @abstractmethod
    async def handle(self, command: TCommand) -> Result[TResult]:
        """
        Handle the command and return its Result.

        Args:
            command: Command to execute
        """

    async def __call__(self, command: TCommand) -> Result[TResult]:
        """
        Make handler callable directly.

        Adds logging around command execution. Cancellation is not caught.
        """
        with bind_context(
            command=command.__class__.__name__,
            command_id=str(command.command_id) if command.command_id else None,
            issued_by=command.issued_by,
        ):
            logger.info("Executing command")
            try:
                result = await self.handle(command)
            except Exception as e:
                logger.exception("Command execution raised", error=str(e))
                return Result.failure(Error.from_exception(e))

            if result.is_success():
                logger.info("Command executed successfully")
            else:
                logger.warning(
                    "Command execution failed",
                    error_codes=[error.code for error in result.errors],
                    errors=[error.message for error in result.errors],
                )
            return result
