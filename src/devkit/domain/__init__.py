"""
Shared Domain Layer
Pure domain contracts with no framework dependencies
"""
from devkit.domain.base_aggregate_root import BaseAggregateRoot
from devkit.domain.base_entity import BaseEntity
from devkit.domain.base_value_object import BaseValueObject
from devkit.domain.change import Change
from devkit.domain.domain_event import DomainEvent, DomainEventRegistry
from devkit.domain.errors import Error, ErrorKind
from devkit.domain.exceptions import ChangeAlreadyAppliedError, DomainContractError, ResultValueError
from devkit.domain.result import Failure, Result, Success
from devkit.domain.rules import AsyncRule, PredicateRule, Rule, Rules, RuleSet

__all__ = [
    "BaseEntity",
    "BaseValueObject",
    "BaseAggregateRoot",
    "Change",
    "DomainEvent",
    "DomainEventRegistry",
    "Error",
    "ErrorKind",
    "DomainContractError",
    "ResultValueError",
    "ChangeAlreadyAppliedError",
    "Result",
    "Success",
    "Failure",
    "Rule",
    "Rules",
    "RuleSet",
    "PredicateRule",
    "AsyncRule",
]
