"""
Base service plumbing: the error taxonomy shared by every read path, the
logging decorator for service methods and the service base class.

Errors are raised, never returned. Callers see a ``ServiceError`` subclass for
anything the service rejected and the storage layer's own exception for
anything the database rejected.
"""

import logging
import time
from typing import Any, Dict, Callable
from datetime import datetime, timezone
from abc import ABC
from functools import wraps

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Rejected request; ``error_code`` is stable and machine readable."""

    def __init__(self, message: str, error_code: str = None, details: Dict[str, Any] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or "SERVICE_ERROR"
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc)


class ValidationError(ServiceError):
    """Caller input that cannot be turned into a query."""

    def __init__(self, message: str, field: str = None, value: Any = None):
        super().__init__(message, "VALIDATION_ERROR", {"field": field, "value": value})
        self.field = field
        self.value = value


class NotFoundError(ServiceError):
    """Nothing with this identifier is visible to the caller."""

    def __init__(self, resource_type: str, identifier: Any):
        message = f"{resource_type} not found: {identifier}"
        super().__init__(message, "NOT_FOUND", {"resource_type": resource_type, "identifier": identifier})
        self.resource_type = resource_type
        self.identifier = identifier


def service_method(func: Callable) -> Callable:
    """
    Decorator for service methods with logging.

    Domain errors (``ServiceError``) and storage errors are logged and
    re-raised unchanged; nothing is recovered here.
    """

    @wraps(func)
    def wrapper(self, *args, **kwargs):
        method_name = f"{self.__class__.__name__}.{func.__name__}"
        logger.debug(f"[{method_name}] Starting operation")
        started = time.perf_counter()

        # Validate service state
        if hasattr(self, '_validate_service_state'):
            self._validate_service_state()

        try:
            result = func(self, *args, **kwargs)
        except ServiceError as e:
            logger.info(f"[{method_name}] Service error ({e.error_code}): {e.message}")
            raise
        except Exception as e:
            logger.exception(f"[{method_name}] Unexpected error: {e}")
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.debug(f"[{method_name}] Operation completed in {elapsed_ms:.2f}ms")
        return result

    return wrapper


class BaseService(ABC):
    """
    Common plumbing for read services.

    A service is usable once ``initialize`` has run; methods wrapped in
    ``service_method`` refuse to run before that. Collaborators are
    registered by name so a service can be wired with fakes in tests.
    """

    def __init__(self, name: str = None):
        self.name = name or self.__class__.__name__
        self.logger = logging.getLogger(f"services.{self.name}")
        self._initialized = False
        self._dependencies: Dict[str, Any] = {}
        self._configuration: Dict[str, Any] = {}

    def initialize(self, config: Dict[str, Any] = None) -> None:
        self._configuration = dict(config or {})
        self._initialized = True
        self.logger.debug(f"Service {self.name} initialized with {sorted(self._configuration)}")

    def _validate_service_state(self) -> None:
        if not self._initialized:
            raise ServiceError(f"Service {self.name} not initialized", "SERVICE_NOT_INITIALIZED")

    def add_dependency(self, name: str, service: Any) -> None:
        self._dependencies[name] = service

    def get_dependency(self, name: str) -> Any:
        """Registered collaborator ``name``; a missing one is a wiring bug."""
        try:
            return self._dependencies[name]
        except KeyError:
            raise ServiceError(f"Dependency {name} not found", "DEPENDENCY_NOT_FOUND") from None

    def get_config(self, key: str, default: Any = None) -> Any:
        return self._configuration.get(key, default)
