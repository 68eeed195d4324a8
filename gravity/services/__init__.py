"""
Service layer: FieldService ABC and ServiceRegistry.

Each caller-facing capability is a FieldService registered with the
ServiceRegistry. The registry provides lightweight dependency
injection: services are looked up by ID at runtime, and each service
owns its own API endpoints, config validation and result format.

Classes:
    FieldService    - Abstract base class for all services
    ServiceRegistry - Central lookup container for registered services

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

from abc import ABC, abstractmethod


class FieldService(ABC):
    """
    Abstract base class for a gravity-model service.

    Services define their own config validation, computation logic,
    and API endpoint registration.

    Class Attributes
    ----------------
    id : str
        Unique service identifier (e.g. "forward").
    name : str
        Human-readable display name.
    description : str
        One-liner for service listings.
    status : str
        Availability shown in service listings.
    route : str
        API prefix owned by the service (e.g. "/api/forward").
    """

    id = ""
    name = ""
    description = ""
    status = "live"
    route = ""

    @abstractmethod
    def validate(self, config):
        """
        Validate raw input and return normalized config.

        Parameters
        ----------
        config : dict
            Raw request payload.

        Returns
        -------
        object
            Normalized, validated configuration.

        Raises
        ------
        ValueError
            If the config is invalid.
        """

    @abstractmethod
    def compute(self, config):
        """
        Run the service computation and return results.

        Parameters
        ----------
        config : object
            Validated configuration from validate().

        Returns
        -------
        dict
            JSON-serializable result with service-specific keys.
        """

    @abstractmethod
    def register_routes(self, blueprint):
        """
        Mount service-specific API endpoints onto a Flask blueprint.

        Parameters
        ----------
        blueprint : flask.Blueprint
            The API blueprint to mount routes on.
        """

    def metadata(self):
        """
        Return service metadata for the registry listing.

        Returns
        -------
        dict
            Service info: id, name, description, status, route.
        """
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "status": self.status,
            "route": self.route,
        }


class ServiceRegistry:
    """
    Central lookup container for registered FieldService instances.

    Services register at app startup. The registry provides lookup by
    ID, listing, and iteration for route mounting.
    """

    def __init__(self):
        self._services = {}

    def register(self, service):
        """
        Register a service instance.

        Raises
        ------
        ValueError
            If a service with the same id is already registered.
        """
        if service.id in self._services:
            raise ValueError(
                "Service '{}' is already registered".format(service.id)
            )
        self._services[service.id] = service

    def get(self, service_id):
        """Look up a service by id; None if not found."""
        return self._services.get(service_id)

    def list_all(self):
        """Metadata for all registered services, in registration order."""
        return [s.metadata() for s in self._services.values()]

    def __iter__(self):
        return iter(self._services.values())
