"""
SFM Designer Service Layer: DesignerService ABC and DesignerRegistry.

Each calculator (interferometer layout, solution catalog) is a
DesignerService registered with the DesignerRegistry. The registry
provides lightweight dependency injection: services are looked up by
ID at runtime, and each service owns its own API endpoints, input
validation, and result format.

Classes:
    DesignerService  - Abstract base class for all calculator services
    DesignerRegistry - Central lookup container for registered services

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

from abc import ABC, abstractmethod


class DesignerService(ABC):
    """
    Abstract base class for an SFM designer service.

    Class Attributes
    ----------------
    id : str
        Unique service identifier (e.g. "layout", "solutions").
    name : str
        Human-readable display name.
    description : str
        One-liner for the navigation and the /api/services listing.
    route : str
        Frontend page route, or "" for API-only services.
    """

    id = ""
    name = ""
    description = ""
    route = ""

    @abstractmethod
    def validate(self, config):
        """
        Validate raw input and return a normalized config.

        Parameters
        ----------
        config : dict
            Raw request payload (JSON body or form fields).

        Returns
        -------
        object
            Normalized, validated configuration.

        Raises
        ------
        ValueError
            If the config is invalid. DesignError subclasses are
            ValueErrors.
        """

    @abstractmethod
    def compute(self, config):
        """
        Run the service computation and return results.

        Parameters
        ----------
        config : object
            Validated configuration from validate().
        """

    def register_routes(self, blueprint):
        """
        Mount service-specific API endpoints onto a Flask blueprint.

        Parameters
        ----------
        blueprint : flask.Blueprint
            The API blueprint to mount routes on.
        """
        pass

    def metadata(self):
        """
        Return service metadata for the registry listing.

        Returns
        -------
        dict
            Service info: id, name, description, route.
        """
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "route": self.route,
        }


class DesignerRegistry:
    """
    Central lookup container for registered DesignerService instances.

    Services register themselves at app startup. The registry provides
    lookup by ID and iteration for API route mounting.
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
        """Look up a service by id; None if not registered."""
        return self._services.get(service_id)

    def list_all(self):
        """Metadata for all registered services, in registration order."""
        return [s.metadata() for s in self._services.values()]

    def all(self):
        """All service instances, in registration order."""
        return list(self._services.values())
