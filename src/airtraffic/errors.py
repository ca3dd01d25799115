class ConfigurationError(ValueError):
    """
    Exception raised when the simulator is given settings it cannot run with, such as an airport catalog with fewer than
    two airports.
    """


class RegistryInvariantError(RuntimeError):
    """
    Exception raised when a tick finds the flight registry inconsistent with the airport catalog. This indicates a bug;
    the simulator never tries to repair the affected flight.
    """
