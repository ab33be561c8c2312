"""Base service class for domain services."""


class Service:
    """Base class for domain services.

    Services own the rules that span several entities, such as the
    enrollment state machine or the session lifecycle, and talk to the
    store only through repository interfaces.
    """

    pass
