"""
Custom exceptions for the Color Changer skill runtime.

These exceptions are intentionally simple and descriptive.
They are used across:

  - core/directives/
  - runtime/agents/

Placing them in their own package (color_changer/exceptions/) avoids
circular imports and keeps exception types consistent across modules.
"""


class UserInputError(Exception):
    """
    Raised when a request carries input the skill cannot act on, e.g. a
    hardware report without the device ids a check-in needs.

    Recovered by the router with a re-prompt; the session is not mutated.
    """

    def __init__(self, details):
        self.details = details
        super().__init__(f"Unusable input: {details}")


class StaleEventError(Exception):
    """
    Raised when a hardware report originates from a watcher that is no
    longer the active one for the session.

    The router discards the report without directives or mutation.
    """

    def __init__(self, received_id, expected_id):
        self.received_id = received_id
        self.expected_id = expected_id
        msg = (
            "Stale input event received: received event from "
            f"{received_id}; expecting {expected_id}"
        )
        super().__init__(msg)


class InvalidTransitionError(Exception):
    """
    Raised by a state machine operation invoked outside its precondition
    (wrong mode or button count). Always raised before any attribute is
    touched, so catching it leaves the session unchanged.
    """

    def __init__(self, operation, reason):
        self.operation = operation
        self.reason = reason
        super().__init__(f"{operation} ignored: {reason}")


class ConfigurationError(Exception):
    """
    Raised when a directive is built without one of its required
    parameters. This is a programming defect, never a runtime condition.

    Example:
        start_input_handler(timeout=30000, events=...)   ← no recognizers
    """

    def __init__(self, parameter):
        self.parameter = parameter
        super().__init__(f'Required parameter, "{parameter}" is missing.')
