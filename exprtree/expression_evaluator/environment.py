"""
Variable environment for expression evaluation.
Provides nested scopes mapping variable names to numeric values.
"""

import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class Environment:
    """
    Represents a scope of variable bindings, with an optional parent scope.

    Lookups search the current scope first and then each ancestor. Definitions
    only ever touch the current scope. Evaluation never modifies an environment.
    """

    def __init__(
        self,
        bindings: Optional[Dict[str, Any]] = None,
        parent: Optional['Environment'] = None
    ):
        """
        Initializes a new Environment.

        Args:
            bindings: An optional dictionary of initial variable bindings for this scope.
                      The dictionary is copied.
            parent: An optional parent environment for creating nested scopes.
                    Defaults to None, indicating a top-level scope.
        """
        self._bindings: Dict[str, Any] = dict(bindings) if bindings is not None else {}
        self._parent: Optional['Environment'] = parent
        logger.debug("Initialized Environment (Parent: %s, Bindings: %s)", parent is not None, list(self._bindings))

    def lookup(self, name: str) -> Any:
        """
        Looks up a variable name in the environment and its parent scopes.

        Args:
            name: The name of the variable to look up.

        Returns:
            The value associated with the name.

        Raises:
            NameError: If the name is not found in this environment or any
                       of its ancestor environments.
        """
        env: Optional[Environment] = self
        while env is not None:
            if name in env._bindings:
                return env._bindings[name]
            env = env._parent
        logger.debug("'%s' not found in environment chain starting at %s", name, id(self))
        raise NameError(f"Name '{name}' is not defined.")

    def define(self, name: str, value: Any) -> None:
        """
        Defines or redefines a variable in the *current* scope.
        This does not affect parent scopes.
        """
        logger.debug("Defining '%s' = %r in env %s", name, value, id(self))
        self._bindings[name] = value

    def extend(self, bindings: Dict[str, Any]) -> 'Environment':
        """
        Creates a new child environment with this environment as its parent.

        Args:
            bindings: New variable names and values for the child's local scope.

        Returns:
            A new Environment representing the child scope.
        """
        return Environment(bindings=bindings, parent=self)

    def __contains__(self, name: str) -> bool:
        try:
            self.lookup(name)
        except NameError:
            return False
        return True

    def get_local_bindings(self) -> Dict[str, Any]:
        """Returns a copy of the bindings defined directly in this scope."""
        return self._bindings.copy()

    def __repr__(self) -> str:
        parent_id = id(self._parent) if self._parent else None
        return f"<Environment id={id(self)} parent={parent_id} bindings={list(self._bindings.keys())}>"
