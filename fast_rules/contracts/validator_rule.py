from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional


class ValidatorRule(ABC):
    """
    Contract for class-based named rules.

    Register an instance to make it available on every chain:

        class IsEven(ValidatorRule):
            message = "{name} must be even"
            cast = "number"

            async def validate(self, value, *params, data=None) -> bool:
                return value % 2 == 0

        register("even", IsEven())
        SR.number().use("even")
    """

    message: Optional[str] = None
    cast: Optional[str] = None

    @abstractmethod
    async def validate(self, value: Any, *params: Any, data: Any = None) -> Any:
        """
        Check a value within the context of the entire payload.

        Args:
            value: The value being validated.
            *params: Rule parameters with references already resolved.
            data: The root data of the validation.

        Returns:
            A truthy value when the value is valid.
        """
        raise NotImplementedError
