"""
ShapeFactory for resolving record shapes by key.
New shapes are registered, not hard-coded into the service.
"""
from typing import Dict, Optional

from core.exceptions import ConfigurationException
from core.logger import get_logger
from parsers.shapes import RATING_SHAPE, RICH_SHAPE, RecordShape

logger = get_logger(__name__)


class ShapeFactory:
    """
    Registry of record shapes.

    Usage:
        factory = ShapeFactory()
        shape = factory.get_shape("rating")

        # Register custom shape
        factory.register_shape(my_shape)
    """

    _DEFAULT_SHAPES: Dict[str, RecordShape] = {
        RATING_SHAPE.key: RATING_SHAPE,
        RICH_SHAPE.key: RICH_SHAPE,
    }

    def __init__(self):
        # Instance-level registry for runtime extension
        self._shapes = dict(self._DEFAULT_SHAPES)

    def get_shape(self, key: str) -> RecordShape:
        """
        Returns the shape registered under key.

        Raises:
            ConfigurationException: If no shape has that key
        """
        shape = self._shapes.get(key.strip().lower())
        if shape is None:
            raise ConfigurationException(
                f"Unknown record shape '{key}'",
                {"available": ", ".join(sorted(self._shapes))},
            )
        logger.debug(f"[SHAPE_FACTORY] Resolved shape '{shape.key}' ({len(shape.fields)} fields)")
        return shape

    def register_shape(self, shape: RecordShape, replace: bool = False) -> None:
        """
        Registers a new shape under its key.

        Args:
            shape: Shape to register
            replace: Allow overwriting an existing key
        """
        key = shape.key.strip().lower()
        if key in self._shapes and not replace:
            raise ConfigurationException(f"Shape '{shape.key}' is already registered")
        self._shapes[key] = shape
        logger.info(f"[SHAPE_FACTORY] Registered shape: {shape.key}")

    def get_registered_shapes(self) -> Dict[str, int]:
        """Returns shape key -> number of fields."""
        return {key: len(shape.fields) for key, shape in self._shapes.items()}


# Singleton instance for convenience
_shape_factory: Optional[ShapeFactory] = None


def get_shape_factory() -> ShapeFactory:
    """
    Returns the global ShapeFactory singleton.
    """
    global _shape_factory
    if _shape_factory is None:
        _shape_factory = ShapeFactory()
    return _shape_factory
