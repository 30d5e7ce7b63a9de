"""Built-in scene templates. Importing this package registers them."""

from sceneforge.engine.templates import booking, payments, portal  # noqa: F401
from sceneforge.engine.templates.base import BuildContext

__all__ = ["BuildContext"]
