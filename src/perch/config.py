"""Router configuration.

RouterConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass

from perch.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(approx_chunk_size=20, base_url="/app")
    """

    # Dynamic routes per compiled pattern (approximate target)
    approx_chunk_size: int = 10

    # Prefix for every URL produced by Router.build()
    base_url: str = ""

    def __post_init__(self) -> None:
        if self.approx_chunk_size < 1:
            msg = f"approx_chunk_size must be at least 1, got {self.approx_chunk_size}"
            raise ConfigurationError(msg)
