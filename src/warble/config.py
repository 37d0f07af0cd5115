"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass

DOCS_VERSIONS: tuple[str, ...] = ("1.2", "2.0")


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(docs_dir="./api", docs_path="/v2/api-doc")
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    log_level: str = "info"

    # API documentation
    docs_dir: str = "."  # Where {api}.json and {name}.def.json files live
    docs_path: str = "/api-doc"  # Base path the registry is mounted on
    docs_version: str = "2.0"  # "1.2" (one-shot JSON) or "2.0" (streamed swagger)
    expand_placeholders: bool = True  # Rewrite {{Host}} / {{Protocol}} in fragments
