"""Router configuration.

RouterConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Route table configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(root="/app/", redirect_status=303)
    """

    # Document-root prefix prepended to generated links and assets
    root: str = "/"

    # Templates containing this marker match by path prefix
    auto_marker: str = "[auto]"

    # Pattern used for a {token} without a custom pattern
    token_pattern: str = r"[\w-]+"

    # Status for Location redirects
    redirect_status: int = 302

    # CLI logging level (the library itself never configures handlers)
    log_level: str = "warning"

    def __post_init__(self) -> None:
        root = self.root or "/"
        if not root.startswith("/"):
            root = "/" + root
        if not root.endswith("/"):
            root += "/"
        object.__setattr__(self, "root", root)
