"""Template variants known to the scaffolder.

Bundled variants ship inside this package under ``templates/``; remote
variants live in the configured template repository, each in its own
subdirectory.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class VariantSource(str, Enum):
    BUNDLED = "bundled"
    REMOTE = "remote"


# Template id under which the remote repository is cached.
REMOTE_TEMPLATE_ID = "move-package-templates"


@dataclass(frozen=True)
class TemplateVariant:
    """A named template subtree.

    Attributes:
        key: Stable identifier, also used for CLI flags.
        label: Human readable name.
        subdir: Directory of the variant inside its template root.
        source: Where the template root comes from.
        optional: False for variants rendered on every run.
        default: Answer applied when the user is not asked.
        question: Yes/no prompt shown in interactive mode.
    """

    key: str
    label: str
    subdir: str
    source: VariantSource
    optional: bool = True
    default: bool = False
    question: str = ""


PACKAGE = TemplateVariant(
    key="package",
    label="Move.toml manifest",
    subdir="package",
    source=VariantSource.BUNDLED,
    optional=False,
    default=True,
)

EMPTY_MODULE = TemplateVariant(
    key="empty-module",
    label="Empty module with tests",
    subdir="empty-module",
    source=VariantSource.BUNDLED,
    default=True,
    question="Add an empty module and a test module?",
)

COIN_EXAMPLE = TemplateVariant(
    key="coin-example",
    label="Example with coins",
    subdir="coin",
    source=VariantSource.REMOTE,
    default=False,
    question="Add the coin example?",
)

COMPANION_APP = TemplateVariant(
    key="companion-app",
    label="Companion JavaScript app",
    subdir="companion-app",
    source=VariantSource.REMOTE,
    default=False,
    question="Add a companion JavaScript app (js/)?",
)

VARIANTS: tuple[TemplateVariant, ...] = (PACKAGE, EMPTY_MODULE, COIN_EXAMPLE, COMPANION_APP)

OPTIONAL_VARIANTS: tuple[TemplateVariant, ...] = tuple(v for v in VARIANTS if v.optional)


def bundled_templates_root() -> Path:
    """Directory holding the bundled variants."""
    import move_scaffold

    return Path(move_scaffold.__file__).resolve().parent / "templates"
