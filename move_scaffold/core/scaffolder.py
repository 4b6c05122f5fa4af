"""Create a new Move package from template variants.

The run moves through fixed states and stops at the first failure:

    RESOLVING_TARGET -> NAMING_PACKAGE -> SELECTING_VARIANTS -> CONFIRMING
    -> CREATING_BASE_STRUCTURE (+ INITIALIZING_PROFILE, concurrently)
    -> RENDERING_VARIANTS -> DONE

Any error sets FAILED and is re-raised. Files written before the failure
are left in place.

Example:
    >>> scaffolder = PackageScaffolder(ScaffoldConfig(), DefaultsPrompter())
    >>> scaffolder.run(ScaffoldRequest("~/demo/my_package", skip_profile_creation=True))
"""

from __future__ import annotations

import functools
from collections.abc import Mapping
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from move_scaffold.core.directory_mirror import MirrorResult
from move_scaffold.core.errors import FilesystemError, ScaffoldError, UserCancelledError
from move_scaffold.core.profile import NETWORKS, AptosCliProfileInitializer, ProfileInitializer
from move_scaffold.core.prompts import Prompter
from move_scaffold.core.renderer import render
from move_scaffold.core.substitution import SubstitutionContext, build_substitution_context
from move_scaffold.core.target import TargetDirectory
from move_scaffold.core.template_source import TemplateSourceResolver, git_clone
from move_scaffold.core.variants import (
    OPTIONAL_VARIANTS,
    PACKAGE,
    REMOTE_TEMPLATE_ID,
    TemplateVariant,
    VariantSource,
    bundled_templates_root,
)
from move_scaffold.helpers.helpers_logging import print_info, print_success
from move_scaffold.helpers.naming import is_move_identifier, to_snake, to_upper_camel
from move_scaffold.helpers.scaffold_config import ScaffoldConfig

# Created on every run, whatever variants are selected.
BASE_DIRECTORIES: tuple[str, ...] = ("sources", "tests")

FRAMEWORK_GIT_URL = "https://github.com/aptos-labs/aptos-core.git"
FRAMEWORK_SUBDIR = "aptos-move/framework/aptos-framework"
DEFAULT_FRAMEWORK_REV = "mainnet"


class ScaffoldState(str, Enum):
    RESOLVING_TARGET = "resolving-target"
    NAMING_PACKAGE = "naming-package"
    SELECTING_VARIANTS = "selecting-variants"
    CONFIRMING = "confirming"
    CREATING_BASE_STRUCTURE = "creating-base-structure"
    INITIALIZING_PROFILE = "initializing-profile"
    RENDERING_VARIANTS = "rendering-variants"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class ScaffoldRequest:
    """What the caller asked for.

    Attributes:
        package_dir: Target directory (created if absent, must be empty).
        name: Explicit package name; derived from package_dir when None.
        variants: Variant key -> forced on/off. Unlisted optional variants
            are asked for (or defaulted).
        skip_profile_creation: Use the sentinel address instead of running
            the profile initializer.
        network: Network for the profile; asked for when None.
        named_addresses: Extra ``[addresses]`` entries (value is a hex
            literal or ``_``).
        framework_git_rev: Git revision of the framework dependency.
        framework_local_dir: Local framework package, overrides the git rev.
    """

    package_dir: str | Path
    name: str | None = None
    variants: Mapping[str, bool] = field(default_factory=dict)
    skip_profile_creation: bool = False
    network: str | None = None
    named_addresses: Mapping[str, str] = field(default_factory=dict)
    framework_git_rev: str | None = None
    framework_local_dir: Path | None = None


@dataclass(frozen=True)
class ScaffoldPlan:
    """Resolved decisions shown to the user before anything is written."""

    target: TargetDirectory
    package_name: str
    variants: tuple[TemplateVariant, ...]
    create_profile: bool


@dataclass
class ScaffoldResult:
    target: TargetDirectory
    package_name: str
    address: str | None
    variants: tuple[TemplateVariant, ...]
    rendered: dict[str, MirrorResult] = field(default_factory=dict)


def toml_escape(value: str) -> str:
    """Escape value for use inside a TOML basic (double-quoted) string."""
    return value.replace("\\", "\\\\").replace('"', '\\"')


def framework_dependency(git_rev: str | None, local_dir: Path | None) -> str:
    """Manifest line declaring the AptosFramework dependency."""
    if local_dir is not None:
        return f'AptosFramework = {{ local = "{toml_escape(local_dir.as_posix())}" }}'
    rev = git_rev or DEFAULT_FRAMEWORK_REV
    return (
        f'AptosFramework = {{ git = "{FRAMEWORK_GIT_URL}", '
        f'rev = "{toml_escape(rev)}", subdir = "{FRAMEWORK_SUBDIR}" }}'
    )


def named_address_lines(named_addresses: Mapping[str, str]) -> str:
    """Manifest lines for extra named addresses, each preceded by a newline."""
    return "".join(
        f'\n{name} = "{toml_escape(value)}"' for name, value in sorted(named_addresses.items())
    )


def check_named_addresses(named_addresses: Mapping[str, str], package_address: str) -> None:
    """Reject non-identifier names and a duplicate of the package address."""
    for name in named_addresses:
        if not is_move_identifier(name):
            raise ScaffoldError(f"Invalid named address '{name}': not a Move identifier")
    if package_address in named_addresses:
        raise ScaffoldError(
            f"Named address '{package_address}' duplicates the package address; remove it"
        )


class PackageScaffolder:
    """Orchestrates one scaffold run per :meth:`run` call.

    Args:
        config: Effective configuration.
        prompter: Source of answers for every question.
        resolver: Template source resolver; built from config when None.
        profile_initializer: Built from config when None.
        bundled_root: Root of the bundled variants.
    """

    def __init__(
        self,
        config: ScaffoldConfig,
        prompter: Prompter,
        resolver: TemplateSourceResolver | None = None,
        profile_initializer: ProfileInitializer | None = None,
        bundled_root: Path | None = None,
    ) -> None:
        self.config = config
        self.prompter = prompter
        self.resolver = resolver or TemplateSourceResolver(
            config.cache_dir,
            fetch=functools.partial(git_clone, ref=config.template_ref),
            refresh=config.refresh_templates,
        )
        self.profile_initializer = profile_initializer or AptosCliProfileInitializer(
            command=config.aptos_command,
            profile=config.profile_name,
        )
        self.bundled_root = bundled_root or bundled_templates_root()
        self.state = ScaffoldState.RESOLVING_TARGET

    def run(self, request: ScaffoldRequest) -> ScaffoldResult:
        """Execute every step for request.

        Raises:
            ScaffoldError: Any failing step; state is FAILED afterwards.
        """
        try:
            return self._run(request)
        except BaseException:
            self.state = ScaffoldState.FAILED
            raise

    def _run(self, request: ScaffoldRequest) -> ScaffoldResult:
        self.state = ScaffoldState.RESOLVING_TARGET
        target = TargetDirectory.validate(request.package_dir)
        print_info(f"The package will be created in the directory: {target}")

        self.state = ScaffoldState.NAMING_PACKAGE
        package_name = self.package_name(request, target)
        check_named_addresses(request.named_addresses, to_snake(package_name))
        print_info(f"Package name: {package_name}")

        self.state = ScaffoldState.SELECTING_VARIANTS
        variants = self.select_variants(request)
        print_info("Templates: " + ", ".join(v.label for v in variants))

        self.state = ScaffoldState.CONFIRMING
        plan = ScaffoldPlan(
            target=target,
            package_name=package_name,
            variants=variants,
            create_profile=not request.skip_profile_creation,
        )
        if not self.prompter.confirm_plan(plan):
            raise UserCancelledError("Cancelled")

        network = None
        if not request.skip_profile_creation:
            network = self.select_network(request)

        self.state = ScaffoldState.CREATING_BASE_STRUCTURE
        address = self._create_base_and_profile(target, network)

        self.state = ScaffoldState.RENDERING_VARIANTS
        context = self.build_context(request, package_name, address)
        result = ScaffoldResult(
            target=target,
            package_name=package_name,
            address=address,
            variants=variants,
        )
        for variant in variants:
            source = self.template_root(variant) / variant.subdir
            if not source.is_dir():
                raise FilesystemError(
                    "find template",
                    source,
                    "variant directory missing (try 'move-new templates clear-cache')",
                )
            rendered = render(source, target, context)
            result.rendered[variant.key] = rendered
            print_success(
                f"{variant.label}: {len(rendered.created)} created, "
                + f"{len(rendered.skipped)} skipped"
            )

        self.state = ScaffoldState.DONE
        return result

    def package_name(self, request: ScaffoldRequest, target: TargetDirectory) -> str:
        if request.name is not None:
            name = request.name.strip()
        else:
            default_name = target.derived_package_name()
            answer = self.prompter.ask_text("Package name", default_name).strip()
            name = to_upper_camel(answer) if answer and answer != default_name else default_name

        if not name:
            raise ScaffoldError(f"Cannot derive a package name from {target}; pass --name")
        if not is_move_identifier(name):
            raise ScaffoldError(
                f"Invalid package name '{name}': use letters, digits and underscores, "
                + "starting with a letter"
            )
        return name

    def select_variants(self, request: ScaffoldRequest) -> tuple[TemplateVariant, ...]:
        """Return PACKAGE followed by the chosen optional variants."""
        selected: list[TemplateVariant] = [PACKAGE]
        for variant in OPTIONAL_VARIANTS:
            forced = request.variants.get(variant.key)
            if forced is None:
                forced = self.prompter.ask_yes_no(variant.question, variant.default)
            if forced:
                selected.append(variant)
        return tuple(selected)

    def select_network(self, request: ScaffoldRequest) -> str:
        if request.network is not None:
            return request.network
        default_index = (
            NETWORKS.index(self.config.default_network)
            if self.config.default_network in NETWORKS
            else 0
        )
        index = self.prompter.ask_choice("Network for the default profile", NETWORKS, default_index)
        return NETWORKS[index]

    def build_context(
        self,
        request: ScaffoldRequest,
        package_name: str,
        address: str | None,
    ) -> SubstitutionContext:
        return build_substitution_context(
            package_name=package_name,
            package_lowercase_name=to_snake(package_name),
            address=address,
            extra={
                "named_addresses": named_address_lines(request.named_addresses),
                "framework_dependency": framework_dependency(
                    request.framework_git_rev,
                    request.framework_local_dir,
                ),
            },
        )

    def template_root(self, variant: TemplateVariant) -> Path:
        if variant.source is VariantSource.BUNDLED:
            return self.bundled_root
        return self.resolver.resolve(REMOTE_TEMPLATE_ID, self.config.template_repository)

    def _create_base_and_profile(self, target: TargetDirectory, network: str | None) -> str | None:
        """Create the base layout and, if network is set, the profile.

        Both run concurrently; both finish before this returns. The base
        structure error wins when both fail.
        """
        try:
            target.path.mkdir(parents=True, exist_ok=True)
        except OSError as err:
            raise FilesystemError("create directory", target.path, err) from err

        with ThreadPoolExecutor(max_workers=2) as pool:
            base_future = pool.submit(create_base_structure, target)
            profile_future: Future[str] | None = None
            if network is not None:
                self.state = ScaffoldState.INITIALIZING_PROFILE
                print_info(f"Creating a `{self.config.profile_name}` profile on {network}")
                profile_future = pool.submit(
                    self.profile_initializer.initialize, target.path, network
                )

        base_future.result()
        if profile_future is None:
            return None
        address = profile_future.result()
        print_success(f"Profile address: {address}")
        return address


def create_base_structure(target: TargetDirectory) -> None:
    """Create the directories every package has."""
    for name in BASE_DIRECTORIES:
        path = target.path / name
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as err:
            raise FilesystemError("create directory", path, err) from err
