"""Interactive prompts and the structure preview shown before creating files."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import click

from move_scaffold.core.directory_mirror import walk_tree
from move_scaffold.core.renderer import render_path
from move_scaffold.core.scaffolder import BASE_DIRECTORIES, ScaffoldPlan
from move_scaffold.core.substitution import build_substitution_context
from move_scaffold.core.variants import VariantSource
from move_scaffold.helpers.helpers_logging import fg_bold, fg_cyan, fg_italic
from move_scaffold.helpers.naming import to_snake

# Nested mapping of name -> children; files map to None
_Tree = dict[str, "_Tree | None"]


def _insert(tree: _Tree, parts: Sequence[str], is_dir: bool) -> None:
    node = tree
    for index, part in enumerate(parts):
        last = index == len(parts) - 1
        if last and not is_dir:
            node.setdefault(part, None)
            return
        child = node.get(part)
        if child is None:
            child = {}
            node[part] = child
        node = child


def _tree_lines(tree: _Tree, prefix: str = "") -> list[str]:
    lines: list[str] = []
    # Directories first, then files, each alphabetically
    names = sorted(tree, key=lambda n: (tree[n] is None, n))
    for index, name in enumerate(names):
        last = index == len(names) - 1
        children = tree[name]
        branch = "└─" if last else "├─"
        if children is None:
            lines.append(f"{prefix}{branch} {fg_italic(name)}")
        else:
            lines.append(f"{prefix}{branch}📂 {fg_italic(name)}")
            lines.extend(_tree_lines(children, prefix + ("  " if last else "│ ")))
    return lines


def structure_for_print(plan: ScaffoldPlan, bundled_root: Path) -> str:
    """Render the files and directories a plan will create as a tree.

    Remote variants are listed by name since their content is not known
    before fetching.
    """
    context = build_substitution_context(
        package_name=plan.package_name,
        package_lowercase_name=to_snake(plan.package_name),
        address=None,
    )
    tree: _Tree = {}
    for name in BASE_DIRECTORIES:
        _insert(tree, [name], is_dir=True)

    remote: list[str] = []
    for variant in plan.variants:
        if variant.source is VariantSource.REMOTE:
            remote.append(variant.label)
            continue
        variant_root = bundled_root / variant.subdir
        if not variant_root.is_dir():
            continue
        for source in walk_tree(variant_root):
            relative = render_path(source.relative_to(variant_root), context)
            _insert(tree, relative.parts, is_dir=source.is_dir())

    lines = [f"📂 {fg_italic(str(plan.target))}", *_tree_lines(tree)]
    for label in remote:
        lines.append(f"   + {fg_italic(label)} (fetched from the template repository)")
    return "\n".join(lines)


class ClickPrompter:
    """Prompter reading answers from the terminal through click."""

    def __init__(self, bundled_root: Path) -> None:
        self.bundled_root = bundled_root

    def ask_text(self, question: str, default: str) -> str:
        answer: str = click.prompt(
            f"\n{question} [Default: {default}]",
            default="",
            show_default=False,
        )
        return answer.strip() or default

    def ask_yes_no(self, question: str, default: bool) -> bool:
        return click.confirm(question, default=default)

    def ask_choice(self, question: str, options: Sequence[str], default: int) -> int:
        click.echo(f"\n{question}")
        for position, option in enumerate(options, start=1):
            click.echo(f"{fg_cyan(f'{position}.')} {fg_bold(option)}")
        number: int = click.prompt(
            f"Enter the number 1-{len(options)}",
            type=click.IntRange(1, len(options)),
            default=default + 1,
        )
        return number - 1

    def confirm_plan(self, plan: ScaffoldPlan) -> bool:
        click.echo("\nCreate these files and directories on your computer?")
        click.echo(structure_for_print(plan, self.bundled_root))
        if plan.create_profile:
            click.echo(f"and a {fg_cyan('`default`')} profile in .aptos/config.yaml")
        return click.confirm("Create", default=True)
