"""Terminal Prompter - input()-based user interaction for the workflow."""

import getpass
from contextlib import contextmanager

from changeset_ai import BUMP_TYPES, BUMP_TYPE_NAMES
from changeset_ai.discovery import Package
from changeset_ai.output import Spinner, bold, colorize_bump, dim, format_bumps, info, printable
from changeset_ai.suggestion import Suggestion
from changeset_ai.workflow import Prompter


def _ask(prompt: str) -> str | None:
    try:
        return input(prompt)
    except (KeyboardInterrupt, EOFError):
        print()
        return None


def parse_selection(choice: str, count: int) -> list[int] | None:
    """Parse '1,3', '2-4' or 'a' into zero-based indexes. None if invalid."""
    choice = choice.strip().lower()
    if choice == 'a':
        return list(range(count))

    indexes: list[int] = []
    for part in choice.replace(' ', '').split(','):
        if not part:
            continue
        try:
            if '-' in part:
                start, end = (int(x) for x in part.split('-', 1))
                picked = range(start, end + 1)
            else:
                picked = [int(part)]
        except ValueError:
            return None
        for n in picked:
            if not 1 <= n <= count:
                return None
            if n - 1 not in indexes:
                indexes.append(n - 1)
    return indexes or None


class TerminalPrompter(Prompter):
    """Reads answers from stdin. Ctrl-C, Ctrl-D or 'q' cancel."""

    def select_packages(self, packages: list[Package]) -> list[Package] | None:
        print(f"\n{bold('Select packages to include in this changeset:')}")
        for i, package in enumerate(packages, 1):
            print(f"  {info(f'[{i}]')} {package.name} {dim(str(package.path))}")

        while True:
            choice = _ask(f"\nPackages (e.g. 1,3 or 2-4, (a)ll, (q)uit): ")
            if choice is None or choice.strip().lower() == 'q':
                return None
            indexes = parse_selection(choice, len(packages))
            if indexes is not None:
                return [packages[i] for i in indexes]
            print(f"Enter numbers between 1 and {len(packages)}, a or q")

    def select_bump(self, package_name: str) -> str | None:
        print(f"\nSelect semver bump type for {bold(package_name)}:")
        for i, (bump, desc) in enumerate(BUMP_TYPES.items(), 1):
            print(f"  {info(f'[{i}]')} {colorize_bump(bump)} {dim(desc)}")

        while True:
            choice = _ask(f"Bump [1-{len(BUMP_TYPE_NAMES)}] or (q)uit: ")
            if choice is None or choice.strip().lower() == 'q':
                return None
            choice = choice.strip()
            if choice in BUMP_TYPE_NAMES:
                return choice
            if choice.isdigit() and 1 <= int(choice) <= len(BUMP_TYPE_NAMES):
                return BUMP_TYPE_NAMES[int(choice) - 1]
            print(f"Enter 1-{len(BUMP_TYPE_NAMES)}, a bump name, or q")

    def ask_summary(self, allow_empty: bool = False) -> str | None:
        hint = "can be empty" if allow_empty else "this will be in the changelog"
        return _ask(f"\nSummary ({hint}): ")

    def confirm_suggestion(self, suggestion: Suggestion) -> bool:
        print(f"\n{bold('AI Suggestion:')} \"{printable(suggestion.summary)}\"")
        print(f"\n{bold('Proposed Bumps:')}")
        print(format_bumps(suggestion.bumps) or dim("  (none)"))
        answer = _ask(f"\n{dim('Accept? [y/N]: ')}")
        return answer is not None and answer.strip().lower() in ('y', 'yes')

    def ask_api_key(self, provider_name: str) -> str | None:
        try:
            value = getpass.getpass(f"Enter your {provider_name} API key: ")
        except (KeyboardInterrupt, EOFError):
            print()
            return None
        return value or None

    def notify(self, message: str) -> None:
        print(dim(message))

    @contextmanager
    def progress(self, label: str):
        with Spinner(label):
            yield
