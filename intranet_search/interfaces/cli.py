"""CLI interface: search loop with filter, paging and /help /clear /quit commands."""

import asyncio
import shutil
import textwrap

from intranet_search.core.config import config
from intranet_search.core.logger import logger
from intranet_search.search.aggregator import SearchAggregator, SearchState
from intranet_search.search.formatters import LOADING, SECTION_TITLES, render_results
from intranet_search.search.interface import SearchBackend
from intranet_search.search.models import ContentType


class Colors:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"


def colorize(text: str, *colors: str) -> str:
    color_codes = "".join(colors)
    return f"{color_codes}{text}{Colors.RESET}"


def print_help():
    help_text = """
    ╭──────────────────────────────────────────────╮
    │  Commands                                    │
    ├──────────────────────────────────────────────┤
    │  <text>       - Search for text              │
    │  /type <t>    - all|documents|events|        │
    │                 announcements|posts          │
    │  /page <n>    - Go to page n                 │
    │  /next /prev  - Next or previous page        │
    │  /clear       - Clear the search             │
    │  /help        - Show this help               │
    │  /quit        - Exit                         │
    ╰──────────────────────────────────────────────╯
    """
    print(colorize(help_text, Colors.CYAN))


def format_response(text: str) -> str:
    prefix = colorize("┃ ", Colors.CYAN)
    try:
        terminal_width = shutil.get_terminal_size().columns
    except OSError:
        terminal_width = 80

    wrap_width = max(terminal_width - 4, 40)
    formatted_lines = []
    for line in text.split("\n"):
        if not line.strip():
            formatted_lines.append(prefix)
            continue
        for w_line in textwrap.wrap(line, width=wrap_width, drop_whitespace=False):
            formatted_lines.append(f"{prefix}{w_line}")
    return "\n".join(formatted_lines)


def _prompt(state: SearchState) -> str:
    label = SECTION_TITLES[state.search_type]
    return colorize(f"\n[{label}] ❯ ", Colors.GREEN, Colors.BOLD)


def handle_command(aggregator: SearchAggregator, command: str) -> str | None:
    """Apply one slash command. Returns a message to show, or None."""
    name, _, arg = command.partition(" ")
    name = name.lower()
    arg = arg.strip()

    if name == "/type":
        try:
            aggregator.handle_search_type_change(arg.lower() or ContentType.ALL)
        except ValueError:
            allowed = ", ".join(t.value for t in ContentType)
            return f"Unknown type {arg!r}. Use one of: {allowed}"
        return None

    if name in ("/page", "/next", "/prev"):
        if name == "/page":
            if not arg.isdigit():
                return "Usage: /page <n>"
            target = int(arg)
        else:
            target = aggregator.page + (1 if name == "/next" else -1)
        if aggregator.debouncing:
            return "Search is still settling, try again."
        before = aggregator.page
        aggregator.handle_page_change(target)
        if aggregator.page == before and target != before:
            return f"Page {target} is out of range (1-{aggregator.total_pages})"
        return None

    if name == "/clear":
        aggregator.set_query("")
        return "Search cleared."

    return f"Unknown command {name}. Type /help."


async def run_cli(backend: SearchBackend | None = None):
    problems = config.validate()
    if problems:
        for problem in problems:
            print(colorize(f"  Error: {problem}", Colors.RED))
        return

    print(colorize(f"  Searching {config.portal_base_url}  (type /help for commands)\n", Colors.DIM))

    def on_change(state: SearchState) -> None:
        if state.loading:
            print(colorize(f"  {LOADING}", Colors.DIM))

    aggregator = SearchAggregator(backend)
    aggregator.subscribe(on_change)
    try:
        while True:
            try:
                user_input = await asyncio.to_thread(input, _prompt(aggregator.state))
            except EOFError:
                break
            text = user_input.strip()
            if not text:
                continue
            command = text.lower()

            if command == "/help":
                print_help()
                continue

            if command in ("/quit", "/exit", "/q"):
                break

            if text.startswith("/"):
                message = handle_command(aggregator, text)
            else:
                aggregator.set_query(text)
                message = None
            if message:
                print(colorize(f"  {message}", Colors.YELLOW))
                continue

            await aggregator.wait_idle()
            rendered = render_results(aggregator.state)
            if rendered:
                color = Colors.RED if aggregator.error else Colors.RESET
                print(format_response(colorize(rendered, color)))
    except KeyboardInterrupt:
        print()
    except Exception as e:
        logger.error(f"Search CLI failed: {e}", exc_info=True)
        raise
    finally:
        await aggregator.close()


def main():
    try:
        asyncio.run(run_cli())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
